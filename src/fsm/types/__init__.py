"""
Exports públicos do módulo fsm/types.
"""

from fsm.types.transition import StateTransition, TransitionResult, TransitionTrigger

__all__ = [
    "StateTransition",
    "TransitionResult",
    "TransitionTrigger",
]
