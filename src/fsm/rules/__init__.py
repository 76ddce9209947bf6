"""
Exports públicos do módulo fsm/rules.
"""

from fsm.rules.guards import (
    DEFAULT_GUARDS,
    TRIGGER_TARGETS,
    Guard,
    GuardResult,
    evaluate_guards,
    guard_same_state,
    guard_terminal_state,
    guard_trigger_target,
)

__all__ = [
    "DEFAULT_GUARDS",
    "TRIGGER_TARGETS",
    "Guard",
    "GuardResult",
    "evaluate_guards",
    "guard_same_state",
    "guard_terminal_state",
    "guard_trigger_target",
]
