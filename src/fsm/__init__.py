"""
Módulo FSM — Máquina de estados do status de agendamento.

Estrutura:
    - states/: Status canônicos (AppointmentStatus)
    - transitions/: Regras de transição (VALID_TRANSITIONS)
    - rules/: Guards por gatilho
    - manager/: Máquina de estados (AppointmentStateMachine)
    - types/: Tipos de dados (StateTransition, TransitionResult, TransitionTrigger)
"""

from fsm.manager import AppointmentStateMachine, create_fsm
from fsm.rules import GuardResult, evaluate_guards
from fsm.states import (
    OCCUPYING_STATES,
    TERMINAL_STATES,
    AppointmentStatus,
    initial_status,
    is_terminal,
    is_valid_state,
)
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_valid_targets,
    is_transition_valid,
    validate_transition_map,
)
from fsm.types import StateTransition, TransitionResult, TransitionTrigger

__all__ = [
    "OCCUPYING_STATES",
    "TERMINAL_STATES",
    "VALID_TRANSITIONS",
    "AppointmentStateMachine",
    "AppointmentStatus",
    "GuardResult",
    "StateTransition",
    "TransitionResult",
    "TransitionTrigger",
    "create_fsm",
    "evaluate_guards",
    "get_valid_targets",
    "initial_status",
    "is_terminal",
    "is_transition_valid",
    "is_valid_state",
    "validate_transition_map",
]
