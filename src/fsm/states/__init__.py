"""
Exports públicos do módulo fsm/states.

Status canônicos de agendamento.
"""

from fsm.states.appointment import (
    OCCUPYING_STATES,
    TERMINAL_STATES,
    AppointmentStatus,
    initial_status,
    is_terminal,
    is_valid_state,
)

__all__ = [
    "OCCUPYING_STATES",
    "TERMINAL_STATES",
    "AppointmentStatus",
    "initial_status",
    "is_terminal",
    "is_valid_state",
]
