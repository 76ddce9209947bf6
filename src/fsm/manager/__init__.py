"""
Exports públicos do módulo fsm/manager.
"""

from fsm.manager.machine import AppointmentStateMachine, create_fsm

__all__ = [
    "AppointmentStateMachine",
    "create_fsm",
]
