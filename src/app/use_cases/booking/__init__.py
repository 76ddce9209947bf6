"""Use cases do fluxo de agendamento."""

from .availability import GetAvailabilityUseCase
from .book_appointment import BookAppointmentUseCase
from .manage_appointments import ManageAppointmentsUseCase
from .models import BookingRequest, BookingResult, SlotRequest

__all__ = [
    "BookAppointmentUseCase",
    "BookingRequest",
    "BookingResult",
    "GetAvailabilityUseCase",
    "ManageAppointmentsUseCase",
    "SlotRequest",
]
