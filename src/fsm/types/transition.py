"""
Tipos para transições de status de agendamento.

StateTransition é o registro imutável que vai para os logs de auditoria
(sem PII: apenas ids, status e gatilho).
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from fsm.states.appointment import AppointmentStatus


class TransitionTrigger(StrEnum):
    """Gatilhos que podem mudar o status de um agendamento."""

    PAYMENT_APPROVED = "payment_approved"
    PROFESSIONAL_CONFIRM = "professional_confirm"
    PROFESSIONAL_CANCEL = "professional_cancel"


@dataclass(frozen=True, slots=True)
class StateTransition:
    """
    Representa uma transição de status.

    Attributes:
        appointment_id: Agendamento afetado
        from_state: Status de origem
        to_state: Status de destino
        trigger: Gatilho que causou a transição
        metadata: Dados adicionais para auditoria (nunca conter PII)
        timestamp: Momento da transição (UTC)
    """

    appointment_id: str
    from_state: AppointmentStatus
    to_state: AppointmentStatus
    trigger: TransitionTrigger
    metadata: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if not self.appointment_id or not self.appointment_id.strip():
            raise ValueError("appointment_id não pode ser vazio")

    def to_log_dict(self) -> dict[str, Any]:
        return {
            "appointment_id": self.appointment_id,
            "from_state": self.from_state.name,
            "to_state": self.to_state.name,
            "trigger": str(self.trigger),
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }


@dataclass(frozen=True, slots=True)
class TransitionResult:
    """
    Resultado de uma tentativa de transição.

    Attributes:
        success: Se a transição foi aplicada
        transition: Dados da transição (se success=True)
        error_reason: Motivo da recusa (se success=False)
    """

    success: bool
    transition: StateTransition | None = None
    error_reason: str | None = None

    def __post_init__(self) -> None:
        if self.success and self.transition is None:
            raise ValueError("Transição bem-sucedida deve incluir transition")
        if not self.success and self.error_reason is None:
            raise ValueError("Transição falha deve incluir error_reason")
