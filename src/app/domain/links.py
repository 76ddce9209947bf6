"""Link de agendamento de uso unico."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from app.domain.appointment import Appointment


class OneTimeLink(BaseModel):
    """Token uuid4 que autoriza exatamente um agendamento.

    Ciclo de vida: nao usado -> usado (junto com a criacao do agendamento).
    Nunca reutilizado nem apagado no fluxo normal.
    """

    model_config = ConfigDict(extra="ignore")

    token: str
    professional_id: str
    is_used: bool = False
    appointment_id: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    used_at: datetime | None = None

    def to_document(self) -> dict[str, object]:
        return self.model_dump(mode="json")


@dataclass(frozen=True, slots=True)
class LinkValidation:
    """Resultado da validacao de um link.

    `recoverable=True` significa link ja usado cujo agendamento ainda
    aguarda pagamento: o cliente pode retomar o Pix.
    """

    link: OneTimeLink
    recoverable: bool = False
    appointment: Appointment | None = None
    payment_id: str | None = None

    @property
    def professional_id(self) -> str:
        return self.link.professional_id


__all__ = ["LinkValidation", "OneTimeLink"]
