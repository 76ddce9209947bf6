"""Serviços de aplicação.

Unidades reutilizáveis de orquestração (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.notifications import NotificationService
from app.services.one_time_links import OneTimeLinkService
from app.services.payment_gate import PaymentGate
from app.services.reconciliation import (
    ReconciliationApplied,
    ReconciliationNoop,
    ReconciliationRequest,
    ReconciliationService,
)

__all__ = [
    "NotificationService",
    "OneTimeLinkService",
    "PaymentGate",
    "ReconciliationApplied",
    "ReconciliationNoop",
    "ReconciliationRequest",
    "ReconciliationService",
]
