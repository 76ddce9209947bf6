"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (booking, pagamentos, dashboard, health)
- Validação inicial de request (corpo JSON, query params, assinatura)
- Delegação para use cases e serviços
- Tradução de erros de domínio para `{"error", "kind"}`

Estrutura:
- routes/booking/: fluxo público do cliente final
- routes/payments/: Pix e webhook do Mercado Pago
- routes/professionals/: dashboard do profissional
- routes/mercadopago/: conexão OAuth
- routes/push_tokens/: registro de dispositivos
- routes/health/: health checks e readiness
"""

from __future__ import annotations

from api.routes.errors import register_exception_handlers
from api.routes.router import create_api_router

__all__ = ["create_api_router", "register_exception_handlers"]
