"""Connectors — adapters de borda para APIs externas.

Estrutura:
- mercadopago/: Pagamentos Pix, OAuth e notificações do Mercado Pago

Cada gateway tem seu próprio connector, garantindo SRP e isolamento de falhas.
"""

__all__: list[str] = []
