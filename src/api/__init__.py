"""API — camada de borda.

Responsabilidades:
- Receber requests do cliente final, do dashboard e do Mercado Pago
- Validar assinaturas e payloads
- Normalizar notificações externas para modelos internos

Subpastas:
- connectors/: adapters HTTP por gateway (Mercado Pago)
- routes/: endpoints HTTP (booking, payments, professionals, health)

NÃO PODE conter: FSM, regras de cota, orquestração de use cases.
"""
