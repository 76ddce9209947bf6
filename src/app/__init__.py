"""App — coração do sistema: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelos e erros de negócio (agendamento, link, pagamento, uso)
- use_cases/: casos de uso (agendamento público, dashboard do profissional)
- services/: serviços de aplicação (links, disponibilidade, cota, Pix, reconciliação)
- infra/: implementações concretas de IO (Firestore, FCM, Redis, HTTP)
- protocols/: contratos/interfaces
- observability/: logs estruturados, correlation_id, métricas

Padrão: app executa; api adapta; fsm governa; utils apoia.
"""
