"""
Status canônicos de um agendamento.

Os valores são as strings persistidas e exibidas no dashboard do
profissional, por isso ficam em português.
"""

from enum import StrEnum


class AppointmentStatus(StrEnum):
    """
    Status de um agendamento.

    Estados não-terminais:
        - PENDENTE: Criado sem confirmação (legado / dashboard)
        - AGUARDANDO_PAGAMENTO: Criado via link com preço e gateway conectado
        - CONFIRMADO: Pago ou gratuito; só pode ser cancelado

    Estados terminais:
        - CANCELADO: Cancelado pelo profissional; nunca revertido
    """

    PENDENTE = "Pendente"
    AGUARDANDO_PAGAMENTO = "Aguardando Pagamento"
    CONFIRMADO = "Confirmado"
    CANCELADO = "Cancelado"

    def __str__(self) -> str:
        return self.value


TERMINAL_STATES: frozenset[AppointmentStatus] = frozenset({
    AppointmentStatus.CANCELADO,
})

# Status que ocupam o slot (date, time) do profissional
OCCUPYING_STATES: frozenset[AppointmentStatus] = frozenset({
    AppointmentStatus.PENDENTE,
    AppointmentStatus.AGUARDANDO_PAGAMENTO,
    AppointmentStatus.CONFIRMADO,
})


def initial_status(requires_payment: bool) -> AppointmentStatus:
    """Status inicial de um agendamento criado via link público."""
    if requires_payment:
        return AppointmentStatus.AGUARDANDO_PAGAMENTO
    return AppointmentStatus.CONFIRMADO


def is_terminal(state: AppointmentStatus) -> bool:
    return state in TERMINAL_STATES


def is_valid_state(state: object) -> bool:
    """
    Verifica se o valor é um status conhecido.

    Aceita a string persistida ("Confirmado") além do membro do enum.
    """
    if isinstance(state, AppointmentStatus):
        return True
    return isinstance(state, str) and state in AppointmentStatus._value2member_map_
