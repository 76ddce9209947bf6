"""
Regras de transição válidas entre status de agendamento.

Toda escrita de status (reconciliação de pagamento, ações do profissional)
consulta este mapa antes de gravar.
"""

from fsm.states.appointment import TERMINAL_STATES, AppointmentStatus

TransitionMap = dict[AppointmentStatus, frozenset[AppointmentStatus]]

# Chave: status de origem
# Valor: status de destino permitidos
VALID_TRANSITIONS: TransitionMap = {
    AppointmentStatus.PENDENTE: frozenset({
        AppointmentStatus.CONFIRMADO,
        AppointmentStatus.CANCELADO,
    }),
    AppointmentStatus.AGUARDANDO_PAGAMENTO: frozenset({
        AppointmentStatus.CONFIRMADO,
        AppointmentStatus.CANCELADO,
    }),
    AppointmentStatus.CONFIRMADO: frozenset({
        AppointmentStatus.CANCELADO,
    }),
    AppointmentStatus.CANCELADO: frozenset(),
}


def get_valid_targets(state: AppointmentStatus) -> frozenset[AppointmentStatus]:
    """Retorna os status de destino válidos (vazio se terminal)."""
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(
    from_state: AppointmentStatus,
    to_state: AppointmentStatus,
) -> bool:
    if from_state in TERMINAL_STATES:
        return False
    return to_state in get_valid_targets(from_state)


def validate_transition_map() -> list[str]:
    """
    Valida a integridade do mapa de transições.

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for state in AppointmentStatus:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Status {state.name} ausente em VALID_TRANSITIONS")

    for state in TERMINAL_STATES:
        targets = VALID_TRANSITIONS.get(state, frozenset())
        if targets:
            errors.append(
                f"Status terminal {state.name} não deveria ter transições: {targets}"
            )

    for from_state, targets in VALID_TRANSITIONS.items():
        if from_state in targets:
            errors.append(f"Transição reflexiva em {from_state.name}")

    return errors
