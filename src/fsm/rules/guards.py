"""
Guards para transições de status de agendamento.

Além do mapa de transições, cada gatilho só pode levar ao seu status
alvo: uma aprovação de pagamento nunca cancela, um cancelamento nunca
confirma.
"""

from collections.abc import Callable

from fsm.states.appointment import TERMINAL_STATES, AppointmentStatus
from fsm.types.transition import TransitionTrigger

# Status alvo de cada gatilho
TRIGGER_TARGETS: dict[TransitionTrigger, AppointmentStatus] = {
    TransitionTrigger.PAYMENT_APPROVED: AppointmentStatus.CONFIRMADO,
    TransitionTrigger.PROFESSIONAL_CONFIRM: AppointmentStatus.CONFIRMADO,
    TransitionTrigger.PROFESSIONAL_CANCEL: AppointmentStatus.CANCELADO,
}


class GuardResult:
    """
    Resultado da avaliação de um guard.

    Attributes:
        allowed: Se a transição é permitida
        reason: Motivo do bloqueio (se allowed=False)
    """

    __slots__ = ("allowed", "reason")

    def __init__(self, allowed: bool, reason: str | None = None) -> None:
        self.allowed = allowed
        self.reason = reason

    @classmethod
    def allow(cls) -> "GuardResult":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "GuardResult":
        return cls(allowed=False, reason=reason)


Guard = Callable[[AppointmentStatus, AppointmentStatus, TransitionTrigger], GuardResult]


def guard_terminal_state(
    from_state: AppointmentStatus,
    to_state: AppointmentStatus,
    trigger: TransitionTrigger,
) -> GuardResult:
    """Guard: Cancelado nunca é revertido."""
    if from_state in TERMINAL_STATES:
        return GuardResult.deny(
            f"Status {from_state.name} é terminal, não permite transição"
        )
    return GuardResult.allow()


def guard_same_state(
    from_state: AppointmentStatus,
    to_state: AppointmentStatus,
    trigger: TransitionTrigger,
) -> GuardResult:
    """Guard: Confirmar um agendamento já confirmado é no-op, não transição."""
    if from_state == to_state:
        return GuardResult.deny(
            f"Transição reflexiva não permitida: {from_state.name} → {to_state.name}"
        )
    return GuardResult.allow()


def guard_trigger_target(
    from_state: AppointmentStatus,
    to_state: AppointmentStatus,
    trigger: TransitionTrigger,
) -> GuardResult:
    """Guard: O gatilho precisa apontar para o status alvo correspondente."""
    expected = TRIGGER_TARGETS.get(trigger)
    if expected is None:
        return GuardResult.deny(f"Gatilho desconhecido: {trigger}")
    if expected != to_state:
        return GuardResult.deny(
            f"Gatilho {trigger} não leva a {to_state.name} (esperado {expected.name})"
        )
    return GuardResult.allow()


# Todos devem retornar allow() para a transição prosseguir
DEFAULT_GUARDS: list[Guard] = [
    guard_terminal_state,
    guard_same_state,
    guard_trigger_target,
]


def evaluate_guards(
    from_state: AppointmentStatus,
    to_state: AppointmentStatus,
    trigger: TransitionTrigger,
    guards: list[Guard] | None = None,
) -> GuardResult:
    """
    Avalia os guards em ordem.

    Returns:
        GuardResult do primeiro guard que negar, ou allow() se todos passarem
    """
    guards_to_apply = guards if guards is not None else DEFAULT_GUARDS

    for guard in guards_to_apply:
        result = guard(from_state, to_state, trigger)
        if not result.allowed:
            return result

    return GuardResult.allow()
