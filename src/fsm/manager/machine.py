"""
Máquina de estados de agendamento.

Não persiste nada: o caller lê o status atual, pede a transição à
máquina e grava o resultado com escrita condicional no store
(compare-and-set sobre `from_state`).
"""

from typing import Any

from fsm.rules.guards import GuardResult, evaluate_guards
from fsm.states.appointment import AppointmentStatus, is_terminal
from fsm.transitions.rules import get_valid_targets, is_transition_valid
from fsm.types.transition import StateTransition, TransitionResult, TransitionTrigger


class AppointmentStateMachine:
    """
    Máquina de estados para um agendamento.

    Attributes:
        current_state: Status atual
        history: Transições aplicadas nesta instância
    """

    __slots__ = ("_appointment_id", "_current_state", "_history")

    def __init__(
        self,
        appointment_id: str,
        current_state: AppointmentStatus | str,
    ) -> None:
        self._appointment_id = appointment_id
        self._current_state = AppointmentStatus(current_state)
        self._history: list[StateTransition] = []

    @property
    def current_state(self) -> AppointmentStatus:
        return self._current_state

    @property
    def history(self) -> list[StateTransition]:
        """Histórico de transições (cópia para evitar mutação externa)."""
        return list(self._history)

    @property
    def appointment_id(self) -> str:
        return self._appointment_id

    @property
    def is_terminal(self) -> bool:
        return is_terminal(self._current_state)

    def can_transition_to(
        self,
        target: AppointmentStatus,
        trigger: TransitionTrigger,
    ) -> bool:
        if not is_transition_valid(self._current_state, target):
            return False
        return evaluate_guards(self._current_state, target, trigger).allowed

    def get_valid_targets(self) -> frozenset[AppointmentStatus]:
        return get_valid_targets(self._current_state)

    def transition(
        self,
        target: AppointmentStatus,
        trigger: TransitionTrigger,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Tenta realizar uma transição de status.

        Args:
            target: Status de destino
            trigger: Gatilho (aprovação de pagamento, ação do profissional)
            metadata: Dados adicionais para auditoria (nunca PII)

        Returns:
            TransitionResult com sucesso/falha e dados da transição
        """
        guard_result: GuardResult = evaluate_guards(self._current_state, target, trigger)
        if not guard_result.allowed:
            return TransitionResult(success=False, error_reason=guard_result.reason)

        if not is_transition_valid(self._current_state, target):
            return TransitionResult(
                success=False,
                error_reason=(
                    f"Transição inválida: {self._current_state.name} → {target.name}"
                ),
            )

        transition = StateTransition(
            appointment_id=self._appointment_id,
            from_state=self._current_state,
            to_state=target,
            trigger=trigger,
            metadata=metadata or {},
        )
        self._current_state = target
        self._history.append(transition)
        return TransitionResult(success=True, transition=transition)

    def get_state_summary(self) -> dict[str, Any]:
        """Resumo seguro para logs."""
        return {
            "appointment_id": self._appointment_id,
            "current_state": self._current_state.name,
            "is_terminal": self.is_terminal,
            "transition_count": len(self._history),
            "valid_targets": sorted(s.name for s in self.get_valid_targets()),
        }


def create_fsm(
    appointment_id: str,
    current_state: AppointmentStatus | str,
) -> AppointmentStateMachine:
    """Factory function para criar a máquina de um agendamento."""
    return AppointmentStateMachine(appointment_id, current_state)
