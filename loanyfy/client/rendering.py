"""Writes calculator results to display surfaces"""

from typing import Dict, Optional

from loanyfy.client.calculator_state import CalculatorState
from loanyfy.client.formatting import format_currency, format_rate, format_term
from loanyfy.client.widgets import Animator, DisplaySurface, InstantAnimator, Transition, is_running
from loanyfy.domain.models import LoanCalculatorInput, LoanCalculatorOutput


class OutputRenderer:
    """
    Calculator subscriber that keeps labels and result surfaces current.

    Result values move through the animator; a transition still running
    for a surface is cancelled before the next one starts, so each surface
    has at most one active transition. The first render is not animated.
    """

    def __init__(self, state: CalculatorState, animator: Optional[Animator] = None):
        self.principal_label = DisplaySurface("loanAmountLabel")
        self.term_label = DisplaySurface("tenureLabel")
        self.rate_label = DisplaySurface("interestLabel")

        self.installment = DisplaySurface("emiValue")
        self.total_interest = DisplaySurface("totalInterestValue")
        self.total_cost = DisplaySurface("totalAmountValue")

        self.render_count = 0
        self._animator = animator or InstantAnimator()
        self._transitions: Dict[str, Transition] = {}

        self._render(state.inputs, state.outputs, animated=False)
        self._unsubscribe = state.subscribe(self.render)

    def render(self, inputs: LoanCalculatorInput, outputs: LoanCalculatorOutput) -> None:
        self._render(inputs, outputs, animated=True)

    def _render(self, inputs: LoanCalculatorInput, outputs: LoanCalculatorOutput, animated: bool) -> None:
        self.render_count += 1
        self.principal_label.text = format_currency(inputs.principal)
        self.term_label.text = format_term(inputs.term_months)
        self.rate_label.text = format_rate(inputs.annual_rate_percent)

        self._show(self.installment, outputs.installment, animated)
        self._show(self.total_interest, outputs.total_interest, animated)
        self._show(self.total_cost, outputs.total_cost, animated)

    def _show(self, surface: DisplaySurface, value: float, animated: bool) -> None:
        previous = self._transitions.pop(surface.name, None)
        if is_running(previous):
            previous.cancel()

        def write(current: float) -> None:
            surface.value = current
            surface.text = format_currency(current)

        if not animated:
            write(value)
            return
        self._transitions[surface.name] = self._animator.animate(surface.value, value, write)

    @property
    def active_transitions(self) -> int:
        return sum(1 for t in self._transitions.values() if is_running(t))

    def close(self) -> None:
        self._unsubscribe()
        for transition in self._transitions.values():
            transition.cancel()
        self._transitions.clear()
