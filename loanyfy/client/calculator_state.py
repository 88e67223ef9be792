"""Reactive loan calculator state shared by slider and numeric-field widgets"""

import math
from typing import Any, Callable, Dict, List, Optional

from loanyfy.client.scheduling import FrameScheduler, FrameSource
from loanyfy.client.widgets import InputPair
from loanyfy.domain.amortization import ZERO_OUTPUT, compute
from loanyfy.domain.models import LoanCalculatorInput, LoanCalculatorOutput

DEFAULT_PRINCIPAL = 500000.0
DEFAULT_TERM_MONTHS = 12
DEFAULT_RATE_PERCENT = 16.99

Listener = Callable[[LoanCalculatorInput, LoanCalculatorOutput], None]


def _positive_number(value: Any) -> Optional[float]:
    """Coerce a raw widget value; None when it is not a finite positive number"""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


class CalculatorState:
    """
    Single source of truth for the calculator inputs.

    Every accepted set_* call writes the value to the state and to both
    widgets of the pair, then schedules one recomputation for the next
    frame. Rejected values leave state and widgets untouched.
    """

    def __init__(
        self,
        frame_source: Optional[FrameSource] = None,
        principal: float = DEFAULT_PRINCIPAL,
        term_months: int = DEFAULT_TERM_MONTHS,
        annual_rate_percent: float = DEFAULT_RATE_PERCENT,
    ):
        self.inputs = LoanCalculatorInput(
            principal=principal,
            term_months=term_months,
            annual_rate_percent=annual_rate_percent,
        )
        self.outputs: LoanCalculatorOutput = ZERO_OUTPUT

        self.principal_widgets = InputPair.named("loanAmount")
        self.term_widgets = InputPair.named("tenure")
        self.rate_widgets = InputPair.named("interest")

        self._listeners: List[Listener] = []
        self._scheduler = FrameScheduler(self.recompute, frame_source)

        self.principal_widgets.write(principal)
        self.term_widgets.write(term_months)
        self.rate_widgets.write(annual_rate_percent, f"{annual_rate_percent:.2f}")
        self.recompute()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it"""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    @property
    def update_pending(self) -> bool:
        return self._scheduler.pending

    def set_principal(self, value: Any) -> bool:
        principal = _positive_number(value)
        if principal is None:
            return False
        self.inputs.principal = principal
        self.principal_widgets.write(principal)
        self._scheduler.schedule()
        return True

    def set_term(self, value: Any) -> bool:
        months = _positive_number(value)
        if months is None or not months.is_integer():
            return False
        self.inputs.term_months = int(months)
        self.term_widgets.write(int(months))
        self._scheduler.schedule()
        return True

    def set_rate(self, value: Any) -> bool:
        rate = _positive_number(value)
        if rate is None:
            return False
        self.inputs.annual_rate_percent = rate
        self.rate_widgets.write(rate, f"{rate:.2f}")
        self._scheduler.schedule()
        return True

    def recompute(self) -> LoanCalculatorOutput:
        self.outputs = compute(
            self.inputs.principal,
            self.inputs.term_months,
            self.inputs.annual_rate_percent,
        )
        for listener in list(self._listeners):
            listener(self.inputs, self.outputs)
        return self.outputs

    def flush(self) -> LoanCalculatorOutput:
        """Run a pending recomputation now instead of waiting for the frame"""
        if self._scheduler.pending:
            self._scheduler.cancel()
            return self.recompute()
        return self.outputs

    def close(self) -> None:
        self._scheduler.cancel()
        self._listeners.clear()

    def as_payload(self) -> Dict[str, float]:
        """Calculator block of the create-application payload"""
        outputs = self.flush()
        return {
            "loanAmount": self.inputs.principal,
            "tenureMonths": self.inputs.term_months,
            "interestRate": self.inputs.annual_rate_percent,
            "monthlyEmi": outputs.installment,
            "totalInterest": outputs.total_interest,
            "totalAmount": outputs.total_cost,
        }
