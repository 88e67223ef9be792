"""EMI calculation for fixed-rate amortized loans"""

from loanyfy.domain.models import LoanCalculatorOutput

ZERO_OUTPUT = LoanCalculatorOutput(installment=0.0, total_interest=0.0, total_cost=0.0)


def compute(principal: float, term_months: int, annual_rate_percent: float) -> LoanCalculatorOutput:
    """
    Compute the equated monthly installment and loan totals.

    Formula:
        r   = annual_rate_percent / 12 / 100
        EMI = P * r * (1 + r)^n / ((1 + r)^n - 1)

    Values are not rounded; rounding to whole rupees is a display concern.

    Example:
        compute(500000, 12, 16.99) → installment ≈ 45,600
    """
    r = annual_rate_percent / 12 / 100
    if not principal or not term_months or not r:
        return ZERO_OUTPUT

    factor = (1 + r) ** term_months
    installment = principal * r * factor / (factor - 1)
    total_cost = installment * term_months
    total_interest = total_cost - principal

    return LoanCalculatorOutput(
        installment=installment,
        total_interest=total_interest,
        total_cost=total_cost,
    )
