"""Display formatting for the en-IN rupee locale"""

import math


def group_indian(number: int) -> str:
    """Group digits the Indian way: 5,00,000 / 1,23,45,678"""
    sign = "-" if number < 0 else ""
    digits = str(abs(number))
    if len(digits) <= 3:
        return sign + digits

    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return sign + ",".join(groups + [tail])


def format_currency(value: float, prefix: str = "₹ ") -> str:
    """Round half up to whole rupees and format, e.g. 45600.5 → '₹ 45,601'"""
    return prefix + group_indian(math.floor(value + 0.5))


def format_term(months: int) -> str:
    return f"{months} months"


def format_rate(rate: float) -> str:
    return f"{rate:.2f}% p.a."
