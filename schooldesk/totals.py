"""Line-item totals for fee receipts and pay-sheets.

Amounts come from text inputs, so every value is parsed leniently: Bengali
digits are accepted, thousands separators and currency marks are ignored and
anything that does not start with a number counts as zero.
"""

import math
import re
from dataclasses import asdict, dataclass
from typing import Any, Iterable, Mapping

from .bilingual import to_ascii_digits

PAY_SHEET_EARNINGS = (
    "basic_salary",
    "house_rent",
    "medical_allowance",
    "transport_allowance",
    "performance_bonus",
    "overtime_amount",
    "other_allowances",
)
PAY_SHEET_DEDUCTIONS = (
    "income_tax",
    "provident_fund",
    "loan_repayment",
    "absent_deduction",
    "other_deductions",
)

_CURRENCY = re.compile(r"৳|\bbdt\b|\btk\.?", re.IGNORECASE)
_LEADING_NUMBER = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")


@dataclass
class Totals:
    subtotal: float
    deductions: float
    net: float

    def as_dict(self):
        return asdict(self)


@dataclass
class FeeTotals(Totals):
    previous_due: float = 0.0
    late_fee: float = 0.0
    paid: float = 0.0
    due: float = 0.0


def parse_amount(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else 0.0
    text = to_ascii_digits(str(value))
    text = _CURRENCY.sub("", text).replace(",", "")
    text = "".join(text.split())
    match = _LEADING_NUMBER.match(text)
    if not match:
        return 0.0
    number = float(match.group(0))
    return number if math.isfinite(number) else 0.0


def sum_amounts(values: Iterable[Any]) -> float:
    return sum((parse_amount(v) for v in values), 0.0)


def _amount_of(item: Any) -> Any:
    if isinstance(item, Mapping):
        return item.get("amount")
    return getattr(item, "amount", item)


def fee_totals(
    items: Iterable[Any],
    discount: Any = None,
    paid: Any = None,
    previous_due: Any = None,
    late_fee: Any = None,
) -> FeeTotals:
    """Subtotal of the fee items, less discount, plus carried-over dues.

    A missing ``paid`` amount counts as nothing paid, so the whole net is due.
    """
    subtotal = sum_amounts(_amount_of(item) for item in items)
    discount_amount = parse_amount(discount)
    due_before = parse_amount(previous_due)
    late = parse_amount(late_fee)
    net = subtotal - discount_amount + due_before + late
    paid_amount = parse_amount(paid)
    return FeeTotals(
        subtotal=subtotal,
        deductions=discount_amount,
        net=net,
        previous_due=due_before,
        late_fee=late,
        paid=paid_amount,
        due=max(net - paid_amount, 0.0),
    )


def pay_sheet_totals(earnings: Iterable[Any], deductions: Iterable[Any]) -> Totals:
    gross = sum_amounts(earnings)
    deducted = sum_amounts(deductions)
    return Totals(subtotal=gross, deductions=deducted, net=gross - deducted)
