"""Tests for lenient amount parsing and line-item totals."""
import pytest

from schooldesk.schemas import FeeItem
from schooldesk.totals import fee_totals, parse_amount, pay_sheet_totals, sum_amounts


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1500", 1500.0),
        ("1,500.50", 1500.5),
        ("১২০০", 1200.0),
        ("৳ ২,৫০০", 2500.0),
        ("Tk 750", 750.0),
        ("  300  ", 300.0),
        ("12abc", 12.0),
        ("", 0.0),
        ("abc", 0.0),
        (None, 0.0),
        (250, 250.0),
        (float("nan"), 0.0),
        ("1e3", 1000.0),
        ("2.5E2", 250.0),
        ("3eggs", 3.0),
        ("1e999", 0.0),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


def test_sum_ignores_order_and_invalid_values():
    values = ["100", "", "২০০", "oops", "50.5"]
    assert sum_amounts(values) == 350.5
    assert sum_amounts(reversed(values)) == sum_amounts(values)
    assert sum_amounts([]) == 0.0


def test_fee_totals_with_discount_and_partial_payment():
    items = [
        FeeItem(description="Tuition", amount="3000"),
        FeeItem(description="Lab", amount="৫০০"),
    ]
    totals = fee_totals(items, discount="200", paid="2000")
    assert totals.subtotal == 3500.0
    assert totals.deductions == 200.0
    assert totals.net == 3300.0
    assert totals.paid == 2000.0
    assert totals.due == 1300.0


def test_fee_totals_without_payment_leave_everything_due():
    totals = fee_totals([{"amount": "1000"}], previous_due="300", late_fee="50")
    assert totals.net == 1350.0
    assert totals.paid == 0.0
    assert totals.due == 1350.0
    assert fee_totals([{"amount": "1000"}], paid="").due == 1000.0


def test_fee_due_never_negative():
    totals = fee_totals([{"amount": "100"}], paid="500")
    assert totals.due == 0.0


def test_pay_sheet_totals():
    totals = pay_sheet_totals(["25000", "10,000", "", "1500"], ["2000", "০"])
    assert totals.subtotal == 36500.0
    assert totals.deductions == 2000.0
    assert totals.net == 34500.0
    assert totals.as_dict() == {"subtotal": 36500.0, "deductions": 2000.0, "net": 34500.0}
