from decimal import Decimal
from types import SimpleNamespace

import pytest

from chainflow.core.stock_rules import (
    append_note,
    compute_total_value,
    derive_stock_status,
    format_adjustment_note,
    recompute_derived,
)
from chainflow.utils.clock import utcnow


@pytest.mark.parametrize(
    "quantity,reorder_point,expected",
    [
        (0, 10, "out_of_stock"),
        (0, 0, "out_of_stock"),
        (1, 10, "low_stock"),
        (10, 10, "low_stock"),
        (11, 10, "in_stock"),
        (5, 0, "in_stock"),
    ],
)
def test_derive_stock_status(quantity, reorder_point, expected) -> None:
    assert derive_stock_status(quantity, reorder_point) == expected


def test_compute_total_value_is_exact_decimal() -> None:
    assert compute_total_value(3, Decimal("0.10")) == Decimal("0.30")
    assert compute_total_value(150, "2.50") == Decimal("375.00")
    assert compute_total_value(0, Decimal("9.99")) == Decimal("0.00")


def test_recompute_derived_sets_status_and_value() -> None:
    item = SimpleNamespace(quantity=10, reorder_point=50, unit_cost=Decimal("2.50"), status="in_stock", total_value=None)
    recompute_derived(item)
    assert item.status == "low_stock"
    assert item.total_value == Decimal("25.00")


def test_recompute_derived_keeps_discontinued() -> None:
    item = SimpleNamespace(quantity=500, reorder_point=50, unit_cost=Decimal("1.00"), status="discontinued", total_value=None)
    recompute_derived(item)
    assert item.status == "discontinued"
    assert item.total_value == Decimal("500.00")


def test_adjustment_note_format() -> None:
    now = utcnow()
    note = format_adjustment_note(now, 25, "Cycle count", "Aarav Sharma")
    assert note == f"[{now.isoformat()}] Adjustment: +25 units. Reason: Cycle count. By: Aarav Sharma"
    assert "Adjustment: -5 units" in format_adjustment_note(now, -5, "Damaged", "Neha")


def test_append_note() -> None:
    assert append_note(None, "first") == "first"
    assert append_note("", "first") == "first"
    assert append_note("first", "second") == "first\nsecond"
