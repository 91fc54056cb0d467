from decimal import Decimal

from chainflow.core.order_rules import (
    compute_subtotal,
    compute_total,
    deducts_stock_on_reopen,
    format_order_number,
    is_locked,
    line_total,
    restores_stock_on_cancel,
    restores_stock_on_delete,
)


def test_order_number_prefixes_and_padding() -> None:
    assert format_order_number("purchase", 1) == "PO-000001"
    assert format_order_number("sales", 42) == "SO-000042"
    assert format_order_number("transfer", 123456) == "TO-123456"


def test_purchase_order_pricing_identity() -> None:
    lines = [line_total(10, Decimal("5")), line_total(3, Decimal("20"))]
    subtotal = compute_subtotal(lines)
    total = compute_total(subtotal, tax=Decimal("5"), shipping=Decimal("2"), discount=Decimal("1"))

    assert subtotal == Decimal("110.00")
    assert total == Decimal("116.00")


def test_line_total_has_no_float_drift() -> None:
    assert line_total(3, Decimal("0.10")) == Decimal("0.30")
    assert line_total(7, "19.99") == Decimal("139.93")


def test_compute_total_defaults() -> None:
    assert compute_total(Decimal("10")) == Decimal("10.00")


def test_locked_statuses() -> None:
    assert is_locked("delivered")
    assert is_locked("cancelled")
    assert not is_locked("pending")
    assert not is_locked("shipped")


def test_cancel_restores_only_sales_once() -> None:
    assert restores_stock_on_cancel("sales", "pending", "cancelled")
    assert restores_stock_on_cancel("sales", "shipped", "cancelled")
    assert not restores_stock_on_cancel("sales", "cancelled", "cancelled")
    assert not restores_stock_on_cancel("purchase", "pending", "cancelled")
    assert not restores_stock_on_cancel("sales", "pending", "shipped")


def test_delete_restores_non_cancelled_sales() -> None:
    assert restores_stock_on_delete("sales", "pending")
    assert not restores_stock_on_delete("sales", "cancelled")
    assert not restores_stock_on_delete("transfer", "pending")


def test_reopening_cancelled_sales_takes_stock() -> None:
    assert deducts_stock_on_reopen("sales", "cancelled", "pending")
    assert deducts_stock_on_reopen("sales", "cancelled", "delivered")
    assert not deducts_stock_on_reopen("sales", "cancelled", "cancelled")
    assert not deducts_stock_on_reopen("sales", "pending", "confirmed")
    assert not deducts_stock_on_reopen("purchase", "cancelled", "pending")
