"""
Order rules: enumerations, numbering and pricing arithmetic.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

ORDER_TYPES = ("purchase", "sales", "transfer")
ORDER_STATUSES = ("pending", "confirmed", "processing", "shipped", "delivered", "cancelled", "returned")
ORDER_PRIORITIES = ("low", "medium", "high", "urgent")
PAYMENT_STATUSES = ("pending", "partial", "paid", "refunded", "overdue")
PAYMENT_METHODS = ("credit_card", "bank_transfer", "cash", "check", "other")
SHIPPING_METHODS = ("standard", "express", "overnight", "freight", "pickup")

# Orders in these states reject field edits
LOCKED_STATUSES = frozenset({"delivered", "cancelled"})

ORDER_PREFIXES = {
    "purchase": "PO",
    "sales": "SO",
    "transfer": "TO",
}

ORDER_NUMBER_WIDTH = 6
CENTS = Decimal("0.01")


def _money(value) -> Decimal:
    if value is None:
        return Decimal("0")
    return value if isinstance(value, Decimal) else Decimal(str(value))


def quantize_money(value) -> Decimal:
    return _money(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_order_number(order_type: str, sequence: int) -> str:
    prefix = ORDER_PREFIXES[order_type]
    return f"{prefix}-{str(sequence).zfill(ORDER_NUMBER_WIDTH)}"


def line_total(quantity: int, unit_price) -> Decimal:
    return quantize_money(Decimal(quantity) * _money(unit_price))


def compute_subtotal(line_totals: Iterable) -> Decimal:
    return quantize_money(sum((_money(t) for t in line_totals), Decimal("0")))


def compute_total(subtotal, tax=0, shipping=0, discount=0) -> Decimal:
    return quantize_money(_money(subtotal) + _money(tax) + _money(shipping) - _money(discount))


def is_locked(status: str) -> bool:
    return status in LOCKED_STATUSES


def restores_stock_on_cancel(order_type: str, old_status: str, new_status: str) -> bool:
    return new_status == "cancelled" and order_type == "sales" and old_status != "cancelled"


def restores_stock_on_delete(order_type: str, status: str) -> bool:
    return order_type == "sales" and status != "cancelled"


def deducts_stock_on_reopen(order_type: str, old_status: str, new_status: str) -> bool:
    return order_type == "sales" and old_status == "cancelled" and new_status != "cancelled"
