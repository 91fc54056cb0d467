"""
Inventory stock rules.

Pure functions invoked explicitly by every inventory write path so that the
derived fields (status, total_value) never drift from quantity, unit cost
and reorder point.
"""
from decimal import Decimal, ROUND_HALF_UP

IN_STOCK = "in_stock"
LOW_STOCK = "low_stock"
OUT_OF_STOCK = "out_of_stock"
DISCONTINUED = "discontinued"

STOCK_STATUSES = (IN_STOCK, LOW_STOCK, OUT_OF_STOCK, DISCONTINUED)

INVENTORY_CATEGORIES = (
    "raw_materials",
    "components",
    "finished_goods",
    "packaging",
    "supplies",
    "other",
)

CENTS = Decimal("0.01")


def derive_stock_status(quantity: int, reorder_point: int) -> str:
    if quantity == 0:
        return OUT_OF_STOCK
    if quantity <= reorder_point:
        return LOW_STOCK
    return IN_STOCK


def compute_total_value(quantity: int, unit_cost) -> Decimal:
    cost = unit_cost if isinstance(unit_cost, Decimal) else Decimal(str(unit_cost or 0))
    return (Decimal(quantity or 0) * cost).quantize(CENTS, rounding=ROUND_HALF_UP)


def recompute_derived(item):
    """Refresh status and total_value on an inventory item in place.

    A discontinued item keeps its status until an explicit update names a
    different one.
    """
    quantity = item.quantity or 0
    item.total_value = compute_total_value(quantity, item.unit_cost)
    if item.status != DISCONTINUED:
        item.status = derive_stock_status(quantity, item.reorder_point or 0)
    return item


def format_adjustment_note(timestamp, delta: int, reason: str, actor: str) -> str:
    signed = f"+{delta}" if delta > 0 else str(delta)
    return f"[{timestamp.isoformat()}] Adjustment: {signed} units. Reason: {reason}. By: {actor}"


def append_note(existing, line: str) -> str:
    return f"{existing}\n{line}" if existing else line
