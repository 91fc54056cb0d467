"""
Order Service — Order lifecycle and inventory side effects

Each mutation runs as one unit of work: the inventory rows it touches are
locked, stock moves and the order write are flushed together, and the
commit happens once. A stale inventory version rolls the unit back and it
is replayed from scratch.
"""
import logging
from collections import defaultdict
from datetime import timedelta
from math import ceil
from typing import Callable, Dict, Iterable, List, Optional, TypeVar

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from chainflow.config import settings
from chainflow.core.exceptions import (
    ConflictException,
    EntityNotFoundException,
    InsufficientStockException,
    ValidationException,
)
from chainflow.core.order_rules import (
    compute_subtotal,
    compute_total,
    deducts_stock_on_reopen,
    format_order_number,
    is_locked,
    line_total,
    quantize_money,
    restores_stock_on_cancel,
    restores_stock_on_delete,
)
from chainflow.core.stock_rules import recompute_derived
from chainflow.models.inventory import InventoryItem
from chainflow.models.order import Order, OrderHistory, OrderItem
from chainflow.models.user import User
from chainflow.repositories.inventory_repository import InventoryRepository
from chainflow.repositories.order_repository import OrderRepository
from chainflow.repositories.supplier_repository import SupplierRepository
from chainflow.schemas.order import (
    OrderCreate,
    OrderGroupTotal,
    OrderLineCreate,
    OrderListResponse,
    OrderStats,
    OrderStatsOverview,
    OrderStatusUpdate,
    OrderTrendPoint,
    OrderUpdate,
)
from chainflow.utils.clock import utcnow
from chainflow.utils.events import (
    EntityCreatedEvent,
    EntityDeletedEvent,
    EntityUpdatedEvent,
    OrderStatusChangedEvent,
    get_event_bus,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

CUSTOMER_COLUMNS = {
    "name": "customer_name",
    "email": "customer_email",
    "phone": "customer_phone",
    "company": "customer_company",
}
PAYMENT_COLUMNS = {
    "status": "payment_status",
    "method": "payment_method",
    "terms": "payment_terms",
    "due_date": "payment_due_date",
    "paid_date": "paid_date",
    "transaction_id": "transaction_id",
}
SHIPPING_COLUMNS = {
    "address": "shipping_address",
    "carrier": "carrier",
    "tracking_number": "tracking_number",
    "method": "shipping_method",
    "estimated_delivery": "estimated_delivery",
}
DATE_COLUMNS = {
    "order_date": "order_date",
    "required_date": "required_date",
    "promised_date": "promised_date",
}
SIMPLE_FIELDS = ("priority", "notes", "internal_notes", "tags")


class OrderService:

    def __init__(self, db: Session):
        self._db = db
        self._repo = OrderRepository(db)
        self._inventory_repo = InventoryRepository(db)
        self._supplier_repo = SupplierRepository(db)
        self._bus = get_event_bus()

    # ── Queries ────────────────────────────────────────────────────────────

    def get_order(self, order_id: int) -> Order:
        order = self._repo.get_by_id(order_id)
        if not order:
            raise EntityNotFoundException("Order", order_id)
        return order

    def list_orders(self, page: int = 1, page_size: int = 10, **filters) -> OrderListResponse:
        items, total = self._repo.list_paginated(page=page, page_size=page_size, **filters)
        return OrderListResponse(
            items=items, total=total, page=page, page_size=page_size,
            total_pages=ceil(total / page_size) if total else 0,
        )

    def get_stats(self) -> OrderStats:
        overview = self._repo.overview()
        since = utcnow() - timedelta(days=30)
        return OrderStats(
            overview=OrderStatsOverview(
                total_orders=overview["total_orders"],
                total_revenue=quantize_money(overview["total_revenue"]),
                avg_order_value=quantize_money(overview["avg_order_value"]),
                pending_orders=overview["pending_orders"],
                processing_orders=overview["processing_orders"],
                completed_orders=overview["completed_orders"],
                cancelled_orders=overview["cancelled_orders"],
            ),
            by_type=[
                OrderGroupTotal(key=key, count=count, total_value=quantize_money(value))
                for key, count, value, _ in self._repo.grouped_totals(Order.type)
            ],
            by_status=[
                OrderGroupTotal(key=key, count=count, total_value=quantize_money(value))
                for key, count, value, _ in self._repo.grouped_totals(Order.status)
            ],
            recent_trends=[
                OrderTrendPoint(day=str(day), orders=count, revenue=quantize_money(value))
                for day, count, value in self._repo.daily_totals(since=since)
            ],
        )

    # ── Commands ───────────────────────────────────────────────────────────

    def create_order(self, data: OrderCreate, actor: User) -> Order:
        order_id = self._atomic(lambda: self._create(data, actor))
        order = self.get_order(order_id)
        logger.info(
            "order_created id=%s number=%s type=%s lines=%s total=%s",
            order.id, order.order_number, order.type, len(order.items), order.total,
        )
        self._bus.publish(EntityCreatedEvent(entity_type="order", entity_id=order.id, user_id=actor.id))
        return order

    def update_order(self, order_id: int, data: OrderUpdate, actor: User) -> Order:
        old_values, new_values = self._atomic(lambda: self._update(order_id, data, actor))
        order = self.get_order(order_id)
        self._bus.publish(EntityUpdatedEvent(
            entity_type="order",
            entity_id=order_id,
            user_id=actor.id,
            old_values=old_values,
            new_values=new_values,
        ))
        return order

    def set_status(self, order_id: int, data: OrderStatusUpdate, actor: User) -> Order:
        old_status, restored = self._atomic(lambda: self._set_status(order_id, data.status, data.notes, actor))
        order = self.get_order(order_id)
        logger.info(
            "order_status_changed id=%s from=%s to=%s stock_restored=%s",
            order_id, old_status, order.status, restored,
        )
        self._bus.publish(OrderStatusChangedEvent(
            entity_type="order",
            entity_id=order_id,
            user_id=actor.id,
            old_status=old_status,
            new_status=order.status,
            stock_restored=restored,
        ))
        return order

    def delete_order(self, order_id: int, actor: User) -> None:
        restored = self._atomic(lambda: self._delete(order_id, actor))
        logger.info("order_deleted id=%s stock_restored=%s", order_id, restored)
        self._bus.publish(EntityDeletedEvent(entity_type="order", entity_id=order_id, user_id=actor.id))

    # ── Units of work ──────────────────────────────────────────────────────

    def _atomic(self, operation: Callable[[], T]) -> T:
        """Run operation and commit once, replaying it on stale inventory writes."""
        attempts = max(1, settings.STOCK_WRITE_MAX_RETRIES)
        for attempt in range(1, attempts + 1):
            try:
                result = operation()
                self._db.commit()
                return result
            except StaleDataError:
                self._db.rollback()
                logger.warning("stale_stock_write attempt=%s max_attempts=%s", attempt, attempts)
            except Exception:
                self._db.rollback()
                raise
        raise ConflictException(
            "Inventory was modified by another request. Please retry.",
            details={"attempts": attempts},
        )

    def _create(self, data: OrderCreate, actor: User) -> int:
        self._check_supplier(data.type, data.supplier_id)

        stock = self._lock_inventory(line.inventory_id for line in data.items)
        if data.type == "sales":
            self._check_stock(data.items, stock)

        now = utcnow()
        order = Order(
            order_number=format_order_number(data.type, self._repo.next_sequence_value()),
            type=data.type,
            supplier_id=data.supplier_id,
            status="pending",
            currency=data.pricing.currency or settings.DEFAULT_CURRENCY,
            order_date=now,
            created_by=actor.id,
            updated_by=actor.id,
        )
        payload = data.model_dump(exclude_unset=True)
        self._apply_blocks(order, payload)
        for key in SIMPLE_FIELDS:
            setattr(order, key, getattr(data, key))
        if order.order_date is None:
            order.order_date = now

        order.items = self._build_lines(data.items, stock)
        self._apply_pricing(order, data.pricing.discount, data.pricing.tax, data.pricing.shipping)
        self._repo.add(order)

        if order.type == "sales":
            self._move_stock(order.items, stock, -1, actor)

        order.history.append(self._history("created", f"Order created by {actor.name}", actor, now))
        self._db.flush()
        return order.id

    def _update(self, order_id: int, data: OrderUpdate, actor: User):
        order = self._lock_order(order_id)
        if is_locked(order.status):
            raise ConflictException(
                f"Cannot update order with status {order.status}",
                details={"status": order.status},
            )

        patch = data.model_dump(exclude_unset=True)
        if "order_date" in (patch.get("dates") or {}) and patch["dates"]["order_date"] is None:
            raise ValidationException("Order date cannot be cleared", details={"field": "dates.order_date"})
        old_values = self._snapshot(order)

        if "supplier_id" in patch:
            self._check_supplier(order.type, patch["supplier_id"])
            order.supplier_id = patch["supplier_id"]

        if data.items is not None:
            previous = list(order.items)
            stock = self._lock_inventory(
                [line.inventory_id for line in previous] + [line.inventory_id for line in data.items]
            )
            if order.type == "sales":
                self._move_stock(previous, stock, 1, actor)
                self._check_stock(data.items, stock)
            order.items = self._build_lines(data.items, stock)
            if order.type == "sales":
                self._move_stock(order.items, stock, -1, actor)

        self._apply_blocks(order, patch)
        for key in SIMPLE_FIELDS:
            if key in patch:
                setattr(order, key, patch[key])

        pricing = patch.get("pricing") or {}
        if pricing.get("currency"):
            order.currency = pricing["currency"]
        self._apply_pricing(
            order,
            pricing.get("discount", order.discount),
            pricing.get("tax", order.tax),
            pricing.get("shipping", order.shipping_cost),
        )

        order.updated_by = actor.id
        order.history.append(self._history("updated", f"Order updated by {actor.name}", actor))
        self._db.flush()
        return old_values, self._snapshot(order)

    def _set_status(self, order_id: int, new_status: str, note: Optional[str], actor: User):
        order = self._lock_order(order_id)
        old_status = order.status
        now = utcnow()

        if new_status == "shipped":
            order.shipped_date = now
        elif new_status == "delivered":
            order.actual_delivery = now
            order.completed_date = now

        restored = restores_stock_on_cancel(order.type, old_status, new_status)
        if restored:
            self._restore_lines(order, actor)
        elif deducts_stock_on_reopen(order.type, old_status, new_status):
            stock = self._lock_inventory(line.inventory_id for line in order.items)
            self._check_stock(order.items, stock)
            self._move_stock(order.items, stock, -1, actor)

        order.status = new_status
        order.updated_by = actor.id
        description = f"Status changed from {old_status} to {new_status}"
        if note:
            description = f"{description}. Note: {note}"
        order.history.append(self._history("status_change", description, actor, now))
        self._db.flush()
        return old_status, restored

    def _delete(self, order_id: int, actor: User) -> bool:
        order = self._lock_order(order_id)
        if order.status == "delivered":
            raise ConflictException("Cannot delete delivered orders", details={"status": order.status})

        restored = restores_stock_on_delete(order.type, order.status)
        if restored:
            self._restore_lines(order, actor)

        self._db.delete(order)
        self._db.flush()
        return restored

    # ── Helpers ────────────────────────────────────────────────────────────

    def _lock_order(self, order_id: int) -> Order:
        order = self._repo.get_for_update(order_id)
        if not order:
            raise EntityNotFoundException("Order", order_id)
        return order

    def _lock_inventory(self, inventory_ids: Iterable[int]) -> Dict[int, InventoryItem]:
        # Ascending id order keeps concurrent lockers from deadlocking
        stock: Dict[int, InventoryItem] = {}
        for inventory_id in sorted(set(inventory_ids)):
            item = self._inventory_repo.get_for_update(inventory_id)
            if item is None:
                raise EntityNotFoundException("Inventory item", inventory_id)
            stock[inventory_id] = item
        return stock

    def _check_supplier(self, order_type: str, supplier_id: Optional[int]) -> None:
        if supplier_id is None:
            if order_type == "purchase":
                raise ValidationException("Purchase orders require a supplier")
            return
        if not self._supplier_repo.get_by_id(supplier_id):
            raise EntityNotFoundException("Supplier", supplier_id)

    def _check_stock(self, lines: Iterable, stock: Dict[int, InventoryItem]) -> None:
        requested: Dict[int, int] = defaultdict(int)
        for line in lines:
            requested[line.inventory_id] += line.quantity
        for inventory_id, quantity in requested.items():
            item = stock[inventory_id]
            if item.quantity < quantity:
                raise InsufficientStockException(item.name, item.quantity, quantity, inventory_id=item.id)

    def _build_lines(self, lines: List[OrderLineCreate], stock: Dict[int, InventoryItem]) -> List[OrderItem]:
        return [
            OrderItem(
                inventory_id=line.inventory_id,
                position=position,
                sku=stock[line.inventory_id].sku,
                name=stock[line.inventory_id].name,
                quantity=line.quantity,
                unit_price=quantize_money(line.unit_price),
                total_price=line_total(line.quantity, line.unit_price),
                discount=quantize_money(line.discount),
                tax=quantize_money(line.tax),
            )
            for position, line in enumerate(lines)
        ]

    def _move_stock(self, lines: Iterable[OrderItem], stock: Dict[int, InventoryItem], sign: int, actor: User) -> None:
        for line in lines:
            item = stock[line.inventory_id]
            item.quantity = item.quantity + sign * line.quantity
            item.updated_by = actor.id
            recompute_derived(item)

    def _restore_lines(self, order: Order, actor: User) -> None:
        stock = self._lock_inventory(line.inventory_id for line in order.items)
        self._move_stock(order.items, stock, 1, actor)

    def _apply_blocks(self, order: Order, payload: dict) -> None:
        for block, columns in (
            ("customer", CUSTOMER_COLUMNS),
            ("payment", PAYMENT_COLUMNS),
            ("shipping", SHIPPING_COLUMNS),
            ("dates", DATE_COLUMNS),
        ):
            values = payload.get(block)
            if not values:
                continue
            for key, value in values.items():
                if key in columns:
                    setattr(order, columns[key], value)

    def _apply_pricing(self, order: Order, discount, tax, shipping) -> None:
        order.discount = quantize_money(discount)
        order.tax = quantize_money(tax)
        order.shipping_cost = quantize_money(shipping)
        order.subtotal = compute_subtotal(line.total_price for line in order.items)
        order.total = compute_total(order.subtotal, order.tax, order.shipping_cost, order.discount)
        if order.total < 0:
            raise ValidationException(
                "Order total cannot be negative",
                details={"subtotal": str(order.subtotal), "discount": str(order.discount)},
            )

    def _history(self, action: str, description: str, actor: User, timestamp=None) -> OrderHistory:
        return OrderHistory(
            action=action,
            description=description,
            user_id=actor.id,
            timestamp=timestamp or utcnow(),
        )

    def _snapshot(self, order: Order) -> dict:
        return {
            "status": order.status,
            "priority": order.priority,
            "line_count": len(order.items),
            "subtotal": str(order.subtotal) if order.subtotal is not None else None,
            "total": str(order.total) if order.total is not None else None,
        }