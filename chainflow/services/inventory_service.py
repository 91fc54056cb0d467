"""
Inventory Service — Service Layer (SRP / DIP)

Every write path runs recompute_derived() before commit, so status and
total_value always reflect quantity, unit cost and reorder point.
"""
import logging
from math import ceil
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from chainflow.core.exceptions import (
    ConflictException,
    DuplicateEntityException,
    EntityNotFoundException,
    ValidationException,
)
from chainflow.core.stock_rules import (
    DISCONTINUED,
    append_note,
    format_adjustment_note,
    recompute_derived,
)
from chainflow.models.inventory import InventoryItem
from chainflow.models.user import User
from chainflow.repositories.inventory_repository import InventoryRepository
from chainflow.repositories.supplier_repository import SupplierRepository
from chainflow.schemas.inventory import (
    InventoryAdjustRequest,
    InventoryAlertsResponse,
    InventoryCategoryBreakdown,
    InventoryCreate,
    InventoryListResponse,
    InventoryStats,
    InventoryStatsOverview,
    InventoryUpdate,
)
from chainflow.utils.clock import utcnow
from chainflow.utils.events import (
    EntityCreatedEvent,
    EntityDeletedEvent,
    EntityUpdatedEvent,
    StockAdjustedEvent,
    get_event_bus,
)

logger = logging.getLogger(__name__)

WAREHOUSE_FIELDS = {"location": "warehouse_location", "zone": "warehouse_zone", "bin": "warehouse_bin"}


class InventoryService:

    def __init__(self, db: Session):
        self._db = db
        self._repo = InventoryRepository(db)
        self._supplier_repo = SupplierRepository(db)
        self._bus = get_event_bus()

    def list_inventory(self, page: int = 1, page_size: int = 10, **filters) -> InventoryListResponse:
        items, total = self._repo.list_paginated(page=page, page_size=page_size, **filters)
        return InventoryListResponse(
            items=items, total=total, page=page, page_size=page_size,
            total_pages=ceil(total / page_size) if total else 0,
        )

    def get_inventory(self, inventory_id: int) -> InventoryItem:
        item = self._repo.get_by_id(inventory_id)
        if not item:
            raise EntityNotFoundException("Inventory item", inventory_id)
        return item

    def create_inventory(self, data: InventoryCreate, actor: User) -> InventoryItem:
        if self._repo.get_by_sku(data.sku):
            raise DuplicateEntityException("Inventory item", "sku", data.sku)
        self._ensure_supplier(data.supplier_id)

        fields = data.model_dump(exclude={"warehouse"})
        fields.update(self._flatten_warehouse(data.warehouse.model_dump()))
        item = InventoryItem(**fields, created_by=actor.id, updated_by=actor.id, last_restocked=utcnow())
        recompute_derived(item)
        result = self._repo.create(item)

        logger.info("inventory_created id=%s sku=%s quantity=%s", result.id, result.sku, result.quantity)
        self._bus.publish(EntityCreatedEvent(
            entity_type="inventory", entity_id=result.id, user_id=actor.id,
        ))
        return result

    def update_inventory(self, inventory_id: int, data: InventoryUpdate, actor: User) -> InventoryItem:
        item = self.get_inventory(inventory_id)
        updates = data.model_dump(exclude_unset=True)

        new_sku = updates.get("sku")
        if new_sku and new_sku != item.sku and self._repo.get_by_sku(new_sku):
            raise DuplicateEntityException("Inventory item", "sku", new_sku)
        if "supplier_id" in updates:
            self._ensure_supplier(updates["supplier_id"])

        warehouse = updates.pop("warehouse", None)
        if warehouse:
            updates.update(self._flatten_warehouse(warehouse))

        requested_status = updates.pop("status", None)
        old_values = {k: self._serialize(getattr(item, k)) for k in updates}
        old_values["status"] = item.status

        for key, value in updates.items():
            setattr(item, key, value)
        if requested_status == DISCONTINUED:
            item.status = DISCONTINUED
        elif requested_status is not None and item.status == DISCONTINUED:
            # Any explicit non-discontinued status re-enables derivation
            item.status = requested_status
        item.updated_by = actor.id
        recompute_derived(item)

        self._db.commit()
        self._db.refresh(item)

        self._bus.publish(EntityUpdatedEvent(
            entity_type="inventory",
            entity_id=inventory_id,
            user_id=actor.id,
            old_values=old_values,
            new_values={**{k: self._serialize(v) for k, v in updates.items()}, "status": item.status},
        ))
        return item

    def adjust_quantity(self, inventory_id: int, data: InventoryAdjustRequest, actor: User) -> InventoryItem:
        return self.adjust(inventory_id, data.adjustment, data.reason, actor)

    def adjust(self, inventory_id: int, delta: int, reason: str, actor: User) -> InventoryItem:
        """Apply a signed quantity delta and record it on the item's note trail."""
        item = self._repo.get_for_update(inventory_id)
        if not item:
            raise EntityNotFoundException("Inventory item", inventory_id)

        old_quantity = item.quantity
        new_quantity = old_quantity + delta
        if new_quantity < 0:
            self._db.rollback()
            raise ValidationException(
                "Insufficient inventory",
                details={"available": old_quantity, "adjustment": delta},
            )

        now = utcnow()
        item.quantity = new_quantity
        item.notes = append_note(item.notes, format_adjustment_note(now, delta, reason, actor.name))
        if delta > 0:
            item.last_restocked = now
        item.updated_by = actor.id
        recompute_derived(item)

        self._db.commit()
        self._db.refresh(item)

        logger.info(
            "inventory_adjusted id=%s sku=%s delta=%s quantity=%s status=%s",
            item.id, item.sku, delta, item.quantity, item.status,
        )
        self._bus.publish(StockAdjustedEvent(
            entity_type="inventory",
            entity_id=item.id,
            user_id=actor.id,
            old_quantity=old_quantity,
            new_quantity=new_quantity,
            reason=reason,
        ))
        return item

    def delete_inventory(self, inventory_id: int, actor: User) -> None:
        item = self.get_inventory(inventory_id)
        references = self._repo.count_order_references(inventory_id)
        if references:
            raise ConflictException(
                f"Cannot delete inventory item. {references} order lines reference it.",
                details={"order_lines": references},
            )
        self._repo.delete(item)
        self._bus.publish(EntityDeletedEvent(
            entity_type="inventory", entity_id=inventory_id, user_id=actor.id,
        ))

    def get_low_stock_alerts(self) -> InventoryAlertsResponse:
        items = self._repo.list_low_stock()
        return InventoryAlertsResponse(count=len(items), items=items)

    def get_stats(self) -> InventoryStats:
        overview = self._repo.overview()
        return InventoryStats(
            overview=InventoryStatsOverview(
                total_items=overview["total_items"],
                total_value=self._money(overview["total_value"]),
                total_quantity=overview["total_quantity"],
                avg_unit_cost=self._money(overview["avg_unit_cost"]),
                low_stock_items=overview["low_stock_items"],
                out_of_stock_items=overview["out_of_stock_items"],
            ),
            by_category=[
                InventoryCategoryBreakdown(
                    category=category,
                    count=count,
                    total_value=self._money(value),
                    total_quantity=quantity or 0,
                )
                for category, count, value, quantity in self._repo.by_category()
            ],
        )

    def _ensure_supplier(self, supplier_id: Optional[int]) -> None:
        if supplier_id is not None and not self._supplier_repo.get_by_id(supplier_id):
            raise EntityNotFoundException("Supplier", supplier_id)

    def _flatten_warehouse(self, warehouse: dict) -> dict:
        return {column: warehouse.get(key) for key, column in WAREHOUSE_FIELDS.items() if key in warehouse}

    def _money(self, value) -> Decimal:
        return Decimal(str(value or 0)).quantize(Decimal("0.01"))

    def _serialize(self, value):
        if isinstance(value, Decimal):
            return str(value)
        return value
