"""
Inventory Repository
"""
from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from chainflow.repositories.base import BaseRepository
from chainflow.models.inventory import InventoryItem
from chainflow.models.order import OrderItem

SORTABLE_FIELDS = ("created_at", "updated_at", "sku", "name", "quantity", "unit_cost", "total_value", "status")


class InventoryRepository(BaseRepository[InventoryItem]):

    def __init__(self, db: Session):
        super().__init__(InventoryItem, db)

    def get_by_sku(self, sku: str) -> Optional[InventoryItem]:
        return self.db.query(InventoryItem).filter(InventoryItem.sku == sku.strip().upper()).first()

    def list_paginated(
        self,
        page: int = 1,
        page_size: int = 10,
        category: Optional[str] = None,
        status: Optional[str] = None,
        supplier_id: Optional[int] = None,
        search: Optional[str] = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ) -> Tuple[List[InventoryItem], int]:
        q = self.db.query(InventoryItem)
        if category:
            q = q.filter(InventoryItem.category == category)
        if status:
            q = q.filter(InventoryItem.status == status)
        if supplier_id:
            q = q.filter(InventoryItem.supplier_id == supplier_id)
        if search:
            pattern = f"%{search}%"
            q = q.filter(or_(
                InventoryItem.name.ilike(pattern),
                InventoryItem.sku.ilike(pattern),
                InventoryItem.description.ilike(pattern),
            ))
        return self.paginate(q, page, page_size, sort_by, sort_order, SORTABLE_FIELDS)

    def list_low_stock(self) -> List[InventoryItem]:
        return (
            self.db.query(InventoryItem)
            .filter(or_(
                InventoryItem.status.in_(["low_stock", "out_of_stock"]),
                InventoryItem.quantity <= InventoryItem.reorder_point,
            ))
            .order_by(InventoryItem.quantity.asc())
            .all()
        )

    def list_by_supplier(self, supplier_id: int) -> List[InventoryItem]:
        return (
            self.db.query(InventoryItem)
            .filter(InventoryItem.supplier_id == supplier_id)
            .order_by(InventoryItem.sku)
            .all()
        )

    def count_by_supplier(self, supplier_id: int) -> int:
        return self.db.query(InventoryItem).filter(InventoryItem.supplier_id == supplier_id).count()

    def count_order_references(self, inventory_id: int) -> int:
        return self.db.query(OrderItem).filter(OrderItem.inventory_id == inventory_id).count()

    def overview(self) -> dict:
        row = self.db.query(
            func.count(InventoryItem.id),
            func.sum(InventoryItem.total_value),
            func.sum(InventoryItem.quantity),
            func.avg(InventoryItem.unit_cost),
        ).one()
        by_status = dict(
            self.db.query(InventoryItem.status, func.count(InventoryItem.id))
            .group_by(InventoryItem.status)
            .all()
        )
        return {
            "total_items": row[0] or 0,
            "total_value": row[1],
            "total_quantity": row[2] or 0,
            "avg_unit_cost": row[3],
            "low_stock_items": by_status.get("low_stock", 0),
            "out_of_stock_items": by_status.get("out_of_stock", 0),
        }

    def by_category(self) -> List[tuple]:
        return (
            self.db.query(
                InventoryItem.category,
                func.count(InventoryItem.id),
                func.sum(InventoryItem.total_value),
                func.sum(InventoryItem.quantity),
            )
            .group_by(InventoryItem.category)
            .order_by(func.sum(InventoryItem.total_value).desc())
            .all()
        )
