"""
Order Repository
"""
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import case, func, or_
from sqlalchemy.orm import Session

from chainflow.repositories.base import BaseRepository
from chainflow.models.order import Order, OrderItem, OrderSequence

SORTABLE_FIELDS = ("created_at", "updated_at", "order_number", "order_date", "total", "status", "priority")


class OrderRepository(BaseRepository[Order]):

    def __init__(self, db: Session):
        super().__init__(Order, db)

    def list_paginated(
        self,
        page: int = 1,
        page_size: int = 10,
        type: Optional[str] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        supplier_id: Optional[int] = None,
        search: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ) -> Tuple[List[Order], int]:
        q = self.db.query(Order)
        if type:
            q = q.filter(Order.type == type)
        if status:
            q = q.filter(Order.status == status)
        if priority:
            q = q.filter(Order.priority == priority)
        if supplier_id:
            q = q.filter(Order.supplier_id == supplier_id)
        if start_date:
            q = q.filter(Order.order_date >= start_date)
        if end_date:
            q = q.filter(Order.order_date <= end_date)
        if search:
            pattern = f"%{search}%"
            q = q.filter(or_(
                Order.order_number.ilike(pattern),
                Order.customer_name.ilike(pattern),
                Order.customer_company.ilike(pattern),
            ))
        return self.paginate(q, page, page_size, sort_by, sort_order, SORTABLE_FIELDS)

    def count_by_supplier(self, supplier_id: int) -> int:
        return self.db.query(Order).filter(Order.supplier_id == supplier_id).count()

    def next_sequence_value(self, name: str = "orders") -> int:
        """Increment and return a named counter inside the caller's transaction."""
        seq = (
            self.db.query(OrderSequence)
            .filter(OrderSequence.name == name)
            .with_for_update()
            .populate_existing()
            .first()
        )
        if seq is None:
            seq = OrderSequence(name=name, last_value=0)
            self.db.add(seq)
        seq.last_value = (seq.last_value or 0) + 1
        self.db.flush()
        return seq.last_value

    def recent(self, limit: int = 5) -> List[Order]:
        return self.db.query(Order).order_by(Order.created_at.desc(), Order.id.desc()).limit(limit).all()

    def overview(self) -> dict:
        row = self.db.query(
            func.count(Order.id),
            func.sum(Order.total),
            func.avg(Order.total),
            func.sum(case((Order.status == "pending", 1), else_=0)),
            func.sum(case((Order.status == "processing", 1), else_=0)),
            func.sum(case((Order.status == "delivered", 1), else_=0)),
            func.sum(case((Order.status == "cancelled", 1), else_=0)),
        ).one()
        return {
            "total_orders": row[0] or 0,
            "total_revenue": row[1],
            "avg_order_value": row[2],
            "pending_orders": row[3] or 0,
            "processing_orders": row[4] or 0,
            "completed_orders": row[5] or 0,
            "cancelled_orders": row[6] or 0,
        }

    def grouped_totals(self, column, since: Optional[datetime] = None, until: Optional[datetime] = None) -> List[tuple]:
        q = self.db.query(column, func.count(Order.id), func.sum(Order.total), func.avg(Order.total))
        if since:
            q = q.filter(Order.order_date >= since)
        if until:
            q = q.filter(Order.order_date <= until)
        return q.group_by(column).order_by(column).all()

    def daily_totals(self, since: Optional[datetime] = None, until: Optional[datetime] = None, limit: int = 30) -> List[tuple]:
        day = func.date(Order.order_date)
        q = self.db.query(day, func.count(Order.id), func.sum(Order.total))
        if since:
            q = q.filter(Order.order_date >= since)
        if until:
            q = q.filter(Order.order_date <= until)
        return q.group_by(day).order_by(day).limit(limit).all()

    def list_in_range(self, since: datetime, until: datetime) -> List[Order]:
        return (
            self.db.query(Order)
            .filter(Order.order_date >= since, Order.order_date <= until)
            .all()
        )

    def list_purchase_orders_with_supplier(self) -> List[Order]:
        return (
            self.db.query(Order)
            .filter(Order.type == "purchase", Order.supplier_id.isnot(None))
            .all()
        )

    def top_moving_items(self, limit: int = 10) -> List[tuple]:
        return (
            self.db.query(
                OrderItem.inventory_id,
                func.sum(OrderItem.quantity),
                func.sum(OrderItem.total_price),
                func.count(OrderItem.id),
            )
            .group_by(OrderItem.inventory_id)
            .order_by(func.sum(OrderItem.quantity).desc())
            .limit(limit)
            .all()
        )

    def top_suppliers_by_spend(self, since: Optional[datetime] = None, until: Optional[datetime] = None, limit: int = 5) -> List[tuple]:
        q = self.db.query(Order.supplier_id, func.count(Order.id), func.sum(Order.total)).filter(
            Order.supplier_id.isnot(None)
        )
        if since:
            q = q.filter(Order.order_date >= since)
        if until:
            q = q.filter(Order.order_date <= until)
        return (
            q.group_by(Order.supplier_id)
            .order_by(func.sum(Order.total).desc())
            .limit(limit)
            .all()
        )

    def totals_since(self, since: Optional[datetime] = None) -> Tuple[int, Optional[float]]:
        q = self.db.query(func.count(Order.id), func.sum(Order.total))
        if since:
            q = q.filter(Order.order_date >= since)
        count, revenue = q.one()
        return count or 0, revenue

    def count_with_status(self, statuses: List[str], shipped_since: Optional[datetime] = None) -> int:
        q = self.db.query(Order).filter(Order.status.in_(statuses))
        if shipped_since:
            q = q.filter(Order.shipped_date >= shipped_since)
        return q.count()
