"""
Supplier Repository
"""
from typing import List, Optional, Tuple

from sqlalchemy import String, cast, func, or_
from sqlalchemy.orm import Session

from chainflow.repositories.base import BaseRepository
from chainflow.models.supplier import Supplier

SORTABLE_FIELDS = ("created_at", "updated_at", "code", "name", "rating", "status")


class SupplierRepository(BaseRepository[Supplier]):

    def __init__(self, db: Session):
        super().__init__(Supplier, db)

    def get_by_code(self, code: str) -> Optional[Supplier]:
        return self.db.query(Supplier).filter(Supplier.code == code.strip().upper()).first()

    def list_paginated(
        self,
        page: int = 1,
        page_size: int = 10,
        status: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ) -> Tuple[List[Supplier], int]:
        q = self.db.query(Supplier)
        if status:
            q = q.filter(Supplier.status == status)
        if category:
            # categories is a JSON list; a text match keeps this portable across dialects
            q = q.filter(cast(Supplier.categories, String).like(f'%"{category}"%'))
        if search:
            pattern = f"%{search}%"
            q = q.filter(or_(
                Supplier.name.ilike(pattern),
                Supplier.code.ilike(pattern),
                Supplier.contact_name.ilike(pattern),
                Supplier.contact_email.ilike(pattern),
            ))
        return self.paginate(q, page, page_size, sort_by, sort_order, SORTABLE_FIELDS)

    def list_active_by_rating(self, limit: int) -> List[Supplier]:
        return (
            self.db.query(Supplier)
            .filter(Supplier.status == "active")
            .order_by(Supplier.rating.desc(), Supplier.id)
            .limit(limit)
            .all()
        )

    def overview(self) -> dict:
        row = self.db.query(
            func.count(Supplier.id),
            func.avg(Supplier.rating),
            func.avg(Supplier.on_time_delivery_rate),
            func.avg(Supplier.quality_score),
        ).one()
        by_status = dict(
            self.db.query(Supplier.status, func.count(Supplier.id)).group_by(Supplier.status).all()
        )
        return {
            "total_suppliers": row[0] or 0,
            "active_suppliers": by_status.get("active", 0),
            "inactive_suppliers": by_status.get("inactive", 0),
            "avg_rating": row[1],
            "avg_on_time_delivery": row[2],
            "avg_quality_score": row[3],
        }
