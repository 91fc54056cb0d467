"""
Supplier Service
"""
import logging
from collections import Counter
from decimal import Decimal
from math import ceil
from typing import Optional

from sqlalchemy.orm import Session

from chainflow.core.exceptions import (
    ConflictException,
    DuplicateEntityException,
    EntityNotFoundException,
)
from chainflow.models.supplier import Supplier
from chainflow.models.user import User
from chainflow.repositories.inventory_repository import InventoryRepository
from chainflow.repositories.order_repository import OrderRepository
from chainflow.repositories.supplier_repository import SupplierRepository
from chainflow.schemas.supplier import (
    SupplierCategoryCount,
    SupplierCreate,
    SupplierListResponse,
    SupplierPerformanceUpdate,
    SupplierProductsResponse,
    SupplierStats,
    SupplierStatsOverview,
    SupplierUpdate,
)
from chainflow.utils.events import (
    EntityCreatedEvent,
    EntityDeletedEvent,
    EntityUpdatedEvent,
    get_event_bus,
)

logger = logging.getLogger(__name__)

BLOCK_COLUMNS = {
    "contact_person": {
        "name": "contact_name",
        "email": "contact_email",
        "phone": "contact_phone",
        "position": "contact_position",
    },
    "company_details": {
        "registration_number": "registration_number",
        "tax_id": "tax_id",
        "website": "website",
    },
    "address": {
        "street": "street",
        "city": "city",
        "state": "state",
        "country": "country",
        "postal_code": "postal_code",
    },
    "contract": {
        "start_date": "contract_start_date",
        "end_date": "contract_end_date",
        "renewal_date": "contract_renewal_date",
        "terms": "contract_terms",
    },
    "performance_metrics": {
        "on_time_delivery_rate": "on_time_delivery_rate",
        "quality_score": "quality_score",
        "response_time_hours": "response_time_hours",
    },
}

TOP_SUPPLIER_LIMIT = 5


def flatten_supplier_fields(payload: dict) -> dict:
    """Map nested request blocks onto the flat supplier columns."""
    flat = {}
    for key, value in payload.items():
        columns = BLOCK_COLUMNS.get(key)
        if columns is None:
            flat[key] = value
        elif value:
            flat.update({columns[k]: v for k, v in value.items() if k in columns})
    return flat


class SupplierService:

    def __init__(self, db: Session):
        self._repo = SupplierRepository(db)
        self._inventory_repo = InventoryRepository(db)
        self._order_repo = OrderRepository(db)
        self._bus = get_event_bus()

    def list_suppliers(self, page: int = 1, page_size: int = 10, **filters) -> SupplierListResponse:
        items, total = self._repo.list_paginated(page=page, page_size=page_size, **filters)
        return SupplierListResponse(
            items=items, total=total, page=page, page_size=page_size,
            total_pages=ceil(total / page_size) if total else 0,
        )

    def get_supplier(self, supplier_id: int) -> Supplier:
        supplier = self._repo.get_by_id(supplier_id)
        if not supplier:
            raise EntityNotFoundException("Supplier", supplier_id)
        return supplier

    def create_supplier(self, data: SupplierCreate, actor: User) -> Supplier:
        if self._repo.get_by_code(data.code):
            raise DuplicateEntityException("Supplier", "code", data.code)
        supplier = Supplier(
            **flatten_supplier_fields(data.model_dump()),
            created_by=actor.id,
            updated_by=actor.id,
        )
        result = self._repo.create(supplier)
        logger.info("supplier_created id=%s code=%s", result.id, result.code)
        self._bus.publish(EntityCreatedEvent(entity_type="supplier", entity_id=result.id, user_id=actor.id))
        return result

    def update_supplier(self, supplier_id: int, data: SupplierUpdate, actor: User) -> Supplier:
        supplier = self.get_supplier(supplier_id)
        updates = flatten_supplier_fields(data.model_dump(exclude_unset=True))
        new_code = updates.get("code")
        if new_code and new_code != supplier.code and self._repo.get_by_code(new_code):
            raise DuplicateEntityException("Supplier", "code", new_code)

        old_values = {k: getattr(supplier, k) for k in updates}
        updates["updated_by"] = actor.id
        result = self._repo.update(supplier, updates)
        self._bus.publish(EntityUpdatedEvent(
            entity_type="supplier",
            entity_id=supplier_id,
            user_id=actor.id,
            old_values=old_values,
            new_values=updates,
        ))
        return result

    def update_performance(self, supplier_id: int, data: SupplierPerformanceUpdate, actor: User) -> Supplier:
        supplier = self.get_supplier(supplier_id)
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        old_values = {k: getattr(supplier, k) for k in updates}
        updates["updated_by"] = actor.id
        result = self._repo.update(supplier, updates)
        self._bus.publish(EntityUpdatedEvent(
            entity_type="supplier",
            entity_id=supplier_id,
            user_id=actor.id,
            old_values=old_values,
            new_values=updates,
        ))
        return result

    def delete_supplier(self, supplier_id: int, actor: User) -> None:
        supplier = self.get_supplier(supplier_id)
        inventory_count = self._inventory_repo.count_by_supplier(supplier_id)
        if inventory_count:
            raise ConflictException(
                f"Cannot delete supplier. {inventory_count} inventory items are linked to this supplier.",
                details={"inventory_items": inventory_count},
            )
        order_count = self._order_repo.count_by_supplier(supplier_id)
        if order_count:
            raise ConflictException(
                f"Cannot delete supplier. {order_count} orders reference this supplier.",
                details={"orders": order_count},
            )
        self._repo.delete(supplier)
        logger.info("supplier_deleted id=%s", supplier_id)
        self._bus.publish(EntityDeletedEvent(entity_type="supplier", entity_id=supplier_id, user_id=actor.id))

    def get_products(self, supplier_id: int) -> SupplierProductsResponse:
        supplier = self.get_supplier(supplier_id)
        products = self._inventory_repo.list_by_supplier(supplier_id)
        return SupplierProductsResponse(supplier=supplier, count=len(products), products=products)

    def get_stats(self) -> SupplierStats:
        overview = self._repo.overview()
        categories = Counter(
            category
            for supplier in self._repo.get_all()
            for category in (supplier.categories or [])
        )
        return SupplierStats(
            overview=SupplierStatsOverview(
                total_suppliers=overview["total_suppliers"],
                active_suppliers=overview["active_suppliers"],
                inactive_suppliers=overview["inactive_suppliers"],
                avg_rating=self._round(overview["avg_rating"]),
                avg_on_time_delivery=self._round(overview["avg_on_time_delivery"]),
                avg_quality_score=self._round(overview["avg_quality_score"]),
            ),
            by_category=[
                SupplierCategoryCount(category=category, count=count)
                for category, count in categories.most_common()
            ],
            top_suppliers=self._repo.list_active_by_rating(TOP_SUPPLIER_LIMIT),
        )

    def _round(self, value) -> Optional[Decimal]:
        if value is None:
            return None
        return Decimal(str(value)).quantize(Decimal("0.01"))
