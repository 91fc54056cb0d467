"""
Suppliers Router — Thin Controller (SRP / DIP)
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from chainflow.config import settings
from chainflow.database import get_db
from chainflow.models.user import User
from chainflow.schemas.supplier import (
    SupplierCreate,
    SupplierUpdate,
    SupplierPerformanceUpdate,
    SupplierResponse,
    SupplierListResponse,
    SupplierProductsResponse,
    SupplierStats,
)
from chainflow.schemas.user import MessageResponse
from chainflow.dependencies import get_current_user, require_roles
from chainflow.services.supplier_service import SupplierService

router = APIRouter(prefix="/suppliers", tags=["Suppliers"])

MANAGER_ROLES = ["admin", "manager"]
ADMIN_ROLES = ["admin"]


def get_supplier_service(db: Session = Depends(get_db)) -> SupplierService:
    return SupplierService(db)


@router.get("", response_model=SupplierListResponse)
def list_suppliers(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    status: Optional[str] = None,
    category: Optional[str] = None,
    search: Optional[str] = None,
    sort_by: str = "created_at",
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    service: SupplierService = Depends(get_supplier_service),
    _: User = Depends(get_current_user),
):
    return service.list_suppliers(
        page=page, page_size=page_size,
        status=status, category=category, search=search,
        sort_by=sort_by, sort_order=sort_order,
    )


@router.get("/stats", response_model=SupplierStats)
def supplier_stats(
    service: SupplierService = Depends(get_supplier_service),
    _: User = Depends(get_current_user),
):
    return service.get_stats()


@router.get("/{supplier_id}", response_model=SupplierResponse)
def get_supplier(
    supplier_id: int,
    service: SupplierService = Depends(get_supplier_service),
    _: User = Depends(get_current_user),
):
    return service.get_supplier(supplier_id)


@router.get("/{supplier_id}/products", response_model=SupplierProductsResponse)
def supplier_products(
    supplier_id: int,
    service: SupplierService = Depends(get_supplier_service),
    _: User = Depends(get_current_user),
):
    return service.get_products(supplier_id)


@router.post("", response_model=SupplierResponse, status_code=201)
def create_supplier(
    data: SupplierCreate,
    service: SupplierService = Depends(get_supplier_service),
    current_user: User = Depends(require_roles(MANAGER_ROLES)),
):
    return service.create_supplier(data, actor=current_user)


@router.put("/{supplier_id}", response_model=SupplierResponse)
def update_supplier(
    supplier_id: int,
    data: SupplierUpdate,
    service: SupplierService = Depends(get_supplier_service),
    current_user: User = Depends(require_roles(MANAGER_ROLES)),
):
    return service.update_supplier(supplier_id, data, actor=current_user)


@router.put("/{supplier_id}/performance", response_model=SupplierResponse)
def update_supplier_performance(
    supplier_id: int,
    data: SupplierPerformanceUpdate,
    service: SupplierService = Depends(get_supplier_service),
    current_user: User = Depends(require_roles(MANAGER_ROLES)),
):
    return service.update_performance(supplier_id, data, actor=current_user)


@router.delete("/{supplier_id}", response_model=MessageResponse)
def delete_supplier(
    supplier_id: int,
    service: SupplierService = Depends(get_supplier_service),
    current_user: User = Depends(require_roles(ADMIN_ROLES)),
):
    """Blocked while inventory items or orders still reference the supplier."""
    service.delete_supplier(supplier_id, actor=current_user)
    return MessageResponse(message="Supplier deleted successfully")
