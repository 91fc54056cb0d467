"""
Inventory Router — Thin Controller (SRP / DIP)
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from chainflow.config import settings
from chainflow.database import get_db
from chainflow.models.user import User
from chainflow.schemas.inventory import (
    InventoryCreate,
    InventoryUpdate,
    InventoryAdjustRequest,
    InventoryResponse,
    InventoryListResponse,
    InventoryAlertsResponse,
    InventoryStats,
)
from chainflow.schemas.user import MessageResponse
from chainflow.dependencies import get_current_user, require_roles
from chainflow.services.inventory_service import InventoryService

router = APIRouter(prefix="/inventory", tags=["Inventory"])

MANAGER_ROLES = ["admin", "manager"]
ADMIN_ROLES = ["admin"]


def get_inventory_service(db: Session = Depends(get_db)) -> InventoryService:
    return InventoryService(db)


@router.get("", response_model=InventoryListResponse)
def list_inventory(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    category: Optional[str] = None,
    status: Optional[str] = None,
    supplier_id: Optional[int] = None,
    search: Optional[str] = None,
    sort_by: str = "created_at",
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    service: InventoryService = Depends(get_inventory_service),
    _: User = Depends(get_current_user),
):
    return service.list_inventory(
        page=page, page_size=page_size,
        category=category, status=status, supplier_id=supplier_id, search=search,
        sort_by=sort_by, sort_order=sort_order,
    )


@router.get("/stats", response_model=InventoryStats)
def inventory_stats(
    service: InventoryService = Depends(get_inventory_service),
    _: User = Depends(get_current_user),
):
    return service.get_stats()


@router.get("/low-stock/alerts", response_model=InventoryAlertsResponse)
def low_stock_alerts(
    service: InventoryService = Depends(get_inventory_service),
    _: User = Depends(get_current_user),
):
    return service.get_low_stock_alerts()


@router.get("/{inventory_id}", response_model=InventoryResponse)
def get_inventory(
    inventory_id: int,
    service: InventoryService = Depends(get_inventory_service),
    _: User = Depends(get_current_user),
):
    return service.get_inventory(inventory_id)


@router.post("", response_model=InventoryResponse, status_code=201)
def create_inventory(
    data: InventoryCreate,
    service: InventoryService = Depends(get_inventory_service),
    current_user: User = Depends(require_roles(MANAGER_ROLES)),
):
    return service.create_inventory(data, actor=current_user)


@router.put("/{inventory_id}", response_model=InventoryResponse)
def update_inventory(
    inventory_id: int,
    data: InventoryUpdate,
    service: InventoryService = Depends(get_inventory_service),
    current_user: User = Depends(require_roles(MANAGER_ROLES)),
):
    return service.update_inventory(inventory_id, data, actor=current_user)


@router.put("/{inventory_id}/adjust", response_model=InventoryResponse)
def adjust_inventory(
    inventory_id: int,
    data: InventoryAdjustRequest,
    service: InventoryService = Depends(get_inventory_service),
    current_user: User = Depends(require_roles(MANAGER_ROLES)),
):
    """Apply a signed quantity delta; rejected when stock would go negative."""
    return service.adjust_quantity(inventory_id, data, actor=current_user)


@router.delete("/{inventory_id}", response_model=MessageResponse)
def delete_inventory(
    inventory_id: int,
    service: InventoryService = Depends(get_inventory_service),
    current_user: User = Depends(require_roles(ADMIN_ROLES)),
):
    service.delete_inventory(inventory_id, actor=current_user)
    return MessageResponse(message="Inventory item deleted successfully")
