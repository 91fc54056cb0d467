"""
Orders Router — Thin Controller (SRP / DIP)

Stock side effects of order creation, cancellation and deletion live in
OrderService; this module only maps HTTP onto it.
"""
from datetime import datetime
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from chainflow.config import settings
from chainflow.database import get_db
from chainflow.models.user import User
from chainflow.schemas.order import (
    OrderCreate,
    OrderUpdate,
    OrderStatusUpdate,
    OrderResponse,
    OrderListResponse,
    OrderStats,
)
from chainflow.schemas.user import MessageResponse
from chainflow.dependencies import get_current_user, require_roles
from chainflow.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])

MANAGER_ROLES = ["admin", "manager"]
ADMIN_ROLES = ["admin"]


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db)


@router.get("", response_model=OrderListResponse)
def list_orders(
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    type: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    supplier_id: Optional[int] = None,
    search: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    sort_by: str = "created_at",
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    service: OrderService = Depends(get_order_service),
    _: User = Depends(get_current_user),
):
    return service.list_orders(
        page=page, page_size=page_size,
        type=type, status=status, priority=priority, supplier_id=supplier_id,
        search=search, start_date=start_date, end_date=end_date,
        sort_by=sort_by, sort_order=sort_order,
    )


@router.get("/stats", response_model=OrderStats)
def order_stats(
    service: OrderService = Depends(get_order_service),
    _: User = Depends(get_current_user),
):
    return service.get_stats()


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: int,
    service: OrderService = Depends(get_order_service),
    _: User = Depends(get_current_user),
):
    return service.get_order(order_id)


@router.post("", response_model=OrderResponse, status_code=201)
def create_order(
    data: OrderCreate,
    service: OrderService = Depends(get_order_service),
    current_user: User = Depends(require_roles(MANAGER_ROLES)),
):
    """Create an order. Sales orders reserve stock immediately."""
    return service.create_order(data, actor=current_user)


@router.put("/{order_id}", response_model=OrderResponse)
def update_order(
    order_id: int,
    data: OrderUpdate,
    service: OrderService = Depends(get_order_service),
    current_user: User = Depends(require_roles(MANAGER_ROLES)),
):
    return service.update_order(order_id, data, actor=current_user)


@router.put("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: int,
    data: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service),
    current_user: User = Depends(require_roles(MANAGER_ROLES)),
):
    """Change status. Cancelling a sales order returns its stock once."""
    return service.set_status(order_id, data, actor=current_user)


@router.delete("/{order_id}", response_model=MessageResponse)
def delete_order(
    order_id: int,
    service: OrderService = Depends(get_order_service),
    current_user: User = Depends(require_roles(ADMIN_ROLES)),
):
    service.delete_order(order_id, actor=current_user)
    return MessageResponse(message="Order deleted successfully")
