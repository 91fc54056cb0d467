"""
Analytics Router — read-only dashboards
"""
from datetime import datetime
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from chainflow.database import get_db
from chainflow.models.user import User
from chainflow.schemas.analytics import (
    DashboardAnalytics,
    InventoryTrends,
    OrderAnalytics,
    SupplierPerformanceAnalytics,
    FinancialSummary,
)
from chainflow.dependencies import get_current_user
from chainflow.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["Analytics"])


def get_analytics_service(db: Session = Depends(get_db)) -> AnalyticsService:
    return AnalyticsService(db)


@router.get("/dashboard", response_model=DashboardAnalytics)
def dashboard(
    service: AnalyticsService = Depends(get_analytics_service),
    _: User = Depends(get_current_user),
):
    return service.get_dashboard()


@router.get("/inventory-trends", response_model=InventoryTrends)
def inventory_trends(
    service: AnalyticsService = Depends(get_analytics_service),
    _: User = Depends(get_current_user),
):
    return service.get_inventory_trends()


@router.get("/order-analytics", response_model=OrderAnalytics)
def order_analytics(
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    service: AnalyticsService = Depends(get_analytics_service),
    _: User = Depends(get_current_user),
):
    return service.get_order_analytics(start_date=start_date, end_date=end_date)


@router.get("/supplier-performance", response_model=SupplierPerformanceAnalytics)
def supplier_performance(
    service: AnalyticsService = Depends(get_analytics_service),
    _: User = Depends(get_current_user),
):
    return service.get_supplier_performance()


@router.get("/financial-summary", response_model=FinancialSummary)
def financial_summary(
    year: Optional[int] = Query(None, ge=2000, le=2100),
    service: AnalyticsService = Depends(get_analytics_service),
    _: User = Depends(get_current_user),
):
    return service.get_financial_summary(year=year)
