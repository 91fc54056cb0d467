from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
from decimal import Decimal


class CountRevenue(BaseModel):
    count: int = 0
    revenue: Decimal = Decimal("0")


class DashboardInventoryMetrics(BaseModel):
    total_items: int = 0
    total_value: Decimal = Decimal("0")
    low_stock_items: int = 0
    out_of_stock_items: int = 0


class DashboardSupplierMetrics(BaseModel):
    total_suppliers: int = 0
    active_suppliers: int = 0


class DashboardOrderMetrics(BaseModel):
    total: CountRevenue
    today: CountRevenue
    this_month: CountRevenue
    pending: int = 0
    shipped: int = 0


class RecentOrderView(BaseModel):
    id: int
    order_number: str
    type: str
    status: str
    total: Decimal
    supplier_name: Optional[str] = None
    created_at: datetime


class DashboardAnalytics(BaseModel):
    inventory: DashboardInventoryMetrics
    suppliers: DashboardSupplierMetrics
    orders: DashboardOrderMetrics
    recent_orders: List[RecentOrderView]


class CategoryValue(BaseModel):
    category: str
    total_value: Decimal
    total_quantity: int
    item_count: int


class MovingItem(BaseModel):
    inventory_id: int
    sku: Optional[str] = None
    name: Optional[str] = None
    total_quantity: int
    total_value: Decimal
    order_count: int


class InventoryTrends(BaseModel):
    by_category: List[CategoryValue]
    top_moving_items: List[MovingItem]


class GroupBreakdown(BaseModel):
    key: str
    count: int
    total_value: Decimal
    avg_value: Decimal


class TimelinePoint(BaseModel):
    day: str
    count: int
    revenue: Decimal


class SupplierSpend(BaseModel):
    supplier_id: int
    name: Optional[str] = None
    code: Optional[str] = None
    order_count: int
    total_spent: Decimal


class OrderAnalytics(BaseModel):
    by_type: List[GroupBreakdown]
    by_status: List[GroupBreakdown]
    by_priority: List[GroupBreakdown]
    timeline: List[TimelinePoint]
    top_suppliers: List[SupplierSpend]


class SupplierRatingView(BaseModel):
    id: int
    code: str
    name: str
    rating: Decimal
    on_time_delivery_rate: Decimal
    quality_score: Decimal
    response_time_hours: Decimal
    categories: List[str]


class SupplierFulfillment(BaseModel):
    supplier_id: int
    name: str
    code: str
    total_orders: int
    delivered_orders: int
    cancelled_orders: int
    fulfillment_rate: float
    avg_delivery_days: Optional[float] = None


class SupplierPerformanceAnalytics(BaseModel):
    performance: List[SupplierRatingView]
    fulfillment: List[SupplierFulfillment]


class MonthlyFinancials(BaseModel):
    month: int
    revenue: Decimal
    expenses: Decimal
    profit: Decimal
    order_count: int


class YearTotals(BaseModel):
    total_revenue: Decimal
    total_expenses: Decimal
    total_profit: Decimal
    total_orders: int


class FinancialSummary(BaseModel):
    year: int
    monthly: List[MonthlyFinancials]
    year_totals: YearTotals
