"""
Analytics Service — read-only aggregation over inventory, suppliers and orders.
"""
from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from chainflow.core.order_rules import quantize_money
from chainflow.models.order import Order
from chainflow.repositories.inventory_repository import InventoryRepository
from chainflow.repositories.order_repository import OrderRepository
from chainflow.repositories.supplier_repository import SupplierRepository
from chainflow.schemas.analytics import (
    CategoryValue,
    CountRevenue,
    DashboardAnalytics,
    DashboardInventoryMetrics,
    DashboardOrderMetrics,
    DashboardSupplierMetrics,
    FinancialSummary,
    GroupBreakdown,
    InventoryTrends,
    MonthlyFinancials,
    MovingItem,
    OrderAnalytics,
    RecentOrderView,
    SupplierFulfillment,
    SupplierPerformanceAnalytics,
    SupplierRatingView,
    SupplierSpend,
    TimelinePoint,
    YearTotals,
)
from chainflow.utils.clock import utcnow

RECENT_ORDER_LIMIT = 5
TOP_MOVING_LIMIT = 10
TOP_SUPPLIER_LIMIT = 5
PERFORMANCE_LIMIT = 20
TIMELINE_LIMIT = 30


class AnalyticsService:

    def __init__(self, db: Session):
        self._inventory_repo = InventoryRepository(db)
        self._supplier_repo = SupplierRepository(db)
        self._order_repo = OrderRepository(db)

    def get_dashboard(self) -> DashboardAnalytics:
        now = utcnow()
        today = now.replace(hour=0, minute=0, second=0, microsecond=0)
        month_start = today.replace(day=1)

        inventory = self._inventory_repo.overview()
        suppliers = self._supplier_repo.overview()

        return DashboardAnalytics(
            inventory=DashboardInventoryMetrics(
                total_items=inventory["total_items"],
                total_value=quantize_money(inventory["total_value"]),
                low_stock_items=inventory["low_stock_items"],
                out_of_stock_items=inventory["out_of_stock_items"],
            ),
            suppliers=DashboardSupplierMetrics(
                total_suppliers=suppliers["total_suppliers"],
                active_suppliers=suppliers["active_suppliers"],
            ),
            orders=DashboardOrderMetrics(
                total=self._count_revenue(None),
                today=self._count_revenue(today),
                this_month=self._count_revenue(month_start),
                pending=self._order_repo.count_with_status(["pending", "processing"]),
                shipped=self._order_repo.count_with_status(["shipped"], shipped_since=month_start),
            ),
            recent_orders=[
                RecentOrderView(
                    id=order.id,
                    order_number=order.order_number,
                    type=order.type,
                    status=order.status,
                    total=order.total,
                    supplier_name=order.supplier.name if order.supplier else None,
                    created_at=order.created_at,
                )
                for order in self._order_repo.recent(RECENT_ORDER_LIMIT)
            ],
        )

    def get_inventory_trends(self) -> InventoryTrends:
        by_category = [
            CategoryValue(
                category=category,
                total_value=quantize_money(value),
                total_quantity=quantity or 0,
                item_count=count,
            )
            for category, count, value, quantity in self._inventory_repo.by_category()
        ]
        moving = []
        for inventory_id, quantity, value, order_count in self._order_repo.top_moving_items(TOP_MOVING_LIMIT):
            item = self._inventory_repo.get_by_id(inventory_id)
            moving.append(MovingItem(
                inventory_id=inventory_id,
                sku=item.sku if item else None,
                name=item.name if item else None,
                total_quantity=quantity or 0,
                total_value=quantize_money(value),
                order_count=order_count,
            ))
        return InventoryTrends(by_category=by_category, top_moving_items=moving)

    def get_order_analytics(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> OrderAnalytics:
        def breakdown(column):
            return [
                GroupBreakdown(
                    key=key,
                    count=count,
                    total_value=quantize_money(total),
                    avg_value=quantize_money(avg),
                )
                for key, count, total, avg in self._order_repo.grouped_totals(column, start_date, end_date)
            ]

        top_suppliers = []
        for supplier_id, count, spent in self._order_repo.top_suppliers_by_spend(
            start_date, end_date, TOP_SUPPLIER_LIMIT
        ):
            supplier = self._supplier_repo.get_by_id(supplier_id)
            top_suppliers.append(SupplierSpend(
                supplier_id=supplier_id,
                name=supplier.name if supplier else None,
                code=supplier.code if supplier else None,
                order_count=count,
                total_spent=quantize_money(spent),
            ))

        return OrderAnalytics(
            by_type=breakdown(Order.type),
            by_status=breakdown(Order.status),
            by_priority=breakdown(Order.priority),
            timeline=[
                TimelinePoint(day=str(day), count=count, revenue=quantize_money(revenue))
                for day, count, revenue in self._order_repo.daily_totals(start_date, end_date, TIMELINE_LIMIT)
            ],
            top_suppliers=top_suppliers,
        )

    def get_supplier_performance(self) -> SupplierPerformanceAnalytics:
        performance = [
            SupplierRatingView(
                id=s.id,
                code=s.code,
                name=s.name,
                rating=s.rating,
                on_time_delivery_rate=s.on_time_delivery_rate,
                quality_score=s.quality_score,
                response_time_hours=s.response_time_hours,
                categories=s.categories or [],
            )
            for s in self._supplier_repo.list_active_by_rating(PERFORMANCE_LIMIT)
        ]

        grouped = defaultdict(list)
        for order in self._order_repo.list_purchase_orders_with_supplier():
            grouped[order.supplier_id].append(order)

        fulfillment = []
        for supplier_id, orders in grouped.items():
            supplier = orders[0].supplier
            delivered = [o for o in orders if o.status == "delivered"]
            cancelled = sum(1 for o in orders if o.status == "cancelled")
            durations = [
                (o.actual_delivery - o.order_date).total_seconds() / 86400
                for o in delivered
                if o.actual_delivery and o.order_date
            ]
            fulfillment.append(SupplierFulfillment(
                supplier_id=supplier_id,
                name=supplier.name,
                code=supplier.code,
                total_orders=len(orders),
                delivered_orders=len(delivered),
                cancelled_orders=cancelled,
                fulfillment_rate=round(len(delivered) / len(orders) * 100, 2),
                avg_delivery_days=round(sum(durations) / len(durations), 2) if durations else None,
            ))
        fulfillment.sort(key=lambda f: f.fulfillment_rate, reverse=True)

        return SupplierPerformanceAnalytics(performance=performance, fulfillment=fulfillment)

    def get_financial_summary(self, year: Optional[int] = None) -> FinancialSummary:
        """Monthly revenue (sales) against expenses (purchases) for one calendar year."""
        year = year or utcnow().year
        start = datetime(year, 1, 1)
        end = datetime(year, 12, 31, 23, 59, 59)

        months = defaultdict(lambda: {"revenue": Decimal("0"), "expenses": Decimal("0"), "order_count": 0})
        for order in self._order_repo.list_in_range(start, end):
            bucket = months[order.order_date.month]
            bucket["order_count"] += 1
            if order.type == "sales":
                bucket["revenue"] += order.total
            elif order.type == "purchase":
                bucket["expenses"] += order.total

        monthly = [
            MonthlyFinancials(
                month=month,
                revenue=quantize_money(values["revenue"]),
                expenses=quantize_money(values["expenses"]),
                profit=quantize_money(values["revenue"] - values["expenses"]),
                order_count=values["order_count"],
            )
            for month, values in sorted(months.items())
        ]
        totals = YearTotals(
            total_revenue=quantize_money(sum((m.revenue for m in monthly), Decimal("0"))),
            total_expenses=quantize_money(sum((m.expenses for m in monthly), Decimal("0"))),
            total_profit=quantize_money(sum((m.profit for m in monthly), Decimal("0"))),
            total_orders=sum(m.order_count for m in monthly),
        )
        return FinancialSummary(year=year, monthly=monthly, year_totals=totals)

    def _count_revenue(self, since: Optional[datetime]) -> CountRevenue:
        count, revenue = self._order_repo.totals_since(since)
        return CountRevenue(count=count, revenue=quantize_money(revenue))
