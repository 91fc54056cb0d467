from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from chainflow.schemas.supplier import SupplierSummary

ORDER_TYPE_PATTERN = "^(purchase|sales|transfer)$"
ORDER_STATUS_PATTERN = "^(pending|confirmed|processing|shipped|delivered|cancelled|returned)$"
PRIORITY_PATTERN = "^(low|medium|high|urgent)$"
PAYMENT_STATUS_PATTERN = "^(pending|partial|paid|refunded|overdue)$"
PAYMENT_METHOD_PATTERN = "^(credit_card|bank_transfer|cash|check|other)$"
SHIPPING_METHOD_PATTERN = "^(standard|express|overnight|freight|pickup)$"


class CustomerInfo(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None


class OrderLineCreate(BaseModel):
    inventory_id: int
    quantity: int = Field(..., ge=1)
    unit_price: Decimal = Field(..., ge=0)
    discount: Decimal = Field(Decimal("0"), ge=0)
    tax: Decimal = Field(Decimal("0"), ge=0)


class PricingInput(BaseModel):
    discount: Decimal = Field(Decimal("0"), ge=0)
    tax: Decimal = Field(Decimal("0"), ge=0)
    shipping: Decimal = Field(Decimal("0"), ge=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)


class PaymentInfo(BaseModel):
    status: str = Field("pending", pattern=PAYMENT_STATUS_PATTERN)
    method: Optional[str] = Field(None, pattern=PAYMENT_METHOD_PATTERN)
    terms: Optional[str] = None
    due_date: Optional[datetime] = None
    paid_date: Optional[datetime] = None
    transaction_id: Optional[str] = None


class ShippingAddress(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None


class ShippingInfo(BaseModel):
    address: Optional[ShippingAddress] = None
    carrier: Optional[str] = None
    tracking_number: Optional[str] = None
    method: Optional[str] = Field(None, pattern=SHIPPING_METHOD_PATTERN)
    estimated_delivery: Optional[datetime] = None


class OrderDatesInput(BaseModel):
    order_date: Optional[datetime] = None
    required_date: Optional[datetime] = None
    promised_date: Optional[datetime] = None


class OrderCreate(BaseModel):
    type: str = Field(..., pattern=ORDER_TYPE_PATTERN)
    supplier_id: Optional[int] = None
    customer: Optional[CustomerInfo] = None
    items: List[OrderLineCreate] = Field(..., min_length=1)
    pricing: PricingInput = Field(default_factory=PricingInput)
    payment: Optional[PaymentInfo] = None
    shipping: Optional[ShippingInfo] = None
    dates: Optional[OrderDatesInput] = None
    priority: str = Field("medium", pattern=PRIORITY_PATTERN)
    notes: Optional[str] = None
    internal_notes: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class OrderUpdate(BaseModel):
    supplier_id: Optional[int] = None
    customer: Optional[CustomerInfo] = None
    items: Optional[List[OrderLineCreate]] = Field(None, min_length=1)
    pricing: Optional[PricingInput] = None
    payment: Optional[PaymentInfo] = None
    shipping: Optional[ShippingInfo] = None
    dates: Optional[OrderDatesInput] = None
    priority: Optional[str] = Field(None, pattern=PRIORITY_PATTERN)
    notes: Optional[str] = None
    internal_notes: Optional[str] = None
    tags: Optional[List[str]] = None


class OrderStatusUpdate(BaseModel):
    status: str = Field(..., pattern=ORDER_STATUS_PATTERN)
    notes: Optional[str] = Field(None, max_length=1000)


class OrderLineResponse(BaseModel):
    id: int
    inventory_id: int
    sku: str
    name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    discount: Decimal
    tax: Decimal

    class Config:
        from_attributes = True


class PricingView(BaseModel):
    subtotal: Decimal
    discount: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal
    currency: str


class ShippingView(ShippingInfo):
    actual_delivery: Optional[datetime] = None
    shipped_date: Optional[datetime] = None


class OrderDatesView(OrderDatesInput):
    completed_date: Optional[datetime] = None


class OrderHistoryResponse(BaseModel):
    id: int
    action: str
    description: str
    user_id: Optional[int] = None
    user_name: Optional[str] = None
    timestamp: datetime

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    id: int
    order_number: str
    type: str
    supplier_id: Optional[int] = None
    supplier: Optional[SupplierSummary] = None
    customer: CustomerInfo
    items: List[OrderLineResponse]
    pricing: PricingView
    status: str
    payment: PaymentInfo
    shipping: ShippingView
    dates: OrderDatesView
    priority: str
    notes: Optional[str] = None
    internal_notes: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    history: List[OrderHistoryResponse]
    created_by: Optional[int] = None
    updated_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class OrderListResponse(BaseModel):
    items: List[OrderResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class OrderStatsOverview(BaseModel):
    total_orders: int = 0
    total_revenue: Decimal = Decimal("0")
    avg_order_value: Decimal = Decimal("0")
    pending_orders: int = 0
    processing_orders: int = 0
    completed_orders: int = 0
    cancelled_orders: int = 0


class OrderGroupTotal(BaseModel):
    key: str
    count: int
    total_value: Decimal


class OrderTrendPoint(BaseModel):
    day: str
    orders: int
    revenue: Decimal


class OrderStats(BaseModel):
    overview: OrderStatsOverview
    by_type: List[OrderGroupTotal]
    by_status: List[OrderGroupTotal]
    recent_trends: List[OrderTrendPoint]
