from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Numeric,
    DateTime,
    ForeignKey,
    JSON,
    CheckConstraint,
    Index,
    func,
)
from sqlalchemy.orm import relationship

from chainflow.database import Base


class Order(Base):
    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint("type IN ('purchase', 'sales', 'transfer')", name="ck_orders_type"),
        CheckConstraint(
            "status IN ('pending', 'confirmed', 'processing', 'shipped', 'delivered', 'cancelled', 'returned')",
            name="ck_orders_status",
        ),
        CheckConstraint("priority IN ('low', 'medium', 'high', 'urgent')", name="ck_orders_priority"),
        CheckConstraint(
            "payment_status IN ('pending', 'partial', 'paid', 'refunded', 'overdue')",
            name="ck_orders_payment_status",
        ),
        CheckConstraint("subtotal >= 0", name="ck_orders_subtotal_non_negative"),
        CheckConstraint("total >= 0", name="ck_orders_total_non_negative"),
        Index("ix_orders_type_status", "type", "status"),
        Index("ix_orders_order_date", "order_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String(20), nullable=False, unique=True, index=True)
    type = Column(String(20), nullable=False)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=True, index=True)

    customer_name = Column(String(200), nullable=True)
    customer_email = Column(String(255), nullable=True)
    customer_phone = Column(String(50), nullable=True)
    customer_company = Column(String(200), nullable=True)

    subtotal = Column(Numeric(14, 2), nullable=False, default=0)
    discount = Column(Numeric(14, 2), nullable=False, default=0)
    tax = Column(Numeric(14, 2), nullable=False, default=0)
    shipping_cost = Column(Numeric(14, 2), nullable=False, default=0)
    total = Column(Numeric(14, 2), nullable=False, default=0)
    currency = Column(String(3), nullable=False, default="USD")

    status = Column(String(20), nullable=False, default="pending")
    priority = Column(String(10), nullable=False, default="medium")

    payment_status = Column(String(20), nullable=False, default="pending")
    payment_method = Column(String(20), nullable=True)
    payment_terms = Column(String(100), nullable=True)
    payment_due_date = Column(DateTime, nullable=True)
    paid_date = Column(DateTime, nullable=True)
    transaction_id = Column(String(100), nullable=True)

    shipping_address = Column(JSON, nullable=True)
    carrier = Column(String(100), nullable=True)
    tracking_number = Column(String(100), nullable=True)
    shipping_method = Column(String(20), nullable=True)
    estimated_delivery = Column(DateTime, nullable=True)
    actual_delivery = Column(DateTime, nullable=True)
    shipped_date = Column(DateTime, nullable=True)

    order_date = Column(DateTime, default=func.now(), nullable=False)
    required_date = Column(DateTime, nullable=True)
    promised_date = Column(DateTime, nullable=True)
    completed_date = Column(DateTime, nullable=True)

    notes = Column(Text, nullable=True)
    internal_notes = Column(Text, nullable=True)
    tags = Column(JSON, nullable=False, default=list)

    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    supplier = relationship("Supplier", lazy="joined")
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
    )
    history = relationship(
        "OrderHistory",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderHistory.id",
    )

    @property
    def customer(self) -> dict:
        return {
            "name": self.customer_name,
            "email": self.customer_email,
            "phone": self.customer_phone,
            "company": self.customer_company,
        }

    @property
    def pricing(self) -> dict:
        return {
            "subtotal": self.subtotal,
            "discount": self.discount,
            "tax": self.tax,
            "shipping": self.shipping_cost,
            "total": self.total,
            "currency": self.currency,
        }

    @property
    def payment(self) -> dict:
        return {
            "status": self.payment_status,
            "method": self.payment_method,
            "terms": self.payment_terms,
            "due_date": self.payment_due_date,
            "paid_date": self.paid_date,
            "transaction_id": self.transaction_id,
        }

    @property
    def shipping(self) -> dict:
        return {
            "address": self.shipping_address,
            "carrier": self.carrier,
            "tracking_number": self.tracking_number,
            "method": self.shipping_method,
            "estimated_delivery": self.estimated_delivery,
            "actual_delivery": self.actual_delivery,
            "shipped_date": self.shipped_date,
        }

    @property
    def dates(self) -> dict:
        return {
            "order_date": self.order_date,
            "required_date": self.required_date,
            "promised_date": self.promised_date,
            "completed_date": self.completed_date,
        }


class OrderItem(Base):
    __tablename__ = "order_items"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_order_items_quantity_min_1"),
        CheckConstraint("unit_price >= 0", name="ck_order_items_unit_price_non_negative"),
        CheckConstraint("total_price >= 0", name="ck_order_items_total_price_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    inventory_id = Column(Integer, ForeignKey("inventory_items.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    # Snapshots keep the line readable after the inventory record changes
    sku = Column(String(64), nullable=False)
    name = Column(String(200), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(14, 2), nullable=False)
    total_price = Column(Numeric(14, 2), nullable=False)
    discount = Column(Numeric(14, 2), nullable=False, default=0)
    tax = Column(Numeric(14, 2), nullable=False, default=0)

    order = relationship("Order", back_populates="items")


class OrderHistory(Base):
    __tablename__ = "order_history"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    action = Column(String(30), nullable=False)
    description = Column(Text, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    timestamp = Column(DateTime, default=func.now(), nullable=False)

    order = relationship("Order", back_populates="history")
    user = relationship("User", lazy="joined")

    @property
    def user_name(self):
        return self.user.name if self.user else None


class OrderSequence(Base):
    """Named monotonic counter backing order numbers."""

    __tablename__ = "order_sequences"

    name = Column(String(30), primary_key=True)
    last_value = Column(Integer, nullable=False, default=0)
    version = Column(Integer, nullable=False, default=1)

    __mapper_args__ = {"version_id_col": version}
