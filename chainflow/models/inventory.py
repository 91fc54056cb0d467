from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Numeric,
    DateTime,
    Date,
    ForeignKey,
    CheckConstraint,
    Index,
    func,
)
from sqlalchemy.orm import relationship

from chainflow.database import Base


class InventoryItem(Base):
    __tablename__ = "inventory_items"
    __table_args__ = (
        CheckConstraint(
            "status IN ('in_stock', 'low_stock', 'out_of_stock', 'discontinued')",
            name="ck_inventory_items_status",
        ),
        CheckConstraint(
            "category IN ('raw_materials', 'components', 'finished_goods', 'packaging', 'supplies', 'other')",
            name="ck_inventory_items_category",
        ),
        CheckConstraint("quantity >= 0", name="ck_inventory_items_quantity_non_negative"),
        CheckConstraint("reorder_point >= 0", name="ck_inventory_items_reorder_point_non_negative"),
        CheckConstraint("reorder_quantity >= 0", name="ck_inventory_items_reorder_quantity_non_negative"),
        CheckConstraint("unit_cost >= 0", name="ck_inventory_items_unit_cost_non_negative"),
        Index("ix_inventory_items_status_category", "status", "category"),
    )

    id = Column(Integer, primary_key=True, index=True)
    sku = Column(String(64), nullable=False, unique=True, index=True)
    name = Column(String(200), nullable=False, index=True)
    description = Column(Text, default="")
    category = Column(String(30), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    unit = Column(String(30), nullable=False, default="units")
    reorder_point = Column(Integer, nullable=False, default=10)
    reorder_quantity = Column(Integer, nullable=False, default=50)
    unit_cost = Column(Numeric(14, 2), nullable=False)
    total_value = Column(Numeric(16, 2), nullable=False, default=0)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=True, index=True)
    warehouse_location = Column(String(120), nullable=False, default="Main Warehouse")
    warehouse_zone = Column(String(60), nullable=True)
    warehouse_bin = Column(String(60), nullable=True)
    status = Column(String(20), nullable=False, default="in_stock")
    last_restocked = Column(DateTime, default=func.now())
    expiry_date = Column(Date, nullable=True)
    batch_number = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)
    version = Column(Integer, nullable=False, default=1)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    supplier = relationship("Supplier", lazy="joined")

    # Optimistic concurrency: a write against a stale row raises StaleDataError
    __mapper_args__ = {"version_id_col": version}

    @property
    def warehouse(self) -> dict:
        return {
            "location": self.warehouse_location,
            "zone": self.warehouse_zone,
            "bin": self.warehouse_bin,
        }
