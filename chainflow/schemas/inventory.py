from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime, date
from decimal import Decimal

from chainflow.schemas.supplier import SupplierSummary

CATEGORY_PATTERN = "^(raw_materials|components|finished_goods|packaging|supplies|other)$"
STATUS_PATTERN = "^(in_stock|low_stock|out_of_stock|discontinued)$"


class WarehouseInfo(BaseModel):
    location: str = "Main Warehouse"
    zone: Optional[str] = None
    bin: Optional[str] = None


class InventoryBase(BaseModel):
    sku: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    category: str = Field(..., pattern=CATEGORY_PATTERN)
    quantity: int = Field(0, ge=0)
    unit: str = "units"
    reorder_point: int = Field(10, ge=0)
    reorder_quantity: int = Field(50, ge=0)
    unit_cost: Decimal = Field(..., ge=0)
    supplier_id: Optional[int] = None
    warehouse: WarehouseInfo = Field(default_factory=WarehouseInfo)
    expiry_date: Optional[date] = None
    batch_number: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("sku")
    @classmethod
    def normalize_sku(cls, v: str) -> str:
        return v.strip().upper()


class InventoryCreate(InventoryBase):
    pass


class InventoryUpdate(BaseModel):
    sku: Optional[str] = Field(None, min_length=1, max_length=64)
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = Field(None, pattern=CATEGORY_PATTERN)
    quantity: Optional[int] = Field(None, ge=0)
    unit: Optional[str] = None
    reorder_point: Optional[int] = Field(None, ge=0)
    reorder_quantity: Optional[int] = Field(None, ge=0)
    unit_cost: Optional[Decimal] = Field(None, ge=0)
    supplier_id: Optional[int] = None
    warehouse: Optional[WarehouseInfo] = None
    expiry_date: Optional[date] = None
    batch_number: Optional[str] = None
    notes: Optional[str] = None
    # Only "discontinued" sticks; any other value re-enables derivation
    status: Optional[str] = Field(None, pattern=STATUS_PATTERN)

    @field_validator("sku")
    @classmethod
    def normalize_sku(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().upper() if v else v


class InventoryAdjustRequest(BaseModel):
    adjustment: int
    reason: str = Field(..., min_length=1, max_length=500)

    @field_validator("adjustment")
    @classmethod
    def non_zero(cls, v: int) -> int:
        if v == 0:
            raise ValueError("Adjustment must be non-zero")
        return v


class InventoryResponse(InventoryBase):
    id: int
    total_value: Decimal
    status: str
    last_restocked: Optional[datetime] = None
    supplier: Optional[SupplierSummary] = None
    created_by: Optional[int] = None
    updated_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class InventoryListResponse(BaseModel):
    items: List[InventoryResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class InventoryAlertsResponse(BaseModel):
    count: int
    items: List[InventoryResponse]


class InventoryStatsOverview(BaseModel):
    total_items: int = 0
    total_value: Decimal = Decimal("0")
    total_quantity: int = 0
    avg_unit_cost: Decimal = Decimal("0")
    low_stock_items: int = 0
    out_of_stock_items: int = 0


class InventoryCategoryBreakdown(BaseModel):
    category: str
    count: int
    total_value: Decimal
    total_quantity: int


class InventoryStats(BaseModel):
    overview: InventoryStatsOverview
    by_category: List[InventoryCategoryBreakdown]
