from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime, date
from decimal import Decimal

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$"
CATEGORY_PATTERN = "^(raw_materials|components|finished_goods|packaging|supplies|services|other)$"


class ContactPerson(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: str = Field(..., pattern=EMAIL_PATTERN)
    phone: str = Field(..., min_length=1, max_length=50)
    position: Optional[str] = None

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.strip().lower()


class CompanyDetails(BaseModel):
    registration_number: Optional[str] = None
    tax_id: Optional[str] = None
    website: Optional[str] = None


class SupplierAddress(BaseModel):
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    postal_code: str = Field(..., min_length=1)


class ContractDetails(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    renewal_date: Optional[date] = None
    terms: Optional[str] = None


class PerformanceMetrics(BaseModel):
    on_time_delivery_rate: Decimal = Field(Decimal("100"), ge=0, le=100)
    quality_score: Decimal = Field(Decimal("100"), ge=0, le=100)
    response_time_hours: Decimal = Field(Decimal("24"), ge=0)


class SupplierBase(BaseModel):
    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=200)
    contact_person: ContactPerson
    company_details: CompanyDetails = Field(default_factory=CompanyDetails)
    address: SupplierAddress
    categories: List[str] = Field(default_factory=list)
    payment_terms: str = Field("net_30", pattern="^(net_30|net_60|net_90|cash_on_delivery|prepayment|custom)$")
    currency: str = Field("USD", min_length=3, max_length=3)
    rating: Decimal = Field(Decimal("3"), ge=1, le=5)
    status: str = Field("active", pattern="^(active|inactive|pending|blacklisted)$")
    contract: ContractDetails = Field(default_factory=ContractDetails)
    notes: Optional[str] = None

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("categories")
    @classmethod
    def validate_categories(cls, v: List[str]) -> List[str]:
        allowed = {"raw_materials", "components", "finished_goods", "packaging", "supplies", "services", "other"}
        invalid = [c for c in v if c not in allowed]
        if invalid:
            raise ValueError(f"Invalid supplier categories: {', '.join(invalid)}")
        return v


class SupplierCreate(SupplierBase):
    performance_metrics: PerformanceMetrics = Field(default_factory=PerformanceMetrics)


class SupplierUpdate(BaseModel):
    code: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    contact_person: Optional[ContactPerson] = None
    company_details: Optional[CompanyDetails] = None
    address: Optional[SupplierAddress] = None
    categories: Optional[List[str]] = None
    payment_terms: Optional[str] = Field(None, pattern="^(net_30|net_60|net_90|cash_on_delivery|prepayment|custom)$")
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    rating: Optional[Decimal] = Field(None, ge=1, le=5)
    status: Optional[str] = Field(None, pattern="^(active|inactive|pending|blacklisted)$")
    contract: Optional[ContractDetails] = None
    notes: Optional[str] = None

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().upper() if v else v


class SupplierPerformanceUpdate(BaseModel):
    on_time_delivery_rate: Optional[Decimal] = Field(None, ge=0, le=100)
    quality_score: Optional[Decimal] = Field(None, ge=0, le=100)
    response_time_hours: Optional[Decimal] = Field(None, ge=0)
    rating: Optional[Decimal] = Field(None, ge=1, le=5)


class SupplierSummary(BaseModel):
    id: int
    code: str
    name: str

    class Config:
        from_attributes = True


class SupplierResponse(SupplierBase):
    id: int
    performance_metrics: PerformanceMetrics
    created_by: Optional[int] = None
    updated_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SupplierListResponse(BaseModel):
    items: List[SupplierResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class SupplierProductView(BaseModel):
    id: int
    sku: str
    name: str
    category: str
    quantity: int
    unit_cost: Decimal
    status: str

    class Config:
        from_attributes = True


class SupplierProductsResponse(BaseModel):
    supplier: SupplierSummary
    count: int
    products: List[SupplierProductView]


class SupplierCategoryCount(BaseModel):
    category: str
    count: int


class SupplierStatsOverview(BaseModel):
    total_suppliers: int = 0
    active_suppliers: int = 0
    inactive_suppliers: int = 0
    avg_rating: Optional[Decimal] = None
    avg_on_time_delivery: Optional[Decimal] = None
    avg_quality_score: Optional[Decimal] = None


class SupplierTopView(BaseModel):
    id: int
    code: str
    name: str
    rating: Decimal
    performance_metrics: PerformanceMetrics

    class Config:
        from_attributes = True


class SupplierStats(BaseModel):
    overview: SupplierStatsOverview
    by_category: List[SupplierCategoryCount]
    top_suppliers: List[SupplierTopView]
