from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Numeric,
    Date,
    DateTime,
    ForeignKey,
    JSON,
    CheckConstraint,
    Index,
    func,
)
from chainflow.database import Base


SUPPLIER_STATUSES = ("active", "inactive", "pending", "blacklisted")
SUPPLIER_CATEGORIES = ("raw_materials", "components", "finished_goods", "packaging", "supplies", "services", "other")
PAYMENT_TERMS = ("net_30", "net_60", "net_90", "cash_on_delivery", "prepayment", "custom")


class Supplier(Base):
    __tablename__ = "suppliers"
    __table_args__ = (
        CheckConstraint(
            "status IN ('active', 'inactive', 'pending', 'blacklisted')",
            name="ck_suppliers_status",
        ),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_suppliers_rating_range"),
        CheckConstraint(
            "on_time_delivery_rate >= 0 AND on_time_delivery_rate <= 100",
            name="ck_suppliers_on_time_rate_range",
        ),
        CheckConstraint("quality_score >= 0 AND quality_score <= 100", name="ck_suppliers_quality_range"),
        Index("ix_suppliers_status_rating", "status", "rating"),
    )

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), nullable=False, unique=True, index=True)
    name = Column(String(200), nullable=False, index=True)

    contact_name = Column(String(120), nullable=False)
    contact_email = Column(String(255), nullable=False)
    contact_phone = Column(String(50), nullable=False)
    contact_position = Column(String(120), nullable=True)

    registration_number = Column(String(100), nullable=True)
    tax_id = Column(String(100), nullable=True)
    website = Column(String(255), nullable=True)

    street = Column(String(255), nullable=False)
    city = Column(String(120), nullable=False)
    state = Column(String(120), nullable=False)
    country = Column(String(120), nullable=False)
    postal_code = Column(String(30), nullable=False)

    categories = Column(JSON, nullable=False, default=list)
    payment_terms = Column(String(30), nullable=False, default="net_30")
    currency = Column(String(3), nullable=False, default="USD")
    rating = Column(Numeric(3, 2), nullable=False, default=3)
    on_time_delivery_rate = Column(Numeric(5, 2), nullable=False, default=100)
    quality_score = Column(Numeric(5, 2), nullable=False, default=100)
    response_time_hours = Column(Numeric(8, 2), nullable=False, default=24)
    status = Column(String(20), nullable=False, default="active")

    contract_start_date = Column(Date, nullable=True)
    contract_end_date = Column(Date, nullable=True)
    contract_renewal_date = Column(Date, nullable=True)
    contract_terms = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    @property
    def contact_person(self) -> dict:
        return {
            "name": self.contact_name,
            "email": self.contact_email,
            "phone": self.contact_phone,
            "position": self.contact_position,
        }

    @property
    def company_details(self) -> dict:
        return {
            "registration_number": self.registration_number,
            "tax_id": self.tax_id,
            "website": self.website,
        }

    @property
    def address(self) -> dict:
        return {
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "country": self.country,
            "postal_code": self.postal_code,
        }

    @property
    def performance_metrics(self) -> dict:
        return {
            "on_time_delivery_rate": self.on_time_delivery_rate,
            "quality_score": self.quality_score,
            "response_time_hours": self.response_time_hours,
        }

    @property
    def contract(self) -> dict:
        return {
            "start_date": self.contract_start_date,
            "end_date": self.contract_end_date,
            "renewal_date": self.contract_renewal_date,
            "terms": self.contract_terms,
        }
