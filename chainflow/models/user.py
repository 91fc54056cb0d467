from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String, func
from chainflow.database import Base


USER_ROLES = ("admin", "manager", "supplier", "viewer")


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "role IN ('admin', 'manager', 'supplier', 'viewer')",
            name="ck_users_role",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False, default="User")
    email = Column(String(255), nullable=False, unique=True, index=True)
    hashed_password = Column(String(255), nullable=False)
    company = Column(String(200), nullable=False, default="Default Company")
    role = Column(String(20), nullable=False, default="viewer")
    department = Column(String(120), default="")
    phone = Column(String(50), default="")
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
