"""
Shared pytest fixtures: in-memory database, API client and seed records.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("ENABLE_REQUEST_LOGGING", "false")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from chainflow.core.stock_rules import recompute_derived
from chainflow.database import Base, get_db
from chainflow.main import app
from chainflow.models.inventory import InventoryItem
from chainflow.models.supplier import Supplier
from chainflow.models.user import User
from chainflow.utils.events import configure_event_bus
from chainflow.utils.security import create_access_token, get_password_hash

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    configure_event_bus()
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(db):
    """Factory bound to the test engine, for code that opens its own sessions."""
    return TestSessionLocal


@pytest.fixture(scope="function")
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _make_user(db, email: str, role: str, name: str = "Test User", password: str = "Password123") -> User:
    user = User(
        name=name,
        email=email,
        hashed_password=get_password_hash(password),
        company="ChainFlow Industries",
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def admin_user(db) -> User:
    return _make_user(db, "admin@chainflow.com", "admin", name="Aarav Sharma")


@pytest.fixture
def manager_user(db) -> User:
    return _make_user(db, "manager@chainflow.com", "manager", name="Neha Verma")


@pytest.fixture
def viewer_user(db) -> User:
    return _make_user(db, "viewer@chainflow.com", "viewer", name="Vic Viewer")


@pytest.fixture
def admin_headers(admin_user) -> dict:
    return _headers(admin_user)


@pytest.fixture
def manager_headers(manager_user) -> dict:
    return _headers(manager_user)


@pytest.fixture
def viewer_headers(viewer_user) -> dict:
    return _headers(viewer_user)


@pytest.fixture
def supplier(db, admin_user) -> Supplier:
    s = Supplier(
        code="ACME",
        name="Acme Components",
        contact_name="Road Runner",
        contact_email="sales@acme.example",
        contact_phone="+1 555 0100",
        street="1 Desert Rd",
        city="Phoenix",
        state="AZ",
        country="USA",
        postal_code="85001",
        categories=["components"],
        rating=Decimal("4.5"),
        created_by=admin_user.id,
    )
    db.add(s)
    db.commit()
    db.refresh(s)
    return s


@pytest.fixture
def inventory(db, admin_user, supplier) -> InventoryItem:
    """WGT-001: 150 units on hand, reorder point 50, unit cost 2.50."""
    item = InventoryItem(
        sku="WGT-001",
        name="Widget",
        description="Standard widget",
        category="components",
        quantity=150,
        reorder_point=50,
        reorder_quantity=100,
        unit_cost=Decimal("2.50"),
        supplier_id=supplier.id,
        created_by=admin_user.id,
    )
    recompute_derived(item)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@pytest.fixture
def gadget(db, admin_user) -> InventoryItem:
    item = InventoryItem(
        sku="GDG-001",
        name="Gadget",
        description="",
        category="finished_goods",
        quantity=20,
        reorder_point=5,
        unit_cost=Decimal("20.00"),
        created_by=admin_user.id,
    )
    recompute_derived(item)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item
