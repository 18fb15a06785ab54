"""
Shared fixtures: in-memory store, fake clock, services and an API client
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from coffee_pos.config import Settings
from coffee_pos.database import create_db_engine, create_session_factory, init_db
from coffee_pos.main import create_app
from coffee_pos.repositories.document_store import SqlDocumentStore
from coffee_pos.schemas.auth import StaffRegister
from coffee_pos.schemas.order import AddonSnapshot, CustomerDetails, OrderItem
from coffee_pos.services import (
    CustomerOrderService,
    CustomerTokenService,
    MenuService,
    OrderService,
    PricingEngine,
    StaffAuthService
)
from coffee_pos.utils import utcnow


class FakeClock:
    """Clock that only moves when told to"""
    
    def __init__(self, now: datetime):
        self.now = now
    
    def __call__(self) -> datetime:
        return self.now
    
    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL="sqlite://",
        ENABLE_METRICS=False,
        PUBLIC_ORIGIN="https://buzz.example",
        SECRET_KEY="test-secret",
        DB_CONNECT_RETRIES=1,
        LOG_LEVEL="WARNING",
        _env_file=None
    )


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 19, 2, 0, tzinfo=timezone.utc))


@pytest.fixture
def db(settings):
    engine = create_db_engine(settings.DATABASE_URL)
    init_db(engine, settings)
    session = create_session_factory(engine)()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def store(db):
    return SqlDocumentStore(db)


@pytest.fixture
def pricing():
    return PricingEngine(Decimal("10"))


@pytest.fixture
def order_service(store, pricing, clock):
    return OrderService(store, pricing, clock)


@pytest.fixture
def token_service(store, clock):
    return CustomerTokenService(store, "https://buzz.example", 48, clock)


@pytest.fixture
def menu_service(store, clock):
    return MenuService(store, clock)


@pytest.fixture
def customer_order_service(token_service, menu_service, order_service):
    return CustomerOrderService(token_service, menu_service, order_service, "https://buzz.example")


@pytest.fixture
def customer():
    return CustomerDetails(
        customer_name="Maria Santos",
        customer_phone="0917 555 0101",
        customer_address="12 Mabini St, Makati"
    )


@pytest.fixture
def latte_item():
    return OrderItem(
        product_id="latte",
        product_name="Spanish Latte",
        quantity=2,
        unit_price=Decimal("120"),
        size="large",
        addons=[AddonSnapshot(name="Extra Shot", price=Decimal("20"))]
    )


@pytest.fixture
def api_clock():
    return FakeClock(utcnow())


@pytest.fixture
def app(settings, api_clock):
    return create_app(settings, clock=api_clock)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def staff_headers(app, client):
    """Register a staff user and return bearer headers for them"""
    db = app.state.session_factory()
    try:
        auth = StaffAuthService(SqlDocumentStore(db), "test-secret")
        auth.register(StaffRegister(email="barista@buzzcoffee.ph", password="espresso-123", display_name="Barista"))
    finally:
        db.close()
    
    response = client.post("/auth/sign-in", json={"email": "barista@buzzcoffee.ph", "password": "espresso-123"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}
