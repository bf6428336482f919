from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.config import settings
from storefront.db import get_db, init_db
from storefront.main import app
from storefront.models.product import Product

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture()
def engine():
    # one shared in-memory database per test
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    init_db(bind=eng)
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture()
def db_session(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture()
def make_product(db_session):
    """Insert a product directly; each call is one minute newer than the previous one."""
    counter = {"n": 0}

    def _make(name, price=10.0, category=None, description=None, is_active=True, stock_quantity=5):
        counter["n"] += 1
        p = Product(
            name=name,
            description=description,
            price=price,
            category=category,
            stock_quantity=stock_quantity,
            is_active=is_active,
            created_at=BASE_TIME + timedelta(minutes=counter["n"]),
        )
        db_session.add(p)
        db_session.commit()
        db_session.refresh(p)
        return p

    return _make


@pytest.fixture()
def seeded(make_product):
    """The sample catalogue plus one inactive product that must stay hidden."""
    return {
        "earbuds": make_product(
            "Wireless Earbuds", 89.99, "Electronics", "Compact earbuds with high-fidelity sound", stock_quantity=30
        ),
        "mat": make_product("Yoga Mat", 39.99, "Sports", "Eco-friendly non-slip yoga mat", stock_quantity=50),
        "bottle": make_product(
            "Stainless Steel Water Bottle", 24.99, "Sports", "Keeps drinks cold for 24 hours", stock_quantity=80
        ),
        "hidden": make_product("Floor Mat", 5.0, "Sports", "Retired mat", is_active=False),
    }


def make_token(role="admin", expires_in=timedelta(hours=1), secret=None, metadata_key="user_metadata"):
    claims = {
        "sub": "user-123",
        "aud": settings.JWT_AUDIENCE,
        "exp": datetime.now(timezone.utc) + expires_in,
        metadata_key: {"role": role},
    }
    return jwt.encode(claims, secret or settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


@pytest.fixture()
def admin_headers():
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture()
def customer_headers():
    return {"Authorization": f"Bearer {make_token(role='customer')}"}
