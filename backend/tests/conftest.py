import itertools
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401  registers tables on Base.metadata
from app.config import get_settings
from app.database import Base
from app.main import app
from app.models.order import OrderStatus
from app.repositories import Repositories
from app.repositories.memory import InMemoryMenuRepository, InMemoryOrderRepository, InMemoryRestaurantRepository
from app.repositories import fixtures
from app.schemas.order import LineItem, OrderRecord
from app.utils.timezone_helpers import start_of_day

RESTAURANT_ID = "demo-restaurant"

_ids = itertools.count(1)


def make_order(
    total=100.0,
    created_at=None,
    status=OrderStatus.NEW,
    customer_name="Alice",
    items=None,
    restaurant_id=RESTAURANT_ID,
    **extra,
) -> OrderRecord:
    n = next(_ids)
    return OrderRecord(
        id=str(n),
        restaurant_id=restaurant_id,
        order_id=f"T{n:05d}",
        customer_name=customer_name,
        items=[LineItem(**i) for i in (items or [])],
        total=total,
        status=status,
        created_at=created_at or datetime(2024, 1, 1, 12, 0),
        **extra,
    )


@pytest.fixture
def today_at():
    """Build a timestamp on today's (real) date at the given hour."""
    midnight = start_of_day(datetime.now())

    def _at(hour: int, minute: int = 0, days_ago: int = 0) -> datetime:
        return midnight - timedelta(days=days_ago) + timedelta(hours=hour, minutes=minute)

    return _at


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False)
    engine.dispose()


def memory_repositories(orders=(), with_fixtures_menu=True) -> Repositories:
    return Repositories(
        orders=InMemoryOrderRepository(list(orders)),
        menu=InMemoryMenuRepository(fixtures.demo_menu(RESTAURANT_ID) if with_fixtures_menu else []),
        restaurants=InMemoryRestaurantRepository([fixtures.demo_restaurant(RESTAURANT_ID)]),
        mode="mock",
    )


@pytest.fixture
def make_client():
    """Return a factory producing a TestClient bound to the given repositories."""
    clients = []

    def _make(repositories: Repositories) -> TestClient:
        app.state.repositories = repositories
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)
    app.state.repositories = None
    app.dependency_overrides.pop(get_settings, None)
