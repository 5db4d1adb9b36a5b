from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.exceptions import DuplicateOrder, MenuItemNotFound, OrderNotFound, StoreError
from app.models.restaurant import Restaurant
from app.models.order import Order, OrderStatus
from app.repositories.memory import InMemoryMenuRepository, InMemoryOrderRepository, InMemoryRestaurantRepository
from app.repositories.sql import SqlMenuRepository, SqlOrderRepository, SqlRestaurantRepository, order_records
from app.schemas.menu import MenuItemCreate
from app.schemas.order import OrderCreate
from app.repositories import fixtures
from app.utils.timezone_helpers import end_of_day, local_now, start_of_day, to_aware, to_local
from tests.conftest import RESTAURANT_ID, make_order

OTHER_RESTAURANT = "other-restaurant"


@pytest.fixture
def seeded_session_factory(session_factory):
    with session_factory() as db:
        db.add(Restaurant(id=RESTAURANT_ID, name="Demo Kitchen", gstin="27AAPFU0939F1ZV"))
        db.add(Restaurant(id=OTHER_RESTAURANT, name="Elsewhere"))
        db.add_all([
            Order(restaurant_id=RESTAURANT_ID, order_id="ORD001", customer_name="Alice", total=100,
                  items=[{"name": "Pizza", "quantity": 2, "price": 50}],
                  status="new", created_at=datetime(2024, 1, 1, 10, 0)),
            Order(restaurant_id=RESTAURANT_ID, order_id="ORD002", customer_name="Bob", total=50,
                  items=[], status="ready", created_at=datetime(2024, 1, 1, 14, 0)),
            Order(restaurant_id=RESTAURANT_ID, order_id="ORD003", customer_name="Alice", total=75,
                  items=[], status="completed", created_at=datetime(2023, 12, 31, 9, 0)),
            Order(restaurant_id=OTHER_RESTAURANT, order_id="ORD900", customer_name="Zed", total=999,
                  items=[], status="new", created_at=datetime(2024, 1, 1, 11, 0)),
        ])
        db.commit()
    return session_factory


@pytest.fixture(params=["memory", "sql"])
def order_repo(request, seeded_session_factory):
    if request.param == "sql":
        return SqlOrderRepository(seeded_session_factory)
    return InMemoryOrderRepository([
        make_order(total=100, customer_name="Alice", created_at=datetime(2024, 1, 1, 10, 0),
                   items=[{"name": "Pizza", "quantity": 2, "price": 50}]),
        make_order(total=50, customer_name="Bob", status=OrderStatus.READY,
                   created_at=datetime(2024, 1, 1, 14, 0)),
        make_order(total=75, customer_name="Alice", status=OrderStatus.COMPLETED,
                   created_at=datetime(2023, 12, 31, 9, 0)),
        make_order(total=999, customer_name="Zed", restaurant_id=OTHER_RESTAURANT,
                   created_at=datetime(2024, 1, 1, 11, 0)),
    ])


@pytest.fixture(params=["memory", "sql"])
def menu_repo(request, seeded_session_factory):
    if request.param == "sql":
        repo = SqlMenuRepository(seeded_session_factory)
        for item in fixtures.demo_menu(RESTAURANT_ID)[:4]:
            repo.create(RESTAURANT_ID, MenuItemCreate(**item.model_dump(exclude={"id", "restaurant_id"})))
        return repo
    return InMemoryMenuRepository(fixtures.demo_menu(RESTAURANT_ID)[:4])


# ─────────────────────────────────────────────────
# orders
# ─────────────────────────────────────────────────


def test_list_between_is_scoped_and_ordered(order_repo):
    orders = order_repo.list_between(RESTAURANT_ID, datetime(2024, 1, 1), datetime(2024, 1, 1, 23, 59, 59))
    assert [o.total for o in orders] == [100, 50]
    assert all(o.restaurant_id == RESTAURANT_ID for o in orders)
    assert orders[0].items[0].name == "Pizza"
    assert orders[0].items[0].quantity == 2


def test_list_recent_newest_first_with_status_filter(order_repo):
    recent = order_repo.list_recent(RESTAURANT_ID, limit=10)
    assert [o.total for o in recent] == [50, 100, 75]
    assert [o.status for o in order_repo.list_recent(RESTAURANT_ID, 10, status="ready")] == [OrderStatus.READY]
    assert len(order_repo.list_recent(RESTAURANT_ID, limit=1)) == 1


def test_create_update_delete_round(order_repo):
    created = order_repo.create(RESTAURANT_ID, OrderCreate(
        order_id="ORD555", customer_name="Kabir", total=220,
        items=[{"name": "Chicken 65", "quantity": 1, "price": 220}], verification_code="K1K1",
    ))
    assert created.status == OrderStatus.NEW
    assert order_repo.get(RESTAURANT_ID, "ORD555").customer_name == "Kabir"

    updated = order_repo.update(RESTAURANT_ID, "ORD555", {"status": "preparing", "prep_time": 15})
    assert updated.status == OrderStatus.PREPARING
    assert updated.prep_time == 15

    order_repo.delete(RESTAURANT_ID, "ORD555")
    with pytest.raises(OrderNotFound):
        order_repo.get(RESTAURANT_ID, "ORD555")


def test_create_rejects_duplicate_code(order_repo):
    order_repo.create(RESTAURANT_ID, OrderCreate(order_id="ORD777", total=1))
    with pytest.raises(DuplicateOrder):
        order_repo.create(RESTAURANT_ID, OrderCreate(order_id="ORD777", total=1))


def test_other_restaurants_orders_are_not_visible(order_repo):
    code = order_repo.list_recent(OTHER_RESTAURANT, 1)[0].order_id
    with pytest.raises(OrderNotFound):
        order_repo.get(RESTAURANT_ID, code)
    with pytest.raises(OrderNotFound):
        order_repo.delete(RESTAURANT_ID, code)


# ─────────────────────────────────────────────────
# menu
# ─────────────────────────────────────────────────


def test_menu_listing_and_categories(menu_repo):
    items = menu_repo.list_items(RESTAURANT_ID)
    assert [i.category for i in items] == ["Mains", "Starters", "Starters", "Starters"]
    assert menu_repo.list_categories(RESTAURANT_ID) == ["Mains", "Starters"]
    assert menu_repo.list_items(OTHER_RESTAURANT) == []


def test_menu_stock_toggle_is_persisted(menu_repo):
    item = menu_repo.list_items(RESTAURANT_ID)[0]
    menu_repo.set_stock(RESTAURANT_ID, item.id, False)
    reread = next(i for i in menu_repo.list_items(RESTAURANT_ID) if i.id == item.id)
    assert reread.in_stock is False


def test_menu_add_and_delete(menu_repo):
    item = menu_repo.create(RESTAURANT_ID, MenuItemCreate(name="Masala Chai", category="Beverages", price=40))
    assert "Beverages" in menu_repo.list_categories(RESTAURANT_ID)
    menu_repo.delete(RESTAURANT_ID, item.id)
    with pytest.raises(MenuItemNotFound):
        menu_repo.delete(RESTAURANT_ID, item.id)


# ─────────────────────────────────────────────────
# restaurants
# ─────────────────────────────────────────────────


@pytest.mark.parametrize("kind", ["memory", "sql"])
def test_restaurant_online_toggle(kind, seeded_session_factory):
    if kind == "sql":
        repo = SqlRestaurantRepository(seeded_session_factory)
    else:
        repo = InMemoryRestaurantRepository([fixtures.demo_restaurant(RESTAURANT_ID)])

    assert repo.get(RESTAURANT_ID).is_online is False
    assert repo.set_online(RESTAURANT_ID, True).is_online is True
    assert repo.get(RESTAURANT_ID).is_online is True
    assert repo.get("missing") is None
    assert repo.set_online("missing", True) is None


# ─────────────────────────────────────────────────
# store failures
# ─────────────────────────────────────────────────


def test_sql_errors_surface_as_store_error():
    engine = create_engine("sqlite:///:memory:", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    repo = SqlOrderRepository(sessionmaker(bind=engine))  # no tables created
    with pytest.raises(StoreError, match="Failed to fetch orders"):
        repo.list_between(RESTAURANT_ID, datetime(2024, 1, 1), datetime(2024, 1, 2))
    engine.dispose()


# ─────────────────────────────────────────────────
# untidy rows and timestamps
# ─────────────────────────────────────────────────


def test_sql_listing_skips_rows_with_unknown_status(seeded_session_factory):
    with seeded_session_factory() as db:
        db.add(Order(restaurant_id=RESTAURANT_ID, order_id="ORD404", total=10, items=[],
                     status="accepted", created_at=datetime(2024, 1, 1, 12, 0)))
        db.commit()
    repo = SqlOrderRepository(seeded_session_factory)

    orders = repo.list_between(RESTAURANT_ID, datetime(2024, 1, 1), datetime(2024, 1, 1, 23, 59, 59))
    assert [o.order_id for o in orders] == ["ORD001", "ORD002"]
    with pytest.raises(StoreError, match="Failed to fetch order"):
        repo.get(RESTAURANT_ID, "ORD404")


def test_order_records_default_missing_numbers():
    row = SimpleNamespace(
        id="7", restaurant_id=RESTAURANT_ID, order_id="ORD007", customer_name=None,
        items="not a list", total=None, status="new", verification_code=None,
        prep_time=None, rejection_reason=None, created_at=datetime(2024, 1, 1, 9, 0), accepted_at=None,
    )
    [record] = order_records([row])
    assert record.total == 0
    assert record.items == []


def test_sql_create_is_found_in_todays_window(session_factory):
    repo = SqlOrderRepository(session_factory)
    repo.create(RESTAURANT_ID, OrderCreate(order_id="ORD808", total=25))

    now = local_now()
    found = repo.list_between(RESTAURANT_ID, start_of_day(now), end_of_day(now))
    assert [o.order_id for o in found] == ["ORD808"]
    assert abs(to_local(found[0].created_at) - now) < timedelta(minutes=1)


def test_timestamps_are_written_with_the_host_offset():
    naive = datetime(2024, 1, 1, 10, 0)
    aware = to_aware(naive)
    assert aware.tzinfo is not None
    assert to_local(aware) == naive
    already = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
    assert to_aware(already) is already
