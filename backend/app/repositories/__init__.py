"""
Data source selection.

The app serves either the hosted relational store or in-memory demo fixtures.
The choice is made once at startup and handed to request handlers as a
Repositories bundle.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine

from app.config import Settings
from app.database import create_store_engine, make_session_factory, probe_table
from app.exceptions import StoreError
from app.repositories.base import MenuRepository, OrderRepository, RestaurantRepository

logger = logging.getLogger(__name__)

MODE_MOCK = "mock"
MODE_DATABASE = "database"


@dataclass
class Repositories:
    orders: OrderRepository
    menu: MenuRepository
    restaurants: RestaurantRepository
    mode: str
    engine: Optional[Engine] = None

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()


def mock_repositories(settings: Settings) -> Repositories:
    from app.repositories.memory import seeded_repositories

    orders, menu, restaurants = seeded_repositories(settings.DEFAULT_RESTAURANT_ID)
    return Repositories(orders=orders, menu=menu, restaurants=restaurants, mode=MODE_MOCK)


def sql_repositories(engine: Engine) -> Repositories:
    from app.repositories.sql import SqlMenuRepository, SqlOrderRepository, SqlRestaurantRepository

    session_factory = make_session_factory(engine)
    return Repositories(
        orders=SqlOrderRepository(session_factory),
        menu=SqlMenuRepository(session_factory),
        restaurants=SqlRestaurantRepository(session_factory),
        mode=MODE_DATABASE,
        engine=engine,
    )


def build_repositories(settings: Settings) -> Repositories:
    """Pick the data source from DATA_SOURCE, credentials and a probe of the orders table."""
    if settings.DATA_SOURCE == MODE_MOCK:
        logger.info("DATA_SOURCE=mock, serving in-memory fixtures")
        return mock_repositories(settings)

    if not settings.DATABASE_URL:
        if settings.DATA_SOURCE == MODE_DATABASE:
            raise StoreError("DATA_SOURCE=database but DATABASE_URL is not set")
        logger.info("No DATABASE_URL configured, serving in-memory fixtures")
        return mock_repositories(settings)

    engine = create_store_engine(settings.DATABASE_URL)
    error = probe_table(engine, settings.PROBE_TABLE)
    if error is None:
        logger.info("Connected to store, %s table reachable", settings.PROBE_TABLE)
        return sql_repositories(engine)

    engine.dispose()
    if settings.DATA_SOURCE == MODE_DATABASE:
        raise StoreError(f"Store probe failed: {error}")
    logger.warning("Store connection failed, falling back to in-memory fixtures")
    return mock_repositories(settings)
