"""
Database engine, session factory and store probe
"""
import logging
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_store_engine(database_url: str) -> Engine:
    """Create an engine for the hosted relational store."""
    return create_engine(database_url, pool_pre_ping=True)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


def probe_table(engine: Engine, table_name: str) -> Optional[str]:
    """
    Check that the store answers and the given table exists.

    Returns None when the probe succeeds, or the error message otherwise.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text(f"SELECT 1 FROM {table_name} LIMIT 1"))
    except SQLAlchemyError as exc:
        logger.debug("Probe against %s failed: %s", table_name, exc)
        return str(exc)
    return None
