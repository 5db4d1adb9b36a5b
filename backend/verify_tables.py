#!/usr/bin/env python3
"""Check that the configured store is reachable and has the orders table"""
import sys

from app.config import settings
from app.database import create_store_engine, probe_table


def main() -> int:
    if not settings.DATABASE_URL:
        print("DATABASE_URL is not set; the API will serve in-memory fixtures")
        return 1

    print(f"Checking {settings.PROBE_TABLE.upper()} table...")
    engine = create_store_engine(settings.DATABASE_URL)
    try:
        error = probe_table(engine, settings.PROBE_TABLE)
    finally:
        engine.dispose()

    if error:
        print("RESULT: MISSING / ERROR")
        print(f"MSG: {error}")
        return 1
    print("RESULT: EXISTS")
    return 0


if __name__ == "__main__":
    sys.exit(main())
