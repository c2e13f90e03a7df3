#!/usr/bin/env python3
"""
Create the users and todos tables if they do not exist.
The app never creates or alters schema itself; run this once per database.
  python scripts/init_db.py
  DATABASE_URL=postgresql+asyncpg://... python scripts/init_db.py
"""

import asyncio
import logging
import sys
from pathlib import Path

# Project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from todo_app.config import get_settings
from todo_app.core.logging import setup_logging
from todo_app.db.base import Base
from todo_app.db.models import Todo, User  # noqa: F401 - ensure models are registered
from todo_app.db.session import engine

logger = logging.getLogger("init_db")


async def create_schema() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()


def main():
    setup_logging(get_settings().log_level)
    logger.info("Creating tables: %s", ", ".join(Base.metadata.tables))
    asyncio.run(create_schema())
    logger.info("Done")


if __name__ == "__main__":
    main()
