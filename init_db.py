"""Create the links table and its indexes, then report how many links exist."""

import argparse
import asyncio
import logging
import sys

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from config import DATABASE_URL_ASYNC
from database import build_engine, init_models
from models import Link

logger = logging.getLogger("init_db")


async def init_database(database_url: str) -> int:
    engine = build_engine(database_url)
    try:
        await init_models(engine)
        logger.info("Table %s created or already exists", Link.__tablename__)
        async with engine.connect() as conn:
            total = await conn.scalar(select(func.count()).select_from(Link))
        logger.info("Current links in database: %d", total)
        return total
    finally:
        await engine.dispose()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Initialize the TinyLink database")
    parser.add_argument("--database-url", default=DATABASE_URL_ASYNC,
                        help="SQLAlchemy async database URL")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    try:
        asyncio.run(init_database(args.database_url))
    except (SQLAlchemyError, OSError) as e:
        logger.error("Error initializing database: %s", e)
        return 1
    logger.info("Database initialization complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
