"""
One-shot migration runner: creates the products and orders tables.

    python migrate.py
"""

import logging
import sys

from models import Base

logger = logging.getLogger(__name__)


def run_migrations(engine) -> None:
    """ creates every table of the models metadata, existing tables are left alone """
    Base.metadata.create_all(bind=engine)
    logger.info("Tables ready: %s", ", ".join(Base.metadata.tables))


def main() -> int:
    from database import engine

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    try:
        logger.info("Running migrations...")
        run_migrations(engine)
        logger.info("Migrations completed successfully")
        return 0
    except Exception:
        logger.exception("Migration failed")
        return 1
    finally:
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
