"""Schema migrations.

Alembic's env drives the async engine with ``asyncio.run``, so
``run_migrations`` must be called outside a running event loop (startup
hands it to a worker thread).
"""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config as AlembicConfig

logger = logging.getLogger(__name__)

# Repository root, where alembic.ini lives
PROJECT_ROOT = Path(__file__).resolve().parents[3]


def get_alembic_config(database_url: str) -> AlembicConfig:
    config = AlembicConfig(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    config.set_main_option("sqlalchemy.url", database_url)
    config.attributes["configure_logger"] = False
    return config


def run_migrations(database_url: str) -> None:
    """Upgrade the database to the latest revision."""
    command.upgrade(get_alembic_config(database_url), "head")
    logger.info("Database migrations complete")
