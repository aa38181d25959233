"""
Database initialization and bootstrapping.
"""

from practiceflow.db.base import Base
from practiceflow.db import session as db_session
from practiceflow.core.logging import get_logger

# Registers every model with Base.metadata
import practiceflow.models  # noqa: F401

logger = get_logger(__name__)


async def create_tables() -> None:
    """
    Create all database tables that do not exist yet.
    Enabled with DATABASE_CREATE_TABLES for local and test databases.
    """
    if db_session.engine is None:
        db_session.create_engine()

    async with db_session.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables initialized", extra={"tables": sorted(Base.metadata.tables)})
