"""
Database connection and session management.

Engines and session factories are built from an ``AppConfig`` at startup
and handed to the Unit of Work explicitly; nothing here is a module global.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
import logging

from config import AppConfig

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str, application_name: str = "inkpress-admin") -> Engine:
    """Create an engine with backend-specific settings."""
    if database_url.startswith("sqlite"):
        # In-memory SQLite must share one connection across threads/sessions
        return create_engine(
            database_url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=False
        )

    return create_engine(
        database_url,
        # Verify pooled connections before handing them out
        pool_pre_ping=True,
        # Set application name for connection tracking
        connect_args={"application_name": application_name},
        echo=False  # Set to True for SQL logging
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to ``engine``."""
    return sessionmaker(bind=engine, expire_on_commit=False)


def engine_from_config(config: AppConfig) -> Engine:
    return create_db_engine(config.database_url, config.application_name)


def create_tables(engine: Engine):
    """Create all tables defined in the ORM models."""
    from db.models.models import Base
    try:
        Base.metadata.create_all(engine)
        logger.info("All tables created successfully")
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
