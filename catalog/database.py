"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the library catalog.

Session Management Pattern
==========================
Pages are assembled from several independent queries that run concurrently
(see services/aggregate.py). A SQLAlchemy Session is not safe to share
between threads, so the catalog uses "session per operation" instead of
"session per request": the persistence gateway (services/repository.py)
opens a short-lived session from SessionLocal for every call and closes it
before returning.

Because records outlive the session that loaded them, sessions are created
with expire_on_commit=False and relationships needed by a page are loaded
eagerly with selectinload().
"""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from catalog.config import get_settings

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.

    SQLite connections are bound to the thread that opened them unless
    check_same_thread is disabled; the thread pool used for concurrent
    queries needs it off.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    return create_engine(
        database_url,
        connect_args=connect_args,
        pool_pre_ping=True,  # Verify connections are alive before using
        echo=echo,
    )


engine = build_engine(settings.database_url, echo=settings.db_echo)


# =============================================================================
# Session Factory
# =============================================================================
def build_session_factory(bind: Engine) -> sessionmaker:
    """Session factory shared by the gateway and the seed script."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=bind,
    )


SessionLocal = build_session_factory(engine)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses Base.metadata to discover the catalog tables.
    """
    pass


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables(bind: Engine = engine) -> None:
    """
    Create all database tables.

    WARNING: In production, use Alembic migrations instead!
    """
    Base.metadata.create_all(bind=bind)


def drop_tables(bind: Engine = engine) -> None:
    """
    Drop all database tables.

    DANGER: This deletes all data! Only use in development and tests.
    """
    Base.metadata.drop_all(bind=bind)
