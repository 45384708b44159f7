# =============================================================================
# 🗄️ database.py
# -----------------------------------------------------------------------------
# SQLAlchemy engine and session factory for the storefront API.
# Supports MySQL (PyMySQL, production) and SQLite (tests, local development).
# =============================================================================

from __future__ import annotations

from typing import Any

from sqlalchemy import DateTime, create_engine
from sqlalchemy.dialects import mysql
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

import config


class Base(DeclarativeBase):
    """Base class for all ORM models."""


# MySQL DATETIME keeps whole seconds unless a precision is given
Timestamp = DateTime(timezone=True).with_variant(mysql.DATETIME(fsp=6), "mysql")


def create_db_engine(
    url: str | None = None,
    pool_size: int | None = None,
    pool_timeout: float | None = None,
    echo: bool | None = None,
) -> Engine:
    """
    Builds the engine that owns the connection pool.

    The pool is bounded: no overflow connections, and a caller waiting longer
    than ``pool_timeout`` seconds for a connection gets a TimeoutError.
    """
    url = url or config.DATABASE_URL
    kwargs: dict[str, Any] = {
        "echo": config.DB_ECHO if echo is None else echo,
        "future": True,
    }

    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # an in-memory database only lives as long as its single connection
        if url in {"sqlite://", "sqlite:///:memory:"}:
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)

    # pool_pre_ping = detects dropped connections
    # pool_recycle = keeps MySQL connections below wait_timeout
    kwargs.update(
        pool_size=pool_size or config.DB_POOL_SIZE,
        max_overflow=0,
        pool_timeout=config.DB_POOL_TIMEOUT if pool_timeout is None else pool_timeout,
        pool_pre_ping=True,
        pool_recycle=280,
    )
    return create_engine(url, **kwargs)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
