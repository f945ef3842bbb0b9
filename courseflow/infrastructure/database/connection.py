# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database engine and unit-of-work sessions.

One engine per process, opened by init_database() at startup. Each grading
request runs in one session_scope(): the membership checks, the gradebook
read-modify-write and the final commit all share that session, and any
SQLAlchemy failure surfaces as DatabaseError.

Example:
    await init_database(settings)
    async with course_services(settings) as services:
        await services.grading.record_submission(actor, course_id, assignment_id)
"""

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

if TYPE_CHECKING:
    from courseflow.core.config.settings import Settings

_engine: Optional[AsyncEngine] = None
_sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None


class DatabaseError(Exception):
    """Raised when a database read or write fails.

    Attributes:
        message: Human-readable error description.
        original_error: The underlying SQLAlchemy error, if any.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


async def init_database(settings: "Settings") -> None:
    """Open the process-wide engine for the course database.

    Sessions do not expire on commit, so aggregates refreshed after a
    write stay readable once the session scope ends.

    Raises:
        DatabaseError: If the engine cannot be created.
    """
    global _engine, _sessionmaker

    try:
        _engine = create_async_engine(
            settings.database.url,
            pool_size=settings.database.pool_size,
            max_overflow=settings.database.max_overflow,
            pool_pre_ping=True,
            echo=settings.debug and not settings.is_production,
        )
    except SQLAlchemyError as e:
        raise DatabaseError("Failed to create database engine", e) from e

    _sessionmaker = async_sessionmaker(_engine, expire_on_commit=False, autoflush=False)


async def close_database() -> None:
    """Dispose of the engine and its pooled connections."""
    global _engine, _sessionmaker

    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _sessionmaker = None


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Run a block in one session, committing on success.

    The session is rolled back when the block raises; the block's own
    exception is re-raised unchanged unless it is a SQLAlchemy error.

    Raises:
        DatabaseError: If init_database() has not run, or on a SQLAlchemy
            failure inside the block or at commit.
    """
    if _sessionmaker is None:
        raise DatabaseError("Database not initialized. Call init_database() first.")

    async with _sessionmaker() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            raise DatabaseError("Database operation failed", e) from e
        except BaseException:
            await session.rollback()
            raise
