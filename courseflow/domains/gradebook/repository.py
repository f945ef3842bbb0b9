# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Gradebook aggregate stores.

A store holds at most one gradebook per (course_id, student_id). Insert
enforces that key and raises GradebookConflictError when it is taken.
Save is an unconditional overwrite of the whole aggregate; there is no
version check.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from courseflow.core.exceptions import GradebookConflictError, GradebookStoreError
from courseflow.infrastructure.database.connection import DatabaseError
from courseflow.infrastructure.database.models.base import new_id
from courseflow.infrastructure.database.models.gradebook import GradebookRecord
from courseflow.models.gradebook import GradeItem, GradeTotal, Gradebook
from courseflow.utils.datetime import ensure_utc, utc_now

logger = logging.getLogger(__name__)


class GradebookRepository(ABC):
    """Persistence port for gradebook aggregates."""

    @abstractmethod
    async def get(self, course_id: str, student_id: str) -> Gradebook | None:
        """Get the gradebook for a key, or None if none exists."""

    @abstractmethod
    async def insert(self, gradebook: Gradebook) -> Gradebook:
        """Persist a new gradebook and return it with its identity.

        Raises:
            GradebookConflictError: If a gradebook already exists for the key.
        """

    @abstractmethod
    async def save(self, gradebook: Gradebook) -> Gradebook:
        """Overwrite an existing gradebook and return the stored state.

        Raises:
            GradebookStoreError: If the gradebook was never inserted.
        """

    @abstractmethod
    async def list_for_course(self, course_id: str) -> list[Gradebook]:
        """List existing gradebooks of a course."""


class SqlGradebookRepository(GradebookRepository):
    """Gradebook store backed by the ``gradebooks`` table.

    The unique constraint on (course_id, student_id) turns a duplicate
    insert into an IntegrityError, reported as GradebookConflictError.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get(self, course_id: str, student_id: str) -> Gradebook | None:
        record = await self._get_record(course_id, student_id)
        return self._to_model(record) if record else None

    async def insert(self, gradebook: Gradebook) -> Gradebook:
        now = utc_now()
        record = GradebookRecord(
            id=new_id(),
            course_id=gradebook.course_id,
            student_id=gradebook.student_id,
            items=[item.model_dump(mode="json") for item in gradebook.items],
            total_earned=gradebook.total.earned,
            total_possible=gradebook.total.possible,
            total_percent=gradebook.total.percent,
            version=1,
            created_at=now,
            updated_at=now,
        )

        self.db.add(record)
        try:
            await self.db.commit()
            await self.db.refresh(record)
        except IntegrityError as e:
            await self.db.rollback()
            raise GradebookConflictError(
                f"Gradebook already exists for student {gradebook.student_id} "
                f"in course {gradebook.course_id}"
            ) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DatabaseError("Failed to insert gradebook", e) from e

        return self._to_model(record)

    async def save(self, gradebook: Gradebook) -> Gradebook:
        record = await self._get_record(gradebook.course_id, gradebook.student_id)
        if record is None:
            raise GradebookStoreError(
                f"Gradebook for student {gradebook.student_id} in course "
                f"{gradebook.course_id} does not exist"
            )

        record.items = [item.model_dump(mode="json") for item in gradebook.items]
        record.total_earned = gradebook.total.earned
        record.total_possible = gradebook.total.possible
        record.total_percent = gradebook.total.percent
        record.version = record.version + 1
        record.updated_at = utc_now()

        try:
            await self.db.commit()
            await self.db.refresh(record)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DatabaseError("Failed to save gradebook", e) from e

        return self._to_model(record)

    async def list_for_course(self, course_id: str) -> list[Gradebook]:
        query = (
            select(GradebookRecord)
            .where(GradebookRecord.course_id == course_id)
            .order_by(GradebookRecord.student_id)
        )
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise DatabaseError("Failed to list gradebooks", e) from e
        return [self._to_model(record) for record in result.scalars().all()]

    async def _get_record(self, course_id: str, student_id: str) -> GradebookRecord | None:
        """Get gradebook row for a key.

        Args:
            course_id: Course identifier.
            student_id: Student identifier.

        Returns:
            GradebookRecord if found, None otherwise.

        Raises:
            DatabaseError: If the query fails.
        """
        query = select(GradebookRecord).where(
            GradebookRecord.course_id == course_id,
            GradebookRecord.student_id == student_id,
        )
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise DatabaseError("Failed to load gradebook", e) from e
        return result.scalar_one_or_none()

    def _to_model(self, record: GradebookRecord) -> Gradebook:
        """Convert a table row to a gradebook aggregate."""
        return Gradebook(
            id=record.id,
            course_id=record.course_id,
            student_id=record.student_id,
            items=[GradeItem.model_validate(item) for item in record.items or []],
            total=GradeTotal(
                earned=record.total_earned,
                possible=record.total_possible,
                percent=record.total_percent,
            ),
            updated_at=ensure_utc(record.updated_at),
            version=record.version,
        )


class InMemoryGradebookRepository(GradebookRepository):
    """Gradebook store held in a dict, with document-store semantics.

    Every read and write copies the aggregate, so callers never share
    state with the store or with each other. Each operation yields to the
    event loop once before touching the data, which lets concurrent
    callers interleave the way they would against a networked store.
    """

    def __init__(self) -> None:
        self._data: dict[tuple[str, str], Gradebook] = {}
        self.insert_attempts = 0
        self.conflicts = 0

    async def get(self, course_id: str, student_id: str) -> Gradebook | None:
        await asyncio.sleep(0)
        stored = self._data.get((course_id, student_id))
        return stored.model_copy(deep=True) if stored else None

    async def insert(self, gradebook: Gradebook) -> Gradebook:
        await asyncio.sleep(0)
        self.insert_attempts += 1

        if gradebook.key in self._data:
            self.conflicts += 1
            raise GradebookConflictError(
                f"Gradebook already exists for student {gradebook.student_id} "
                f"in course {gradebook.course_id}"
            )

        stored = gradebook.model_copy(deep=True)
        stored.id = new_id()
        stored.version = 1
        stored.updated_at = utc_now()
        self._data[stored.key] = stored
        return stored.model_copy(deep=True)

    async def save(self, gradebook: Gradebook) -> Gradebook:
        await asyncio.sleep(0)
        current = self._data.get(gradebook.key)
        if current is None:
            raise GradebookStoreError(
                f"Gradebook for student {gradebook.student_id} in course "
                f"{gradebook.course_id} does not exist"
            )

        stored = gradebook.model_copy(deep=True)
        stored.id = current.id
        stored.version = current.version + 1
        stored.updated_at = utc_now()
        self._data[stored.key] = stored
        return stored.model_copy(deep=True)

    async def list_for_course(self, course_id: str) -> list[Gradebook]:
        await asyncio.sleep(0)
        return [
            gradebook.model_copy(deep=True)
            for key, gradebook in sorted(self._data.items())
            if key[0] == course_id
        ]

    def __len__(self) -> int:
        return len(self._data)
