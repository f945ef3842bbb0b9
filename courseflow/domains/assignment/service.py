# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Assignment lookups used to populate gradebook items.

The assignment store is owned elsewhere. The gradebook only needs an
assignment's course, title and point value.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from courseflow.infrastructure.database.connection import DatabaseError
from courseflow.infrastructure.database.models.course import Assignment
from courseflow.models.course import AssignmentInfo


class AssignmentCatalog(ABC):
    """Read-only assignment lookup."""

    @abstractmethod
    async def get_assignment(self, assignment_id: str) -> AssignmentInfo | None:
        """Get assignment info by ID, or None if it does not exist."""

    async def get_course_assignment(
        self,
        course_id: str,
        assignment_id: str,
    ) -> AssignmentInfo | None:
        """Get assignment info only if it belongs to the given course."""
        assignment = await self.get_assignment(assignment_id)
        if assignment is None or assignment.course_id != course_id:
            return None
        return assignment


class SqlAssignmentCatalog(AssignmentCatalog):
    """Assignment lookup backed by the ``assignments`` table.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_assignment(self, assignment_id: str) -> AssignmentInfo | None:
        query = select(Assignment).where(Assignment.id == assignment_id)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise DatabaseError("Failed to load assignment", e) from e
        assignment = result.scalar_one_or_none()

        if not assignment:
            return None

        return AssignmentInfo(
            id=assignment.id,
            course_id=assignment.course_id,
            title=assignment.title,
            points=assignment.points,
        )


class InMemoryAssignmentCatalog(AssignmentCatalog):
    """Assignment lookup held in a dict keyed by assignment ID."""

    def __init__(self, assignments: list[AssignmentInfo] | None = None) -> None:
        self._data: dict[str, AssignmentInfo] = {a.id: a for a in assignments or []}

    def put(self, assignment: AssignmentInfo) -> None:
        """Insert or replace an assignment."""
        self._data[assignment.id] = assignment

    async def get_assignment(self, assignment_id: str) -> AssignmentInfo | None:
        return self._data.get(assignment_id)
