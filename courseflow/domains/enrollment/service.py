# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Membership facts over course enrollment records.

This module provides read-only answers to two questions:
- is a user an active member of a course
- what role does the user hold in that course

Every call reads the backing store. Nothing is cached, so a member who
was dropped is denied on the very next check.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from courseflow.infrastructure.database.connection import DatabaseError
from courseflow.infrastructure.database.models.course import CourseMembership
from courseflow.models.course import CourseRole, Membership, MembershipStatus

logger = logging.getLogger(__name__)


class MembershipFacts(ABC):
    """Read-only view over course memberships."""

    @abstractmethod
    async def is_active_member(self, course_id: str, user_id: str) -> bool:
        """Check if the user holds an ACTIVE membership in the course."""

    @abstractmethod
    async def role_of(self, course_id: str, user_id: str) -> CourseRole | None:
        """Get the user's course role, or None without an ACTIVE membership."""


class EnrollmentFacts(MembershipFacts):
    """Membership facts backed by the ``course_memberships`` table.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize enrollment facts.

        Args:
            db: Async database session.
        """
        self.db = db

    async def is_active_member(self, course_id: str, user_id: str) -> bool:
        membership = await self._get_membership(course_id, user_id)
        return membership is not None and membership.status == MembershipStatus.ACTIVE.value

    async def role_of(self, course_id: str, user_id: str) -> CourseRole | None:
        membership = await self._get_membership(course_id, user_id)
        if membership is None or membership.status != MembershipStatus.ACTIVE.value:
            return None

        try:
            return CourseRole(membership.course_role)
        except ValueError:
            logger.warning(
                "Unknown course role on membership: course=%s, user=%s, role=%s",
                course_id,
                user_id,
                membership.course_role,
            )
            return None

    async def _get_membership(
        self,
        course_id: str,
        user_id: str,
    ) -> CourseMembership | None:
        """Get membership record.

        Args:
            course_id: Course identifier.
            user_id: User identifier.

        Returns:
            CourseMembership if found, None otherwise.

        Raises:
            DatabaseError: If the query fails.
        """
        query = select(CourseMembership).where(
            CourseMembership.course_id == course_id,
            CourseMembership.user_id == user_id,
        )
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise DatabaseError("Failed to load course membership", e) from e
        return result.scalar_one_or_none()


class InMemoryMembershipFacts(MembershipFacts):
    """Membership facts held in a dict keyed by (course_id, user_id).

    Used for local development and tests.
    """

    def __init__(self, memberships: list[Membership] | None = None) -> None:
        self._data: dict[tuple[str, str], Membership] = {}
        for membership in memberships or []:
            self.put(membership)

    def put(self, membership: Membership) -> None:
        """Insert or replace the membership for its (course, user) pair."""
        self._data[(membership.course_id, membership.user_id)] = membership

    async def is_active_member(self, course_id: str, user_id: str) -> bool:
        membership = self._data.get((course_id, user_id))
        return membership is not None and membership.is_active

    async def role_of(self, course_id: str, user_id: str) -> CourseRole | None:
        membership = self._data.get((course_id, user_id))
        if membership is None or not membership.is_active:
            return None
        return membership.course_role
