# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course-scoped authorization decisions.

Two predicates gate every course-scoped operation:

- can_access_course: the actor holds an ACTIVE membership in the course.
- can_manage_course: the actor is a platform ADMIN, or holds an ACTIVE
  INSTRUCTOR or TA membership in the course.

The ensure_* variants raise typed errors instead of returning False.
Handlers call them explicitly, or use the requires_* decorators with an
explicit course id extractor. Enrollment is checked before any
sub-resource lookup so non-members cannot learn what a course contains.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar

from courseflow.core.exceptions import InsufficientPermissionsError, NotEnrolledError
from courseflow.domains.enrollment.service import MembershipFacts
from courseflow.models.course import Actor, CourseRole

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Maps the wrapped method's arguments (after self and actor) to a course id
CourseIdExtractor = Callable[..., str]


class CourseAuthorizer:
    """Grant or deny course-scoped actions from membership facts.

    Stateless apart from the facts it queries.

    Attributes:
        facts: Membership facts to consult.
    """

    def __init__(self, facts: MembershipFacts) -> None:
        self.facts = facts

    async def can_access_course(self, actor: Actor, course_id: str) -> bool:
        """Check if the actor may read member-visible course data."""
        return await self.facts.is_active_member(course_id, actor.id)

    async def can_manage_course(self, actor: Actor, course_id: str) -> bool:
        """Check if the actor may change the course's content or roster."""
        if actor.is_admin:
            return True

        role = await self.facts.role_of(course_id, actor.id)
        return role in (CourseRole.INSTRUCTOR, CourseRole.TA)

    async def ensure_course_access(self, actor: Actor, course_id: str) -> None:
        """Require course access.

        Raises:
            NotEnrolledError: If the actor has no active membership.
        """
        logger.debug("Checking enrollment for user %s in course %s", actor.id, course_id)
        if not await self.can_access_course(actor, course_id):
            raise NotEnrolledError("User is not enrolled in this course")

    async def ensure_course_manager(self, actor: Actor, course_id: str) -> None:
        """Require a manage-level role in the course.

        Raises:
            InsufficientPermissionsError: If the actor is neither ADMIN nor
                an active INSTRUCTOR or TA of the course.
        """
        logger.debug("Checking instructor role for user %s in course %s", actor.id, course_id)
        if not await self.can_manage_course(actor, course_id):
            raise InsufficientPermissionsError(
                "User does not have instructor or TA role in this course"
            )


def requires_course_access(
    course_id_of: CourseIdExtractor,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Require course access before running an async workflow method.

    The wrapped method must be declared as ``(self, actor, ...)`` on an
    object exposing ``authorizer``. ``course_id_of`` receives the
    remaining arguments exactly as passed and returns the course id.

    Example:
        @requires_course_access(lambda course_id, *args, **kwargs: course_id)
        async def record_submission(self, actor, course_id, assignment_id):
            ...
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(self: Any, actor: Actor, *args: Any, **kwargs: Any) -> T:
            await self.authorizer.ensure_course_access(actor, course_id_of(*args, **kwargs))
            return await func(self, actor, *args, **kwargs)

        return wrapper

    return decorator


def requires_course_manager(
    course_id_of: CourseIdExtractor,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Require a manage-level course role before running an async method.

    Same calling convention as requires_course_access.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(self: Any, actor: Actor, *args: Any, **kwargs: Any) -> T:
            await self.authorizer.ensure_course_manager(actor, course_id_of(*args, **kwargs))
            return await func(self, actor, *args, **kwargs)

        return wrapper

    return decorator
