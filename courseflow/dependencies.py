# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Service wiring for one database session.

Example:
    await init_database(settings)
    async with course_services(settings) as services:
        await services.grading.grade_submission(actor, course_id, assignment_id, student_id, 85)
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from courseflow.core.config import Settings, get_settings
from courseflow.domains.assignment.service import SqlAssignmentCatalog
from courseflow.domains.authorization.service import CourseAuthorizer
from courseflow.domains.enrollment.service import EnrollmentFacts
from courseflow.domains.gradebook.events import GradeEventDispatcher
from courseflow.domains.gradebook.repository import SqlGradebookRepository
from courseflow.domains.gradebook.service import GradebookService
from courseflow.domains.grading.service import GradingWorkflow
from courseflow.infrastructure.database.connection import session_scope


@dataclass
class CourseServices:
    """Services bound to one database session."""

    authorizer: CourseAuthorizer
    gradebook: GradebookService
    dispatcher: GradeEventDispatcher
    grading: GradingWorkflow


def build_course_services(
    session: AsyncSession,
    settings: Settings | None = None,
) -> CourseServices:
    """Assemble SQL-backed course services for a session.

    Args:
        session: Async database session.
        settings: Application settings; the cached settings when None.

    Returns:
        Wired services.
    """
    settings = settings or get_settings()

    authorizer = CourseAuthorizer(EnrollmentFacts(session))
    assignments = SqlAssignmentCatalog(session)
    gradebook = GradebookService(
        repository=SqlGradebookRepository(session),
        authorizer=authorizer,
        serialize_updates=settings.gradebook.serialize_updates,
    )
    dispatcher = GradeEventDispatcher(gradebook, assignments)

    return CourseServices(
        authorizer=authorizer,
        gradebook=gradebook,
        dispatcher=dispatcher,
        grading=GradingWorkflow(authorizer, assignments, dispatcher),
    )


@asynccontextmanager
async def course_services(settings: Settings | None = None) -> AsyncIterator[CourseServices]:
    """Open a session and yield services bound to it.

    The session commits when the block exits normally and rolls back when
    it raises.

    Raises:
        DatabaseError: If the database is not initialized or a database
            operation fails.
    """
    async with session_scope() as session:
        yield build_course_services(session, settings)
