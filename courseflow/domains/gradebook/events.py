# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grade events and their dispatcher.

The assignment workflow emits two events:

- SubmissionRecorded: a student submitted an assignment.
- SubmissionGraded: a grader scored a student's submission.

GradeEventDispatcher applies each event to the student's gradebook in the
caller's own task. The caller awaits the result; nothing is queued.

The gradebook is a projection of the submission and grade records, so a
projection failure must not fail the workflow that emitted the event:

- an assignment that cannot be found drops the event with a warning
- a store or database failure, on read or write, drops the event with
  an error log
- an invalid score is the caller's input error and is raised
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Awaitable, Callable, ClassVar, Union

from courseflow.core.exceptions import GradebookStoreError
from courseflow.domains.assignment.service import AssignmentCatalog
from courseflow.domains.gradebook.service import GradebookService
from courseflow.infrastructure.database.connection import DatabaseError
from courseflow.models.course import AssignmentInfo
from courseflow.utils.datetime import utc_now
from courseflow.utils.logging import get_logger, log_context

logger = get_logger(__name__)


class GradeEventType(str, Enum):
    """Event type strings for grade events."""

    SUBMISSION_RECORDED = "gradebook.submission.recorded"
    SUBMISSION_GRADED = "gradebook.submission.graded"


@dataclass(frozen=True)
class SubmissionRecorded:
    """A student submitted an assignment.

    Attributes:
        course_id: Course identifier.
        student_id: Submitting student.
        assignment_id: Submitted assignment.
        title: Title override; the assignment's title when None.
        points: Points override; the assignment's points when None.
        occurred_at: When the event was created.
    """

    event_type: ClassVar[GradeEventType] = GradeEventType.SUBMISSION_RECORDED

    course_id: str
    student_id: str
    assignment_id: str
    title: str | None = None
    points: float | None = None
    occurred_at: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class SubmissionGraded:
    """A grader scored a student's submission.

    Attributes:
        course_id: Course identifier.
        student_id: Graded student.
        assignment_id: Graded assignment.
        score: Score awarded.
        title: Title for an item created by the grade; the assignment's title when None.
        points: Points override; the assignment's points when None.
        occurred_at: When the event was created.
    """

    event_type: ClassVar[GradeEventType] = GradeEventType.SUBMISSION_GRADED

    course_id: str
    student_id: str
    assignment_id: str
    score: float
    title: str | None = None
    points: float | None = None
    occurred_at: datetime = field(default_factory=utc_now)


GradeEvent = Union[SubmissionRecorded, SubmissionGraded]


class GradeEventDispatcher:
    """Apply grade events to gradebook aggregates.

    Attributes:
        gradebook: Gradebook service that performs the update.
        assignments: Assignment lookup for titles and points.
    """

    def __init__(self, gradebook: GradebookService, assignments: AssignmentCatalog) -> None:
        self.gradebook = gradebook
        self.assignments = assignments
        self._handlers: dict[GradeEventType, Callable[..., Awaitable[None]]] = {
            GradeEventType.SUBMISSION_RECORDED: self._on_submission_recorded,
            GradeEventType.SUBMISSION_GRADED: self._on_submission_graded,
        }
        self._applied = 0
        self._dropped = 0

    async def dispatch(self, event: GradeEvent) -> bool:
        """Apply one grade event.

        Args:
            event: The event to apply.

        Returns:
            True if the gradebook was updated, False if the event was dropped.

        Raises:
            InvalidScoreError: If a graded score is out of range.
        """
        handler = self._handlers.get(event.event_type)
        if handler is None:
            logger.warning("gradebook.event.unhandled", event_type=str(event.event_type))
            self._dropped += 1
            return False

        with log_context(
            event_type=event.event_type.value,
            course_id=event.course_id,
            student_id=event.student_id,
            assignment_id=event.assignment_id,
        ):
            try:
                assignment = await self.assignments.get_course_assignment(
                    event.course_id,
                    event.assignment_id,
                )
                if assignment is None:
                    logger.warning("gradebook.event.dropped", reason="assignment_not_found")
                    self._dropped += 1
                    return False

                await handler(event, assignment)
            except (GradebookStoreError, DatabaseError):
                logger.exception("gradebook.event.failed")
                self._dropped += 1
                return False

            self._applied += 1
            logger.debug("gradebook.event.applied")
        return True

    async def _on_submission_recorded(
        self,
        event: SubmissionRecorded,
        assignment: AssignmentInfo,
    ) -> None:
        await self.gradebook.apply_submission_recorded(
            course_id=event.course_id,
            student_id=event.student_id,
            assignment_id=event.assignment_id,
            title=event.title or assignment.title,
            points=event.points if event.points is not None else assignment.points,
        )

    async def _on_submission_graded(
        self,
        event: SubmissionGraded,
        assignment: AssignmentInfo,
    ) -> None:
        await self.gradebook.apply_submission_graded(
            course_id=event.course_id,
            student_id=event.student_id,
            assignment_id=event.assignment_id,
            score=event.score,
            points=event.points if event.points is not None else assignment.points,
            title=event.title or assignment.title,
        )

    def get_stats(self) -> dict[str, int]:
        """Get dispatcher statistics.

        Returns:
            Counts of applied and dropped events.
        """
        return {"events_applied": self._applied, "events_dropped": self._dropped}
