# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Gradebook service for maintaining per-student gradebook aggregates.

This module provides the GradebookService class for:
- Idempotent get-or-create of the aggregate for a (course, student) key
- Applying submission and grading events to grade items
- Read paths for one student's gradebook and a course's gradebooks
- Authorized gradebook views for course members and managers

Every mutation is read, mutate in memory, recompute totals, write back.
With ``serialize_updates`` enabled each read-modify-write for a key runs
under a per-key lock. Services share one lock registry per process by
default, so concurrent events handled by different requests, each with
its own service and session, cannot overwrite each other's item changes.
Without it the store's last write wins.
"""

from __future__ import annotations

import logging
from contextlib import AbstractAsyncContextManager, nullcontext

from courseflow.core.exceptions import (
    GradebookConflictError,
    GradebookStoreError,
    InvalidScoreError,
    NotFoundError,
)
from courseflow.domains.authorization.service import CourseAuthorizer
from courseflow.domains.gradebook.locks import KeyedLock
from courseflow.domains.gradebook.repository import GradebookRepository
from courseflow.domains.gradebook.totals import recompute_totals
from courseflow.models.course import Actor
from courseflow.models.gradebook import (
    GradeItem,
    GradeItemType,
    GradeStatus,
    Gradebook,
    GradebookResponse,
)
from courseflow.utils.datetime import utc_now

logger = logging.getLogger(__name__)

# Shared by every GradebookService in the process unless one is passed in
_update_locks = KeyedLock()


def validate_score(score: float, points: float | None) -> None:
    """Reject a score that is negative or above the item's points.

    Args:
        score: Requested score.
        points: Maximum points of the graded item.

    Raises:
        InvalidScoreError: If the score is out of range.
    """
    if score < 0:
        raise InvalidScoreError("Score must be non-negative")
    if points is not None and score > points:
        raise InvalidScoreError(f"Score cannot exceed assignment points ({points})")


class GradebookService:
    """Service for gradebook aggregates.

    Attributes:
        repository: Gradebook aggregate store.
        authorizer: Course authorizer for the view methods.
        serialize_updates: Whether updates to one key are serialized.
    """

    def __init__(
        self,
        repository: GradebookRepository,
        authorizer: CourseAuthorizer,
        serialize_updates: bool = True,
        locks: KeyedLock | None = None,
    ) -> None:
        """Initialize gradebook service.

        Args:
            repository: Gradebook aggregate store.
            authorizer: Course authorizer used by the view methods.
            serialize_updates: Serialize read-modify-write per key.
            locks: Lock registry; the process-wide registry when None.
        """
        self.repository = repository
        self.authorizer = authorizer
        self.serialize_updates = serialize_updates
        self._locks = locks if locks is not None else _update_locks

    async def get_or_create(self, course_id: str, student_id: str) -> Gradebook:
        """Get the gradebook for a key, creating an empty one if absent.

        Safe under concurrent first writers: when the insert loses the
        race on the unique key, the winner's gradebook is re-read and
        returned.

        Args:
            course_id: Course identifier.
            student_id: Student identifier.

        Returns:
            The single persisted gradebook for the key.

        Raises:
            GradebookStoreError: If the key conflicts but cannot be re-read.
        """
        existing = await self.repository.get(course_id, student_id)
        if existing:
            return existing

        try:
            gradebook = await self.repository.insert(Gradebook.empty(course_id, student_id))
            logger.debug(
                "Created new gradebook for student %s in course %s",
                student_id,
                course_id,
            )
            return gradebook
        except GradebookConflictError:
            logger.debug(
                "Gradebook created concurrently for student %s in course %s, re-reading",
                student_id,
                course_id,
            )

        gradebook = await self.repository.get(course_id, student_id)
        if gradebook is None:
            raise GradebookStoreError(
                f"Failed to create gradebook for student {student_id} in course {course_id}"
            )
        return gradebook

    async def apply_submission_recorded(
        self,
        course_id: str,
        student_id: str,
        assignment_id: str,
        title: str | None,
        points: float | None,
    ) -> Gradebook:
        """Record a submission on the student's gradebook.

        Creates the assignment item as SUBMITTED, or marks an existing
        item SUBMITTED and refreshes its points. An existing score and
        graded_at are kept. A resubmission after grading therefore leaves
        a SUBMITTED item that still carries its old score.

        Args:
            course_id: Course identifier.
            student_id: Student identifier.
            assignment_id: Assignment identifier.
            title: Assignment title.
            points: Assignment point value.

        Returns:
            The persisted gradebook.
        """
        async with self._updating(course_id, student_id):
            gradebook = await self.get_or_create(course_id, student_id)

            item = gradebook.find_item(GradeItemType.ASSIGNMENT, assignment_id)
            if item is None:
                gradebook.items.append(
                    GradeItem(
                        type=GradeItemType.ASSIGNMENT,
                        item_id=assignment_id,
                        title=title,
                        score=None,
                        points=points,
                        status=GradeStatus.SUBMITTED.value,
                        graded_at=None,
                    )
                )
            else:
                if item.is_graded:
                    logger.warning(
                        "Resubmission after grading keeps stale score: student=%s, course=%s, assignment=%s, score=%s",
                        student_id,
                        course_id,
                        assignment_id,
                        item.score,
                    )
                item.status = GradeStatus.SUBMITTED.value
                item.points = points
                if not item.title:
                    item.title = title

            gradebook.total = recompute_totals(gradebook.items)
            gradebook = await self.repository.save(gradebook)

        logger.debug(
            "Updated gradebook for student %s in course %s on assignment submission",
            student_id,
            course_id,
        )
        return gradebook

    async def apply_submission_graded(
        self,
        course_id: str,
        student_id: str,
        assignment_id: str,
        score: float,
        points: float | None,
        title: str | None = None,
    ) -> Gradebook:
        """Record a grade on the student's gradebook.

        The score is validated before anything is read or written.
        Regrading an item with the same score and points changes nothing.

        Args:
            course_id: Course identifier.
            student_id: Student identifier.
            assignment_id: Assignment identifier.
            score: Score awarded.
            points: Maximum points of the assignment.
            title: Assignment title, used when the item has none.

        Returns:
            The persisted gradebook.

        Raises:
            InvalidScoreError: If the score is negative or exceeds points.
        """
        validate_score(score, points)

        async with self._updating(course_id, student_id):
            gradebook = await self.get_or_create(course_id, student_id)

            item = gradebook.find_item(GradeItemType.ASSIGNMENT, assignment_id)
            if (
                item is not None
                and item.is_graded
                and item.score == score
                and item.points == points
                and (item.title or not title)
            ):
                logger.debug(
                    "Grade unchanged for student %s in course %s on assignment %s",
                    student_id,
                    course_id,
                    assignment_id,
                )
                return gradebook

            if item is None:
                item = GradeItem(
                    type=GradeItemType.ASSIGNMENT,
                    item_id=assignment_id,
                    title=title,
                )
                gradebook.items.append(item)

            item.score = score
            item.points = points
            item.status = GradeStatus.GRADED.value
            item.graded_at = utc_now()
            if not item.title:
                item.title = title or "Assignment"

            gradebook.total = recompute_totals(gradebook.items)
            gradebook = await self.repository.save(gradebook)

        logger.debug(
            "Updated gradebook for student %s in course %s on assignment grade",
            student_id,
            course_id,
        )
        return gradebook

    async def get_student_gradebook(self, course_id: str, student_id: str) -> Gradebook:
        """Get a student's gradebook without creating one.

        Returns:
            The stored gradebook, or an unpersisted zero-valued view.
        """
        gradebook = await self.repository.get(course_id, student_id)
        return gradebook or Gradebook.empty(course_id, student_id)

    async def get_all_gradebooks(self, course_id: str) -> list[Gradebook]:
        """Get the gradebooks that exist for a course.

        Enrolled students without a gradebook are not included.
        """
        return await self.repository.list_for_course(course_id)

    async def view_own_gradebook(self, actor: Actor, course_id: str) -> GradebookResponse:
        """Get the actor's own gradebook in a course.

        Raises:
            NotEnrolledError: If the actor is not an active member.
        """
        await self.authorizer.ensure_course_access(actor, course_id)

        gradebook = await self.get_student_gradebook(course_id, actor.id)
        return GradebookResponse.from_gradebook(gradebook)

    async def view_student_gradebook(
        self,
        actor: Actor,
        course_id: str,
        student_id: str,
    ) -> GradebookResponse:
        """Get one student's gradebook on behalf of a course manager.

        Raises:
            NotEnrolledError: If the actor is not an active member.
            InsufficientPermissionsError: If the actor cannot manage the course.
            NotFoundError: If the student is not an active member.
        """
        await self.authorizer.ensure_course_access(actor, course_id)
        await self.authorizer.ensure_course_manager(actor, course_id)

        if not await self.authorizer.facts.is_active_member(course_id, student_id):
            raise NotFoundError(
                "Student is not enrolled in this course",
                code="STUDENT_NOT_ENROLLED",
            )

        gradebook = await self.get_student_gradebook(course_id, student_id)
        return GradebookResponse.from_gradebook(gradebook)

    async def view_all_gradebooks(self, actor: Actor, course_id: str) -> list[GradebookResponse]:
        """Get every existing gradebook of a course on behalf of a manager.

        Raises:
            NotEnrolledError: If the actor is not an active member.
            InsufficientPermissionsError: If the actor cannot manage the course.
        """
        await self.authorizer.ensure_course_access(actor, course_id)
        await self.authorizer.ensure_course_manager(actor, course_id)

        gradebooks = await self.get_all_gradebooks(course_id)
        return [GradebookResponse.from_gradebook(g) for g in gradebooks]

    def _updating(self, course_id: str, student_id: str) -> AbstractAsyncContextManager[None]:
        """Scope for one read-modify-write on a key."""
        if self.serialize_updates:
            return self._locks.hold((course_id, student_id))
        return nullcontext()
