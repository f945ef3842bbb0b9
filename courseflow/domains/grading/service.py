# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grading workflow for submissions and grades.

This module provides the GradingWorkflow class, the request-side entry
point that authorizes an actor, checks the assignment belongs to the
course, and emits the matching grade event. Storing the submission or
grade record itself belongs to the assignment store.
"""

from __future__ import annotations

import logging

from courseflow.core.exceptions import NotFoundError
from courseflow.domains.assignment.service import AssignmentCatalog
from courseflow.domains.authorization.service import (
    CourseAuthorizer,
    requires_course_access,
    requires_course_manager,
)
from courseflow.domains.gradebook.events import (
    GradeEventDispatcher,
    SubmissionGraded,
    SubmissionRecorded,
)
from courseflow.domains.gradebook.service import validate_score
from courseflow.models.course import Actor, AssignmentInfo

logger = logging.getLogger(__name__)


def _course_id(course_id: str, *args: object, **kwargs: object) -> str:
    return course_id


class GradingWorkflow:
    """Submission and grading actions that feed the gradebook.

    Attributes:
        authorizer: Course authorizer.
        assignments: Assignment lookup.
        dispatcher: Grade event dispatcher.
    """

    def __init__(
        self,
        authorizer: CourseAuthorizer,
        assignments: AssignmentCatalog,
        dispatcher: GradeEventDispatcher,
    ) -> None:
        self.authorizer = authorizer
        self.assignments = assignments
        self.dispatcher = dispatcher

    @requires_course_access(_course_id)
    async def record_submission(
        self,
        actor: Actor,
        course_id: str,
        assignment_id: str,
    ) -> bool:
        """Record the actor's submission of an assignment.

        Args:
            actor: Submitting student.
            course_id: Course identifier.
            assignment_id: Assignment identifier.

        Returns:
            True if the gradebook was updated.

        Raises:
            NotEnrolledError: If the actor is not an active member.
            NotFoundError: If the assignment is not in the course.
        """
        assignment = await self._get_course_assignment(course_id, assignment_id)

        logger.info(
            "Assignment submitted: assignment=%s, student=%s, course=%s",
            assignment_id,
            actor.id,
            course_id,
        )

        return await self.dispatcher.dispatch(
            SubmissionRecorded(
                course_id=course_id,
                student_id=actor.id,
                assignment_id=assignment_id,
                title=assignment.title,
                points=assignment.points,
            )
        )

    @requires_course_manager(_course_id)
    async def grade_submission(
        self,
        actor: Actor,
        course_id: str,
        assignment_id: str,
        student_id: str,
        score: float,
    ) -> bool:
        """Grade a student's submission.

        Args:
            actor: Grader.
            course_id: Course identifier.
            assignment_id: Assignment identifier.
            student_id: Graded student.
            score: Score awarded.

        Returns:
            True if the gradebook was updated.

        Raises:
            InsufficientPermissionsError: If the actor cannot manage the course.
            NotFoundError: If the assignment is not in the course, or the
                student is not an active member of it.
            InvalidScoreError: If the score is negative or above the points.
        """
        assignment = await self._get_course_assignment(course_id, assignment_id)
        if not await self.authorizer.facts.is_active_member(course_id, student_id):
            raise NotFoundError(
                "Student is not enrolled in this course",
                code="STUDENT_NOT_ENROLLED",
            )
        validate_score(score, assignment.points)

        logger.info(
            "Submission graded: assignment=%s, student=%s, by=%s, course=%s",
            assignment_id,
            student_id,
            actor.id,
            course_id,
        )

        return await self.dispatcher.dispatch(
            SubmissionGraded(
                course_id=course_id,
                student_id=student_id,
                assignment_id=assignment_id,
                score=score,
                points=assignment.points,
            )
        )

    async def _get_course_assignment(self, course_id: str, assignment_id: str) -> AssignmentInfo:
        """Get an assignment of the course.

        Raises:
            NotFoundError: If the assignment does not exist in the course.
        """
        assignment = await self.assignments.get_course_assignment(course_id, assignment_id)
        if assignment is None:
            raise NotFoundError(
                "Assignment not found in this course",
                code="ASSIGNMENT_NOT_FOUND",
            )
        return assignment
