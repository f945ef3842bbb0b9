# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the grading workflow."""

import pytest

from courseflow.core.exceptions import (
    InsufficientPermissionsError,
    InvalidScoreError,
    NotEnrolledError,
    NotFoundError,
)

COURSE_ID = "course-1"


class TestRecordSubmission:
    """Tests for record_submission."""

    @pytest.mark.asyncio
    async def test_student_submits(self, grading, gradebook_service, student):
        """Test a student's submission reaches their gradebook."""
        assert await grading.record_submission(student, COURSE_ID, "a1") is True

        gradebook = await gradebook_service.get_student_gradebook(COURSE_ID, student.id)
        assert gradebook.items[0].item_id == "a1"
        assert gradebook.items[0].status == "SUBMITTED"
        assert gradebook.total.possible == 100.0

    @pytest.mark.asyncio
    async def test_outsider_rejected(self, grading, gradebook_repository, outsider):
        """Test non-members cannot submit."""
        with pytest.raises(NotEnrolledError):
            await grading.record_submission(outsider, COURSE_ID, "a1")

        assert len(gradebook_repository) == 0

    @pytest.mark.asyncio
    async def test_outsider_asking_for_missing_assignment(self, grading, outsider):
        """Test non-members see NotEnrolled even for unknown assignments."""
        with pytest.raises(NotEnrolledError):
            await grading.record_submission(outsider, COURSE_ID, "missing")

    @pytest.mark.asyncio
    async def test_assignment_of_other_course(self, grading, student):
        """Test an assignment from another course is not found."""
        with pytest.raises(NotFoundError) as exc_info:
            await grading.record_submission(student, COURSE_ID, "x1")

        assert exc_info.value.code == "ASSIGNMENT_NOT_FOUND"


class TestGradeSubmission:
    """Tests for grade_submission."""

    @pytest.mark.asyncio
    async def test_instructor_grades(self, grading, gradebook_service, instructor, student):
        """Test an instructor's grade updates the student's totals."""
        await grading.record_submission(student, COURSE_ID, "a1")

        assert await grading.grade_submission(instructor, COURSE_ID, "a1", student.id, 85) is True

        gradebook = await gradebook_service.get_student_gradebook(COURSE_ID, student.id)
        assert gradebook.total.earned == 85.0
        assert gradebook.total.percent == 85.0

    @pytest.mark.asyncio
    async def test_ta_grades(self, grading, ta, student):
        """Test a TA may grade."""
        assert await grading.grade_submission(ta, COURSE_ID, "a2", student.id, 50) is True

    @pytest.mark.asyncio
    async def test_admin_grades(self, grading, admin, student):
        """Test an ADMIN may grade without a membership."""
        assert await grading.grade_submission(admin, COURSE_ID, "a2", student.id, 10) is True

    @pytest.mark.asyncio
    async def test_student_cannot_grade(self, grading, gradebook_repository, student, classmate):
        """Test students cannot grade."""
        with pytest.raises(InsufficientPermissionsError):
            await grading.grade_submission(student, COURSE_ID, "a1", classmate.id, 100)

        assert len(gradebook_repository) == 0

    @pytest.mark.asyncio
    async def test_score_above_points(self, grading, gradebook_repository, instructor, student):
        """Test a score above the assignment's points is rejected."""
        with pytest.raises(InvalidScoreError):
            await grading.grade_submission(instructor, COURSE_ID, "a2", student.id, 51)

        assert gradebook_repository.insert_attempts == 0

    @pytest.mark.asyncio
    async def test_missing_assignment(self, grading, instructor, student):
        """Test grading an unknown assignment is not found."""
        with pytest.raises(NotFoundError):
            await grading.grade_submission(instructor, COURSE_ID, "missing", student.id, 1)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("student_id", ["outsider-1", "student-dropped"])
    async def test_student_not_enrolled(self, grading, gradebook_repository, instructor, student_id):
        """Test only active members of the course can be graded."""
        with pytest.raises(NotFoundError) as exc_info:
            await grading.grade_submission(instructor, COURSE_ID, "a1", student_id, 80)

        assert exc_info.value.code == "STUDENT_NOT_ENROLLED"
        assert len(gradebook_repository) == 0
