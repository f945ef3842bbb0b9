# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for membership facts."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from courseflow.domains.enrollment.service import EnrollmentFacts, InMemoryMembershipFacts
from courseflow.infrastructure.database.connection import DatabaseError
from courseflow.models.course import CourseRole, Membership, MembershipStatus


def membership_row(course_role: str = "STUDENT", status: str = "ACTIVE") -> MagicMock:
    """Create a sample membership row."""
    row = MagicMock()
    row.course_id = "course-1"
    row.user_id = "user-1"
    row.course_role = course_role
    row.status = status
    return row


def result_of(row: MagicMock | None) -> MagicMock:
    """Wrap a row as an execute() result."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = row
    return result


@pytest.fixture
def enrollment_facts(mock_db):
    """Create enrollment facts with mock database."""
    return EnrollmentFacts(db=mock_db)


class TestEnrollmentFactsMembership:
    """Tests for is_active_member."""

    @pytest.mark.asyncio
    async def test_active_member(self, enrollment_facts, mock_db):
        """Test an ACTIVE membership counts."""
        mock_db.execute.return_value = result_of(membership_row())

        assert await enrollment_facts.is_active_member("course-1", "user-1") is True

    @pytest.mark.asyncio
    async def test_dropped_member(self, enrollment_facts, mock_db):
        """Test a DROPPED membership does not count."""
        mock_db.execute.return_value = result_of(membership_row(status="DROPPED"))

        assert await enrollment_facts.is_active_member("course-1", "user-1") is False

    @pytest.mark.asyncio
    async def test_no_membership(self, enrollment_facts, mock_db):
        """Test a missing membership does not count."""
        mock_db.execute.return_value = result_of(None)

        assert await enrollment_facts.is_active_member("course-1", "user-1") is False

    @pytest.mark.asyncio
    async def test_reads_store_on_every_call(self, enrollment_facts, mock_db):
        """Test a drop is seen on the next check."""
        mock_db.execute.side_effect = [
            result_of(membership_row()),
            result_of(membership_row(status="DROPPED")),
        ]

        assert await enrollment_facts.is_active_member("course-1", "user-1") is True
        assert await enrollment_facts.is_active_member("course-1", "user-1") is False
        assert mock_db.execute.await_count == 2


class TestEnrollmentFactsRole:
    """Tests for role_of."""

    @pytest.mark.asyncio
    async def test_active_role(self, enrollment_facts, mock_db):
        """Test the role of an ACTIVE membership is returned."""
        mock_db.execute.return_value = result_of(membership_row(course_role="TA"))

        assert await enrollment_facts.role_of("course-1", "user-1") is CourseRole.TA

    @pytest.mark.asyncio
    async def test_dropped_role_is_none(self, enrollment_facts, mock_db):
        """Test a DROPPED instructor has no role."""
        mock_db.execute.return_value = result_of(
            membership_row(course_role="INSTRUCTOR", status="DROPPED")
        )

        assert await enrollment_facts.role_of("course-1", "user-1") is None

    @pytest.mark.asyncio
    async def test_unknown_role_is_none(self, enrollment_facts, mock_db):
        """Test an unrecognized role string grants nothing."""
        mock_db.execute.return_value = result_of(membership_row(course_role="OWNER"))

        assert await enrollment_facts.role_of("course-1", "user-1") is None

    @pytest.mark.asyncio
    async def test_read_failure(self, enrollment_facts, mock_db):
        """Test a failed membership read becomes DatabaseError."""
        mock_db.execute.side_effect = OperationalError("SELECT", {}, Exception("connection lost"))

        with pytest.raises(DatabaseError, match="Failed to load course membership"):
            await enrollment_facts.role_of("course-1", "user-1")

        with pytest.raises(DatabaseError):
            await enrollment_facts.is_active_member("course-1", "user-1")


class TestInMemoryMembershipFacts:
    """Tests for the in-memory membership facts."""

    @pytest.mark.asyncio
    async def test_put_replaces_membership(self):
        """Test put overwrites the membership for the same pair."""
        facts = InMemoryMembershipFacts(
            [Membership(course_id="course-1", user_id="user-1", course_role=CourseRole.TA)]
        )

        assert await facts.role_of("course-1", "user-1") is CourseRole.TA

        facts.put(
            Membership(
                course_id="course-1",
                user_id="user-1",
                course_role=CourseRole.TA,
                status=MembershipStatus.DROPPED,
            )
        )

        assert await facts.is_active_member("course-1", "user-1") is False
        assert await facts.role_of("course-1", "user-1") is None

    @pytest.mark.asyncio
    async def test_membership_is_per_course(self):
        """Test a membership in one course says nothing about another."""
        facts = InMemoryMembershipFacts([Membership(course_id="course-1", user_id="user-1")])

        assert await facts.is_active_member("course-2", "user-1") is False
