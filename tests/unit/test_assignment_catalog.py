# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for assignment lookups."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from courseflow.domains.assignment.service import SqlAssignmentCatalog
from courseflow.infrastructure.database.connection import DatabaseError
from courseflow.models.course import AssignmentInfo


@pytest.fixture
def sample_assignment():
    """Create a sample assignment row."""
    assignment = MagicMock()
    assignment.id = "a1"
    assignment.course_id = "course-1"
    assignment.title = "Essay"
    assignment.points = 100.0
    return assignment


class TestSqlAssignmentCatalog:
    """Tests for the SQL assignment catalog."""

    @pytest.mark.asyncio
    async def test_get_assignment(self, mock_db, sample_assignment):
        """Test a row is mapped to AssignmentInfo."""
        result = MagicMock()
        result.scalar_one_or_none.return_value = sample_assignment
        mock_db.execute.return_value = result

        assignment = await SqlAssignmentCatalog(mock_db).get_assignment("a1")

        assert assignment == AssignmentInfo(id="a1", course_id="course-1", title="Essay", points=100)

    @pytest.mark.asyncio
    async def test_get_assignment_missing(self, mock_db):
        """Test a missing row returns None."""
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_db.execute.return_value = result

        assert await SqlAssignmentCatalog(mock_db).get_assignment("nope") is None

    @pytest.mark.asyncio
    async def test_get_course_assignment_other_course(self, mock_db, sample_assignment):
        """Test an assignment of another course is not returned."""
        result = MagicMock()
        result.scalar_one_or_none.return_value = sample_assignment
        mock_db.execute.return_value = result

        catalog = SqlAssignmentCatalog(mock_db)

        assert await catalog.get_course_assignment("course-2", "a1") is None

    @pytest.mark.asyncio
    async def test_read_failure(self, mock_db):
        """Test a failed lookup becomes DatabaseError."""
        mock_db.execute.side_effect = OperationalError("SELECT", {}, Exception("connection lost"))

        with pytest.raises(DatabaseError, match="Failed to load assignment"):
            await SqlAssignmentCatalog(mock_db).get_course_assignment("course-1", "a1")


class TestInMemoryAssignmentCatalog:
    """Tests for the in-memory assignment catalog."""

    @pytest.mark.asyncio
    async def test_course_scoped_lookup(self, assignments):
        """Test lookups are scoped to the owning course."""
        assert (await assignments.get_course_assignment("course-1", "a1")).title == "Essay"
        assert await assignments.get_course_assignment("course-1", "x1") is None
        assert await assignments.get_course_assignment("course-1", "missing") is None

    @pytest.mark.asyncio
    async def test_put(self, assignments):
        """Test put replaces an assignment."""
        assignments.put(AssignmentInfo(id="a1", course_id="course-1", title="Essay v2", points=80))

        assignment = await assignments.get_assignment("a1")

        assert assignment.title == "Essay v2"
        assert assignment.points == 80
