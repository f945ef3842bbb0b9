# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

Fixtures build a small course with one instructor, one TA, two active
students and one dropped student, backed by the in-memory stores.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from courseflow.core.config import clear_settings_cache
from courseflow.domains.assignment.service import InMemoryAssignmentCatalog
from courseflow.domains.authorization.service import CourseAuthorizer
from courseflow.domains.enrollment.service import InMemoryMembershipFacts
from courseflow.domains.gradebook.events import GradeEventDispatcher
from courseflow.domains.gradebook.repository import InMemoryGradebookRepository
from courseflow.domains.gradebook.service import GradebookService
from courseflow.domains.grading.service import GradingWorkflow
from courseflow.models.course import (
    Actor,
    AssignmentInfo,
    CourseRole,
    GlobalRole,
    Membership,
    MembershipStatus,
)

COURSE_ID = "course-1"
OTHER_COURSE_ID = "course-2"


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (requires services)"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings around every test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_db():
    """Create mock database session."""
    db = AsyncMock()
    db.add = MagicMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.execute = AsyncMock()
    return db


# =============================================================================
# Actors
# =============================================================================


@pytest.fixture
def instructor() -> Actor:
    """Course instructor."""
    return Actor(id="instructor-1", global_role=GlobalRole.INSTRUCTOR)


@pytest.fixture
def ta() -> Actor:
    """Course teaching assistant."""
    return Actor(id="ta-1")


@pytest.fixture
def student() -> Actor:
    """Active student."""
    return Actor(id="student-1")


@pytest.fixture
def classmate() -> Actor:
    """Second active student."""
    return Actor(id="student-2")


@pytest.fixture
def dropped_student() -> Actor:
    """Student whose membership was dropped."""
    return Actor(id="student-dropped")


@pytest.fixture
def outsider() -> Actor:
    """User with no membership in the course."""
    return Actor(id="outsider-1")


@pytest.fixture
def admin() -> Actor:
    """Platform administrator with no course membership."""
    return Actor(id="admin-1", global_role=GlobalRole.ADMIN)


# =============================================================================
# Stores and Services
# =============================================================================


@pytest.fixture
def membership_facts(instructor, ta, student, classmate, dropped_student) -> InMemoryMembershipFacts:
    """Memberships of the sample course."""
    return InMemoryMembershipFacts(
        [
            Membership(course_id=COURSE_ID, user_id=instructor.id, course_role=CourseRole.INSTRUCTOR),
            Membership(course_id=COURSE_ID, user_id=ta.id, course_role=CourseRole.TA),
            Membership(course_id=COURSE_ID, user_id=student.id),
            Membership(course_id=COURSE_ID, user_id=classmate.id),
            Membership(
                course_id=COURSE_ID,
                user_id=dropped_student.id,
                status=MembershipStatus.DROPPED,
            ),
        ]
    )


@pytest.fixture
def assignments() -> InMemoryAssignmentCatalog:
    """Assignments of the sample course and one of another course."""
    return InMemoryAssignmentCatalog(
        [
            AssignmentInfo(id="a1", course_id=COURSE_ID, title="Essay", points=100),
            AssignmentInfo(id="a2", course_id=COURSE_ID, title="Lab Report", points=50),
            AssignmentInfo(id="x1", course_id=OTHER_COURSE_ID, title="Elsewhere", points=10),
        ]
    )


@pytest.fixture
def authorizer(membership_facts) -> CourseAuthorizer:
    """Authorizer over the sample memberships."""
    return CourseAuthorizer(membership_facts)


@pytest.fixture
def gradebook_repository() -> InMemoryGradebookRepository:
    """Empty in-memory gradebook store."""
    return InMemoryGradebookRepository()


@pytest.fixture
def gradebook_service(gradebook_repository, authorizer) -> GradebookService:
    """Gradebook service with serialized updates."""
    return GradebookService(gradebook_repository, authorizer)


@pytest.fixture
def dispatcher(gradebook_service, assignments) -> GradeEventDispatcher:
    """Grade event dispatcher over the sample assignments."""
    return GradeEventDispatcher(gradebook_service, assignments)


@pytest.fixture
def grading(authorizer, assignments, dispatcher) -> GradingWorkflow:
    """Grading workflow for the sample course."""
    return GradingWorkflow(authorizer, assignments, dispatcher)
