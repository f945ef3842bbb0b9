# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy table models for CourseFlow."""

from courseflow.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)
from courseflow.infrastructure.database.models.course import Assignment, CourseMembership
from courseflow.infrastructure.database.models.gradebook import GradebookRecord

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "Assignment",
    "CourseMembership",
    "GradebookRecord",
]
