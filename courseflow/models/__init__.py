# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic models shared across CourseFlow domains."""

from courseflow.models.course import (
    Actor,
    AssignmentInfo,
    CourseRole,
    GlobalRole,
    Membership,
    MembershipStatus,
)
from courseflow.models.gradebook import (
    GradeItem,
    GradeItemResponse,
    GradeItemType,
    GradeStatus,
    GradeTotal,
    Gradebook,
    GradebookResponse,
)

__all__ = [
    "Actor",
    "AssignmentInfo",
    "CourseRole",
    "GlobalRole",
    "Membership",
    "MembershipStatus",
    "GradeItem",
    "GradeItemResponse",
    "GradeItemType",
    "GradeStatus",
    "GradeTotal",
    "Gradebook",
    "GradebookResponse",
]
