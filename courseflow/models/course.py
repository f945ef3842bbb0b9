# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course membership, identity and assignment reference models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class GlobalRole(str, Enum):
    """Account-wide role of a user."""

    STUDENT = "STUDENT"
    INSTRUCTOR = "INSTRUCTOR"
    ADMIN = "ADMIN"


class CourseRole(str, Enum):
    """Role of a user within one course."""

    STUDENT = "STUDENT"
    TA = "TA"
    INSTRUCTOR = "INSTRUCTOR"


class MembershipStatus(str, Enum):
    """Enrollment status of a membership."""

    ACTIVE = "ACTIVE"
    DROPPED = "DROPPED"


class Actor(BaseModel):
    """Identity of the caller, passed explicitly into every decision.

    Attributes:
        id: User identifier.
        global_role: Account-wide role.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="User identifier")
    global_role: GlobalRole = Field(default=GlobalRole.STUDENT, description="Account-wide role")

    @property
    def is_admin(self) -> bool:
        """Check if the actor is a platform administrator."""
        return self.global_role is GlobalRole.ADMIN


class Membership(BaseModel):
    """One user's membership in one course."""

    course_id: str = Field(description="Course identifier")
    user_id: str = Field(description="User identifier")
    course_role: CourseRole = Field(default=CourseRole.STUDENT, description="Role in the course")
    status: MembershipStatus = Field(default=MembershipStatus.ACTIVE, description="Enrollment status")

    @property
    def is_active(self) -> bool:
        """Check if the membership counts toward authorization."""
        return self.status is MembershipStatus.ACTIVE


class AssignmentInfo(BaseModel):
    """Assignment fields the gradebook needs from the assignment store."""

    id: str = Field(description="Assignment identifier")
    course_id: str = Field(description="Owning course identifier")
    title: str = Field(description="Assignment title")
    points: float = Field(ge=0, description="Maximum points")
