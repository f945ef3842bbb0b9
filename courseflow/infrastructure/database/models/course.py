# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course membership and assignment tables.

Both tables are written by external collaborators. This package only
reads them.
"""

from sqlalchemy import Float, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from courseflow.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)


class CourseMembership(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A user's enrollment in a course with a course role."""

    __tablename__ = "course_memberships"
    __table_args__ = (
        UniqueConstraint("course_id", "user_id", name="uq_course_memberships_course_user"),
    )

    course_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    course_role: Mapped[str] = mapped_column(String(20), nullable=False, default="STUDENT")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="ACTIVE")


class Assignment(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Assignment fields read by the gradebook."""

    __tablename__ = "assignments"

    course_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    points: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
