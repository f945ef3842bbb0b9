# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Gradebook aggregate table.

One row per (course_id, student_id). Grade items are stored as a JSON
array on the row; totals are cached in scalar columns.
"""

from typing import Any

from sqlalchemy import JSON, Float, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from courseflow.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
)


class GradebookRecord(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Persisted gradebook aggregate."""

    __tablename__ = "gradebooks"
    __table_args__ = (
        UniqueConstraint("course_id", "student_id", name="uq_gradebooks_course_student"),
    )

    course_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    student_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    items: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    total_earned: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total_possible: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total_percent: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
