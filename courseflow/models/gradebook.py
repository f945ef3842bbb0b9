# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Gradebook aggregate models.

A Gradebook is the derived per-student, per-course record. Its ``total``
is always the output of the totals recompute and is never edited by hand.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GradeItemType(str, Enum):
    """Kind of graded work an item tracks."""

    ASSIGNMENT = "ASSIGNMENT"
    QUIZ = "QUIZ"


class GradeStatus(str, Enum):
    """Well-known item statuses. Items may carry other status strings."""

    SUBMITTED = "SUBMITTED"
    GRADED = "GRADED"
    NOT_SUBMITTED = "NOT_SUBMITTED"


class GradeItem(BaseModel):
    """One gradebook line for an assignment or quiz.

    A GRADED item has a score and graded_at; an item that was never graded
    has neither. ``points`` is the item's point value at last sync and may
    be stale if the assignment changed after grading.
    """

    type: GradeItemType = Field(description="Item type")
    item_id: str = Field(description="Assignment or quiz identifier")
    title: str | None = Field(default=None, description="Item title")
    score: float | None = Field(default=None, description="Score received")
    points: float | None = Field(default=None, description="Maximum points")
    status: str = Field(default=GradeStatus.SUBMITTED.value, description="Item status")
    graded_at: datetime | None = Field(default=None, description="When the item was graded")

    @property
    def is_graded(self) -> bool:
        """Check if the item carries a grade."""
        return self.status == GradeStatus.GRADED


class GradeTotal(BaseModel):
    """Cached earned/possible/percent summary."""

    earned: float = 0.0
    possible: float = 0.0
    percent: float = Field(default=0.0, ge=0.0, le=100.0)


class Gradebook(BaseModel):
    """Gradebook aggregate for one student in one course.

    Attributes:
        id: Store identity, None until first persisted.
        course_id: Course identifier.
        student_id: Student identifier.
        items: Ordered grade items, at most one per (type, item_id).
        total: Cached totals.
        updated_at: Time of the last persisted mutation.
        version: Count of persisted writes.
    """

    id: str | None = None
    course_id: str
    student_id: str
    items: list[GradeItem] = Field(default_factory=list)
    total: GradeTotal = Field(default_factory=GradeTotal)
    updated_at: datetime | None = None
    version: int = 0

    @classmethod
    def empty(cls, course_id: str, student_id: str) -> "Gradebook":
        """Build an unpersisted gradebook with no items and zeroed totals."""
        return cls(course_id=course_id, student_id=student_id)

    @property
    def key(self) -> tuple[str, str]:
        """The (course_id, student_id) uniqueness key."""
        return self.course_id, self.student_id

    def find_item(self, item_type: GradeItemType, item_id: str) -> GradeItem | None:
        """Find the item for a (type, item_id) key."""
        for item in self.items:
            if item.type == item_type and item.item_id == item_id:
                return item
        return None


class GradeItemResponse(BaseModel):
    """Grade item response DTO."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type: str
    item_id: str
    title: str | None
    score: float | None
    points: float | None
    status: str
    graded_at: datetime | None


class GradebookResponse(BaseModel):
    """Gradebook response DTO with camelCase field aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str | None
    course_id: str
    student_id: str
    items: list[GradeItemResponse]
    total: GradeTotal
    updated_at: datetime | None

    @classmethod
    def from_gradebook(cls, gradebook: Gradebook) -> "GradebookResponse":
        """Convert a gradebook aggregate to a response DTO."""
        return cls(
            id=gradebook.id,
            course_id=gradebook.course_id,
            student_id=gradebook.student_id,
            items=[
                GradeItemResponse(
                    type=item.type.value,
                    item_id=item.item_id,
                    title=item.title,
                    score=item.score,
                    points=item.points,
                    status=item.status,
                    graded_at=item.graded_at,
                )
                for item in gradebook.items
            ],
            total=gradebook.total.model_copy(),
            updated_at=gradebook.updated_at,
        )
