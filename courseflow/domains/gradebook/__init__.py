# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Gradebook domain package.

This package maintains the per-student gradebook aggregate:
- Aggregate stores with idempotent get-or-create
- Submission and grading event application
- Totals recompute from the full item list
"""

from courseflow.domains.gradebook.events import (
    GradeEvent,
    GradeEventDispatcher,
    GradeEventType,
    SubmissionGraded,
    SubmissionRecorded,
)
from courseflow.domains.gradebook.locks import KeyedLock
from courseflow.domains.gradebook.repository import (
    GradebookRepository,
    InMemoryGradebookRepository,
    SqlGradebookRepository,
)
from courseflow.domains.gradebook.service import GradebookService, validate_score
from courseflow.domains.gradebook.totals import recompute_totals

__all__ = [
    "GradebookService",
    "validate_score",
    "recompute_totals",
    "KeyedLock",
    "GradebookRepository",
    "SqlGradebookRepository",
    "InMemoryGradebookRepository",
    "GradeEvent",
    "GradeEventDispatcher",
    "GradeEventType",
    "SubmissionGraded",
    "SubmissionRecorded",
]
