# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Error taxonomy for course authorization and gradebook operations.

Each error carries a stable machine-readable ``code`` and the HTTP status
class a request layer should map it to. The request layer itself lives
outside this package.
"""


class CourseflowError(Exception):
    """Base exception for CourseFlow core errors.

    Attributes:
        message: Human-readable error description.
        code: Stable error code.
        status_code: HTTP status class for the request layer.
    """

    code = "COURSEFLOW_ERROR"
    status_code = 500

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_dict(self) -> dict[str, str | int]:
        """Convert to an error payload."""
        return {
            "code": self.code,
            "message": self.message,
            "status": self.status_code,
        }


class NotEnrolledError(CourseflowError):
    """Raised when the actor has no active membership in the course."""

    code = "NOT_ENROLLED"
    status_code = 403


class InsufficientPermissionsError(CourseflowError):
    """Raised when the actor lacks a manage-level role in the course."""

    code = "INSUFFICIENT_PERMISSIONS"
    status_code = 403


class NotFoundError(CourseflowError):
    """Raised when a referenced course, assignment or student is missing."""

    code = "NOT_FOUND"
    status_code = 404


class InvalidScoreError(CourseflowError):
    """Raised when a score is negative or exceeds the item's points."""

    code = "INVALID_SCORE"
    status_code = 400


class GradebookConflictError(CourseflowError):
    """Raised by a gradebook store when the (course, student) key exists.

    Recovered inside get-or-create; never surfaced to callers.
    """

    code = "GRADEBOOK_CONFLICT"
    status_code = 409


class GradebookStoreError(CourseflowError):
    """Raised when the gradebook store is in an unexpected state."""

    code = "GRADEBOOK_STORE_ERROR"
    status_code = 500
