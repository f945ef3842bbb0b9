# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment domain package.

Read-only membership facts used by course authorization.
"""

from courseflow.domains.enrollment.service import (
    EnrollmentFacts,
    InMemoryMembershipFacts,
    MembershipFacts,
)

__all__ = [
    "MembershipFacts",
    "EnrollmentFacts",
    "InMemoryMembershipFacts",
]
