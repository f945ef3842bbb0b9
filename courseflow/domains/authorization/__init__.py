# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authorization domain package.

Course access and course manage decisions evaluated from membership facts.
"""

from courseflow.domains.authorization.service import (
    CourseAuthorizer,
    requires_course_access,
    requires_course_manager,
)

__all__ = [
    "CourseAuthorizer",
    "requires_course_access",
    "requires_course_manager",
]
