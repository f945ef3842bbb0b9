"""CourseFlow core.

Course-scoped authorization decisions and the per-student gradebook
aggregate maintained from grading events.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
