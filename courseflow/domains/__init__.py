# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for CourseFlow.

Domains:
    enrollment: Read-only course membership facts.
    assignment: Assignment title and point lookups.
    authorization: Course access and manage decisions.
    gradebook: Gradebook aggregate store, totals and grade events.
    grading: Submission and grading workflows that emit grade events.
"""
