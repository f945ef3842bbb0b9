# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grading domain package.

Submission and grading workflows that emit grade events.
"""

from courseflow.domains.grading.service import GradingWorkflow

__all__ = ["GradingWorkflow"]
