# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Assignment domain package.

Assignment title and point lookups for gradebook items.
"""

from courseflow.domains.assignment.service import (
    AssignmentCatalog,
    InMemoryAssignmentCatalog,
    SqlAssignmentCatalog,
)

__all__ = [
    "AssignmentCatalog",
    "SqlAssignmentCatalog",
    "InMemoryAssignmentCatalog",
]
