# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database infrastructure for the course database."""

from courseflow.infrastructure.database.connection import (
    DatabaseError,
    close_database,
    init_database,
    session_scope,
)

__all__ = [
    "DatabaseError",
    "close_database",
    "init_database",
    "session_scope",
]
