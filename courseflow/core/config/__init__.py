# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for CourseFlow.

Example:
    >>> from courseflow.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.gradebook.serialize_updates
    True
"""

from courseflow.core.config.settings import (
    DatabaseSettings,
    GradebookSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "clear_settings_cache",
    "DatabaseSettings",
    "GradebookSettings",
]
