# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Gradebook totals recompute.

Totals are always recomputed from the full item list, never adjusted
incrementally, so a missed update cannot leave the cached total drifting.
"""

from collections.abc import Iterable

from courseflow.models.gradebook import GradeItem, GradeTotal


def recompute_totals(items: Iterable[GradeItem]) -> GradeTotal:
    """Recompute earned, possible and percent from grade items.

    Items with missing or non-positive points count toward neither sum.
    Only GRADED items with a score count toward ``earned``.

    Args:
        items: Grade items of one gradebook.

    Returns:
        Fresh totals for the items.
    """
    earned = 0.0
    possible = 0.0

    for item in items:
        if item.points is None or item.points <= 0:
            continue

        possible += item.points
        if item.is_graded and item.score is not None:
            earned += item.score

    percent = (earned / possible) * 100.0 if possible > 0 else 0.0

    return GradeTotal(earned=earned, possible=possible, percent=percent)
