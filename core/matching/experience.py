#!/usr/bin/env python3
"""
Experience Calculator - total years of professional experience.

Policy:
- Each interval contributes its whole-month span; an open interval runs
  until today.
- Intervals are summed as-is. Overlapping jobs are counted twice.
- Spans where the end precedes the start contribute negative months and
  are kept, so they reduce the total.
"""

import math
from datetime import date
from typing import Iterable, Optional

from core.matching.models import ExperienceInterval


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity."""
    return int(math.floor(value + 0.5))


def months_between(start: date, end: date) -> int:
    """Whole calendar months from start to end; days are ignored."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def calculate_total_months(
    intervals: Iterable[ExperienceInterval],
    today: Optional[date] = None
) -> int:
    today = today or date.today()
    total = 0
    for interval in intervals:
        end = interval.end_date or today
        total += months_between(interval.start_date, end)
    return total


def calculate_total_experience(
    intervals: Iterable[ExperienceInterval],
    today: Optional[date] = None
) -> int:
    """
    Total years of experience across all intervals.

    Args:
        intervals: Employment intervals in any order
        today: Reference date for open intervals (defaults to date.today())

    Returns:
        Summed months / 12, rounded half up. May be negative.
    """
    return round_half_up(calculate_total_months(intervals, today) / 12)
