"""
Progress Statistics Engine

Derives aggregate numbers from the full daily-progress history:
- current streak
- best streak
- total completions
- weekly average

Two streak modes are supported:
- distinct_days: a streak is the number of distinct dates with at least one
  completion. Calendar adjacency is not checked, so current and best streak
  are always equal. This is the historical behaviour of the /api/stats
  endpoint and stays the default.
- consecutive: a streak is a run of calendar-adjacent completion dates.

Everything here is a pure function of its input.
"""

import math
from collections import Counter
from datetime import date, timedelta
from typing import Iterable, List, Optional

from taskstreak.models import DailyProgress, ProgressStats

DISTINCT_DAYS = "distinct_days"
CONSECUTIVE = "consecutive"


def round_half_up(value: float) -> int:
    """Round non-negative values with .5 going up (2.5 -> 3)"""
    return math.floor(value + 0.5)


def completions_by_date(records: Iterable[DailyProgress]) -> Counter:
    """Count completed records per date"""
    return Counter(record.date for record in records if record.completed)


def _distinct_day_streaks(per_date: Counter, sorted_dates: List[date]) -> tuple[int, int]:
    """
    Walk dates newest to oldest, counting every date that has completions.

    Only dates with at least one completion are ever in the list, so the
    reset branch never fires and both streaks end up equal to len(sorted_dates).
    """
    current_streak = 0
    best_streak = 0
    temp_streak = 0

    for i in range(len(sorted_dates) - 1, -1, -1):
        if per_date[sorted_dates[i]] > 0:
            temp_streak += 1
            current_streak = temp_streak
        else:
            best_streak = max(best_streak, temp_streak)
            temp_streak = 0

    best_streak = max(best_streak, temp_streak)
    return current_streak, best_streak


def _consecutive_streaks(sorted_dates: List[date], today: Optional[date]) -> tuple[int, int]:
    """
    Longest run of calendar-adjacent dates, and the run ending at the latest date.

    When today is given and the latest completion is older than yesterday,
    the current streak is broken (0).
    """
    if not sorted_dates:
        return 0, 0

    runs = []
    run = 1
    for previous, current in zip(sorted_dates, sorted_dates[1:]):
        if current == previous + timedelta(days=1):
            run += 1
        else:
            runs.append(run)
            run = 1
    runs.append(run)

    current_streak = runs[-1]
    if today is not None and sorted_dates[-1] < today - timedelta(days=1):
        current_streak = 0

    return current_streak, max(runs)


def calculate_progress_stats(
    records: Iterable[DailyProgress],
    streak_mode: str = DISTINCT_DAYS,
    today: Optional[date] = None
) -> ProgressStats:
    """
    Compute streaks, total completions and weekly average.

    Args:
        records: Full progress history (completed and not completed)
        streak_mode: 'distinct_days' or 'consecutive'
        today: Reference date for breaking the current streak ('consecutive' only)

    Returns:
        ProgressStats; all zeros for an empty history
    """
    per_date = completions_by_date(records)
    total_completed = sum(per_date.values())
    sorted_dates = sorted(per_date)

    if streak_mode == CONSECUTIVE:
        current_streak, best_streak = _consecutive_streaks(sorted_dates, today)
    elif streak_mode == DISTINCT_DAYS:
        current_streak, best_streak = _distinct_day_streaks(per_date, sorted_dates)
    else:
        raise ValueError(f"Unknown streak mode: {streak_mode!r}")

    weekly_average = 0
    if sorted_dates:
        weeks = max(1, math.ceil(len(sorted_dates) / 7))
        weekly_average = round_half_up(total_completed / weeks)

    return ProgressStats(
        current_streak=current_streak,
        best_streak=best_streak,
        total_completed=total_completed,
        weekly_average=weekly_average,
    )
