"""
Statistics for taskstreak

- Streaks, totals and weekly average over the whole history
- Daily and weekly completion summaries
"""

from taskstreak.stats.calculator import (
    calculate_progress_stats,
    completions_by_date,
    round_half_up,
    DISTINCT_DAYS,
    CONSECUTIVE,
)
from taskstreak.stats.summaries import summarize_day, summarize_week, week_bounds

__all__ = [
    "calculate_progress_stats",
    "completions_by_date",
    "round_half_up",
    "DISTINCT_DAYS",
    "CONSECUTIVE",
    "summarize_day",
    "summarize_week",
    "week_bounds",
]
