"""Daily and weekly completion summaries"""

from datetime import date, timedelta
from typing import Iterable, Optional

from taskstreak.models import DailyProgress, DailySummary, DayTally, WeeklySummary
from taskstreak.stats.calculator import round_half_up


def summarize_day(
    day: date,
    records: Iterable[DailyProgress],
    active_task_count: int
) -> DailySummary:
    """
    Completion state of one day measured against the active task list.

    Records for other dates are ignored.
    """
    completed = sum(1 for r in records if r.date == day and r.completed)
    percentage = (completed / active_task_count) * 100 if active_task_count > 0 else 0.0

    return DailySummary(
        date=day,
        completed=completed,
        total=active_task_count,
        remaining=max(0, active_task_count - completed),
        completion_percentage=percentage,
    )


def week_bounds(anchor: date) -> tuple[date, date]:
    """Monday and Sunday of the week containing anchor"""
    week_start = anchor - timedelta(days=anchor.weekday())
    return week_start, week_start + timedelta(days=6)


def summarize_week(
    anchor: date,
    records: Iterable[DailyProgress],
    today: Optional[date] = None
) -> WeeklySummary:
    """
    Weekly overview for the Monday-to-Sunday week containing anchor.

    Days after today are not counted. A day is active when it has at least
    one completion and perfect when it has records and all are completed.
    """
    week_start, week_end = week_bounds(anchor)
    by_date: dict[date, list[DailyProgress]] = {}
    for record in records:
        if week_start <= record.date <= week_end:
            by_date.setdefault(record.date, []).append(record)

    summary = WeeklySummary(week_start=week_start, week_end=week_end)

    for offset in range(7):
        day = week_start + timedelta(days=offset)
        if today is not None and day > today:
            continue

        day_records = by_date.get(day, [])
        completed = sum(1 for r in day_records if r.completed)
        total = len(day_records)

        summary.total_days += 1
        if completed > 0:
            summary.active_days += 1
        if total > 0 and completed == total:
            summary.perfect_days += 1
        summary.total_tasks += total
        summary.completed_tasks += completed
        summary.days.append(DayTally(date=day, completed=completed, total=total))

    if summary.total_tasks > 0:
        summary.completion_rate = round_half_up(summary.completed_tasks / summary.total_tasks * 100)

    return summary
