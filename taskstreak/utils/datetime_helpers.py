"""
Date/Time Handling Utilities

- Timestamps (created_at, completed_at) are stored timezone-aware in UTC
- Calendar dates travel as ISO strings (YYYY-MM-DD) and are parsed here
"""

import logging
import re
from datetime import datetime, date
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def now_utc() -> datetime:
    """
    Get current datetime in UTC (timezone-aware)

    Returns:
        Current datetime in UTC with timezone info
    """
    return datetime.now(ZoneInfo("UTC"))


def today_utc() -> date:
    """Today's date in UTC"""
    return now_utc().date()


def parse_iso_date(date_str: str) -> date:
    """
    Parse a YYYY-MM-DD string to a date object

    Args:
        date_str: Date string

    Returns:
        date object

    Raises:
        ValueError: If date_str is not YYYY-MM-DD or not a real calendar date
    """
    if not ISO_DATE_PATTERN.match(date_str):
        raise ValueError(f"Invalid date format '{date_str}'. Expected YYYY-MM-DD")

    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError as e:
        raise ValueError(f"Invalid calendar date '{date_str}'") from e
