"""Date manipulation utilities"""

from datetime import date, datetime, timedelta
from typing import List


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]


def trailing_window(end: date, days: int) -> List[date]:
    """Last `days` dates ending at `end` (inclusive), oldest first"""
    if days <= 0:
        return []
    return generate_date_range(end - timedelta(days=days - 1), end)


def parse_iso_date(value: str) -> date:
    """Parse an ISO date or datetime string, dropping any time component"""
    if "T" in value or " " in value:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return date.fromisoformat(value)
