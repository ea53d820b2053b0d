"""Date manipulation utilities"""

from datetime import date, datetime, timedelta


def to_iso_date(value: date | str) -> str:
    """Render a date as YYYY-MM-DD; strings are passed through untouched"""
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.isoformat()
    return value


def days_before(days: int, today: date | None = None) -> date:
    """The date `days` days before today (or the given reference date)"""
    return (today or date.today()) - timedelta(days=days)
