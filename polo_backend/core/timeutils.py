# Date helpers shared by models and the statistics engine

from datetime import date, datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Naive UTC timestamp, matching what SQLite hands back on reload."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def age_in_years(birth_date: Optional[date], today: Optional[date] = None) -> Optional[int]:
    """Whole years between birth_date and today; None without a birth date."""
    if birth_date is None:
        return None
    if isinstance(birth_date, datetime):
        birth_date = birth_date.date()
    today = today or date.today()
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


def days_between(start: date, end: date) -> int:
    """Whole days from start to end (negative when end comes first)."""
    if isinstance(start, datetime):
        start = start.date()
    if isinstance(end, datetime):
        end = end.date()
    return (end - start).days
