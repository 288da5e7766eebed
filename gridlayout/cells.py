"""
Cell ranges for week and month grids.
"""

from datetime import date, timedelta


def get_week_start(d: date, first_weekday: int = 0) -> date:
    """First day of the week containing `d` (first_weekday: 0=Monday)."""
    return d - timedelta(days=(d.weekday() - first_weekday) % 7)


def week_cells(d: date, first_weekday: int = 0, days: int = 7) -> list[date]:
    start = get_week_start(d, first_weekday)
    return [start + timedelta(days=i) for i in range(days)]


def month_weeks(year: int, month: int, first_weekday: int = 0) -> list[list[date]]:
    """
    Six week rows covering the month.

    Always six rows so the month grid keeps a constant height; leading and
    trailing days come from the neighbouring months.
    """
    grid_start = get_week_start(date(year, month, 1), first_weekday)
    return [
        [grid_start + timedelta(days=week * 7 + i) for i in range(7)]
        for week in range(6)
    ]
