from __future__ import annotations

"""Calendar arithmetic over holiday collections (year/month views and labels)."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from .entities import Holiday

MONTH_NAMES: Tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True)
class MonthSummary:
    """One card of the yearly overview."""

    month: int
    name: str
    holidays: Tuple[Holiday, ...]
    total_days: int


def unique_by_id(holidays: Iterable[Holiday]) -> List[Holiday]:
    """Collapse duplicate ids: first position wins, last value wins."""
    ordered: Dict[str, Holiday] = {}
    for holiday in holidays:
        ordered[holiday.id] = holiday
    return list(ordered.values())


def holidays_for_year(holidays: Iterable[Holiday], year: int) -> List[Holiday]:
    return [holiday for holiday in holidays if holiday.from_date.year == int(year)]


def available_years(holidays: Iterable[Holiday], current_year: int) -> List[int]:
    """Years present in the data plus the current year and the next two."""
    years = {holiday.from_date.year for holiday in holidays}
    years.update({current_year, current_year + 1, current_year + 2})
    return sorted(years)


def holiday_dates(holidays: Iterable[Holiday]) -> Set[date]:
    """Every calendar date covered by any holiday range (inclusive)."""
    dates: Set[date] = set()
    for holiday in holidays:
        day = holiday.from_date
        while day <= holiday.to_date:
            dates.add(day)
            day += timedelta(days=1)
    return dates


def holidays_for_month(holidays: Iterable[Holiday], month: int) -> List[Holiday]:
    """Holidays that start or end in ``month`` (1-12)."""
    _check_month(month)
    matching = [
        holiday
        for holiday in holidays
        if holiday.from_date.month == month or holiday.to_date.month == month
    ]
    return unique_by_id(matching)


def total_days(holidays: Iterable[Holiday]) -> int:
    return sum(holiday.total_holidays for holiday in holidays)


def monthly_overview(holidays: Sequence[Holiday], year: int) -> List[MonthSummary]:
    """Twelve month summaries keyed by the month each holiday starts in."""
    in_year = holidays_for_year(holidays, year)
    summaries: List[MonthSummary] = []
    for index, name in enumerate(MONTH_NAMES, start=1):
        month_holidays = tuple(h for h in in_year if h.from_date.month == index)
        summaries.append(
            MonthSummary(
                month=index,
                name=name,
                holidays=month_holidays,
                total_days=total_days(month_holidays),
            )
        )
    return summaries


def days_label(count: int) -> str:
    return f"{count} day" if count == 1 else f"{count} days"


def format_long(day: date) -> str:
    return f"{MONTH_NAMES[day.month - 1]} {day.day}, {day.year}"


def format_short(day: date, *, with_year: bool = False) -> str:
    text = f"{MONTH_NAMES[day.month - 1][:3]} {day.day}"
    return f"{text}, {day.year}" if with_year else text


def format_range(holiday: Holiday) -> str:
    """``January 26, 2025`` for one day, ``Oct 20 - Oct 22, 2025`` for ranges."""
    if holiday.is_single_day:
        return format_long(holiday.from_date)
    return f"{format_short(holiday.from_date)} - {format_short(holiday.to_date, with_year=True)}"


def format_compact_range(holiday: Holiday) -> str:
    """Yearly-overview label without the year."""
    if holiday.is_single_day:
        return format_short(holiday.from_date)
    return f"{format_short(holiday.from_date)} - {format_short(holiday.to_date)}"


def _check_month(month: int) -> None:
    if not 1 <= int(month) <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")


__all__ = [
    "MONTH_NAMES",
    "MonthSummary",
    "available_years",
    "days_label",
    "format_compact_range",
    "format_long",
    "format_range",
    "format_short",
    "holiday_dates",
    "holidays_for_month",
    "holidays_for_year",
    "monthly_overview",
    "total_days",
    "unique_by_id",
]
