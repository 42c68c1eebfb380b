from __future__ import annotations

from datetime import date

import pytest

from hrdesk.domain import holiday_calendar as cal
from hrdesk.domain.entities import Holiday


def _holiday(hid: str, start: date, end: date, total: int = 1, name: str = "Holiday") -> Holiday:
    return Holiday(id=hid, name=name, from_date=start, to_date=end, total_holidays=total)


DIWALI = _holiday("h-3", date(2025, 10, 20), date(2025, 10, 22), 3, "Diwali")
REPUBLIC = _holiday("h-1", date(2025, 1, 26), date(2025, 1, 26), 1, "Republic Day")
SPAN = _holiday("h-4", date(2025, 1, 30), date(2025, 2, 2), 4, "Winter Break")
NEXT_YEAR = _holiday("h-5", date(2026, 1, 1), date(2026, 1, 1), 1, "New Year")


def test_unique_by_id_keeps_first_position_last_value() -> None:
    renamed = _holiday("h-1", date(2025, 1, 26), date(2025, 1, 26), 1, "Renamed")

    result = cal.unique_by_id([REPUBLIC, DIWALI, renamed])

    assert [h.id for h in result] == ["h-1", "h-3"]
    assert result[0].name == "Renamed"


def test_available_years_adds_current_and_next_two() -> None:
    assert cal.available_years([REPUBLIC, NEXT_YEAR], 2024) == [2024, 2025, 2026]
    assert cal.available_years([], 2025) == [2025, 2026, 2027]


def test_holiday_dates_cover_inclusive_ranges() -> None:
    dates = cal.holiday_dates([DIWALI])

    assert dates == {date(2025, 10, 20), date(2025, 10, 21), date(2025, 10, 22)}


def test_holidays_for_month_includes_spans_touching_the_month() -> None:
    holidays = [REPUBLIC, SPAN, DIWALI]

    assert [h.id for h in cal.holidays_for_month(holidays, 1)] == ["h-1", "h-4"]
    assert [h.id for h in cal.holidays_for_month(holidays, 2)] == ["h-4"]
    with pytest.raises(ValueError):
        cal.holidays_for_month(holidays, 13)


def test_monthly_overview_groups_by_start_month() -> None:
    overview = cal.monthly_overview([REPUBLIC, SPAN, DIWALI, NEXT_YEAR], 2025)

    assert len(overview) == 12
    assert overview[0].name == "January"
    assert overview[0].total_days == 5
    assert overview[1].holidays == ()
    assert overview[9].total_days == 3


def test_range_formatting() -> None:
    assert cal.format_range(REPUBLIC) == "January 26, 2025"
    assert cal.format_range(DIWALI) == "Oct 20 - Oct 22, 2025"
    assert cal.format_compact_range(DIWALI) == "Oct 20 - Oct 22"
    assert cal.format_compact_range(REPUBLIC) == "Jan 26"


def test_days_label_pluralizes() -> None:
    assert cal.days_label(1) == "1 day"
    assert cal.days_label(0) == "0 days"
    assert cal.days_label(5) == "5 days"
