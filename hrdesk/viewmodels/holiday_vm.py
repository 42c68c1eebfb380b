"""Holiday table and calendar tabs for the ``/holidays`` page."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Set

from hrdesk.domain import holiday_calendar as cal
from hrdesk.domain.entities import CurrentUser, Holiday

LOGGER = logging.getLogger(__name__)

EMPTY_MESSAGE = "No holidays configured"
EMPTY_MONTH_MESSAGE = "No holidays in this month"
EMPTY_YEAR_MONTH_MESSAGE = "No holidays"


@dataclass(frozen=True)
class HolidayRow:
    id: str
    name: str
    from_date: str
    to_date: str
    total_days: int
    holiday_type: str
    date_range: str


def project_holidays(holidays: Sequence[Holiday]) -> List[HolidayRow]:
    """One row per holiday id, in input order; no filtering."""
    return [
        HolidayRow(
            id=holiday.id,
            name=holiday.name,
            from_date=holiday.from_date.isoformat(),
            to_date=holiday.to_date.isoformat(),
            total_days=holiday.total_holidays,
            holiday_type=holiday.holiday_type,
            date_range=cal.format_range(holiday),
        )
        for holiday in cal.unique_by_id(holidays)
    ]


class HolidayVM:
    """List, monthly and yearly holiday views over one holiday snapshot."""

    skeleton_count = 5
    empty_message = EMPTY_MESSAGE
    empty_month_message = EMPTY_MONTH_MESSAGE

    def __init__(self, *, today: Optional[date] = None) -> None:
        today = today or date.today()
        self.current_year = today.year
        self.selected_year = today.year
        self.selected_month = today.month
        self.holidays: Optional[List[Holiday]] = None
        self.is_loading = True

    def apply_snapshot(self, holidays: Optional[Sequence[Holiday]], *, is_loading: bool = False) -> None:
        self.holidays = None if holidays is None else list(holidays)
        self.is_loading = bool(is_loading)

    # ---- list tab ----
    def rows(self) -> List[HolidayRow]:
        return project_holidays(self.holidays or [])

    @staticmethod
    def show_mutation_controls(current_user: Optional[CurrentUser]) -> bool:
        # Add/edit/delete are rendered for every role, unlike the employee page.
        return True

    def on_edit_row(self, holiday_id: str) -> None:
        LOGGER.debug("Edit requested for holiday %s (no action)", holiday_id)

    def on_delete_row(self, holiday_id: str) -> None:
        LOGGER.debug("Delete requested for holiday %s (no action)", holiday_id)

    # ---- calendar tabs ----
    def set_year(self, value: object) -> None:
        self.selected_year = int(str(value).strip())

    def set_month(self, value: object) -> None:
        month = int(str(value).strip())
        if not 1 <= month <= 12:
            raise ValueError(f"month must be in 1..12, got {value}")
        self.selected_month = month

    def year_options(self) -> List[int]:
        return cal.available_years(self.holidays or [], self.current_year)

    def holidays_in_year(self) -> List[Holiday]:
        return cal.holidays_for_year(self.holidays or [], self.selected_year)

    def highlighted_dates(self) -> Set[date]:
        return cal.holiday_dates(self.holidays_in_year())

    def month_holidays(self) -> List[Holiday]:
        return cal.holidays_for_month(self.holidays_in_year(), self.selected_month)

    def month_title(self) -> str:
        return f"{cal.MONTH_NAMES[self.selected_month - 1]} {self.selected_year}"

    def yearly_overview(self) -> List[cal.MonthSummary]:
        return cal.monthly_overview(self.holidays or [], self.selected_year)

    def year_total(self) -> int:
        return cal.total_days(self.holidays_in_year())

    def year_total_label(self) -> str:
        return f"Total holidays in {self.selected_year}: {cal.days_label(self.year_total())}"
