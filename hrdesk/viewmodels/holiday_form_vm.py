from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from hrdesk.app.query_cache import RESOURCE_HOLIDAYS
from hrdesk.domain.entities import Holiday
from hrdesk.domain.normalizer import parse_date
from hrdesk.domain.ports import Payload, UseCaseError

from .notifications import Notification, Notifier, emit

HOLIDAY_TYPES = ("National", "Regional", "Optional", "Weekend Off")

_REQUIRED = (
    ("name", "Holiday name is required"),
    ("fromDate", "From date is required"),
    ("toDate", "To date is required"),
    ("totalHolidays", "Total holidays is required"),
    ("type", "Holiday type is required"),
)


class HolidayFormVM:
    """Add/edit holiday dialog."""

    def __init__(
        self,
        *,
        holiday: Optional[Holiday] = None,
        save_holiday: Optional[Callable[..., Any]] = None,
        on_notify: Optional[Notifier] = None,
        on_invalidate: Optional[Callable[[str], None]] = None,
        on_saved: Optional[Callable[[], None]] = None,
    ) -> None:
        self.holiday = holiday
        self.save_holiday = save_holiday
        self.on_notify = on_notify
        self.on_invalidate = on_invalidate
        self.on_saved = on_saved
        self.fields: Dict[str, str] = {
            "name": holiday.name if holiday else "",
            "fromDate": holiday.from_date.isoformat() if holiday else "",
            "toDate": holiday.to_date.isoformat() if holiday else "",
            "totalHolidays": str(holiday.total_holidays) if holiday else "1",
            "type": holiday.holiday_type if holiday else "National",
        }
        self.errors: Dict[str, str] = {}
        self.is_saving = False

    @property
    def is_edit(self) -> bool:
        return self.holiday is not None

    def set_field(self, name: str, value: Any) -> None:
        if name not in self.fields:
            raise KeyError(f"Unknown holiday form field: {name}")
        self.fields[name] = "" if value is None else str(value)
        self.errors.pop(name, None)

    def validate(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        for name, message in _REQUIRED:
            if not self.fields[name].strip():
                errors[name] = message
        for name in ("fromDate", "toDate"):
            if name in errors:
                continue
            try:
                parse_date(self.fields[name], ctx=name)
            except ValueError:
                errors[name] = "Enter a date as YYYY-MM-DD"
        if "totalHolidays" not in errors:
            try:
                if int(self.fields["totalHolidays"].strip()) < 1:
                    errors["totalHolidays"] = "Total holidays must be at least 1"
            except ValueError:
                errors["totalHolidays"] = "Total holidays must be a whole number"
        self.errors = errors
        return errors

    def build_payload(self) -> Payload:
        return {
            "name": self.fields["name"],
            "fromDate": self.fields["fromDate"],
            "toDate": self.fields["toDate"],
            "totalHolidays": int(self.fields["totalHolidays"].strip()),
            "type": self.fields["type"],
            "companyId": None,
        }

    def submit(self) -> bool:
        if self.validate():
            return False
        if self.save_holiday is None:
            raise RuntimeError("HolidayFormVM has no save use case wired")
        holiday_id = self.holiday.id if self.holiday else None
        self.is_saving = True
        try:
            self.save_holiday(self.build_payload(), holiday_id=holiday_id)
        except UseCaseError as err:
            emit(self.on_notify, Notification.error(err.message))
            return False
        finally:
            self.is_saving = False
        if self.on_invalidate:
            self.on_invalidate(RESOURCE_HOLIDAYS)
        if self.on_saved:
            self.on_saved()
        return True
