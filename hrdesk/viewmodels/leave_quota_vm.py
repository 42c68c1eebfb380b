from __future__ import annotations

from datetime import date
from typing import Callable, List, Optional, Sequence

from hrdesk.domain.entities import LeaveType, UserProfile
from hrdesk.domain.ports import Payload, UseCaseError

from .notifications import Notification, Notifier, emit

DEFAULT_TOTAL_LEAVES = "10"


class LeaveQuotaVM:
    """Assign Leave Quota dialog for one employee."""

    def __init__(
        self,
        employee: UserProfile,
        *,
        leave_types: Optional[Sequence[LeaveType]] = None,
        assign_quota: Optional[Callable[[Payload], str]] = None,
        on_notify: Optional[Notifier] = None,
        on_done: Optional[Callable[[], None]] = None,
        today: Optional[date] = None,
    ) -> None:
        self.employee = employee
        self.leave_types: List[LeaveType] = list(leave_types or [])
        self.assign_quota = assign_quota
        self.on_notify = on_notify
        self.on_done = on_done
        self.leave_type_id = ""
        self.total_leaves = DEFAULT_TOTAL_LEAVES
        self.year = str((today or date.today()).year)
        self.is_pending = False

    @property
    def description(self) -> str:
        return f"Assign leave quota to {self.employee.first_name} {self.employee.last_name}"

    @property
    def can_submit(self) -> bool:
        return bool(self.leave_type_id) and not self.is_pending

    def leave_type_options(self) -> dict:
        return {lt.id: lt.name for lt in self.leave_types}

    def build_payload(self) -> Payload:
        """Raises ``ValueError`` when total or year is not an integer."""
        try:
            total = int(str(self.total_leaves).strip())
        except ValueError as exc:
            raise ValueError("Total leaves must be a whole number.") from exc
        try:
            year = int(str(self.year).strip())
        except ValueError as exc:
            raise ValueError("Year must be a whole number.") from exc
        if total < 0:
            raise ValueError("Total leaves must be non-negative.")
        return {
            "userId": self.employee.id,
            "leaveTypeId": self.leave_type_id,
            "totalLeaves": total,
            "year": year,
        }

    def submit(self) -> bool:
        if not self.can_submit:
            return False
        if self.assign_quota is None:
            raise RuntimeError("LeaveQuotaVM has no assign use case wired")
        try:
            payload = self.build_payload()
        except ValueError as exc:
            emit(self.on_notify, Notification.error(str(exc)))
            return False
        self.is_pending = True
        try:
            message = self.assign_quota(payload)
        except UseCaseError as err:
            emit(self.on_notify, Notification.error(err.message))
            return False
        finally:
            self.is_pending = False
        emit(self.on_notify, Notification.success(message))
        self.leave_type_id = ""
        self.total_leaves = DEFAULT_TOTAL_LEAVES
        if self.on_done:
            self.on_done()
        return True
