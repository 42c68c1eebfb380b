from __future__ import annotations
from typing import Any, Dict, List, Optional, Protocol

EmployeeId = str
HolidayId = str
Payload = Dict[str, Any]


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str, *, status: Optional[int] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status = status


# ---- Ports (Hexagonal boundaries) ----
class HrApiPort(Protocol):
    """Read and mutate HR resources through the REST API.

    Read methods return raw JSON (dicts/lists); normalization into domain
    entities happens in the use cases.
    """

    def current_user(self) -> Payload: ...
    def dashboard_stats(self) -> Payload: ...
    def list_employees(self) -> List[Payload]: ...
    def create_employee(self, payload: Payload) -> Payload: ...
    def update_employee(self, employee_id: EmployeeId, payload: Payload) -> Payload: ...
    def delete_employee(self, employee_id: EmployeeId) -> None: ...
    def list_roles(self) -> List[Payload]: ...
    def list_departments(self) -> List[Payload]: ...
    def list_leave_types(self) -> List[Payload]: ...
    def assign_leave_quota(self, payload: Payload) -> Payload: ...
    def list_holidays(self) -> List[Payload]: ...
    def create_holiday(self, payload: Payload) -> Payload: ...
    def update_holiday(self, holiday_id: HolidayId, payload: Payload) -> Payload: ...


class StoragePort(Protocol):
    """Persistence for user settings."""

    def save_user_settings(self, payload: Dict) -> None: ...
    def load_user_settings(self) -> Optional[Dict]: ...
