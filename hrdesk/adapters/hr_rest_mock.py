from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set
from uuid import uuid4

from hrdesk.domain.ports import EmployeeId, HolidayId, HrApiPort, Payload

from .api_errors import ApiClientError

_ROLES: List[Payload] = [
    {"id": "role-admin", "roleName": "Super Admin", "accessLevel": "Admin"},
    {"id": "role-hr", "roleName": "HR Admin", "accessLevel": "HR"},
    {"id": "role-manager", "roleName": "Team Lead", "accessLevel": "Manager"},
    {"id": "role-accountant", "roleName": "Accountant", "accessLevel": "Accountant"},
    {"id": "role-employee", "roleName": "Staff", "accessLevel": "Employee"},
]

_DEPARTMENTS: List[Payload] = [
    {"id": "dept-eng", "name": "Engineering"},
    {"id": "dept-fin", "name": "Finance"},
    {"id": "dept-ops", "name": "Operations"},
]

_EMPLOYEES: List[Payload] = [
    {
        "id": "3f2a9c1e-0b7d-4c55-9e11-0a1b2c3d4e5f",
        "firstName": "Ann",
        "lastName": "Lee",
        "email": "ann.lee@example.com",
        "username": "alee",
        "status": "Active",
        "roleId": "role-admin",
        "departmentId": "dept-ops",
    },
    {
        "id": "7c1d2e3f-4a5b-4c6d-8e9f-a0b1c2d3e4f5",
        "firstName": "Ravi",
        "lastName": "Kumar",
        "email": "ravi.kumar@example.com",
        "username": "rkumar",
        "status": "Active",
        "roleId": "role-manager",
        "departmentId": "dept-eng",
    },
    {
        "id": "9a8b7c6d-5e4f-4a3b-2c1d-0e9f8a7b6c5d",
        "firstName": "Mei",
        "lastName": "Tan",
        "email": "mei.tan@example.com",
        "username": "mtan",
        "status": "Inactive",
        "roleId": None,
        "departmentId": "dept-fin",
    },
]

_HOLIDAYS: List[Payload] = [
    {"id": "h-1", "name": "Republic Day", "fromDate": "2025-01-26", "toDate": "2025-01-26", "totalHolidays": 1, "type": "National"},
    {"id": "h-2", "name": "Holi", "fromDate": "2025-03-14", "toDate": "2025-03-14", "totalHolidays": 1, "type": "National"},
    {"id": "h-3", "name": "Diwali", "fromDate": "2025-10-20", "toDate": "2025-10-22", "totalHolidays": 3, "type": "National"},
]

_LEAVE_TYPES: List[Payload] = [
    {"id": "lt-casual", "name": "Casual Leave"},
    {"id": "lt-sick", "name": "Sick Leave"},
]


@dataclass
class HrRestMock(HrApiPort):
    """Offline substitute for ``HrRestAdapter`` with deterministic demo data.

    ``protected_ids`` mimics the API refusing to delete employees that still
    have dependent records.
    """

    current_user_id: str = _EMPLOYEES[0]["id"]
    protected_ids: Set[str] = field(default_factory=set)
    stats: Payload = field(
        default_factory=lambda: {
            "totalEmployees": 3,
            "presentToday": 2,
            "onLeave": 1,
            "pendingApprovals": 2,
            "pendingReimbursements": 1,
            "pendingRegularizations": 0,
        }
    )

    def __post_init__(self) -> None:
        self._roles = copy.deepcopy(_ROLES)
        self._departments = copy.deepcopy(_DEPARTMENTS)
        self._employees: Dict[str, Payload] = {e["id"]: copy.deepcopy(e) for e in _EMPLOYEES}
        self._holidays: Dict[str, Payload] = {h["id"]: copy.deepcopy(h) for h in _HOLIDAYS}
        self.quota_assignments: List[Payload] = []

    # ---------- HrApiPort ----------

    def current_user(self) -> Payload:
        user = self._employees.get(self.current_user_id)
        if user is None:
            raise ApiClientError("User not found", status=404, payload={"message": "User not found"})
        role = self._role(user.get("roleId"))
        return {
            "id": user["id"],
            "firstName": user["firstName"],
            "lastName": user["lastName"],
            "email": user["email"],
            "username": user["username"],
            "roleName": role["roleName"] if role else "Employee",
            "accessLevel": role["accessLevel"] if role else "Employee",
            "roleId": user.get("roleId"),
            "departmentId": user.get("departmentId"),
        }

    def dashboard_stats(self) -> Payload:
        return dict(self.stats)

    def list_employees(self) -> List[Payload]:
        return [copy.deepcopy(e) for e in self._employees.values()]

    def create_employee(self, payload: Payload) -> Payload:
        record = {k: v for k, v in payload.items() if k != "password"}
        record["id"] = str(uuid4())
        record.setdefault("status", "Active")
        self._employees[record["id"]] = record
        return copy.deepcopy(record)

    def update_employee(self, employee_id: EmployeeId, payload: Payload) -> Payload:
        record = self._employees.get(employee_id)
        if record is None:
            raise self._not_found("Employee not found")
        record.update({k: v for k, v in payload.items() if k != "password"})
        return copy.deepcopy(record)

    def delete_employee(self, employee_id: EmployeeId) -> None:
        if employee_id == self.current_user_id:
            raise self._bad_request("You cannot delete your own account")
        if employee_id in self.protected_ids:
            raise self._bad_request("Employee has active records")
        if self._employees.pop(employee_id, None) is None:
            raise self._not_found("Employee not found")

    def list_roles(self) -> List[Payload]:
        return copy.deepcopy(self._roles)

    def list_departments(self) -> List[Payload]:
        return copy.deepcopy(self._departments)

    def list_leave_types(self) -> List[Payload]:
        return copy.deepcopy(_LEAVE_TYPES)

    def assign_leave_quota(self, payload: Payload) -> Payload:
        employee = self._employees.get(str(payload.get("userId")))
        if employee is None:
            raise self._not_found("Employee not found")
        self.quota_assignments.append(dict(payload))
        return {
            "message": f"Leave quota assigned to {employee['firstName']} {employee['lastName']}",
        }

    def list_holidays(self) -> List[Payload]:
        return [copy.deepcopy(h) for h in self._holidays.values()]

    def create_holiday(self, payload: Payload) -> Payload:
        record = dict(payload)
        record["id"] = f"h-{uuid4().hex[:8]}"
        self._holidays[record["id"]] = record
        return copy.deepcopy(record)

    def update_holiday(self, holiday_id: HolidayId, payload: Payload) -> Payload:
        record = self._holidays.get(holiday_id)
        if record is None:
            raise self._not_found("Holiday not found")
        record.update(payload)
        return copy.deepcopy(record)

    # ---------- helpers ----------

    def _role(self, role_id: Optional[str]) -> Optional[Dict[str, Any]]:
        for role in self._roles:
            if role["id"] == role_id:
                return role
        return None

    @staticmethod
    def _bad_request(message: str) -> ApiClientError:
        return ApiClientError(message, status=400, payload={"message": message})

    @staticmethod
    def _not_found(message: str) -> ApiClientError:
        return ApiClientError(message, status=404, payload={"message": message})
