from __future__ import annotations

"""Normalize REST payloads (camelCase JSON) into domain entities."""

import math
from datetime import date
from typing import Any, Callable, List, Mapping, Optional, Sequence, TypeVar

from .entities import (
    AccessLevel,
    CurrentUser,
    DashboardStats,
    Department,
    EmployeeStatus,
    Holiday,
    LeaveType,
    UserProfile,
    UserRole,
)

T = TypeVar("T")


def _normalize_identifier(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        token = value.strip()
    else:
        token = str(value).strip()
    return token or None


def _require_identifier(payload: Mapping[str, Any], key: str, ctx: str) -> str:
    token = _normalize_identifier(payload.get(key))
    if not token:
        raise ValueError(f"{ctx}: missing '{key}'")
    return token


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _optional_text(value: Any) -> Optional[str]:
    text = _text(value)
    return text or None


def _coerce_count(value: Any) -> int:
    """Return a non-negative integer; missing or malformed values become 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        try:
            numeric = float(str(value).strip())
        except (TypeError, ValueError):
            return 0
    if not math.isfinite(numeric):
        return 0
    return max(int(numeric), 0)


def parse_date(value: Any, *, ctx: str = "date") -> date:
    """Parse ``YYYY-MM-DD`` (or an ISO timestamp) into a ``date``."""
    if isinstance(value, date):
        return value
    text = _text(value)
    if len(text) >= 10:
        text = text[:10]
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"{ctx}: invalid date {value!r}") from exc


def _as_mapping(raw: Any, ctx: str) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise ValueError(f"{ctx}: expected object payload")
    return raw


def _parse_list(raw: Any, parser: Callable[[Mapping[str, Any]], T]) -> List[T]:
    if not isinstance(raw, Sequence) or isinstance(raw, (str, bytes)):
        return []
    return [parser(entry) for entry in raw if isinstance(entry, Mapping)]


# ---------------------------------------------------------------------------
# Single entities
# ---------------------------------------------------------------------------
def parse_stats(raw: Any) -> DashboardStats:
    """Build ``DashboardStats``; absent payloads yield all-zero counters."""
    if not isinstance(raw, Mapping):
        return DashboardStats.empty()
    return DashboardStats(
        total_employees=_coerce_count(raw.get("totalEmployees")),
        present_today=_coerce_count(raw.get("presentToday")),
        on_leave=_coerce_count(raw.get("onLeave")),
        pending_approvals=_coerce_count(raw.get("pendingApprovals")),
        pending_reimbursements=_coerce_count(raw.get("pendingReimbursements")),
        pending_regularizations=_coerce_count(raw.get("pendingRegularizations")),
    )


def parse_user_profile(raw: Any) -> UserProfile:
    payload = _as_mapping(raw, "employee")
    return UserProfile(
        id=_require_identifier(payload, "id", "employee"),
        first_name=_text(payload.get("firstName")),
        last_name=_text(payload.get("lastName")),
        email=_text(payload.get("email")),
        username=_text(payload.get("username")),
        status=EmployeeStatus.parse(payload.get("status")),
        photo=_optional_text(payload.get("photo")),
        department_id=_normalize_identifier(payload.get("departmentId")),
        role_id=_normalize_identifier(payload.get("roleId")),
        middle_name=_optional_text(payload.get("middleName")),
        phone=_optional_text(payload.get("phone")),
        gender=_optional_text(payload.get("gender")),
        birthdate=_optional_text(payload.get("birthdate")),
        joining_date=_optional_text(payload.get("joiningDate")),
        street=_optional_text(payload.get("street")),
        city=_optional_text(payload.get("city")),
        state=_optional_text(payload.get("state")),
        country=_optional_text(payload.get("country")),
        user_type=_optional_text(payload.get("userType")),
        bank_account=_optional_text(payload.get("bankAccount")),
        insurance_opted=bool(payload.get("insuranceOpted")),
    )


def parse_role(raw: Any) -> UserRole:
    payload = _as_mapping(raw, "role")
    return UserRole(
        id=_require_identifier(payload, "id", "role"),
        role_name=_text(payload.get("roleName")),
        access_level=AccessLevel.parse(payload.get("accessLevel")),
    )


def parse_department(raw: Any) -> Department:
    payload = _as_mapping(raw, "department")
    return Department(
        id=_require_identifier(payload, "id", "department"),
        name=_text(payload.get("name")),
    )


def parse_leave_type(raw: Any) -> LeaveType:
    payload = _as_mapping(raw, "leave_type")
    return LeaveType(
        id=_require_identifier(payload, "id", "leave_type"),
        name=_text(payload.get("name")),
    )


def parse_holiday(raw: Any) -> Holiday:
    payload = _as_mapping(raw, "holiday")
    holiday_id = _require_identifier(payload, "id", "holiday")
    ctx = f"holiday[{holiday_id}]"
    total = _coerce_count(payload.get("totalHolidays"))
    return Holiday(
        id=holiday_id,
        name=_text(payload.get("name")),
        from_date=parse_date(payload.get("fromDate"), ctx=f"{ctx}.fromDate"),
        to_date=parse_date(payload.get("toDate"), ctx=f"{ctx}.toDate"),
        total_holidays=max(total, 1),
        holiday_type=_text(payload.get("type")) or "National",
    )


def parse_current_user(raw: Any) -> CurrentUser:
    payload = _as_mapping(raw, "current_user")
    return CurrentUser(
        id=_require_identifier(payload, "id", "current_user"),
        first_name=_text(payload.get("firstName")),
        last_name=_text(payload.get("lastName")),
        email=_text(payload.get("email")),
        username=_text(payload.get("username")),
        role_name=_text(payload.get("roleName")) or "Employee",
        access_level=AccessLevel.parse(payload.get("accessLevel")),
        role_id=_normalize_identifier(payload.get("roleId")),
        department_id=_normalize_identifier(payload.get("departmentId")),
    )


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------
def parse_user_profiles(raw: Any) -> List[UserProfile]:
    return _parse_list(raw, parse_user_profile)


def parse_roles(raw: Any) -> List[UserRole]:
    return _parse_list(raw, parse_role)


def parse_departments(raw: Any) -> List[Department]:
    return _parse_list(raw, parse_department)


def parse_leave_types(raw: Any) -> List[LeaveType]:
    return _parse_list(raw, parse_leave_type)


def parse_holidays(raw: Any) -> List[Holiday]:
    return _parse_list(raw, parse_holiday)


__all__ = [
    "parse_current_user",
    "parse_date",
    "parse_department",
    "parse_departments",
    "parse_holiday",
    "parse_holidays",
    "parse_leave_type",
    "parse_leave_types",
    "parse_role",
    "parse_roles",
    "parse_stats",
    "parse_user_profile",
    "parse_user_profiles",
]
