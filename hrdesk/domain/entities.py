from __future__ import annotations

"""Domain value objects shared across adapters, use-cases, and view models."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional, Union


class AccessLevel(str, Enum):
    """Closed set of access levels a role can grant."""

    ADMIN = "Admin"
    HR = "HR"
    MANAGER = "Manager"
    ACCOUNTANT = "Accountant"
    EMPLOYEE = "Employee"

    @classmethod
    def parse(cls, value: Any) -> "AccessLevel":
        """Return the matching level, falling back to ``EMPLOYEE``."""
        if isinstance(value, AccessLevel):
            return value
        token = str(value or "").strip()
        for level in cls:
            if level.value == token:
                return level
        return cls.EMPLOYEE

    def __str__(self) -> str:
        return self.value


class EmployeeStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"

    @classmethod
    def parse(cls, value: Any) -> "EmployeeStatus":
        token = str(value or "").strip().lower()
        if token == "inactive":
            return cls.INACTIVE
        return cls.ACTIVE

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DashboardStats:
    """Latest counters reported by ``GET /api/dashboard/stats``."""

    total_employees: int = 0
    present_today: int = 0
    on_leave: int = 0
    pending_approvals: int = 0
    pending_reimbursements: int = 0
    pending_regularizations: int = 0

    def __post_init__(self) -> None:
        for name in (
            "total_employees",
            "present_today",
            "on_leave",
            "pending_approvals",
            "pending_reimbursements",
            "pending_regularizations",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"DashboardStats.{name} must be an integer.")
            if value < 0:
                raise ValueError(f"DashboardStats.{name} must be non-negative.")

    @classmethod
    def empty(cls) -> "DashboardStats":
        return cls()

    @property
    def pending_total(self) -> int:
        """Leave approvals, reimbursements and regularizations awaiting action."""
        return (
            self.pending_approvals
            + self.pending_reimbursements
            + self.pending_regularizations
        )


@dataclass(frozen=True)
class UserProfile:
    """Employee record owned by the directory service."""

    id: str
    first_name: str
    last_name: str
    email: str
    username: str
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    photo: Optional[str] = None
    department_id: Optional[str] = None
    role_id: Optional[str] = None
    middle_name: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    birthdate: Optional[str] = None
    joining_date: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    user_type: Optional[str] = None
    bank_account: Optional[str] = None
    insurance_opted: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError("UserProfile.id must be a non-empty string.")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def initials(self) -> str:
        return f"{self.first_name[:1]}{self.last_name[:1]}".upper()


@dataclass(frozen=True)
class UserRole:
    """Lookup row for ``GET /api/roles``."""

    id: str
    role_name: str
    access_level: AccessLevel = AccessLevel.EMPLOYEE


@dataclass(frozen=True)
class Department:
    id: str
    name: str


@dataclass(frozen=True)
class LeaveType:
    id: str
    name: str


@dataclass(frozen=True)
class Holiday:
    """Company holiday spanning ``from_date`` to ``to_date`` inclusive."""

    id: str
    name: str
    from_date: date
    to_date: date
    total_holidays: int = 1
    holiday_type: str = "National"

    def __post_init__(self) -> None:
        if not isinstance(self.from_date, date) or not isinstance(self.to_date, date):
            raise TypeError("Holiday dates must be datetime.date instances.")
        if isinstance(self.total_holidays, bool) or not isinstance(self.total_holidays, int):
            raise TypeError("Holiday.total_holidays must be an integer.")
        if self.total_holidays < 1:
            raise ValueError("Holiday.total_holidays must be at least 1.")

    @property
    def is_single_day(self) -> bool:
        return self.from_date == self.to_date


@dataclass(frozen=True)
class CurrentUser:
    """Identity of the signed-in user as returned by ``GET /api/auth/me``."""

    id: str
    first_name: str
    last_name: str
    email: str
    username: str
    role_name: str = "Employee"
    access_level: AccessLevel = AccessLevel.EMPLOYEE
    role_id: Optional[str] = None
    department_id: Optional[str] = None


# ---- Lookup results ----
@dataclass(frozen=True)
class Resolved:
    """Foreign key matched a lookup row."""

    label: str

    def display(self) -> Optional[str]:
        return self.label


@dataclass(frozen=True)
class Unresolved:
    """Lookup table is loaded but has no row for ``raw_id``."""

    raw_id: str

    def display(self) -> Optional[str]:
        return self.raw_id


@dataclass(frozen=True)
class Absent:
    """No foreign key to resolve, or the lookup table is not loaded yet."""

    def display(self) -> Optional[str]:
        return None


LookupLabel = Union[Resolved, Unresolved, Absent]


__all__ = [
    "Absent",
    "AccessLevel",
    "CurrentUser",
    "DashboardStats",
    "Department",
    "EmployeeStatus",
    "Holiday",
    "LeaveType",
    "LookupLabel",
    "Resolved",
    "Unresolved",
    "UserProfile",
    "UserRole",
]
