
"""Domain package exports for value objects and lookup results."""

from .entities import (
    Absent,
    AccessLevel,
    CurrentUser,
    DashboardStats,
    Department,
    EmployeeStatus,
    Holiday,
    LeaveType,
    LookupLabel,
    Resolved,
    Unresolved,
    UserProfile,
    UserRole,
)
from .normalizer import parse_stats

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
    "parse_stats",
]
