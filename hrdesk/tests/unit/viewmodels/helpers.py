from __future__ import annotations

from typing import List, Optional

from hrdesk.domain.entities import (
    AccessLevel,
    CurrentUser,
    Department,
    EmployeeStatus,
    UserProfile,
    UserRole,
)


def make_employee(
    employee_id: str = "3f2a9c1e-0b7d-4c55-9e11-0a1b2c3d4e5f",
    first_name: str = "Ann",
    last_name: str = "Lee",
    *,
    email: Optional[str] = None,
    username: Optional[str] = None,
    role_id: Optional[str] = "role-admin",
    department_id: Optional[str] = "dept-ops",
    status: EmployeeStatus = EmployeeStatus.ACTIVE,
) -> UserProfile:
    return UserProfile(
        id=employee_id,
        first_name=first_name,
        last_name=last_name,
        email=email or f"{first_name.lower()}.{last_name.lower()}@example.com",
        username=username or f"{first_name[:1].lower()}{last_name.lower()}",
        status=status,
        role_id=role_id,
        department_id=department_id,
    )


def make_current_user(access_level: AccessLevel = AccessLevel.ADMIN, first_name: str = "Ann") -> CurrentUser:
    return CurrentUser(
        id="3f2a9c1e-0b7d-4c55-9e11-0a1b2c3d4e5f",
        first_name=first_name,
        last_name="Lee",
        email="ann.lee@example.com",
        username="alee",
        role_name="Super Admin",
        access_level=access_level,
    )


def make_roles() -> List[UserRole]:
    return [
        UserRole(id="role-admin", role_name="Super Admin", access_level=AccessLevel.ADMIN),
        UserRole(id="role-manager", role_name="Team Lead", access_level=AccessLevel.MANAGER),
    ]


def make_departments() -> List[Department]:
    return [Department(id="dept-ops", name="Operations"), Department(id="dept-eng", name="Engineering")]


__all__ = ["make_current_user", "make_departments", "make_employee", "make_roles"]
