"""Employee directory projection and delete workflow.

Call context:
    ``WebRuntime`` pushes the employee, role, department and current-user
    snapshots into :class:`DirectoryVM` before each render of the
    ``/employees`` page. Deleting an employee goes through the
    ``DeleteEmployee`` use case injected by the runtime.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from hrdesk.app.query_cache import RESOURCE_EMPLOYEES
from hrdesk.domain.entities import (
    Absent,
    AccessLevel,
    CurrentUser,
    Department,
    EmployeeStatus,
    LookupLabel,
    Resolved,
    Unresolved,
    UserProfile,
    UserRole,
)
from hrdesk.domain.ports import UseCaseError

from .notifications import Notification, Notifier, emit

LOGGER = logging.getLogger(__name__)

ACCESS_DENIED_MESSAGE = "Access Denied. Only Super Admin users can view employee management."
EMPTY_MESSAGE = "No employees found"
NO_ROLE_LABEL = "No role assigned"
DELETE_SUCCESS_MESSAGE = "Employee deleted successfully"
DELETE_FALLBACK_MESSAGE = "Failed to delete employee"


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------
def _search_text(employee: UserProfile) -> str:
    return f"{employee.first_name} {employee.last_name} {employee.email} {employee.username}".lower()


def filter_directory(employees: Sequence[UserProfile], query: Optional[str]) -> List[UserProfile]:
    """Case-insensitive substring filter over name, email and username.

    Input order is preserved; an empty query keeps every employee.
    """
    needle = (query or "").lower()
    if not needle:
        return list(employees)
    return [employee for employee in employees if needle in _search_text(employee)]


def resolve_role(role_id: Optional[str], roles: Optional[Sequence[UserRole]]) -> LookupLabel:
    """Resolve ``role_id`` against the role table.

    ``roles is None`` means the table has not loaded yet.
    """
    if not role_id or roles is None:
        return Absent()
    for role in roles:
        if role.id == role_id:
            return Resolved(f"{role.role_name} ({role.access_level})")
    return Unresolved(role_id)


def resolve_role_label(role_id: Optional[str], roles: Optional[Sequence[UserRole]]) -> Optional[str]:
    return resolve_role(role_id, roles).display()


def resolve_department(
    department_id: Optional[str], departments: Optional[Sequence[Department]]
) -> LookupLabel:
    if not department_id or departments is None:
        return Absent()
    for department in departments:
        if department.id == department_id:
            return Resolved(department.name)
    return Unresolved(department_id)


def resolve_department_label(
    department_id: Optional[str], departments: Optional[Sequence[Department]]
) -> Optional[str]:
    return resolve_department(department_id, departments).display()


def can_manage(current_user: Optional[CurrentUser], *, is_loading: bool = False) -> bool:
    """Only Admins manage employees, and never before the identity fetch resolves."""
    if is_loading or current_user is None:
        return False
    return current_user.access_level == AccessLevel.ADMIN


def confirm_message(employee: UserProfile) -> str:
    return f"Are you sure you want to delete {employee.first_name} {employee.last_name}?"


# ---------------------------------------------------------------------------
# Row model
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class DirectoryRow:
    """Display row for the employee table."""
    id: str
    short_id: str
    full_name: str
    initials: str
    photo: Optional[str]
    email: str
    department: str
    role: str
    has_role: bool
    status: str
    status_variant: str


def to_row(
    employee: UserProfile,
    roles: Optional[Sequence[UserRole]],
    departments: Optional[Sequence[Department]],
) -> DirectoryRow:
    has_role = bool(employee.role_id)
    if has_role:
        role = resolve_role_label(employee.role_id, roles) or ""
    else:
        role = NO_ROLE_LABEL
    status = str(employee.status)
    return DirectoryRow(
        id=employee.id,
        short_id=f"{employee.id[:8]}...",
        full_name=f"{employee.first_name} {employee.last_name}",
        initials=employee.initials,
        photo=employee.photo,
        email=employee.email,
        department=resolve_department_label(employee.department_id, departments) or "-",
        role=role,
        has_role=has_role,
        status=status,
        status_variant="default" if employee.status == EmployeeStatus.ACTIVE else "secondary",
    )


# ---------------------------------------------------------------------------
# View model
# ---------------------------------------------------------------------------
class DirectoryVM:
    """State for the employee-management page.

    Snapshots are replaced wholesale by :meth:`apply_snapshots`; the view model
    never edits the employee list itself, so a failed delete leaves it as is.
    """

    skeleton_count = 5
    empty_message = EMPTY_MESSAGE
    access_denied_message = ACCESS_DENIED_MESSAGE

    def __init__(
        self,
        *,
        delete_employee: Optional[Callable[[str], None]] = None,
        on_notify: Optional[Notifier] = None,
        on_invalidate: Optional[Callable[[str], None]] = None,
        on_changed: Optional[Callable[[], None]] = None,
    ) -> None:
        self.delete_employee_uc = delete_employee
        self.on_notify = on_notify
        self.on_invalidate = on_invalidate
        self.on_changed = on_changed

        self.query = ""
        self.employees: Optional[List[UserProfile]] = None
        self.roles: Optional[List[UserRole]] = None
        self.departments: Optional[List[Department]] = None
        self.current_user: Optional[CurrentUser] = None
        self.is_loading = True
        self.is_loading_user = True
        self.is_deleting = False

    def apply_snapshots(
        self,
        *,
        employees: Optional[Sequence[UserProfile]],
        roles: Optional[Sequence[UserRole]],
        departments: Optional[Sequence[Department]],
        current_user: Optional[CurrentUser],
        is_loading: bool = False,
        is_loading_user: bool = False,
    ) -> None:
        self.employees = None if employees is None else list(employees)
        self.roles = None if roles is None else list(roles)
        self.departments = None if departments is None else list(departments)
        self.current_user = current_user
        self.is_loading = bool(is_loading)
        self.is_loading_user = bool(is_loading_user)

    def set_query(self, value: Optional[str]) -> None:
        self.query = value or ""
        if self.on_changed:
            self.on_changed()

    # ------------------------------------------------------------------
    @property
    def can_manage(self) -> bool:
        return can_manage(self.current_user, is_loading=self.is_loading_user)

    @property
    def access_denied(self) -> bool:
        return not self.can_manage

    def visible_employees(self) -> List[UserProfile]:
        return filter_directory(self.employees or [], self.query)

    def rows(self) -> List[DirectoryRow]:
        return [to_row(emp, self.roles, self.departments) for emp in self.visible_employees()]

    def find(self, employee_id: str) -> Optional[UserProfile]:
        for employee in self.employees or []:
            if employee.id == employee_id:
                return employee
        return None

    # ------------------------------------------------------------------
    # Delete workflow
    # ------------------------------------------------------------------
    @staticmethod
    def confirm_message(employee: UserProfile) -> str:
        return confirm_message(employee)

    def request_delete(self, employee: UserProfile, confirm: Callable[[str], bool]) -> bool:
        """Ask ``confirm`` first; nothing is sent when the user declines.

        Returns ``True`` when the delete request was issued.
        """
        if self.is_deleting:
            return False
        if not confirm(self.confirm_message(employee)):
            LOGGER.debug("Delete of %s declined", employee.id)
            return False
        self.delete_employee(employee)
        return True

    def delete_employee(self, employee: UserProfile) -> bool:
        if self.delete_employee_uc is None:
            raise RuntimeError("DirectoryVM has no delete use case wired")
        self.is_deleting = True
        try:
            self.delete_employee_uc(employee.id)
        except UseCaseError as err:
            emit(self.on_notify, Notification.error(err.message or DELETE_FALLBACK_MESSAGE))
            return False
        finally:
            self.is_deleting = False
        emit(self.on_notify, Notification.success(DELETE_SUCCESS_MESSAGE))
        if self.on_invalidate:
            self.on_invalidate(RESOURCE_EMPLOYEES)
        return True
