"""Create/edit employee dialog state, validation and payload building."""

from __future__ import annotations

import base64
import re
from typing import Any, Callable, Dict, Optional

from hrdesk.app.query_cache import RESOURCE_EMPLOYEES
from hrdesk.domain.entities import UserProfile
from hrdesk.domain.ports import Payload, UseCaseError

from .notifications import Notification, Notifier, emit

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

FORM_FIELDS = (
    "firstName",
    "middleName",
    "lastName",
    "email",
    "phone",
    "username",
    "password",
    "gender",
    "birthdate",
    "street",
    "city",
    "state",
    "country",
    "status",
    "userType",
    "bankAccount",
    "insuranceOpted",
    "joiningDate",
    "photo",
)
STATUS_OPTIONS = ("Active", "Inactive")
GENDER_OPTIONS = ("Male", "Female", "Other")
USER_TYPE_OPTIONS = ("Admin", "Manager", "Individual", "Vendor", "Contractor")
INSURANCE_OPTIONS = {"yes": "Yes", "no": "No"}
SELECT_OPTIONS = {
    "status": STATUS_OPTIONS,
    "gender": GENDER_OPTIONS,
    "userType": USER_TYPE_OPTIONS,
    "insuranceOpted": tuple(INSURANCE_OPTIONS),
}
_NULLABLE_DATES = ("birthdate", "joiningDate")

CreateOrUpdate = Callable[..., Any]


def initial_fields(employee: Optional[UserProfile]) -> Dict[str, str]:
    """Form defaults; an existing employee seeds every field but the password."""
    if employee is None:
        fields = {name: "" for name in FORM_FIELDS}
        fields["status"] = "Active"
        fields["insuranceOpted"] = "no"
        return fields
    return {
        "firstName": employee.first_name,
        "middleName": employee.middle_name or "",
        "lastName": employee.last_name,
        "email": employee.email,
        "phone": employee.phone or "",
        "username": employee.username,
        "password": "",
        "gender": employee.gender or "",
        "birthdate": employee.birthdate or "",
        "street": employee.street or "",
        "city": employee.city or "",
        "state": employee.state or "",
        "country": employee.country or "",
        "status": str(employee.status),
        "userType": employee.user_type or "",
        "bankAccount": employee.bank_account or "",
        "insuranceOpted": "yes" if employee.insurance_opted else "no",
        "joiningDate": employee.joining_date or "",
        "photo": employee.photo or "",
    }


class EmployeeFormVM:
    """Backs the Add Employee and Edit Employee dialogs."""

    def __init__(
        self,
        *,
        employee: Optional[UserProfile] = None,
        save_employee: Optional[CreateOrUpdate] = None,
        on_notify: Optional[Notifier] = None,
        on_invalidate: Optional[Callable[[str], None]] = None,
        on_saved: Optional[Callable[[], None]] = None,
    ) -> None:
        self.employee = employee
        self.save_employee = save_employee
        self.on_notify = on_notify
        self.on_invalidate = on_invalidate
        self.on_saved = on_saved
        self.fields: Dict[str, str] = initial_fields(employee)
        self.errors: Dict[str, str] = {}
        self.is_saving = False

    @property
    def is_edit(self) -> bool:
        return self.employee is not None

    @property
    def title(self) -> str:
        return "Edit Employee" if self.is_edit else "Add New Employee"

    def set_field(self, name: str, value: Any) -> None:
        if name not in self.fields:
            raise KeyError(f"Unknown employee form field: {name}")
        self.fields[name] = "" if value is None else str(value)
        self.errors.pop(name, None)

    def selected_option(self, name: str) -> Optional[str]:
        """Value for a select input, or ``None`` when the stored text is not a choice."""
        value = self.fields[name]
        return value if value in SELECT_OPTIONS[name] else None

    def set_photo(self, content: bytes, content_type: Optional[str]) -> None:
        """Store an uploaded picture as a ``data:`` URL, the format the API keeps."""
        encoded = base64.b64encode(content).decode("ascii")
        self.set_field("photo", f"data:{content_type or 'application/octet-stream'};base64,{encoded}")

    def validate(self) -> Dict[str, str]:
        f = self.fields
        errors: Dict[str, str] = {}
        if not f["firstName"]:
            errors["firstName"] = "First name is required"
        if not f["lastName"]:
            errors["lastName"] = "Last name is required"
        if not _EMAIL_RE.match(f["email"]):
            errors["email"] = "Invalid email address"
        if len(f["username"]) < 3:
            errors["username"] = "Username must be at least 3 characters"
        password = f["password"]
        if password.strip():
            if len(password) < 6:
                errors["password"] = "Password must be at least 6 characters"
        elif not self.is_edit:
            errors["password"] = "Password is required for new employees"
        self.errors = errors
        return errors

    def build_payload(self) -> Payload:
        """camelCase body for ``POST``/``PATCH /api/employees``."""
        payload: Payload = dict(self.fields)
        payload["insuranceOpted"] = self.fields["insuranceOpted"] == "yes"
        for key in _NULLABLE_DATES:
            payload[key] = self.fields[key].strip() or None
        if not self.fields["password"].strip():
            payload.pop("password")
        payload["status"] = self.fields["status"] or "Active"
        return payload

    def submit(self) -> bool:
        """Validate and send; returns ``True`` on success."""
        if self.validate():
            return False
        if self.save_employee is None:
            raise RuntimeError("EmployeeFormVM has no save use case wired")
        employee_id = self.employee.id if self.employee else None
        self.is_saving = True
        try:
            self.save_employee(self.build_payload(), employee_id=employee_id)
        except UseCaseError as err:
            emit(self.on_notify, Notification.error(err.message))
            return False
        finally:
            self.is_saving = False
        verb = "updated" if self.is_edit else "created"
        emit(self.on_notify, Notification.success(f"Employee {verb} successfully"))
        if self.on_invalidate:
            self.on_invalidate(RESOURCE_EMPLOYEES)
        if self.on_saved:
            self.on_saved()
        return True
