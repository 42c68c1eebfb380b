from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Optional

import pytest

from hrdesk.domain.ports import UseCaseError
from hrdesk.tests.unit.viewmodels.helpers import make_employee
from hrdesk.viewmodels.employee_form_vm import USER_TYPE_OPTIONS, EmployeeFormVM, initial_fields
from hrdesk.viewmodels.notifications import Notification


class _SaveRecorder:
    def __init__(self, error: Optional[UseCaseError] = None) -> None:
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, payload: Dict[str, Any], *, employee_id: Optional[str] = None) -> None:
        self.calls.append({"payload": payload, "employee_id": employee_id})
        if self.error:
            raise self.error


def _fill(form: EmployeeFormVM, **overrides: str) -> None:
    values = {
        "firstName": "Zoe",
        "lastName": "Ng",
        "email": "zoe.ng@example.com",
        "username": "zng",
        "password": "secret1",
    }
    values.update(overrides)
    for name, value in values.items():
        form.set_field(name, value)


def test_new_form_defaults() -> None:
    fields = initial_fields(None)

    assert fields["status"] == "Active"
    assert fields["insuranceOpted"] == "no"
    assert fields["password"] == ""


def test_edit_form_seeds_from_employee() -> None:
    form = EmployeeFormVM(employee=make_employee())

    assert form.is_edit
    assert form.title == "Edit Employee"
    assert form.fields["firstName"] == "Ann"
    assert form.fields["password"] == ""


def test_validation_messages_for_empty_new_form() -> None:
    form = EmployeeFormVM()

    errors = form.validate()

    assert errors == {
        "firstName": "First name is required",
        "lastName": "Last name is required",
        "email": "Invalid email address",
        "username": "Username must be at least 3 characters",
        "password": "Password is required for new employees",
    }


def test_short_password_and_edit_without_password() -> None:
    form = EmployeeFormVM()
    _fill(form, password="abc")
    assert form.validate() == {"password": "Password must be at least 6 characters"}

    edit = EmployeeFormVM(employee=make_employee())
    assert edit.validate() == {}


def test_build_payload_normalizes_fields() -> None:
    form = EmployeeFormVM(employee=make_employee())
    form.set_field("insuranceOpted", "yes")
    form.set_field("birthdate", "  ")

    payload = form.build_payload()

    assert payload["insuranceOpted"] is True
    assert payload["birthdate"] is None
    assert "password" not in payload
    assert payload["status"] == "Active"


def test_set_field_rejects_unknown_name() -> None:
    with pytest.raises(KeyError):
        EmployeeFormVM().set_field("salary", "1")


def test_submit_create_success() -> None:
    save = _SaveRecorder()
    notes: List[Notification] = []
    invalidated: List[str] = []
    saved: List[bool] = []
    form = EmployeeFormVM(
        save_employee=save,
        on_notify=notes.append,
        on_invalidate=invalidated.append,
        on_saved=lambda: saved.append(True),
    )
    _fill(form)

    assert form.submit() is True

    assert save.calls[0]["employee_id"] is None
    assert save.calls[0]["payload"]["password"] == "secret1"
    assert notes == [Notification.success("Employee created successfully")]
    assert invalidated == ["employees"]
    assert saved == [True]


def test_submit_invalid_sends_nothing() -> None:
    save = _SaveRecorder()
    form = EmployeeFormVM(save_employee=save)

    assert form.submit() is False
    assert save.calls == []


def test_submit_update_failure_shows_message() -> None:
    save = _SaveRecorder(UseCaseError("SAVE_EMPLOYEE_FAILED", "Email already exists"))
    notes: List[Notification] = []
    invalidated: List[str] = []
    employee = make_employee()
    form = EmployeeFormVM(employee=employee, save_employee=save, on_notify=notes.append, on_invalidate=invalidated.append)

    assert form.submit() is False

    assert save.calls[0]["employee_id"] == employee.id
    assert notes == [Notification.error("Email already exists")]
    assert invalidated == []
    assert form.is_saving is False


def test_select_inputs_only_receive_known_choices() -> None:
    employee = replace(make_employee(), gender="male", user_type="Vendor")
    form = EmployeeFormVM(employee=employee)

    assert form.selected_option("gender") is None
    assert form.selected_option("userType") == "Vendor"
    assert form.selected_option("status") == "Active"
    assert form.selected_option("insuranceOpted") == "no"
    assert USER_TYPE_OPTIONS == ("Admin", "Manager", "Individual", "Vendor", "Contractor")


def test_unmatched_gender_is_still_sent_unchanged() -> None:
    form = EmployeeFormVM(employee=replace(make_employee(), gender="male"))

    assert form.build_payload()["gender"] == "male"


def test_uploaded_photo_becomes_data_url() -> None:
    form = EmployeeFormVM()

    form.set_photo(b"\x89PNG", "image/png")

    assert form.fields["photo"] == "data:image/png;base64,iVBORw=="
    assert form.build_payload()["photo"] == "data:image/png;base64,iVBORw=="
