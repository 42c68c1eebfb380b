from __future__ import annotations

import pytest

from hrdesk.adapters.api_errors import ApiClientError
from hrdesk.adapters.hr_rest_mock import HrRestMock

RAVI = "7c1d2e3f-4a5b-4c6d-8e9f-a0b1c2d3e4f5"


def test_current_user_carries_role_access_level() -> None:
    mock = HrRestMock()

    user = mock.current_user()

    assert user["firstName"] == "Ann"
    assert user["accessLevel"] == "Admin"
    assert user["roleName"] == "Super Admin"


def test_delete_own_account_is_rejected() -> None:
    mock = HrRestMock()

    with pytest.raises(ApiClientError) as err:
        mock.delete_employee(mock.current_user_id)

    assert err.value.status == 400
    assert err.value.server_message == "You cannot delete your own account"
    assert len(mock.list_employees()) == 3


def test_protected_employee_cannot_be_deleted() -> None:
    mock = HrRestMock(protected_ids={RAVI})

    with pytest.raises(ApiClientError) as err:
        mock.delete_employee(RAVI)

    assert err.value.server_message == "Employee has active records"


def test_delete_and_unknown_id() -> None:
    mock = HrRestMock()

    mock.delete_employee(RAVI)

    assert RAVI not in [e["id"] for e in mock.list_employees()]
    with pytest.raises(ApiClientError) as err:
        mock.delete_employee(RAVI)
    assert err.value.status == 404


def test_create_employee_drops_password() -> None:
    mock = HrRestMock()

    created = mock.create_employee({"firstName": "Zoe", "lastName": "Ng", "username": "zng", "password": "secret1"})

    assert "password" not in created
    assert created["status"] == "Active"
    assert len(mock.list_employees()) == 4


def test_assign_quota_records_payload() -> None:
    mock = HrRestMock()

    response = mock.assign_leave_quota({"userId": RAVI, "leaveTypeId": "lt-sick", "totalLeaves": 5, "year": 2025})

    assert response == {"message": "Leave quota assigned to Ravi Kumar"}
    assert mock.quota_assignments[0]["leaveTypeId"] == "lt-sick"


def test_returned_records_are_copies() -> None:
    mock = HrRestMock()

    mock.list_holidays()[0]["name"] = "changed"

    assert mock.list_holidays()[0]["name"] == "Republic Day"
