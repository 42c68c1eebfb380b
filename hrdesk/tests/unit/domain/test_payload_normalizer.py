from __future__ import annotations

from datetime import date

import pytest

from hrdesk.domain.entities import AccessLevel, EmployeeStatus
from hrdesk.domain.normalizer import (
    parse_current_user,
    parse_date,
    parse_holiday,
    parse_holidays,
    parse_roles,
    parse_stats,
    parse_user_profile,
    parse_user_profiles,
)


def test_parse_stats_coerces_missing_and_malformed_counts() -> None:
    stats = parse_stats(
        {
            "totalEmployees": "50",
            "presentToday": 42.7,
            "onLeave": None,
            "pendingApprovals": "n/a",
            "pendingReimbursements": -3,
        }
    )

    assert stats.total_employees == 50
    assert stats.present_today == 42
    assert stats.on_leave == 0
    assert stats.pending_approvals == 0
    assert stats.pending_reimbursements == 0
    assert stats.pending_regularizations == 0


def test_parse_stats_non_mapping_is_empty() -> None:
    assert parse_stats(None).total_employees == 0
    assert parse_stats(["oops"]).pending_total == 0


def test_parse_user_profile_maps_camel_case_fields() -> None:
    profile = parse_user_profile(
        {
            "id": "7c1d2e3f",
            "firstName": "Ravi",
            "lastName": "Kumar",
            "email": "ravi@example.com",
            "username": "rkumar",
            "status": "Inactive",
            "roleId": "role-manager",
            "departmentId": " ",
            "insuranceOpted": True,
            "joiningDate": "2024-02-01",
        }
    )

    assert profile.id == "7c1d2e3f"
    assert profile.status is EmployeeStatus.INACTIVE
    assert profile.role_id == "role-manager"
    assert profile.department_id is None
    assert profile.insurance_opted is True
    assert profile.joining_date == "2024-02-01"


def test_parse_user_profile_requires_id() -> None:
    with pytest.raises(ValueError, match="missing 'id'"):
        parse_user_profile({"firstName": "No", "lastName": "Id"})


def test_list_parsers_skip_non_object_entries() -> None:
    profiles = parse_user_profiles([{"id": "a", "firstName": "A"}, "junk", 3])
    roles = parse_roles([{"id": "r", "roleName": "Boss", "accessLevel": "Admin"}])

    assert [p.id for p in profiles] == ["a"]
    assert roles[0].access_level is AccessLevel.ADMIN
    assert parse_holidays({"not": "a list"}) == []


def test_parse_holiday_reads_dates_and_defaults() -> None:
    holiday = parse_holiday(
        {"id": "h-3", "name": "Diwali", "fromDate": "2025-10-20T00:00:00.000Z", "toDate": "2025-10-22"}
    )

    assert holiday.from_date == date(2025, 10, 20)
    assert holiday.to_date == date(2025, 10, 22)
    assert holiday.total_holidays == 1
    assert holiday.holiday_type == "National"


def test_parse_holiday_rejects_bad_date() -> None:
    with pytest.raises(ValueError, match=r"holiday\[h-9\]\.fromDate"):
        parse_holiday({"id": "h-9", "fromDate": "20/10/2025", "toDate": "2025-10-22"})


def test_parse_current_user_defaults_role() -> None:
    user = parse_current_user({"id": "u-1", "firstName": "Ann"})

    assert user.role_name == "Employee"
    assert user.access_level is AccessLevel.EMPLOYEE


def test_parse_date_accepts_date_instances() -> None:
    today = date(2025, 1, 26)
    assert parse_date(today) is today
