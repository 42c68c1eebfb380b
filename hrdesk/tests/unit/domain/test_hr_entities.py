from __future__ import annotations

from datetime import date

import pytest

from hrdesk.domain.entities import (
    Absent,
    AccessLevel,
    DashboardStats,
    EmployeeStatus,
    Holiday,
    Resolved,
    Unresolved,
    UserProfile,
)


def test_access_level_parse_falls_back_to_employee() -> None:
    assert AccessLevel.parse("Admin") is AccessLevel.ADMIN
    assert AccessLevel.parse(" HR ") is AccessLevel.HR
    assert AccessLevel.parse("Intern") is AccessLevel.EMPLOYEE
    assert AccessLevel.parse(None) is AccessLevel.EMPLOYEE


def test_employee_status_parse_is_case_insensitive() -> None:
    assert EmployeeStatus.parse("inactive") is EmployeeStatus.INACTIVE
    assert EmployeeStatus.parse("whatever") is EmployeeStatus.ACTIVE
    assert str(EmployeeStatus.INACTIVE) == "Inactive"


def test_dashboard_stats_pending_total_sums_three_queues() -> None:
    stats = DashboardStats(pending_approvals=1, pending_reimbursements=2, pending_regularizations=4)

    assert stats.pending_total == 7
    assert DashboardStats.empty().pending_total == 0


def test_dashboard_stats_rejects_negative_and_bool_counts() -> None:
    with pytest.raises(ValueError):
        DashboardStats(total_employees=-1)
    with pytest.raises(TypeError):
        DashboardStats(on_leave=True)  # type: ignore[arg-type]


def test_user_profile_names_and_initials() -> None:
    profile = UserProfile(id="e-1", first_name="mei", last_name="tan", email="m@x.io", username="mtan")

    assert profile.full_name == "mei tan"
    assert profile.initials == "MT"


def test_user_profile_requires_identifier() -> None:
    with pytest.raises(ValueError):
        UserProfile(id="  ", first_name="A", last_name="B", email="a@b.c", username="ab")


def test_holiday_validates_total_and_dates() -> None:
    single = Holiday(id="h-1", name="Holi", from_date=date(2025, 3, 14), to_date=date(2025, 3, 14))
    assert single.is_single_day

    with pytest.raises(ValueError):
        Holiday(id="h-2", name="x", from_date=date(2025, 1, 1), to_date=date(2025, 1, 1), total_holidays=0)
    with pytest.raises(TypeError):
        Holiday(id="h-3", name="x", from_date="2025-01-01", to_date=date(2025, 1, 1))  # type: ignore[arg-type]


def test_lookup_label_display_variants() -> None:
    assert Resolved("Team Lead (Manager)").display() == "Team Lead (Manager)"
    assert Unresolved("role-x").display() == "role-x"
    assert Absent().display() is None
