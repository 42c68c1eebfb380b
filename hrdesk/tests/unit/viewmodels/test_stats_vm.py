from __future__ import annotations

from hrdesk.domain.entities import AccessLevel, DashboardStats
from hrdesk.tests.unit.viewmodels.helpers import make_current_user
from hrdesk.viewmodels.stats_vm import (
    NO_PENDING_LABEL,
    StatsVM,
    derive_cards,
    derive_pending_actions,
    derive_welcome_message,
)

STATS = {
    "totalEmployees": 50,
    "presentToday": 42,
    "onLeave": 3,
    "pendingApprovals": 1,
    "pendingReimbursements": 1,
    "pendingRegularizations": 1,
}


def test_admin_cards_use_summed_pending_approvals() -> None:
    cards = derive_cards("Admin", STATS)

    assert [c.title for c in cards] == ["Total Employees", "Present Today", "On Leave", "Pending Approvals"]
    assert [c.value for c in cards] == [50, 42, 3, 3]


def test_admin_pending_sum_with_an_empty_queue() -> None:
    stats = {
        "totalEmployees": 50,
        "presentToday": 42,
        "onLeave": 3,
        "pendingApprovals": 2,
        "pendingReimbursements": 1,
        "pendingRegularizations": 0,
    }

    assert [c.value for c in derive_cards("Admin", stats)] == [50, 42, 3, 3]


def test_hr_matches_admin_layout() -> None:
    assert derive_cards(AccessLevel.HR, STATS) == derive_cards(AccessLevel.ADMIN, STATS)


def test_manager_and_accountant_layouts() -> None:
    manager = derive_cards("Manager", STATS)
    accountant = derive_cards("Accountant", STATS)

    assert [c.title for c in manager] == ["Team Members", "Team Present", "Pending Approvals", "Team on Leave"]
    assert manager[2].value == 3
    assert accountant[0].title == "Pending Reimbursements"
    assert accountant[0].value == 1


def test_unknown_level_gets_employee_cards() -> None:
    cards = derive_cards("Intern", DashboardStats(present_today=0))

    assert [c.title for c in cards] == ["My Attendance", "Leave Balance", "Pending Requests", "Quick Actions"]
    assert cards[0].value == "Absent"
    assert cards[0].is_text_value
    assert cards[2].value == 0


def test_missing_stats_count_as_zero() -> None:
    cards = derive_cards("Admin", None)

    assert [c.value for c in cards] == [0, 0, 0, 0]


def test_welcome_message_per_level() -> None:
    assert derive_welcome_message("Admin", "Ann").title == "Welcome back, Ann!"
    assert derive_welcome_message("Admin", "  ").title == "Welcome back, there!"
    assert derive_welcome_message("Manager", "Ravi").title == "Hello, Ravi!"


def test_pending_panel_lists_nonzero_queues() -> None:
    panel = derive_pending_actions("Admin", {"pendingApprovals": 2, "pendingRegularizations": 1})

    assert panel.visible
    assert [(r.label, r.count) for r in panel.rows] == [("Leave approvals", 2), ("Regularizations", 1)]


def test_pending_panel_placeholder_and_hidden() -> None:
    empty = derive_pending_actions("Manager", {})

    assert [r.label for r in empty.rows] == [NO_PENDING_LABEL]
    assert not derive_pending_actions("Employee", STATS).visible
    assert not derive_pending_actions("Accountant", STATS).visible


def test_stats_vm_loading_has_no_cards() -> None:
    vm = StatsVM()

    assert vm.cards() == []
    assert vm.access_level is AccessLevel.EMPLOYEE

    vm.apply(current_user=make_current_user(AccessLevel.ADMIN), stats=DashboardStats(total_employees=7))

    assert vm.cards()[0].value == 7
    assert vm.welcome().title == "Welcome back, Ann!"
    assert vm.pending().visible
