"""Role-aware dashboard projection: stat cards, welcome banner, pending panel.

Call context:
    ``WebRuntime.dashboard_vm`` feeds the latest ``CurrentUser`` and
    ``DashboardStats`` snapshots into :class:`StatsVM`; the dashboard page
    renders whatever it derives. All functions here are pure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from hrdesk.domain.entities import AccessLevel, CurrentUser, DashboardStats
from hrdesk.domain.normalizer import parse_stats

CardValue = Union[int, str]


@dataclass(frozen=True)
class StatCard:
    """One summary tile on the dashboard."""
    title: str
    value: CardValue
    icon_key: str
    description: str
    color_token: str
    is_text_value: bool = False
    route: Optional[str] = None


@dataclass(frozen=True)
class WelcomeMessage:
    title: str
    subtitle: str


@dataclass(frozen=True)
class PendingRow:
    label: str
    count: int
    route: Optional[str] = None


@dataclass(frozen=True)
class PendingPanel:
    visible: bool
    rows: Tuple[PendingRow, ...] = ()


NO_PENDING_LABEL = "No pending actions"


def _coerce_stats(stats: Any) -> DashboardStats:
    if isinstance(stats, DashboardStats):
        return stats
    return parse_stats(stats)


# ---------------------------------------------------------------------------
# Card builders, one per access level
# ---------------------------------------------------------------------------
def _admin_cards(stats: DashboardStats) -> List[StatCard]:
    return [
        StatCard("Total Employees", stats.total_employees, "users", "Active in system", "primary", route="/employees"),
        StatCard("Present Today", stats.present_today, "calendar", "Checked in", "positive", route="/attendance"),
        StatCard("On Leave", stats.on_leave, "clock", "Today", "warning", route="/leaves"),
        StatCard("Pending Approvals", stats.pending_total, "alert-circle", "Requires action", "negative", route="/approvals"),
    ]


def _manager_cards(stats: DashboardStats) -> List[StatCard]:
    return [
        StatCard("Team Members", stats.total_employees, "users", "Reporting to you", "primary", route="/attendance"),
        StatCard("Team Present", stats.present_today, "calendar", "Team checked in", "positive", route="/attendance"),
        StatCard("Pending Approvals", stats.pending_total, "alert-circle", "Requires action", "negative", route="/approvals"),
        StatCard("Team on Leave", stats.on_leave, "clock", "Today", "warning", route="/leaves"),
    ]


def _accountant_cards(stats: DashboardStats) -> List[StatCard]:
    return [
        StatCard(
            "Pending Reimbursements",
            stats.pending_reimbursements,
            "receipt",
            "Awaiting review",
            "warning",
            route="/reimbursement-approvals",
        ),
        StatCard("Total Employees", stats.total_employees, "users", "Active in system", "primary", route="/employees"),
        StatCard("Present Today", stats.present_today, "calendar", "Checked in", "positive", route="/attendance"),
        StatCard("Processing Items", stats.pending_reimbursements, "file-text", "In the payout queue", "info", route="/payroll"),
    ]


def _employee_cards(stats: DashboardStats) -> List[StatCard]:
    attendance = "Present" if stats.present_today else "Absent"
    return [
        StatCard("My Attendance", attendance, "calendar", "Today's status", "primary", True, "/attendance"),
        StatCard("Leave Balance", "-", "clock", "Days available", "positive", True, "/leaves"),
        # not wired to live data
        StatCard("Pending Requests", 0, "file-text", "Awaiting approval", "warning", False, "/leaves"),
        StatCard("Quick Actions", "-", "zap", "Apply leave/claim", "info", True, "/leaves"),
    ]


_CARD_BUILDERS: Dict[AccessLevel, Callable[[DashboardStats], List[StatCard]]] = {
    AccessLevel.ADMIN: _admin_cards,
    AccessLevel.HR: _admin_cards,
    AccessLevel.MANAGER: _manager_cards,
    AccessLevel.ACCOUNTANT: _accountant_cards,
    AccessLevel.EMPLOYEE: _employee_cards,
}

_WELCOME: Dict[AccessLevel, Tuple[str, str]] = {
    AccessLevel.ADMIN: ("Welcome back, {name}!", "Here's an overview of your organization today."),
    AccessLevel.HR: ("Welcome back, {name}!", "Keep track of your workforce and HR operations."),
    AccessLevel.MANAGER: ("Hello, {name}!", "Here's how your team is doing today."),
    AccessLevel.ACCOUNTANT: ("Welcome, {name}!", "Review reimbursements and payroll processing."),
    AccessLevel.EMPLOYEE: ("Hi, {name}!", "This is your personal workspace."),
}

_PENDING_VISIBLE = frozenset({AccessLevel.ADMIN, AccessLevel.HR, AccessLevel.MANAGER})


def derive_cards(access_level: Any, stats: Any) -> List[StatCard]:
    """Return exactly four cards for ``access_level`` in display order.

    Unknown levels use the Employee set; a missing ``stats`` counts as zeros.
    """
    level = AccessLevel.parse(access_level)
    builder = _CARD_BUILDERS.get(level, _employee_cards)
    return builder(_coerce_stats(stats))


def derive_welcome_message(access_level: Any, first_name: Optional[str]) -> WelcomeMessage:
    level = AccessLevel.parse(access_level)
    title, subtitle = _WELCOME.get(level, _WELCOME[AccessLevel.EMPLOYEE])
    name = (first_name or "").strip() or "there"
    return WelcomeMessage(title=title.format(name=name), subtitle=subtitle)


def derive_pending_actions(access_level: Any, stats: Any) -> PendingPanel:
    """Pending-actions panel: one row per nonzero category, or a placeholder row."""
    level = AccessLevel.parse(access_level)
    if level not in _PENDING_VISIBLE:
        return PendingPanel(visible=False)
    snapshot = _coerce_stats(stats)
    candidates = (
        PendingRow("Leave approvals", snapshot.pending_approvals, "/approvals"),
        PendingRow("Reimbursements", snapshot.pending_reimbursements, "/reimbursement-approvals"),
        PendingRow("Regularizations", snapshot.pending_regularizations, "/approvals"),
    )
    rows = tuple(row for row in candidates if row.count > 0)
    if not rows:
        rows = (PendingRow(NO_PENDING_LABEL, 0),)
    return PendingPanel(visible=True, rows=rows)


class StatsVM:
    """Dashboard page state built from the identity and stats snapshots."""

    skeleton_count = 4

    def __init__(self) -> None:
        self.current_user: Optional[CurrentUser] = None
        self.stats: Optional[DashboardStats] = None
        self.is_loading = True

    def apply(
        self,
        *,
        current_user: Optional[CurrentUser],
        stats: Optional[DashboardStats],
        is_loading: bool = False,
    ) -> None:
        self.current_user = current_user
        self.stats = stats
        self.is_loading = bool(is_loading)

    @property
    def access_level(self) -> AccessLevel:
        if self.current_user is None:
            return AccessLevel.EMPLOYEE
        return self.current_user.access_level

    def cards(self) -> List[StatCard]:
        if self.is_loading:
            return []
        return derive_cards(self.access_level, self.stats)

    def welcome(self) -> WelcomeMessage:
        first_name = self.current_user.first_name if self.current_user else None
        return derive_welcome_message(self.access_level, first_name)

    def pending(self) -> PendingPanel:
        return derive_pending_actions(self.access_level, self.stats)
