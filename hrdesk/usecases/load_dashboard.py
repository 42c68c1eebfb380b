from __future__ import annotations

from dataclasses import dataclass

from hrdesk.domain.entities import CurrentUser, DashboardStats
from hrdesk.domain.normalizer import parse_current_user, parse_stats
from hrdesk.domain.ports import HrApiPort

from .error_mapping import map_api_error


@dataclass
class LoadCurrentUser:
    """Fetch the signed-in user's identity and access level."""

    hr_port: HrApiPort

    def __call__(self) -> CurrentUser:
        try:
            return parse_current_user(self.hr_port.current_user())
        except Exception as exc:
            raise map_api_error(exc, default_code="LOAD_CURRENT_USER_FAILED") from exc


@dataclass
class LoadDashboardStats:
    hr_port: HrApiPort

    def __call__(self) -> DashboardStats:
        try:
            return parse_stats(self.hr_port.dashboard_stats())
        except Exception as exc:
            raise map_api_error(exc, default_code="LOAD_STATS_FAILED") from exc
