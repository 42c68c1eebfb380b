"""Adapter and use-case wiring for the web runtime.

This module owns lazy construction of the HR REST adapter and the use-case
objects that depend on values in :class:`hrdesk.viewmodels.settings_vm.SettingsVM`.
It is invoked by ``hrdesk.web_ui.runtime.WebRuntime`` before network actions.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..adapters.hr_rest import HrRestAdapter
from ..adapters.hr_rest_mock import HrRestMock
from ..domain.ports import HrApiPort
from ..usecases.assign_leave_quota import AssignLeaveQuota
from ..usecases.delete_employee import DeleteEmployee
from ..usecases.load_dashboard import LoadCurrentUser, LoadDashboardStats
from ..usecases.load_directory import LoadDepartments, LoadEmployees, LoadLeaveTypes, LoadRoles
from ..usecases.load_holidays import LoadHolidays
from ..usecases.save_employee import SaveEmployee
from ..usecases.save_holiday import SaveHoliday
from ..viewmodels.settings_vm import SettingsVM

LOGGER = logging.getLogger(__name__)


class AppController:
    """Create and cache the runtime adapter/use-cases from settings state.

    Call chain:
        ``WebRuntime`` creates one instance, calls ``ensure_ready`` before each
        load or mutation and ``reset`` after settings change.
    """

    def __init__(self, settings_vm: SettingsVM) -> None:
        """Initialize controller with settings-backed lazy dependencies.

        Args:
            settings_vm: UI state model containing the API URL, session
                cookie and timeout preferences used to build the adapter.
        """
        self.settings_vm = settings_vm
        self._hr_port: Optional[HrApiPort] = None
        self._demo_port: Optional[HrRestMock] = None
        self.uc_current_user: Optional[LoadCurrentUser] = None
        self.uc_dashboard_stats: Optional[LoadDashboardStats] = None
        self.uc_employees: Optional[LoadEmployees] = None
        self.uc_roles: Optional[LoadRoles] = None
        self.uc_departments: Optional[LoadDepartments] = None
        self.uc_leave_types: Optional[LoadLeaveTypes] = None
        self.uc_holidays: Optional[LoadHolidays] = None
        self.uc_delete_employee: Optional[DeleteEmployee] = None
        self.uc_save_employee: Optional[SaveEmployee] = None
        self.uc_assign_quota: Optional[AssignLeaveQuota] = None
        self.uc_save_holiday: Optional[SaveHoliday] = None

    @property
    def hr_port(self) -> Optional[HrApiPort]:
        """Return the cached port used for every HR API request."""
        return self._hr_port

    @property
    def demo_mode(self) -> bool:
        return self._demo_port is not None

    def use_demo_backend(self, port: Optional[HrRestMock] = None) -> HrRestMock:
        """Route every use case to the in-memory backend instead of HTTP."""
        self._demo_port = port or HrRestMock()
        self.reset()
        LOGGER.info("Using in-memory demo backend")
        return self._demo_port

    def reset(self) -> None:
        """Drop the cached adapter and use-cases.

        Side Effects:
            The next ``ensure_ready`` call rebuilds everything from current
            settings values. A demo backend, once selected, is kept.
        """
        self._hr_port = None
        self.uc_current_user = None
        self.uc_dashboard_stats = None
        self.uc_employees = None
        self.uc_roles = None
        self.uc_departments = None
        self.uc_leave_types = None
        self.uc_holidays = None
        self.uc_delete_employee = None
        self.uc_save_employee = None
        self.uc_assign_quota = None
        self.uc_save_holiday = None

    def ensure_ready(self) -> bool:
        """Ensure the adapter and use-cases are available.

        Returns:
            ``True`` when dependencies are available, ``False`` when no API
            base URL is configured and the demo backend is off.
        """
        if self._hr_port is not None:
            return True

        if self._demo_port is not None:
            port: HrApiPort = self._demo_port
        else:
            base_url = (self.settings_vm.api_base_url or "").strip()
            if not base_url:
                return False
            port = HrRestAdapter(
                base_url,
                session_cookie=self.settings_vm.session_cookie or None,
                request_timeout_s=self.settings_vm.request_timeout_s,
                read_retries=self.settings_vm.read_retries,
            )
            LOGGER.debug("Built HR adapter for %s", base_url)

        self._hr_port = port
        self.uc_current_user = LoadCurrentUser(port)
        self.uc_dashboard_stats = LoadDashboardStats(port)
        self.uc_employees = LoadEmployees(port)
        self.uc_roles = LoadRoles(port)
        self.uc_departments = LoadDepartments(port)
        self.uc_leave_types = LoadLeaveTypes(port)
        self.uc_holidays = LoadHolidays(port)
        self.uc_delete_employee = DeleteEmployee(port)
        self.uc_save_employee = SaveEmployee(port)
        self.uc_assign_quota = AssignLeaveQuota(port)
        self.uc_save_holiday = SaveHoliday(port)
        return True
