"""NiceGUI runtime orchestration for hrdesk.

This module composes the view models, use cases and query cache for the web
pages. It does not import NiceGUI so it can be driven from tests.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from hrdesk.adapters.storage_local import StorageLocal
from hrdesk.app.controller import AppController
from hrdesk.app.query_cache import (
    RESOURCE_CURRENT_USER,
    RESOURCE_DASHBOARD_STATS,
    RESOURCE_DEPARTMENTS,
    RESOURCE_EMPLOYEES,
    RESOURCE_HOLIDAYS,
    RESOURCE_LEAVE_TYPES,
    RESOURCE_ROLES,
    Invalidation,
    QueryCache,
    Snapshot,
)
from hrdesk.domain.entities import CurrentUser, Holiday, UserProfile
from hrdesk.domain.ports import UseCaseError
from hrdesk.utils.logging import apply_ui_preferences
from hrdesk.viewmodels.directory_vm import DirectoryVM
from hrdesk.viewmodels.employee_form_vm import EmployeeFormVM
from hrdesk.viewmodels.holiday_form_vm import HolidayFormVM
from hrdesk.viewmodels.holiday_vm import HolidayVM
from hrdesk.viewmodels.leave_quota_vm import LeaveQuotaVM
from hrdesk.viewmodels.notifications import Notification
from hrdesk.viewmodels.settings_vm import SettingsVM
from hrdesk.viewmodels.stats_vm import StatsVM

LOGGER = logging.getLogger(__name__)

ENV_STORAGE_ROOT = "HRDESK_STORAGE_ROOT"
NOT_CONFIGURED_MESSAGE = "Configure the API base URL in Settings first."

DASHBOARD_RESOURCES = (RESOURCE_CURRENT_USER, RESOURCE_DASHBOARD_STATS)
DIRECTORY_RESOURCES = (RESOURCE_CURRENT_USER, RESOURCE_EMPLOYEES, RESOURCE_ROLES, RESOURCE_DEPARTMENTS)
HOLIDAY_RESOURCES = (RESOURCE_HOLIDAYS,)


class WebRuntime:
    """Orchestration state used by NiceGUI views."""

    def __init__(
        self,
        *,
        storage: Optional[StorageLocal] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        env = os.environ if environ is None else environ
        self.status_message = "Ready."
        self.pending_notifications: List[Notification] = []

        self.settings_vm = SettingsVM()
        self.controller = AppController(self.settings_vm)
        self.storage = storage or StorageLocal(root_dir=env.get(ENV_STORAGE_ROOT) or ".")
        self.settings_vm.on_save = self.storage.save_user_settings
        self.cache = QueryCache()
        self.cache.subscribe(self._on_invalidation)

        self.dashboard_vm = StatsVM()
        self.directory_vm = DirectoryVM(
            delete_employee=self._delete_employee,
            on_notify=self.notify,
            on_invalidate=self.cache.invalidate,
        )
        self.holiday_vm = HolidayVM()

        self._load_settings_defaults(env)

    # ------------------------------------------------------------------
    # Settings workflows
    # ------------------------------------------------------------------
    def _load_settings_defaults(self, env: Mapping[str, str]) -> None:
        try:
            stored = self.storage.load_user_settings()
            if stored:
                self.settings_vm.apply_dict(stored)
        except (OSError, ValueError) as exc:
            LOGGER.warning("Ignoring stored settings: %s", exc)
        self.settings_vm.apply_env(env)
        apply_ui_preferences(self.settings_vm.debug_logging)

    def settings_payload(self) -> Dict[str, Any]:
        return self.settings_vm.to_dict()

    def apply_settings_payload(self, payload: Mapping[str, Any]) -> None:
        """Validate, apply and persist settings, then drop cached connections.

        A payload that is rejected or cannot be written leaves the previous
        settings in place.
        """
        previous = self.settings_vm.to_dict()
        try:
            self.settings_vm.apply_dict(payload)
            self.settings_vm.cmd_save()
        except (ValueError, OSError):
            self.settings_vm.apply_dict(previous)
            raise
        apply_ui_preferences(self.settings_vm.debug_logging)
        self.controller.reset()
        self.cache.clear()
        self.status_message = "Settings saved."

    def enable_demo(self) -> None:
        self.controller.use_demo_backend()
        self.cache.clear()
        self.status_message = "Demo data (offline)."

    def ensure_adapter(self) -> bool:
        if self.controller.ensure_ready():
            return True
        self.status_message = NOT_CONFIGURED_MESSAGE
        return False

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------
    def notify(self, notification: Notification) -> None:
        log = LOGGER.warning if notification.is_error else LOGGER.info
        log("%s: %s", notification.title, notification.message)
        self.pending_notifications.append(notification)

    def drain_notifications(self) -> List[Notification]:
        drained, self.pending_notifications = self.pending_notifications, []
        return drained

    def _on_invalidation(self, message: Invalidation) -> None:
        LOGGER.debug("Resource %s marked stale", message.resource)

    # ------------------------------------------------------------------
    # Resource reads
    # ------------------------------------------------------------------
    def _read(self, resource: str, attr: str) -> Snapshot:
        def loader() -> Any:
            if not self.ensure_adapter():
                raise UseCaseError("NOT_CONFIGURED", NOT_CONFIGURED_MESSAGE)
            use_case: Optional[Callable[[], Any]] = getattr(self.controller, attr)
            if use_case is None:
                raise UseCaseError("NOT_CONFIGURED", NOT_CONFIGURED_MESSAGE)
            return use_case()

        return self.cache.read(resource, loader)

    def _snapshot(self, resource: str, attr: str, *, load: bool) -> Snapshot:
        if load:
            return self._read(resource, attr)
        return self.cache.peek(resource)

    def needs_load(self, resources: Sequence[str]) -> bool:
        """True while any of ``resources`` was never fetched or has been invalidated."""
        for resource in resources:
            snapshot = self.cache.peek(resource)
            if snapshot.is_loading or snapshot.stale:
                return True
        return False

    def current_user(self) -> Optional[CurrentUser]:
        """Identity already in the cache; never triggers a fetch."""
        return self.cache.peek(RESOURCE_CURRENT_USER).data

    def refresh_dashboard(self, *, load: bool = True) -> StatsVM:
        """Push the identity and stats snapshots into the dashboard view model.

        With ``load=False`` only cached snapshots are used, so resources that
        were never fetched show up as loading.
        """
        user = self._snapshot(RESOURCE_CURRENT_USER, "uc_current_user", load=load)
        stats = self._snapshot(RESOURCE_DASHBOARD_STATS, "uc_dashboard_stats", load=load)
        self.dashboard_vm.apply(
            current_user=user.data,
            stats=stats.data,
            is_loading=stats.is_loading,
        )
        return self.dashboard_vm

    def refresh_directory(self, *, load: bool = True) -> DirectoryVM:
        user = self._snapshot(RESOURCE_CURRENT_USER, "uc_current_user", load=load)
        employees = self._snapshot(RESOURCE_EMPLOYEES, "uc_employees", load=load)
        roles = self._snapshot(RESOURCE_ROLES, "uc_roles", load=load)
        departments = self._snapshot(RESOURCE_DEPARTMENTS, "uc_departments", load=load)
        self.directory_vm.apply_snapshots(
            employees=employees.data,
            roles=roles.data,
            departments=departments.data,
            current_user=user.data,
            is_loading=employees.is_loading,
            is_loading_user=user.is_loading,
        )
        return self.directory_vm

    def refresh_holidays(self, *, load: bool = True) -> HolidayVM:
        holidays = self._snapshot(RESOURCE_HOLIDAYS, "uc_holidays", load=load)
        self.holiday_vm.apply_snapshot(holidays.data, is_loading=holidays.is_loading)
        return self.holiday_vm

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def _delete_employee(self, employee_id: str) -> None:
        if not self.ensure_adapter() or self.controller.uc_delete_employee is None:
            raise UseCaseError("NOT_CONFIGURED", NOT_CONFIGURED_MESSAGE)
        self.controller.uc_delete_employee(employee_id)

    def _save_employee(self, payload: Dict[str, Any], *, employee_id: Optional[str] = None) -> Any:
        if not self.ensure_adapter() or self.controller.uc_save_employee is None:
            raise UseCaseError("NOT_CONFIGURED", NOT_CONFIGURED_MESSAGE)
        return self.controller.uc_save_employee(payload, employee_id=employee_id)

    def _save_holiday(self, payload: Dict[str, Any], *, holiday_id: Optional[str] = None) -> Any:
        if not self.ensure_adapter() or self.controller.uc_save_holiday is None:
            raise UseCaseError("NOT_CONFIGURED", NOT_CONFIGURED_MESSAGE)
        return self.controller.uc_save_holiday(payload, holiday_id=holiday_id)

    def _assign_quota(self, payload: Dict[str, Any]) -> str:
        if not self.ensure_adapter() or self.controller.uc_assign_quota is None:
            raise UseCaseError("NOT_CONFIGURED", NOT_CONFIGURED_MESSAGE)
        return self.controller.uc_assign_quota(payload)

    def employee_form(
        self,
        employee: Optional[UserProfile] = None,
        *,
        on_saved: Optional[Callable[[], None]] = None,
    ) -> EmployeeFormVM:
        return EmployeeFormVM(
            employee=employee,
            save_employee=self._save_employee,
            on_notify=self.notify,
            on_invalidate=self.cache.invalidate,
            on_saved=on_saved,
        )

    def holiday_form(
        self,
        holiday: Optional[Holiday] = None,
        *,
        on_saved: Optional[Callable[[], None]] = None,
    ) -> HolidayFormVM:
        return HolidayFormVM(
            holiday=holiday,
            save_holiday=self._save_holiday,
            on_notify=self.notify,
            on_invalidate=self.cache.invalidate,
            on_saved=on_saved,
        )

    def leave_quota_form(
        self,
        employee: UserProfile,
        *,
        on_done: Optional[Callable[[], None]] = None,
    ) -> LeaveQuotaVM:
        leave_types = self._read(RESOURCE_LEAVE_TYPES, "uc_leave_types").data
        return LeaveQuotaVM(
            employee,
            leave_types=leave_types or [],
            assign_quota=self._assign_quota,
            on_notify=self.notify,
            on_done=on_done,
        )
