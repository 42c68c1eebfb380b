from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from hrdesk.domain.ports import EmployeeId, HolidayId, HrApiPort, Payload

from .api_errors import error_from_response
from .http_client import HttpConfig, RetryingSession, SESSION_COOKIE_NAME

LOGGER = logging.getLogger(__name__)


class HrRestAdapter(HrApiPort):
    """REST adapter for the HR API (dashboard, directory, holidays)."""

    def __init__(
        self,
        base_url: str,
        *,
        session_cookie: Optional[str] = None,
        cookie_name: str = SESSION_COOKIE_NAME,
        request_timeout_s: int = 10,
        read_retries: int = 0,
    ) -> None:
        if not str(base_url or "").strip():
            raise ValueError("HrRestAdapter requires a base URL")
        self.base_url = str(base_url).strip().rstrip("/")
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, read_retries=read_retries)
        self.session = RetryingSession(session_cookie, self.cfg, cookie_name=cookie_name)

    # ---------- Identity & dashboard ----------

    def current_user(self) -> Payload:
        """Return the signed-in user's profile from ``GET /api/auth/me``.

        Raises:
            ApiClientError: 401 when the session cookie is missing or expired.
        """
        return self._get_object("/api/auth/me", "current_user")

    def dashboard_stats(self) -> Payload:
        """Return the raw counters behind the dashboard cards."""
        return self._get_object("/api/dashboard/stats", "dashboard_stats")

    # ---------- Directory ----------

    def list_employees(self) -> List[Payload]:
        """Return every employee profile visible to the session."""
        return self._get_list("/api/employees", "employees")

    def create_employee(self, payload: Payload) -> Payload:
        """Create an employee.

        Args:
            payload: camelCase body built by the employee form.

        Returns:
            The created profile as sent back by the API.

        Raises:
            ApiClientError: Validation failed or the username/email is taken.
                ``field_errors`` lists the offending fields when the API sends them.
            ApiServerError: The API failed with a 5xx.
        """
        url = self._make_url("/api/employees")
        LOGGER.info("Creating employee %s", payload.get("username"))
        resp = self.session.post(url, json_body=dict(payload))
        self._ensure_ok(resp, "create_employee")
        return self._json_object(resp, "create_employee")

    def update_employee(self, employee_id: EmployeeId, payload: Payload) -> Payload:
        """Apply a partial update to one employee and return the stored profile.

        Raises:
            ApiClientError: Validation failed or the employee does not exist.
        """
        url = self._make_url(f"/api/employees/{self._path_id(employee_id)}")
        LOGGER.info("Updating employee %s", employee_id)
        resp = self.session.patch(url, json_body=dict(payload))
        self._ensure_ok(resp, f"update_employee[{employee_id}]")
        return self._json_object(resp, f"update_employee[{employee_id}]")

    def delete_employee(self, employee_id: EmployeeId) -> None:
        """Delete an employee.

        Args:
            employee_id: Id of the profile to delete; quoted into the path.

        Raises:
            ApiClientError: The API refused the delete, for example for the
                caller's own account. ``server_message`` holds its reason.
        """
        url = self._make_url(f"/api/employees/{self._path_id(employee_id)}")
        LOGGER.info("Deleting employee %s", employee_id)
        resp = self.session.delete(url)
        self._ensure_ok(resp, f"delete_employee[{employee_id}]")

    def list_roles(self) -> List[Payload]:
        """Return the role catalogue used to label directory rows."""
        return self._get_list("/api/roles", "roles")

    def list_departments(self) -> List[Payload]:
        return self._get_list("/api/departments", "departments")

    def list_leave_types(self) -> List[Payload]:
        return self._get_list("/api/leave-types", "leave_types")

    def assign_leave_quota(self, payload: Payload) -> Payload:
        """Assign a yearly leave quota to a single employee.

        Args:
            payload: ``userId``, ``leaveTypeId``, ``totalLeaves`` and ``year``.

        Returns:
            The quota record created by the API.
        """
        url = self._make_url("/api/leave-quota/assign-individual")
        LOGGER.info("Assigning leave quota to %s", payload.get("userId"))
        resp = self.session.post(url, json_body=dict(payload))
        self._ensure_ok(resp, "assign_leave_quota")
        return self._json_object(resp, "assign_leave_quota")

    # ---------- Holidays ----------

    def list_holidays(self) -> List[Payload]:
        """Return all company holidays, in API order."""
        return self._get_list("/api/holidays", "holidays")

    def create_holiday(self, payload: Payload) -> Payload:
        """Create a holiday and return the stored record.

        Raises:
            ApiClientError: The dates or the day count were rejected.
        """
        url = self._make_url("/api/holidays")
        LOGGER.info("Creating holiday %s", payload.get("name"))
        resp = self.session.post(url, json_body=dict(payload))
        self._ensure_ok(resp, "create_holiday")
        return self._json_object(resp, "create_holiday")

    def update_holiday(self, holiday_id: HolidayId, payload: Payload) -> Payload:
        url = self._make_url(f"/api/holidays/{self._path_id(holiday_id)}")
        LOGGER.info("Updating holiday %s", holiday_id)
        resp = self.session.patch(url, json_body=dict(payload))
        self._ensure_ok(resp, f"update_holiday[{holiday_id}]")
        return self._json_object(resp, f"update_holiday[{holiday_id}]")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _make_url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    def _path_id(raw: Any) -> str:
        token = str(raw or "").strip()
        if not token:
            raise ValueError("Resource id must be a non-empty string.")
        return quote(token, safe="")

    def _get_object(self, path: str, ctx: str) -> Dict[str, Any]:
        resp = self.session.get(self._make_url(path))
        self._ensure_ok(resp, ctx)
        return self._json_object(resp, ctx)

    def _get_list(self, path: str, ctx: str) -> List[Dict[str, Any]]:
        resp = self.session.get(self._make_url(path))
        self._ensure_ok(resp, ctx)
        data = self._json_any(resp)
        if not isinstance(data, list):
            raise RuntimeError(f"{ctx}: expected list response")
        return [entry for entry in data if isinstance(entry, dict)]

    @classmethod
    def _json_object(cls, resp: requests.Response, ctx: str) -> Dict[str, Any]:
        data = cls._json_any(resp)
        if not isinstance(data, dict):
            raise RuntimeError(f"{ctx}: expected object response")
        return data

    @staticmethod
    def _ensure_ok(resp: requests.Response, ctx: str) -> None:
        error = error_from_response(resp, ctx)
        if error is None:
            return
        LOGGER.debug("%s failed: %s", ctx, error)
        raise error

    @staticmethod
    def _json_any(resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            snippet = (getattr(resp, "text", "") or "")[:400]
            raise RuntimeError(f"Invalid JSON response: {snippet}") from exc
