from __future__ import annotations

from dataclasses import dataclass

from hrdesk.domain.ports import HrApiPort, Payload

from .error_mapping import map_api_error

ASSIGN_FAILED_MESSAGE = "Failed to assign leave quota"


@dataclass
class AssignLeaveQuota:
    """Assign a yearly leave quota to one employee; returns the API's message."""

    hr_port: HrApiPort

    def __call__(self, payload: Payload) -> str:
        try:
            response = self.hr_port.assign_leave_quota(dict(payload))
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="ASSIGN_QUOTA_FAILED",
                default_message=ASSIGN_FAILED_MESSAGE,
            ) from exc
        message = response.get("message") if isinstance(response, dict) else None
        return str(message) if message else "Leave quota assigned"
