from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from hrdesk.domain.entities import UserProfile
from hrdesk.domain.normalizer import parse_user_profile
from hrdesk.domain.ports import EmployeeId, HrApiPort, Payload, UseCaseError

from .error_mapping import map_api_error

SAVE_FAILED_MESSAGE = "Failed to save employee"


@dataclass
class SaveEmployee:
    """Create (``employee_id is None``) or update an employee record."""

    hr_port: HrApiPort

    def __call__(self, payload: Payload, *, employee_id: Optional[EmployeeId] = None) -> UserProfile:
        body = dict(payload)
        if employee_id is None and not str(body.get("password") or "").strip():
            raise UseCaseError("PASSWORD_REQUIRED", "Password is required for new employees")
        try:
            if employee_id is None:
                raw = self.hr_port.create_employee(body)
            else:
                raw = self.hr_port.update_employee(employee_id, body)
            return parse_user_profile(raw)
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="SAVE_EMPLOYEE_FAILED",
                default_message=SAVE_FAILED_MESSAGE,
            ) from exc
