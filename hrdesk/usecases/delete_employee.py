from __future__ import annotations

import logging
from dataclasses import dataclass

from hrdesk.domain.ports import EmployeeId, HrApiPort, UseCaseError

from .error_mapping import map_api_error

LOGGER = logging.getLogger(__name__)

DELETE_FAILED_MESSAGE = "Failed to delete employee"


@dataclass
class DeleteEmployee:
    """Issue ``DELETE /api/employees/{id}`` once.

    A rejection surfaces the API's ``message`` verbatim, falling back to
    ``DELETE_FAILED_MESSAGE``.
    """

    hr_port: HrApiPort

    def __call__(self, employee_id: EmployeeId) -> None:
        if not str(employee_id or "").strip():
            raise UseCaseError("DELETE_FAILED", DELETE_FAILED_MESSAGE)
        try:
            self.hr_port.delete_employee(employee_id)
        except Exception as exc:
            LOGGER.warning("Delete of employee %s rejected: %s", employee_id, exc)
            raise map_api_error(
                exc,
                default_code="DELETE_FAILED",
                default_message=DELETE_FAILED_MESSAGE,
            ) from exc
