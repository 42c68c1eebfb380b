from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from hrdesk.domain.ports import HolidayId, HrApiPort, Payload, UseCaseError

LOGGER = logging.getLogger(__name__)


@dataclass
class SaveHoliday:
    """Create (``holiday_id is None``) or update a company holiday.

    Failures never carry the server text: the message is always
    "Failed to create holiday" or "Failed to update holiday".
    """

    hr_port: HrApiPort

    def __call__(self, payload: Payload, *, holiday_id: Optional[HolidayId] = None) -> Payload:
        verb = "create" if holiday_id is None else "update"
        try:
            if holiday_id is None:
                return self.hr_port.create_holiday(dict(payload))
            return self.hr_port.update_holiday(holiday_id, dict(payload))
        except Exception as exc:
            LOGGER.warning("Holiday %s failed: %s", verb, exc)
            raise UseCaseError("SAVE_HOLIDAY_FAILED", f"Failed to {verb} holiday") from exc
