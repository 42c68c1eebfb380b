from __future__ import annotations

from dataclasses import dataclass
from typing import List

from hrdesk.domain.entities import Holiday
from hrdesk.domain.normalizer import parse_holidays
from hrdesk.domain.ports import HrApiPort

from .error_mapping import map_api_error


@dataclass
class LoadHolidays:
    hr_port: HrApiPort

    def __call__(self) -> List[Holiday]:
        try:
            return parse_holidays(self.hr_port.list_holidays())
        except Exception as exc:
            raise map_api_error(exc, default_code="LOAD_HOLIDAYS_FAILED") from exc
