from __future__ import annotations

from dataclasses import dataclass
from typing import List

from hrdesk.domain.entities import Department, LeaveType, UserProfile, UserRole
from hrdesk.domain.normalizer import (
    parse_departments,
    parse_leave_types,
    parse_roles,
    parse_user_profiles,
)
from hrdesk.domain.ports import HrApiPort

from .error_mapping import map_api_error


@dataclass
class LoadEmployees:
    hr_port: HrApiPort

    def __call__(self) -> List[UserProfile]:
        try:
            return parse_user_profiles(self.hr_port.list_employees())
        except Exception as exc:
            raise map_api_error(exc, default_code="LOAD_EMPLOYEES_FAILED") from exc


@dataclass
class LoadRoles:
    hr_port: HrApiPort

    def __call__(self) -> List[UserRole]:
        try:
            return parse_roles(self.hr_port.list_roles())
        except Exception as exc:
            raise map_api_error(exc, default_code="LOAD_ROLES_FAILED") from exc


@dataclass
class LoadDepartments:
    hr_port: HrApiPort

    def __call__(self) -> List[Department]:
        try:
            return parse_departments(self.hr_port.list_departments())
        except Exception as exc:
            raise map_api_error(exc, default_code="LOAD_DEPARTMENTS_FAILED") from exc


@dataclass
class LoadLeaveTypes:
    hr_port: HrApiPort

    def __call__(self) -> List[LeaveType]:
        try:
            return parse_leave_types(self.hr_port.list_leave_types())
        except Exception as exc:
            raise map_api_error(exc, default_code="LOAD_LEAVE_TYPES_FAILED") from exc
