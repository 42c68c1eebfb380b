from __future__ import annotations

from hrdesk.adapters.hr_rest import HrRestAdapter
from hrdesk.adapters.hr_rest_mock import HrRestMock
from hrdesk.adapters.http_client import SESSION_COOKIE_NAME
from hrdesk.app.controller import AppController
from hrdesk.viewmodels.settings_vm import SettingsVM


def test_ensure_ready_requires_base_url() -> None:
    controller = AppController(SettingsVM())

    assert controller.ensure_ready() is False
    assert controller.hr_port is None
    assert controller.uc_employees is None


def test_ensure_ready_builds_rest_adapter_from_settings() -> None:
    settings = SettingsVM()
    settings.apply_dict(
        {
            "api_base_url": "https://hr.example.com/",
            "session_cookie": "s%3Aabc",
            "request_timeout_s": 7,
            "read_retries": 2,
        }
    )
    controller = AppController(settings)

    assert controller.ensure_ready() is True

    adapter = controller.hr_port
    assert isinstance(adapter, HrRestAdapter)
    assert adapter.base_url == "https://hr.example.com"
    assert adapter.cfg.request_timeout_s == 7
    assert adapter.cfg.read_retries == 2
    assert adapter.session.session.cookies.get(SESSION_COOKIE_NAME) == "s%3Aabc"
    assert controller.uc_delete_employee.hr_port is adapter
    assert controller.uc_holidays.hr_port is adapter


def test_reset_drops_cached_use_cases() -> None:
    settings = SettingsVM()
    settings.api_base_url = "http://hr.local"
    controller = AppController(settings)
    controller.ensure_ready()
    first = controller.hr_port

    controller.reset()
    assert controller.uc_save_employee is None

    controller.ensure_ready()
    assert controller.hr_port is not first


def test_demo_backend_needs_no_url() -> None:
    controller = AppController(SettingsVM())
    demo = HrRestMock()

    assert controller.use_demo_backend(demo) is demo
    assert controller.demo_mode
    assert controller.ensure_ready() is True
    assert controller.hr_port is demo

    controller.reset()
    controller.ensure_ready()
    assert controller.hr_port is demo
