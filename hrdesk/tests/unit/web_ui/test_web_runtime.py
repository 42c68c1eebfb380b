from __future__ import annotations

import json

import pytest

from hrdesk.adapters.storage_local import StorageLocal
from hrdesk.web_ui.runtime import (
    DASHBOARD_RESOURCES,
    DIRECTORY_RESOURCES,
    HOLIDAY_RESOURCES,
    NOT_CONFIGURED_MESSAGE,
    WebRuntime,
)

RAVI = "7c1d2e3f-4a5b-4c6d-8e9f-a0b1c2d3e4f5"


@pytest.fixture
def runtime(tmp_path, monkeypatch) -> WebRuntime:
    monkeypatch.delenv("HRDESK_LOG_LEVEL", raising=False)
    monkeypatch.delenv("HRDESK_DEBUG", raising=False)
    return WebRuntime(storage=StorageLocal(root_dir=str(tmp_path)), environ={})


def test_unconfigured_runtime_reports_status(runtime: WebRuntime) -> None:
    vm = runtime.refresh_dashboard()

    assert runtime.status_message == NOT_CONFIGURED_MESSAGE
    assert vm.current_user is None
    assert vm.welcome().title == "Hi, there!"
    assert runtime.cache.peek("current_user").error is not None


def test_demo_dashboard_for_admin(runtime: WebRuntime) -> None:
    runtime.enable_demo()

    vm = runtime.refresh_dashboard()

    assert vm.welcome().title == "Welcome back, Ann!"
    assert [c.value for c in vm.cards()] == [3, 2, 1, 3]


def test_demo_directory_delete_flow(runtime: WebRuntime) -> None:
    runtime.enable_demo()
    vm = runtime.refresh_directory()
    assert vm.can_manage
    assert len(vm.rows()) == 3

    ravi = vm.find(RAVI)
    assert vm.request_delete(ravi, lambda _message: True)

    notes = runtime.drain_notifications()
    assert [n.message for n in notes] == ["Employee deleted successfully"]
    assert runtime.cache.peek("employees").stale
    assert [row.full_name for row in runtime.refresh_directory().rows()] == ["Ann Lee", "Mei Tan"]
    assert runtime.drain_notifications() == []


def test_demo_delete_own_account_is_rejected(runtime: WebRuntime) -> None:
    runtime.enable_demo()
    vm = runtime.refresh_directory()

    vm.request_delete(vm.find(vm.current_user.id), lambda _message: True)

    notes = runtime.drain_notifications()
    assert notes[0].is_error
    assert notes[0].message == "You cannot delete your own account"
    assert len(runtime.refresh_directory().rows()) == 3


def test_forms_go_through_runtime(runtime: WebRuntime) -> None:
    runtime.enable_demo()
    runtime.refresh_directory()

    form = runtime.employee_form()
    for name, value in {
        "firstName": "Zoe",
        "lastName": "Ng",
        "email": "zoe@example.com",
        "username": "zng",
        "password": "secret1",
    }.items():
        form.set_field(name, value)
    assert form.submit()
    assert len(runtime.refresh_directory().rows()) == 4

    quota = runtime.leave_quota_form(runtime.directory_vm.find(RAVI))
    quota.leave_type_id = "lt-casual"
    assert quota.submit()

    holiday = runtime.holiday_form()
    holiday.set_field("name", "Founders Day")
    holiday.set_field("fromDate", "2025-06-01")
    holiday.set_field("toDate", "2025-06-01")
    assert holiday.submit()
    assert "Founders Day" in [row.name for row in runtime.refresh_holidays().rows()]

    messages = [n.message for n in runtime.drain_notifications()]
    assert messages == ["Employee created successfully", "Leave quota assigned to Ravi Kumar"]


def test_settings_are_validated_and_persisted(runtime: WebRuntime, tmp_path) -> None:
    with pytest.raises(ValueError):
        runtime.apply_settings_payload({"api_base_url": "hr.local"})
    assert runtime.settings_vm.api_base_url == ""

    runtime.apply_settings_payload({"api_base_url": "https://hr.example.com", "read_retries": 1})

    stored = json.loads((tmp_path / "user_settings.json").read_text(encoding="utf-8"))
    assert stored["api_base_url"] == "https://hr.example.com"
    assert stored["read_retries"] == 1

    reloaded = WebRuntime(storage=StorageLocal(root_dir=str(tmp_path)), environ={})
    assert reloaded.settings_vm.api_base_url == "https://hr.example.com"
    assert reloaded.ensure_adapter()


def test_environment_overrides_stored_url(tmp_path) -> None:
    storage = StorageLocal(root_dir=str(tmp_path))
    storage.save_user_settings({"api_base_url": "http://stored"})

    runtime = WebRuntime(storage=storage, environ={"HRDESK_API_BASE_URL": "https://env.example.com"})

    assert runtime.settings_payload()["api_base_url"] == "https://env.example.com"


def test_corrupt_settings_file_is_ignored(tmp_path) -> None:
    (tmp_path / "user_settings.json").write_text("[]", encoding="utf-8")

    runtime = WebRuntime(storage=StorageLocal(root_dir=str(tmp_path)), environ={})

    assert runtime.settings_payload()["api_base_url"] == ""


def test_failed_settings_write_restores_previous_values(runtime: WebRuntime, monkeypatch) -> None:
    assert runtime.settings_vm.on_save == runtime.storage.save_user_settings

    def _read_only(_payload: dict) -> None:
        raise OSError("read-only file system")

    monkeypatch.setattr(runtime.settings_vm, "on_save", _read_only)

    with pytest.raises(OSError):
        runtime.apply_settings_payload({"api_base_url": "https://hr.example.com"})
    assert runtime.settings_vm.api_base_url == ""


def test_pages_show_pending_state_before_first_fetch(runtime: WebRuntime) -> None:
    runtime.enable_demo()
    assert runtime.needs_load(DASHBOARD_RESOURCES)
    assert runtime.needs_load(HOLIDAY_RESOURCES)

    dashboard = runtime.refresh_dashboard(load=False)
    assert dashboard.is_loading
    assert dashboard.cards() == []

    directory = runtime.refresh_directory(load=False)
    assert directory.is_loading
    assert directory.is_loading_user
    assert not directory.can_manage
    assert directory.rows() == []

    assert runtime.refresh_holidays(load=False).is_loading
    assert runtime.current_user() is None


def test_fetch_clears_pending_state(runtime: WebRuntime) -> None:
    runtime.enable_demo()

    runtime.refresh_directory()

    assert not runtime.needs_load(DIRECTORY_RESOURCES)
    directory = runtime.refresh_directory(load=False)
    assert not directory.is_loading
    assert not directory.is_loading_user
    assert directory.can_manage
    assert runtime.current_user() is not None


def test_invalidated_resource_keeps_old_rows_until_refetched(runtime: WebRuntime) -> None:
    runtime.enable_demo()
    runtime.refresh_directory()

    runtime.cache.invalidate("employees")

    assert runtime.needs_load(DIRECTORY_RESOURCES)
    stale = runtime.refresh_directory(load=False)
    assert not stale.is_loading
    assert len(stale.rows()) == 3
    runtime.refresh_directory()
    assert not runtime.needs_load(DIRECTORY_RESOURCES)


def test_failed_fetch_does_not_ask_for_another_load(runtime: WebRuntime) -> None:
    runtime.refresh_holidays()

    assert not runtime.needs_load(HOLIDAY_RESOURCES)
    assert runtime.cache.peek("holidays").error is not None
