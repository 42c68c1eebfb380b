from __future__ import annotations

import logging

import pytest

from hrdesk.utils.logging import apply_ui_preferences, configure_root, env_override, env_requests_debug


@pytest.fixture(autouse=True)
def _restore_root_level(monkeypatch):
    monkeypatch.delenv("HRDESK_LOG_LEVEL", raising=False)
    monkeypatch.delenv("HRDESK_DEBUG", raising=False)
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


def test_ui_preference_toggles_debug() -> None:
    assert apply_ui_preferences(True) == logging.DEBUG
    assert apply_ui_preferences(False) == logging.INFO
    assert logging.getLogger().level == logging.INFO


def test_env_level_wins_over_ui(monkeypatch) -> None:
    monkeypatch.setenv("HRDESK_LOG_LEVEL", "warning")

    assert apply_ui_preferences(True) == logging.WARNING
    assert configure_root() == logging.WARNING
    assert not env_requests_debug()


def test_debug_flag(monkeypatch) -> None:
    monkeypatch.setenv("HRDESK_DEBUG", "yes")

    assert env_requests_debug()
    assert configure_root(logging.ERROR) == logging.DEBUG


def test_env_override_parsing() -> None:
    assert env_override({}) is None
    assert env_override({"HRDESK_LOG_LEVEL": "15"}) == 15
    assert env_override({"HRDESK_LOG_LEVEL": "chatty"}) == logging.INFO
    assert env_override({"HRDESK_LOG_LEVEL": "error", "HRDESK_DEBUG": "1"}) == logging.ERROR
    assert env_override({"HRDESK_DEBUG": "off"}) is None


def test_third_party_loggers_follow_debug() -> None:
    apply_ui_preferences(False)
    assert logging.getLogger("urllib3").level == logging.WARNING

    apply_ui_preferences(True)
    assert logging.getLogger("urllib3").level == logging.DEBUG
