"""Root logger setup for hrdesk.

``HRDESK_LOG_LEVEL`` (a level name or number) pins the level. Failing that,
a truthy ``HRDESK_DEBUG`` forces DEBUG. Either one beats the debug toggle on
the settings page.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

LEVEL_ENV = "HRDESK_LOG_LEVEL"
DEBUG_ENV = "HRDESK_DEBUG"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"
_TRUTHY = frozenset({"1", "true", "yes", "on"})
# Third-party loggers that drown the app output below WARNING.
_CHATTY = ("urllib3", "watchfiles", "engineio", "socketio")


def _parse_level(text: str) -> Optional[int]:
    text = text.strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else None


def env_override(environ: Optional[Mapping[str, str]] = None) -> Optional[int]:
    """Level forced by the environment, or ``None`` when nothing is set."""
    env = os.environ if environ is None else environ
    explicit = env.get(LEVEL_ENV, "")
    if explicit.strip():
        parsed = _parse_level(explicit)
        return logging.INFO if parsed is None else parsed
    if env.get(DEBUG_ENV, "").strip().lower() in _TRUTHY:
        return logging.DEBUG
    return None


def _set_level(level: int) -> int:
    logging.getLogger().setLevel(level)
    chatty_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _CHATTY:
        logging.getLogger(name).setLevel(chatty_level)
    return level


def configure_root(default_level: int | str = logging.INFO) -> int:
    """Install a compact handler on the root logger and return the level used."""
    if isinstance(default_level, str):
        parsed = _parse_level(default_level)
        default_level = logging.INFO if parsed is None else parsed
    forced = env_override()
    level = default_level if forced is None else forced
    if not logging.getLogger().handlers:
        logging.basicConfig(format=_FORMAT, datefmt=_DATEFMT)
    return _set_level(level)


def apply_ui_preferences(debug_enabled: bool) -> int:
    """Apply the settings-page debug toggle unless the environment pins a level."""
    forced = env_override()
    if forced is not None:
        return _set_level(forced)
    return _set_level(logging.DEBUG if debug_enabled else logging.INFO)


def env_requests_debug() -> bool:
    forced = env_override()
    return forced is not None and forced <= logging.DEBUG
