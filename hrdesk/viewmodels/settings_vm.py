from __future__ import annotations

import os
from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, Dict, Mapping, Optional

from ..utils.logging import env_requests_debug

ENV_API_BASE_URL = "HRDESK_API_BASE_URL"
ENV_SESSION_COOKIE = "HRDESK_SESSION_COOKIE"


@dataclass
class SettingsConfig:
    """Typed runtime settings that persist via StorageLocal."""

    api_base_url: str = ""
    request_timeout_s: int = 10
    read_retries: int = 0
    refresh_interval_s: int = 30


def _default_debug_logging() -> bool:
    return env_requests_debug()


class SettingsVM:
    """Keeps app settings UI state and validation, no I/O here."""

    def __init__(
        self,
        *,
        config: Optional[SettingsConfig] = None,
        on_save: Optional[Callable[[dict], None]] = None,
    ) -> None:
        self.config = config or SettingsConfig()
        self.on_save = on_save
        self.session_cookie: str = ""
        self.debug_logging: bool = _default_debug_logging()

    @property
    def api_base_url(self) -> str:
        return self.config.api_base_url

    @api_base_url.setter
    def api_base_url(self, value: Any) -> None:
        self.config = replace(self.config, api_base_url=_coerce_url(value))

    @property
    def request_timeout_s(self) -> int:
        return self.config.request_timeout_s

    @property
    def read_retries(self) -> int:
        return self.config.read_retries

    @property
    def refresh_interval_s(self) -> int:
        return self.config.refresh_interval_s

    def is_valid(self) -> bool:
        url = self.api_base_url
        return not url or url.startswith(("http://", "https://"))

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply a flat settings mapping; unknown keys or bad values raise ValueError."""
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")
        unknown = set(payload) - _ALLOWED_KEYS
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(map(str, unknown)))}")

        updates: Dict[str, Any] = {}
        for key, raw in payload.items():
            if key == "api_base_url":
                updates[key] = _coerce_url(raw)
            elif key in _INT_MINIMUMS:
                updates[key] = _coerce_int(key, raw, minimum=_INT_MINIMUMS[key])
        # Nothing is assigned until every field has coerced cleanly.
        self.config = replace(self.config, **updates)
        if "session_cookie" in payload:
            self.session_cookie = "" if payload["session_cookie"] is None else str(payload["session_cookie"]).strip()
        if "debug_logging" in payload:
            self.debug_logging = _coerce_bool(payload["debug_logging"])

    def apply_env(self, environ: Optional[Mapping[str, str]] = None) -> None:
        """Let ``HRDESK_API_BASE_URL`` / ``HRDESK_SESSION_COOKIE`` win over stored values."""
        env = os.environ if environ is None else environ
        url = env.get(ENV_API_BASE_URL, "").strip()
        if url:
            self.api_base_url = url
        cookie = env.get(ENV_SESSION_COOKIE, "").strip()
        if cookie:
            self.session_cookie = cookie

    def to_dict(self) -> dict:
        snapshot = asdict(self.config)
        snapshot["session_cookie"] = self.session_cookie
        snapshot["debug_logging"] = bool(self.debug_logging)
        return snapshot

    def cmd_save(self) -> None:
        if not self.is_valid():
            raise ValueError("API base URL must start with http:// or https://")
        if self.on_save:
            self.on_save(self.to_dict())


_INT_MINIMUMS = {"request_timeout_s": 1, "read_retries": 0, "refresh_interval_s": 0}
_ALLOWED_KEYS = frozenset({"api_base_url", *_INT_MINIMUMS, "session_cookie", "debug_logging"})


def _coerce_url(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError("api_base_url must be a string.")
    return value.strip().rstrip("/")


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _coerce_int(name: str, value: Any, *, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"{name} must be an integer.")
    try:
        coerced = int(value.strip()) if isinstance(value, str) else int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer.") from exc
    if coerced < minimum:
        raise ValueError(f"{name} must be at least {minimum}.")
    return coerced
