"""Typed failures raised by the HR REST adapter.

Error bodies from the API look like ``{"message": "..."}``. Requests that
fail schema validation additionally carry ``"errors"``, a list of issues of
the form ``{"path": ["field", ...], "message": "..."}``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

_MAX_TEXT_BODY = 400
_MAX_LISTED_ISSUES = 3


class ApiError(RuntimeError):
    """Base class for REST adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload
        self.context = context

    @property
    def server_message(self) -> Optional[str]:
        """The ``message`` the API put in the error body, verbatim."""
        return extract_error_message(self.payload)

    @property
    def field_errors(self) -> Dict[str, str]:
        return extract_field_errors(self.payload)

    def detail(self) -> Optional[str]:
        """Short description of what was wrong with the request, if known."""
        issues = self.field_errors
        if issues:
            listed = list(issues.items())[:_MAX_LISTED_ISSUES]
            return "; ".join(f"{field}: {text}" if field else text for field, text in listed)
        if isinstance(self.payload, str):
            return self.payload.strip() or None
        return None


class ApiClientError(ApiError):
    """HTTP 4xx from the HR API."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, status=status, payload=payload, context=context)

    @property
    def is_auth_failure(self) -> bool:
        return self.status in (401, 403)


class ApiServerError(ApiError):
    """HTTP 5xx from the HR API."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, status=status, payload=payload, context=context)


class ApiTimeoutError(ApiError):
    """Transport level timeout or connectivity failure."""

    def __init__(self, message: str, *, context: Optional[str] = None) -> None:
        super().__init__(message, context=context)


def parse_error_payload(resp: Any) -> Any:
    """Decoded JSON body, else a trimmed text snippet, else ``None``."""
    try:
        return resp.json()
    except ValueError:
        text = (getattr(resp, "text", "") or "").strip()
        return text[:_MAX_TEXT_BODY] or None


def build_error_message(ctx: str, status: int, payload: Any) -> str:
    summary = extract_error_message(payload)
    if summary is None and isinstance(payload, str):
        summary = payload.strip() or None
    if summary:
        return f"{ctx}: {summary} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


def error_from_response(resp: Any, ctx: str) -> Optional[ApiError]:
    """Return the typed error for a non-2xx response, ``None`` on success."""
    status = resp.status_code
    if 200 <= status < 300:
        return None
    payload = parse_error_payload(resp)
    message = build_error_message(ctx, status, payload)
    if 400 <= status < 500:
        return ApiClientError(message, status=status, payload=payload, context=ctx)
    if 500 <= status < 600:
        return ApiServerError(message, status=status, payload=payload, context=ctx)
    return ApiError(message, status=status, payload=payload, context=ctx)


def extract_error_message(payload: Any) -> Optional[str]:
    """Return ``payload["message"]`` unchanged when it is a non-blank string."""
    if isinstance(payload, dict):
        value = payload.get("message")
        if isinstance(value, str) and value.strip():
            return value
    return None


def extract_field_errors(payload: Any) -> Dict[str, str]:
    """Map dotted field paths to the first validation message for each.

    Issues without a path are keyed by the empty string.
    """
    issues = payload.get("errors") if isinstance(payload, dict) else None
    if not isinstance(issues, list):
        return {}
    result: Dict[str, str] = {}
    for issue in issues:
        if not isinstance(issue, dict):
            continue
        text = issue.get("message")
        if not isinstance(text, str) or not text.strip():
            continue
        path = issue.get("path")
        if isinstance(path, (list, tuple)):
            field = ".".join(str(part) for part in path)
        else:
            field = str(path or "")
        result.setdefault(field, text.strip())
    return result
