"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Optional

from hrdesk.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
)
from hrdesk.domain.ports import UseCaseError

TIMEOUT_MESSAGE = "Request timed out. Check connection."
AUTH_MESSAGE = "Not authorized."


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    The API reports mutation failures as ``{"message": ...}``; when present
    that text is passed through untouched so the UI can show it verbatim.

    Args:
        exc: Exception raised by an adapter or the normalizer.
        default_code: Code used when no more specific mapping applies.
        default_message: Fallback text when the API gave no message.

    Returns:
        UseCaseError: Value returned to the caller.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiTimeoutError):
        return UseCaseError("REQUEST_TIMEOUT", TIMEOUT_MESSAGE)
    if isinstance(exc, ApiError):
        status = exc.status or None
        server_message = exc.server_message
        if server_message:
            return UseCaseError(default_code, server_message, status=status)
        if isinstance(exc, ApiClientError):
            if exc.is_auth_failure:
                return UseCaseError("AUTH_FAILED", AUTH_MESSAGE, status=status)
            if default_message:
                return UseCaseError(default_code, default_message, status=status)
            label = f"Request failed (HTTP {status})" if status else "Request failed"
            return UseCaseError(default_code, _with_detail(label, exc.detail()), status=status)
        if isinstance(exc, ApiServerError):
            return UseCaseError(
                default_code,
                default_message or "Server error, try again.",
                status=status,
            )
        return UseCaseError(default_code, default_message or str(exc), status=status)

    message = default_message or str(exc) or "Unexpected error."
    return UseCaseError(default_code, message)


def _with_detail(base: str, detail: Optional[str]) -> str:
    return f"{base}: {detail}" if detail else f"{base}."


__all__ = ["AUTH_MESSAGE", "TIMEOUT_MESSAGE", "map_api_error"]
