"""``requests`` transport shared by the HR REST adapter.

Reads are retried on timeouts and dropped connections up to
``HttpConfig.read_retries`` extra times. Writes go out once. The API
authenticates through the ``connect.sid`` cookie issued at login.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from hrdesk.adapters.api_errors import ApiError, ApiTimeoutError

SESSION_COOKIE_NAME = "connect.sid"

LOGGER = logging.getLogger(__name__)


@dataclass
class HttpConfig:
    """Timeout and retry configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Default timeout in seconds for JSON API calls.
        read_retries: Retry attempts after the initial GET. Mutations are
            always sent exactly once.
    """
    request_timeout_s: int = 10
    read_retries: int = 0


class RetryingSession:
    """``requests.Session`` wrapper that speaks JSON to the HR API.

    Only transport failures are handled here; status codes are left to the
    adapter.
    """

    def __init__(
        self,
        session_cookie: Optional[str],
        cfg: HttpConfig,
        *,
        cookie_name: str = SESSION_COOKIE_NAME,
    ) -> None:
        self.session = requests.Session()
        self.cfg = cfg
        if session_cookie:
            self.session.cookies.set(cookie_name, session_cookie)

    def get(self, url: str, *, timeout: Optional[int] = None) -> requests.Response:
        """Send a GET, retrying on timeouts and dropped connections.

        Args:
            url: Absolute endpoint URL.
            timeout: Per-attempt timeout override in seconds.

        Returns:
            ``requests.Response`` from the first attempt that reached the server,
            whatever its status code.

        Raises:
            ApiTimeoutError: All ``read_retries + 1`` attempts failed in transport.
        """
        attempts = max(int(self.cfg.read_retries), 0) + 1
        return self._request("GET", url, timeout=timeout, attempts=attempts)

    def post(
        self,
        url: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send ``json_body`` as a POST exactly once."""
        return self._request("POST", url, json_body=json_body, timeout=timeout)

    def patch(
        self,
        url: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send ``json_body`` as a PATCH exactly once."""
        return self._request("PATCH", url, json_body=json_body, timeout=timeout)

    def delete(self, url: str, *, timeout: Optional[int] = None) -> requests.Response:
        """Send a DELETE exactly once."""
        return self._request("DELETE", url, timeout=timeout)

    def _request(
        self,
        method: str,
        url: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
        attempts: int = 1,
    ) -> requests.Response:
        """Send ``method`` up to ``attempts`` times while the transport fails.

        Raises:
            ApiTimeoutError: Every attempt timed out or could not connect.
            ApiError: ``requests`` failed for any other reason.
        """
        context = f"{method} {url}"
        headers = {"Accept": "application/json"}
        data = None
        if json_body is not None:
            headers["Content-Type"] = "application/json"
            data = json.dumps(json_body)

        attempt = 0
        while True:
            attempt += 1
            try:
                return self.session.request(
                    method,
                    url,
                    data=data,
                    headers=headers,
                    timeout=timeout or self.cfg.request_timeout_s,
                )
            except (req_exc.Timeout, req_exc.ConnectionError) as exc:
                LOGGER.debug("%s attempt %d/%d failed: %s", context, attempt, attempts, exc)
                if attempt >= attempts:
                    raise ApiTimeoutError(f"Timeout contacting {url}", context=context) from exc
            except req_exc.RequestException as exc:
                raise ApiError(str(exc), context=context) from exc


__all__ = ["HttpConfig", "RetryingSession", "SESSION_COOKIE_NAME"]
