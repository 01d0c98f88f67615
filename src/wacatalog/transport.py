"""HTTP transport for the Graph API.

Performs the actual call for the catalog client: JSON-encodes the body,
attaches the bearer token, executes the request and maps non-2xx
statuses to :class:`RequestError`. The raw response bytes are returned
undecoded.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from .errors import RequestError
from .urls import root_url

logger = logging.getLogger(__name__)


@dataclass
class RequestContext:
    """Per-call context: optional timeout override and a cancellation flag."""
    timeout_s: Optional[float] = None
    cancelled: threading.Event = field(default_factory=threading.Event)

    def cancel(self) -> None:
        self.cancelled.set()

    @property
    def is_cancelled(self) -> bool:
        return self.cancelled.is_set()


def _bearer(token: str) -> str:
    token = (token or "").strip()
    if token.startswith("Bearer "):
        return token
    return f"Bearer {token}"


def _error_from_response(response: requests.Response) -> RequestError:
    """Build a RequestError from a Graph API error body.

    Graph errors look like ``{"error": {"message": ..., "code": ...}}``.
    """
    detail = ""
    error_code = None
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        err = payload["error"]
        detail = str(err.get("message", ""))
        code = err.get("code")
        if isinstance(code, int):
            error_code = code

    if not detail:
        detail = response.text or response.reason or "request failed"

    return RequestError(detail, status_code=response.status_code, error_code=error_code)


class Transport:
    """Default transport backed by a ``requests.Session``."""

    def __init__(
        self,
        base_url: str = "",
        timeout_s: float = 30,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = root_url(base_url)
        self.timeout_s = timeout_s
        self._session = session or requests.Session()
        self._session.headers["Accept"] = "application/json"

    def do_request(
        self,
        method: str,
        url: str,
        body: Optional[Dict[str, Any]],
        access_token: str,
        ctx: Optional[RequestContext] = None,
    ) -> bytes:
        """Execute one request and return the raw response body."""
        if ctx is not None and ctx.is_cancelled:
            raise RequestError("request cancelled")

        timeout = self.timeout_s
        if ctx is not None and ctx.timeout_s is not None:
            timeout = ctx.timeout_s

        headers = {"Authorization": _bearer(access_token)}
        kwargs: Dict[str, Any] = {"headers": headers, "timeout": timeout}
        if body is not None:
            kwargs["json"] = body

        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(method, url, **kwargs)
        except requests.exceptions.Timeout as e:
            raise RequestError(f"Request timed out: {e}") from e
        except requests.exceptions.ConnectionError as e:
            raise RequestError(f"Cannot connect to {self.base_url}") from e
        except requests.exceptions.RequestException as e:
            raise RequestError(f"Request failed: {e}") from e

        logger.debug("%s %s -> %s", method, url, response.status_code)
        if not 200 <= response.status_code < 300:
            raise _error_from_response(response)

        return response.content

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
