"""HTTP transport used to dispatch form submissions.

A transport is anything with a `request()` method matching the
`Transport` protocol. It returns a `TransportResponse` on success and
raises `TransportError` on failure, attaching the response when the
server answered.
"""

import logging
from typing import Any, Protocol, runtime_checkable

import requests
from pydantic import BaseModel, Field

from formstate.exceptions import TransportError

logger = logging.getLogger(__name__)


class TransportResponse(BaseModel):
    """Response returned by a transport."""

    status: int
    data: Any = None
    headers: dict[str, str] = Field(default_factory=dict)


@runtime_checkable
class Transport(Protocol):
    """Protocol for HTTP transports."""

    def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        **options: Any,
    ) -> TransportResponse:
        """Send a request.

        Args:
            method: HTTP method, any case.
            url: Request URL.
            params: Query string values.
            data: Request body, sent as JSON.
            **options: Transport-specific options (headers, timeout, ...).

        Returns:
            The response for a successful (2xx) request.

        Raises:
            TransportError: On network failure (no response) or on a
                non-2xx status (with the response attached).
        """
        ...


class RequestsTransport:
    """Transport backed by a `requests.Session`."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["Accept"] = "application/json"
        if headers:
            self.session.headers.update(headers)

    def _full_url(self, url: str) -> str:
        if not self.base_url or url.startswith(("http://", "https://")):
            return url
        return self.base_url.rstrip("/") + "/" + url.lstrip("/")

    def _wrap(self, raw: requests.Response) -> TransportResponse:
        try:
            body: Any = raw.json()
        except ValueError:
            body = raw.text or None
        return TransportResponse(status=raw.status_code, data=body, headers=dict(raw.headers))

    def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        **options: Any,
    ) -> TransportResponse:
        method = method.upper()
        full_url = self._full_url(url)
        options.setdefault("timeout", self.timeout)

        logger.debug("%s %s", method, full_url)
        try:
            raw = self.session.request(method, full_url, params=params, json=data, **options)
        except requests.RequestException as e:
            raise TransportError(f"{method} {full_url} failed: {e}") from e

        response = self._wrap(raw)
        if not raw.ok:
            raise TransportError(
                f"{method} {full_url} returned {raw.status_code}",
                response=response,
            )
        return response
