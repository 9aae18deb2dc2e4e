"""
HTTP Transport for bbclone.

Handles HTTP communication with the Bitbucket API and maps failed responses
to typed exceptions. Requests are made one at a time and never retried.
"""

import json
import time
from typing import Any

import httpx

from bbclone.auth import Credentials, build_auth
from bbclone.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DecodeError,
    NotFoundError,
    ServerError,
    TransportError,
)
from bbclone.logging import log_http_request, log_http_response


class HTTPTransport:
    """
    HTTP transport layer for the Bitbucket API.

    Handles:
    - Optional preemptive basic authentication on every request
    - JSON decoding of response bodies
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        base_url: str,
        credentials: Credentials | None = None,
        timeout: float = 30.0,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.bitbucket.org")
            credentials: Login and password, or None for anonymous access
            timeout: Request timeout in seconds
            http_transport: httpx transport to send requests through (default: network)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self._client = httpx.Client(
            base_url=self.base_url,
            auth=build_auth(credentials),
            timeout=timeout,
            headers={"Accept": "application/json"},
            transport=http_transport,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def get_json(self, url: str) -> dict[str, Any]:
        """
        GET a URL and decode the JSON object in its body.

        Args:
            url: Absolute URL, or a path relative to base_url

        Returns:
            Parsed JSON object

        Raises:
            TransportError: On connection failures or non-2xx responses
            DecodeError: If the body is not a JSON object
        """
        log_http_request("GET", url, headers=dict(self._client.headers))
        started = time.monotonic()

        try:
            response = self._client.get(url)
        except httpx.RequestError as e:
            raise TransportError("CONNECTION_ERROR", f"GET {url} failed: {e}") from e

        elapsed_ms = (time.monotonic() - started) * 1000
        log_http_response(response.status_code, url, elapsed_ms=elapsed_ms)

        if not response.is_success:
            raise self._parse_error_response(response)

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"malformed JSON from {url}: {e}") from e

        if not isinstance(data, dict):
            raise DecodeError(
                f"expected a JSON object from {url}, got {type(data).__name__}"
            )
        return data

    def _parse_error_response(self, response: httpx.Response) -> TransportError:
        """
        Parse an error response into a typed exception.

        Bitbucket reports errors as ``{"type": "error", "error": {"message": ...}}``.

        Args:
            response: HTTP response with error status

        Returns:
            Appropriate TransportError subclass
        """
        try:
            data = response.json()
        except ValueError:
            data = {}

        error = data.get("error", {}) if isinstance(data, dict) else {}
        if not isinstance(error, dict):
            error = {}

        status_code = response.status_code
        code = f"HTTP_{status_code}"
        message = error.get("message") or f"HTTP {status_code} from {response.request.url}"

        if status_code == 401:
            return AuthenticationError(code, message, status_code)
        elif status_code == 403:
            return AuthorizationError(code, message, status_code)
        elif status_code == 404:
            return NotFoundError(code, message, status_code)
        elif status_code >= 500:
            return ServerError(code, message, status_code)
        else:
            return TransportError(code, message, status_code)
