"""Core Web API client for the relationship store."""

from __future__ import annotations

import logging
import os
from typing import Any, Iterable, Optional

import requests

from .errors import HttpFailure
from .resources.metadata import EntityMetadata
from .resources.relationships import Relationships

DEFAULT_CLIENT_URL = os.environ.get("NNTAGS_CLIENT_URL", "http://localhost")
DEFAULT_API_VERSION = os.environ.get("NNTAGS_API_VERSION", "v9.1")
DEFAULT_TIMEOUT = float(os.environ.get("NNTAGS_REQUEST_TIMEOUT", "20"))

ODATA_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json; charset=utf-8",
    "OData-MaxVersion": "4.0",
    "OData-Version": "4.0",
}


class WebApi:
    """Resource-grouped client for an OData Web API."""

    relationships: Relationships
    metadata: EntityMetadata

    def __init__(
        self,
        *,
        client_url: Optional[str] = None,
        api_version: Optional[str] = None,
        token: Optional[str] = None,
        default_timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Create a client bound to one organization URL.

        Parameters
        ----------
        client_url
            Organization base URL, without the ``/api/data`` suffix.
        api_version
            Web API version segment, e.g. ``v9.1``.
        token
            Bearer token sent with every request. Falls back to ``NNTAGS_TOKEN``.
        default_timeout
            Default request timeout in seconds.
        session
            Optional requests session to reuse connections.
        """
        self.client_url = (client_url or DEFAULT_CLIENT_URL).rstrip("/")
        self.api_version = api_version or DEFAULT_API_VERSION
        self.token = token if token is not None else os.environ.get("NNTAGS_TOKEN")
        self.default_timeout = default_timeout or DEFAULT_TIMEOUT
        self._logger = logging.getLogger(__name__)
        self._session = session

        self.relationships: Relationships = Relationships(self)
        self.metadata: EntityMetadata = EntityMetadata(self)

    @property
    def base_url(self) -> str:
        return f"{self.client_url}/api/data/{self.api_version}"

    def url_for(self, path: str) -> str:
        """Return the absolute URL for a path relative to the Web API root."""
        if path.startswith(("http://", "https://")):
            return path
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    def _headers(self) -> dict[str, str]:
        headers = dict(ODATA_HEADERS)
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
        expected: Iterable[int] = (200,),
        timeout: Optional[float] = None,
    ) -> Optional[dict[str, Any] | list[Any]]:
        """Send a request to the Web API.

        Parameters
        ----------
        method
            HTTP method (GET, POST, DELETE).
        path
            Path relative to the Web API root, or an absolute URL such as an
            ``@odata.nextLink``.
        params
            Query parameters for the request.
        json
            JSON payload for the request.
        expected
            Status codes that count as success.
        timeout
            Timeout in seconds for this request.

        Returns
        -------
        dict | list | None
            Parsed JSON payload, or None if the response is empty or non-JSON.

        Raises
        ------
        HttpFailure
            On transport errors or any status outside ``expected``.
        """
        url = self.url_for(path)
        requester = self._session or requests
        try:
            response = requester.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(),
                timeout=timeout or self.default_timeout,
            )
        except requests.RequestException as exc:
            self._logger.warning("Request failed for %s %s: %s", method, url, exc)
            raise HttpFailure(str(exc) or type(exc).__name__) from exc

        if response.status_code not in set(expected):
            error_msg = _failure_message(response)
            self._logger.warning("Request failed for %s %s: %s", method, url, error_msg)
            raise HttpFailure(error_msg, status=response.status_code)

        if not response.content:
            return None
        try:
            payload = response.json()
        except ValueError:
            self._logger.warning("Response from %s %s was not JSON", method, url)
            return None
        if isinstance(payload, (dict, list)):
            return payload
        return None


def _failure_message(response: Any) -> str:
    """Build a readable message from a rejected response."""
    reason = getattr(response, "reason", "") or ""
    error_msg = f"{response.status_code} {reason}".strip()
    try:
        error_body = response.json()
    except ValueError:
        return error_msg
    if not isinstance(error_body, dict):
        return error_msg
    # OData wraps the message as {"error": {"code": ..., "message": ...}}
    error = error_body.get("error")
    if isinstance(error, dict) and error.get("message"):
        return f"{error_msg}: {error['message']}"
    if "message" in error_body:
        return f"{error_msg}: {error_body['message']}"
    if isinstance(error, str):
        return f"{error_msg}: {error}"
    if "detail" in error_body:
        return f"{error_msg}: {error_body['detail']}"
    return error_msg


__all__ = [
    "DEFAULT_API_VERSION",
    "DEFAULT_CLIENT_URL",
    "DEFAULT_TIMEOUT",
    "WebApi",
]
