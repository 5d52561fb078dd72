"""Base resource helpers."""

from __future__ import annotations

from typing import Any, Iterable, Optional, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from ..client import WebApi


class Resource:
    """Shared helpers for resource classes."""

    def __init__(self, client: "WebApi") -> None:
        self._client = client

    @property
    def _logger(self):
        return self._client._logger

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
        expected: Iterable[int] = (200,),
        timeout: Optional[float] = None,
    ) -> Optional[dict[str, Any] | list[Any]]:
        return self._client.request(
            method, path, params=params, json=json, expected=expected, timeout=timeout
        )

    def _get(
        self,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Optional[dict[str, Any] | list[Any]]:
        return self._request("GET", path, params=params, timeout=timeout)

    def _post(
        self,
        path: str,
        *,
        json: Optional[dict[str, Any]] = None,
        expected: Iterable[int] = (200,),
        timeout: Optional[float] = None,
    ) -> Optional[dict[str, Any] | list[Any]]:
        return self._request("POST", path, json=json, expected=expected, timeout=timeout)

    def _delete(
        self,
        path: str,
        *,
        expected: Iterable[int] = (200,),
        timeout: Optional[float] = None,
    ) -> Optional[dict[str, Any] | list[Any]]:
        return self._request("DELETE", path, expected=expected, timeout=timeout)
