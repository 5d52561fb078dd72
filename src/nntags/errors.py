"""Error types raised by the Web API client."""

from __future__ import annotations

from typing import Optional

import requests


class HttpFailure(requests.RequestException):
    """A Web API call that did not end with an accepted status.

    ``status`` is ``None`` when the request never produced a response
    (connection errors, timeouts).
    """

    def __init__(self, message: str, *, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status

    def __str__(self) -> str:
        return self.message


__all__ = ["HttpFailure"]
