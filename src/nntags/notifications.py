"""User-facing failure notifications."""

from __future__ import annotations

import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

_logger = logging.getLogger(__name__)

# A notifier may block until the user dismisses it; coroutine functions are awaited.
Notifier = Callable[[str], Union[Awaitable[None], None]]


def log_notification(message: str) -> None:
    """Default notifier: log the failure message."""
    _logger.warning("Notification: %s", message)


async def deliver(notify: Optional[Notifier], message: str) -> None:
    """Show ``message`` through ``notify`` and wait until it is dismissed."""
    notify = notify or log_notification
    try:
        result = notify(message)
        if inspect.isawaitable(result):
            await result
    except Exception:  # noqa: BLE001 - a broken notifier must not break the view
        _logger.exception("Notifier failed while showing: %s", message)


__all__ = ["Notifier", "deliver", "log_notification"]
