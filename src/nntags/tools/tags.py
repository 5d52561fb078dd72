"""Console helpers built on InquirerPy."""

from __future__ import annotations

import asyncio
from typing import Any, Optional

from ..configuration import ControlConfiguration
from ..tag_state import TagSet
from .view import filter_tags


def choose_tag(
    tags: TagSet,
    configuration: Optional[ControlConfiguration] = None,
    *,
    query: str = "",
) -> str | None:
    """Interactively pick a tag to toggle using InquirerPy.

    Parameters
    ----------
    tags
        Live tag set.
    configuration
        Enables fuzzy search when ``enable_search`` is set.
    query
        Optional pre-filter applied before prompting.

    Returns
    -------
    str | None
        Id of the chosen tag, or None if the user is done.
    """
    try:
        from InquirerPy.resolver import prompt
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError("InquirerPy is required for choose_tag.") from exc

    configuration = configuration or ControlConfiguration()
    visible, _collapsed = filter_tags(tags, query)

    choices: list[dict[str, Any]] = [{"name": " X Done", "value": ("done", None)}]
    for tag in visible:
        marker = "[x]" if tag.associated else "[ ]"
        if tag.locked:
            marker = "[~]"
        label = " | ".join(value for value in tag.display_columns if value) or tag.id
        choices.append({"name": f"{marker} {label}", "value": ("tag", tag.id)})

    result = prompt(
        [
            {
                "type": "fuzzy" if configuration.enable_search else "list",
                "name": "selection",
                "message": "Toggle a tag",
                "choices": choices,
            }
        ],
    )
    if not isinstance(result, dict):
        return None
    selection = result.get("selection")
    if not isinstance(selection, tuple) or len(selection) != 2:
        return None
    action, payload = selection
    if action == "tag" and isinstance(payload, str):
        return payload
    return None


def confirm_alert(message: str) -> None:
    """Show ``message`` and block until the user acknowledges it."""
    try:
        from InquirerPy.resolver import prompt
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError("InquirerPy is required for confirm_alert.") from exc

    prompt(
        [
            {
                "type": "confirm",
                "name": "ok",
                "message": f"{message}\nDismiss?",
                "default": True,
            }
        ],
    )


async def alert(message: str) -> None:
    """Notifier for :class:`nntags.controller.ToggleController` on a console."""
    await asyncio.to_thread(confirm_alert, message)


__all__ = ["alert", "choose_tag", "confirm_alert"]
