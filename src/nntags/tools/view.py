"""Presentation helpers: columns, search filtering and tag styling.

These only read tag state; the controller owns it.
"""

from __future__ import annotations

from typing import Iterable, Optional

from ..configuration import ControlConfiguration
from ..rows_types import ColumnResponse
from ..tag_state import Tag


def visible_columns(columns: Optional[Iterable[ColumnResponse]]) -> list[str]:
    """Return the names of shown columns (``order >= 0``) sorted by ``order``."""
    if not columns:
        return []
    shown = [
        column
        for column in columns
        if isinstance(column.get("order"), int) and column["order"] >= 0 and column.get("name")
    ]
    shown.sort(key=lambda column: column["order"])
    return [column["name"] for column in shown]


def filter_tags(tags: Iterable[Tag], query: str) -> tuple[list[Tag], list[Tag]]:
    """Split tags into ``(visible, collapsed)`` for a search query.

    Matching is a case-insensitive substring test over the tag's display
    values. Only unassociated tags are ever collapsed; an empty query shows
    everything.
    """
    needle = (query or "").strip().upper()
    visible: list[Tag] = []
    collapsed: list[Tag] = []
    for tag in tags:
        if not needle or tag.associated:
            visible.append(tag)
        elif any(needle in value.upper() for value in tag.display_columns):
            visible.append(tag)
        else:
            collapsed.append(tag)
    return visible, collapsed


def tag_style(tag: Tag, configuration: ControlConfiguration) -> dict[str, object]:
    """Return display attributes for a tag button."""
    color = configuration.associated_color if tag.associated else None
    return {
        "id": tag.id,
        "class": "Associated" if tag.associated else "Unassociated",
        "background-color": color or "",
        "busy": tag.locked,
        "label": " | ".join(value for value in tag.display_columns if value),
    }


__all__ = ["filter_tags", "tag_style", "visible_columns"]
