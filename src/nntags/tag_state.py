"""Per-tag association state and its transition rules.

Nothing in this module performs I/O. The controller is the only writer of
``locked``; ``associated`` is written by the controller on a successful
mutation and by reconciliation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Literal, Optional, Sequence

from .resources.relationships_types import _normalize_record_id
from .rows_types import RowResponse

_logger = logging.getLogger(__name__)

TagStatus = Literal["unassociated", "associating", "associated", "disassociating"]


@dataclass
class Tag:
    """One candidate related record."""

    id: str
    display_columns: tuple[str, ...] = ()
    associated: bool = False
    locked: bool = False

    @property
    def status(self) -> TagStatus:
        # associated keeps its pre-click value while a request is in flight
        if self.locked:
            return "disassociating" if self.associated else "associating"
        return "associated" if self.associated else "unassociated"


def try_lock(tag: Tag) -> bool:
    """Acquire the tag's click lock; ``False`` if a request is already in flight."""
    if tag.locked:
        return False
    tag.locked = True
    return True


def apply_outcome(tag: Tag, new_associated: bool) -> None:
    """Release the lock and record the confirmed association."""
    tag.locked = False
    tag.associated = new_associated


def apply_outcome_unchanged(tag: Tag) -> None:
    """Release the lock, keeping the pre-click association."""
    tag.locked = False


class TagSet:
    """The tags of one view refresh, keyed by normalized id, in row order."""

    def __init__(self, tags: Iterable[Tag] = (), *, generation: int = 0) -> None:
        self.generation = generation
        self._tags: dict[str, Tag] = {}
        for tag in tags:
            if tag.id in self._tags:
                _logger.warning("Duplicate tag id %s ignored.", tag.id)
                continue
            self._tags[tag.id] = tag

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[RowResponse],
        columns: Optional[Sequence[str]] = None,
        *,
        generation: int = 0,
    ) -> "TagSet":
        """Create fresh, unassociated tags from the row feed.

        Parameters
        ----------
        rows
            Rows of the candidate record view.
        columns
            Column names to show, in display order. When omitted every cell of
            the row is shown in feed order.
        generation
            Refresh generation the set belongs to.
        """
        tags: list[Tag] = []
        for row in rows:
            tag_id = _tag_key(row.get("id"))
            if tag_id is None:
                _logger.warning("Skipping row without a usable id: %s", row)
                continue
            tags.append(Tag(id=tag_id, display_columns=_display_values(row, columns)))
        return cls(tags, generation=generation)

    def get(self, tag_id: object) -> Optional[Tag]:
        key = _tag_key(tag_id)
        return self._tags.get(key) if key is not None else None

    def mark_associated(self, ids: Iterable[str]) -> list[Tag]:
        """Set ``associated`` on every tag whose id is in ``ids``.

        Returns the tags that matched. Tags not named are left untouched.
        """
        matched: list[Tag] = []
        for raw_id in ids:
            tag = self.get(raw_id)
            if tag is None:
                continue
            tag.associated = True
            matched.append(tag)
        return matched

    def associated_ids(self) -> set[str]:
        return {tag.id for tag in self._tags.values() if tag.associated}

    def __contains__(self, tag_id: object) -> bool:
        return self.get(tag_id) is not None

    def __iter__(self) -> Iterator[Tag]:
        return iter(self._tags.values())

    def __len__(self) -> int:
        return len(self._tags)


def _tag_key(value: object) -> Optional[str]:
    # ids are opaque; numeric ids from the row feed are compared as text
    if value is not None and not isinstance(value, str):
        value = str(value)
    return _normalize_record_id(value)


def _display_values(row: RowResponse, columns: Optional[Sequence[str]]) -> tuple[str, ...]:
    cells = row.get("cells") or []
    if columns is None:
        return tuple(str(cell.get("formattedValue") or "") for cell in cells)
    by_name = {cell.get("columnName"): cell.get("formattedValue") for cell in cells}
    return tuple(str(by_name.get(name) or "") for name in columns)


__all__ = [
    "Tag",
    "TagSet",
    "TagStatus",
    "apply_outcome",
    "apply_outcome_unchanged",
    "try_lock",
]
