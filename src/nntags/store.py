"""Asynchronous view of the relationship store."""

from __future__ import annotations

import asyncio
from typing import Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .context import RelationshipContext
    from .resources.relationships import Relationships


class RelationshipStore(Protocol):
    """The three remote operations the controller depends on.

    Implementations raise :class:`nntags.errors.HttpFailure` on failure.
    """

    async def create_link(self, context: "RelationshipContext", related_id: str) -> None: ...

    async def remove_link(self, context: "RelationshipContext", related_id: str) -> None: ...

    async def list_linked_ids(self, context: "RelationshipContext") -> set[str]: ...


class ThreadedRelationshipStore:
    """Run the blocking :class:`Relationships` calls on worker threads.

    Results are delivered back on the calling event loop, so callers keep a
    single-threaded view of their own state.
    """

    def __init__(self, relationships: "Relationships", *, timeout: Optional[float] = None) -> None:
        self._relationships = relationships
        self._timeout = timeout

    async def create_link(self, context: "RelationshipContext", related_id: str) -> None:
        await asyncio.to_thread(
            self._relationships.create_link, context, related_id, timeout=self._timeout
        )

    async def remove_link(self, context: "RelationshipContext", related_id: str) -> None:
        await asyncio.to_thread(
            self._relationships.remove_link, context, related_id, timeout=self._timeout
        )

    async def list_linked_ids(self, context: "RelationshipContext") -> set[str]:
        return await asyncio.to_thread(
            self._relationships.list_linked_ids, context, timeout=self._timeout
        )


__all__ = ["RelationshipStore", "ThreadedRelationshipStore"]
