"""Host record context shared by the relationship client and the controller."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .resources.relationships_types import _normalize_record_id

if TYPE_CHECKING:  # pragma: no cover
    from .client import WebApi

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelationshipContext:
    """Identifies one host record and the many-to-many relationship to edit.

    Built once per view load and rebuilt whenever the host record changes.
    """

    entity_logical_name: str
    entity_set_name: str
    entity_id: str
    relationship_name: str
    related_logical_name: str
    related_set_name: str

    def __post_init__(self) -> None:
        entity_id = _normalize_record_id(self.entity_id)
        if entity_id is None:
            raise ValueError(f"Invalid entity_id: {self.entity_id!r}")
        object.__setattr__(self, "entity_id", entity_id)

    @property
    def host_path(self) -> str:
        return f"/{self.entity_set_name}({self.entity_id})"

    @property
    def host_id_field(self) -> str:
        return f"{self.entity_logical_name}id"

    @property
    def related_id_field(self) -> str:
        return f"{self.related_logical_name}id"

    def reference_path(self) -> str:
        """Path of the relationship's reference collection on the host record."""
        return f"{self.host_path}/{self.relationship_name}/$ref"

    def member_reference_path(self, related_id: str) -> str:
        """Path of one related record's reference under the host record."""
        return f"{self.host_path}/{self.relationship_name}({related_id})/$ref"

    def related_record_path(self, related_id: str) -> str:
        return f"/{self.related_set_name}({related_id})"


async def resolve_context(
    api: "WebApi",
    *,
    entity_logical_name: str,
    entity_id: str,
    relationship_name: str,
    related_logical_name: str,
) -> RelationshipContext:
    """Look up both entity set names and build a :class:`RelationshipContext`.

    The two metadata queries run concurrently on worker threads so the event
    loop is never blocked. A failed lookup yields an empty set name, which is
    logged but not fatal.
    """
    entity_set_name, related_set_name = await asyncio.gather(
        asyncio.to_thread(api.metadata.entity_set_name, entity_logical_name),
        asyncio.to_thread(api.metadata.entity_set_name, related_logical_name),
    )
    for logical_name, set_name in (
        (entity_logical_name, entity_set_name),
        (related_logical_name, related_set_name),
    ):
        if not set_name:
            _logger.warning("No entity set name resolved for %s", logical_name)

    return RelationshipContext(
        entity_logical_name=entity_logical_name,
        entity_set_name=entity_set_name,
        entity_id=entity_id,
        relationship_name=relationship_name,
        related_logical_name=related_logical_name,
        related_set_name=related_set_name,
    )


__all__ = ["RelationshipContext", "resolve_context"]
