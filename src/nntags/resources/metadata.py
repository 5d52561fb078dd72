"""Entity metadata lookups."""

from __future__ import annotations

from typing import Optional, cast

from ..errors import HttpFailure
from .base import Resource
from .relationships_types import EntityDefinitionResponse


class EntityMetadata(Resource):
    """Resolve logical entity names against ``EntityDefinitions``."""

    def entity_set_name(self, logical_name: str, *, timeout: Optional[float] = None) -> str:
        """Return the entity set name for ``logical_name``.

        Parameters
        ----------
        logical_name
            Entity logical name, e.g. ``account``.
        timeout
            Request timeout in seconds.

        Returns
        -------
        str
            The ``EntitySetName``, or ``""`` when the lookup fails.
        """
        if not isinstance(logical_name, str) or not logical_name.strip():
            self._logger.warning("Invalid logical_name for metadata lookup: %s", logical_name)
            return ""

        try:
            response = self._get(
                f"/EntityDefinitions(LogicalName='{logical_name}')",
                params={"$select": "EntitySetName"},
                timeout=timeout,
            )
        except HttpFailure:
            return ""

        if not isinstance(response, dict):
            self._logger.warning("Metadata response for %s was not an object.", logical_name)
            return ""

        definition = cast(EntityDefinitionResponse, response)
        set_name = definition.get("EntitySetName")
        if isinstance(set_name, str):
            return set_name
        self._logger.warning("Metadata response for %s missing EntitySetName.", logical_name)
        return ""
