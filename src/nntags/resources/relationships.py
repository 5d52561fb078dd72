"""Many-to-many relationship resource."""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING, cast

from ..errors import HttpFailure
from .base import Resource
from .relationships_types import (
    NO_CONTENT_STATUSES,
    AssociationPayload,
    ODataCollection,
    _normalize_record_id,
)

if TYPE_CHECKING:  # pragma: no cover
    from ..context import RelationshipContext


class Relationships(Resource):
    """Link, unlink and list related records of a host record."""

    def create_link(
        self,
        context: "RelationshipContext",
        related_id: str,
        *,
        timeout: Optional[float] = None,
    ) -> None:
        """Associate ``related_id`` with the host record.

        Parameters
        ----------
        context
            Host record and relationship to modify.
        related_id
            Identifier of the related record.
        timeout
            Request timeout in seconds.

        Raises
        ------
        HttpFailure
            When the store does not answer with a no-content status.
        ValueError
            If ``related_id`` is blank or not a string.
        """
        record_id = _require_record_id(related_id)
        payload: AssociationPayload = {
            "@odata.id": self._client.url_for(context.related_record_path(record_id)),
        }
        self._post(
            context.reference_path(),
            json=cast(dict, payload),
            expected=NO_CONTENT_STATUSES,
            timeout=timeout,
        )
        self._logger.info("Linked %s to %s via %s", record_id, context.entity_id, context.relationship_name)

    def remove_link(
        self,
        context: "RelationshipContext",
        related_id: str,
        *,
        timeout: Optional[float] = None,
    ) -> None:
        """Disassociate ``related_id`` from the host record.

        Same contract as :meth:`create_link`.
        """
        record_id = _require_record_id(related_id)
        self._delete(
            context.member_reference_path(record_id),
            expected=NO_CONTENT_STATUSES,
            timeout=timeout,
        )
        self._logger.info("Unlinked %s from %s via %s", record_id, context.entity_id, context.relationship_name)

    def list_linked_ids(
        self,
        context: "RelationshipContext",
        *,
        timeout: Optional[float] = None,
    ) -> set[str]:
        """Return the ids of every record currently linked to the host record.

        Follows ``@odata.nextLink`` until the last page.

        Raises
        ------
        HttpFailure
            When any page is rejected or the response is not a collection.
        """
        field = context.related_id_field
        linked: set[str] = set()
        path: Optional[str] = f"/{context.relationship_name}"
        params: Optional[dict[str, object]] = {
            "$select": field,
            "$filter": f"{context.host_id_field} eq {context.entity_id}",
        }

        while path:
            response = self._get(path, params=params, timeout=timeout)
            if not isinstance(response, dict) or not isinstance(response.get("value"), list):
                self._logger.warning("Relationship query for %s missing value list.", context.relationship_name)
                raise HttpFailure("Relationship query returned an unexpected payload", status=200)

            page = cast(ODataCollection, response)
            for entity in page["value"]:
                record_id = _normalize_record_id(entity.get(field)) if isinstance(entity, dict) else None
                if record_id is None:
                    self._logger.warning("Skipping linked entity without %s: %s", field, entity)
                    continue
                linked.add(record_id)

            # nextLink already carries the query options
            path = page.get("@odata.nextLink")
            params = None

        return linked


def _require_record_id(value: object) -> str:
    record_id = _normalize_record_id(value)
    if record_id is None:
        raise ValueError(f"Invalid related_id: {value!r}")
    return record_id
