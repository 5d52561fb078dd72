"""Types and normalization helpers for the relationships resource."""

from __future__ import annotations

from typing import Any, TypedDict

from typing_extensions import ReadOnly

# 1223 is how some hosts report 204 No Content.
NO_CONTENT_STATUSES: tuple[int, ...] = (204, 1223)

# OData keys are not identifiers, hence the functional syntax.
ODataCollection = TypedDict(
    "ODataCollection",
    {
        "value": ReadOnly[list[dict[str, Any]]],
        "@odata.nextLink": ReadOnly[str],
    },
    total=False,
)

AssociationPayload = TypedDict("AssociationPayload", {"@odata.id": str})


class EntityDefinitionResponse(TypedDict, total=False):
    """Readonly subset of an ``EntityDefinitions`` record."""
    LogicalName: ReadOnly[str]
    EntitySetName: ReadOnly[str]


def _normalize_record_id(value: object) -> str | None:
    """Normalize a record id to its bare, lower-case form.

    ``"{0A1B...}"`` and ``"0a1b..."`` compare equal after normalization.
    Returns ``None`` for non-string or blank input.
    """
    if not isinstance(value, str):
        return None
    normalized = value.strip().strip("{}").strip().lower()
    return normalized or None


__all__ = [
    "AssociationPayload",
    "EntityDefinitionResponse",
    "NO_CONTENT_STATUSES",
    "ODataCollection",
]
