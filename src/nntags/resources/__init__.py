"""Resource module exports."""

from .metadata import EntityMetadata
from .relationships import Relationships

__all__ = [
    "EntityMetadata",
    "Relationships",
]
