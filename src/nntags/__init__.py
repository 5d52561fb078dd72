"""Public package surface for nntags."""

from .client import DEFAULT_API_VERSION, DEFAULT_CLIENT_URL, WebApi
from .configuration import ControlConfiguration
from .context import RelationshipContext, resolve_context
from .controller import ToggleController
from .errors import HttpFailure
from .store import RelationshipStore, ThreadedRelationshipStore
from .sync import ReconciliationSync
from .tag_state import Tag, TagSet, apply_outcome, apply_outcome_unchanged, try_lock

__all__ = [
    "ControlConfiguration",
    "DEFAULT_API_VERSION",
    "DEFAULT_CLIENT_URL",
    "HttpFailure",
    "ReconciliationSync",
    "RelationshipContext",
    "RelationshipStore",
    "Tag",
    "TagSet",
    "ThreadedRelationshipStore",
    "ToggleController",
    "WebApi",
    "apply_outcome",
    "apply_outcome_unchanged",
    "resolve_context",
    "try_lock",
]
