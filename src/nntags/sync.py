"""Reconcile local tag state with the relationship store."""

from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

from .errors import HttpFailure
from .notifications import Notifier, deliver

if TYPE_CHECKING:  # pragma: no cover
    from .context import RelationshipContext
    from .store import RelationshipStore
    from .tag_state import TagSet

_logger = logging.getLogger(__name__)


class ReconciliationSync:
    """Mark the tags the store reports as linked.

    Runs once per refresh. Tags the store does not name stay unassociated,
    and a failed query leaves every tag unassociated after notifying.
    """

    def __init__(self, store: "RelationshipStore", *, notify: Optional[Notifier] = None) -> None:
        self._store = store
        self._notify = notify

    async def run(self, context: "RelationshipContext", tags: "TagSet") -> set[str]:
        """Query current membership and apply it to ``tags``.

        Returns the ids that were marked associated.
        """
        try:
            linked_ids = await self._store.list_linked_ids(context)
        except HttpFailure as exc:
            _logger.warning("Reconciliation for generation %s failed: %s", tags.generation, exc)
            await deliver(self._notify, exc.message)
            return set()
        except Exception as exc:  # noqa: BLE001 - a failed query must not break the view
            _logger.exception("Reconciliation for generation %s raised", tags.generation)
            await deliver(self._notify, str(exc) or type(exc).__name__)
            return set()

        matched = tags.mark_associated(linked_ids)
        _logger.debug(
            "Reconciled generation %s: %d linked, %d shown as associated",
            tags.generation,
            len(linked_ids),
            len(matched),
        )
        return {tag.id for tag in matched}


__all__ = ["ReconciliationSync"]
