"""Association toggle state machine.

Every tag cycles through four states::

    unassociated   --click-->  associating     --ok-->  associated
                                               --failed-> unassociated
    associated     --click-->  disassociating  --ok-->  unassociated
                                               --failed-> associated

A click on a tag that is associating or disassociating is ignored. The lock
is taken synchronously inside :meth:`ToggleController.click`, before control
returns to the event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine, Iterable, Optional, Sequence, TYPE_CHECKING

from .client import DEFAULT_TIMEOUT
from .configuration import ControlConfiguration
from .errors import HttpFailure
from .notifications import Notifier, deliver
from .store import RelationshipStore, ThreadedRelationshipStore
from .sync import ReconciliationSync
from .tag_state import Tag, TagSet, apply_outcome, apply_outcome_unchanged, try_lock

if TYPE_CHECKING:  # pragma: no cover
    from .client import WebApi
    from .context import RelationshipContext
    from .rows_types import RowResponse

_logger = logging.getLogger(__name__)


class ToggleController:
    """Owns the live :class:`TagSet` and drives link/unlink requests for it."""

    def __init__(
        self,
        context: "RelationshipContext",
        store: RelationshipStore,
        *,
        configuration: Optional[ControlConfiguration] = None,
        notify: Optional[Notifier] = None,
        request_timeout: Optional[float] = DEFAULT_TIMEOUT,
        control_disabled: bool = False,
    ) -> None:
        """Create a controller for one host record.

        Parameters
        ----------
        context
            Host record and relationship to edit.
        store
            Asynchronous relationship store.
        configuration
            Search and disabled-mode options.
        notify
            Called with the message of every failure. May be a coroutine
            function. Request failures are reported after the tag has been
            unlocked; a timeout is reported while the request still runs.
        request_timeout
            Seconds after which an unsettled mutation is reported to the
            user. The tag stays locked until the request itself settles and
            its real outcome is applied. ``None`` never reports.
        control_disabled
            Whether the host currently shows the control as disabled.
        """
        self.context = context
        self.configuration = configuration or ControlConfiguration()
        self.request_timeout = request_timeout
        self.control_disabled = control_disabled
        self._store = store
        self._notify = notify
        self._sync = ReconciliationSync(store, notify=notify)
        self._tags = TagSet()
        self._pending: set[asyncio.Future[Any]] = set()

    @classmethod
    def from_api(
        cls,
        api: "WebApi",
        context: "RelationshipContext",
        **kwargs: Any,
    ) -> "ToggleController":
        """Build a controller backed by ``api.relationships``."""
        store = ThreadedRelationshipStore(api.relationships, timeout=api.default_timeout)
        return cls(context, store, **kwargs)

    @property
    def tags(self) -> TagSet:
        """The live tag set."""
        return self._tags

    @property
    def interactive(self) -> bool:
        return not self.control_disabled or self.configuration.allow_click_when_disabled

    def set_control_disabled(self, disabled: bool) -> None:
        self.control_disabled = bool(disabled)

    def refresh(
        self,
        rows: Iterable["RowResponse"],
        columns: Optional[Sequence[str]] = None,
    ) -> asyncio.Task[set[str]]:
        """Replace the tag set from ``rows`` and start reconciling it.

        The new tags are available as soon as this returns; reconciliation
        runs in the returned task and marks linked tags when it completes.
        Requests still in flight for the previous tag set no longer affect
        the view.
        """
        loop = asyncio.get_running_loop()
        tags = TagSet.from_rows(rows, columns, generation=self._tags.generation + 1)
        self._tags = tags
        _logger.debug("Refreshed to generation %s with %d tags", tags.generation, len(tags))
        return self._spawn(
            loop,
            self._sync.run(self.context, tags),
            name=f"nntags-reconcile-{tags.generation}",
        )

    def click(self, tag_id: str) -> Optional[asyncio.Task[bool]]:
        """Handle a click on ``tag_id``.

        Returns
        -------
        asyncio.Task or None
            The task running the accepted mutation (resolving to ``True`` on
            success), or ``None`` when the click was ignored.
        """
        loop = asyncio.get_running_loop()
        if not self.interactive:
            _logger.debug("Ignoring click on %s: control is disabled", tag_id)
            return None

        tags = self._tags
        tag = tags.get(tag_id)
        if tag is None:
            _logger.debug("Ignoring click on unknown tag %s", tag_id)
            return None
        if not try_lock(tag):
            _logger.debug("Ignoring click on %s: request already in flight", tag.id)
            return None

        associate = not tag.associated
        return self._spawn(
            loop,
            self._mutate(tags, tag, associate),
            name=f"nntags-{'link' if associate else 'unlink'}-{tag.id}",
        )

    async def toggle(self, tag_id: str) -> bool:
        """Click ``tag_id`` and wait for the outcome.

        Returns ``True`` only when a mutation was accepted and succeeded.
        """
        task = self.click(tag_id)
        if task is None:
            return False
        return await task

    async def wait_idle(self) -> None:
        """Wait for every pending mutation and reconciliation."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _mutate(self, tags: TagSet, tag: Tag, associate: bool) -> bool:
        operation = self._store.create_link if associate else self._store.remove_link
        label = "Link" if associate else "Unlink"
        # The request runs as its own task so a deadline or a cancelled
        # caller never abandons it; the tag stays locked until it settles.
        request = self._track(asyncio.ensure_future(operation(self.context, tag.id)))
        failure: Optional[str] = None
        try:
            await self._await_request(request, label, tag.id)
        except asyncio.CancelledError:
            self._settle_detached(tags, tag, associate, request)
            raise
        except HttpFailure as exc:
            failure = exc.message
        except Exception as exc:  # noqa: BLE001 - failures are reported, never raised
            _logger.exception("%s request for %s raised", label, tag.id)
            failure = str(exc) or type(exc).__name__

        if tags is not self._tags:
            _logger.debug(
                "Discarding outcome for %s from stale generation %s", tag.id, tags.generation
            )
        elif failure is None:
            apply_outcome(tag, associate)
            _logger.debug("Tag %s is now %s", tag.id, tag.status)
        else:
            apply_outcome_unchanged(tag)

        if failure is not None:
            await deliver(self._notify, failure)
        return failure is None

    async def _await_request(self, request: asyncio.Future[Any], label: str, tag_id: str) -> None:
        """Wait for ``request``; past the deadline, report it and keep waiting."""
        try:
            await asyncio.wait_for(asyncio.shield(request), timeout=self.request_timeout)
        except asyncio.TimeoutError:
            if request.done():
                # the store itself raised a timeout
                raise
            _logger.warning("%s request for %s timed out; tag stays locked until it settles", label, tag_id)
            await deliver(self._notify, f"Request timed out after {self.request_timeout} seconds")
            await asyncio.shield(request)

    def _settle_detached(
        self,
        tags: TagSet,
        tag: Tag,
        associate: bool,
        request: asyncio.Future[Any],
    ) -> None:
        """Apply the outcome of ``request`` once it settles, with nobody awaiting it."""

        def settle(done: asyncio.Future[Any]) -> None:
            succeeded = not done.cancelled() and done.exception() is None
            if tags is not self._tags:
                return
            if succeeded:
                apply_outcome(tag, associate)
            else:
                apply_outcome_unchanged(tag)

        if request.done():
            settle(request)
        else:
            request.add_done_callback(settle)

    def _spawn(
        self,
        loop: asyncio.AbstractEventLoop,
        coro: Coroutine[Any, Any, Any],
        *,
        name: str,
    ) -> asyncio.Task[Any]:
        return self._track(loop.create_task(coro, name=name))

    def _track(self, future: asyncio.Future[Any]) -> asyncio.Future[Any]:
        self._pending.add(future)
        future.add_done_callback(self._pending.discard)
        return future


__all__ = ["ToggleController"]
