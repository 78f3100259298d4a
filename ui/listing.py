import asyncio
from dataclasses import replace
from typing import Any

import logfire

from enums import EntityKind, FollowUp, ListStatus
from schemas import ListQuery
from ui.actions import apply_outcome, patch_record
from ui.api import ApiClient
from ui.exceptions import ApiClientError, UnauthorizedError
from ui.models import ActionOutcome, ListSnapshot
from ui.state import FilterState


class ListFetchController:
    """Keeps one list view in sync with its filter state.

    The controller subscribes to a `FilterState`. Each change cancels the
    in-flight request and issues a new one. Every request carries a
    generation number and only the latest generation may update the
    snapshot, so a slow response for an old filter never overwrites a newer
    page. A failed fetch keeps the last good page and reports the error.
    """

    def __init__(self, client: ApiClient, kind: EntityKind, state: FilterState):
        self.client = client
        self.kind = kind
        self.state = state
        self.snapshot = ListSnapshot()
        self._generation = 0
        self._stale = True
        self._closed = False
        self._task: asyncio.Task[ListSnapshot] | None = None
        self._unsubscribe = state.subscribe(self._on_filter_change)

    @property
    def is_stale(self) -> bool:
        return self._stale

    def _on_filter_change(self, query: ListQuery) -> None:
        self._stale = True
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            # No loop yet: the next `sync` picks the change up.
            return
        self.schedule(query)

    def schedule(self, query: ListQuery | None = None) -> asyncio.Task[ListSnapshot]:
        """Cancel the in-flight fetch and start a new one.

        Must be called from a running event loop.
        """
        task = self._task
        if task is not None and not task.done():
            if task is not asyncio.current_task():
                task.cancel()
        self._task = asyncio.create_task(self.refresh(query))
        return self._task

    async def refresh(self, query: ListQuery | None = None) -> ListSnapshot:
        """Fetch the page for `query` (default: current filter state).

        Returns:
            The snapshot after this fetch; unchanged when the response was
            superseded by a newer request.

        Raises:
            UnauthorizedError: The session expired; never shown inline.

        """
        query = query or self.state.query
        self._generation += 1
        generation = self._generation
        self._stale = False
        self.snapshot = replace(
            self.snapshot, status=ListStatus.LOADING, query=query, error=None
        )

        try:
            result = await self.client.list(kind=self.kind, query=query)
        except UnauthorizedError:
            if generation == self._generation:
                self.snapshot = replace(self.snapshot, status=ListStatus.IDLE)
            raise
        except ApiClientError as exc:
            if generation != self._generation:
                return self.snapshot
            logfire.warn(
                "Listing {kind} failed: {detail}", kind=self.kind, detail=exc.detail
            )
            self.snapshot = ListSnapshot(
                status=ListStatus.ERROR,
                query=query,
                result=self.snapshot.result,
                error=exc.detail,
            )
            return self.snapshot

        if generation != self._generation:
            logfire.debug("Discarding stale {kind} page", kind=self.kind)
            return self.snapshot

        self.snapshot = ListSnapshot(
            status=ListStatus.READY, query=query, result=result
        )
        self.state.clamp(result.total_pages)
        return self.snapshot

    async def sync(self) -> ListSnapshot:
        """Wait until the snapshot reflects the current filter state."""
        while not self._closed:
            task = self._task
            if task is not None and not task.done():
                await asyncio.wait({task})
                if not task.cancelled():
                    task.result()
                continue
            if not self._stale:
                break
            await self.refresh()
        return self.snapshot

    def invalidate(self) -> None:
        """Mark the current page outdated, e.g. after a mutation."""
        self._stale = True

    def apply(self, outcome: ActionOutcome) -> None:
        """Reflect a finished lifecycle action in the list."""
        if outcome.follow_up is FollowUp.REDIRECT or self.snapshot.result is None:
            self.invalidate()
            return

        result = self.snapshot.result
        items = apply_outcome(records=result.items, outcome=outcome)
        removed = len(result.items) - len(items)
        self.snapshot = replace(
            self.snapshot,
            result=result.model_copy(
                update={
                    "items": items,
                    "total_items": max(result.total_items - removed, 0),
                }
            ),
        )

    def patch(self, record_id: str, changes: dict[str, Any]) -> None:
        """Update one record of the current page without refetching."""
        result = self.snapshot.result
        if result is None:
            return
        items = patch_record(records=result.items, record_id=record_id, changes=changes)
        self.snapshot = replace(
            self.snapshot, result=result.model_copy(update={"items": items})
        )

    def append(self, record: dict[str, Any]) -> None:
        """Add a record created from this view to the current page."""
        result = self.snapshot.result
        if result is None:
            self.invalidate()
            return
        self.snapshot = replace(
            self.snapshot,
            result=result.model_copy(
                update={
                    "items": [*result.items, record],
                    "total_items": result.total_items + 1,
                }
            ),
        )

    def close(self) -> None:
        """Detach from the filter state and cancel any pending fetch."""
        self._closed = True
        self._unsubscribe()
        if self._task is not None and not self._task.done():
            self._task.cancel()
