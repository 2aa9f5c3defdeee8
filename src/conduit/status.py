"""Loading state of one asynchronously fetched resource.

A resource starts in LOADING. If it is still LOADING when the slow threshold
timer fires it moves to LOADING_SLOWLY. The fetch result moves it to LOADED or
FAILED from either loading state. Resolved statuses never change again; a new
fetch replaces the whole value with a fresh LOADING status.

The timer is never cancelled. Each fetch gets a new load_id and the timer
message carries the id it was scheduled for, so a timer that fires after its
fetch resolved, or after a newer fetch started, is a no-op. Results of a
resource that can be refetched while loading (the article feeds) carry the
same id and are dropped once a newer fetch has started.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Generic, TypeVar

from conduit.context import get_context
from conduit.orders import Orders

T = TypeVar("T")
M = TypeVar("M")


class LoadState(str, Enum):
    """Lifecycle of one fetch."""

    LOADING = "loading"
    LOADING_SLOWLY = "loading_slowly"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class Status(Generic[T]):
    state: LoadState = LoadState.LOADING
    value: T | None = None
    load_id: int = 0

    @classmethod
    def loaded(cls, value: T) -> "Status[T]":
        return cls(state=LoadState.LOADED, value=value)

    @property
    def is_loading(self) -> bool:
        return self.state in (LoadState.LOADING, LoadState.LOADING_SLOWLY)

    @property
    def is_loaded(self) -> bool:
        return self.state is LoadState.LOADED

    @property
    def next_load_id(self) -> int:
        return self.load_id + 1

    def is_current(self, load_id: int) -> bool:
        """True if load_id belongs to the fetch this status is waiting on."""
        return self.is_loading and load_id == self.load_id

    def restart(self) -> "Status[T]":
        """Fresh LOADING status for a new fetch of the same resource."""
        return Status(load_id=self.next_load_id)

    def slow_threshold_passed(self, load_id: int) -> "Status[T]":
        if self.state is LoadState.LOADING and load_id == self.load_id:
            return replace(self, state=LoadState.LOADING_SLOWLY)
        return self

    def resolve(self, value: T) -> "Status[T]":
        return Status(state=LoadState.LOADED, value=value, load_id=self.load_id)

    def fail(self) -> "Status[T]":
        return Status(state=LoadState.FAILED, load_id=self.load_id)


async def notify_on_slow_load(msg: M, delay: float) -> M:
    """Return msg once delay seconds have passed."""
    await asyncio.sleep(delay)
    return msg


def start_load(
    status: Status[T],
    orders: Orders,
    fetch: Awaitable[Any],
    on_slow_threshold: Callable[[int], Any],
) -> Status[T]:
    """Reset status to LOADING, issue the fetch and schedule the slow timer.

    Args:
        status: Current status of the resource (any state)
        orders: Orders of the page that owns the resource
        fetch: Command resolving to the page's load-completed message
        on_slow_threshold: Builds the page's timer message from the load id

    Returns:
        The new LOADING status to store on the page model
    """
    fresh = status.restart()
    orders.perform_cmd(fetch)
    orders.perform_cmd(
        notify_on_slow_load(on_slow_threshold(fresh.load_id), get_context().slow_threshold)
    )
    return fresh
