"""Single-threaded event loop driving the application.

Messages are handled one at a time, in the order they were queued. Commands
(fetches and timers) run as asyncio tasks; each task's result is queued as a
message when the task completes. Independent tasks complete in any order.
"""

import asyncio
import logging
from collections import deque
from collections.abc import Awaitable
from typing import Any

from conduit.app import Application, Redirect, RouteChanged
from conduit.context import get_context
from conduit.events import RoutePushed, SessionChanged
from conduit.orders import Effects, Orders, Wrap
from conduit.route import from_path
from conduit.session import Session

logger = logging.getLogger(__name__)

_GLOBAL_EVENTS = (RoutePushed, SessionChanged)


class Runtime:
    """Feeds queued messages and command results to one Application."""

    def __init__(self, application: Application | None = None) -> None:
        self.application = application or Application()
        self._queue: deque[Any] = deque()
        self._tasks: dict[asyncio.Task[Any], Wrap] = {}

    def start(self, path: str, session: Session | None = None) -> None:
        """Seed the session and queue the initial route.

        Args:
            path: Initial URL path
            session: Starting session (defaults to the stored viewer)
        """
        if session is None:
            session = Session(viewer=get_context().store.load())
        self.application = Application(Redirect(session))
        get_context().history.push(path)
        self.dispatch(RouteChanged(from_path(path)))

    def dispatch(self, msg: Any) -> None:
        """Queue a top-level message or global event."""
        self._queue.append(msg)

    def navigate(self, path: str) -> None:
        """Simulate the user entering a URL."""
        get_context().history.push(path)
        self.dispatch(RouteChanged(from_path(path)))

    def process(self, msg: Any) -> None:
        """Run one handler to completion and schedule what it requested."""
        logger.debug(f"Handling {type(msg).__name__}")
        effects = Effects()
        orders = Orders(effects)
        if isinstance(msg, _GLOBAL_EVENTS):
            self.application.sink(msg, orders)
        else:
            self.application.update(msg, orders)

        messages, commands = effects.drain()
        self._queue.extend(messages)
        for command, wrap in commands:
            self._spawn(command, wrap)

    def _spawn(self, command: Awaitable[Any], wrap: Wrap) -> None:
        task = asyncio.ensure_future(command)
        self._tasks[task] = wrap

    def _complete(self, task: asyncio.Task[Any]) -> None:
        wrap = self._tasks.pop(task)
        result = task.result()
        if result is not None:
            self._queue.append(wrap(result))

    async def step(self) -> bool:
        """Handle one queued message, waiting for a command if none is queued.

        Returns:
            False when there is nothing left to do
        """
        if not self._queue:
            if not self._tasks:
                return False
            done, _ = await asyncio.wait(self._tasks, return_when=asyncio.FIRST_COMPLETED)
            for task in done:
                self._complete(task)
            return True
        self.process(self._queue.popleft())
        return True

    async def run_until_idle(self) -> None:
        """Process messages until the queue is empty and no command is running.

        Exceptions raised by commands propagate to the caller.
        """
        while await self.step():
            pass

    async def shutdown(self) -> None:
        """Cancel in-flight commands and drop queued messages."""
        for task in self._tasks:
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()
        self._queue.clear()
