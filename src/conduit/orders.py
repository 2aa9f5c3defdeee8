"""Effect buffer handed to update and sink functions.

Pages never run side effects directly. They queue follow-up messages,
global events and async commands here; the runtime drains the buffer after
each handler returns.
"""

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

Wrap = Callable[[Any], Any]


def _identity(msg: Any) -> Any:
    return msg


@dataclass
class Effects:
    """Everything requested by one handler, in issue order."""

    # Wrapped page messages and global events share one list to keep their order
    messages: list[Any] = field(default_factory=list)
    commands: list[tuple[Awaitable[Any], Wrap]] = field(default_factory=list)

    def drain(self) -> tuple[list[Any], list[tuple[Awaitable[Any], Wrap]]]:
        messages, commands = self.messages, self.commands
        self.messages, self.commands = [], []
        return messages, commands

    def discard(self) -> None:
        """Drop pending commands without running them."""
        for command, _ in self.commands:
            if inspect.iscoroutine(command):
                command.close()
        self.commands.clear()
        self.messages.clear()


class Orders:
    """Queues messages, global events and commands for the runtime.

    A proxy shares the same Effects but wraps every message it queues, so a
    page can emit its own messages without knowing the top-level wrapper.
    """

    def __init__(self, effects: Effects | None = None, wrap: Wrap = _identity) -> None:
        self.effects = effects if effects is not None else Effects()
        self._wrap = wrap

    def send_msg(self, msg: Any) -> "Orders":
        self.effects.messages.append(self._wrap(msg))
        return self

    def send_g_msg(self, g_msg: Any) -> "Orders":
        self.effects.messages.append(g_msg)
        return self

    def perform_cmd(self, command: Awaitable[Any]) -> "Orders":
        """Run command in the background; its result (if not None) becomes a message."""
        self.effects.commands.append((command, self._wrap))
        return self

    def proxy(self, wrapper: Wrap) -> "Orders":
        outer = self._wrap
        return Orders(self.effects, lambda msg: outer(wrapper(msg)))
