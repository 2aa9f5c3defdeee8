"""REST backend access.

Endpoint coroutines live in conduit.api.endpoints and raise RequestError on
failure. Pages wrap them with attempt() so the command always resolves to a
message, never to an exception.
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from conduit.errors import RequestError

T = TypeVar("T")


async def attempt(
    request: Awaitable[T],
    on_success: Callable[[T], Any],
    on_failure: Callable[[list[str]], Any],
) -> Any:
    """Await request and turn its outcome into a message."""
    try:
        value = await request
    except RequestError as e:
        return on_failure(e.errors)
    return on_success(value)
