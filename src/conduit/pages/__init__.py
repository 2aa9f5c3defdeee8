"""Page models, one per route.

Every page module exposes a mutable ``Model`` holding the session, an
``init`` function, ``update(msg, model, orders)`` for its own messages and
``sink(g_msg, model, orders)`` for global events.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SlowLoadThresholdPassed:
    """Slow timer for the fetch of one resource attribute on the page model."""

    resource: str
    load_id: int


@dataclass(frozen=True)
class DismissErrorsClicked:
    pass


def apply_slow_threshold(model: Any, msg: SlowLoadThresholdPassed) -> None:
    """Move the named resource to LOADING_SLOWLY if that fetch is still loading."""
    status = getattr(model, msg.resource)
    setattr(model, msg.resource, status.slow_threshold_passed(msg.load_id))
