"""Global events broadcast to whichever page is active."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from conduit.session import Session

if TYPE_CHECKING:
    from conduit.route import Route


@dataclass(frozen=True)
class RoutePushed:
    """A page or the dispatcher navigated to a new route."""

    route: Route


@dataclass(frozen=True)
class SessionChanged:
    """The viewer logged in, logged out, or updated their settings."""

    session: Session


GMsg = RoutePushed | SessionChanged
