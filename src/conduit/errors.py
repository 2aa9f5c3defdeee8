"""Conduit client errors."""


class ConduitError(Exception):
    """Base exception for conduit client errors."""


class RouteDecodeError(ConduitError):
    """Raised when a URL path does not match any route."""

    def __init__(self, segments: list[str]) -> None:
        self.segments = segments
        super().__init__(f"No route for /{'/'.join(segments)}")


class RequestError(ConduitError):
    """Raised when a backend request fails.

    Carries display-ready error messages rather than status codes.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors) or "Request failed")


class StorageError(ConduitError):
    """Raised when the stored viewer cannot be written or removed."""
