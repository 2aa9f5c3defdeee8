"""Viewer identity and the session threaded through every page."""

from pydantic import BaseModel, ConfigDict

from conduit.entities import Username


class Viewer(BaseModel):
    """The authenticated user and the token used for requests."""

    model_config = ConfigDict(frozen=True)

    username: Username
    auth_token: str
    email: str = ""
    bio: str | None = None
    image: str | None = None


class Session(BaseModel):
    """Either a guest (no viewer) or a logged-in viewer.

    Sessions are replaced wholesale on login and logout, never edited.
    """

    model_config = ConfigDict(frozen=True)

    viewer: Viewer | None = None

    @classmethod
    def guest(cls) -> "Session":
        return cls()

    @classmethod
    def logged_in(cls, viewer: Viewer) -> "Session":
        return cls(viewer=viewer)

    @property
    def is_guest(self) -> bool:
        return self.viewer is None
