"""Settings form: image, username, bio, email and an optional new password."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from conduit.forms import Form, Problem, ValidForm, check_password, check_required
from conduit.session import Viewer


class Kind(str, Enum):
    IMAGE = "image"
    USERNAME = "username"
    BIO = "bio"
    EMAIL = "email"
    PASSWORD = "password"


@dataclass
class Field:
    kind: Kind
    value: str = ""

    @property
    def key(self) -> str:
        return self.kind.value

    def validate(self) -> Problem | None:
        if self.kind in (Kind.USERNAME, Kind.EMAIL):
            return check_required(self.key, self.value)
        if self.kind is Kind.PASSWORD and self.value:
            # Empty password keeps the current one
            return check_password(self.key, self.value)
        return None


def default_form() -> Form[Field]:
    return Form(Field(kind) for kind in Kind)


def form_from_viewer(viewer: Viewer) -> Form[Field]:
    """Form prefilled with the values the server returned for the viewer."""
    form = default_form()
    form.upsert(Field(Kind.IMAGE, viewer.image or ""))
    form.upsert(Field(Kind.USERNAME, viewer.username))
    form.upsert(Field(Kind.BIO, viewer.bio or ""))
    form.upsert(Field(Kind.EMAIL, viewer.email))
    return form


def to_payload(form: ValidForm[Field]) -> dict[str, Any]:
    user: dict[str, Any] = form.values()
    if not user[Kind.PASSWORD.value]:
        del user[Kind.PASSWORD.value]
    if not user[Kind.IMAGE.value]:
        user[Kind.IMAGE.value] = None
    return {"user": user}
