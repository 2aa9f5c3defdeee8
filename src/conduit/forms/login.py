"""Login form: email and password."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from conduit.forms import Form, Problem, ValidForm, check_required


class Kind(str, Enum):
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
        # No minimum length on login; the server decides
        return check_required(self.key, self.value)


def default_form() -> Form[Field]:
    return Form(Field(kind) for kind in Kind)


def to_payload(form: ValidForm[Field]) -> dict[str, Any]:
    return {"user": form.values()}
