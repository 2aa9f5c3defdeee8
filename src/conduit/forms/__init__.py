"""Generic form validation pipeline.

A Form is edited field by field, trimmed on submit into a TrimmedForm, and
validated into a ValidForm. Validation reports problems in field declaration
order, which is the order users see them in.

Example:
    >>> from conduit.forms import register
    >>> form = register.default_form()
    >>> form.upsert(register.Field(register.Kind.USERNAME, " jake "))
    >>> form.trim().validate()
    Traceback (most recent call last):
    ...
    conduit.forms.InvalidForm: email can't be blank; password can't be blank
"""

import copy
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

import regex

from conduit.constants import MIN_PASSWORD_LENGTH

_GRAPHEME = regex.compile(r"\X")


# ------ Problem ------


@dataclass(frozen=True)
class InvalidField:
    """A field failed client-side validation."""

    field_key: str
    message: str


@dataclass(frozen=True)
class ServerError:
    """The backend rejected the submission."""

    message: str


Problem = InvalidField | ServerError


class InvalidForm(Exception):
    """Raised by TrimmedForm.validate when any field has a problem."""

    def __init__(self, problems: list[Problem]) -> None:
        self.problems = problems
        super().__init__("; ".join(problem.message for problem in problems))


def server_errors(errors: Iterable[str]) -> list[Problem]:
    """Wrap backend error messages as problems."""
    return [ServerError(message) for message in errors]


# ------ FormField ------


class FormField(Protocol):
    """Capability every concrete field type provides."""

    value: str

    @property
    def key(self) -> str: ...

    def validate(self) -> Problem | None: ...


F = TypeVar("F", bound=FormField)


def grapheme_length(text: str) -> int:
    """Count user-perceived characters (extended grapheme clusters)."""
    return len(_GRAPHEME.findall(text))


# ------ Form ------


class Form(Generic[F]):
    """Ordered mapping of field key to field."""

    def __init__(self, fields: Iterable[F]) -> None:
        self._fields: dict[str, F] = {}
        for field in fields:
            self.upsert(field)

    def upsert(self, field: F) -> None:
        """Insert or replace the field with the same key, keeping its position."""
        self._fields[field.key] = field

    def get(self, key: str) -> F:
        return self._fields[key]

    def __iter__(self) -> Iterator[F]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def trim(self) -> "TrimmedForm[F]":
        """Copy every field with surrounding whitespace removed."""
        trimmed = []
        for field in self._fields.values():
            field = copy.copy(field)
            field.value = field.value.strip()
            trimmed.append(field)
        return TrimmedForm(trimmed)


class TrimmedForm(Generic[F]):
    def __init__(self, fields: Iterable[F]) -> None:
        self._fields = list(fields)

    def __iter__(self) -> Iterator[F]:
        return iter(self._fields)

    def validate(self) -> "ValidForm[F]":
        """Run every field's validator in declaration order.

        Raises:
            InvalidForm: With one problem per failing field
        """
        problems = [problem for field in self._fields if (problem := field.validate())]
        if problems:
            raise InvalidForm(problems)
        return ValidForm(self._fields)


class ValidForm(Generic[F]):
    """A trimmed form whose every field passed validation."""

    def __init__(self, fields: Iterable[F]) -> None:
        self._fields = list(fields)

    def values(self) -> dict[str, str]:
        return {field.key: field.value for field in self._fields}


# ------ shared validators ------


def check_required(key: str, value: str) -> Problem | None:
    if not value:
        return InvalidField(key, f"{key} can't be blank")
    return None


def check_password(key: str, value: str) -> Problem | None:
    """Blank and too-short are mutually exclusive; length counts graphemes."""
    length = grapheme_length(value)
    if length == 0:
        return InvalidField(key, f"{key} can't be blank")
    if length < MIN_PASSWORD_LENGTH:
        return InvalidField(
            key, f"{key} is too short (minimum is {MIN_PASSWORD_LENGTH} characters)"
        )
    return None
