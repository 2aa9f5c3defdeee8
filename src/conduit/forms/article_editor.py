"""Article editor form: title, description, body and space separated tags."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from conduit.entities import Article
from conduit.forms import Form, Problem, ValidForm, check_required


class Kind(str, Enum):
    TITLE = "title"
    DESCRIPTION = "description"
    BODY = "body"
    TAGS = "tags"


@dataclass
class Field:
    kind: Kind
    value: str = ""

    @property
    def key(self) -> str:
        return self.kind.value

    def validate(self) -> Problem | None:
        if self.kind in (Kind.TITLE, Kind.BODY):
            return check_required(self.key, self.value)
        return None


def default_form() -> Form[Field]:
    return Form(Field(kind) for kind in Kind)


def form_from_article(article: Article) -> Form[Field]:
    form = default_form()
    form.upsert(Field(Kind.TITLE, article.title))
    form.upsert(Field(Kind.DESCRIPTION, article.description))
    form.upsert(Field(Kind.BODY, article.body))
    form.upsert(Field(Kind.TAGS, " ".join(article.tag_list)))
    return form


def to_payload(form: ValidForm[Field]) -> dict[str, Any]:
    values = form.values()
    return {
        "article": {
            "title": values[Kind.TITLE.value],
            "description": values[Kind.DESCRIPTION.value],
            "body": values[Kind.BODY.value],
            "tagList": values[Kind.TAGS.value].split(),
        }
    }
