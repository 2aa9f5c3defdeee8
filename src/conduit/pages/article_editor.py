"""Article editor page for new and existing articles."""

import logging
from dataclasses import dataclass, field
from functools import partial

from conduit.api import attempt, endpoints
from conduit.entities import Article as ArticleEntity
from conduit.entities import ErrorMessage, Slug
from conduit.events import GMsg, SessionChanged
from conduit.forms import Form, InvalidForm, Problem, server_errors
from conduit.forms import article_editor as editor_form
from conduit.logging import log_errors
from conduit.orders import Orders
from conduit.pages import SlowLoadThresholdPassed, apply_slow_threshold
from conduit.route import Article, Home, go_to
from conduit.session import Session
from conduit.status import Status, start_load

logger = logging.getLogger(__name__)


@dataclass
class Model:
    """Editor state. ``slug`` is None while creating a new article."""

    session: Session = field(default_factory=Session)
    slug: Slug | None = None
    problems: list[Problem] = field(default_factory=list)
    form: Status[Form[editor_form.Field]] = field(default_factory=Status)
    saving: bool = False


@dataclass(frozen=True)
class ArticleLoaded:
    article: ArticleEntity


@dataclass(frozen=True)
class ArticleLoadFailed:
    errors: list[ErrorMessage]


@dataclass(frozen=True)
class FieldChanged:
    field: editor_form.Field


@dataclass(frozen=True)
class Submitted:
    pass


@dataclass(frozen=True)
class SaveCompleted:
    article: ArticleEntity


@dataclass(frozen=True)
class SaveFailed:
    errors: list[ErrorMessage]


Msg = (
    ArticleLoaded
    | ArticleLoadFailed
    | FieldChanged
    | Submitted
    | SaveCompleted
    | SaveFailed
    | SlowLoadThresholdPassed
)


def init_new(session: Session) -> Model:
    return Model(session=session, form=Status.loaded(editor_form.default_form()))


def init_edit(session: Session, slug: Slug, orders: Orders) -> Model:
    model = Model(session=session, slug=slug)
    model.form = start_load(
        model.form,
        orders,
        attempt(endpoints.load_article(session.viewer, slug), ArticleLoaded, ArticleLoadFailed),
        partial(SlowLoadThresholdPassed, "form"),
    )
    return model


def sink(g_msg: GMsg, model: Model, orders: Orders) -> None:
    if isinstance(g_msg, SessionChanged):
        model.session = g_msg.session
        go_to(Home(), orders)


def update(msg: Msg, model: Model, orders: Orders) -> None:
    if isinstance(msg, ArticleLoaded):
        model.form = model.form.resolve(editor_form.form_from_article(msg.article))
    elif isinstance(msg, ArticleLoadFailed):
        model.form = model.form.fail()
        log_errors(logger, msg.errors)
        model.problems = server_errors(msg.errors)
    elif isinstance(msg, FieldChanged):
        if model.form.is_loaded:
            model.form.value.upsert(msg.field)
        else:
            logger.error("FieldChanged can be handled only if the form is loaded")
    elif isinstance(msg, Submitted):
        if not model.form.is_loaded or model.saving:
            return
        try:
            valid_form = model.form.value.trim().validate()
        except InvalidForm as e:
            model.problems = e.problems
            return
        model.problems = []
        model.saving = True
        payload = editor_form.to_payload(valid_form)
        viewer = model.session.viewer
        if model.slug is None:
            request = endpoints.create_article(viewer, payload)
        else:
            request = endpoints.update_article(viewer, model.slug, payload)
        orders.perform_cmd(attempt(request, SaveCompleted, SaveFailed))
    elif isinstance(msg, SaveCompleted):
        model.saving = False
        go_to(Article(msg.article.slug), orders)
    elif isinstance(msg, SaveFailed):
        model.saving = False
        log_errors(logger, msg.errors)
        model.problems = server_errors(msg.errors)
    elif isinstance(msg, SlowLoadThresholdPassed):
        apply_slow_threshold(model, msg)
