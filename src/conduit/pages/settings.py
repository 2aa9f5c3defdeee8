"""Settings page: edit the viewer's profile and credentials."""

import logging
from dataclasses import dataclass, field
from functools import partial

from conduit.api import attempt, endpoints
from conduit.context import get_context
from conduit.entities import ErrorMessage
from conduit.events import GMsg, SessionChanged
from conduit.forms import Form, InvalidForm, Problem, server_errors
from conduit.forms import settings as settings_form
from conduit.logging import log_errors
from conduit.orders import Orders
from conduit.pages import SlowLoadThresholdPassed, apply_slow_threshold
from conduit.route import Home, go_to
from conduit.session import Session, Viewer
from conduit.status import Status, start_load

logger = logging.getLogger(__name__)


@dataclass
class Model:
    session: Session = field(default_factory=Session)
    problems: list[Problem] = field(default_factory=list)
    form: Status[Form[settings_form.Field]] = field(default_factory=Status)


@dataclass(frozen=True)
class ViewerLoaded:
    viewer: Viewer


@dataclass(frozen=True)
class ViewerLoadFailed:
    errors: list[ErrorMessage]


@dataclass(frozen=True)
class FieldChanged:
    field: settings_form.Field


@dataclass(frozen=True)
class SaveClicked:
    pass


@dataclass(frozen=True)
class SaveCompleted:
    viewer: Viewer


@dataclass(frozen=True)
class SaveFailed:
    errors: list[ErrorMessage]


Msg = (
    ViewerLoaded
    | ViewerLoadFailed
    | FieldChanged
    | SaveClicked
    | SaveCompleted
    | SaveFailed
    | SlowLoadThresholdPassed
)


def init(session: Session, orders: Orders) -> Model:
    model = Model(session=session)
    model.form = start_load(
        model.form,
        orders,
        attempt(endpoints.load_viewer(session.viewer), ViewerLoaded, ViewerLoadFailed),
        partial(SlowLoadThresholdPassed, "form"),
    )
    return model


def sink(g_msg: GMsg, model: Model, orders: Orders) -> None:
    if isinstance(g_msg, SessionChanged):
        model.session = g_msg.session
        go_to(Home(), orders)


def update(msg: Msg, model: Model, orders: Orders) -> None:
    if isinstance(msg, ViewerLoaded):
        model.form = model.form.resolve(settings_form.form_from_viewer(msg.viewer))
    elif isinstance(msg, ViewerLoadFailed):
        model.form = model.form.fail()
        log_errors(logger, msg.errors)
        model.problems = server_errors(msg.errors)
    elif isinstance(msg, FieldChanged):
        if model.form.is_loaded:
            model.form.value.upsert(msg.field)
        else:
            logger.error("FieldChanged can be handled only if the form is loaded")
    elif isinstance(msg, SaveClicked):
        if not model.form.is_loaded:
            logger.error("SaveClicked can be handled only if the form is loaded")
            return
        try:
            valid_form = model.form.value.trim().validate()
        except InvalidForm as e:
            model.problems = e.problems
            return
        model.problems = []
        orders.perform_cmd(
            attempt(
                endpoints.update_viewer(model.session.viewer, settings_form.to_payload(valid_form)),
                SaveCompleted,
                SaveFailed,
            )
        )
    elif isinstance(msg, SaveCompleted):
        get_context().store.store(msg.viewer)
        orders.send_g_msg(SessionChanged(Session.logged_in(msg.viewer)))
    elif isinstance(msg, SaveFailed):
        log_errors(logger, msg.errors)
        model.problems = server_errors(msg.errors)
    elif isinstance(msg, SlowLoadThresholdPassed):
        apply_slow_threshold(model, msg)
