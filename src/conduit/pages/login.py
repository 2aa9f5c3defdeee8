"""Login page."""

import logging
from dataclasses import dataclass, field

from conduit.api import attempt, endpoints
from conduit.context import get_context
from conduit.entities import ErrorMessage
from conduit.events import GMsg, SessionChanged
from conduit.forms import Form, InvalidForm, Problem, server_errors
from conduit.forms import login as login_form
from conduit.logging import log_errors
from conduit.orders import Orders
from conduit.route import Home, go_to
from conduit.session import Session, Viewer

logger = logging.getLogger(__name__)


@dataclass
class Model:
    session: Session = field(default_factory=Session)
    problems: list[Problem] = field(default_factory=list)
    form: Form[login_form.Field] = field(default_factory=login_form.default_form)


def init(session: Session) -> Model:
    return Model(session=session)


@dataclass(frozen=True)
class Submitted:
    pass


@dataclass(frozen=True)
class FieldChanged:
    field: login_form.Field


@dataclass(frozen=True)
class LoginCompleted:
    viewer: Viewer


@dataclass(frozen=True)
class LoginFailed:
    errors: list[ErrorMessage]


Msg = Submitted | FieldChanged | LoginCompleted | LoginFailed


def sink(g_msg: GMsg, model: Model, orders: Orders) -> None:
    if isinstance(g_msg, SessionChanged):
        model.session = g_msg.session
        go_to(Home(), orders)


def update(msg: Msg, model: Model, orders: Orders) -> None:
    if isinstance(msg, Submitted):
        try:
            valid_form = model.form.trim().validate()
        except InvalidForm as e:
            model.problems = e.problems
            return
        model.problems = []
        orders.perform_cmd(
            attempt(
                endpoints.login(login_form.to_payload(valid_form)),
                LoginCompleted,
                LoginFailed,
            )
        )
    elif isinstance(msg, FieldChanged):
        model.form.upsert(msg.field)
    elif isinstance(msg, LoginCompleted):
        get_context().store.store(msg.viewer)
        orders.send_g_msg(SessionChanged(Session.logged_in(msg.viewer)))
    elif isinstance(msg, LoginFailed):
        log_errors(logger, msg.errors)
        model.problems = server_errors(msg.errors)
