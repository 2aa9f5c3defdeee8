"""Registration page."""

import logging
from dataclasses import dataclass, field

from conduit.api import attempt, endpoints
from conduit.context import get_context
from conduit.entities import ErrorMessage
from conduit.events import GMsg, SessionChanged
from conduit.forms import Form, InvalidForm, Problem, server_errors
from conduit.forms import register as register_form
from conduit.logging import log_errors
from conduit.orders import Orders
from conduit.route import Home, go_to
from conduit.session import Session, Viewer

logger = logging.getLogger(__name__)


@dataclass
class Model:
    session: Session = field(default_factory=Session)
    problems: list[Problem] = field(default_factory=list)
    form: Form[register_form.Field] = field(default_factory=register_form.default_form)


def init(session: Session) -> Model:
    return Model(session=session)


@dataclass(frozen=True)
class Submitted:
    pass


@dataclass(frozen=True)
class FieldChanged:
    field: register_form.Field


@dataclass(frozen=True)
class RegisterCompleted:
    viewer: Viewer


@dataclass(frozen=True)
class RegisterFailed:
    errors: list[ErrorMessage]


Msg = Submitted | FieldChanged | RegisterCompleted | RegisterFailed


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
                endpoints.register(register_form.to_payload(valid_form)),
                RegisterCompleted,
                RegisterFailed,
            )
        )
    elif isinstance(msg, FieldChanged):
        model.form.upsert(msg.field)
    elif isinstance(msg, RegisterCompleted):
        get_context().store.store(msg.viewer)
        orders.send_g_msg(SessionChanged(Session.logged_in(msg.viewer)))
    elif isinstance(msg, RegisterFailed):
        log_errors(logger, msg.errors)
        model.problems = server_errors(msg.errors)
