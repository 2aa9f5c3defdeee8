"""Tests for the login and register pages."""

import json
from collections.abc import Callable
from typing import Any

import pytest

from conduit.context import AppContext
from conduit.events import RoutePushed, SessionChanged
from conduit.forms import InvalidField, ServerError
from conduit.forms import login as login_form
from conduit.forms import register as register_form
from conduit.orders import Effects, Orders
from conduit.pages import login, register
from conduit.route import Home
from conduit.session import Session, Viewer

Factory = Callable[..., Any]


def _fill_login(model: login.Model, orders: Orders, email: str, password: str) -> None:
    login.update(login.FieldChanged(login_form.Field(login_form.Kind.EMAIL, email)), model, orders)
    login.update(
        login.FieldChanged(login_form.Field(login_form.Kind.PASSWORD, password)), model, orders
    )


@pytest.mark.unit
class TestLogin:
    def test_invalid_submit_stays_local(self, orders: Orders, effects: Effects) -> None:
        model = login.init(Session.guest())
        _fill_login(model, orders, "  ", "secret")

        login.update(login.Submitted(), model, orders)

        assert model.problems == [InvalidField("email", "email can't be blank")]
        assert effects.commands == []

    @pytest.mark.asyncio
    async def test_valid_submit_posts_trimmed_credentials(
        self, orders: Orders, run_commands, fake_api, user_json: Factory
    ) -> None:
        fake_api.add("POST", "users/login", user_json())
        model = login.init(Session.guest())
        _fill_login(model, orders, " jake@jake.jake", "jakejake ")

        login.update(login.Submitted(), model, orders)
        (message,) = await run_commands()

        assert isinstance(message, login.LoginCompleted)
        assert message.viewer.username == "jake"
        (request,) = fake_api.requests
        assert json.loads(request.content) == {
            "user": {"email": "jake@jake.jake", "password": "jakejake"}
        }

    def test_resubmit_clears_old_problems(self, orders: Orders) -> None:
        model = login.Model(problems=[ServerError("email or password is invalid")])
        _fill_login(model, orders, "jake@jake.jake", "jakejake")

        login.update(login.Submitted(), model, orders)

        assert model.problems == []

    def test_completed_stores_viewer_and_broadcasts(
        self, orders: Orders, effects: Effects, app_context: AppContext, viewer: Viewer
    ) -> None:
        model = login.init(Session.guest())

        login.update(login.LoginCompleted(viewer), model, orders)

        assert app_context.store.load() == viewer
        assert effects.messages == [SessionChanged(Session.logged_in(viewer))]

    def test_failed_shows_server_errors(self, orders: Orders) -> None:
        model = login.init(Session.guest())
        login.update(login.LoginFailed(["email or password is invalid"]), model, orders)
        assert model.problems == [ServerError("email or password is invalid")]

    def test_session_change_goes_home(
        self, orders: Orders, effects: Effects, logged_in: Session
    ) -> None:
        model = login.init(Session.guest())
        login.sink(SessionChanged(logged_in), model, orders)
        assert model.session == logged_in
        assert effects.messages == [RoutePushed(Home())]


@pytest.mark.unit
class TestRegister:
    def test_short_password_rejected(self, orders: Orders, effects: Effects) -> None:
        model = register.init(Session.guest())
        for kind, value in (
            (register_form.Kind.USERNAME, "jake"),
            (register_form.Kind.EMAIL, "jake@jake.jake"),
            (register_form.Kind.PASSWORD, "jake"),
        ):
            register.update(register.FieldChanged(register_form.Field(kind, value)), model, orders)

        register.update(register.Submitted(), model, orders)

        assert [problem.message for problem in model.problems] == [
            "password is too short (minimum is 8 characters)"
        ]
        assert effects.commands == []

    @pytest.mark.asyncio
    async def test_taken_username(self, orders: Orders, run_commands, fake_api) -> None:
        fake_api.add(
            "POST", "users", {"errors": {"username": ["has already been taken"]}}, status=422
        )
        model = register.init(Session.guest())
        for kind, value in (
            (register_form.Kind.USERNAME, "jake"),
            (register_form.Kind.EMAIL, "jake@jake.jake"),
            (register_form.Kind.PASSWORD, "jakejake"),
        ):
            register.update(register.FieldChanged(register_form.Field(kind, value)), model, orders)

        register.update(register.Submitted(), model, orders)
        for message in await run_commands():
            register.update(message, model, orders)

        assert model.problems == [ServerError("username has already been taken")]

    def test_completed_broadcasts(
        self, orders: Orders, effects: Effects, app_context: AppContext, viewer: Viewer
    ) -> None:
        model = register.init(Session.guest())
        register.update(register.RegisterCompleted(viewer), model, orders)
        assert app_context.store.load() == viewer
        assert effects.messages == [SessionChanged(Session.logged_in(viewer))]
