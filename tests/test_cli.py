"""Tests for the conduit CLI."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from conduit import __version__
from conduit.cli import app
from conduit.context import AppContext
from conduit.entities import DEFAULT_AVATAR
from conduit.session import Viewer

Factory = Callable[..., dict[str, Any]]


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "config" / "config.toml"


@pytest.fixture
def use_fake_context(monkeypatch: pytest.MonkeyPatch, app_context: AppContext) -> AppContext:
    """Make commands run against the fake backend instead of the configured one."""
    monkeypatch.setattr(AppContext, "from_config", classmethod(lambda cls, config: app_context))
    return app_context


def _json(result) -> dict[str, Any]:
    return json.loads(result.stdout)


@pytest.mark.cli
class TestGlobalOptions:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"conduit {__version__}" in result.stdout

    def test_no_args_shows_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, [])
        assert "Usage" in result.output


@pytest.mark.cli
class TestInit:
    def test_writes_template(self, runner: CliRunner, config_path: Path) -> None:
        result = runner.invoke(app, ["--json", "--config", str(config_path), "init"])

        assert result.exit_code == 0
        assert config_path.exists()
        assert _json(result)["config"] == str(config_path)

    def test_keeps_existing_without_force(self, runner: CliRunner, config_path: Path) -> None:
        config_path.parent.mkdir(parents=True)
        config_path.write_text("# mine\n")

        result = runner.invoke(app, ["--json", "--config", str(config_path), "init"])

        assert result.exit_code == 0
        assert _json(result)["created"] is False
        assert config_path.read_text() == "# mine\n"

    def test_force_overwrites(self, runner: CliRunner, config_path: Path) -> None:
        config_path.parent.mkdir(parents=True)
        config_path.write_text("# mine\n")

        result = runner.invoke(app, ["--config", str(config_path), "init", "--force"])

        assert result.exit_code == 0
        assert "[api]" in config_path.read_text()


@pytest.mark.cli
class TestRoute:
    def test_known_route(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--json", "route", "/editor/my-slug/"])

        assert result.exit_code == 0
        assert _json(result) == {
            "route": "EditArticle",
            "params": {"slug": "my-slug"},
            "path": "/editor/my-slug",
        }

    def test_unknown_route_exits_1(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--json", "route", "/nope"])

        assert result.exit_code == 1
        assert _json(result)["error"] == "No route for /nope"


@pytest.mark.cli
class TestVisit:
    def test_home_summary(
        self, runner: CliRunner, use_fake_context: AppContext, fake_api, articles_json: Factory
    ) -> None:
        fake_api.add("GET", "tags", {"tags": ["dragons"]})
        fake_api.add("GET", "articles", articles_json("first"))

        result = runner.invoke(app, ["--json", "visit", "/"])

        assert result.exit_code == 0
        summary = _json(result)
        assert summary["page"] == "Home"
        assert summary["viewer"] is None
        assert summary["selected_feed"] == "global"
        assert summary["tags"] == {"state": "loaded", "value": ["dragons"]}
        assert summary["feed"]["value"]["articles"]["items"][0]["slug"] == "first"

    def test_profile_title(
        self,
        runner: CliRunner,
        use_fake_context: AppContext,
        fake_api,
        profile_json: Factory,
        articles_json: Factory,
    ) -> None:
        fake_api.add("GET", "profiles/celeb", {"profile": profile_json("celeb")})
        fake_api.add("GET", "articles", articles_json())

        result = runner.invoke(app, ["--json", "visit", "/profile/celeb"])

        summary = _json(result)
        assert summary["page"] == "Profile"
        assert summary["title"] == "Profile - celeb"
        assert summary["author"]["value"]["relation"] == "not_following"
        # No image on the profile, so the default avatar is shown
        assert summary["author"]["value"]["avatar"] == DEFAULT_AVATAR

    def test_not_found(self, runner: CliRunner, use_fake_context: AppContext) -> None:
        result = runner.invoke(app, ["--json", "visit", "/missing"])
        assert _json(result) == {"page": "NotFound", "viewer": None}

    def test_table_output(self, runner: CliRunner, use_fake_context: AppContext) -> None:
        result = runner.invoke(app, ["--no-color", "visit", "/login"])
        assert result.exit_code == 0


@pytest.mark.cli
class TestLogin:
    def test_success_stores_viewer(
        self, runner: CliRunner, use_fake_context: AppContext, fake_api, user_json: Factory
    ) -> None:
        fake_api.add("POST", "users/login", user_json())

        result = runner.invoke(
            app, ["--json", "login", "--email", "jake@jake.jake", "--password", "jakejake"]
        )

        assert result.exit_code == 0
        assert _json(result) == {"success": "Logged in as jake", "username": "jake"}
        assert use_fake_context.store.load().username == "jake"

    def test_rejected_credentials(
        self, runner: CliRunner, use_fake_context: AppContext, fake_api
    ) -> None:
        fake_api.add(
            "POST", "users/login", {"errors": {"email or password": ["is invalid"]}}, status=422
        )

        result = runner.invoke(app, ["--json", "login", "-e", "jake@jake.jake", "-p", "nope"])

        assert result.exit_code == 1
        assert _json(result) == {
            "error": "Login failed",
            "problems": ["email or password is invalid"],
        }
        assert use_fake_context.store.load() is None

    def test_blank_password_is_caught_locally(
        self, runner: CliRunner, use_fake_context: AppContext, fake_api
    ) -> None:
        result = runner.invoke(app, ["--json", "login", "-e", "jake@jake.jake", "-p", "  "])

        assert result.exit_code == 1
        assert _json(result)["problems"] == ["password can't be blank"]
        assert fake_api.requests == []


@pytest.mark.cli
class TestWhoamiLogout:
    def test_guest(self, runner: CliRunner, use_fake_context: AppContext) -> None:
        result = runner.invoke(app, ["--json", "whoami"])
        assert _json(result) == {"username": None}

    def test_stored_viewer(
        self, runner: CliRunner, use_fake_context: AppContext, viewer: Viewer
    ) -> None:
        use_fake_context.store.store(viewer)

        result = runner.invoke(app, ["--json", "whoami"])

        assert _json(result) == {"username": "jake", "email": "jake@jake.jake"}

    def test_logout_forgets_viewer(
        self, runner: CliRunner, use_fake_context: AppContext, viewer: Viewer
    ) -> None:
        use_fake_context.store.store(viewer)

        result = runner.invoke(app, ["--json", "logout"])

        assert result.exit_code == 0
        assert use_fake_context.store.load() is None
