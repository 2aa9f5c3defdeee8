"""Shared test fixtures for conduit tests."""

import asyncio
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import httpx
import pytest
from typer.testing import CliRunner

from conduit.api.client import ApiClient
from conduit.api.decoders import ArticleDecoder, CommentDecoder
from conduit.context import AppContext, set_context
from conduit.entities import Article, Comment
from conduit.history import History
from conduit.orders import Effects, Orders
from conduit.session import Session, Viewer
from conduit.storage import ViewerStore

API_URL = "https://conduit.test/api"
TIMESTAMP = "2024-01-15T10:30:00.000Z"


class FakeApi:
    """In-memory REST backend served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Any, float]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        json: Any = None,
        status: int = 200,
        delay: float = 0.0,
    ) -> None:
        """Serve json for method and path (relative to the API root)."""
        self.routes[(method, path)] = (status, json, delay)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            request
            for request in self.requests
            if request.method == method and _relative(request) == path
        ]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, _relative(request))
        if key not in self.routes:
            return httpx.Response(404, json={"errors": {"path": ["not found"]}})
        status, body, delay = self.routes[key]
        if delay:
            await asyncio.sleep(delay)
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)


def _relative(request: httpx.Request) -> str:
    return request.url.path.removeprefix("/api/")


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture(autouse=True)
def app_context(tmp_path: Path, fake_api: FakeApi) -> Generator[AppContext, None, None]:
    """Install a context backed by the fake API and a temporary viewer file."""
    ctx = AppContext(
        api=ApiClient(base_url=API_URL, transport=httpx.MockTransport(fake_api.handler)),
        store=ViewerStore(tmp_path / "viewer.json"),
        history=History(),
        slow_threshold=0.05,
    )
    set_context(ctx)
    yield ctx
    set_context(None)


@pytest.fixture
def effects() -> Generator[Effects, None, None]:
    effects = Effects()
    yield effects
    # Close coroutines the test never awaited
    effects.discard()


@pytest.fixture
def orders(effects: Effects) -> Orders:
    return Orders(effects)


@pytest.fixture
def viewer() -> Viewer:
    return Viewer(username="jake", auth_token="jwt.token.here", email="jake@jake.jake")


@pytest.fixture
def logged_in(viewer: Viewer) -> Session:
    return Session.logged_in(viewer)


@pytest.fixture
def profile_json() -> Callable[..., dict[str, Any]]:
    def make(username: str = "jake", following: bool = False) -> dict[str, Any]:
        return {"username": username, "bio": None, "image": None, "following": following}

    return make


@pytest.fixture
def article_json(profile_json: Callable[..., dict[str, Any]]) -> Callable[..., dict[str, Any]]:
    def make(
        slug: str = "how-to-train-your-dragon",
        author: str = "jake",
        favorited: bool = False,
        favorites_count: int = 0,
        tags: list[str] | None = None,
    ) -> dict[str, Any]:
        return {
            "slug": slug,
            "title": slug.replace("-", " ").title(),
            "description": "Ever wonder how?",
            "body": "It takes a Jacobian",
            "tagList": tags if tags is not None else ["dragons", "training"],
            "createdAt": TIMESTAMP,
            "updatedAt": TIMESTAMP,
            "favorited": favorited,
            "favoritesCount": favorites_count,
            "author": profile_json(author),
        }

    return make


@pytest.fixture
def comment_json(profile_json: Callable[..., dict[str, Any]]) -> Callable[..., dict[str, Any]]:
    def make(comment_id: int = 1, body: str = "It takes a Jacobian", author: str = "jake"):
        return {
            "id": comment_id,
            "createdAt": TIMESTAMP,
            "updatedAt": TIMESTAMP,
            "body": body,
            "author": profile_json(author),
        }

    return make


@pytest.fixture
def user_json() -> Callable[..., dict[str, Any]]:
    def make(username: str = "jake", email: str = "jake@jake.jake") -> dict[str, Any]:
        return {
            "user": {
                "email": email,
                "token": "jwt.token.here",
                "username": username,
                "bio": "I work at statefarm",
                "image": None,
            }
        }

    return make


@pytest.fixture
def articles_json(article_json: Callable[..., dict[str, Any]]) -> Callable[..., dict[str, Any]]:
    def make(*slugs: str, count: int | None = None) -> dict[str, Any]:
        return {
            "articles": [article_json(slug) for slug in slugs],
            "articlesCount": len(slugs) if count is None else count,
        }

    return make


@pytest.fixture
def run_commands(effects: Effects) -> Callable[[], Any]:
    """Await every queued command and return the messages they resolved to."""

    async def run() -> list[Any]:
        _, commands = effects.drain()
        results = []
        for command, wrap in commands:
            result = await command
            if result is not None:
                results.append(wrap(result))
        return results

    return run


@pytest.fixture
def make_article(article_json: Callable[..., dict[str, Any]]) -> Callable[..., Article]:
    def make(slug: str = "how-to-train-your-dragon", **kwargs: Any) -> Article:
        return ArticleDecoder.model_validate(article_json(slug, **kwargs)).into_article(None)

    return make


@pytest.fixture
def make_comment(comment_json: Callable[..., dict[str, Any]]) -> Callable[..., Comment]:
    def make(comment_id: int = 1, **kwargs: Any) -> Comment:
        return CommentDecoder.model_validate(comment_json(comment_id, **kwargs)).into_comment(None)

    return make
