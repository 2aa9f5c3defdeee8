"""Tests for the REST client, decoders and endpoints."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from conduit.api import attempt, endpoints
from conduit.api.client import ApiClient, errors_from_response
from conduit.api.decoders import decode_articles
from conduit.context import AppContext
from conduit.entities import AuthorRelation
from conduit.errors import RequestError
from conduit.session import Viewer

Factory = Callable[..., dict[str, Any]]


@pytest.mark.unit
class TestErrorsFromResponse:
    """Tests for converting error responses into messages."""

    def test_field_errors(self) -> None:
        response = httpx.Response(
            422, json={"errors": {"email": ["has already been taken", "is invalid"]}}
        )
        assert errors_from_response(response) == [
            "email has already been taken",
            "email is invalid",
        ]

    def test_falls_back_to_status(self) -> None:
        response = httpx.Response(500, text="<html>oops</html>")
        assert errors_from_response(response) == ["Status 500: Internal Server Error"]


@pytest.mark.asyncio
@pytest.mark.unit
class TestApiClient:
    """Tests for ApiClient.request()."""

    async def test_transport_error_becomes_request_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = ApiClient("https://conduit.test/api", transport=httpx.MockTransport(handler))
        with pytest.raises(RequestError) as exc_info:
            await client.request("GET", "tags")
        assert exc_info.value.errors == ["connection refused"]

    async def test_unusable_url_becomes_request_error(self) -> None:
        client = ApiClient(
            "https://conduit.test/api",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})),
        )
        with pytest.raises(RequestError) as exc_info:
            await client.request("GET", "profiles/\x00")
        assert "non-printable" in exc_info.value.errors[0]

    async def test_non_object_json_is_rejected(self) -> None:
        client = ApiClient(
            "https://conduit.test/api/",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[1, 2])),
        )
        with pytest.raises(RequestError):
            await client.request("GET", "tags")

    async def test_empty_body_is_empty_object(self, fake_api, app_context: AppContext):
        fake_api.add("DELETE", "articles/s", None)
        assert await app_context.api.request("DELETE", "articles/s") == {}

    async def test_token_header(self, fake_api, app_context: AppContext, viewer: Viewer):
        fake_api.add("GET", "tags", {"tags": []})
        await app_context.api.request("GET", "tags", viewer=viewer)
        assert fake_api.requests[0].headers["Authorization"] == "Token jwt.token.here"


@pytest.mark.unit
class TestDecoders:
    def test_invalid_articles_are_skipped(self, article_json: Factory) -> None:
        broken = article_json("broken")
        del broken["createdAt"]

        articles = decode_articles([article_json("ok"), broken], viewer=None)

        assert [article.slug for article in articles] == ["ok"]

    @pytest.mark.parametrize(
        ("viewer_name", "following", "relation"),
        [
            ("jake", False, AuthorRelation.IS_VIEWER),
            ("celeb", True, AuthorRelation.FOLLOWING),
            ("celeb", False, AuthorRelation.NOT_FOLLOWING),
        ],
    )
    def test_author_relation(
        self,
        profile_json: Factory,
        article_json: Factory,
        viewer_name: str,
        following: bool,
        relation: AuthorRelation,
    ) -> None:
        raw = article_json()
        raw["author"] = profile_json("jake", following=following)
        viewer = Viewer(username=viewer_name, auth_token="t")

        (article,) = decode_articles([raw], viewer)

        assert article.author.relation is relation


@pytest.mark.asyncio
@pytest.mark.unit
class TestEndpoints:
    """Tests for endpoint coroutines against the fake backend."""

    async def test_load_feed_params(self, fake_api, articles_json: Factory) -> None:
        fake_api.add("GET", "articles", articles_json("a", count=7))

        page = await endpoints.load_feed(None, 2, 5, author="jake")

        (request,) = fake_api.requests
        assert dict(request.url.params) == {"limit": "5", "offset": "5", "author": "jake"}
        assert page.total == 7
        assert page.total_pages == 2

    async def test_load_comments(self, fake_api, comment_json: Factory) -> None:
        fake_api.add("GET", "articles/s/comments", {"comments": [comment_json(7)]})

        (comment,) = await endpoints.load_comments(None, "s")

        assert comment.id == "7"

    async def test_missing_key_is_request_error(self, fake_api) -> None:
        fake_api.add("GET", "articles/s", {"unexpected": {}})
        with pytest.raises(RequestError) as exc_info:
            await endpoints.load_article(None, "s")
        assert exc_info.value.errors == ["Invalid response: missing 'article'"]

    async def test_login_returns_viewer(self, fake_api, user_json: Factory) -> None:
        fake_api.add("POST", "users/login", user_json())

        viewer = await endpoints.login({"user": {"email": "e", "password": "p"}})

        assert viewer.auth_token == "jwt.token.here"
        assert viewer.bio == "I work at statefarm"

    async def test_delete_comment_returns_id(self, fake_api) -> None:
        fake_api.add("DELETE", "articles/s/comments/3", {})
        assert await endpoints.delete_comment(None, "s", "3") == "3"

    async def test_path_parameters_stay_one_segment(
        self, fake_api, profile_json: Factory
    ) -> None:
        fake_api.add("GET", "profiles/a/b?c", {"profile": profile_json("a/b?c")})

        author = await endpoints.load_author(None, "a/b?c")

        (request,) = fake_api.requests
        assert request.url.raw_path == b"/api/profiles/a%2Fb%3Fc"
        assert author.username == "a/b?c"


@pytest.mark.asyncio
@pytest.mark.unit
class TestAttempt:
    async def test_success(self, fake_api) -> None:
        fake_api.add("GET", "tags", {"tags": ["a"]})
        assert await attempt(endpoints.load_tags(), tuple, list) == ("a",)

    async def test_failure(self, fake_api) -> None:
        result = await attempt(endpoints.load_tags(), tuple, lambda errors: ("failed", errors))
        assert result == ("failed", ["path not found"])
