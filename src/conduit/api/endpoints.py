"""One coroutine per backend endpoint.

Every function raises RequestError on failure, including payloads that do
not match the expected shape.
"""

from typing import Any, TypeVar
from urllib.parse import quote

from pydantic import BaseModel, ValidationError

from conduit.api.decoders import (
    ArticleDecoder,
    ArticleListDecoder,
    AuthorDecoder,
    CommentDecoder,
    ViewerDecoder,
    decode_articles,
)
from conduit.context import get_context
from conduit.entities import (
    Article,
    Author,
    Comment,
    CommentId,
    PageNumber,
    PaginatedList,
    Slug,
    Tag,
    Username,
)
from conduit.errors import RequestError
from conduit.session import Viewer

D = TypeVar("D", bound=BaseModel)


def _decode(decoder: type[D], data: Any) -> D:
    try:
        return decoder.model_validate(data)
    except ValidationError as e:
        raise RequestError([f"Invalid response: {e.error_count()} decode error(s)"]) from e


def _segment(value: str) -> str:
    """Percent-encode a path parameter so it stays one path segment."""
    return quote(value, safe="")


def _unwrap(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise RequestError([f"Invalid response: missing '{key}'"])
    return data[key]


async def _request(method: str, path: str, viewer: Viewer | None = None, **kwargs: Any) -> Any:
    return await get_context().api.request(method, path, viewer=viewer, **kwargs)


# ------ tags ------


async def load_tags() -> list[Tag]:
    data = await _request("GET", "tags")
    tags = _unwrap(data, "tags")
    if not isinstance(tags, list):
        raise RequestError(["Invalid response: 'tags' is not a list"])
    return [str(tag) for tag in tags]


# ------ articles ------


async def load_feed(
    viewer: Viewer | None,
    page_number: PageNumber,
    per_page: int,
    *,
    personal: bool = False,
    tag: Tag | None = None,
    author: Username | None = None,
    favorited: Username | None = None,
) -> PaginatedList:
    """Load one page of articles.

    Args:
        viewer: Current viewer (needed for the personal feed and relations)
        page_number: 1-based page
        per_page: Page size
        personal: Articles by authors the viewer follows
        tag: Only articles with this tag
        author: Only articles written by this user
        favorited: Only articles favorited by this user
    """
    params: dict[str, Any] = {"limit": per_page, "offset": (page_number - 1) * per_page}
    if tag is not None:
        params["tag"] = tag
    if author is not None:
        params["author"] = author
    if favorited is not None:
        params["favorited"] = favorited
    path = "articles/feed" if personal else "articles"

    data = await _request("GET", path, viewer, params=params)
    root = _decode(ArticleListDecoder, data)
    return PaginatedList(
        items=decode_articles(root.articles, viewer),
        per_page=per_page,
        total=root.articles_count,
    )


async def load_article(viewer: Viewer | None, slug: Slug) -> Article:
    data = await _request("GET", f"articles/{_segment(slug)}", viewer)
    return _decode(ArticleDecoder, _unwrap(data, "article")).into_article(viewer)


async def create_article(viewer: Viewer | None, payload: dict[str, Any]) -> Article:
    data = await _request("POST", "articles", viewer, json=payload)
    return _decode(ArticleDecoder, _unwrap(data, "article")).into_article(viewer)


async def update_article(viewer: Viewer | None, slug: Slug, payload: dict[str, Any]) -> Article:
    data = await _request("PUT", f"articles/{_segment(slug)}", viewer, json=payload)
    return _decode(ArticleDecoder, _unwrap(data, "article")).into_article(viewer)


async def delete_article(viewer: Viewer | None, slug: Slug) -> Slug:
    await _request("DELETE", f"articles/{_segment(slug)}", viewer)
    return slug


async def favorite(viewer: Viewer | None, slug: Slug) -> Article:
    data = await _request("POST", f"articles/{_segment(slug)}/favorite", viewer)
    return _decode(ArticleDecoder, _unwrap(data, "article")).into_article(viewer)


async def unfavorite(viewer: Viewer | None, slug: Slug) -> Article:
    data = await _request("DELETE", f"articles/{_segment(slug)}/favorite", viewer)
    return _decode(ArticleDecoder, _unwrap(data, "article")).into_article(viewer)


# ------ comments ------


async def load_comments(viewer: Viewer | None, slug: Slug) -> list[Comment]:
    data = await _request("GET", f"articles/{_segment(slug)}/comments", viewer)
    raw_comments = _unwrap(data, "comments")
    if not isinstance(raw_comments, list):
        raise RequestError(["Invalid response: 'comments' is not a list"])
    return [_decode(CommentDecoder, raw).into_comment(viewer) for raw in raw_comments]


async def create_comment(viewer: Viewer | None, slug: Slug, body: str) -> Comment:
    payload = {"comment": {"body": body}}
    data = await _request("POST", f"articles/{_segment(slug)}/comments", viewer, json=payload)
    return _decode(CommentDecoder, _unwrap(data, "comment")).into_comment(viewer)


async def delete_comment(viewer: Viewer | None, slug: Slug, comment_id: CommentId) -> CommentId:
    await _request("DELETE", f"articles/{_segment(slug)}/comments/{_segment(comment_id)}", viewer)
    return comment_id


# ------ profiles ------


async def load_author(viewer: Viewer | None, username: Username) -> Author:
    data = await _request("GET", f"profiles/{_segment(username)}", viewer)
    return _decode(AuthorDecoder, _unwrap(data, "profile")).into_author(viewer)


async def follow(viewer: Viewer | None, username: Username) -> Author:
    data = await _request("POST", f"profiles/{_segment(username)}/follow", viewer)
    return _decode(AuthorDecoder, _unwrap(data, "profile")).into_author(viewer)


async def unfollow(viewer: Viewer | None, username: Username) -> Author:
    data = await _request("DELETE", f"profiles/{_segment(username)}/follow", viewer)
    return _decode(AuthorDecoder, _unwrap(data, "profile")).into_author(viewer)


# ------ users ------


async def login(payload: dict[str, Any]) -> Viewer:
    data = await _request("POST", "users/login", json=payload)
    return _decode(ViewerDecoder, _unwrap(data, "user")).into_viewer()


async def register(payload: dict[str, Any]) -> Viewer:
    data = await _request("POST", "users", json=payload)
    return _decode(ViewerDecoder, _unwrap(data, "user")).into_viewer()


async def load_viewer(viewer: Viewer | None) -> Viewer:
    data = await _request("GET", "user", viewer)
    return _decode(ViewerDecoder, _unwrap(data, "user")).into_viewer()


async def update_viewer(viewer: Viewer | None, payload: dict[str, Any]) -> Viewer:
    data = await _request("PUT", "user", viewer, json=payload)
    return _decode(ViewerDecoder, _unwrap(data, "user")).into_viewer()
