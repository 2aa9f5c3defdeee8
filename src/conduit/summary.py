"""Plain-data description of the active page, used by the CLI."""

from collections.abc import Callable
from typing import Any

from conduit import app
from conduit.entities import Article, Author, Comment, PaginatedList
from conduit.forms import Form, Problem
from conduit.pages import feed as article_feed
from conduit.pages import home, profile
from conduit.status import Status

# Never echoed back to the terminal
_HIDDEN_FIELDS = {"password"}


def _status(status: Status[Any], render: Callable[[Any], Any]) -> dict[str, Any]:
    data: dict[str, Any] = {"state": status.state.value}
    if status.is_loaded:
        data["value"] = render(status.value)
    return data


def _author(author: Author) -> dict[str, Any]:
    return {
        "username": author.username,
        "bio": author.profile.bio,
        "avatar": author.profile.avatar_src,
        "relation": author.relation.value,
    }


def _article(article: Article) -> dict[str, Any]:
    return {
        "slug": article.slug,
        "title": article.title,
        "author": article.author.username,
        "tags": list(article.tag_list),
        "favorited": article.favorited,
        "favorites_count": article.favorites_count,
    }


def _comment(comment: Comment) -> dict[str, Any]:
    return {"id": comment.id, "author": comment.author.username, "body": comment.body}


def _articles(articles: PaginatedList) -> dict[str, Any]:
    return {
        "total": articles.total,
        "pages": articles.total_pages,
        "items": [_article(article) for article in articles.items],
    }


def _feed(feed: article_feed.Model) -> dict[str, Any]:
    return {"articles": _articles(feed.articles), "errors": list(feed.errors)}


def _form(form: Form[Any]) -> dict[str, str]:
    return {field.key: field.value for field in form if field.key not in _HIDDEN_FIELDS}


def _problems(problems: list[Problem]) -> list[str]:
    return [problem.message for problem in problems]


def _selected_home_feed(selected: home.SelectedFeed) -> str:
    if isinstance(selected, home.TagFeed):
        return f"#{selected.tag}"
    return "your" if isinstance(selected, home.YourFeed) else "global"


def _describe_home(variant: app.Home) -> dict[str, Any]:
    model = variant.model
    return {
        "selected_feed": _selected_home_feed(model.selected_feed),
        "feed_page": model.feed_page,
        "tags": _status(model.tags, list),
        "feed": _status(model.feed, _feed),
    }


def _describe_profile(variant: app.Profile) -> dict[str, Any]:
    model = variant.model
    return {
        "title": profile.title(model),
        "username": variant.username,
        "selected_feed": model.selected_feed.value,
        "feed_page": model.feed_page,
        "author": _status(model.author, _author),
        "feed": _status(model.feed, _feed),
        "errors": list(model.errors),
    }


def _describe_article(variant: app.Article) -> dict[str, Any]:
    model = variant.model
    return {
        "slug": model.slug,
        "article": _status(model.article, _article),
        "comments": _status(model.comments, lambda comments: [_comment(c) for c in comments]),
        "errors": list(model.errors),
    }


def _describe_settings(variant: app.Settings) -> dict[str, Any]:
    model = variant.model
    return {"form": _status(model.form, _form), "problems": _problems(model.problems)}


def _describe_credentials(variant: app.Login | app.Register) -> dict[str, Any]:
    model = variant.model
    return {"form": _form(model.form), "problems": _problems(model.problems)}


def _describe_editor(variant: app.ArticleEditor) -> dict[str, Any]:
    model = variant.model
    return {
        "slug": variant.slug,
        "form": _status(model.form, _form),
        "saving": model.saving,
        "problems": _problems(model.problems),
    }


_DESCRIBERS: dict[type, Callable[[Any], dict[str, Any]]] = {
    app.Home: _describe_home,
    app.Profile: _describe_profile,
    app.Article: _describe_article,
    app.Settings: _describe_settings,
    app.Login: _describe_credentials,
    app.Register: _describe_credentials,
    app.ArticleEditor: _describe_editor,
}


def describe(model: app.Model) -> dict[str, Any]:
    """Summarize the active page as JSON-serializable data."""
    session = app.session_of(model)
    data: dict[str, Any] = {
        "page": type(model).__name__,
        "viewer": session.viewer.username if session.viewer else None,
    }
    describer = _DESCRIBERS.get(type(model))
    if describer is not None:
        data.update(describer(model))
    return data
