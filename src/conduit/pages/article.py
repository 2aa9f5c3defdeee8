"""Article page: the article, its comments and the viewer's actions on them."""

import logging
from dataclasses import dataclass, field
from functools import partial

from conduit.api import attempt, endpoints
from conduit.entities import Article, Author, Comment, CommentId, ErrorMessage, Slug
from conduit.events import GMsg, SessionChanged
from conduit.logging import log_errors
from conduit.orders import Orders
from conduit.pages import DismissErrorsClicked, SlowLoadThresholdPassed, apply_slow_threshold
from conduit.route import Home, go_to
from conduit.session import Session
from conduit.status import Status, start_load

logger = logging.getLogger(__name__)


@dataclass
class Model:
    session: Session = field(default_factory=Session)
    slug: Slug = ""
    errors: list[ErrorMessage] = field(default_factory=list)
    comment_draft: str = ""
    comment_sending: bool = False
    article: Status[Article] = field(default_factory=Status)
    comments: Status[list[Comment]] = field(default_factory=Status)


# ------ Msg ------


@dataclass(frozen=True)
class ArticleLoaded:
    article: Article


@dataclass(frozen=True)
class ArticleLoadFailed:
    errors: list[ErrorMessage]


@dataclass(frozen=True)
class CommentsLoaded:
    comments: list[Comment]


@dataclass(frozen=True)
class CommentsLoadFailed:
    errors: list[ErrorMessage]


@dataclass(frozen=True)
class FavoriteClicked:
    pass


@dataclass(frozen=True)
class UnfavoriteClicked:
    pass


@dataclass(frozen=True)
class FavoriteChangeCompleted:
    article: Article


@dataclass(frozen=True)
class FollowClicked:
    pass


@dataclass(frozen=True)
class UnfollowClicked:
    pass


@dataclass(frozen=True)
class FollowChangeCompleted:
    author: Author


@dataclass(frozen=True)
class CommentDraftChanged:
    text: str


@dataclass(frozen=True)
class PostCommentClicked:
    pass


@dataclass(frozen=True)
class CommentPosted:
    comment: Comment


@dataclass(frozen=True)
class CommentPostFailed:
    errors: list[ErrorMessage]


@dataclass(frozen=True)
class DeleteCommentClicked:
    comment_id: CommentId


@dataclass(frozen=True)
class CommentDeleted:
    comment_id: CommentId


@dataclass(frozen=True)
class DeleteArticleClicked:
    pass


@dataclass(frozen=True)
class ArticleDeleted:
    slug: Slug


@dataclass(frozen=True)
class RequestFailed:
    """A follow, favorite or delete request failed."""

    errors: list[ErrorMessage]


Msg = (
    DismissErrorsClicked
    | ArticleLoaded
    | ArticleLoadFailed
    | CommentsLoaded
    | CommentsLoadFailed
    | FavoriteClicked
    | UnfavoriteClicked
    | FavoriteChangeCompleted
    | FollowClicked
    | UnfollowClicked
    | FollowChangeCompleted
    | CommentDraftChanged
    | PostCommentClicked
    | CommentPosted
    | CommentPostFailed
    | DeleteCommentClicked
    | CommentDeleted
    | DeleteArticleClicked
    | ArticleDeleted
    | RequestFailed
    | SlowLoadThresholdPassed
)


# ------ Init ------


def init(session: Session, slug: Slug, orders: Orders) -> Model:
    model = Model(session=session, slug=slug)
    model.article = start_load(
        model.article,
        orders,
        attempt(endpoints.load_article(session.viewer, slug), ArticleLoaded, ArticleLoadFailed),
        partial(SlowLoadThresholdPassed, "article"),
    )
    model.comments = start_load(
        model.comments,
        orders,
        attempt(
            endpoints.load_comments(session.viewer, slug), CommentsLoaded, CommentsLoadFailed
        ),
        partial(SlowLoadThresholdPassed, "comments"),
    )
    return model


# ------ Sink ------


def sink(g_msg: GMsg, model: Model, orders: Orders) -> None:
    if isinstance(g_msg, SessionChanged):
        model.session = g_msg.session


# ------ Update ------


def _fail(model: Model, errors: list[ErrorMessage]) -> None:
    log_errors(logger, errors)
    model.errors = list(errors)


def update(msg: Msg, model: Model, orders: Orders) -> None:
    viewer = model.session.viewer
    if isinstance(msg, DismissErrorsClicked):
        model.errors.clear()
    elif isinstance(msg, ArticleLoaded):
        model.article = model.article.resolve(msg.article)
    elif isinstance(msg, ArticleLoadFailed):
        model.article = model.article.fail()
        _fail(model, msg.errors)
    elif isinstance(msg, CommentsLoaded):
        model.comments = model.comments.resolve(msg.comments)
    elif isinstance(msg, CommentsLoadFailed):
        model.comments = model.comments.fail()
        _fail(model, msg.errors)
    elif isinstance(msg, FavoriteClicked):
        orders.perform_cmd(
            attempt(endpoints.favorite(viewer, model.slug), FavoriteChangeCompleted, RequestFailed)
        )
    elif isinstance(msg, UnfavoriteClicked):
        orders.perform_cmd(
            attempt(
                endpoints.unfavorite(viewer, model.slug), FavoriteChangeCompleted, RequestFailed
            )
        )
    elif isinstance(msg, FavoriteChangeCompleted):
        model.article = model.article.resolve(msg.article)
    elif isinstance(msg, FollowClicked | UnfollowClicked):
        if not model.article.is_loaded:
            logger.error("Follow can be changed only if the article is loaded")
            return
        request = endpoints.follow if isinstance(msg, FollowClicked) else endpoints.unfollow
        username = model.article.value.author.username
        orders.perform_cmd(attempt(request(viewer, username), FollowChangeCompleted, RequestFailed))
    elif isinstance(msg, FollowChangeCompleted):
        if model.article.is_loaded:
            updated = model.article.value.model_copy(update={"author": msg.author})
            model.article = model.article.resolve(updated)
    elif isinstance(msg, CommentDraftChanged):
        model.comment_draft = msg.text
    elif isinstance(msg, PostCommentClicked):
        body = model.comment_draft.strip()
        if not body or model.comment_sending:
            return
        model.comment_sending = True
        orders.perform_cmd(
            attempt(
                endpoints.create_comment(viewer, model.slug, body),
                CommentPosted,
                CommentPostFailed,
            )
        )
    elif isinstance(msg, CommentPosted):
        model.comment_sending = False
        model.comment_draft = ""
        if model.comments.is_loaded:
            model.comments = model.comments.resolve([msg.comment, *model.comments.value])
    elif isinstance(msg, CommentPostFailed):
        model.comment_sending = False
        _fail(model, msg.errors)
    elif isinstance(msg, DeleteCommentClicked):
        orders.perform_cmd(
            attempt(
                endpoints.delete_comment(viewer, model.slug, msg.comment_id),
                CommentDeleted,
                RequestFailed,
            )
        )
    elif isinstance(msg, CommentDeleted):
        if model.comments.is_loaded:
            remaining = [c for c in model.comments.value if c.id != msg.comment_id]
            model.comments = model.comments.resolve(remaining)
    elif isinstance(msg, DeleteArticleClicked):
        orders.perform_cmd(
            attempt(endpoints.delete_article(viewer, model.slug), ArticleDeleted, RequestFailed)
        )
    elif isinstance(msg, ArticleDeleted):
        go_to(Home(), orders)
    elif isinstance(msg, RequestFailed):
        _fail(model, msg.errors)
    elif isinstance(msg, SlowLoadThresholdPassed):
        apply_slow_threshold(model, msg)
