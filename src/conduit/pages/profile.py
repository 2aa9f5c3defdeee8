"""Profile page: an author's details and their articles or favorites."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import partial

from conduit.api import attempt, endpoints
from conduit.constants import PROFILE_ARTICLES_PER_PAGE
from conduit.entities import (
    FIRST_PAGE,
    Author,
    AuthorRelation,
    ErrorMessage,
    PageNumber,
    PaginatedList,
    Username,
)
from conduit.events import GMsg, SessionChanged
from conduit.logging import log_errors
from conduit.orders import Orders
from conduit.pages import DismissErrorsClicked, SlowLoadThresholdPassed, apply_slow_threshold
from conduit.pages import feed as article_feed
from conduit.route import Home, go_to
from conduit.session import Session
from conduit.status import Status, start_load

logger = logging.getLogger(__name__)

DEFAULT_TITLE_PREFIX = "Profile"
TITLE_PREFIX_FOR_ME = "My Profile"


class SelectedFeed(str, Enum):
    MY_ARTICLES = "my_articles"
    FAVORITED_ARTICLES = "favorited_articles"


# ------ Model ------


@dataclass
class Model:
    """Profile page state.

    ``username`` is an empty placeholder until init sets it; it only stands in
    for the author's name while the author is not loaded.
    """

    session: Session = field(default_factory=Session)
    username: Username = ""
    errors: list[ErrorMessage] = field(default_factory=list)
    selected_feed: SelectedFeed = SelectedFeed.MY_ARTICLES
    feed_page: PageNumber = FIRST_PAGE
    author: Status[Author] = field(default_factory=Status)
    feed: Status[article_feed.Model] = field(default_factory=Status)

    @property
    def author_username(self) -> Username:
        if self.author.is_loaded:
            return self.author.value.username
        return self.username


# ------ Msg ------


@dataclass(frozen=True)
class FollowClicked:
    pass


@dataclass(frozen=True)
class UnfollowClicked:
    pass


@dataclass(frozen=True)
class TabClicked:
    selected_feed: SelectedFeed


@dataclass(frozen=True)
class FeedPageClicked:
    page_number: PageNumber


@dataclass(frozen=True)
class FollowChangeCompleted:
    author: Author


@dataclass(frozen=True)
class FollowChangeFailed:
    errors: list[ErrorMessage]


@dataclass(frozen=True)
class AuthorLoaded:
    author: Author


@dataclass(frozen=True)
class AuthorLoadFailed:
    username: Username
    errors: list[ErrorMessage]


@dataclass(frozen=True)
class FeedLoaded:
    load_id: int
    articles: PaginatedList


@dataclass(frozen=True)
class FeedLoadFailed:
    load_id: int
    username: Username
    errors: list[ErrorMessage]


@dataclass(frozen=True)
class FeedMsg:
    msg: article_feed.Msg


Msg = (
    DismissErrorsClicked
    | FollowClicked
    | UnfollowClicked
    | TabClicked
    | FeedPageClicked
    | FollowChangeCompleted
    | FollowChangeFailed
    | AuthorLoaded
    | AuthorLoadFailed
    | FeedLoaded
    | FeedLoadFailed
    | FeedMsg
    | SlowLoadThresholdPassed
)


# ------ Init ------


def init(session: Session, username: Username, orders: Orders) -> Model:
    model = Model(session=session, username=username)
    model.author = start_load(
        model.author,
        orders,
        attempt(
            endpoints.load_author(session.viewer, username),
            AuthorLoaded,
            partial(AuthorLoadFailed, username),
        ),
        partial(SlowLoadThresholdPassed, "author"),
    )
    _load_feed(model, orders)
    return model


def _load_feed(model: Model, orders: Orders) -> None:
    username = model.author_username
    favorites = model.selected_feed is SelectedFeed.FAVORITED_ARTICLES
    request = endpoints.load_feed(
        model.session.viewer,
        model.feed_page,
        PROFILE_ARTICLES_PER_PAGE,
        author=None if favorites else username,
        favorited=username if favorites else None,
    )
    load_id = model.feed.next_load_id
    model.feed = start_load(
        model.feed,
        orders,
        attempt(
            request,
            partial(FeedLoaded, load_id),
            partial(FeedLoadFailed, load_id, username),
        ),
        partial(SlowLoadThresholdPassed, "feed"),
    )


def title(model: Model) -> str:
    """Page title: "My Profile" for the viewer's own page."""
    if model.author.is_loaded:
        author = model.author.value
        if author.relation is AuthorRelation.IS_VIEWER:
            return TITLE_PREFIX_FOR_ME
        return f"{DEFAULT_TITLE_PREFIX} - {author.username}"
    viewer = model.session.viewer
    if viewer is not None and viewer.username == model.username:
        return TITLE_PREFIX_FOR_ME
    return DEFAULT_TITLE_PREFIX


# ------ Sink ------


def sink(g_msg: GMsg, model: Model, orders: Orders) -> None:
    if isinstance(g_msg, SessionChanged):
        model.session = g_msg.session
        go_to(Home(), orders)


# ------ Update ------


def update(msg: Msg, model: Model, orders: Orders) -> None:
    viewer = model.session.viewer
    if isinstance(msg, DismissErrorsClicked):
        model.errors.clear()
    elif isinstance(msg, FollowClicked):
        orders.perform_cmd(
            attempt(
                endpoints.follow(viewer, model.author_username),
                FollowChangeCompleted,
                FollowChangeFailed,
            )
        )
    elif isinstance(msg, UnfollowClicked):
        orders.perform_cmd(
            attempt(
                endpoints.unfollow(viewer, model.author_username),
                FollowChangeCompleted,
                FollowChangeFailed,
            )
        )
    elif isinstance(msg, TabClicked):
        model.selected_feed = msg.selected_feed
        model.feed_page = FIRST_PAGE
        _load_feed(model, orders)
    elif isinstance(msg, FeedPageClicked):
        model.feed_page = msg.page_number
        _load_feed(model, orders)
    elif isinstance(msg, FollowChangeCompleted | AuthorLoaded):
        model.author = model.author.resolve(msg.author)
    elif isinstance(msg, FollowChangeFailed):
        log_errors(logger, msg.errors)
        model.errors = list(msg.errors)
    elif isinstance(msg, AuthorLoadFailed):
        model.author = model.author.fail()
        model.username = msg.username
        log_errors(logger, msg.errors)
        model.errors = list(msg.errors)
    elif isinstance(msg, FeedLoaded | FeedLoadFailed) and not model.feed.is_current(msg.load_id):
        logger.debug(f"Dropping {type(msg).__name__} of superseded feed load {msg.load_id}")
    elif isinstance(msg, FeedLoaded):
        model.feed = model.feed.resolve(article_feed.init(model.session, msg.articles))
    elif isinstance(msg, FeedLoadFailed):
        model.feed = model.feed.fail()
        log_errors(logger, msg.errors)
        model.errors = list(msg.errors)
    elif isinstance(msg, FeedMsg):
        if model.feed.is_loaded:
            article_feed.update(msg.msg, model.feed.value, orders.proxy(FeedMsg))
        else:
            logger.error("FeedMsg can be handled only if the feed is loaded")
    elif isinstance(msg, SlowLoadThresholdPassed):
        apply_slow_threshold(model, msg)
