"""Home page: popular tags and a paginated article feed."""

import logging
from dataclasses import dataclass, field
from functools import partial

from conduit.api import attempt, endpoints
from conduit.constants import HOME_ARTICLES_PER_PAGE
from conduit.entities import FIRST_PAGE, ErrorMessage, PageNumber, PaginatedList, Tag
from conduit.events import GMsg, SessionChanged
from conduit.logging import log_errors
from conduit.orders import Orders
from conduit.pages import SlowLoadThresholdPassed, apply_slow_threshold
from conduit.pages import feed as article_feed
from conduit.session import Session
from conduit.status import Status, start_load

logger = logging.getLogger(__name__)


# ------ SelectedFeed ------


@dataclass(frozen=True)
class YourFeed:
    """Articles by authors the viewer follows."""


@dataclass(frozen=True)
class GlobalFeed:
    pass


@dataclass(frozen=True)
class TagFeed:
    tag: Tag


SelectedFeed = YourFeed | GlobalFeed | TagFeed


# ------ Model ------


@dataclass
class Model:
    session: Session = field(default_factory=Session)
    selected_feed: SelectedFeed = field(default_factory=GlobalFeed)
    feed_page: PageNumber = FIRST_PAGE
    tags: Status[list[Tag]] = field(default_factory=Status)
    feed: Status[article_feed.Model] = field(default_factory=Status)


# ------ Msg ------


@dataclass(frozen=True)
class TagClicked:
    tag: Tag


@dataclass(frozen=True)
class TabClicked:
    selected_feed: SelectedFeed


@dataclass(frozen=True)
class FeedPageClicked:
    page_number: PageNumber


@dataclass(frozen=True)
class FeedLoaded:
    load_id: int
    articles: PaginatedList


@dataclass(frozen=True)
class FeedLoadFailed:
    load_id: int
    errors: list[ErrorMessage]


@dataclass(frozen=True)
class TagsLoaded:
    tags: list[Tag]


@dataclass(frozen=True)
class TagsLoadFailed:
    errors: list[ErrorMessage]


@dataclass(frozen=True)
class FeedMsg:
    msg: article_feed.Msg


Msg = (
    TagClicked
    | TabClicked
    | FeedPageClicked
    | FeedLoaded
    | FeedLoadFailed
    | TagsLoaded
    | TagsLoadFailed
    | FeedMsg
    | SlowLoadThresholdPassed
)


# ------ Init ------


def init(session: Session, orders: Orders) -> Model:
    selected_feed = GlobalFeed() if session.is_guest else YourFeed()
    model = Model(session=session, selected_feed=selected_feed)
    model.tags = start_load(
        model.tags,
        orders,
        attempt(endpoints.load_tags(), TagsLoaded, TagsLoadFailed),
        partial(SlowLoadThresholdPassed, "tags"),
    )
    _load_feed(model, orders)
    return model


def _load_feed(model: Model, orders: Orders) -> None:
    selected = model.selected_feed
    request = endpoints.load_feed(
        model.session.viewer,
        model.feed_page,
        HOME_ARTICLES_PER_PAGE,
        personal=isinstance(selected, YourFeed),
        tag=selected.tag if isinstance(selected, TagFeed) else None,
    )
    load_id = model.feed.next_load_id
    model.feed = start_load(
        model.feed,
        orders,
        attempt(request, partial(FeedLoaded, load_id), partial(FeedLoadFailed, load_id)),
        partial(SlowLoadThresholdPassed, "feed"),
    )


# ------ Sink ------


def sink(g_msg: GMsg, model: Model, orders: Orders) -> None:
    if isinstance(g_msg, SessionChanged):
        model.session = g_msg.session
        if model.feed.is_loaded:
            model.feed.value.session = g_msg.session


# ------ Update ------


def update(msg: Msg, model: Model, orders: Orders) -> None:
    if isinstance(msg, TagClicked):
        model.selected_feed = TagFeed(msg.tag)
        model.feed_page = FIRST_PAGE
        _load_feed(model, orders)
    elif isinstance(msg, TabClicked):
        model.selected_feed = msg.selected_feed
        model.feed_page = FIRST_PAGE
        _load_feed(model, orders)
    elif isinstance(msg, FeedPageClicked):
        model.feed_page = msg.page_number
        _load_feed(model, orders)
    elif isinstance(msg, FeedLoaded | FeedLoadFailed) and not model.feed.is_current(msg.load_id):
        logger.debug(f"Dropping {type(msg).__name__} of superseded feed load {msg.load_id}")
    elif isinstance(msg, FeedLoaded):
        model.feed = model.feed.resolve(article_feed.init(model.session, msg.articles))
    elif isinstance(msg, FeedLoadFailed):
        model.feed = model.feed.fail()
        log_errors(logger, msg.errors)
    elif isinstance(msg, TagsLoaded):
        model.tags = model.tags.resolve(msg.tags)
    elif isinstance(msg, TagsLoadFailed):
        model.tags = model.tags.fail()
        log_errors(logger, msg.errors)
    elif isinstance(msg, FeedMsg):
        if model.feed.is_loaded:
            article_feed.update(msg.msg, model.feed.value, orders.proxy(FeedMsg))
        else:
            logger.error("FeedMsg can be handled only if the feed is loaded")
    elif isinstance(msg, SlowLoadThresholdPassed):
        apply_slow_threshold(model, msg)
