"""Article list shared by the home and profile pages."""

import logging
from dataclasses import dataclass, field

from conduit.api import attempt, endpoints
from conduit.entities import Article, ErrorMessage, PaginatedList, Slug
from conduit.logging import log_errors
from conduit.orders import Orders
from conduit.pages import DismissErrorsClicked
from conduit.session import Session

logger = logging.getLogger(__name__)


@dataclass
class Model:
    session: Session
    articles: PaginatedList = field(default_factory=PaginatedList)
    errors: list[ErrorMessage] = field(default_factory=list)


def init(session: Session, articles: PaginatedList) -> Model:
    return Model(session=session, articles=articles)


@dataclass(frozen=True)
class FavoriteClicked:
    slug: Slug


@dataclass(frozen=True)
class UnfavoriteClicked:
    slug: Slug


@dataclass(frozen=True)
class FavoriteCompleted:
    article: Article


@dataclass(frozen=True)
class FavoriteFailed:
    errors: list[ErrorMessage]


Msg = (
    DismissErrorsClicked | FavoriteClicked | UnfavoriteClicked | FavoriteCompleted | FavoriteFailed
)


def update(msg: Msg, model: Model, orders: Orders) -> None:
    viewer = model.session.viewer
    if isinstance(msg, DismissErrorsClicked):
        model.errors.clear()
    elif isinstance(msg, FavoriteClicked):
        orders.perform_cmd(
            attempt(endpoints.favorite(viewer, msg.slug), FavoriteCompleted, FavoriteFailed)
        )
    elif isinstance(msg, UnfavoriteClicked):
        orders.perform_cmd(
            attempt(endpoints.unfavorite(viewer, msg.slug), FavoriteCompleted, FavoriteFailed)
        )
    elif isinstance(msg, FavoriteCompleted):
        model.articles.replace_item(msg.article)
    elif isinstance(msg, FavoriteFailed):
        log_errors(logger, msg.errors)
        model.errors = list(msg.errors)
