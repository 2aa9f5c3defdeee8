"""Top-level application model and message dispatcher.

The application holds exactly one page model at a time. A route change takes
the session out of the current page and builds the page for the new route.
Page messages reach a page only while that page is active; results of requests
issued by a page the user already left are dropped here.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from conduit import route
from conduit.context import get_context
from conduit.entities import Slug, Username
from conduit.events import GMsg, RoutePushed, SessionChanged
from conduit.orders import Orders
from conduit.pages import article, article_editor, home, login, profile, register, settings
from conduit.session import Session

logger = logging.getLogger(__name__)


# ------ Model ------


@dataclass(frozen=True)
class Redirect:
    session: Session


@dataclass(frozen=True)
class NotFound:
    session: Session


@dataclass(frozen=True)
class Home:
    model: home.Model


@dataclass(frozen=True)
class Settings:
    model: settings.Model


@dataclass(frozen=True)
class Login:
    model: login.Model


@dataclass(frozen=True)
class Register:
    model: register.Model


@dataclass(frozen=True)
class Profile:
    model: profile.Model
    username: Username


@dataclass(frozen=True)
class Article:
    model: article.Model


@dataclass(frozen=True)
class ArticleEditor:
    model: article_editor.Model
    slug: Slug | None


Model = Redirect | NotFound | Home | Settings | Login | Register | Profile | Article | ArticleEditor


def session_of(model: Model) -> Session:
    """Extract the session from any variant."""
    if isinstance(model, Redirect | NotFound):
        return model.session
    return model.model.session


# ------ Msg ------


@dataclass(frozen=True)
class RouteChanged:
    """URL changed; route is None when the path matched no route."""

    route: route.Route | None


@dataclass(frozen=True)
class HomeMsg:
    msg: home.Msg


@dataclass(frozen=True)
class SettingsMsg:
    msg: settings.Msg


@dataclass(frozen=True)
class LoginMsg:
    msg: login.Msg


@dataclass(frozen=True)
class RegisterMsg:
    msg: register.Msg


@dataclass(frozen=True)
class ProfileMsg:
    msg: profile.Msg


@dataclass(frozen=True)
class ArticleMsg:
    msg: article.Msg


@dataclass(frozen=True)
class ArticleEditorMsg:
    msg: article_editor.Msg


Msg = (
    RouteChanged
    | HomeMsg
    | SettingsMsg
    | LoginMsg
    | RegisterMsg
    | ProfileMsg
    | ArticleMsg
    | ArticleEditorMsg
)

PageHandler = Callable[[Any, Any, Orders], None]

# Page message wrapper -> (variant it belongs to, page update)
_UPDATES: dict[type, tuple[type, PageHandler]] = {
    HomeMsg: (Home, home.update),
    SettingsMsg: (Settings, settings.update),
    LoginMsg: (Login, login.update),
    RegisterMsg: (Register, register.update),
    ProfileMsg: (Profile, profile.update),
    ArticleMsg: (Article, article.update),
    ArticleEditorMsg: (ArticleEditor, article_editor.update),
}

# Active variant -> (page sink, wrapper for messages the sink queues)
_SINKS: dict[type, tuple[PageHandler, type]] = {
    Home: (home.sink, HomeMsg),
    Settings: (settings.sink, SettingsMsg),
    Login: (login.sink, LoginMsg),
    Register: (register.sink, RegisterMsg),
    Profile: (profile.sink, ProfileMsg),
    Article: (article.sink, ArticleMsg),
    ArticleEditor: (article_editor.sink, ArticleEditorMsg),
}


class Application:
    """Owns the single active page model."""

    def __init__(self, model: Model | None = None) -> None:
        self.model: Model = model if model is not None else Redirect(Session())

    def take_session(self) -> Session:
        """Move the session out, leaving a default model until the caller replaces it."""
        old, self.model = self.model, Redirect(Session())
        return session_of(old)

    def update(self, msg: Msg, orders: Orders) -> None:
        if isinstance(msg, RouteChanged):
            self.change_model_by_route(msg.route, orders)
            return

        variant, page_update = _UPDATES[type(msg)]
        if not isinstance(self.model, variant):
            logger.debug(
                f"Dropping {type(msg.msg).__name__} for inactive page "
                f"(active: {type(self.model).__name__})"
            )
            return
        page_update(msg.msg, self.model.model, orders.proxy(type(msg)))

    def sink(self, g_msg: GMsg, orders: Orders) -> None:
        """Deliver a global event to whichever page is active."""
        if isinstance(g_msg, RoutePushed):
            orders.send_msg(RouteChanged(g_msg.route))

        if isinstance(self.model, Redirect | NotFound):
            if isinstance(g_msg, SessionChanged):
                self.model = Redirect(g_msg.session)
                route.go_to(route.Home(), orders)
            return

        page_sink, wrapper = _SINKS[type(self.model)]
        page_sink(g_msg, self.model.model, orders.proxy(wrapper))

    def change_model_by_route(self, target: route.Route | None, orders: Orders) -> None:
        if target is None:
            self.model = NotFound(self.take_session())
        elif isinstance(target, route.Root):
            route.go_to(route.Home(), orders)
        elif isinstance(target, route.Logout):
            get_context().store.delete()
            orders.send_g_msg(SessionChanged(Session.guest()))
            route.go_to(route.Home(), orders)
        elif isinstance(target, route.NewArticle):
            self.model = ArticleEditor(article_editor.init_new(self.take_session()), None)
        elif isinstance(target, route.EditArticle):
            self.model = ArticleEditor(
                article_editor.init_edit(
                    self.take_session(), target.slug, orders.proxy(ArticleEditorMsg)
                ),
                target.slug,
            )
        elif isinstance(target, route.Settings):
            self.model = Settings(settings.init(self.take_session(), orders.proxy(SettingsMsg)))
        elif isinstance(target, route.Home):
            self.model = Home(home.init(self.take_session(), orders.proxy(HomeMsg)))
        elif isinstance(target, route.Login):
            self.model = Login(login.init(self.take_session()))
        elif isinstance(target, route.Register):
            self.model = Register(register.init(self.take_session()))
        elif isinstance(target, route.Profile):
            self.model = Profile(
                profile.init(self.take_session(), target.username, orders.proxy(ProfileMsg)),
                target.username,
            )
        elif isinstance(target, route.Article):
            self.model = Article(
                article.init(self.take_session(), target.slug, orders.proxy(ArticleMsg))
            )
