"""Routes and their URL path encoding.

URL surface: /, /login, /logout, /register, /settings, /profile/:username,
/article/:slug, /editor and /editor/:slug. Anything else is not a route.
"""

from dataclasses import dataclass
from urllib.parse import quote, unquote, urlsplit

from conduit.context import get_context
from conduit.entities import Slug, Username
from conduit.errors import RouteDecodeError
from conduit.events import RoutePushed
from conduit.orders import Orders


@dataclass(frozen=True)
class Home:
    pass


@dataclass(frozen=True)
class Root:
    pass


@dataclass(frozen=True)
class Login:
    pass


@dataclass(frozen=True)
class Logout:
    pass


@dataclass(frozen=True)
class Register:
    pass


@dataclass(frozen=True)
class Settings:
    pass


@dataclass(frozen=True)
class Article:
    slug: Slug


@dataclass(frozen=True)
class Profile:
    username: Username


@dataclass(frozen=True)
class NewArticle:
    pass


@dataclass(frozen=True)
class EditArticle:
    slug: Slug


Route = (
    Home
    | Root
    | Login
    | Logout
    | Register
    | Settings
    | Article
    | Profile
    | NewArticle
    | EditArticle
)

_SIMPLE_ROUTES: dict[str, Route] = {
    "login": Login(),
    "logout": Logout(),
    "register": Register(),
    "settings": Settings(),
}


def encode(route: Route) -> list[str]:
    """Return the path segments for a route. Home and Root are the empty path."""
    if isinstance(route, Home | Root):
        return []
    if isinstance(route, Article):
        return ["article", route.slug]
    if isinstance(route, Profile):
        return ["profile", route.username]
    if isinstance(route, NewArticle):
        return ["editor"]
    if isinstance(route, EditArticle):
        return ["editor", route.slug]
    for segment, simple in _SIMPLE_ROUTES.items():
        if route == simple:
            return [segment]
    raise TypeError(f"Not a route: {route!r}")


def decode(segments: list[str]) -> Route:
    """Parse path segments left to right into a route.

    Raises:
        RouteDecodeError: If the path matches no route
    """
    head = segments[0] if segments else ""
    rest = segments[1] if len(segments) > 1 else ""

    if head == "":
        return Home()
    if head in _SIMPLE_ROUTES:
        return _SIMPLE_ROUTES[head]
    if head == "profile" and rest:
        return Profile(rest)
    if head == "article" and rest:
        return Article(rest)
    if head == "editor":
        return EditArticle(rest) if rest else NewArticle()
    raise RouteDecodeError(segments)


def split_path(path: str) -> list[str]:
    """Split a URL path into decoded segments, ignoring query and fragment."""
    raw = urlsplit(path).path.strip("/")
    if not raw:
        return []
    return [unquote(segment) for segment in raw.split("/")]


def from_path(path: str) -> Route | None:
    """Decode a URL path, returning None when it matches no route."""
    try:
        return decode(split_path(path))
    except RouteDecodeError:
        return None


def to_path(route: Route) -> str:
    """Render a route as a URL path, percent-encoding each segment."""
    return "/" + "/".join(quote(segment, safe="") for segment in encode(route))


def go_to(route: Route, orders: Orders) -> None:
    """Push the route onto history and broadcast it to the dispatcher."""
    get_context().history.push(to_path(route))
    orders.send_g_msg(RoutePushed(route))
