"""Navigation event sources and the snapshot bus.

Event sources turn host events (link clicks, history moves) into paths
for the router to load. The snapshot bus carries the result of every
dispatch back out to the view layer.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol
from urllib.parse import urlsplit

if TYPE_CHECKING:
    from tinyroute.navigation.state import ViewSnapshot

Navigate = Callable[[str], None]
Disconnect = Callable[[], None]
Subscriber = Callable[["ViewSnapshot"], None]

_DEFAULT_PORTS = {"http": 80, "https": 443}


class NavigationEventSource(Protocol):
    """Anything that can tell the router to navigate.

    ``connect()`` registers *navigate* and returns a zero-argument
    callable that unregisters it.
    """

    def connect(self, navigate: Navigate) -> Disconnect: ...


class LinkInterceptor:
    """Turns clicks on same-origin links into router navigation.

    The host binds its click events to ``click()``. Same-origin hrefs are
    routed and ``True`` is returned so the host can suppress its default
    action; everything else returns ``False``::

        links = LinkInterceptor("https://example.com")
        router.connect(links)
        links.click("https://example.com/about")  # True, router loads /about
        links.click("https://elsewhere.org/")     # False

    An origin with a path (``https://example.com/app``) only intercepts
    links under that path. Default ports are ignored when comparing.
    """

    __slots__ = ("_listeners", "base_path", "origin")

    def __init__(self, origin: str) -> None:
        parts = urlsplit(origin)
        self.origin = _site(parts.scheme, parts.hostname, parts.port)
        self.base_path = parts.path.rstrip("/")
        self._listeners: list[Navigate] = []

    def connect(self, navigate: Navigate) -> Disconnect:
        self._listeners.append(navigate)

        def disconnect() -> None:
            if navigate in self._listeners:
                self._listeners.remove(navigate)

        return disconnect

    def resolve(self, href: str) -> str | None:
        """Return the path of *href* if it is same-origin, else ``None``.

        Relative paths (``/about``) are same-origin. Protocol-relative
        (``//host``) and absolute URLs must match ``origin``. The path
        must also fall under ``base_path``.
        """
        if not href:
            return None
        parts = urlsplit(href)
        if parts.scheme or parts.netloc:
            try:
                site = _site(parts.scheme, parts.hostname, parts.port)
            except ValueError:
                return None
            if site != self.origin:
                return None
        elif not href.startswith("/"):
            return None

        path = parts.path or "/"
        if self.base_path and not (
            path == self.base_path or path.startswith(self.base_path + "/")
        ):
            return None
        return path

    def click(self, href: str) -> bool:
        path = self.resolve(href)
        if path is None or not self._listeners:
            return False
        for navigate in list(self._listeners):
            navigate(path)
        return True


def _site(scheme: str, host: str | None, port: int | None) -> str:
    """Normalize an origin: lowercase, default port dropped."""
    scheme = scheme.lower()
    if port is None or _DEFAULT_PORTS.get(scheme) == port:
        return f"{scheme}://{host or ''}"
    return f"{scheme}://{host or ''}:{port}"


class SnapshotBus:
    """Synchronous broadcast of dispatch results.

    Subscribers are called in subscription order, after each dispatch
    completes. Exceptions raised by a subscriber propagate to the caller
    of ``Router.load()``.
    """

    __slots__ = ("_subscribers",)

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Disconnect:
        """Register *callback*. Returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, snapshot: "ViewSnapshot") -> None:
        for callback in list(self._subscribers):
            callback(snapshot)

    def __len__(self) -> int:
        return len(self._subscribers)
