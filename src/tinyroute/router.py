"""The Router: registration, dispatch, and reverse URL generation.

Mutable during setup (route registration, event sources).
Frozen when ``start()`` is called; from then on the route table is
read-only and every navigation goes through ``load()``.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from tinyroute.config import RouterConfig
from tinyroute.errors import ConfigurationError, ReverseError
from tinyroute.navigation.events import (
    Disconnect,
    LinkInterceptor,
    NavigationEventSource,
    SnapshotBus,
    Subscriber,
)
from tinyroute.navigation.history import History, MemoryHistory
from tinyroute.navigation.state import NavigationState, ViewSnapshot
from tinyroute.routing.pattern import compile_pattern
from tinyroute.routing.registry import RouteRegistry
from tinyroute.routing.route import CompiledRoute, Handler, render_view

logger = logging.getLogger("tinyroute")


class Router:
    """A client-side navigation dispatcher.

    Usage::

        router = Router(RouterConfig(origin="https://example.com"))
        router.route("/", "home")
        router.route("/users/:id", "user")

        @router.handles("/logout", "logout")
        def logout(router, params):
            router.redirect("home")

        router.subscribe(lambda snap: print(snap.view, dict(snap.params)))
        router.start()
        router.load("/users/42")       # view "user", params {"id": "42"}
        router.reverse("user", {"id": "7"})  # "/users/7"

    Handlers receive the router and the extracted params. A route
    registered without a handler renders the view named after the route.
    """

    __slots__ = (
        "_bus",
        "_dispatches",
        "_disconnects",
        "_registry",
        "_sources",
        "_started",
        "_state",
        "config",
        "history",
        "links",
    )

    def __init__(
        self,
        config: RouterConfig | None = None,
        *,
        history: History | None = None,
        sources: Iterable[NavigationEventSource] = (),
    ) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self.history: History = history if history is not None else MemoryHistory()
        self._registry = RouteRegistry(warn_duplicates=self.config.warn_duplicate_names)
        self._state = NavigationState()
        self._bus = SnapshotBus()
        self._sources: list[NavigationEventSource] = list(sources)
        self._disconnects: list[Disconnect] = []
        self._dispatches = 0
        self._started = False

        # Created by start() when config.intercept_links is set
        self.links: LinkInterceptor | None = None

    # -- Route registration --

    def route(self, pattern: str, name: str, handler: Handler | None = None) -> CompiledRoute:
        """Register a route.

        Args:
            pattern: Path template. Use ``:param`` or ``{param}`` for
                named segments.
            name: Route name for ``reverse()``. Also the view rendered
                when no handler is given.
            handler: Optional ``handler(router, params)`` for routes that
                need more than selecting a view.

        Raises ``ConfigurationError`` for a malformed pattern, and
        ``RuntimeError`` once the router has started.
        """
        if not name or not isinstance(name, str):
            msg = f"Route {pattern!r} needs a non-empty string name, got {name!r}."
            raise ConfigurationError(msg)
        if handler is not None and not callable(handler):
            msg = f"Handler for route {name!r} must be callable, got {type(handler).__name__}."
            raise ConfigurationError(msg)

        self._debug("adding route: %s", pattern)
        route = CompiledRoute(
            pattern=pattern,
            name=name,
            compiled=compile_pattern(pattern),
            handler=handler if handler is not None else render_view(name),
            explicit_handler=handler is not None,
        )
        self._registry.add(route)
        return route

    def handles(self, pattern: str, name: str) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator."""

        def decorator(func: Handler) -> Handler:
            self.route(pattern, name, func)
            return func

        return decorator

    @property
    def routes(self) -> tuple[CompiledRoute, ...]:
        """All registered routes, in match order."""
        return self._registry.routes

    @property
    def registry(self) -> RouteRegistry:
        return self._registry

    # -- Lifecycle --

    def connect(self, source: NavigationEventSource) -> Disconnect:
        """Let *source* trigger navigation. Returns a disconnect function."""
        disconnect = source.connect(self.load)
        self._disconnects.append(disconnect)
        return disconnect

    def start(self) -> None:
        """Freeze the route table, connect event sources, load the current location."""
        if self._started:
            msg = "Router has already been started."
            raise RuntimeError(msg)
        self._debug("initializing")
        self._registry.freeze()
        self._started = True

        if self.config.intercept_links:
            self.links = LinkInterceptor(self.config.origin)
            self.connect(self.links)
        for source in self._sources:
            self.connect(source)

        self.load(self.history.location)

    def stop(self) -> None:
        """Disconnect every event source. The route table stays frozen."""
        while self._disconnects:
            self._disconnects.pop()()

    @property
    def started(self) -> bool:
        return self._started

    # -- Dispatch --

    def load(self, path: str) -> None:
        """Dispatch *path* to the first matching route.

        Pushes *path* onto the history unless it is already the current
        location. When nothing matches, the not-found view is selected.
        Subscribers are notified once the handler returns.
        """
        self._debug("loading path: %s", path)
        if self.history.location != path:
            self.history.push(path)

        self._dispatches += 1
        dispatch = self._dispatches

        match = self._registry.match(path, trace=self.config.debug)
        if match is None:
            self._state.update(path, None, {})
            self.render(self.config.not_found_view)
        else:
            self._state.update(path, match.route, match.params)
            match.route.handler(self, dict(match.params))

        # A handler that navigated has already published its own dispatch
        if dispatch == self._dispatches:
            self._bus.publish(self._state.snapshot())

    def render(self, view: str) -> None:
        """Select *view* for the current dispatch."""
        self._debug("rendering view: %s", view)
        self._state.view = view

    # -- Reverse URL generation --

    def build_url(self, name: str, params: Mapping[str, Any] | None = None) -> str:
        """Generate the path for route *name*.

        Raises ``UnknownRouteError`` or ``MissingParameterError``.
        """
        return self._registry.get(name).build(params or {})

    def reverse(self, name: str, params: Mapping[str, Any] | None = None) -> str | None:
        """Generate the path for route *name*, or ``None`` if that fails.

        Failures (unknown name, missing parameter) are logged, not raised.
        """
        try:
            return self.build_url(name, params)
        except ReverseError as exc:
            logger.error("%s", exc)
            return None

    def redirect(self, name: str, params: Mapping[str, Any] | None = None) -> bool:
        """Navigate to route *name*. Returns ``False`` if no navigation happened."""
        path = self.reverse(name, params)
        if path is None:
            return False
        self._debug("redirecting to: %s", path)
        self.load(path)
        return True

    def url_for(self, name: str, **params: Any) -> str:
        """Template-friendly ``reverse()``: returns ``""`` on failure."""
        return self.reverse(name, params) or ""

    # -- Outbound state --

    def subscribe(self, callback: Subscriber) -> Disconnect:
        """Call *callback* with a ``ViewSnapshot`` after every dispatch."""
        return self._bus.subscribe(callback)

    @property
    def snapshot(self) -> ViewSnapshot:
        return self._state.snapshot()

    @property
    def view(self) -> str | None:
        return self._state.view

    @property
    def params(self) -> dict[str, str]:
        return dict(self._state.params)

    @property
    def current_path(self) -> str | None:
        return self._state.path

    @property
    def current_route(self) -> CompiledRoute | None:
        return self._state.route

    # -- Internal --

    def _debug(self, msg: str, *args: Any) -> None:
        if self.config.debug:
            logger.debug(msg, *args)
