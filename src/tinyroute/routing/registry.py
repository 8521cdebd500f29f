"""Ordered route registry.

Routes are matched in registration order (first registered, first
matched) and looked up by name for URL generation. The registry is
mutable during setup and frozen when the router starts.
"""

import logging

from tinyroute.errors import UnknownRouteError
from tinyroute.routing.route import CompiledRoute, RouteMatch

logger = logging.getLogger("tinyroute.routing")


class RouteRegistry:
    """Ordered sequence of compiled routes plus a name index.

    Usage::

        registry = RouteRegistry()
        registry.add(route)
        registry.freeze()
        match = registry.match("/users/42")

    Registering a second route under an existing name repoints the name
    index at the new route. The earlier route stays in the sequence and
    can still match by path, but is no longer reachable by name.
    """

    __slots__ = ("_frozen", "_names", "_routes", "warn_duplicates")

    def __init__(self, *, warn_duplicates: bool = True) -> None:
        self._routes: list[CompiledRoute] = []
        self._names: dict[str, int] = {}
        self._frozen = False
        self.warn_duplicates = warn_duplicates

    def add(self, route: CompiledRoute) -> int:
        """Append *route* and index it by name. Returns its position."""
        if self._frozen:
            msg = "Cannot add routes after the router has started."
            raise RuntimeError(msg)

        position = len(self._routes)
        if route.name in self._names and self.warn_duplicates:
            previous = self._routes[self._names[route.name]]
            logger.warning(
                "route name %r registered twice (%s, then %s); reverse lookups use the latest",
                route.name,
                previous.pattern,
                route.pattern,
            )
        self._routes.append(route)
        self._names[route.name] = position
        return position

    def freeze(self) -> None:
        """Make the registry read-only. No more routes can be added."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def routes(self) -> tuple[CompiledRoute, ...]:
        """All registered routes, in match order."""
        return tuple(self._routes)

    @property
    def names(self) -> dict[str, int]:
        """A copy of the name -> position index."""
        return dict(self._names)

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def get(self, name: str) -> CompiledRoute:
        """Look up a route by name. Raises ``UnknownRouteError``."""
        try:
            position = self._names[name]
        except KeyError:
            raise UnknownRouteError(name) from None
        return self._routes[position]

    def match(self, path: str, *, trace: bool = False) -> RouteMatch | None:
        """Return the first route matching *path*, or ``None``.

        With *trace*, each comparison is logged at DEBUG.
        """
        for route in self._routes:
            if trace:
                logger.debug("comparing route: %s", route.pattern)
            params = route.match(path)
            if params is not None:
                return RouteMatch(route=route, params=params)
        return None
