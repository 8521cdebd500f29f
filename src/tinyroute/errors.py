"""tinyroute exception hierarchy.

Shared across the pattern compiler, the registry, and the Router so
every module raises and catches the same types.
"""


class TinyRouteError(Exception):
    """Base for all tinyroute-specific errors."""


class ConfigurationError(TinyRouteError):
    """Raised when a route definition is invalid.

    Surfaced by ``Router.route()`` at registration time, never during
    dispatch.
    """


class ReverseError(TinyRouteError):
    """A route name and parameters could not be turned into a path.

    ``Router.reverse()`` catches these, logs them, and returns ``None``.
    ``Router.build_url()`` lets them propagate.
    """

    def __init__(self, route_name: str, detail: str) -> None:
        super().__init__(detail)
        self.route_name = route_name
        self.detail = detail

    def __str__(self) -> str:
        return self.detail


class UnknownRouteError(ReverseError):
    """No route is registered under the requested name."""

    def __init__(self, route_name: str) -> None:
        super().__init__(
            route_name,
            f"cant build url for {route_name!r}, route doesn't exist",
        )


class MissingParameterError(ReverseError):
    """A parameter required by the route's pattern was not supplied."""

    def __init__(self, route_name: str, param: str) -> None:
        super().__init__(
            route_name,
            f"cant build url, missing param {param!r} for route {route_name!r}",
        )
        self.param = param
