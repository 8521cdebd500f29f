"""tinyroute — named, reversible routes for client-side navigation.

Maps paths to named routes, dispatches to the first match, and builds
paths back from route names.

Basic usage::

    from tinyroute import Router

    router = Router()
    router.route("/", "home")
    router.route("/users/:id", "user")

    router.start()
    router.load("/users/42")
    router.view     # "user"
    router.params   # {"id": "42"}
    router.reverse("user", {"id": "7"})  # "/users/7"
"""

__version__ = "0.1.0"
__all__ = [
    "CompiledRoute",
    "ConfigurationError",
    "History",
    "LinkInterceptor",
    "MemoryHistory",
    "MissingParameterError",
    "NavigationEventSource",
    "ReverseError",
    "Router",
    "RouterConfig",
    "TinyRouteError",
    "UnknownRouteError",
    "ViewSnapshot",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import tinyroute`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from tinyroute.router import Router

        return Router

    if name == "RouterConfig":
        from tinyroute.config import RouterConfig

        return RouterConfig

    if name == "CompiledRoute":
        from tinyroute.routing.route import CompiledRoute

        return CompiledRoute

    if name in ("History", "MemoryHistory"):
        from tinyroute.navigation import history as _history

        return getattr(_history, name)

    if name in ("LinkInterceptor", "NavigationEventSource"):
        from tinyroute.navigation import events as _events

        return getattr(_events, name)

    if name == "ViewSnapshot":
        from tinyroute.navigation.state import ViewSnapshot

        return ViewSnapshot

    if name in (
        "ConfigurationError",
        "MissingParameterError",
        "ReverseError",
        "TinyRouteError",
        "UnknownRouteError",
    ):
        from tinyroute import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
