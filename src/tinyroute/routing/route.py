"""PathSegment, CompiledRoute and RouteMatch frozen dataclasses."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tinyroute.router import Router
    from tinyroute.routing.pattern import CompiledPattern

Handler = Callable[["Router", dict[str, str]], Any]


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Static:  ``/users``  (is_param=False)
    Param:   ``/:id`` or ``/{id}``  (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


def render_view(view: str) -> Handler:
    """Build the default handler: select the view named *view*."""

    def handler(router: "Router", params: dict[str, str]) -> None:
        router.render(view)

    handler.__name__ = f"render_view({view!r})"
    handler.__qualname__ = handler.__name__
    return handler


@dataclass(frozen=True, slots=True)
class CompiledRoute:
    """A registered route.

    Created by ``Router.route()``; the pattern is compiled exactly once,
    and the same object serves both matching and URL generation.
    """

    pattern: str
    name: str
    compiled: "CompiledPattern"
    handler: Handler
    explicit_handler: bool = True

    @property
    def param_keys(self) -> tuple[str, ...]:
        return self.compiled.param_keys

    def match(self, path: str) -> dict[str, str] | None:
        """Return the named params for *path*, or ``None`` if it doesn't match."""
        values = self.compiled.match(path)
        if values is None:
            return None
        return dict(zip(self.compiled.param_keys, values, strict=True))

    def build(self, params: Mapping[str, Any]) -> str:
        """Generate a concrete path. Raises ``MissingParameterError``."""
        return self.compiled.build(params, route_name=self.name)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: CompiledRoute
    params: dict[str, str]
