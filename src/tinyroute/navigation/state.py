"""Navigation state and the immutable snapshots published to the view layer."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tinyroute.routing.route import CompiledRoute


@dataclass(frozen=True, slots=True)
class ViewSnapshot:
    """What the view layer reads after a dispatch.

    Valid until the next dispatch replaces it.
    """

    view: str | None
    params: Mapping[str, str]
    path: str | None
    route_name: str | None = None


@dataclass(slots=True)
class NavigationState:
    """The router's current location. Overwritten on every dispatch.

    ``route`` is ``None`` when the last dispatch found no match, in which
    case ``params`` is empty.
    """

    path: str | None = None
    route: "CompiledRoute | None" = None
    params: dict[str, str] = field(default_factory=dict)
    view: str | None = None

    def update(self, path: str, route: "CompiledRoute | None", params: dict[str, str]) -> None:
        self.path = path
        self.route = route
        self.params = params
        self.view = None

    def snapshot(self) -> ViewSnapshot:
        return ViewSnapshot(
            view=self.view,
            params=MappingProxyType(dict(self.params)),
            path=self.path,
            route_name=self.route.name if self.route is not None else None,
        )
