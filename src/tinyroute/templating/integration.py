"""Kida environment binding.

Registers three template globals backed by a Router:

- ``router_view()`` — the view selected by the last dispatch
- ``router_params()`` — the params extracted by the last dispatch
- ``url_for(name, **params)`` — reverse URL generation (``""`` on failure)

The helpers read the router at render time, so a template rendered
after each dispatch always sees the current snapshot.
"""

from typing import Any

from kida import Environment

from tinyroute.router import Router


def bind_router(env: Environment, router: Router) -> Environment:
    """Register the router helpers as globals on *env*. Returns *env*."""

    def router_view() -> str | None:
        return router.view

    def router_params() -> dict[str, str]:
        return router.params

    env.add_global("router_view", router_view)
    env.add_global("router_params", router_params)
    env.add_global("url_for", router.url_for)
    return env


def create_environment(router: Router, **options: Any) -> Environment:
    """Create a kida Environment with the router helpers bound.

    Keyword arguments are passed to ``kida.Environment`` unchanged
    (``loader``, ``autoescape``, ...).
    """
    return bind_router(Environment(**options), router)
