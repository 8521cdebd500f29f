"""``tinyroute routes`` — list registered routes in match order."""

import argparse

from tinyroute.cli._resolve import load_router
from tinyroute.routing.route import CompiledRoute


def _handler_name(route: CompiledRoute) -> str:
    if not route.explicit_handler:
        return f"render {route.name!r}"
    return getattr(route.handler, "__name__", str(route.handler))


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of NAME, PATTERN, PARAMS and HANDLER."""
    router = load_router(args.router)
    routes = router.routes
    if not routes:
        print("No routes registered.")
        return

    rows = [
        (route.name, route.pattern, ", ".join(route.param_keys) or "-", _handler_name(route))
        for route in routes
    ]

    max_name = max(max(len(r[0]) for r in rows), 4)  # "NAME" header
    max_pattern = max(max(len(r[1]) for r in rows), 7)  # "PATTERN" header
    max_params = max(max(len(r[2]) for r in rows), 6)  # "PARAMS" header

    fmt = f"{{:<{max_name}}}  {{:<{max_pattern}}}  {{:<{max_params}}}  {{}}"
    print(fmt.format("NAME", "PATTERN", "PARAMS", "HANDLER"))
    sep_len = max_name + max_pattern + max_params + 6 + max(len(r[3]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
