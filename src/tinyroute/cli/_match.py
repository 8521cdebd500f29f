"""``tinyroute match`` and ``tinyroute reverse`` — try the router from a shell."""

import argparse
import sys

from tinyroute.cli._resolve import load_router
from tinyroute.errors import ReverseError


def parse_params(pairs: list[str]) -> dict[str, str]:
    """Turn ``["id=7", "slug=intro"]`` into ``{"id": "7", "slug": "intro"}``."""
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            msg = f"Expected key=value, got {pair!r}"
            raise ValueError(msg)
        params[key] = value
    return params


def run_match(args: argparse.Namespace) -> None:
    """Print the route that would handle ``args.path`` and its params."""
    router = load_router(args.router)
    match = router.registry.match(args.path)
    if match is None:
        print(f"No route matches {args.path!r}", file=sys.stderr)
        raise SystemExit(1)

    print(f"route:   {match.route.name}")
    print(f"pattern: {match.route.pattern}")
    for key, value in match.params.items():
        print(f"  {key} = {value}")


def run_reverse(args: argparse.Namespace) -> None:
    """Print the path generated for ``args.name`` and the given params."""
    router = load_router(args.router)
    try:
        params = parse_params(args.params)
        print(router.build_url(args.name, params))
    except (ReverseError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
