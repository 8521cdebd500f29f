"""Locate the Router a CLI command should inspect.

Targets look like ``myapp.routes`` or ``myapp.routes:admin_router``.
A bare module is searched for a ``router`` attribute first, then for a
``create_router()`` factory.
"""

import importlib
import sys

from tinyroute.router import Router

DEFAULT_ATTRIBUTES = ("router", "create_router")


def resolve_router(target: str) -> Router:
    """Return the Router named by *target*.

    A callable that is not itself a Router is treated as a factory and
    called with no arguments; whatever it raises propagates.

    Raises ``ModuleNotFoundError`` for an unknown module,
    ``AttributeError`` when none of the candidate attributes exist, and
    ``TypeError`` when the result is not a Router.
    """
    module_name, _, attribute = target.partition(":")
    module = importlib.import_module(module_name)
    candidates = (attribute,) if attribute else DEFAULT_ATTRIBUTES

    found = [getattr(module, name) for name in candidates if hasattr(module, name)]
    if not found:
        msg = f"module {module_name!r} defines no {' or '.join(candidates)}"
        raise AttributeError(msg)

    obj = found[0]
    if callable(obj) and not isinstance(obj, Router):
        obj = obj()
    if not isinstance(obj, Router):
        msg = f"{target!r} gave a {type(obj).__name__}, expected a tinyroute Router"
        raise TypeError(msg)
    return obj


def load_router(target: str) -> Router:
    """``resolve_router()`` for commands: lookup errors exit with status 1."""
    try:
        return resolve_router(target)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
