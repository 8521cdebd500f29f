"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, no
string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(debug=True, not_found_view="missing")
    """

    # View selected when no route matches a path
    not_found_view: str = "not_found"

    # Log every dispatch step (loading, comparing, rendering) at DEBUG
    debug: bool = False

    # Link interception
    origin: str = "http://localhost"
    intercept_links: bool = True

    # Registration
    warn_duplicate_names: bool = True
