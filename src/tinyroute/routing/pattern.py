"""Route pattern compiler.

Turns a path template such as ``/users/:id/posts/{slug}`` into an
anchored matcher, the ordered list of parameter names, and a reverse
builder that produces a concrete path from a parameter mapping.

Matching rules:

- Every named segment captures exactly one non-empty path segment.
- Patterns are fully anchored; prefixes never match.
- A candidate path may end with a single ``/`` (``/users/`` matches
  ``/users``). Built paths never carry a trailing slash.
- Query strings and fragments on the candidate path are ignored.
- Captured values are percent-decoded and built values percent-encoded,
  so ``match(build(params)) == params`` for non-empty string values.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, unquote

from tinyroute.errors import ConfigurationError, MissingParameterError
from tinyroute.routing.route import PathSegment

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")
_PARAM_VALUE = r"([^/]+)"


def _param_name(part: str, pattern: str) -> str | None:
    """Return the parameter name of *part*, or ``None`` for a literal segment."""
    if part.startswith("<") and part.endswith(">"):
        msg = (
            f"Route pattern {pattern!r} uses <param> syntax. "
            f"Use :param or {{param}} instead (e.g. ':{part[1:-1]}')."
        )
        raise ConfigurationError(msg)

    if part.startswith(":"):
        name = part[1:]
    elif part.startswith("{") and part.endswith("}"):
        name = part[1:-1]
    elif "{" in part or "}" in part:
        msg = f"Route pattern {pattern!r} has an unbalanced brace in segment {part!r}."
        raise ConfigurationError(msg)
    else:
        return None

    if not _IDENTIFIER.match(name):
        msg = (
            f"Route pattern {pattern!r} has an invalid parameter name {name!r}. "
            "Names must be identifiers (letters, digits, underscores)."
        )
        raise ConfigurationError(msg)
    return name


def parse_pattern(pattern: str) -> list[PathSegment]:
    """Parse a route pattern string into segments.

    Examples::

        "/"                -> []
        "/users"           -> [PathSegment("users")]
        "/users/:id"       -> [PathSegment("users"), PathSegment(":id", is_param=True, ...)]
        "/users/{id}/edit" -> [PathSegment("users"), PathSegment("{id}", ...), PathSegment("edit")]

    Raises ``ConfigurationError`` for malformed patterns, including a
    parameter name used twice.
    """
    if not pattern.startswith("/"):
        msg = f"Route pattern {pattern!r} must start with '/'."
        raise ConfigurationError(msg)
    if "//" in pattern:
        msg = f"Route pattern {pattern!r} contains an empty segment."
        raise ConfigurationError(msg)
    if "?" in pattern or "#" in pattern:
        msg = f"Route pattern {pattern!r} contains a query or fragment."
        raise ConfigurationError(msg)

    body = pattern.strip("/")
    if not body:
        return []

    segments: list[PathSegment] = []
    seen: set[str] = set()
    for part in body.split("/"):
        name = _param_name(part, pattern)
        if name is None:
            segments.append(PathSegment(value=part))
            continue
        if name in seen:
            msg = f"Route pattern {pattern!r} uses parameter {name!r} more than once."
            raise ConfigurationError(msg)
        seen.add(name)
        segments.append(PathSegment(value=part, is_param=True, param_name=name))
    return segments


def _strip_query(path: str) -> str:
    return path.split("#", 1)[0].split("?", 1)[0]


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A compiled route pattern: matcher, parameter keys, reverse builder."""

    pattern: str
    segments: tuple[PathSegment, ...]
    param_keys: tuple[str, ...]
    regex: re.Pattern[str]

    def match(self, path: str) -> tuple[str, ...] | None:
        """Match *path*, returning captured values in ``param_keys`` order."""
        m = self.regex.match(_strip_query(path))
        if m is None:
            return None
        return tuple(unquote(value) for value in m.groups())

    def build(self, params: Mapping[str, Any], *, route_name: str = "") -> str:
        """Substitute *params* into the pattern.

        Values are converted with ``str()`` and percent-encoded. A key that
        is absent, ``None``, or empty raises ``MissingParameterError``.
        Extra keys are ignored.
        """
        if not self.segments:
            return "/"

        parts: list[str] = []
        for seg in self.segments:
            if not seg.is_param:
                parts.append(seg.value)
                continue
            value = params.get(seg.param_name or "")
            if value is None or str(value) == "":
                raise MissingParameterError(route_name or self.pattern, seg.param_name or "")
            parts.append(quote(str(value), safe=""))
        return "/" + "/".join(parts)


def compile_pattern(pattern: str) -> CompiledPattern:
    """Compile *pattern* into a ``CompiledPattern``.

    Raises ``ConfigurationError`` if the pattern is malformed.
    """
    segments = parse_pattern(pattern)
    if not segments:
        regex = re.compile(r"\A/\Z")
    else:
        body = "".join(
            "/" + (_PARAM_VALUE if seg.is_param else re.escape(seg.value))
            for seg in segments
        )
        regex = re.compile(rf"\A{body}/?\Z")

    return CompiledPattern(
        pattern=pattern,
        segments=tuple(segments),
        param_keys=tuple(seg.param_name for seg in segments if seg.param_name),
        regex=regex,
    )
