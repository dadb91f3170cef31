"""Path template compilation.

Turns ``/users/{id}`` into an anchored regex with one named group per
placeholder. Literal text is escaped, so ``.`` or ``+`` in a template
only ever match themselves.
"""

import re
from dataclasses import dataclass

from waymark.errors import PatternError

# {name} where name is an ASCII identifier
PLACEHOLDER_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")

# One or more characters, never the path separator
SEGMENT_PATTERN = r"[^/]+"


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A compiled route template."""

    template: str
    regex: re.Pattern[str]
    placeholders: tuple[str, ...]

    def match(self, path: str) -> dict[str, str] | None:
        """Match the whole *path*. Returns the captures, or None."""
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        return {key: value for key, value in m.groupdict().items() if value is not None}


def compile_pattern(template: str) -> CompiledPattern:
    """Compile a route template into a ``CompiledPattern``.

    Examples::

        "/users"            -> ^/users$
        "/users/{id}"       -> ^/users/(?P<id>[^/]+)$
        "/v1.0/{a}-{b}"     -> ^/v1\\.0/(?P<a>[^/]+)\\-(?P<b>[^/]+)$

    Raises ``PatternError`` for stray braces, invalid placeholder names
    and duplicated placeholders.
    """
    if not isinstance(template, str):
        raise PatternError(repr(template), "template must be a string")

    parts: list[str] = []
    names: list[str] = []
    pos = 0
    for m in PLACEHOLDER_RE.finditer(template):
        literal = template[pos : m.start()]
        _check_literal(template, literal)
        parts.append(re.escape(literal))

        name = m.group(1)
        if name in names:
            raise PatternError(template, f"placeholder {{{name}}} is used twice")
        names.append(name)
        parts.append(f"(?P<{name}>{SEGMENT_PATTERN})")
        pos = m.end()

    tail = template[pos:]
    _check_literal(template, tail)
    parts.append(re.escape(tail))

    try:
        regex = re.compile("".join(parts))
    except re.error as exc:
        raise PatternError(template, str(exc)) from exc

    return CompiledPattern(template=template, regex=regex, placeholders=tuple(names))


def _check_literal(template: str, literal: str) -> None:
    if "{" in literal or "}" in literal:
        raise PatternError(template, "unbalanced brace or invalid placeholder name")
