"""Compiled route table with first-match-wins lookup.

Tables are built once from an ordered sequence of descriptors and never
mutated afterwards. Entries that can't be used (not a descriptor,
malformed template) are excluded at build time and recorded in
``RouteTable.skipped``.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from waymark.errors import InvalidRouteError, PatternError
from waymark.routing.pattern import CompiledPattern, compile_pattern
from waymark.routing.route import NoMatch, RouteDescriptor, RouteMatch

logger = logging.getLogger("waymark.routing")


@dataclass(frozen=True, slots=True)
class CompiledRoute:
    """A descriptor paired with its compiled pattern."""

    route: RouteDescriptor
    pattern: CompiledPattern


@dataclass(frozen=True, slots=True)
class SkippedRoute:
    """An entry excluded from the table, with the reason."""

    index: int
    entry: Any
    reason: str


class RouteTable:
    """Immutable, ordered table of compiled routes.

    Usage::

        table = RouteTable.from_descriptors([
            RouteDescriptor(path="/users/{id}", name="users.show"),
        ])
        result = table.match("/users/42")

    Order is significant: the first route whose template matches wins,
    so more specific routes must be declared before general ones.
    """

    __slots__ = ("_by_name", "_entries", "_skipped")

    def __init__(
        self,
        entries: Iterable[CompiledRoute] = (),
        skipped: Iterable[SkippedRoute] = (),
    ) -> None:
        self._entries: tuple[CompiledRoute, ...] = tuple(entries)
        self._skipped: tuple[SkippedRoute, ...] = tuple(skipped)
        by_name: dict[str, RouteDescriptor] = {}
        for entry in self._entries:
            by_name.setdefault(entry.route.name, entry.route)
        self._by_name = by_name

    @classmethod
    def from_descriptors(
        cls,
        descriptors: Iterable[Any],
        skipped: Iterable[SkippedRoute] = (),
        indices: Iterable[int] | None = None,
    ) -> "RouteTable":
        """Compile *descriptors* in order, excluding unusable entries.

        Never raises for bad entries: each one is logged and recorded in
        ``skipped``, and compilation continues with the rest. *skipped*
        carries over exclusions made earlier (e.g. by a builder).

        *indices* gives each descriptor's position in the caller's
        original input, so ``SkippedRoute.index`` values from both stages
        refer to the same sequence. Defaults to the position in
        *descriptors*.
        """
        entries: list[CompiledRoute] = []
        excluded = list(skipped)
        descriptors = list(descriptors)
        positions = list(indices) if indices is not None else range(len(descriptors))
        for index, entry in zip(positions, descriptors, strict=True):
            if not isinstance(entry, RouteDescriptor):
                excluded.append(
                    SkippedRoute(index, entry, f"not a RouteDescriptor: {type(entry).__name__}")
                )
                logger.warning("Skipping route #%d: not a RouteDescriptor", index)
                continue
            try:
                pattern = compile_pattern(entry.path)
            except PatternError as exc:
                excluded.append(SkippedRoute(index, entry, exc.reason))
                logger.warning("Skipping route %r: %s", entry.name, exc)
                continue
            entries.append(CompiledRoute(route=entry, pattern=pattern))
        excluded.sort(key=lambda skip: skip.index)
        return cls(entries, excluded)

    @classmethod
    def from_mappings(
        cls,
        items: Iterable[Mapping[str, Any]],
        *,
        auth_default: bool = False,
    ) -> "RouteTable":
        """Build a table from raw route mappings, excluding invalid ones."""
        descriptors: list[RouteDescriptor] = []
        indices: list[int] = []
        skipped: list[SkippedRoute] = []
        for index, item in enumerate(items):
            try:
                descriptors.append(RouteDescriptor.from_mapping(item, auth_default=auth_default))
            except InvalidRouteError as exc:
                skipped.append(SkippedRoute(index, item, str(exc)))
                logger.warning("Skipping route #%d: %s", index, exc)
                continue
            indices.append(index)
        return cls.from_descriptors(descriptors, skipped, indices)

    # -- Lookup --

    def match(self, path: str, *, verb: str | None = None) -> RouteMatch | NoMatch:
        """Return the first route whose template matches *path*.

        When *verb* is given, routes declared for other verbs are passed
        over; their verbs are reported in ``NoMatch.allowed`` if nothing
        else matches.
        """
        wanted = verb.lower() if verb else None
        allowed: set[str] = set()
        for entry in self._entries:
            params = entry.pattern.match(path)
            if params is None:
                continue
            if wanted is not None and entry.route.verb != wanted:
                allowed.add(entry.route.verb)
                continue
            logger.debug("Matched %r -> %s", path, entry.route.name)
            return RouteMatch(route=entry.route, params=params)
        return NoMatch(path=path, allowed=frozenset(allowed))

    def get(self, name: str) -> RouteDescriptor | None:
        """Look up a route by name. The first declaration wins on duplicates."""
        return self._by_name.get(name)

    @property
    def routes(self) -> tuple[RouteDescriptor, ...]:
        return tuple(entry.route for entry in self._entries)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(entry.route.name for entry in self._entries)

    @property
    def skipped(self) -> tuple[SkippedRoute, ...]:
        return self._skipped

    def __iter__(self) -> Iterator[RouteDescriptor]:
        return (entry.route for entry in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"<RouteTable ({len(self._entries)} routes, {len(self._skipped)} skipped)>"


def match(table: Any, path: str, *, verb: str | None = None) -> RouteMatch | NoMatch:
    """Match *path* against *table*.

    *table* may be a ``RouteTable`` or any sequence of ``RouteDescriptor``
    (compiled on the fly). Anything else yields ``NoMatch``; this function
    never raises for bad table data.
    """
    if isinstance(table, RouteTable):
        return table.match(path, verb=verb)
    if isinstance(table, Sequence) and not isinstance(table, (str, bytes)):
        return RouteTable.from_descriptors(table).match(path, verb=verb)
    logger.debug("Cannot match against %s; not a route sequence", type(table).__name__)
    return NoMatch(path=path)
