"""Route registry — the live table reference, swapped whole on reload."""

import logging
import threading
from collections.abc import Callable

from waymark.routing.route import NoMatch, RouteMatch
from waymark.routing.table import RouteTable

logger = logging.getLogger("waymark.routing")

TableLoader = Callable[[], RouteTable]


class RouteRegistry:
    """Holds the current ``RouteTable`` and publishes replacements.

    Readers take the table reference once per call and never lock; a
    request in flight keeps matching against the table it started with.
    Writers serialize on a lock so two reloads can't interleave.

    Usage::

        registry = RouteRegistry(loader=lambda: load_table("routes", config))
        registry.reload()
        result = registry.match("/users/42")
    """

    __slots__ = ("_loader", "_table", "_write_lock")

    def __init__(
        self,
        table: RouteTable | None = None,
        *,
        loader: TableLoader | None = None,
    ) -> None:
        self._table = table if table is not None else RouteTable()
        self._loader = loader
        self._write_lock = threading.Lock()

    @property
    def table(self) -> RouteTable:
        return self._table

    def publish(self, table: RouteTable) -> RouteTable:
        """Replace the live table. Returns the previous one."""
        if not isinstance(table, RouteTable):
            msg = f"Expected a RouteTable, got {type(table).__name__}"
            raise TypeError(msg)
        with self._write_lock:
            previous = self._table
            self._table = table
        logger.info("Published route table with %d routes", len(table))
        return previous

    def reload(self) -> RouteTable:
        """Rebuild the table with the loader and publish it.

        The old table stays live if the loader raises.
        """
        if self._loader is None:
            msg = "RouteRegistry has no loader to reload from"
            raise RuntimeError(msg)
        table = self._loader()
        self.publish(table)
        return table

    def match(self, path: str, *, verb: str | None = None) -> RouteMatch | NoMatch:
        return self._table.match(path, verb=verb)
