"""Declarative route files.

A route directory holds YAML files, each a list of route entries::

    - path: /users/{id}
      name: users.show
      controller: myapp.controllers:UserController
      method: show
      verb: GET
      auth: true

A mapping of ``name: entry`` is accepted too; the key is used as the
route name when the entry doesn't set one. Files are read in sorted
order so the resulting table order is stable across platforms.
"""

import enum
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from waymark.config import RouterConfig
from waymark.errors import DiscoveryError, InvalidRouteError
from waymark.routing.route import RouteDescriptor
from waymark.routing.table import RouteTable

logger = logging.getLogger("waymark.discovery")


class ProblemKind(enum.Enum):
    MALFORMED = "malformed"
    INVALID = "invalid"


@dataclass(frozen=True, slots=True)
class DiscoveryProblem:
    """One file or entry that could not be turned into a route."""

    kind: ProblemKind
    source: Path
    detail: str
    entry: Any = None

    def __str__(self) -> str:
        return f"{self.source}: {self.kind.value}: {self.detail}"


@dataclass(frozen=True, slots=True)
class DiscoveryResult:
    """Descriptors found, in order, plus everything that was rejected."""

    descriptors: tuple[RouteDescriptor, ...] = ()
    problems: tuple[DiscoveryProblem, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.problems


def load_routes(
    directory: str | Path | None = None,
    config: RouterConfig | None = None,
) -> DiscoveryResult:
    """Load route descriptors from the YAML files in *directory*.

    Defaults to ``config.routes_dir``. Only files whose suffix is listed
    in ``config.route_suffixes`` are read; subdirectories are ignored.

    Raises ``DiscoveryError`` if the directory is missing or unreadable.
    Malformed files and invalid entries are reported in
    ``DiscoveryResult.problems`` and do not stop the scan.
    """
    config = config or RouterConfig()
    root = Path(directory if directory is not None else config.routes_dir)

    if not root.is_dir():
        msg = f"Route directory not found: {root}"
        raise DiscoveryError(msg)

    try:
        files = sorted(
            p for p in root.iterdir() if p.is_file() and p.suffix in config.route_suffixes
        )
    except OSError as exc:
        msg = f"Cannot read route directory {root}: {exc}"
        raise DiscoveryError(msg) from exc

    descriptors: list[RouteDescriptor] = []
    problems: list[DiscoveryProblem] = []
    for path in files:
        found, file_problems = _load_file(path, config)
        descriptors.extend(found)
        problems.extend(file_problems)

    for problem in problems:
        logger.warning("%s", problem)
    logger.debug("Loaded %d routes from %s", len(descriptors), root)
    return DiscoveryResult(tuple(descriptors), tuple(problems))


def load_table(
    directory: str | Path | None = None,
    config: RouterConfig | None = None,
) -> RouteTable:
    """Load route files and compile them into a ``RouteTable``."""
    result = load_routes(directory, config)
    return RouteTable.from_descriptors(result.descriptors)


def _load_file(
    path: Path,
    config: RouterConfig,
) -> tuple[list[RouteDescriptor], list[DiscoveryProblem]]:
    try:
        with path.open(encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except OSError as exc:
        msg = f"Cannot read route file {path}: {exc}"
        raise DiscoveryError(msg) from exc
    except (yaml.YAMLError, UnicodeDecodeError) as exc:
        return [], [DiscoveryProblem(ProblemKind.MALFORMED, path, str(exc))]

    if data is None:
        return [], []

    entries = _entries(data)
    if entries is None:
        detail = f"expected a list or mapping of routes, got {type(data).__name__}"
        return [], [DiscoveryProblem(ProblemKind.MALFORMED, path, detail)]

    descriptors: list[RouteDescriptor] = []
    problems: list[DiscoveryProblem] = []
    for entry in entries:
        try:
            descriptors.append(
                RouteDescriptor.from_mapping(entry, auth_default=config.auth_default)
            )
        except InvalidRouteError as exc:
            problems.append(DiscoveryProblem(ProblemKind.INVALID, path, str(exc), entry))
    return descriptors, problems


def _entries(data: Any) -> list[Any] | None:
    if isinstance(data, list):
        return data
    if isinstance(data, Mapping):
        entries: list[Any] = []
        for key, value in data.items():
            if isinstance(value, Mapping) and "name" not in value:
                value = {**value, "name": str(key)}
            entries.append(value)
        return entries
    return None
