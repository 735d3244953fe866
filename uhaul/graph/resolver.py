"""Dependency resolver: walks the dependency lister depth-first into a graph."""

from __future__ import annotations

import fnmatch
import logging
import os
from pathlib import Path

from uhaul.errors import DependencyDepthError, MissingFileError
from uhaul.graph.graph_models import DependencyGraph, vertex_key
from uhaul.models import DEFAULT_MAX_DEPTH
from uhaul.tools.base import DependencyLister

logger = logging.getLogger(__name__)


class DependencyResolver:
    """Build a dependency graph by recursively listing shared libraries.

    A vertex is expanded only the first time it is added; a library reached
    again through another path gets a new edge but is not listed again. Cycles
    are therefore kept in the graph, never followed twice.
    """

    def __init__(
        self,
        lister: DependencyLister,
        graph: DependencyGraph | None = None,
        exclude: list[str] | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.lister = lister
        self.graph = graph if graph is not None else DependencyGraph()
        self.exclude = list(exclude or [])
        self.max_depth = max_depth

    def resolve(self, path: str | os.PathLike) -> Path:
        """Resolve ``path`` and everything it loads. Returns the root vertex."""
        root = vertex_key(path)
        if not root.exists():
            raise MissingFileError(f"no such file: {root}")
        root, _ = self.graph.add_vertex(root)
        try:
            self._expand(root, depth=0)
        except RecursionError as e:
            raise DependencyDepthError(
                f"dependency chain under {root} exceeds the interpreter recursion limit"
            ) from e
        return root

    def _expand(self, vertex: Path, depth: int) -> None:
        if depth > self.max_depth:
            raise DependencyDepthError(
                f"dependency chain deeper than {self.max_depth} at {vertex}"
            )
        logger.info("Traverse %s", vertex)

        for dep in self.lister.list(vertex):
            if self._is_excluded(dep):
                logger.debug("Excluding %s", dep)
                continue

            key = vertex_key(dep)
            if key not in self.graph and not key.exists():
                raise MissingFileError(f"{vertex} depends on missing file {key}")

            dep_vertex, existed = self.graph.add_vertex(key)
            if not self.graph.has_edge(vertex, dep_vertex):
                logger.info("Edge %s -> %s", vertex, dep_vertex)
                self.graph.add_edge(vertex, dep_vertex)

            if not existed:
                self._expand(dep_vertex, depth + 1)

    def _is_excluded(self, path: Path) -> bool:
        name = path.name
        return any(fnmatch.fnmatch(name, pattern) for pattern in self.exclude)


def resolve_dependencies(
    binary: str | os.PathLike,
    lister: DependencyLister,
    graph: DependencyGraph | None = None,
    exclude: list[str] | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> tuple[DependencyGraph, Path]:
    """Resolve ``binary`` into ``graph`` (a new one if omitted)."""
    resolver = DependencyResolver(lister, graph=graph, exclude=exclude, max_depth=max_depth)
    root = resolver.resolve(binary)
    return resolver.graph, root
