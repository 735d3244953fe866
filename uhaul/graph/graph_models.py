"""Path-keyed dependency graph for shared-library resolution."""

from __future__ import annotations

import os
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path

from uhaul.errors import EdgeExistsError, VertexNotFoundError


def vertex_key(path: str | os.PathLike) -> Path:
    """Normalise a path into a vertex identity.

    The directory is resolved, so ``/lib/libc.so.6`` and ``/usr/lib/libc.so.6``
    on a merged-/usr host are one vertex. The base name is kept as given: a
    vertex keeps the name the loader asks for (``libc.so.6``) rather than the
    file a library symlink points at.
    """
    absolute = os.path.abspath(os.fspath(path))
    return Path(os.path.realpath(os.path.dirname(absolute))) / os.path.basename(absolute)


@dataclass(frozen=True)
class DependencyEdge:
    source: Path
    target: Path


@dataclass
class DependencyGraph:
    """Directed "depends-on" graph. Vertices are absolute paths."""
    vertices: list[Path] = field(default_factory=list)
    edges: list[DependencyEdge] = field(default_factory=list)
    forward: dict[Path, list[Path]] = field(default_factory=dict)  # source -> [targets]
    reverse: dict[Path, list[Path]] = field(default_factory=dict)  # target -> [sources]

    def __len__(self) -> int:
        return len(self.vertices)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        return vertex_key(path) in self.forward

    def has_vertex(self, path: str | os.PathLike) -> bool:
        return path in self

    def add_vertex(self, path: str | os.PathLike) -> tuple[Path, bool]:
        """Add ``path`` as a vertex. Returns ``(vertex, already_existed)``."""
        key = vertex_key(path)
        if key in self.forward:
            return key, True
        self.vertices.append(key)
        self.forward[key] = []
        self.reverse[key] = []
        return key, False

    def has_edge(self, source: str | os.PathLike, target: str | os.PathLike) -> bool:
        return vertex_key(target) in self.forward.get(vertex_key(source), [])

    def add_edge(self, source: str | os.PathLike, target: str | os.PathLike) -> DependencyEdge:
        src = self._require(source)
        dst = self._require(target)
        if dst in self.forward[src]:
            raise EdgeExistsError(f"edge already exists: {src} -> {dst}")
        edge = DependencyEdge(source=src, target=dst)
        self.edges.append(edge)
        self.forward[src].append(dst)
        self.reverse[dst].append(src)
        return edge

    def dependencies(self, path: str | os.PathLike) -> list[Path]:
        """Direct dependencies of ``path``, in discovery order."""
        return list(self.forward[self._require(path)])

    def dependents(self, path: str | os.PathLike) -> list[Path]:
        return list(self.reverse[self._require(path)])

    def descendants(self, path: str | os.PathLike) -> set[Path]:
        """BFS to find every vertex reachable from ``path``.

        The start vertex is only part of the result when a cycle leads back
        to it.
        """
        start = self._require(path)
        result: set[Path] = set()
        queue = deque(self.forward[start])
        while queue:
            current = queue.popleft()
            if current in result:
                continue
            result.add(current)
            queue.extend(n for n in self.forward[current] if n not in result)
        return result

    def detect_cycles(self) -> list[list[Path]]:
        """Detect all cycles in the graph using DFS."""
        cycles: list[list[Path]] = []
        visited: set[Path] = set()
        on_stack: set[Path] = set()
        path: list[Path] = []

        # Iterative so a long chain cannot hit the interpreter recursion limit.
        for start in self.vertices:
            if start in visited:
                continue
            visited.add(start)
            on_stack.add(start)
            path.append(start)
            stack = [iter(self.forward[start])]
            while stack:
                neighbor = next(stack[-1], None)
                if neighbor is None:
                    stack.pop()
                    on_stack.discard(path.pop())
                    continue
                if neighbor in on_stack:
                    idx = path.index(neighbor)
                    cycles.append(path[idx:] + [neighbor])
                elif neighbor not in visited:
                    visited.add(neighbor)
                    on_stack.add(neighbor)
                    path.append(neighbor)
                    stack.append(iter(self.forward[neighbor]))
        return cycles

    def summary(self) -> str:
        lines = [f"Vertices: {len(self.vertices)} - Edges: {len(self.edges)}", "Vertices:"]
        lines.extend(f"  {v}" for v in self.vertices)
        lines.append("Edges:")
        lines.extend(f"  {e.source} -> {e.target}" for e in self.edges)
        return "\n".join(lines)

    def _require(self, path: str | os.PathLike) -> Path:
        key = vertex_key(path)
        if key not in self.forward:
            raise VertexNotFoundError(f"unknown vertex: {key}")
        return key
