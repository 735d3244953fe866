"""Tests for the path-keyed dependency graph."""

from pathlib import Path

import pytest

from uhaul.errors import EdgeExistsError, VertexNotFoundError
from uhaul.graph import DependencyGraph, vertex_key


class TestVertices:
    def test_add_vertex_is_idempotent(self):
        graph = DependencyGraph()
        first, existed = graph.add_vertex("/usr/lib/libfoo.so")
        assert existed is False
        second, existed = graph.add_vertex("/usr/lib/libfoo.so")
        assert existed is True
        assert first == second
        assert len(graph) == 1

    def test_equivalent_spellings_share_a_vertex(self):
        graph = DependencyGraph()
        a, _ = graph.add_vertex("/usr/lib/../lib/libfoo.so")
        b, existed = graph.add_vertex(Path("/usr/lib/libfoo.so"))
        assert a == b == Path("/usr/lib/libfoo.so")
        assert existed is True
        assert len(graph) == 1

    def test_vertex_identity_is_a_path(self):
        graph = DependencyGraph()
        vertex, _ = graph.add_vertex("/lib/libc.so.6")
        assert isinstance(vertex, Path)
        assert vertex.name == "libc.so.6"

    def test_relative_paths_are_made_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert vertex_key("libfoo.so") == tmp_path.resolve() / "libfoo.so"

    def test_contains(self):
        graph = DependencyGraph()
        graph.add_vertex("/a")
        assert "/a" in graph
        assert Path("/b") not in graph
        assert 42 not in graph


class TestEdges:
    def test_add_edge(self):
        graph = DependencyGraph()
        graph.add_vertex("/bin/app")
        graph.add_vertex("/lib/libfoo.so")
        edge = graph.add_edge("/bin/app", "/lib/libfoo.so")
        assert edge.source == Path("/bin/app")
        assert graph.has_edge("/bin/app", "/lib/libfoo.so")
        assert not graph.has_edge("/lib/libfoo.so", "/bin/app")
        assert graph.dependencies("/bin/app") == [Path("/lib/libfoo.so")]
        assert graph.dependents("/lib/libfoo.so") == [Path("/bin/app")]

    def test_duplicate_edge_rejected(self):
        graph = DependencyGraph()
        graph.add_vertex("/a")
        graph.add_vertex("/b")
        graph.add_edge("/a", "/b")
        with pytest.raises(EdgeExistsError):
            graph.add_edge("/a", "/b")
        assert len(graph.edges) == 1

    def test_edge_to_unknown_vertex(self):
        graph = DependencyGraph()
        graph.add_vertex("/a")
        with pytest.raises(VertexNotFoundError):
            graph.add_edge("/a", "/missing")


def _graph(*edges):
    graph = DependencyGraph()
    for src, dst in edges:
        graph.add_vertex(src)
        graph.add_vertex(dst)
        graph.add_edge(src, dst)
    return graph


class TestDescendants:
    def test_no_dependencies(self):
        graph = DependencyGraph()
        graph.add_vertex("/bin/app")
        assert graph.descendants("/bin/app") == set()

    def test_chain(self):
        graph = _graph(("/app", "/libfoo.so"), ("/libfoo.so", "/libbar.so"))
        assert graph.descendants("/app") == {Path("/libfoo.so"), Path("/libbar.so")}
        assert graph.descendants("/libbar.so") == set()

    def test_diamond_has_single_shared_vertex(self):
        graph = _graph(
            ("/app", "/libA.so"), ("/app", "/libB.so"),
            ("/libA.so", "/libC.so"), ("/libB.so", "/libC.so"),
        )
        closure = graph.descendants("/app")
        assert closure == {Path("/libA.so"), Path("/libB.so"), Path("/libC.so")}
        assert len(graph) == 4

    def test_cycle_back_to_root_includes_root(self):
        graph = _graph(("/app", "/liba.so"), ("/liba.so", "/app"))
        assert graph.descendants("/app") == {Path("/app"), Path("/liba.so")}

    def test_unknown_vertex(self):
        with pytest.raises(VertexNotFoundError):
            DependencyGraph().descendants("/nope")


class TestCycles:
    def test_acyclic(self):
        graph = _graph(("/a", "/b"), ("/b", "/c"), ("/a", "/c"))
        assert graph.detect_cycles() == []

    def test_simple_cycle(self):
        graph = _graph(("/a", "/b"), ("/b", "/c"), ("/c", "/b"))
        cycles = graph.detect_cycles()
        assert cycles == [[Path("/b"), Path("/c"), Path("/b")]]


class TestSummary:
    def test_summary_lists_vertices_and_edges(self):
        graph = _graph(("/app", "/libfoo.so"))
        text = graph.summary()
        assert text.splitlines()[0] == "Vertices: 2 - Edges: 1"
        assert "  /app -> /libfoo.so" in text
