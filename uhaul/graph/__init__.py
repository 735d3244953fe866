"""Dependency graph and resolver."""

from uhaul.graph.graph_models import DependencyEdge, DependencyGraph, vertex_key
from uhaul.graph.resolver import DependencyResolver, resolve_dependencies

__all__ = [
    "DependencyEdge",
    "DependencyGraph",
    "DependencyResolver",
    "resolve_dependencies",
    "vertex_key",
]
