"""Error hierarchy for uhaul. Every failure aborts the run."""

from __future__ import annotations


class UhaulError(Exception):
    """Base class for all uhaul errors."""


class BinaryNotFoundError(UhaulError, LookupError):
    """The target binary is neither on disk nor on PATH."""


class DependencyListError(UhaulError):
    """The dependency lister could not enumerate a file's dependencies."""


class DependencyDepthError(DependencyListError):
    """Dependency chain deeper than the configured limit."""


class MissingFileError(UhaulError, FileNotFoundError):
    """A discovered dependency does not exist on disk."""


class RelocationError(UhaulError, OSError):
    """Creating, cleaning or copying into the output tree failed."""


class PatchError(UhaulError):
    """The search-path patcher reported a failure."""


class GraphError(UhaulError):
    pass


class VertexNotFoundError(GraphError, KeyError):
    def __str__(self) -> str:
        return Exception.__str__(self)


class EdgeExistsError(GraphError):
    pass
