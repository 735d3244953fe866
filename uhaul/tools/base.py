"""Abstract interfaces for the external tools uhaul drives."""

from __future__ import annotations

import abc
from pathlib import Path


class DependencyLister(abc.ABC):
    """Lists the *direct* shared-library dependencies of a file."""

    @abc.abstractmethod
    def list(self, path: Path) -> list[Path]:
        """Return absolute dependency paths in loader order.

        Raises DependencyListError when the file cannot be inspected.
        """


class SearchPathPatcher(abc.ABC):
    """Rewrites the runtime search path (RPATH) of a file in place."""

    @abc.abstractmethod
    def set_search_path(self, path: Path, search_path: str) -> None:
        """Raises PatchError on failure."""
