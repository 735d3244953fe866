"""Compute $ORIGIN-relative search paths and drive the patcher."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from uhaul.models import BundleLayout
from uhaul.tools.base import SearchPathPatcher

logger = logging.getLogger(__name__)

ORIGIN = "$ORIGIN"


def origin_relative(from_dir: Path, to_dir: Path) -> str:
    """Search path for ``to_dir`` as seen from a file in ``from_dir``."""
    rel = os.path.relpath(to_dir, from_dir)
    if rel == ".":
        return ORIGIN
    return f"{ORIGIN}/{Path(rel).as_posix()}"


class SearchPathRewriter:
    """Point the bundled binary at ../lib and each library at its own directory."""

    def __init__(self, patcher: SearchPathPatcher):
        self.patcher = patcher

    def patch_binary(self, bin_path: Path, lib_dir: Path | None = None) -> str:
        if lib_dir is None:
            lib_dir = bin_path.parent.parent / "lib"
        search_path = origin_relative(bin_path.parent, lib_dir)
        self.patcher.set_search_path(bin_path, search_path)
        return search_path

    def patch_library(self, lib_path: Path) -> str:
        self.patcher.set_search_path(lib_path, ORIGIN)
        return ORIGIN

    def patch_bundle(self, bundle: BundleLayout) -> dict[Path, str]:
        """Patch the binary first, then every library. Returns path -> search path."""
        patched: dict[Path, str] = {}
        if bundle.binary is not None:
            patched[bundle.binary] = self.patch_binary(bundle.binary, bundle.lib_dir)
        for lib in bundle.libraries:
            patched[lib] = self.patch_library(lib)
        logger.info("Patched %d file(s)", len(patched))
        return patched
