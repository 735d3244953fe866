"""Relocation pipeline: locate -> resolve -> closure -> copy -> patch."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Callable

from uhaul.errors import BinaryNotFoundError
from uhaul.exporter import SearchPathRewriter, layout
from uhaul.graph import DependencyGraph, resolve_dependencies
from uhaul.models import RelocateConfig, RelocationResult
from uhaul.tools import DependencyLister, LddLister, PatchelfPatcher, SearchPathPatcher

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


def locate_binary(name: str | os.PathLike) -> Path:
    """Return ``name`` if it exists on disk, otherwise look it up on PATH."""
    candidate = Path(name)
    if candidate.exists():
        return Path(os.path.abspath(candidate))
    found = shutil.which(os.fspath(name))
    if found is None:
        raise BinaryNotFoundError(f"{name}: not found on disk or in PATH")
    return Path(os.path.abspath(found))


def run_resolve(
    config: RelocateConfig,
    lister: DependencyLister | None = None,
) -> tuple[DependencyGraph, Path]:
    """Stage 1: Resolve the binary's dependency graph."""
    lister = lister or LddLister(config.ldd)
    binary = locate_binary(config.binary)
    return resolve_dependencies(
        binary,
        lister,
        exclude=config.exclude,
        max_depth=config.max_depth,
    )


def run_relocate(
    config: RelocateConfig,
    lister: DependencyLister | None = None,
    patcher: SearchPathPatcher | None = None,
    progress: ProgressCallback | None = None,
) -> RelocationResult:
    """Run the full relocation pipeline.

    Resolution finishes before anything is written, so a missing or
    unlistable dependency leaves the output directory untouched.
    """
    patcher = patcher or PatchelfPatcher(config.patchelf)

    # Stage 1: Resolve
    if progress:
        progress("Resolving", 0, 1)
    graph, root = run_resolve(config, lister)
    if progress:
        progress("Resolving", 1, 1)

    result = RelocationResult(graph=graph, root=root)
    result.cycles = graph.detect_cycles()
    for cycle in result.cycles:
        logger.warning("Dependency cycle: %s", " -> ".join(str(p) for p in cycle))

    # Stage 2: Closure
    closure = graph.descendants(root)
    if root in closure:
        logger.warning("%s depends on itself through a cycle; not copying it into lib/", root)
        closure.discard(root)
    result.closure = closure

    # Stage 3: Copy
    if progress:
        progress("Copying", 0, len(closure) + 1)
    result.layout = layout(
        config.output_dir,
        config.prefix,
        root,
        closure,
        clean=config.clean,
    )
    if progress:
        progress("Copying", len(closure) + 1, len(closure) + 1)

    # Stage 4: Patch
    if progress:
        progress("Patching", 0, 1)
    result.search_paths = SearchPathRewriter(patcher).patch_bundle(result.layout)
    if progress:
        progress("Patching", 1, 1)

    return result
