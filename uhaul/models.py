"""Data models for the relocation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uhaul.graph.graph_models import DependencyGraph

DEFAULT_PREFIX = "/opt/uhaul"
DEFAULT_MAX_DEPTH = 256
MAX_DEPTH_LIMIT = 512  # one interpreter frame per level


@dataclass
class RelocateConfig:
    """Configuration for a relocation run."""
    binary: str = ""
    prefix: str = DEFAULT_PREFIX
    output_dir: Path = field(default_factory=lambda: Path("out"))
    clean: bool = True
    exclude: list[str] = field(default_factory=list)  # base-name globs
    max_depth: int = DEFAULT_MAX_DEPTH
    ldd: str = "ldd"
    patchelf: str = "patchelf"


@dataclass
class BundleLayout:
    """Result from the copy stage."""
    root: Path
    bin_dir: Path
    lib_dir: Path
    binary: Path | None = None
    libraries: list[Path] = field(default_factory=list)


@dataclass
class RelocationResult:
    """Result from a full relocation run."""
    graph: DependencyGraph
    root: Path
    closure: set[Path] = field(default_factory=set)
    layout: BundleLayout | None = None
    cycles: list[list[Path]] = field(default_factory=list)
    search_paths: dict[Path, str] = field(default_factory=dict)  # bundled file -> RPATH
