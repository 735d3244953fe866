"""External tool adapters."""

from uhaul.tools.base import DependencyLister, SearchPathPatcher
from uhaul.tools.ldd import LddLister, parse_ldd_output
from uhaul.tools.patchelf import PatchelfPatcher

__all__ = [
    "DependencyLister",
    "SearchPathPatcher",
    "LddLister",
    "PatchelfPatcher",
    "parse_ldd_output",
]
