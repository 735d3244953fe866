"""Bundle layout and search-path rewriting."""

from uhaul.exporter.bundle_layout import clean_directory, copy_file, layout
from uhaul.exporter.rpath_rewriter import SearchPathRewriter, origin_relative

__all__ = ["SearchPathRewriter", "clean_directory", "copy_file", "layout", "origin_relative"]
