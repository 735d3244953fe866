"""uhaul: relocate ELF binaries and their shared libraries into a portable prefix."""

__version__ = "0.1.0"
