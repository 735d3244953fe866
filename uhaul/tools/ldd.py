"""Dependency lister backed by the system ``ldd``."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from uhaul.errors import DependencyListError
from uhaul.tools.base import DependencyLister

logger = logging.getLogger(__name__)

# Printed by glibc and musl ldd for files without a dynamic section.
_STATIC_MARKERS = ("not a dynamic executable", "statically linked")


def parse_ldd_output(output: str) -> list[str]:
    """Parse ldd output into dependency paths.

    Handles both ``libfoo.so.1 => /path/libfoo.so.1 (0x...)`` and the bare
    interpreter line ``/lib64/ld-linux-x86-64.so.2 (0x...)``. The vDSO has no
    backing file and is dropped. Raises DependencyListError for libraries the
    loader could not find.
    """
    deps: list[str] = []
    missing: list[str] = []
    for line in output.splitlines():
        parts = line.strip().split()
        if not parts:
            continue
        if len(parts) >= 2 and parts[1] == "=>":
            if len(parts) >= 4 and parts[2] == "not" and parts[3] == "found":
                missing.append(parts[0])
            elif len(parts) >= 3 and parts[2].startswith("/"):
                deps.append(parts[2])
        elif parts[0].startswith("/"):
            deps.append(parts[0])

    if missing:
        raise DependencyListError(f"libraries not found: {', '.join(missing)}")

    # ldd may list the interpreter twice
    return list(dict.fromkeys(deps))


class LddLister(DependencyLister):
    """Runs ``ldd`` on a file and parses the resolved library paths.

    ``ldd`` prints the whole load list, not only the DT_NEEDED entries, so
    every library the file ends up loading is reported as a direct
    dependency. The descendant closure is unaffected; the graph simply has
    extra edges from each file to its indirect dependencies.
    """

    def __init__(self, executable: str = "ldd"):
        self.executable = executable

    def list(self, path: Path) -> list[Path]:
        try:
            result = subprocess.run(
                [self.executable, str(path)],
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise DependencyListError(f"cannot run {self.executable}: {e}") from e

        combined = f"{result.stdout}\n{result.stderr}"
        if any(marker in combined for marker in _STATIC_MARKERS):
            logger.debug("%s is not dynamically linked", path)
            return []
        if result.returncode != 0:
            raise DependencyListError(
                f"{self.executable} failed on {path} "
                f"(exit {result.returncode}): {result.stderr.strip()}"
            )

        logger.debug("ldd %s:\n%s", path, result.stdout.rstrip())
        try:
            deps = parse_ldd_output(result.stdout)
        except DependencyListError as e:
            raise DependencyListError(f"{path}: {e}") from e
        for dep in deps:
            logger.info("Dynamic link %s -> %s", path, dep)
        return [Path(d) for d in deps]
