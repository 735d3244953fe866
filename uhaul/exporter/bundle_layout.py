"""Lay out the relocated bundle: <out>/<prefix>/bin and <out>/<prefix>/lib."""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterable
from pathlib import Path

from uhaul.errors import RelocationError
from uhaul.models import BundleLayout

logger = logging.getLogger(__name__)

_COPY_MODE = 0o755


def layout(
    output_dir: Path,
    prefix: str,
    binary: Path,
    closure: Iterable[Path],
    clean: bool = False,
) -> BundleLayout:
    """Copy ``binary`` into bin/ and every member of ``closure`` into lib/.

    Libraries are copied in sorted path order, each exactly once. Fails
    before touching the output tree if two libraries share a base name, or
    if ``clean`` would delete a file that is about to be copied.
    """
    libraries = sorted(set(closure))
    _check_name_collisions(libraries)

    output_dir = Path(os.path.abspath(output_dir))
    if clean:
        _check_sources_outside(output_dir, [binary, *libraries])
    root = output_dir / prefix.lstrip("/")
    bin_dir = root / "bin"
    lib_dir = root / "lib"

    try:
        make_directories(output_dir)
        if clean:
            logger.info("Cleaning %s", output_dir)
            clean_directory(output_dir)
        make_directories(bin_dir)
        make_directories(lib_dir)

        result = BundleLayout(root=root, bin_dir=bin_dir, lib_dir=lib_dir)
        result.binary = bin_dir / binary.name
        copy_file(binary, result.binary, executable=True)

        for lib in libraries:
            dst = lib_dir / lib.name
            copy_file(lib, dst, executable=False)
            result.libraries.append(dst)
    except RelocationError:
        raise
    except OSError as e:
        raise RelocationError(f"relocation failed: {e}") from e

    return result


def copy_file(src: Path, dst: Path, executable: bool) -> None:
    """Read ``src`` fully and write it to ``dst`` with create-mode 0755."""
    logger.info("Copying %s -> %s", src, dst)
    data = src.read_bytes()
    fd = os.open(dst, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _COPY_MODE)
    with os.fdopen(fd, "wb") as fh:
        fh.write(data)
    if executable:
        os.chmod(dst, _COPY_MODE)


def make_directories(path: Path) -> None:
    path.mkdir(mode=_COPY_MODE, parents=True, exist_ok=True)


def clean_directory(path: Path) -> None:
    """Delete all the children of ``path``, leaving ``path`` itself."""
    for child in path.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()


def _check_name_collisions(libraries: list[Path]) -> None:
    by_name: dict[str, list[Path]] = {}
    for lib in libraries:
        by_name.setdefault(lib.name, []).append(lib)
    clashes = {name: paths for name, paths in by_name.items() if len(paths) > 1}
    if clashes:
        detail = "; ".join(
            f"{name}: {', '.join(str(p) for p in paths)}"
            for name, paths in sorted(clashes.items())
        )
        raise RelocationError(f"libraries share a file name in lib/: {detail}")


def _check_sources_outside(output_dir: Path, sources: list[Path]) -> None:
    """Refuse to clean a directory that holds files still to be copied."""
    real_out = Path(os.path.realpath(output_dir))
    inside = [src for src in sources if Path(os.path.realpath(src)).is_relative_to(real_out)]
    if inside:
        raise RelocationError(
            f"refusing to clean {output_dir}: it contains files to bundle: "
            + ", ".join(str(p) for p in inside)
        )
