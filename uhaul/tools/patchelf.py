"""Search-path patcher backed by ``patchelf``."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from uhaul.errors import PatchError
from uhaul.tools.base import SearchPathPatcher

logger = logging.getLogger(__name__)


class PatchelfPatcher(SearchPathPatcher):
    def __init__(self, executable: str = "patchelf"):
        self.executable = executable

    def set_search_path(self, path: Path, search_path: str) -> None:
        cmd = [self.executable, "--set-rpath", search_path, str(path)]
        logger.info("Setting RPATH: %s", " ".join(cmd))
        try:
            subprocess.run(cmd, capture_output=True, text=True, check=True)
        except OSError as e:
            raise PatchError(f"cannot run {self.executable}: {e}") from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip() or f"exit {e.returncode}"
            raise PatchError(f"{self.executable} failed on {path}: {detail}") from e
