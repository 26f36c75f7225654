"""
Scratch directory for filesystem benchmarks.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Optional

from ..benchmark.base import ResourceUnavailableError
from .base import BaseResource


class ScratchDirectory(BaseResource):
    """
    Temporary directory, removed recursively on release.

    Cases create their own files inside it and delete them again;
    whatever they leave behind is removed with the directory.
    """

    name = "scratch"
    display_name = "Scratch directory"

    def __init__(self, parent: Optional[str] = None):
        """
        Args:
            parent: Directory to create the scratch directory in (default: system temp)
        """
        super().__init__()
        self.parent = parent

    def _acquire(self) -> Path:
        try:
            return Path(tempfile.mkdtemp(prefix="envbench_", dir=self.parent))
        except OSError as e:
            raise ResourceUnavailableError(f"Cannot create scratch directory: {e}")

    def _release(self, handle: Path) -> None:
        shutil.rmtree(handle, ignore_errors=True)
