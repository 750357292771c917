"""
Output of generated units.

A unit is written to a sibling temporary file first and then renamed over
its target, so a failed or interrupted run never leaves a truncated source
file in the output tree.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from ..config import OutputConfig, OutputMode
from ..errors import GenerationIOError

logger = logging.getLogger(__name__)


def _default_file_mode() -> int:
    """Mode a plain open() would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


class AtomicWriter:
    """Writes generated sources according to an OutputConfig."""

    def __init__(self, output_config: OutputConfig | None = None):
        self.output_config = output_config or OutputConfig()

    def write(self, path: Path, content: str) -> None:
        """Write one generated source file, creating its directory as needed.

        Args:
            path: Target file path
            content: Generated source text

        Raises:
            GenerationIOError: If the file exists in error mode, or on any OS error
        """
        path = Path(path)
        if self.output_config.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
            raise GenerationIOError("Output file already exists:", path)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            if self.output_config.atomic_write:
                self._replace(path, content)
            else:
                path.write_text(content, encoding="utf-8", newline="\n")
        except OSError as e:
            raise GenerationIOError("Failed to write file", path) from e
        logger.debug("Wrote %s", path)

    @staticmethod
    def _replace(path: Path, content: str) -> None:
        # The temporary file must live next to the target for the rename to be atomic
        fd, name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", text=True)
        staged = Path(name)
        try:
            with open(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
            # mkstemp creates owner-only files
            staged.chmod(_default_file_mode())
            staged.replace(path)
        except BaseException:
            staged.unlink(missing_ok=True)
            raise
