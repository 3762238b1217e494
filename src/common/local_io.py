"""Local file I/O utilities."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """
    Write bytes to `path` so readers only ever see the old or the new file.

    The data goes to a temporary file in the target directory, is fsynced,
    and then renamed over the target. The temporary file is removed if any
    step fails and the original error is re-raised.

    Args:
        path: Destination file
        data: Full file contents
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise

    logger.debug("Wrote %d bytes to %s", len(data), path)


def atomic_write_text(path: Path, text: str, encoding: str = "utf-8") -> None:
    """Text variant of atomic_write_bytes."""
    atomic_write_bytes(path, text.encode(encoding))
