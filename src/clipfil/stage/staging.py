from __future__ import annotations

import errno
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from clipfil.errors import StagingError

logger = logging.getLogger("clipfil")

DEFAULT_PERSIST_PATH = Path("/tmp/clipfil_output.txt")


def discard(temp_path: Path) -> None:
    """Removes a staged file that will not be persisted. Already gone is fine."""
    try:
        temp_path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("[stage] could not remove temp file %s: %s", temp_path, e)


def write_temp_file(blob: str, directory: Optional[Path] = None) -> Path:
    """
    Writes `blob` + trailing newline to a named temp file that survives close.
    The caller owns the file afterwards (persist() or discard()).
    A failed write removes the partial file.
    """
    try:
        fd, name = tempfile.mkstemp(prefix="clipfil_", suffix=".txt", dir=directory)
    except OSError as e:
        raise StagingError(f"Failed to create temporary file: {e}") from e

    temp_path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(blob + "\n")
    except (OSError, UnicodeError) as e:
        discard(temp_path)
        raise StagingError(f"Failed to write temporary file {temp_path}: {e}") from e

    logger.info("[stage] temp file written path=%s chars=%s", temp_path, len(blob))
    return temp_path


def persist(temp_path: Path, destination: Path = DEFAULT_PERSIST_PATH) -> Path:
    """
    Moves the staged temp file to its fixed destination, replacing a previous
    output file. A directory at `destination` is an error, never a target folder.
    On failure the temp file is removed.
    """
    destination = Path(destination)
    try:
        if destination.is_dir():
            raise IsADirectoryError(errno.EISDIR, "destination is a directory", str(destination))
        destination.parent.mkdir(parents=True, exist_ok=True)
        try:
            os.replace(temp_path, destination)
        except OSError as e:
            if e.errno != errno.EXDEV:
                raise
            # temp dir on another filesystem: copy + delete
            shutil.move(str(temp_path), str(destination))
    except OSError as e:
        discard(temp_path)
        raise StagingError(f"Failed to persist temporary file {temp_path} -> {destination}: {e}") from e

    logger.info("[stage] persisted %s -> %s", temp_path, destination)
    return destination
