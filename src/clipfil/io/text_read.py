from __future__ import annotations

import stat
from pathlib import Path

from clipfil.errors import DecodeError, FileAccessError


def read_text_strict(path: Path) -> str:
    """
    Whole-file read + strict UTF-8 decode.
    - only regular files are opened; FIFOs, sockets and devices are
      FileAccessError (reading a FIFO would block forever)
    - bytes read as-is (no newline translation, BOM kept)
    - OSError -> FileAccessError
    - invalid UTF-8 -> DecodeError ("binary" in this tool's sense)
    """
    try:
        mode = path.stat().st_mode
        if not stat.S_ISREG(mode):
            raise FileAccessError(path, "not a regular file")
        raw = path.read_bytes()
    except OSError as e:
        raise FileAccessError(path, e) from e

    try:
        return raw.decode("utf-8", errors="strict")
    except UnicodeDecodeError as e:
        raise DecodeError(path, e) from e
