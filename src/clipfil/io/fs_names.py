from __future__ import annotations

import os
from pathlib import Path


def display_path(path: Path | str) -> str:
    """
    Printable form of a filesystem path. Names that are not valid UTF-8
    come back from os.scandir with surrogate escapes; those bytes become U+FFFD.
    """
    return os.fsencode(path).decode("utf-8", errors="replace")
