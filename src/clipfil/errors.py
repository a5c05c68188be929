from __future__ import annotations

from pathlib import Path
from typing import Optional

from clipfil.io.fs_names import display_path


class ClipfilError(Exception):
    """Base app error."""


class ConfigError(ClipfilError):
    pass


class StagingError(ClipfilError):
    pass


class CollectError(ClipfilError):
    """
    Terminal traversal error. Carries the failing path and the underlying
    OS / decode error so the CLI can report both.
    """

    def __init__(self, path: Path | str, cause: Optional[BaseException | str] = None) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.cause is None:
            return display_path(self.path)
        return f"{display_path(self.path)}: {self.cause}"


class ListingError(CollectError):
    pass


class FileAccessError(CollectError):
    pass


class DecodeError(CollectError):
    pass
