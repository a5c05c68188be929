from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from clipfil.io.fs_names import display_path

DEFAULT_HEADER_TEMPLATE = "File: {path}"


class FilePolicy(str, Enum):
    ABORT = "abort"
    SKIP = "skip"


@dataclass(frozen=True)
class CollectedFile:
    path: Path
    text: str           # full decoded text, never empty
    header: str

    @property
    def content(self) -> str:
        return f"{self.header}\n\n{self.text}"


@dataclass(frozen=True)
class CollectOptions:
    sort_children: bool = False
    on_binary_file: FilePolicy = FilePolicy.ABORT
    on_unreadable_file: FilePolicy = FilePolicy.ABORT
    header_template: str = DEFAULT_HEADER_TEMPLATE

    def header_for(self, path: Path) -> str:
        return self.header_template.format(path=display_path(path))
