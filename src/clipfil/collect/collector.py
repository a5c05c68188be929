from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional

from clipfil.errors import DecodeError, FileAccessError, ListingError
from clipfil.io.fs_names import display_path
from clipfil.io.text_read import read_text_strict

from .models import CollectedFile, CollectOptions, FilePolicy

logger = logging.getLogger("clipfil")

# observer(event, path); event: visit|read|skip_empty|skip_binary|skip_unreadable
Observer = Callable[[str, Path], None]


@dataclass
class _Frame:
    directory: Path
    children: Iterator[Path]
    ident: tuple[int, int]


def _dir_ident(directory: Path) -> tuple[int, int]:
    try:
        st = directory.stat()
    except OSError as e:
        raise ListingError(directory, e) from e
    return (st.st_dev, st.st_ino)


def _list_children(directory: Path, opts: CollectOptions) -> list[Path]:
    # listing is eager: a directory either lists fully or aborts the walk
    try:
        with os.scandir(directory) as it:
            names = [entry.name for entry in it]
    except OSError as e:
        raise ListingError(directory, e) from e
    if opts.sort_children:
        names.sort()
    return [directory / name for name in names]


def _is_dir(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError as e:
        raise ListingError(path, e) from e


def _read_file(path: Path, opts: CollectOptions, notify: Observer) -> Optional[CollectedFile]:
    try:
        text = read_text_strict(path)
    except DecodeError as e:
        if opts.on_binary_file is FilePolicy.SKIP:
            logger.debug("Skipping binary file: %s (%s)", display_path(path), e.cause)
            notify("skip_binary", path)
            return None
        raise
    except FileAccessError as e:
        if opts.on_unreadable_file is FilePolicy.SKIP:
            logger.debug("Skipping unreadable file: %s (%s)", display_path(path), e.cause)
            notify("skip_unreadable", path)
            return None
        raise

    if not text:
        logger.debug("Skipping empty file: %s", display_path(path))
        notify("skip_empty", path)
        return None

    logger.debug("Reading file: %s (%s chars)", display_path(path), len(text))
    notify("read", path)
    return CollectedFile(path=path, text=text, header=opts.header_for(path))


def collect(
    root: Path | str,
    options: Optional[CollectOptions] = None,
    observer: Optional[Observer] = None,
) -> list[CollectedFile]:
    """
    Depth-first pre-order walk under `root`, returning every non-empty,
    UTF-8-decodable file as a CollectedFile, in visitation order.

    All-or-nothing: any ListingError / FileAccessError / DecodeError aborts
    the whole walk (unless the matching policy in `options` is SKIP) and
    nothing accumulated so far is returned.

    A root that exists but is not a directory yields [].
    """
    opts = options or CollectOptions()
    notify: Observer = observer or (lambda event, path: None)
    root_p = Path(root)

    root_ident = _dir_ident(root_p)  # missing root -> ListingError
    if not _is_dir(root_p):
        logger.debug("Root is not a directory, nothing to collect: %s", display_path(root_p))
        return []

    results: list[CollectedFile] = []
    stack: list[_Frame] = [_Frame(root_p, iter(_list_children(root_p, opts)), root_ident)]

    while stack:
        frame = stack[-1]
        child = next(frame.children, None)
        if child is None:
            stack.pop()
            continue

        logger.debug("Visiting path: %s", display_path(child))
        notify("visit", child)

        if _is_dir(child):
            ident = _dir_ident(child)
            ancestor = next((f for f in stack if f.ident == ident), None)
            if ancestor is not None:
                raise ListingError(child, f"symlink loop detected (points back to {display_path(ancestor.directory)})")
            stack.append(_Frame(child, iter(_list_children(child, opts)), ident))
            continue

        collected = _read_file(child, opts, notify)
        if collected is not None:
            results.append(collected)

    logger.debug("Collected %s files under %s", len(results), display_path(root_p))
    return results


def join_results(results: list[CollectedFile], separator: str = "\n\n") -> str:
    return separator.join(r.content for r in results)
