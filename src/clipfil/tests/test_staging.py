from __future__ import annotations

from pathlib import Path

import pyperclip
import pytest

from clipfil.errors import StagingError
from clipfil.stage import copy_to_clipboard, discard, persist, write_temp_file
from clipfil.ui_bridge import ProgressWriter


def test_temp_file_holds_blob_and_newline(tmp_path: Path):
    temp = write_temp_file("File: a\n\nhello", directory=tmp_path)

    assert temp.parent == tmp_path
    assert temp.name.startswith("clipfil_") and temp.suffix == ".txt"
    assert temp.read_bytes() == b"File: a\n\nhello\n"


def test_temp_file_in_missing_directory(tmp_path: Path):
    with pytest.raises(StagingError):
        write_temp_file("x", directory=tmp_path / "missing")


def test_persist_moves_and_replaces(tmp_path: Path):
    dest = tmp_path / "out" / "clipfil_output.txt"
    dest.parent.mkdir()
    dest.write_text("old", encoding="utf-8")
    temp = write_temp_file("new", directory=tmp_path)

    final = persist(temp, dest)

    assert final == dest
    assert dest.read_text(encoding="utf-8") == "new\n"
    assert not temp.exists()


def test_persist_creates_parent_dirs(tmp_path: Path):
    temp = write_temp_file("x", directory=tmp_path)
    dest = tmp_path / "a" / "b" / "out.txt"
    persist(temp, dest)
    assert dest.exists()


def test_persist_failure_is_staging_error(tmp_path: Path):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    temp = write_temp_file("x", directory=tmp_path)

    with pytest.raises(StagingError, match="Failed to persist"):
        persist(temp, blocker / "out.txt")


def test_clipboard_copy(monkeypatch):
    copied: list[str] = []
    monkeypatch.setattr(pyperclip, "copy", copied.append)

    assert copy_to_clipboard("blob") is True
    assert copied == ["blob"]


def test_clipboard_unavailable_is_not_fatal(monkeypatch):
    def _boom(_text):
        raise pyperclip.PyperclipException("no clipboard mechanism")

    monkeypatch.setattr(pyperclip, "copy", _boom)

    assert copy_to_clipboard("blob") is False


def test_progress_writer_lines(tmp_path: Path):
    import json

    w = ProgressWriter(tmp_path / "run" / "progress.jsonl")
    w.emit("collect", "start", "Collecting files", extra={"root": "r"})
    on_event = w.observer()
    on_event("visit", Path("r/a.txt"))
    on_event("read", Path("r/a.txt"))

    lines = [json.loads(x) for x in (tmp_path / "run" / "progress.jsonl").read_text(encoding="utf-8").splitlines()]
    assert [x["status"] for x in lines] == ["start", "progress", "progress"]
    assert lines[2]["message"] == "read"
    assert lines[2]["current"] == 2
    assert lines[2]["extra"] == {"path": str(Path("r/a.txt"))}


def test_failed_persist_removes_temp_file(tmp_path: Path):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    temp = write_temp_file("x", directory=tmp_path)

    with pytest.raises(StagingError):
        persist(temp, blocker / "out.txt")

    assert not temp.exists()


def test_persist_onto_directory_is_an_error(tmp_path: Path):
    dest_dir = tmp_path / "destdir"
    dest_dir.mkdir()
    temp = write_temp_file("x", directory=tmp_path)

    with pytest.raises(StagingError, match="directory"):
        persist(temp, dest_dir)

    assert list(dest_dir.iterdir()) == []
    assert not temp.exists()


def test_failed_write_leaves_no_partial_file(tmp_path: Path):
    stage_dir = tmp_path / "stage"
    stage_dir.mkdir()

    # lone surrogate cannot be encoded as UTF-8
    with pytest.raises(StagingError, match="Failed to write"):
        write_temp_file("bad \udcff name", directory=stage_dir)

    assert list(stage_dir.iterdir()) == []


def test_discard_tolerates_missing_file(tmp_path: Path):
    discard(tmp_path / "already-gone.txt")
