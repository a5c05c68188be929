from __future__ import annotations
import functools
import sys
from pathlib import Path
from typing import Optional

import typer

from .collect import FilePolicy, collect, join_results
from .config import AppConfig, load_config
from .errors import CollectError, ConfigError, StagingError
from .io.fs_names import display_path
from .logging_run import setup_logger
from .stage import copy_to_clipboard, discard, persist, write_temp_file
from .ui_bridge import ProgressWriter

app = typer.Typer(add_completion=False)

# Exit codes
EC_OK = 0
EC_CONFIG = 2
EC_COLLECT = 10
EC_STAGE = 30
EC_INTERNAL = 40


def _policy(skip: Optional[bool]) -> Optional[FilePolicy]:
    if skip is None:
        return None
    return FilePolicy.SKIP if skip else FilePolicy.ABORT


def _main_guard(fn):
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except typer.Exit:
            raise
        except ConfigError as e:
            typer.echo(str(e), err=True)
            raise typer.Exit(code=EC_CONFIG)
        except CollectError as e:
            typer.echo(f"Error when reading directory: {e}", err=True)
            raise typer.Exit(code=EC_COLLECT)
        except StagingError as e:
            typer.echo(str(e), err=True)
            raise typer.Exit(code=EC_STAGE)
        except Exception as e:
            typer.echo(f"Internal error: {e}", err=True)
            raise typer.Exit(code=EC_INTERNAL)
    return wrapper


def _wait_for_enter() -> None:
    typer.echo("Press Enter to finish...")
    # EOF (closed stdin) counts as confirmation
    sys.stdin.readline()


@app.command()
@_main_guard
def main(
    path: Path = typer.Argument(..., help="Directory whose text files are collected"),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML config; built-in defaults when omitted"),
    sort: Optional[bool] = typer.Option(None, "--sort/--no-sort", help="Visit directory children in name order"),
    skip_binary: Optional[bool] = typer.Option(
        None, "--skip-binary/--abort-on-binary", help="Skip files that are not valid UTF-8 instead of failing"
    ),
    skip_unreadable: Optional[bool] = typer.Option(
        None, "--skip-unreadable/--abort-on-unreadable", help="Skip files that cannot be read instead of failing"
    ),
    copy: Optional[bool] = typer.Option(None, "--copy/--no-copy", help="Also copy the result to the clipboard"),
    persist_path: Optional[Path] = typer.Option(None, "--persist-path", help="Final location of the result file"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not wait for Enter before persisting"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Do not print the collected text"),
    progress: Optional[Path] = typer.Option(None, "--progress", help="Append JSON-lines progress events here"),
    log_file: Optional[Path] = typer.Option(None, "--log-file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every visited path"),
):
    """
    Collect every non-empty UTF-8 file under PATH into one text blob,
    stage it in a temp file and persist it once confirmed.
    """
    cfg: AppConfig = load_config(config).with_overrides(
        sort_children=sort,
        on_binary_file=_policy(skip_binary),
        on_unreadable_file=_policy(skip_unreadable),
        copy_to_clipboard=copy,
        persist_path=persist_path,
        progress_file=progress,
        log_file=log_file,
        echo_result=False if quiet else None,
        confirm=False if yes else None,
    )

    logger = setup_logger(cfg.log_file, verbose=verbose)
    progress_w = ProgressWriter(cfg.progress_file) if cfg.progress_file else None

    root = path
    if progress_w:
        progress_w.emit("collect", "start", "Collecting files", extra={"root": str(root)})
    logger.info("[collect] root=%s sort=%s", root, cfg.sort_children)

    try:
        results = collect(
            root,
            cfg.collect_options(),
            observer=progress_w.observer("collect") if progress_w else None,
        )
    except CollectError as e:
        if progress_w:
            progress_w.emit("collect", "error", str(e), extra={"path": display_path(e.path)})
        raise

    if progress_w:
        progress_w.emit("collect", "done", "Collection finished", current=len(results), total=len(results))
    logger.info("[collect] done files=%s", len(results))

    blob = join_results(results, cfg.separator)

    if cfg.echo_result:
        typer.echo(f"Result to be written to the temporary file:\n{blob}")

    temp_path = write_temp_file(blob)
    typer.echo(f"The file paths and contents have been written to a temporary file: {temp_path}")

    try:
        if cfg.copy_to_clipboard and copy_to_clipboard(blob):
            typer.echo("The result has been copied to the clipboard.")

        if cfg.confirm:
            _wait_for_enter()

        final = persist(temp_path, cfg.persist_path)
    except BaseException:
        # Ctrl-C at the prompt, clipboard trouble: the temp file never outlives a failed run
        discard(temp_path)
        raise
    if progress_w:
        progress_w.emit("stage", "done", "Result persisted", extra={"path": str(final)})
    typer.echo(f"The temporary file has been persisted at: {final}")


if __name__ == "__main__":
    app()
