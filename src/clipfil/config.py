# src/clipfil/config.py
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from clipfil.cfg_helpers import cfg_bool, cfg_choice, cfg_get, cfg_path, cfg_str
from clipfil.collect.models import DEFAULT_HEADER_TEMPLATE, CollectOptions, FilePolicy
from clipfil.errors import ConfigError
from clipfil.stage.staging import DEFAULT_PERSIST_PATH


# ---------------------------------------------------------------------------
# AppConfig: the `collect:` section feeds the collector, `output:` the CLI glue
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AppConfig:
    sort_children: bool = False
    on_binary_file: FilePolicy = FilePolicy.ABORT
    on_unreadable_file: FilePolicy = FilePolicy.ABORT
    header_template: str = DEFAULT_HEADER_TEMPLATE
    separator: str = "\n\n"
    persist_path: Path = DEFAULT_PERSIST_PATH
    copy_to_clipboard: bool = False
    echo_result: bool = True
    confirm: bool = True
    progress_file: Optional[Path] = None
    log_file: Optional[Path] = None

    def collect_options(self) -> CollectOptions:
        return CollectOptions(
            sort_children=self.sort_children,
            on_binary_file=self.on_binary_file,
            on_unreadable_file=self.on_unreadable_file,
            header_template=self.header_template,
        )

    def with_overrides(self, **overrides: Any) -> "AppConfig":
        """CLI flags win over the file; None means 'flag not given'."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------

def load_config_dict(path: Path) -> Dict[str, Any]:
    """
    Raw YAML -> dict. An empty file is an empty config.
    """
    p = Path(path).resolve()
    if not p.exists():
        raise ConfigError(f"Config file not found: {p}")
    try:
        text = p.read_text(encoding="utf-8")
    except Exception as e:
        raise ConfigError(f"Cannot read config file: {p}. {e}") from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config: {p}. {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping (dict). Got: {type(data).__name__}")
    return data


def config_from_dict(data: Dict[str, Any]) -> AppConfig:
    for section in ("collect", "output"):
        if cfg_get(data, section) is not None and not isinstance(data[section], dict):
            raise ConfigError(f"Config key `{section}` must be a mapping (dict).")

    d = AppConfig()
    header = cfg_str(data, "collect.header_template", d.header_template)
    if "{path}" not in header:
        raise ConfigError("Config key `collect.header_template` must contain '{path}'.")
    try:
        header.format(path="x")
    except (KeyError, IndexError, ValueError) as e:
        raise ConfigError(f"Invalid `collect.header_template`: {header!r}. {e}") from e

    return AppConfig(
        sort_children=cfg_bool(data, "collect.sort_children", d.sort_children),
        on_binary_file=cfg_choice(data, "collect.on_binary_file", FilePolicy, d.on_binary_file),
        on_unreadable_file=cfg_choice(data, "collect.on_unreadable_file", FilePolicy, d.on_unreadable_file),
        header_template=header,
        separator=cfg_str(data, "output.separator", d.separator),
        persist_path=cfg_path(data, "output.persist_path", d.persist_path),
        copy_to_clipboard=cfg_bool(data, "output.copy_to_clipboard", d.copy_to_clipboard),
        echo_result=cfg_bool(data, "output.echo_result", d.echo_result),
        confirm=cfg_bool(data, "output.confirm", d.confirm),
        progress_file=cfg_path(data, "output.progress_file"),
        log_file=cfg_path(data, "output.log_file"),
    )


def load_config(path: Optional[Path]) -> AppConfig:
    """
    Main loader for the CLI. No path -> built-in defaults (the config file is optional).
    """
    if path is None:
        return AppConfig()
    return config_from_dict(load_config_dict(path))
