from __future__ import annotations
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

from clipfil.errors import ConfigError

E = TypeVar("E", bound=Enum)

_MISSING = object()

def cfg_get(cfg: dict, key: str, default: Any = None) -> Any:
    """Dotted lookup: cfg_get(cfg, "collect.sort_children")."""
    cur: Any = cfg
    for part in key.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur

def cfg_str(cfg: dict, key: str, default: str | None = None) -> str | None:
    v = cfg_get(cfg, key, default)
    return None if v is None else str(v)

def cfg_bool(cfg: dict, key: str, default: bool = False) -> bool:
    v = cfg_get(cfg, key, _MISSING)
    if v is _MISSING or v is None:
        return default
    if isinstance(v, bool):
        return v
    raise ConfigError(f"Config key `{key}` must be true/false. Got: {v!r}")

def cfg_choice(cfg: dict, key: str, enum_cls: type[E], default: E) -> E:
    v = cfg_get(cfg, key, None)
    if v is None:
        return default
    try:
        return enum_cls(str(v).strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ConfigError(f"Config key `{key}` must be one of: {allowed}. Got: {v!r}") from None

def cfg_path(cfg: dict, key: str, default: Path | None = None) -> Path | None:
    v = cfg_get(cfg, key, None)
    if v is None or str(v).strip() == "":
        return default
    return Path(str(v)).expanduser()
