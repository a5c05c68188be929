from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
import json
from pathlib import Path
from typing import Any, Optional

from clipfil.io.fs_names import display_path


@dataclass
class ProgressWriter:
    path: Path

    def emit(
        self,
        step: str,
        status: str,
        message: str,
        current: Optional[int] = None,
        total: Optional[int] = None,
        extra: Optional[dict[str, Any]] = None,
    ) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "step": step,
            "status": status,     # start|progress|done|error
            "message": message,
            "current": current,
            "total": total,
            "extra": extra or {},
        }
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(payload, ensure_ascii=False) + "\n")

    def observer(self, step: str = "collect"):
        """Adapter for collect(observer=...): one 'progress' line per traversal event."""
        counter = {"n": 0}

        def _on_event(event: str, path: Path) -> None:
            counter["n"] += 1
            self.emit(step, "progress", event, current=counter["n"], extra={"path": display_path(path)})

        return _on_event
