from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

def setup_logger(log_path: Optional[Path] = None, verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger("clipfil")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    fmt = logging.Formatter("%(asctime)s %(levelname)s %(message)s")

    # stderr, so stdout carries only the result text
    sh = logging.StreamHandler()
    sh.setFormatter(fmt)
    logger.addHandler(sh)

    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger
