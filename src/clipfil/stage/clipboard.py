from __future__ import annotations

import logging

import pyperclip

logger = logging.getLogger("clipfil")


def copy_to_clipboard(blob: str) -> bool:
    # headless boxes often have no clipboard backend; not fatal
    try:
        pyperclip.copy(blob)
    except pyperclip.PyperclipException as e:
        logger.warning("Clipboard unavailable, result not copied: %s", e)
        return False
    logger.info("[stage] copied %s chars to clipboard", len(blob))
    return True
