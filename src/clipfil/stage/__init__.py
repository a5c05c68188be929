from .staging import DEFAULT_PERSIST_PATH, discard, persist, write_temp_file
from .clipboard import copy_to_clipboard

__all__ = ["DEFAULT_PERSIST_PATH", "discard", "persist", "write_temp_file", "copy_to_clipboard"]
