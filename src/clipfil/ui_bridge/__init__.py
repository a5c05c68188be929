from .progress import ProgressWriter

__all__ = ["ProgressWriter"]
