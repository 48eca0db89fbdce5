"""Console presentation of display states."""
from .console import ConsoleRenderer

__all__ = ["ConsoleRenderer"]
