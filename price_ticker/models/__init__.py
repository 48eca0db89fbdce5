"""
Data models module.

Immutable values exchanged between the fetcher, the engine and the display.
"""
from .reading import DisplayState, PriceReading

__all__ = ["DisplayState", "PriceReading"]
