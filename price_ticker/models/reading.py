"""Data models for price readings and display state"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PriceReading:
    """Outcome of one poll cycle's fetch. An invalid reading carries no value."""
    value: Optional[float] = None
    valid: bool = False

    @classmethod
    def ok(cls, value: float) -> "PriceReading":
        return cls(value=float(value), valid=True)

    @classmethod
    def invalid(cls) -> "PriceReading":
        return cls(value=None, valid=False)


@dataclass(frozen=True)
class DisplayState:
    """Everything the console renderer needs for one frame"""
    reading: PriceReading
    updated_at: str
    seconds_remaining: int
    total: int

    @property
    def elapsed(self) -> int:
        return self.total - self.seconds_remaining

    def progress_fraction(self) -> float:
        """Fraction of the wait already elapsed (0.0 - 1.0)"""
        if self.total <= 0:
            return 1.0
        return min(max(self.elapsed / self.total, 0.0), 1.0)
