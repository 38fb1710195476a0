import math
from typing import Iterable
import numpy as np

class MathTools:
    """Provides essential mathematical utilities for training analytics."""

    @staticmethod
    def clamp(value: float, min_value: float, max_value: float) -> float:
        """Clamp ``value`` to the inclusive range [min_value, max_value]."""
        if min_value > max_value:
            raise ValueError("min_value must not exceed max_value")
        return max(min_value, min(value, max_value))

    @staticmethod
    def volume(sets: list[tuple[int, float]]) -> float:
        """Compute training volume as the sum of reps times weight."""
        vol = 0.0
        for reps, weight in sets:
            vol += reps * weight
        return vol

    @staticmethod
    def mean(values: Iterable[float]) -> float:
        """Return the arithmetic mean of ``values``."""
        data = list(values)
        if not data:
            raise ValueError("mean of empty sequence")
        return float(np.mean(np.array(data, dtype=float)))

    @staticmethod
    def round_half_away(value: float, digits: int = 0) -> float:
        """Round ``value`` to ``digits`` decimals with ties away from zero."""
        factor = 10 ** digits
        scaled = math.floor(abs(value) * factor + 0.5) / factor
        return math.copysign(scaled, value) if scaled else 0.0

    @classmethod
    def round_to_increment(cls, value: float, increment: float) -> float:
        """Round ``value`` to the nearest multiple of ``increment``."""
        if increment <= 0:
            raise ValueError("increment must be positive")
        return cls.round_half_away(value / increment) * increment
