from __future__ import annotations
import logging
import math
from typing import Iterable, Optional

from algorithms.math_tools import MathTools
from algorithms.weight_converter import WeightConverter
from history_service import sort_most_recent_first
from models import ExerciseHistoryEntry
from settings_schema import AnalyticsSettings

logger = logging.getLogger(__name__)


class WeightRecommender:
    """Recommend the next working weight from logged history."""

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        self.settings = settings or AnalyticsSettings()

    @property
    def min_weight(self) -> float:
        """Weight floor expressed in the configured unit."""
        return WeightConverter.to_unit(self.settings.min_weight, self.settings.weight_unit)

    def effort_factor(self, last_rpe: Optional[float], target_rpe: Optional[float]) -> float:
        """Multiplier from how the last session felt versus the target RPE."""
        if last_rpe is None or target_rpe is None:
            return 1.0
        diff = last_rpe - target_rpe
        if diff < -self.settings.rpe_tolerance:
            return self.settings.rpe_increase_factor
        if diff > self.settings.rpe_tolerance:
            return self.settings.rpe_decrease_factor
        return 1.0

    def recovery_factor(self, recovery_score: Optional[float]) -> float:
        if recovery_score is None:
            return 1.0
        if recovery_score < self.settings.low_recovery_threshold:
            return self.settings.low_recovery_factor
        if recovery_score > self.settings.high_recovery_threshold:
            return self.settings.high_recovery_factor
        return 1.0

    def adjustment_factors(
        self,
        history: Iterable[ExerciseHistoryEntry],
        target_rpe: Optional[float] = None,
        recovery_score: Optional[float] = None,
    ) -> dict[str, float] | None:
        """Return the effort and recovery multipliers applied to the last weight."""
        ordered = sort_most_recent_first(history)
        if not ordered:
            return None
        last = ordered[0]
        return {
            "base_weight": last.weight,
            "effort": self.effort_factor(last.rpe, target_rpe),
            "recovery": self.recovery_factor(recovery_score),
        }

    def recommend_weight(
        self,
        exercise_id: str,
        target_rpe: Optional[float],
        recovery_score: Optional[float],
        history: Iterable[ExerciseHistoryEntry],
    ) -> Optional[float]:
        """Return the recommended weight, or ``None`` without history."""
        factors = self.adjustment_factors(history, target_rpe, recovery_score)
        if factors is None:
            logger.debug("no history for %s, no recommendation", exercise_id)
            return None
        # effort first, then recovery; floor only after both
        weight = factors["base_weight"] * factors["effort"]
        weight = weight * factors["recovery"]
        weight = MathTools.clamp(weight, self.min_weight, math.inf)
        result = MathTools.round_to_increment(weight, self.settings.load_increment)
        logger.debug(
            "recommendation for %s: base=%s effort=%s recovery=%s -> %s",
            exercise_id,
            factors["base_weight"],
            factors["effort"],
            factors["recovery"],
            result,
        )
        return result
