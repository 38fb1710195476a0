from __future__ import annotations
import datetime
from typing import Iterable, List, Optional

from algorithms.math_tools import MathTools
from exercise_catalog import ExerciseCatalog
from models import VolumeTrendPoint, WorkoutRecord
from settings_schema import AnalyticsSettings

PATTERNS = (
    "squat",
    "hinge",
    "horizontal_press",
    "vertical_press",
    "horizontal_pull",
    "vertical_pull",
)

# catalog patterns use push, progress charts use press
CATALOG_PATTERNS = {
    "squat": "squat",
    "hinge": "hinge",
    "horizontal_push": "horizontal_press",
    "vertical_push": "vertical_press",
    "horizontal_pull": "horizontal_pull",
    "vertical_pull": "vertical_pull",
}


def _chronological(workouts: Iterable[WorkoutRecord]) -> List[WorkoutRecord]:
    return sorted(workouts, key=lambda w: (w.date, w.start_time))


class ProgressService:
    """Summaries across completed workouts for the progress screens."""

    def __init__(
        self,
        catalog: ExerciseCatalog | None = None,
        settings: AnalyticsSettings | None = None,
    ) -> None:
        self.catalog = catalog
        self.settings = settings or AnalyticsSettings()

    @staticmethod
    def avg_rpe(workouts: Iterable[WorkoutRecord]) -> Optional[float]:
        values = [w.avg_rpe for w in workouts if w.avg_rpe is not None]
        if not values:
            return None
        return MathTools.round_half_away(MathTools.mean(values), 1)

    @staticmethod
    def avg_rest_sec(workouts: Iterable[WorkoutRecord]) -> Optional[int]:
        values = [w.avg_rest_sec for w in workouts if w.avg_rest_sec is not None]
        if not values:
            return None
        return int(MathTools.round_half_away(MathTools.mean(values)))

    @staticmethod
    def avg_intensity_score(workouts: Iterable[WorkoutRecord]) -> int:
        values = [w.intensity_score for w in workouts]
        if not values:
            return 0
        return int(MathTools.round_half_away(MathTools.mean(values)))

    @staticmethod
    def avg_density_score(workouts: Iterable[WorkoutRecord]) -> float:
        values = [w.density_score for w in workouts]
        if not values:
            return 0.0
        return MathTools.round_half_away(MathTools.mean(values), 1)

    @staticmethod
    def seven_day_volume_trend(
        workouts: Iterable[WorkoutRecord],
        today: Optional[datetime.date] = None,
    ) -> str:
        """Compare the last 7 days of volume with the 7 days before.

        Returns ``"higher"``, ``"lower"`` or ``"same"`` (within 5% of the
        previous week).
        """
        data = list(workouts)
        if len(data) < 2:
            return "same"
        if today is None:
            today = datetime.date.today()
        week_start = today - datetime.timedelta(days=7)
        two_weeks = today - datetime.timedelta(days=14)
        recent = [w for w in data if w.date >= week_start]
        previous = [w for w in data if two_weeks < w.date < week_start]
        if not recent or not previous:
            return "same"
        recent_volume = sum(w.total_volume for w in recent)
        previous_volume = sum(w.total_volume for w in previous)
        threshold = previous_volume * 0.05
        if recent_volume > previous_volume + threshold:
            return "higher"
        if recent_volume < previous_volume - threshold:
            return "lower"
        return "same"

    def infer_pattern(self, title: str) -> Optional[str]:
        """Movement pattern of a block title: catalog first, then keywords."""
        if self.catalog is not None:
            pattern = self.catalog.pattern_for_name(title)
            if pattern is not None:
                return CATALOG_PATTERNS.get(pattern)
        t = title.lower()
        if "squat" in t:
            return "squat"
        if "deadlift" in t or "rdl" in t or "hinge" in t:
            return "hinge"
        if ("bench" in t or "press" in t) and "overhead" not in t:
            return "horizontal_press"
        if "overhead" in t or "shoulder press" in t:
            return "vertical_press"
        if "row" in t or ("pull" in t and "vertical" not in t and "pull-up" not in t):
            return "horizontal_pull"
        if "pull-up" in t or "chin-up" in t or "lat pulldown" in t:
            return "vertical_pull"
        return None

    def block_volume_trend(
        self, workouts: Iterable[WorkoutRecord], block_title: str
    ) -> List[VolumeTrendPoint]:
        """Volume of the named block per workout, last points oldest first."""
        wanted = block_title.lower()
        points: list[VolumeTrendPoint] = []
        for workout in _chronological(workouts):
            for block in workout.blocks:
                if block.title.lower() == wanted:
                    points.append(
                        VolumeTrendPoint(
                            date=workout.date,
                            volume=block.volume,
                            start_time=workout.start_time,
                        )
                    )
                    break
        return points[-self.settings.trend_window :]

    def pattern_volume_trend(
        self, workouts: Iterable[WorkoutRecord], pattern: str
    ) -> List[VolumeTrendPoint]:
        if pattern not in PATTERNS:
            raise ValueError(f"unknown movement pattern: {pattern}")
        points: list[VolumeTrendPoint] = []
        for workout in _chronological(workouts):
            volume = sum(
                b.volume for b in workout.blocks if self.infer_pattern(b.title) == pattern
            )
            if volume > 0:
                points.append(
                    VolumeTrendPoint(
                        date=workout.date, volume=volume, start_time=workout.start_time
                    )
                )
        return points[-self.settings.trend_window :]
