from __future__ import annotations
import datetime
import logging
from typing import Iterable, List, Mapping, Optional, Protocol

from algorithms.math_tools import MathTools
from models import (
    ExerciseHistoryEntry,
    WorkoutBlockRecord,
    WorkoutRecord,
)
from settings_schema import AnalyticsSettings

logger = logging.getLogger(__name__)


class WorkoutTotals(Protocol):
    total_volume: float
    duration_min: float
    avg_rpe: Optional[float]


class WorkoutMetricsCalculator:
    """Reduce a workout's blocks and sets into volume, effort, rest and scores."""

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        self.settings = settings or AnalyticsSettings()

    @staticmethod
    def block_volume(block: WorkoutBlockRecord) -> float:
        """Sum of weight x prescribed reps over completed, weighted sets."""
        reps = block.prescribed_reps or 0
        return MathTools.volume(
            [
                (reps, s.weight)
                for s in block.sets
                if s.completed and s.weight is not None and s.weight > 0
            ]
        )

    @staticmethod
    def block_avg_rpe(block: WorkoutBlockRecord) -> Optional[float]:
        values = [s.rpe for s in block.sets if s.completed and s.rpe is not None]
        if not values:
            return None
        return MathTools.round_half_away(MathTools.mean(values), 1)

    @staticmethod
    def block_avg_rest(block: WorkoutBlockRecord) -> Optional[int]:
        """Average rest in whole seconds over completed sets with a rest time."""
        values = [
            s.rest_time_ms / 1000
            for s in block.sets
            if s.completed and s.rest_time_ms is not None and s.rest_time_ms > 0
        ]
        if not values:
            return None
        return int(MathTools.round_half_away(MathTools.mean(values)))

    def workout_totals(self, blocks: Iterable[WorkoutBlockRecord]) -> dict:
        """Return ``total_volume``, ``avg_rpe`` and ``avg_rest_sec``.

        The averages are means of the per-block averages, so a block with many
        sets weighs the same as a block with few.
        """
        total_volume = 0.0
        block_rpes: list[float] = []
        block_rests: list[int] = []
        for block in blocks:
            total_volume += self.block_volume(block)
            rpe = self.block_avg_rpe(block)
            if rpe is not None:
                block_rpes.append(rpe)
            rest = self.block_avg_rest(block)
            if rest is not None:
                block_rests.append(rest)
        return {
            "total_volume": total_volume,
            "avg_rpe": (
                MathTools.round_half_away(MathTools.mean(block_rpes), 1)
                if block_rpes
                else None
            ),
            "avg_rest_sec": (
                int(MathTools.round_half_away(MathTools.mean(block_rests)))
                if block_rests
                else None
            ),
        }

    @staticmethod
    def density_score(record: WorkoutTotals) -> float:
        """Volume per minute, one decimal. 0 for a zero-length workout."""
        if record.duration_min == 0:
            return 0.0
        return MathTools.round_half_away(record.total_volume / record.duration_min, 1)

    def intensity_score(self, record: WorkoutTotals) -> int:
        """(avg RPE / 10) x volume per minute x 100, as an integer."""
        if record.duration_min == 0:
            return 0
        if record.avg_rpe is not None:
            effort = record.avg_rpe / 10
        else:
            effort = self.settings.default_effort_factor
        per_min = record.total_volume / record.duration_min
        return int(MathTools.round_half_away(effort * per_min * 100))

    def summarize_block(self, block: WorkoutBlockRecord) -> WorkoutBlockRecord:
        """Return a copy of ``block`` with its derived fields filled in."""
        return block.model_copy(
            update={
                "volume": self.block_volume(block),
                "avg_rpe": self.block_avg_rpe(block),
                "avg_rest_sec": self.block_avg_rest(block),
            }
        )

    def build_workout_record(
        self,
        workout_id: str,
        date: datetime.date | str,
        duration_min: float,
        blocks: Iterable[WorkoutBlockRecord],
        plan_day_id: Optional[str] = None,
        start_time: int = 0,
        end_time: Optional[int] = None,
    ) -> WorkoutRecord:
        summarized = [self.summarize_block(b) for b in blocks]
        record = WorkoutRecord(
            id=workout_id,
            date=date,
            duration_min=duration_min,
            blocks=summarized,
            plan_day_id=plan_day_id,
            start_time=start_time,
            end_time=end_time,
            **self.workout_totals(summarized),
        )
        record = record.model_copy(
            update={
                "density_score": self.density_score(record),
                "intensity_score": self.intensity_score(record),
            }
        )
        logger.debug(
            "workout %s: volume=%s density=%s intensity=%s",
            workout_id,
            record.total_volume,
            record.density_score,
            record.intensity_score,
        )
        return record

    @staticmethod
    def history_entries_for_workout(
        record: WorkoutRecord, exercise_ids: Mapping[str, str]
    ) -> List[ExerciseHistoryEntry]:
        """Return one history entry per completed strength set of ``record``.

        ``exercise_ids`` maps block id to exercise id; unmapped blocks are
        skipped. Only sets with a positive weight and a logged RPE count.
        """
        entries: list[ExerciseHistoryEntry] = []
        for block in record.blocks:
            if block.type != "strength" or not block.sets:
                continue
            exercise_id = exercise_ids.get(block.block_id)
            if exercise_id is None:
                continue
            reps = block.prescribed_reps or 0
            for s in block.sets:
                if not s.completed or s.weight is None or s.weight <= 0 or s.rpe is None:
                    continue
                entries.append(
                    ExerciseHistoryEntry(
                        exercise_id=exercise_id,
                        date=record.date,
                        session_id=record.id,
                        block_id=block.block_id,
                        weight=s.weight,
                        reps=reps,
                        sets=1,
                        rpe=s.rpe,
                        volume=s.weight * reps,
                    )
                )
        return entries
