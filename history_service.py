from __future__ import annotations
import datetime
from typing import Callable, Iterable, List, Optional

from algorithms.math_tools import MathTools
from exercise_catalog import ExerciseCatalog
from localization import format_date_label
from models import (
    ExerciseHistoryEntry,
    SessionAggregate,
    TrendPoint,
    WeightTrendPoint,
)
from settings_schema import AnalyticsSettings


def sort_most_recent_first(
    entries: Iterable[ExerciseHistoryEntry],
) -> List[ExerciseHistoryEntry]:
    """Return ``entries`` newest first; same-day entries by session id descending."""
    return sorted(entries, key=lambda e: (e.date, e.session_id), reverse=True)


class HistoryAggregator:
    """Turn logged sets into per-session aggregates and chart series."""

    def __init__(
        self,
        catalog: ExerciseCatalog,
        settings: AnalyticsSettings | None = None,
    ) -> None:
        self.catalog = catalog
        self.settings = settings or AnalyticsSettings()

    def unique_exercises(self, entries: Iterable[ExerciseHistoryEntry]) -> List[str]:
        ids = {e.exercise_id for e in entries}
        return sorted(self.catalog.resolve_name_by_id(i) for i in ids)

    def exercise_history(
        self, entries: Iterable[ExerciseHistoryEntry], exercise_name: str
    ) -> List[ExerciseHistoryEntry]:
        exercise_id = self.catalog.resolve_id_by_name(exercise_name)
        if exercise_id is None:
            return []
        return sort_most_recent_first(e for e in entries if e.exercise_id == exercise_id)

    def session_aggregates(
        self, entries: Iterable[ExerciseHistoryEntry]
    ) -> List[SessionAggregate]:
        """Group entries by session id, newest session first."""
        sessions: dict[str, list[ExerciseHistoryEntry]] = {}
        for entry in entries:
            sessions.setdefault(entry.session_id, []).append(entry)
        result = []
        for session_id, members in sessions.items():
            rpes = [m.rpe for m in members if m.rpe is not None]
            result.append(
                SessionAggregate(
                    session_id=session_id,
                    date=members[0].date,
                    avg_weight=MathTools.mean(m.weight for m in members),
                    avg_rpe=MathTools.mean(rpes) if rpes else None,
                    total_volume=sum(m.volume for m in members),
                    entry_count=len(members),
                )
            )
        return sorted(result, key=lambda s: (s.date, s.session_id), reverse=True)

    def _recent_sessions(
        self,
        entries: Iterable[ExerciseHistoryEntry],
        include: Callable[[SessionAggregate], bool] = lambda s: True,
    ) -> List[SessionAggregate]:
        sessions = [s for s in self.session_aggregates(entries) if include(s)]
        recent = sessions[: self.settings.trend_window]
        recent.reverse()
        return recent

    def weight_trend(
        self,
        entries: Iterable[ExerciseHistoryEntry],
        today: Optional[datetime.date] = None,
    ) -> List[WeightTrendPoint]:
        return [
            WeightTrendPoint(
                date_label=format_date_label(s.date, today),
                weight=MathTools.round_half_away(s.avg_weight, 1),
            )
            for s in self._recent_sessions(entries)
        ]

    def rpe_trend(
        self,
        entries: Iterable[ExerciseHistoryEntry],
        today: Optional[datetime.date] = None,
    ) -> List[TrendPoint]:
        # sessions logged without any RPE have nothing to plot
        return [
            TrendPoint(
                date_label=format_date_label(s.date, today),
                value=MathTools.round_half_away(s.avg_rpe, 1),
            )
            for s in self._recent_sessions(entries, lambda s: s.avg_rpe is not None)
        ]

    def volume_trend(
        self,
        entries: Iterable[ExerciseHistoryEntry],
        today: Optional[datetime.date] = None,
    ) -> List[TrendPoint]:
        return [
            TrendPoint(
                date_label=format_date_label(s.date, today),
                value=int(MathTools.round_half_away(s.total_volume)),
            )
            for s in self._recent_sessions(entries)
        ]
