"""Immutable value records exchanged with the analytics engine.

Attribute names are snake_case; the serialized (alias) names are the camelCase
field names the presentation layer consumes, e.g. ``sessionId`` or
``avgRestSec``. ``None`` always means "not enough data" and is kept distinct
from ``0``.
"""

from __future__ import annotations

import datetime
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict using the camelCase field names."""
        return self.model_dump(by_alias=True, mode="json")


def _calendar_day(value: Any) -> Any:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


CalendarDay = Annotated[datetime.date, BeforeValidator(_calendar_day)]


class ExerciseHistoryEntry(Record):
    """One logged set of one exercise."""

    exercise_id: str
    date: CalendarDay
    session_id: str
    weight: float = Field(ge=0)
    rpe: float | None = Field(default=None, ge=0, le=10)
    volume: float = Field(default=0.0, ge=0)
    block_id: str | None = None
    reps: int | None = Field(default=None, ge=0)
    sets: int = Field(default=1, ge=0)


class SessionAggregate(Record):
    """One session's summary for one exercise."""

    session_id: str
    date: datetime.date
    avg_weight: float
    avg_rpe: float | None
    total_volume: float
    entry_count: int


class WorkoutSetRecord(Record):
    completed: bool = False
    weight: float | None = None
    rpe: float | None = None
    rest_time_ms: float | None = None


class WorkoutBlockRecord(Record):
    """One prescribed exercise block; ``volume`` and the averages are derived."""

    block_id: str
    title: str
    type: str
    prescribed_sets: int = Field(default=0, ge=0)
    prescribed_reps: int | None = None
    target_rpe: float | None = None
    sets: tuple[WorkoutSetRecord, ...] = ()
    volume: float = 0.0
    avg_rpe: float | None = None
    avg_rest_sec: int | None = None


class WorkoutRecord(Record):
    """One completed workout. Score fields are derived, never authored."""

    id: str
    date: CalendarDay
    duration_min: float = Field(ge=0)
    blocks: tuple[WorkoutBlockRecord, ...] = ()
    plan_day_id: str | None = None
    start_time: int = 0
    end_time: int | None = None
    total_volume: float = 0.0
    avg_rpe: float | None = None
    avg_rest_sec: int | None = None
    density_score: float = 0.0
    intensity_score: int = 0


class TrendPoint(Record):
    date_label: str
    value: int | float


class WeightTrendPoint(Record):
    date_label: str
    weight: float


class VolumeTrendPoint(Record):
    date: datetime.date
    volume: float
    start_time: int = 0


R = TypeVar("R", bound=Record)


def with_overrides(record: R, **fields: Any) -> R:
    """Return a copy of ``record`` with ``fields`` replaced and re-validated."""
    data = record.model_dump()
    data.update(fields)
    return type(record).model_validate(data)
