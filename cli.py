import argparse
import json
import logging
import os
from typing import Optional

import yaml

from config import APP_VERSION, YamlConfig
from exercise_catalog import ExerciseCatalog
from history_service import HistoryAggregator
from metrics_service import WorkoutMetricsCalculator
from models import ExerciseHistoryEntry, WorkoutBlockRecord
from recommendation_service import WeightRecommender


def load_document(path: str):
    """Read a JSON or YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        if path.endswith((".yaml", ".yml")):
            return yaml.safe_load(f)
        return json.load(f)


def load_history(path: str) -> list[ExerciseHistoryEntry]:
    data = load_document(path) or []
    if isinstance(data, dict) and "history" in data:
        data = data["history"] or []
    if isinstance(data, dict):
        # store layout: exercise id -> entries
        data = [item for entries in data.values() for item in entries]
    return [ExerciseHistoryEntry.model_validate(item) for item in data]


def load_catalog(path: Optional[str]) -> ExerciseCatalog:
    if path is None:
        return ExerciseCatalog()
    return ExerciseCatalog.from_yaml(path)


def list_exercises(history_path: str, catalog: ExerciseCatalog) -> list[str]:
    return HistoryAggregator(catalog).unique_exercises(load_history(history_path))


def trend(
    history_path: str, exercise: str, metric: str, catalog: ExerciseCatalog, settings
) -> list[dict]:
    aggregator = HistoryAggregator(catalog, settings)
    entries = aggregator.exercise_history(load_history(history_path), exercise)
    if metric == "weight":
        points = aggregator.weight_trend(entries)
    elif metric == "rpe":
        points = aggregator.rpe_trend(entries)
    else:
        points = aggregator.volume_trend(entries)
    return [p.to_dict() for p in points]


def recommend(
    history_path: str,
    exercise: str,
    target_rpe: Optional[float],
    recovery: Optional[float],
    catalog: ExerciseCatalog,
    settings,
) -> Optional[float]:
    history = HistoryAggregator(catalog, settings).exercise_history(
        load_history(history_path), exercise
    )
    exercise_id = catalog.resolve_id_by_name(exercise) or exercise
    return WeightRecommender(settings).recommend_weight(
        exercise_id, target_rpe, recovery, history
    )


def summarize_workout(workout_path: str, settings) -> dict:
    data = load_document(workout_path) or {}
    blocks = [WorkoutBlockRecord.model_validate(b) for b in data.get("blocks", [])]
    record = WorkoutMetricsCalculator(settings).build_workout_record(
        str(data.get("id", os.path.splitext(os.path.basename(workout_path))[0])),
        data["date"],
        float(data.get("durationMin", data.get("duration_min", 0))),
        blocks,
        plan_day_id=data.get("planDayId"),
        start_time=int(data.get("startTime", 0)),
        end_time=data.get("endTime"),
    )
    return record.to_dict()


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Training analytics commands")
    parser.add_argument("--catalog", help="YAML exercise catalog")
    parser.add_argument("--settings", help="YAML analytics settings")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--version", action="version", version=APP_VERSION)
    sub = parser.add_subparsers(dest="cmd", required=True)

    exs = sub.add_parser("exercises")
    exs.add_argument("--history", required=True)

    hist = sub.add_parser("history")
    hist.add_argument("--history", required=True)
    hist.add_argument("--exercise", required=True)

    trd = sub.add_parser("trend")
    trd.add_argument("--history", required=True)
    trd.add_argument("--exercise", required=True)
    trd.add_argument("--metric", choices=["weight", "rpe", "volume"], default="weight")

    rec = sub.add_parser("recommend")
    rec.add_argument("--history", required=True)
    rec.add_argument("--exercise", required=True)
    rec.add_argument("--target-rpe", type=float)
    rec.add_argument("--recovery", type=float)

    wk = sub.add_parser("workout")
    wk.add_argument("--workout", required=True)

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        settings = YamlConfig(args.settings).load_settings()
        catalog = load_catalog(args.catalog)
        if args.cmd == "exercises":
            out = list_exercises(args.history, catalog)
        elif args.cmd == "history":
            entries = HistoryAggregator(catalog, settings).exercise_history(
                load_history(args.history), args.exercise
            )
            out = [e.to_dict() for e in entries]
        elif args.cmd == "trend":
            out = trend(args.history, args.exercise, args.metric, catalog, settings)
        elif args.cmd == "recommend":
            out = {
                "exercise": args.exercise,
                "recommendedWeight": recommend(
                    args.history,
                    args.exercise,
                    args.target_rpe,
                    args.recovery,
                    catalog,
                    settings,
                ),
            }
        else:
            out = summarize_workout(args.workout, settings)
    except (OSError, ValueError, KeyError, yaml.YAMLError) as e:
        parser.error(str(e))
    print(json.dumps(out, indent=2))


if __name__ == "__main__":
    main()
