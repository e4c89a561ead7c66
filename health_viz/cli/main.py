"""
Command-line interface for health-viz.

Subcommands:
- serve:  run the HTTP API under uvicorn.
- add:    ingest a single record.
- report: print the headline summary for a window and metric.
- seed:   overwrite the store with generated test data.
"""
import argparse
import random
import sys
from datetime import date, timedelta
from typing import List, Optional

from health_viz.config import settings
from health_viz.core.dashboard import build_dashboard
from health_viz.core.ingest import get_dal, ingest_record, load_raw_records
from health_viz.core.records import InvalidRecord, Metric
from health_viz.core.summary import MetricSummary
from health_viz.core.windows import Window
from health_viz.data_access.dal import DataAccessLayer, PersistenceFailure
from health_viz.infra import log_utils

UNITS = {
    Metric.STEPS: "steps",
    Metric.WEIGHT: "kg",
    Metric.HEART_RATE: "bpm",
}


def format_value(metric: Metric, value) -> str:
    """Thousands separators plus unit suffix, e.g. '6,000 steps'."""
    if metric is Metric.WEIGHT:
        return f"{value:,.1f} {UNITS[metric]}"
    return f"{value:,} {UNITS[metric]}"


def format_summary(summary: MetricSummary) -> str:
    if not summary.has_data:
        return f"{summary.metric.value}: No data"
    m = summary.metric
    return (
        f"{m.value}: average {format_value(m, summary.average)}, "
        f"min {format_value(m, summary.min)}, max {format_value(m, summary.max)}"
    )


def generate_test_data(start: date, days: int, rng: random.Random) -> List[dict]:
    """One record per day: random steps and a slowly falling weight."""
    data = []
    for i in range(days):
        day = start + timedelta(days=i)
        steps = rng.randint(5000, 12000)
        weight = 75 - i * 0.1 + rng.uniform(-1, 1)
        data.append({"date": day.isoformat(), "steps": str(steps), "weight": f"{weight:.2f}"})
    return data


def cmd_serve(args, dal: DataAccessLayer) -> int:
    import uvicorn
    from health_viz.api.server import create_app

    uvicorn.run(create_app(dal), host=args.host, port=args.port)
    return 0


def cmd_add(args, dal: DataAccessLayer) -> int:
    raw = {"date": args.date}
    if args.steps is not None:
        raw["steps"] = args.steps
    if args.weight is not None:
        raw["weight"] = args.weight
    if args.heart_rate is not None:
        raw["heartRate"] = args.heart_rate
    record = ingest_record(dal, raw)
    print(f"Saved record for {record.date.isoformat()}")
    return 0


def cmd_report(args, dal: DataAccessLayer) -> int:
    view = build_dashboard(
        load_raw_records(dal), Window(args.window), Metric(args.metric), date.today()
    )
    print(format_summary(view.summary))
    return 0


def cmd_seed(args, dal: DataAccessLayer) -> int:
    start = date.fromisoformat(args.start) if args.start else date.today() - timedelta(days=args.days - 1)
    data = generate_test_data(start, args.days, random.Random(args.seed))
    dal.save_records(data)
    log_utils.log_message(f"[cli] Seeded {len(data)} records from {start.isoformat()}", "INFO")
    print(f"Wrote {len(data)} records starting {start.isoformat()}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="health-viz", description="Personal health data dashboard.")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--host", default=settings.HOST)
    serve.add_argument("--port", type=int, default=settings.PORT)
    serve.set_defaults(func=cmd_serve)

    add = sub.add_parser("add", help="Store one health record.")
    add.add_argument("--date", required=True, help="YYYY-MM-DD or ISO timestamp.")
    add.add_argument("--steps")
    add.add_argument("--weight")
    add.add_argument("--heart-rate", dest="heart_rate")
    add.set_defaults(func=cmd_add)

    report = sub.add_parser("report", help="Print average/min/max for a metric.")
    report.add_argument("--window", choices=[w.value for w in Window], default=settings.DEFAULT_WINDOW)
    report.add_argument("--metric", choices=[m.value for m in Metric], default=settings.DEFAULT_METRIC)
    report.set_defaults(func=cmd_report)

    seed = sub.add_parser("seed", help="Overwrite the store with generated test data.")
    seed.add_argument("--start", default=None, help="First date (YYYY-MM-DD).")
    seed.add_argument("--days", type=int, default=30)
    seed.add_argument("--seed", type=int, default=None, help="Random seed.")
    seed.set_defaults(func=cmd_seed)
    return parser


def main(argv: Optional[List[str]] = None, dal: Optional[DataAccessLayer] = None) -> int:
    """Parses CLI arguments and dispatches to the chosen subcommand."""
    args = build_parser().parse_args(argv)
    log_utils.log_message(f"CLI invoked for '{args.command}'.", "INFO")
    dal = dal or get_dal()
    try:
        return args.func(args, dal)
    except InvalidRecord as e:
        print(f"Invalid record: {e}", file=sys.stderr)
        return 2
    except PersistenceFailure as e:
        log_utils.log_message(f"[cli] Storage error: {e}", "ERROR")
        print(f"Storage error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
