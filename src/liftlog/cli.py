"""CLI for inspecting an event log against a training plan."""

from __future__ import annotations

import json
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, NoReturn

import click
from pydantic import ValidationError

from .config import Config
from .errors import MalformedRawEvent
from .event_conventions import get_event_conventions, get_ordering_rules
from .logging import setup_logging
from .models import TrainingTree
from .normalize import normalize_events, order_events, to_raw_event
from .pipeline import project_workout_state
from .presets import DEFAULT_PRESET, PRESETS
from .projection import build_progress
from .set_logging import events_for_set_log

_events_file = click.argument(
    "events_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
_plan_options = [
    click.option(
        "--plan-file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Load the prescribed plan from a JSON file.",
    ),
    click.option(
        "--preset",
        type=click.Choice(list(PRESETS.keys())),
        default=None,
        help=f"Use a preset plan (default: {DEFAULT_PRESET}).",
    ),
]


def _with_plan_options(fn):
    for option in reversed(_plan_options):
        fn = option(fn)
    return fn


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _load_raw_events(path: Path) -> list[dict[str, Any]]:
    with path.open() as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            _fail(f"{path} is not valid JSON: {exc}")
    if not isinstance(data, list):
        _fail(f"{path} must contain a JSON array of event records")
    return data


def _load_plan(config: Config, plan_file: Path | None, preset: str | None) -> TrainingTree:
    if plan_file and preset:
        _fail("Specify either --plan-file or --preset, not both.")
    if preset:
        return PRESETS[preset]()

    path = plan_file or (Path(config.plan_file) if config.plan_file else None)
    if path is None:
        return PRESETS[DEFAULT_PRESET]()
    try:
        return TrainingTree.model_validate_json(path.read_text())
    except OSError as exc:
        _fail(f"Cannot read plan file {path}: {exc}")
    except ValidationError as exc:
        _fail(f"Invalid plan file {path}: {exc.error_count()} validation errors")


@click.group()
@click.pass_context
def main(ctx: click.Context):
    """Event-sourced workout progress tracking."""
    config = Config.from_env()
    setup_logging(config.log_format, config.log_level)
    ctx.obj = config


@main.command()
@_events_file
@click.pass_obj
def progress(config: Config, events_file: Path):
    """Print the progress tree projected from EVENTS_FILE."""
    try:
        events = normalize_events(
            _load_raw_events(events_file),
            skip_unknown_kinds=config.skip_unknown_events,
        )
    except MalformedRawEvent as exc:
        _fail(str(exc))
    _echo_json(build_progress(order_events(events)).model_dump(mode="json"))


@main.command()
@_events_file
@_with_plan_options
@click.pass_obj
def merged(config: Config, events_file: Path, plan_file: Path | None, preset: str | None):
    """Print the plan merged with the progress from EVENTS_FILE."""
    plan = _load_plan(config, plan_file, preset)
    try:
        state = project_workout_state(
            _load_raw_events(events_file),
            plan,
            skip_unknown_kinds=config.skip_unknown_events,
        )
    except MalformedRawEvent as exc:
        _fail(str(exc))
    _echo_json(state.merged.model_dump(mode="json"))


@main.command()
@_events_file
@_with_plan_options
@click.pass_obj
def current(config: Config, events_file: Path, plan_file: Path | None, preset: str | None):
    """Print the workout in progress or the next one to do."""
    plan = _load_plan(config, plan_file, preset)
    try:
        state = project_workout_state(
            _load_raw_events(events_file),
            plan,
            skip_unknown_kinds=config.skip_unknown_events,
        )
    except MalformedRawEvent as exc:
        _fail(str(exc))
    if state.current is None:
        _echo_json({"current": None})
        return
    _echo_json({"current": state.current.model_dump(mode="json")})


@main.command("log-set")
@_events_file
@click.argument("exercise")
@click.argument("weight", type=float)
@click.argument("reps", type=int)
@_with_plan_options
@click.option(
    "--at",
    type=click.DateTime(formats=["%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S"]),
    default=None,
    help="Timestamp (UTC) for the new events. Defaults to now.",
)
@click.pass_obj
def log_set(
    config: Config,
    events_file: Path,
    exercise: str,
    weight: float,
    reps: int,
    plan_file: Path | None,
    preset: str | None,
    at: datetime | None,
):
    """Print the event records to append for logging one set."""
    plan = _load_plan(config, plan_file, preset)
    try:
        events = order_events(
            normalize_events(
                _load_raw_events(events_file),
                skip_unknown_kinds=config.skip_unknown_events,
            )
        )
    except MalformedRawEvent as exc:
        _fail(str(exc))
    timestamp = at.replace(tzinfo=UTC) if at is not None else datetime.now(UTC)
    new_events = events_for_set_log(events, plan, exercise, weight, reps, at=timestamp)
    _echo_json([to_raw_event(event) for event in new_events])


@main.command()
def conventions():
    """Print the event catalog and ordering rules."""
    _echo_json({"events": get_event_conventions(), "ordering": get_ordering_rules()})
