"""CLI interface for the medication timeline."""

from __future__ import annotations

import logging
import sys
import time
from datetime import datetime, timedelta, timezone
from pathlib import Path

import click

from .catalog import default_catalog
from .config import Config
from .consumption import calculate_ingredient_consumption, evaluate_global_limits
from .entries import load_entries, parse_timestamp
from .formatting import format_amount, format_dose, format_duration
from .limits import UserConfig, get_user_medication_config, load_user_configs
from .logging import setup_logging
from .packing import max_overlap_depth
from .timeline import TimelineProcessor, TimelineView

logger = logging.getLogger(__name__)

EXIT_LIMIT_EXCEEDED = 2


def _load_config() -> Config:
    try:
        config = Config.from_env()
    except RuntimeError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    setup_logging(config.log_format, config.log_level)
    return config


def _resolve_now(raw: str | None, config: Config) -> datetime:
    if raw is None:
        return datetime.now(timezone.utc)
    now = parse_timestamp(raw, config.timezone)
    if now is None:
        click.echo(f"Error: Could not parse --now value {raw!r}.", err=True)
        sys.exit(1)
    return now


def _user_config(config: Config, user: str | None) -> UserConfig:
    configs = None
    if config.user_config_path:
        try:
            configs = load_user_configs(config.user_config_path, default_catalog())
        except (OSError, ValueError) as exc:
            click.echo(f"Error: Could not load user config {config.user_config_path}: {exc}", err=True)
            sys.exit(1)
    user_id = user or config.user_id
    user_config = get_user_medication_config(user_id, configs)
    if user_config is None:
        click.echo(f"Error: No medication config for user {user_id!r}.", err=True)
        sys.exit(1)
    return user_config


@click.group()
def main():
    """Medication log timeline and dose safety tools."""


def _print_view(view: TimelineView) -> None:
    if not view.rows:
        click.echo("No doses in range.")
        return

    for row in view.rows:
        click.echo(
            f"{row.display_name} [{row.theme}]: {len(row.doses)} doses, "
            f"{len(row.lanes)} lanes (max overlap {max_overlap_depth(row.doses)})"
        )
        for index, lane in enumerate(row.lanes, start=1):
            for dose in lane:
                marker = " *active*" if view.is_active(dose) else ""
                relative = format_duration(dose.start_time - view.now, always_show_sign=True)
                click.echo(
                    f"  lane {index}: {format_dose(dose)} at {dose.start_time.isoformat()} "
                    f"({relative}, until {dose.end_time.isoformat()}){marker}"
                )


@main.command()
@click.argument("entries_file", type=click.Path(exists=True, path_type=Path))
@click.option("--now", "now_raw", type=str, help="Reference instant (ISO-8601); defaults to the current time.")
@click.option("--user", type=str, help="User whose medication config to use.")
@click.option("--watch", is_flag=True, help="Re-render every MEDTIMELINE_TICK_SECONDS.")
@click.option("--ticks", type=int, default=0, show_default=True, help="Renders before --watch stops (0 = never).")
def timeline(entries_file: Path, now_raw: str | None, user: str | None, watch: bool, ticks: int):
    """Print medication rows and their non-overlapping lanes."""
    config = _load_config()
    now = _resolve_now(now_raw, config)
    user_config = _user_config(config, user)
    entries = load_entries(entries_file, config.timezone)
    mtime = entries_file.stat().st_mtime_ns

    processor = TimelineProcessor(
        user_config.visualized_medications,
        start_offset_hours=config.range_start_offset_hours,
        end_offset_hours=config.range_end_offset_hours,
    )

    rendered = 0
    while True:
        _print_view(processor.view(entries, now))
        rendered += 1
        if not watch or (ticks and rendered >= ticks):
            break

        time.sleep(config.tick_seconds)
        current_mtime = entries_file.stat().st_mtime_ns
        if current_mtime != mtime:
            entries = load_entries(entries_file, config.timezone)
            mtime = current_mtime
            logger.info("Reloaded %d entries from %s", len(entries), entries_file)
        # a pinned --now advances by one tick per render
        now = now + timedelta(seconds=config.tick_seconds) if now_raw else datetime.now(timezone.utc)
        click.echo("")


@main.command()
@click.argument("entries_file", type=click.Path(exists=True, path_type=Path))
@click.option("--ingredient", required=True, help="Ingredient name, e.g. acetaminophen.")
@click.option("--window-hours", type=float, default=24.0, show_default=True, help="Rolling window size.")
@click.option("--now", "now_raw", type=str, help="Reference instant (ISO-8601); defaults to the current time.")
@click.option("--user", type=str, help="User whose medication config to use.")
def consumption(entries_file: Path, ingredient: str, window_hours: float, now_raw: str | None, user: str | None):
    """Total ingredient intake over a rolling window."""
    config = _load_config()
    now = _resolve_now(now_raw, config)
    user_config = _user_config(config, user)
    entries = load_entries(entries_file, config.timezone)

    result = calculate_ingredient_consumption(
        entries, user_config.visualized_medications, ingredient, window_hours, now
    )
    click.echo(f"{ingredient}: {format_amount(result.total)} {result.unit}".rstrip() + f" in the last {window_hours:g}h")


@main.command()
@click.argument("entries_file", type=click.Path(exists=True, path_type=Path))
@click.option("--now", "now_raw", type=str, help="Reference instant (ISO-8601); defaults to the current time.")
@click.option("--user", type=str, help="User whose medication config to use.")
def limits(entries_file: Path, now_raw: str | None, user: str | None):
    """Check consumption against the user's global limits."""
    config = _load_config()
    now = _resolve_now(now_raw, config)
    user_config = _user_config(config, user)
    entries = load_entries(entries_file, config.timezone)

    statuses = evaluate_global_limits(entries, user_config, now)
    if not statuses:
        click.echo("No global limits configured.")
        return

    exceeded = False
    for status in statuses:
        limit = status.limit
        state = "EXCEEDED" if status.exceeded else "ok"
        click.echo(
            f"{limit.ingredient_name}: {format_amount(status.consumption.total)} / "
            f"{format_amount(limit.max_amount)} {limit.unit} per {limit.window_hours:g}h "
            f"[{state}] remaining {format_amount(status.remaining)} {limit.unit}"
        )
        exceeded = exceeded or status.exceeded

    if exceeded:
        sys.exit(EXIT_LIMIT_EXCEEDED)


@main.command("list-medications")
def list_medications():
    """List catalog medications in matching order."""
    for entry in default_catalog():
        duration = entry.active_duration.typical if entry.active_duration else None
        duration_text = f"{duration:g}h" if duration is not None else "default"
        click.echo(f"{entry.id}: {entry.display_name} ({duration_text})")
        for ingredient in entry.ingredients:
            click.echo(f"  {ingredient.name}: {format_amount(ingredient.amount_per_unit)} {ingredient.unit} per unit")
