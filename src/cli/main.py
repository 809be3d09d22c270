"""CLI del tracker (Typer + Rich).

Cada invocación: carga el `TimeSheet`, aplica como mucho una transición
(start/stop) o genera un reporte, y guarda solo si hubo cambios.

Códigos de salida:
- 0: éxito o condición reportada ("already tracking", "nothing to stop").
- 1: error fatal (almacenamiento, configuración, hora local ambigua/inexistente).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from adapters.json_store import JsonTimeSheetStore
from cli import doctor
from cli.ui_components import (
    build_status_panel,
    build_summary_table,
    format_duration,
    report_line,
)
from core.config import AppSettings
from core.domain.errors import LocalTimeError, StorageError, TrackingStateError
from core.domain.models import TimeSheet
from core.domain.reporting_period import ReportingPeriod
from core.interfaces.storage import TimeSheetStore
from core.log import configure_logging
from core.services.reporting import build_report, build_summary
from core.services.tracking import start_tracking, stop_tracking, utc_now

app = typer.Typer(no_args_is_help=True, help="Track work sessions and report tracked time.")

app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


@dataclass
class CliState:
    settings: AppSettings
    store: TimeSheetStore

    @property
    def tz(self) -> tzinfo:
        return self.settings.local_timezone()


def _fail(message: str) -> typer.Exit:
    _err_console.print(f"[red]Error:[/red] {escape(message)}")
    return typer.Exit(code=1)


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj


def _load(state: CliState) -> TimeSheet:
    try:
        return state.store.load()
    except StorageError as exc:
        raise _fail(str(exc)) from exc


def _save(state: CliState, time_sheet: TimeSheet) -> None:
    try:
        state.store.save(time_sheet)
    except StorageError as exc:
        raise _fail(str(exc)) from exc
    _console.print("State saved.")


@app.callback()
def main(
    ctx: typer.Context,
    data_file: Path | None = typer.Option(
        None,
        "--data-file",
        help="Timesheet JSON file (default: ~/.work_time_tracker.json).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Personal work-time tracker."""

    try:
        settings = AppSettings()
    except ValidationError as exc:
        raise _fail(f"Invalid configuration: {exc}") from exc

    if data_file is not None:
        settings = settings.model_copy(update={"data_file": data_file.expanduser()})

    configure_logging("DEBUG" if verbose else settings.log_level)
    logger.debug("Using data file %s", settings.data_file)
    ctx.obj = CliState(settings=settings, store=JsonTimeSheetStore(settings.data_file))


@app.command()
def start(ctx: typer.Context) -> None:
    """Start tracking a new time period."""

    state = _state(ctx)
    time_sheet = _load(state)
    try:
        start_tracking(time_sheet)
    except TrackingStateError as exc:
        _console.print(f"[yellow]{escape(str(exc))}[/yellow]")
        return

    _console.print("Started tracking time.")
    _save(state, time_sheet)


@app.command()
def stop(ctx: typer.Context) -> None:
    """Stop the currently tracked time period."""

    state = _state(ctx)
    time_sheet = _load(state)
    try:
        duration = stop_tracking(time_sheet)
    except TrackingStateError as exc:
        _console.print(f"[yellow]{escape(str(exc))}[/yellow]")
        return

    _console.print("Stopped tracking time.")
    _console.print(f"Duration of last session: {format_duration(duration)}")
    _save(state, time_sheet)


@app.command()
def report(
    ctx: typer.Context,
    period: ReportingPeriod = typer.Argument(..., help="Reporting window."),
) -> None:
    """Show tracked time for a reporting window."""

    state = _state(ctx)
    time_sheet = _load(state)
    try:
        result = build_report(time_sheet, period, tz=state.tz)
    except LocalTimeError as exc:
        raise _fail(str(exc)) from exc
    _console.print(report_line(result))


@app.command()
def today(ctx: typer.Context) -> None:
    """Show tracked time for today."""

    report(ctx, ReportingPeriod.TODAY)


@app.command()
def week(ctx: typer.Context) -> None:
    """Show tracked time for this week."""

    report(ctx, ReportingPeriod.WEEK)


@app.command()
def month(ctx: typer.Context) -> None:
    """Show tracked time for this month."""

    report(ctx, ReportingPeriod.MONTH)


@app.command()
def summary(ctx: typer.Context) -> None:
    """Show today, this week and this month in one table."""

    state = _state(ctx)
    time_sheet = _load(state)
    tz = state.tz
    try:
        reports = build_summary(time_sheet, tz=tz)
    except LocalTimeError as exc:
        raise _fail(str(exc)) from exc
    _console.print(build_summary_table(reports, tz))


@app.command()
def status(ctx: typer.Context) -> None:
    """Show whether a session is active and for how long."""

    state = _state(ctx)
    time_sheet = _load(state)
    _console.print(build_status_panel(time_sheet, utc_now(), state.tz))


def run() -> None:
    app()
