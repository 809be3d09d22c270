"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.json_store import JsonTimeSheetStore
from cli.ui_components import format_local
from core.config import AppSettings
from core.domain.errors import LocalTimeError, StorageError
from core.domain.reporting_period import ReportingPeriod
from core.services.calendar_windows import resolve_window
from core.services.tracking import utc_now

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_data_file(store: JsonTimeSheetStore) -> tuple[bool, str]:
    if not store.path.exists():
        return True, f"{store.path} (not created yet)"
    try:
        time_sheet = store.load()
    except StorageError as exc:
        return False, str(exc)
    state = "tracking" if time_sheet.is_tracking else "idle"
    return True, f"{store.path} ({len(time_sheet.periods)} periods, {state})"


@app.command()
def run(ctx: typer.Context) -> None:
    """Check the data file, the timezone and today's reporting windows."""

    settings: AppSettings = ctx.obj.settings if ctx.obj is not None else AppSettings()
    store = JsonTimeSheetStore(settings.data_file)

    table = Table(title="Worktime Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    ok_data, detail_data = _check_data_file(store)
    table.add_row("Data file", "OK" if ok_data else "FAIL", escape(detail_data))

    tz = settings.local_timezone()
    source = "configured" if settings.timezone else "system"
    table.add_row("Timezone", "OK", f"{tz} ({source})")

    now = utc_now()
    failures = 0 if ok_data else 1
    for kind in ReportingPeriod:
        try:
            window = resolve_window(kind, now=now, tz=tz)
        except LocalTimeError as exc:
            failures += 1
            table.add_row(f"Window: {kind.value}", "FAIL", escape(str(exc)))
            continue
        table.add_row(
            f"Window: {kind.value}",
            "OK",
            f"{format_local(window.start, tz)} -> {format_local(window.end, tz)}",
        )

    _console.print(table)
    if failures:
        raise typer.Exit(code=1)
