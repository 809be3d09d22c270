"""Componentes de UI para CLI (Rich).

Formateo de duraciones, tablas y paneles; los comandos solo deciden *qué*
mostrar.
"""

from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from typing import Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import TimeSheet
from core.services.reporting import Report


def format_duration(duration: timedelta) -> str:
    """Formatea una duración como `HH:MM:SS` (las horas pueden pasar de 24).

    Las duraciones negativas (reloj desajustado entre start y end) se
    muestran como `00:00:00`.
    """

    if duration < timedelta(0):
        return "00:00:00"
    seconds = int(duration.total_seconds())
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_local(moment: datetime, tz: tzinfo) -> str:
    return moment.astimezone(tz).strftime("%Y-%m-%d %H:%M:%S %Z").strip()


def report_line(report: Report) -> str:
    return f"Total time tracked {report.kind.phrase()}: {format_duration(report.total)}"


def build_summary_table(reports: Sequence[Report], tz: tzinfo) -> Table:
    """Tabla con el total de cada ventana de reporte."""

    table = Table(title="Tracked time")
    table.add_column("Period", style="cyan", no_wrap=True)
    table.add_column("From", style="dim")
    table.add_column("To", style="dim")
    table.add_column("Tracked", style="bold green", justify="right")
    for report in reports:
        table.add_row(
            report.kind.value,
            format_local(report.window.start, tz),
            format_local(report.window.end, tz),
            format_duration(report.total),
        )
    return table


def build_status_panel(time_sheet: TimeSheet, now: datetime, tz: tzinfo) -> Panel:
    """Panel con el estado actual (Idle/Tracking) y la sesión en curso."""

    body = Text()
    active = time_sheet.active_period(now)
    if active is None:
        body.append("Not tracking.", style="bold yellow")
        border = "yellow"
    else:
        body.append("Tracking", style="bold green")
        body.append(f"\nStarted: {format_local(active.start, tz)}")
        body.append(f"\nElapsed: {format_duration(active.end - active.start)}")
        border = "green"
    body.append(f"\nCompleted periods: {len(time_sheet.periods)}", style="dim")
    return Panel(body, title="Status", border_style=border)
