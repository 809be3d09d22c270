"""Reporting engine.

Sums how much tracked time falls inside a calendar window. Completed
periods are clipped against the window; an in-progress session is closed
provisionally at a single ``now`` snapshot taken once per report, so the
window resolution and the clipping of the active session agree on the
same instant.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Iterable

from core.domain.models import Period, TimeSheet
from core.domain.reporting_period import ReportingPeriod
from core.services.calendar_windows import resolve_window
from core.services.tracking import utc_now


@dataclass(frozen=True)
class Report:
    """Total tracked time for one reporting window."""

    kind: ReportingPeriod
    window: Period
    total: timedelta
    generated_at: datetime


def tracked_time_in(
    time_sheet: TimeSheet,
    window: Period,
    *,
    now: datetime | None = None,
) -> timedelta:
    """Tracked time overlapping ``window``, including the active session."""

    now = now or utc_now()
    total = sum((period.overlap(window) for period in time_sheet.periods), timedelta(0))

    active = time_sheet.active_period(now)
    if active is not None:
        total += active.overlap(window)
    return total


def build_report(
    time_sheet: TimeSheet,
    kind: ReportingPeriod,
    *,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> Report:
    """Resolve the window for ``kind`` and total it from one ``now`` snapshot."""

    snapshot = now or utc_now()
    window = resolve_window(kind, now=snapshot, tz=tz)
    return Report(
        kind=kind,
        window=window,
        total=tracked_time_in(time_sheet, window, now=snapshot),
        generated_at=snapshot,
    )


def build_summary(
    time_sheet: TimeSheet,
    kinds: Iterable[ReportingPeriod] = tuple(ReportingPeriod),
    *,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> list[Report]:
    """Reports for several windows sharing the same ``now`` snapshot."""

    snapshot = now or utc_now()
    return [build_report(time_sheet, kind, now=snapshot, tz=tz) for kind in kinds]
