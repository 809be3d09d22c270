"""Ciclo de vida de la sesión (start/stop).

Dos estados, derivados de `TimeSheet.active_period_start`:
- Idle: no hay sesión activa.
- Tracking: hay un instante de inicio registrado.

Cada invocación de la CLI aplica como mucho una transición. Las transiciones
inválidas levantan `TrackingStateError` sin tocar el `TimeSheet`.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from core.domain.errors import AlreadyTrackingError, NoActiveSessionError
from core.domain.models import Period, TimeSheet


logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def start_tracking(time_sheet: TimeSheet, *, now: datetime | None = None) -> datetime:
    """Idle -> Tracking. Devuelve el instante de inicio registrado."""

    if time_sheet.active_period_start is not None:
        raise AlreadyTrackingError(time_sheet.active_period_start)

    started = (now or utc_now()).astimezone(timezone.utc)
    time_sheet.active_period_start = started
    logger.info("Session started at %s", started.isoformat())
    return started


def stop_tracking(time_sheet: TimeSheet, *, now: datetime | None = None) -> timedelta:
    """Tracking -> Idle. Añade el periodo cerrado y devuelve su duración."""

    start = time_sheet.active_period_start
    if start is None:
        raise NoActiveSessionError()

    period = Period(start=start, end=now or utc_now())
    time_sheet.periods.append(period)
    time_sheet.active_period_start = None
    logger.info("Session stopped at %s", period.end.isoformat())
    return period.end - period.start
