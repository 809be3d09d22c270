"""Resolución de ventanas de calendario (día/semana/mes) a UTC.

Cada límite se calcula primero como fecha/hora local *naive* (aritmética de
calendario sobre fechas, nunca sumando 24h fijas) y después se convierte a un
instante UTC con las reglas de la zona local.

La conversión puede fallar de dos formas, ambas fatales para el reporte:
- hora ambigua (cambio "fall back"): dos instantes posibles;
- hora inexistente (cambio "spring forward"): ningún instante.
No se adivina: un límite incorrecto corrompería el total sin que se note.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo

from core.config import AppSettings
from core.domain.errors import AmbiguousLocalTimeError, InvalidLocalTimeError
from core.domain.models import Period
from core.domain.reporting_period import ReportingPeriod
from core.services.tracking import utc_now


def local_to_utc(naive: datetime, tz: tzinfo) -> datetime:
    """Convierte una hora local naive en `tz` a un instante UTC.

    Raises:
    - `AmbiguousLocalTimeError` con ambos candidatos (el más temprano primero).
    - `InvalidLocalTimeError` si la hora cae en un hueco de DST.
    """

    earlier = naive.replace(tzinfo=tz, fold=0)
    later = naive.replace(tzinfo=tz, fold=1)
    if earlier.utcoffset() == later.utcoffset():
        return earlier.astimezone(timezone.utc)

    earlier_utc = earlier.astimezone(timezone.utc)
    later_utc = later.astimezone(timezone.utc)
    # En un hueco, el instante no vuelve a la misma hora de pared.
    if earlier_utc.astimezone(tz).replace(tzinfo=None) != naive:
        raise InvalidLocalTimeError(naive)

    first, second = sorted((earlier_utc, later_utc))
    raise AmbiguousLocalTimeError(naive, first, second)


def _local_date(now: datetime | None, tz: tzinfo) -> date:
    return (now or utc_now()).astimezone(tz).date()


def _resolve_tz(tz: tzinfo | None) -> tzinfo:
    return tz or AppSettings().local_timezone()


def _window(start: date, end: date, tz: tzinfo) -> Period:
    return Period(
        start=local_to_utc(datetime.combine(start, time.min), tz),
        end=local_to_utc(datetime.combine(end, time.min), tz),
    )


def first_of_next_month(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def get_today_period(*, now: datetime | None = None, tz: tzinfo | None = None) -> Period:
    """Medianoche local de hoy -> medianoche local de mañana."""

    zone = _resolve_tz(tz)
    today = _local_date(now, zone)
    return _window(today, today + timedelta(days=1), zone)


def get_week_period(*, now: datetime | None = None, tz: tzinfo | None = None) -> Period:
    """Semana alineada a lunes (lunes=0, domingo=6) -> siete días después."""

    zone = _resolve_tz(tz)
    today = _local_date(now, zone)
    monday = today - timedelta(days=today.weekday())
    return _window(monday, monday + timedelta(weeks=1), zone)


def get_month_period(*, now: datetime | None = None, tz: tzinfo | None = None) -> Period:
    """Día 1 del mes local -> día 1 del mes siguiente (con cambio de año)."""

    zone = _resolve_tz(tz)
    today = _local_date(now, zone)
    first = today.replace(day=1)
    return _window(first, first_of_next_month(first), zone)


def resolve_window(
    kind: ReportingPeriod,
    *,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> Period:
    """Ventana UTC [start, end) para `kind` evaluada en `now`."""

    if kind is ReportingPeriod.TODAY:
        return get_today_period(now=now, tz=tz)
    if kind is ReportingPeriod.WEEK:
        return get_week_period(now=now, tz=tz)
    if kind is ReportingPeriod.MONTH:
        return get_month_period(now=now, tz=tz)
    raise ValueError(f"Unsupported reporting period: {kind!r}")
