"""Modelos del dominio (Pydantic v2).

Aquí viven el intervalo de tiempo (`Period`) y el estado persistente del
tracker (`TimeSheet`). Ambos validan en el borde que los instantes sean
absolutos (con zona) y los normalizan a UTC; el resto del Core puede operar
con ellos sin volver a preocuparse por offsets.

Nota:
- Estos modelos describen *qué* se registra, no *cómo* se guarda.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pydantic import AwareDatetime, BaseModel, Field, field_validator
from pydantic.config import ConfigDict


def _to_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    return value.astimezone(timezone.utc)


class Period(BaseModel):
    """Intervalo semiabierto [start, end) en UTC.

    No se exige `start <= end` a nivel de tipo: quien construye el periodo
    lo garantiza, y `overlap` trata un intervalo invertido como vacío.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    start: AwareDatetime = Field(
        ...,
        description="Inicio del intervalo (inclusive, UTC).",
    )
    end: AwareDatetime = Field(
        ...,
        description="Fin del intervalo (exclusivo, UTC).",
    )

    @field_validator("start", "end")
    @classmethod
    def _normalize_utc(cls, value: datetime) -> datetime:
        return _to_utc(value)

    @property
    def duration(self) -> timedelta:
        """Longitud del intervalo; nunca negativa."""

        return max(self.end - self.start, timedelta(0))

    def overlap(self, other: Period) -> timedelta:
        """Duración del solape entre este periodo y `other`.

        Conmutativa, sin efectos secundarios y nunca negativa.
        """

        lower = max(self.start, other.start)
        upper = min(self.end, other.end)
        if lower < upper:
            return upper - lower
        return timedelta(0)

    def contains(self, other: Period) -> bool:
        return self.start <= other.start and other.end <= self.end


class TimeSheet(BaseModel):
    """Estado completo del tracker.

    - `periods`: sesiones terminadas, en orden de inserción.
    - `active_period_start`: inicio de la sesión en curso (si la hay).

    El estado Idle/Tracking se deriva únicamente de `active_period_start`.
    """

    model_config = ConfigDict(extra="ignore")

    periods: list[Period] = Field(
        default_factory=list,
        description="Periodos completados (start, end).",
    )
    active_period_start: AwareDatetime | None = Field(
        default=None,
        description="Inicio de la sesión activa (UTC) o null si no hay sesión.",
    )

    @field_validator("active_period_start")
    @classmethod
    def _normalize_active_start(cls, value: datetime | None) -> datetime | None:
        return _to_utc(value)

    @property
    def is_tracking(self) -> bool:
        return self.active_period_start is not None

    def active_period(self, now: datetime) -> Period | None:
        """Sesión en curso cerrada provisionalmente en `now`."""

        if self.active_period_start is None:
            return None
        return Period(start=self.active_period_start, end=now)
