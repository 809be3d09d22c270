"""Errores del dominio.

Jerarquía:
- `TrackingStateError`: condiciones reportables del ciclo start/stop. No son
  fatales y nunca mutan el `TimeSheet`.
- `LocalTimeError`: conversión hora local -> UTC imposible de resolver sin
  adivinar (DST). Abortan el reporte.
- `StorageError`: fallos de I/O o de decodificación del fichero de estado.
"""

from __future__ import annotations

from datetime import datetime


class TrackerError(Exception):
    """Base de todos los errores del tracker."""


class TrackingStateError(TrackerError):
    """Transición start/stop no válida para el estado actual."""


class AlreadyTrackingError(TrackingStateError):
    def __init__(self, active_since: datetime) -> None:
        super().__init__("Already tracking time.")
        self.active_since = active_since


class NoActiveSessionError(TrackingStateError):
    def __init__(self) -> None:
        super().__init__("No active time tracking period to stop.")


class LocalTimeError(TrackerError):
    """Una hora local naive no corresponde a exactamente un instante UTC."""

    def __init__(self, message: str, naive: datetime) -> None:
        super().__init__(message)
        self.naive = naive


class AmbiguousLocalTimeError(LocalTimeError):
    """La hora local cae en el solape de un cambio de hora ("fall back")."""

    def __init__(self, naive: datetime, earliest: datetime, latest: datetime) -> None:
        super().__init__(
            f"Ambiguous local time during conversion: {naive.isoformat()} "
            f"is {earliest.isoformat()} or {latest.isoformat()}",
            naive,
        )
        self.earliest = earliest
        self.latest = latest

    @property
    def candidates(self) -> tuple[datetime, datetime]:
        return self.earliest, self.latest


class InvalidLocalTimeError(LocalTimeError):
    """La hora local cae en el hueco de un cambio de hora ("spring forward")."""

    def __init__(self, naive: datetime) -> None:
        super().__init__(f"Invalid local time during conversion: {naive.isoformat()}", naive)


class StorageError(TrackerError):
    """No se pudo leer o escribir el fichero de estado."""

    def __init__(self, message: str, path: object | None = None) -> None:
        super().__init__(message)
        self.path = path
