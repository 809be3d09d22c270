"""Contrato de almacenamiento del `TimeSheet`.

Reglas:
- `load` nunca falla porque el fichero no exista: devuelve un `TimeSheet`
  vacío. Solo falla (con `StorageError`) ante I/O real o datos corruptos.
- `save` sustituye el estado previo completo (last-writer-wins).
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from core.domain.models import TimeSheet


@runtime_checkable
class TimeSheetStore(Protocol):
    """Contrato mínimo para persistir el estado del tracker."""

    def load(self) -> TimeSheet:
        """Carga el estado persistido (o uno vacío si aún no existe)."""

        ...

    def save(self, time_sheet: TimeSheet) -> Path:
        """Persiste `time_sheet` completo y devuelve la ruta escrita."""

        ...
