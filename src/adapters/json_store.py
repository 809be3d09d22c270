"""Persistencia JSON del `TimeSheet`.

Formato estable (sin campo de versión):

    {"periods": [{"start": "...Z", "end": "...Z"}, ...],
     "active_period_start": "...Z" | null}

Reglas:
- Fichero inexistente o vacío -> `TimeSheet` vacío.
- JSON mal formado o esquema inválido -> `StorageError` (nunca se descarta
  el estado del usuario en silencio).
- `save` escribe un temporal en el mismo directorio y lo renombra encima del
  destino; un lector nunca ve una escritura a medias.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from core.domain.errors import StorageError
from core.domain.models import TimeSheet


logger = logging.getLogger(__name__)


def dump_time_sheet(time_sheet: TimeSheet) -> str:
    """Serializa `TimeSheet` a JSON UTF-8 con formato estable."""

    payload = time_sheet.model_dump(mode="json")
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"


def parse_time_sheet(raw: str) -> TimeSheet:
    """Decodifica el contenido del fichero; texto vacío equivale a estado vacío."""

    if not raw.strip():
        return TimeSheet()
    return TimeSheet.model_validate(json.loads(raw))


class JsonTimeSheetStore:
    """Implementación de `TimeSheetStore` sobre un único fichero JSON."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> TimeSheet:
        if not self.path.exists():
            logger.debug("No state file at %s, starting empty", self.path)
            return TimeSheet()

        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Could not read {self.path}: {exc}", self.path) from exc

        try:
            time_sheet = parse_time_sheet(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Malformed JSON in {self.path}: {exc}", self.path) from exc
        except ValidationError as exc:
            raise StorageError(f"Invalid timesheet data in {self.path}: {exc}", self.path) from exc

        logger.debug(
            "Loaded %d period(s) from %s (tracking=%s)",
            len(time_sheet.periods),
            self.path,
            time_sheet.is_tracking,
        )
        return time_sheet

    def save(self, time_sheet: TimeSheet) -> Path:
        content = dump_time_sheet(time_sheet)
        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                dir=str(self.path.parent),
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Could not write {self.path}: {exc}", self.path) from exc

        logger.info("Saved %d period(s) to %s", len(time_sheet.periods), self.path)
        return self.path
