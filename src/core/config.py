"""Configuración del Core.

Centraliza variables de entorno (pydantic-settings) para que la CLI y los
adaptadores lean la misma configuración:
- `WORKTIME_DATA_FILE`: ruta del JSON de estado.
- `WORKTIME_TIMEZONE`: zona IANA que sustituye a la zona local del sistema.
- `WORKTIME_LOG_LEVEL`: nivel de logging (DEBUG, INFO, WARNING...).
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pendulum
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_DATA_FILENAME = ".work_time_tracker.json"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "worktime"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "worktime"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "worktime"
    return Path.home() / ".config" / "worktime"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def default_data_file() -> Path:
    return Path.home() / DEFAULT_DATA_FILENAME


class AppSettings(BaseSettings):
    """Configuración central de la aplicación."""

    model_config = SettingsConfigDict(
        env_prefix="WORKTIME_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    data_file: Path = Field(
        default_factory=default_data_file,
        description="Fichero JSON con los periodos registrados.",
    )
    timezone: str | None = Field(
        default=None,
        description="Zona IANA para las ventanas de reporte (p.ej. 'Europe/Madrid').",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging de la aplicación.",
    )

    @field_validator("data_file")
    @classmethod
    def _expand_user(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        try:
            ZoneInfo(value.strip())
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value!r}") from exc
        return value.strip()

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    def local_timezone(self) -> tzinfo:
        """Zona usada para alinear día/semana/mes.

        Si `timezone` no está configurada, se usa la zona local del sistema.
        """

        if self.timezone:
            return ZoneInfo(self.timezone)
        return pendulum.local_timezone()
