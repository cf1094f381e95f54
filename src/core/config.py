"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/sesión/clouds.yaml) lean config de forma consistente.

Nota:
- Las credenciales de la nube NO viven aquí: se leen de `clouds.yaml` o de
  variables `OS_*` (ver `adapters.clouds`).
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "osc-lite"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "osc-lite"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "osc-lite"
    return Path.home() / ".config" / "osc-lite"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Ajustes del cliente (`OSC_*`), independientes del cloud elegido.

    Por qué pydantic-settings:
    - Los valores inválidos (p.ej. `OSC_PAGE_SIZE=0`) fallan al arrancar, no a mitad de un listado.
    - CLI, sesión y pager leen el mismo contrato.
    """

    model_config = SettingsConfigDict(
        env_prefix="OSC_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout por request HTTP (segundos).",
    )
    user_agent: str = Field(
        default="osc-lite/0.1",
        min_length=1,
        description="User-Agent enviado a las APIs de OpenStack.",
    )
    verify_tls: bool = Field(
        default=True,
        description="Verificar certificados TLS de los endpoints.",
    )

    default_output: Literal["table", "json"] = Field(
        default="table",
        description="Formato de salida por defecto de la CLI.",
    )
    default_interface: str = Field(
        default="public",
        min_length=1,
        description="Interfaz del catálogo (public/internal/admin) si el perfil no la define.",
    )

    page_size: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Tamaño de página para listados paginados (marker/limit).",
    )
    max_items: int = Field(
        default=10000,
        ge=1,
        description="Techo por defecto de elementos devueltos por un listado.",
    )

    clouds_yaml_path: Path | None = Field(
        default=None,
        description="Ruta explícita a clouds.yaml (si no, se buscan las ubicaciones estándar).",
    )
    log_json: bool = Field(
        default=False,
        description="Emitir logs en JSON (stderr) en vez de formato Rich.",
    )
