"""Configuración del cliente.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP) y servicios lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "gamejolt-client"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "gamejolt-client"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "gamejolt-client"
    return Path.home() / ".config" / "gamejolt-client"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# gamejolt-client user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central del cliente.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters/servicios.
    """

    model_config = SettingsConfigDict(
        env_prefix="GAMEJOLT_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    game_id: int | None = Field(
        default=None,
        gt=0,
        description="Identificador numérico del juego registrado en el servicio.",
    )
    private_key: str | None = Field(
        default=None,
        min_length=1,
        description="Clave privada compartida usada para firmar cada request.",
    )

    api_root: str = Field(
        default="http://gamejolt.com/api/game",
        min_length=8,
        description="Raíz de la API (sin versión ni barra final).",
    )
    api_version: str = Field(
        default="v1",
        min_length=1,
        description="Versión de la API insertada en la ruta base.",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="gamejolt-client/0.1",
        min_length=1,
        description="User-Agent enviado al servicio.",
    )

    data_fetch_concurrency: int = Field(
        default=1,
        ge=1,
        le=32,
        description="Workers para el fan-out por clave en operaciones batch (1 = secuencial).",
    )
