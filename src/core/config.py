"""Configuración de la aplicación.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El cliente (`adapters.tumblr_client`) no lee el entorno: solo la CLI/app
  construye `TumblrSettings` y se lo pasa a `TumblrClient.from_settings`.
"""

from __future__ import annotations

from pathlib import Path

import typer
from dotenv import set_key
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

VERSION = "0.0.1"
BASE_URL = "http://api.tumblr.com/v2/"
USER_AGENT = "github.com/lestopher/tumblr v" + VERSION


def get_user_env_file() -> Path:
    """`.env` por usuario (XDG en Linux, AppData en Windows, Application Support en macOS)."""

    return Path(typer.get_app_dir("tumblr-d2")) / ".env"


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env del usuario.

    El resto de líneas del fichero se conserva; los valores `None` se omiten.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)
    env_path.touch(exist_ok=True)
    for key, value in values.items():
        if value is not None:
            set_key(env_path, key, value, quote_mode="never")
    return env_path


class TumblrSettings(BaseSettings):
    """Configuración central del cliente.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el cliente.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="TUMBLR_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default=BASE_URL,
        min_length=8,
        description="Endpoint base de la API v2 (debe terminar en '/').",
    )
    user_agent: str = Field(
        default=USER_AGENT,
        min_length=1,
        description="User-Agent enviado en cada request.",
    )

    client_id: str = Field(
        default="",
        description="Consumer key de la aplicación OAuth (query `client_id`).",
    )
    client_secret: str = Field(
        default="",
        description="Consumer secret de la aplicación OAuth (query `client_secret`).",
    )
    access_token: str = Field(
        default="",
        description="Token de acceso de un usuario ya autenticado (query `access_token`).",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    strict_status: bool = Field(
        default=False,
        description="Si es True, respuestas no-2xx lanzan `ApiError` tras decodificar.",
    )
