"""Configuración del cliente.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Separa la configuración *leída* (`StoreSettings`, mutable, con fuentes
  externas) de la configuración *usada* por las llamadas (`ClientConfig`,
  inmutable y compartible entre llamadas concurrentes).
"""

from __future__ import annotations

import os
import platform
import sys
from pathlib import Path

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from store2 import __version__

DEFAULT_BASE_URL = "https://store.meplato.com/api/v2"

USER_AGENT = (
    f"meplato-store-python-client/{__version__} "
    f"({sys.platform}/{platform.machine() or 'unknown'})"
)


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "store2"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "store2"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "store2"
    return Path.home() / ".config" / "store2"


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


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    # Vacío o None conserva el valor guardado.
    existing.update({k: v for k, v in values.items() if v})

    lines = ["# store2 user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    if not sys.platform.startswith("win"):
        env_path.chmod(0o600)
    return env_path


class ClientConfig(BaseModel):
    """Configuración inmutable que reciben todas las llamadas.

    Se construye una vez y se pasa por referencia. Es segura para llamadas
    concurrentes porque no se puede modificar; sustituir el transporte o la
    configuración con llamadas en curso no está soportado.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        min_length=8,
        description="URL base de la API, sin barra final.",
    )
    user: str = Field(
        default="",
        description="Usuario (o token) para Basic-Auth.",
    )
    password: str = Field(
        default="",
        repr=False,
        description="Password para Basic-Auth.",
    )
    user_agent: str = Field(
        default=USER_AGENT,
        min_length=1,
        description="Cabecera de identificación del cliente.",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por defecto del transporte (segundos).",
    )

    @property
    def has_credentials(self) -> bool:
        return bool(self.user or self.password)

    def url_for(self, path: str) -> str:
        return self.base_url.rstrip("/") + path


class StoreSettings(BaseSettings):
    """Configuración leída del entorno.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core.
    - Un único contrato de configuración para CLI y librería.
    """

    model_config = SettingsConfigDict(
        env_prefix="STORE_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    url: str = Field(
        default=DEFAULT_BASE_URL,
        min_length=8,
        validation_alias=AliasChoices("STORE_URL", "STORE2_URL"),
        description="URL base de la API.",
    )
    user: str | None = Field(
        default=None,
        validation_alias=AliasChoices("STORE_USER", "STORE2_USER"),
        description="Usuario/token para Basic-Auth.",
    )
    password: str | None = Field(
        default=None,
        validation_alias=AliasChoices("STORE_PASSWORD", "STORE2_PASSWORD"),
        description="Password para Basic-Auth.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default=USER_AGENT,
        min_length=1,
        description="User-Agent del cliente.",
    )
    netrc_path: Path | None = Field(
        default=None,
        description="Ruta alternativa a ~/.netrc para buscar credenciales.",
    )

    def client_config(self) -> ClientConfig:
        """Resuelve credenciales (entorno, luego .netrc) y congela la config."""

        from store2.adapters.credentials import resolve_credentials  # noqa: PLC0415

        user, password = resolve_credentials(
            base_url=self.url,
            user=self.user,
            password=self.password,
            netrc_path=self.netrc_path,
        )
        return ClientConfig(
            base_url=self.url.rstrip("/"),
            user=user,
            password=password,
            user_agent=self.user_agent,
            timeout_seconds=self.http_timeout_seconds,
        )
