"""Taxonomía de errores del cliente.

Por qué una jerarquía común:
- El llamador puede capturar `StoreError` para cualquier fallo del cliente, o
  una subclase concreta cuando quiere distinguir (transporte vs HTTP vs JSON).
- Cada error lleva código, mensaje y cuerpo crudo: suficiente para
  diagnosticar sin repetir la llamada.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ErrorEnvelope(BaseModel):
    """Cuerpo de error de la API: `{"error": {"code", "message", "details"}}`."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    code: int = Field(
        default=0,
        description="Código de error; se rellena con el status HTTP si el servidor no lo envía.",
    )
    message: str = Field(
        default="",
        description="Mensaje literal del servidor.",
    )
    details: list[str] = Field(
        default_factory=list,
        description="Detalles adicionales (p.ej. campos inválidos).",
    )
    raw_body: str = Field(
        default="",
        alias="rawBody",
        description="Cuerpo de la respuesta tal cual llegó.",
    )

    @field_validator("code", mode="before")
    @classmethod
    def _null_code(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("message", mode="before")
    @classmethod
    def _null_message(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("details", mode="before")
    @classmethod
    def _null_details(cls, value: Any) -> Any:
        # `null` o elementos `null` cuentan como vacíos.
        if value is None:
            return []
        if isinstance(value, list):
            return [item for item in value if item is not None]
        return value


class ErrorReply(BaseModel):
    model_config = ConfigDict(extra="ignore")

    error: ErrorEnvelope | None = None


class StoreError(Exception):
    """Base de todos los errores del cliente."""


class TemplateSyntaxError(StoreError):
    def __init__(self, pattern: str, position: int, reason: str) -> None:
        self.pattern = pattern
        self.position = position
        self.reason = reason
        super().__init__(f"invalid path template {pattern!r} at {position}: {reason}")


class MissingVariableError(StoreError):
    def __init__(self, variable: str, pattern: str = "") -> None:
        self.variable = variable
        self.pattern = pattern
        super().__init__(f"missing required path variable {variable!r} in {pattern!r}")


class TransportReason(str, Enum):
    NETWORK = "network"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"


class TransportError(StoreError):
    """Fallo antes de conocer un status HTTP (red, timeout o cancelación)."""

    def __init__(self, reason: TransportReason, message: str = "", *, url: str = "") -> None:
        self.reason = reason
        self.message = message
        self.url = url
        text = f"store2: transport {reason.value}"
        if url:
            text += f" ({url})"
        if message:
            text += f": {message}"
        super().__init__(text)

    @property
    def cancelled(self) -> bool:
        return self.reason is TransportReason.CANCELLED

    @property
    def timed_out(self) -> bool:
        return self.reason is TransportReason.TIMEOUT


class HTTPStatusError(StoreError):
    """Respuesta no-2xx, con o sin envelope estructurado."""

    def __init__(self, status_code: int, envelope: ErrorEnvelope) -> None:
        self.status_code = status_code
        self.envelope = envelope
        text = f"store2: Error {envelope.code}"
        if envelope.message:
            text += f": {envelope.message}"
        super().__init__(text)

    @property
    def code(self) -> int:
        return self.envelope.code

    @property
    def message(self) -> str:
        return self.envelope.message

    @property
    def details(self) -> list[str]:
        return self.envelope.details

    @property
    def raw_body(self) -> str:
        return self.envelope.raw_body


class DecodeError(StoreError):
    """Respuesta 2xx cuyo cuerpo no tiene la forma esperada."""

    def __init__(self, message: str, *, status_code: int, raw_body: str) -> None:
        self.message = message
        self.status_code = status_code
        self.raw_body = raw_body
        super().__init__(f"store2: cannot decode response (HTTP {status_code}): {message}")


class ScrollProtocolError(StoreError):
    """Anomalía del protocolo de scroll (token repetido o cursor ya terminado)."""
