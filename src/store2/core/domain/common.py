"""Bases compartidas por los modelos de recursos.

Por qué una base:
- Los nombres Python (snake_case) se mapean a los del wire (camelCase) con un
  alias generator; solo los nombres irregulares (`cu`, `ou`, `lang`, ...)
  llevan alias explícito.
- `extra="allow"`: un modelo de lectura no pierde campos que este cliente no
  declara.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Modelo leído desde (o enviado a) la API."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class RequestModel(BaseModel):
    """Payload plano de create/replace/upsert (todos los campos opcionales)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class KindResponse(WireModel):
    kind: str | None = Field(default=None, description="Discriminador, p.ej. store#products/search.")


class LinkResponse(KindResponse):
    """Respuesta de create/replace/update/upsert: enlace al recurso."""

    link: str | None = None


class Listing(KindResponse):
    """Envelope de listados paginados por offset."""

    self_link: str | None = None
    next_link: str | None = None
    previous_link: str | None = None
    total_items: int = Field(default=0, ge=0)
