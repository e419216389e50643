"""Serialización de payloads hacia el wire.

Dos disciplinas:
- create / replace / upsert: valores planos; lo que es `None` no se envía.
  No validamos campos obligatorios: eso lo decide el servidor (400).
- update: campo a campo. Solo viajan los campos `set` (con su valor) y los
  `cleared` (como `null`); los `unset` no aparecen.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from store2.core.domain.update import UpdateField, UpdatePayload


def encode_payload(payload: BaseModel) -> dict[str, Any]:
    """Payload de create/replace/upsert: alias del wire, sin claves `None`."""

    if isinstance(payload, UpdatePayload):
        raise TypeError("update payloads must be encoded with encode_update()")
    return payload.model_dump(mode="json", by_alias=True, exclude_none=True)


def encode_update(payload: UpdatePayload) -> dict[str, Any]:
    """Payload de update selectivo, en el orden de declaración de los campos."""

    out: dict[str, Any] = {}
    for name, info in type(payload).model_fields.items():
        field = getattr(payload, name)
        if not isinstance(field, UpdateField):
            raise TypeError(f"{type(payload).__name__}.{name} is not an UpdateField")
        if field.is_unset:
            continue
        key = info.alias or name
        if field.is_cleared:
            out[key] = None
        else:
            out[key] = to_jsonable_python(field.value, by_alias=True, exclude_none=True)
    return out
