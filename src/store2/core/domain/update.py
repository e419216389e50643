"""Campos tri-estado para actualizaciones selectivas.

Por qué no basta con `Optional`:
- En un update hay tres intenciones distintas: no tocar el campo, vaciarlo, o
  darle un valor. Con `None` solo se pueden expresar dos.
- `UpdateField` etiqueta el estado explícitamente, así "omitir" y "borrar"
  nunca se confunden.

Uso:
    UpdateProduct(name="X")                     # set
    UpdateProduct(name=UpdateField.clear())     # cleared -> null en el wire
    UpdateProduct()                             # unset  -> clave omitida
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, TypeVar, get_args

from pydantic import BaseModel, ConfigDict, GetCoreSchemaHandler
from pydantic.alias_generators import to_camel
from pydantic_core import core_schema

T = TypeVar("T")


class FieldState(str, Enum):
    UNSET = "unset"
    CLEARED = "cleared"
    SET = "set"


class UpdateField(Generic[T]):
    """Valor tri-estado: unset / cleared / set."""

    __slots__ = ("_state", "_value")

    def __init__(self, state: FieldState = FieldState.UNSET, value: T | None = None) -> None:
        if state is not FieldState.SET and value is not None:
            raise ValueError(f"an {state.value} update field cannot carry a value")
        self._state = state
        self._value = value

    @classmethod
    def unset(cls) -> "UpdateField[Any]":
        return cls(FieldState.UNSET)

    @classmethod
    def clear(cls) -> "UpdateField[Any]":
        return cls(FieldState.CLEARED)

    @classmethod
    def of(cls, value: T) -> "UpdateField[T]":
        return cls(FieldState.SET, value)

    @property
    def state(self) -> FieldState:
        return self._state

    @property
    def value(self) -> T | None:
        return self._value

    @property
    def is_unset(self) -> bool:
        return self._state is FieldState.UNSET

    @property
    def is_cleared(self) -> bool:
        return self._state is FieldState.CLEARED

    @property
    def is_set(self) -> bool:
        return self._state is FieldState.SET

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UpdateField):
            return NotImplemented
        return self._state is other._state and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._state, repr(self._value)))

    def __copy__(self) -> "UpdateField[T]":
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> "UpdateField[T]":
        return self

    def __repr__(self) -> str:
        if self.is_set:
            return f"UpdateField.of({self._value!r})"
        return f"UpdateField.{'clear' if self.is_cleared else 'unset'}()"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        # Acepta un UpdateField ya construido o un valor plano (que pasa a "set").
        args = get_args(source_type)
        inner = handler.generate_schema(args[0]) if args else core_schema.any_schema()
        return core_schema.union_schema(
            [
                core_schema.is_instance_schema(cls),
                core_schema.no_info_after_validator_function(cls.of, inner),
            ],
            mode="left_to_right",
        )


class UpdatePayload(BaseModel):
    """Base de los payloads de actualización selectiva.

    Todos los campos deben declararse como `UpdateField[...]` con default
    `UNSET`; la serialización vive en `store2.core.codec.encode_update`.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    def to_wire(self) -> dict[str, Any]:
        from store2.core.codec import encode_update  # noqa: PLC0415

        return encode_update(self)


UNSET: UpdateField[Any] = UpdateField.unset()
