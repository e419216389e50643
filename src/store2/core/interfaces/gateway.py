"""Contrato del puente HTTP que usan los servicios.

Por qué Protocol:
- Los servicios del Core no importan httpx: solo conocen este contrato.
- En tests se puede sustituir por un doble sin tocar el transporte real.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel

from store2.core.errors import DecodeError, HTTPStatusError, TransportError
from store2.core.uritemplate import ParameterSet, Template

ModelT = TypeVar("ModelT", bound=BaseModel)


@runtime_checkable
class RequestGateway(Protocol):
    """Construye, ejecuta y decodifica una petición.

    Reglas de diseño:
    - `execute` y `decode` *devuelven* el error; no lo lanzan.
    - `build` sí lanza `MissingVariableError`: es un fallo del llamador.
    """

    def build(
        self,
        method: str,
        template: Template,
        params: ParameterSet,
        body: Mapping[str, Any] | None = None,
        *,
        call: Any = None,
    ) -> Any:
        ...

    async def execute(self, request: Any, call: Any = None) -> Any | TransportError:
        ...

    def decode(
        self, response: Any, result_type: type[ModelT] | None
    ) -> ModelT | None | HTTPStatusError | DecodeError:
        ...
