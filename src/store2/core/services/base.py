"""Base común de los servicios de recursos.

Aquí se decide la superficie Python: el puente devuelve los errores como
valores y este `_call` los lanza tal cual, para que el llamador use
`try/except` sobre las clases tipadas de `store2.core.errors`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, TypeVar

from pydantic import BaseModel

from store2.core.errors import DecodeError, HTTPStatusError, TransportError
from store2.core.interfaces.gateway import RequestGateway
from store2.core.uritemplate import ParameterSet, Template

if TYPE_CHECKING:
    from store2.adapters.request_builder import CallOptions

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseService:
    def __init__(self, gateway: RequestGateway) -> None:
        self._gateway = gateway

    async def _call(
        self,
        method: str,
        template: Template,
        params: ParameterSet,
        result_type: type[ModelT] | None,
        *,
        body: Mapping[str, Any] | None = None,
        call: CallOptions | None = None,
    ) -> ModelT | None:
        request = self._gateway.build(method, template, params, body, call=call)
        response = await self._gateway.execute(request, call)
        if isinstance(response, TransportError):
            raise response

        result = self._gateway.decode(response, result_type)
        if isinstance(result, (HTTPStatusError, DecodeError)):
            raise result
        return result
