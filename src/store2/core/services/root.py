"""Endpoint raíz: identidad del usuario y comprobación de conectividad."""

from __future__ import annotations

from typing import TYPE_CHECKING

from store2.core.domain.me import MeResponse
from store2.core.services.base import BaseService
from store2.core.uritemplate import parse

if TYPE_CHECKING:
    from store2.adapters.request_builder import CallOptions

ROOT_PATH = parse("/")


class RootService(BaseService):
    async def me(self, *, call: CallOptions | None = None) -> MeResponse:
        """Devuelve usuario, merchant y enlaces del usuario autenticado."""

        return await self._call("GET", ROOT_PATH, {}, MeResponse, call=call)

    async def ping(self, *, call: CallOptions | None = None) -> None:
        """`HEAD /`: lanza un `StoreError` si la API no responde 2xx."""

        await self._call("HEAD", ROOT_PATH, {}, None, call=call)
