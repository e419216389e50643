"""Punto de entrada de la librería.

Uso:
    async with StoreClient(ClientConfig(user="token")) as store:
        me = await store.root.me()
        async for product in store.products.iter_products("AD8CCDD5F9", Area.WORK):
            ...
"""

from __future__ import annotations

import httpx

from store2.adapters.http_client import build_async_client
from store2.adapters.request_builder import RequestBuilder
from store2.core.config import ClientConfig, StoreSettings
from store2.core.services import (
    AvailabilitiesService,
    CatalogsService,
    JobsService,
    ProductsService,
    RootService,
)


class StoreClient:
    """Agrupa los servicios de recursos sobre un único `httpx.AsyncClient`.

    Si el llamador inyecta `http_client`, el ciclo de vida es suyo: `aclose`
    solo cierra el cliente que se creó aquí.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self._owns_client = http_client is None
        self.http_client = http_client or build_async_client(self.config, transport=transport)
        self.builder = RequestBuilder(self.config, self.http_client)

        self.root = RootService(self.builder)
        self.catalogs = CatalogsService(self.builder)
        self.products = ProductsService(self.builder)
        self.jobs = JobsService(self.builder)
        self.availabilities = AvailabilitiesService(self.builder)

    @classmethod
    def from_settings(
        cls,
        settings: StoreSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "StoreClient":
        settings = settings or StoreSettings()
        return cls(settings.client_config(), transport=transport)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> "StoreClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
