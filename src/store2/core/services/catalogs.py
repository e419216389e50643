"""Servicio de catálogos."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from store2.core.codec import encode_payload
from store2.core.domain.area import Area
from store2.core.domain.catalogs import (
    Catalog,
    CatalogSearchResponse,
    CreateCatalog,
    PublishResponse,
    PublishStatusResponse,
    PurgeResponse,
)
from store2.core.services.base import BaseService
from store2.core.uritemplate import parse

if TYPE_CHECKING:
    from store2.adapters.request_builder import CallOptions

CATALOGS_PATH = parse("/catalogs")
CATALOG_PATH = parse("/catalogs/{pin}")
PUBLISH_PATH = parse("/catalogs/{pin}/publish")
PUBLISH_STATUS_PATH = parse("/catalogs/{pin}/publish/status")
PURGE_PATH = parse("/catalogs/{pin}/{area}")
SEARCH_PATH = parse("/catalogs{?q,skip,take,sort}")


@dataclass
class CatalogSearchOptions:
    """Filtros de búsqueda; `None` significa "no enviar"."""

    q: str | None = None
    skip: int | None = None
    take: int | None = None
    sort: str | None = None


class CatalogsService(BaseService):
    async def create(self, catalog: CreateCatalog, *, call: CallOptions | None = None) -> Catalog:
        return await self._call(
            "POST", CATALOGS_PATH, {}, Catalog, body=encode_payload(catalog), call=call
        )

    async def get(self, pin: str, *, call: CallOptions | None = None) -> Catalog:
        return await self._call("GET", CATALOG_PATH, {"pin": pin}, Catalog, call=call)

    async def publish(self, pin: str, *, call: CallOptions | None = None) -> PublishResponse:
        """Inicia la publicación (work -> live); el progreso va por `publish_status`."""

        return await self._call("POST", PUBLISH_PATH, {"pin": pin}, PublishResponse, call=call)

    async def publish_status(
        self, pin: str, *, call: CallOptions | None = None
    ) -> PublishStatusResponse:
        return await self._call(
            "GET", PUBLISH_STATUS_PATH, {"pin": pin}, PublishStatusResponse, call=call
        )

    async def purge(
        self, pin: str, area: Area | str, *, call: CallOptions | None = None
    ) -> PurgeResponse:
        """Borra todos los productos del área indicada."""

        return await self._call(
            "DELETE", PURGE_PATH, {"pin": pin, "area": area}, PurgeResponse, call=call
        )

    async def search(
        self, options: CatalogSearchOptions | None = None, *, call: CallOptions | None = None
    ) -> CatalogSearchResponse:
        options = options or CatalogSearchOptions()
        params = {
            "q": options.q,
            "skip": options.skip,
            "take": options.take,
            "sort": options.sort,
        }
        return await self._call("GET", SEARCH_PATH, params, CatalogSearchResponse, call=call)
