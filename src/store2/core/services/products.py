"""Servicio de productos.

Dos formas de paginar:
- `search`: por offset (`skip`/`take`/`sort`), sin estado.
- `scroll`: recorrido completo por token. `scroll` devuelve una página;
  `iter_pages` / `iter_products` conducen el `ScrollCursor`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, AsyncIterator

from store2.core.codec import encode_payload, encode_update
from store2.core.domain.area import Area
from store2.core.domain.products import (
    CreateProduct,
    CreateProductResponse,
    Product,
    ProductSearchResponse,
    ReplaceProduct,
    ReplaceProductResponse,
    ScrollResponse,
    UpdateProduct,
    UpdateProductResponse,
    UpsertProduct,
    UpsertProductResponse,
)
from store2.core.pagination import ScrollCursor, scroll_pages
from store2.core.services.base import BaseService
from store2.core.uritemplate import parse

if TYPE_CHECKING:
    from store2.adapters.request_builder import CallOptions

PRODUCTS_PATH = parse("/catalogs/{pin}/{area}/products")
PRODUCT_PATH = parse("/catalogs/{pin}/{area}/products/{spn}")
SEARCH_PATH = parse("/catalogs/{pin}/{area}/products{?q,skip,take,sort}")
SCROLL_PATH = parse("/catalogs/{pin}/{area}/products/scroll{?pageToken,mode,version}")
UPSERT_PATH = parse("/catalogs/{pin}/{area}/products/upsert")


class ScrollMode(str, Enum):
    """`full`: todos los productos de la versión; `diff`: solo los cambios."""

    FULL = "full"
    DIFF = "diff"


@dataclass
class ProductSearchOptions:
    q: str | None = None
    skip: int | None = None
    take: int | None = None
    sort: str | None = None


@dataclass
class ScrollOptions:
    """Opciones de scroll.

    `page_token` solo se rellena a mano para reanudar un recorrido; los
    iteradores lo gestionan solos.
    """

    page_token: str | None = None
    mode: ScrollMode | str | None = None
    version: int | None = None


class ProductsService(BaseService):
    async def create(
        self, pin: str, area: Area | str, product: CreateProduct, *, call: CallOptions | None = None
    ) -> CreateProductResponse:
        return await self._call(
            "POST",
            PRODUCTS_PATH,
            {"pin": pin, "area": area},
            CreateProductResponse,
            body=encode_payload(product),
            call=call,
        )

    async def delete(
        self, pin: str, area: Area | str, spn: str, *, call: CallOptions | None = None
    ) -> None:
        await self._call(
            "DELETE", PRODUCT_PATH, {"pin": pin, "area": area, "spn": spn}, None, call=call
        )

    async def get(
        self, pin: str, area: Area | str, spn: str, *, call: CallOptions | None = None
    ) -> Product:
        return await self._call(
            "GET", PRODUCT_PATH, {"pin": pin, "area": area, "spn": spn}, Product, call=call
        )

    async def replace(
        self,
        pin: str,
        area: Area | str,
        spn: str,
        product: ReplaceProduct,
        *,
        call: CallOptions | None = None,
    ) -> ReplaceProductResponse:
        """Reemplaza el registro entero: lo omitido vuelve al valor por defecto."""

        return await self._call(
            "PUT",
            PRODUCT_PATH,
            {"pin": pin, "area": area, "spn": spn},
            ReplaceProductResponse,
            body=encode_payload(product),
            call=call,
        )

    async def update(
        self,
        pin: str,
        area: Area | str,
        spn: str,
        product: UpdateProduct,
        *,
        call: CallOptions | None = None,
    ) -> UpdateProductResponse:
        """Actualiza solo los campos `set` o `cleared` de `product`."""

        return await self._call(
            "POST",
            PRODUCT_PATH,
            {"pin": pin, "area": area, "spn": spn},
            UpdateProductResponse,
            body=encode_update(product),
            call=call,
        )

    async def upsert(
        self, pin: str, area: Area | str, product: UpsertProduct, *, call: CallOptions | None = None
    ) -> UpsertProductResponse:
        return await self._call(
            "POST",
            UPSERT_PATH,
            {"pin": pin, "area": area},
            UpsertProductResponse,
            body=encode_payload(product),
            call=call,
        )

    async def search(
        self,
        pin: str,
        area: Area | str,
        options: ProductSearchOptions | None = None,
        *,
        call: CallOptions | None = None,
    ) -> ProductSearchResponse:
        options = options or ProductSearchOptions()
        params = {
            "pin": pin,
            "area": area,
            "q": options.q,
            "skip": options.skip,
            "take": options.take,
            "sort": options.sort,
        }
        return await self._call("GET", SEARCH_PATH, params, ProductSearchResponse, call=call)

    async def scroll(
        self,
        pin: str,
        area: Area | str,
        options: ScrollOptions | None = None,
        *,
        call: CallOptions | None = None,
    ) -> ScrollResponse:
        """Una página del recorrido. Sin `page_token` empieza desde el principio."""

        options = options or ScrollOptions()
        params = {
            "pin": pin,
            "area": area,
            "pageToken": options.page_token,
            "mode": options.mode,
            "version": options.version,
        }
        return await self._call("GET", SCROLL_PATH, params, ScrollResponse, call=call)

    async def iter_pages(
        self,
        pin: str,
        area: Area | str,
        options: ScrollOptions | None = None,
        *,
        cursor: ScrollCursor | None = None,
        call: CallOptions | None = None,
    ) -> AsyncIterator[ScrollResponse]:
        """Recorre todas las páginas; lanza `ScrollProtocolError` si un token se repite."""

        options = options or ScrollOptions()
        cursor = cursor or ScrollCursor()
        if options.page_token:
            cursor.advance(options.page_token)

        async def fetch(token: str | None) -> ScrollResponse:
            return await self.scroll(pin, area, replace(options, page_token=token), call=call)

        async for page in scroll_pages(fetch, cursor):
            yield page

    async def iter_products(
        self,
        pin: str,
        area: Area | str,
        options: ScrollOptions | None = None,
        *,
        call: CallOptions | None = None,
    ) -> AsyncIterator[Product]:
        async for page in self.iter_pages(pin, area, options, call=call):
            for product in page.items:
                yield product
