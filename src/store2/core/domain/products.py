"""Modelos de productos.

Por qué cuatro variantes de payload:
- `CreateProduct` / `UpsertProduct`: registro completo, incluye `spn`.
- `ReplaceProduct`: registro completo; el `spn` viaja en la ruta. Lo omitido
  vuelve a su valor por defecto en el servidor.
- `UpdateProduct`: campo a campo (`UpdateField`); lo omitido no se toca.

Nota:
- Subconjunto representativo del catálogo de campos de la API.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from store2.core.domain.catalogs import CustField
from store2.core.domain.common import LinkResponse, Listing, RequestModel, WireModel
from store2.core.domain.update import UNSET, UpdateField, UpdatePayload


class Availability(WireModel):
    message: str | None = Field(default=None, description="p.ej. 'in stock' u 'out of stock'.")
    qty: float | None = None
    updated: str | None = None


class Blob(WireModel):
    """Dato externo del producto: imagen, ficha técnica, etc."""

    kind: str | None = None
    language: str | None = Field(default=None, alias="lang")
    source: str | None = None
    text: str | None = None
    url: str | None = None


class Condition(WireModel):
    kind: str | None = None
    text: str | None = None


class Eclass(WireModel):
    code: str | None = None
    version: str | None = None


class Unspsc(WireModel):
    code: str | None = None
    version: str | None = None


class Feature(WireModel):
    kind: str | None = None
    name: str | None = None
    unit: str | None = None
    values: list[str] = Field(default_factory=list)


class Hazmat(WireModel):
    kind: str | None = None
    text: str | None = None


class Intrastat(WireModel):
    code: str | None = None
    gross_weight: float | None = None
    net_weight: float | None = None
    weight_unit: str | None = None
    means_of_transport: str | None = None
    origin_country: str | None = None
    transaction_type: str | None = None


class Reference(WireModel):
    kind: str | None = None
    qty: float | None = None
    spn: str | None = None


class ScalePrice(WireModel):
    lbound: float | None = None
    price: float | None = None
    list_price: float | None = None
    meplato_price: float | None = None


class Product(WireModel):
    """Producto de un catálogo, tal como lo devuelve la API."""

    id: str | None = None
    kind: str | None = None
    spn: str | None = Field(default=None, description="Supplier part number (clave en el catálogo).")
    name: str | None = None
    description: str | None = None
    mode: str | None = Field(default=None, description="Solo en scroll diff: Created, Updated o Deleted.")
    price: float | None = None
    price_qty: float | None = None
    list_price: float | None = None
    meplato_price: float | None = None
    currency: str | None = None
    order_unit: str | None = Field(default=None, alias="ou")
    content_unit: str | None = Field(default=None, alias="cu")
    cu_per_ou: float | None = None
    manufacturer: str | None = None
    manufactcode: str | None = None
    mpn: str | None = None
    gtin: str | None = None
    asin: str | None = None
    bpn: str | None = None
    matgroup: str | None = None
    tax_code: str | None = None
    tax_rate: float | None = None
    categories: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    availability: Availability | None = None
    blobs: list[Blob] = Field(default_factory=list)
    conditions: list[Condition] = Field(default_factory=list)
    eclasses: list[Eclass] = Field(default_factory=list)
    unspscs: list[Unspsc] = Field(default_factory=list)
    features: list[Feature] = Field(default_factory=list)
    hazmats: list[Hazmat] = Field(default_factory=list)
    references: list[Reference] = Field(default_factory=list)
    scale_prices: list[ScalePrice] = Field(default_factory=list)
    cust_fields: list[CustField] = Field(default_factory=list)
    intrastat: Intrastat | None = None
    leadtime: float | None = None
    quantity_min: float | None = None
    quantity_max: float | None = None
    quantity_interval: float | None = None
    image: str | None = None
    image_url: str | None = Field(default=None, alias="imageURL")
    thumbnail: str | None = None
    thumbnail_url: str | None = Field(default=None, alias="thumbnailURL")
    datasheet: str | None = None
    datasheet_url: str | None = Field(default=None, alias="datasheetURL")
    safetysheet: str | None = None
    safetysheet_url: str | None = Field(default=None, alias="safetysheetURL")
    service: bool | None = None
    excluded: bool | None = None
    visible: bool | None = None
    orderable: bool | None = None
    catalog_id: int | None = None
    merchant_id: int | None = None
    project_id: int | None = None
    created: datetime | None = None
    updated: datetime | None = None
    self_link: str | None = None


class _ProductRecord(RequestModel):
    """Campos comunes a create, replace y upsert."""

    name: str | None = None
    description: str | None = None
    price: float | None = None
    price_qty: float | None = None
    list_price: float | None = None
    currency: str | None = None
    order_unit: str | None = Field(default=None, alias="ou")
    content_unit: str | None = Field(default=None, alias="cu")
    cu_per_ou: float | None = None
    manufacturer: str | None = None
    manufactcode: str | None = None
    mpn: str | None = None
    gtin: str | None = None
    asin: str | None = None
    bpn: str | None = None
    matgroup: str | None = None
    tax_code: str | None = None
    tax_rate: float | None = None
    categories: list[str] | None = None
    keywords: list[str] | None = None
    availability: Availability | None = None
    blobs: list[Blob] | None = None
    conditions: list[Condition] | None = None
    eclasses: list[Eclass] | None = None
    unspscs: list[Unspsc] | None = None
    features: list[Feature] | None = None
    hazmats: list[Hazmat] | None = None
    references: list[Reference] | None = None
    scale_prices: list[ScalePrice] | None = None
    cust_fields: list[CustField] | None = None
    intrastat: Intrastat | None = None
    leadtime: float | None = None
    quantity_min: float | None = None
    quantity_max: float | None = None
    quantity_interval: float | None = None
    image: str | None = None
    thumbnail: str | None = None
    datasheet: str | None = None
    safetysheet: str | None = None
    service: bool | None = None
    excluded: bool | None = None
    visible: bool | None = None
    orderable: bool | None = None


class CreateProduct(_ProductRecord):
    spn: str | None = None


class ReplaceProduct(_ProductRecord):
    pass


class UpsertProduct(_ProductRecord):
    spn: str | None = None


class UpdateProduct(UpdatePayload):
    """Actualización selectiva: solo viajan los campos `set` o `cleared`."""

    name: UpdateField[str] = UNSET
    description: UpdateField[str] = UNSET
    price: UpdateField[float] = UNSET
    price_qty: UpdateField[float] = UNSET
    list_price: UpdateField[float] = UNSET
    currency: UpdateField[str] = UNSET
    order_unit: UpdateField[str] = Field(default=UNSET, alias="ou")
    content_unit: UpdateField[str] = Field(default=UNSET, alias="cu")
    cu_per_ou: UpdateField[float] = UNSET
    manufacturer: UpdateField[str] = UNSET
    manufactcode: UpdateField[str] = UNSET
    mpn: UpdateField[str] = UNSET
    gtin: UpdateField[str] = UNSET
    asin: UpdateField[str] = UNSET
    bpn: UpdateField[str] = UNSET
    matgroup: UpdateField[str] = UNSET
    tax_code: UpdateField[str] = UNSET
    tax_rate: UpdateField[float] = UNSET
    categories: UpdateField[list[str]] = UNSET
    keywords: UpdateField[list[str]] = UNSET
    availability: UpdateField[Availability] = UNSET
    blobs: UpdateField[list[Blob]] = UNSET
    conditions: UpdateField[list[Condition]] = UNSET
    eclasses: UpdateField[list[Eclass]] = UNSET
    unspscs: UpdateField[list[Unspsc]] = UNSET
    features: UpdateField[list[Feature]] = UNSET
    hazmats: UpdateField[list[Hazmat]] = UNSET
    references: UpdateField[list[Reference]] = UNSET
    scale_prices: UpdateField[list[ScalePrice]] = UNSET
    cust_fields: UpdateField[list[CustField]] = UNSET
    intrastat: UpdateField[Intrastat] = UNSET
    leadtime: UpdateField[float] = UNSET
    quantity_min: UpdateField[float] = UNSET
    quantity_max: UpdateField[float] = UNSET
    quantity_interval: UpdateField[float] = UNSET
    image: UpdateField[str] = UNSET
    thumbnail: UpdateField[str] = UNSET
    datasheet: UpdateField[str] = UNSET
    safetysheet: UpdateField[str] = UNSET
    service: UpdateField[bool] = UNSET
    excluded: UpdateField[bool] = UNSET
    visible: UpdateField[bool] = UNSET
    orderable: UpdateField[bool] = UNSET


class CreateProductResponse(LinkResponse):
    pass


class ReplaceProductResponse(LinkResponse):
    pass


class UpdateProductResponse(LinkResponse):
    pass


class UpsertProductResponse(LinkResponse):
    pass


class ProductSearchResponse(Listing):
    items: list[Product] = Field(default_factory=list)


class ScrollResponse(Listing):
    """Página de un recorrido completo (scroll).

    `page_token` vacío (o ausente) indica que no hay más páginas.
    """

    items: list[Product] = Field(default_factory=list)
    page_token: str | None = None
