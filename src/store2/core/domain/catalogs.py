"""Modelos de catálogos.

Nota:
- Subconjunto representativo de campos; el resto llega igualmente gracias a
  `extra="allow"` en los modelos de lectura.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from store2.core.domain.common import KindResponse, Listing, RequestModel, WireModel


class CustField(WireModel):
    """Par nombre/valor específico del cliente."""

    name: str | None = None
    value: str | None = None


class Project(WireModel):
    id: int | None = None
    kind: str | None = None
    mpbc: str | None = Field(default=None, description="Meplato Buyer Code.")
    mpcc: str | None = Field(default=None, description="Meplato Company Code.")
    name: str | None = None
    type: str | None = None
    country: str | None = None
    language: str | None = None
    visible: bool | None = None
    created: datetime | None = None
    updated: datetime | None = None
    self_link: str | None = None


class Catalog(WireModel):
    """Catálogo de un proveedor."""

    id: int | None = None
    kind: str | None = None
    pin: str | None = Field(default=None, description="Identificador único del catálogo.")
    name: str | None = None
    description: str | None = None
    slug: str | None = None
    state: str | None = None
    target: str | None = None
    type: str | None = None
    country: str | None = None
    currency: str | None = None
    language: str | None = None
    cust_fields: list[CustField] = Field(default_factory=list)
    merchant_id: int | None = None
    merchant_mpcc: str | None = None
    merchant_mpsc: str | None = None
    merchant_name: str | None = None
    project: Project | None = None
    project_id: int | None = None
    project_mpbc: str | None = None
    project_mpcc: str | None = None
    project_name: str | None = None
    num_products_live: int | None = None
    num_products_work: int | None = None
    published_version: int | None = None
    expired: bool | None = None
    locked_for_download: bool | None = None
    keep_original_blobs: bool | None = None
    download_url: str | None = None
    hub_url: str | None = None
    oci_url: str | None = None
    sage_contract: str | None = None
    sage_number: str | None = None
    valid_from: str | None = None
    valid_until: str | None = None
    created: datetime | None = None
    updated: datetime | None = None
    last_imported: datetime | None = None
    last_published: datetime | None = None
    self_link: str | None = None


class CreateCatalog(RequestModel):
    """Propiedades de un catálogo nuevo."""

    name: str | None = None
    description: str | None = None
    country: str | None = None
    currency: str | None = None
    language: str | None = None
    merchant_id: int | None = None
    project_id: int | None = None
    project_mpcc: str | None = None
    sage_contract: str | None = None
    sage_number: str | None = None
    target: str | None = None
    valid_from: str | None = None
    valid_until: str | None = None


class CatalogSearchResponse(Listing):
    items: list[Catalog] = Field(default_factory=list)


class PublishResponse(KindResponse):
    self_link: str | None = None
    status_link: str | None = None


class PublishStatusResponse(KindResponse):
    busy: bool = False
    canceled: bool = False
    done: bool = False
    current_step: int = 0
    total_steps: int = 0
    percent: int = 0
    status: str | None = None
    self_link: str | None = None


class PurgeResponse(KindResponse):
    pass
