"""Modelos del endpoint raíz (`GET /`): usuario, merchant y enlaces."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from store2.core.domain.common import WireModel


class Merchant(WireModel):
    id: int | None = None
    kind: str | None = None
    name: str | None = None
    mpcc: str | None = Field(default=None, description="Meplato Company Code.")
    mpsc: str | None = Field(default=None, description="Meplato Supplier Code.")
    country: str | None = None
    currency: str | None = None
    language: str | None = None
    locale: str | None = None
    time_zone: str | None = None
    order_unit: str | None = Field(default=None, alias="ou")
    self_service: bool | None = None
    created: datetime | None = None
    updated: datetime | None = None
    self_link: str | None = None


class User(WireModel):
    id: int | None = None
    kind: str | None = None
    name: str | None = None
    email: str | None = None
    merchant_id: int | None = None
    country: str | None = None
    currency: str | None = None
    language: str | None = None
    locale: str | None = None
    time_zone: str | None = None
    created: datetime | None = None
    updated: datetime | None = None


class MeResponse(WireModel):
    kind: str | None = None
    merchant: Merchant | None = None
    user: User | None = None
    catalogs_link: str | None = None
    self_link: str | None = None
