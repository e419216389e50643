"""Modelos de disponibilidades por producto, región y código postal."""

from __future__ import annotations

from pydantic import Field

from store2.core.domain.common import KindResponse, LinkResponse, RequestModel, WireModel


class ProductAvailability(WireModel):
    kind: str | None = None
    spn: str | None = None
    mpcc: str | None = None
    message: str | None = None
    quantity: float | None = None
    region: str | None = None
    zip_code: str | None = None
    updated: str | None = None


class AvailabilityResponse(KindResponse):
    items: list[ProductAvailability] = Field(default_factory=list)


class UpsertAvailability(RequestModel):
    message: str | None = None
    mpcc: str | None = None
    quantity: float | None = None
    region: str | None = None
    zip_code: str | None = None
    updated: str | None = None


class DeleteAvailabilityResponse(KindResponse):
    pass


class UpsertAvailabilityResponse(LinkResponse):
    pass
