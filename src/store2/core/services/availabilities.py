"""Servicio de disponibilidades.

Nota: estas rutas repiten el prefijo `/api/v2` sobre la URL base. Así las
publica la API y así se conservan.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from store2.core.codec import encode_payload
from store2.core.domain.availabilities import (
    AvailabilityResponse,
    DeleteAvailabilityResponse,
    UpsertAvailability,
    UpsertAvailabilityResponse,
)
from store2.core.services.base import BaseService
from store2.core.uritemplate import parse

if TYPE_CHECKING:
    from store2.adapters.request_builder import CallOptions

AVAILABILITIES_PATH = parse("/api/v2/products/{spn}/availabilities{?region,zipCode}")
UPSERT_PATH = parse("/api/v2/products/{spn}/availabilities")


class AvailabilitiesService(BaseService):
    async def get(
        self,
        spn: str,
        *,
        region: str | None = None,
        zip_code: str | None = None,
        call: CallOptions | None = None,
    ) -> AvailabilityResponse:
        params = {"spn": spn, "region": region, "zipCode": zip_code}
        return await self._call("GET", AVAILABILITIES_PATH, params, AvailabilityResponse, call=call)

    async def delete(
        self,
        spn: str,
        *,
        region: str | None = None,
        zip_code: str | None = None,
        call: CallOptions | None = None,
    ) -> DeleteAvailabilityResponse:
        params = {"spn": spn, "region": region, "zipCode": zip_code}
        return await self._call(
            "DELETE", AVAILABILITIES_PATH, params, DeleteAvailabilityResponse, call=call
        )

    async def upsert(
        self, spn: str, availability: UpsertAvailability, *, call: CallOptions | None = None
    ) -> UpsertAvailabilityResponse:
        return await self._call(
            "POST",
            UPSERT_PATH,
            {"spn": spn},
            UpsertAvailabilityResponse,
            body=encode_payload(availability),
            call=call,
        )
