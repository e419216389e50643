"""Servicio de jobs (tareas en segundo plano)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from store2.core.domain.jobs import Job, JobSearchResponse
from store2.core.services.base import BaseService
from store2.core.uritemplate import parse

if TYPE_CHECKING:
    from store2.adapters.request_builder import CallOptions

JOB_PATH = parse("/jobs/{id}")
SEARCH_PATH = parse("/jobs{?merchantId,skip,take,state}")


@dataclass
class JobSearchOptions:
    merchant_id: int | None = None
    skip: int | None = None
    take: int | None = None
    state: str | None = None


class JobsService(BaseService):
    async def get(self, job_id: str, *, call: CallOptions | None = None) -> Job:
        return await self._call("GET", JOB_PATH, {"id": job_id}, Job, call=call)

    async def search(
        self, options: JobSearchOptions | None = None, *, call: CallOptions | None = None
    ) -> JobSearchResponse:
        options = options or JobSearchOptions()
        params = {
            "merchantId": options.merchant_id,
            "skip": options.skip,
            "take": options.take,
            "state": options.state,
        }
        return await self._call("GET", SEARCH_PATH, params, JobSearchResponse, call=call)
