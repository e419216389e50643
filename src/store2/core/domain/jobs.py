"""Modelos de jobs (importaciones, publicaciones, etc. en segundo plano)."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from store2.core.domain.common import Listing, WireModel


class Job(WireModel):
    id: str | None = None
    kind: str | None = None
    topic: str | None = Field(default=None, description="Tipo de tarea, p.ej. catalog.publish.")
    state: str | None = None
    email: str | None = None
    catalog_id: int | None = None
    catalog_name: str | None = None
    merchant_id: int | None = None
    merchant_mpcc: str | None = None
    merchant_name: str | None = None
    created: datetime | None = None
    started: datetime | None = None
    completed: datetime | None = None
    self_link: str | None = None


class JobSearchResponse(Listing):
    items: list[Job] = Field(default_factory=list)
