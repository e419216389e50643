"""Servicios de recursos: una clase por recurso de la API.

Cada operación es una plantilla de ruta (constante de módulo), unas opciones
tipadas, el codec del cuerpo y el puente HTTP.
"""

from store2.core.services.availabilities import AvailabilitiesService
from store2.core.services.catalogs import CatalogSearchOptions, CatalogsService
from store2.core.services.jobs import JobSearchOptions, JobsService
from store2.core.services.products import (
    ProductSearchOptions,
    ProductsService,
    ScrollMode,
    ScrollOptions,
)
from store2.core.services.root import RootService

__all__ = [
    "AvailabilitiesService",
    "CatalogSearchOptions",
    "CatalogsService",
    "JobSearchOptions",
    "JobsService",
    "ProductSearchOptions",
    "ProductsService",
    "RootService",
    "ScrollMode",
    "ScrollOptions",
]
