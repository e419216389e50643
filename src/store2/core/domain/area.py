"""Áreas de un catálogo.

Un catálogo tiene dos particiones: `work` (borrador, editable) y `live`
(publicada). Casi todas las rutas de productos llevan el área como variable
de ruta.
"""

from __future__ import annotations

from enum import Enum


class Area(str, Enum):
    """Partición de un catálogo."""

    WORK = "work"
    LIVE = "live"

    @classmethod
    def default(cls) -> "Area":
        """Área por defecto para lecturas (lo publicado)."""

        return cls.LIVE
