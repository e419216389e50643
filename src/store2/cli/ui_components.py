"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from store2.core.domain.catalogs import Catalog, CatalogSearchResponse


def build_catalogs_table(res: CatalogSearchResponse) -> Table:
    """Tabla Rich para un listado de catálogos."""

    table = Table(title=f"{res.total_items} catalogs found")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name", style="white")
    table.add_column("Created", style="dim")
    table.add_column("PIN", style="bright_green", no_wrap=True)
    for cat in res.items:
        created = cat.created.strftime("%Y-%m-%d") if cat.created else ""
        table.add_row(str(cat.id or ""), (cat.name or "")[:50], created, cat.pin or "")
    return table


def print_catalog(console: Console, cat: Catalog) -> None:
    rows = (
        ("PIN", cat.pin or ""),
        ("Name", cat.name or ""),
        ("Created", cat.created or ""),
        ("# products work", cat.num_products_work or 0),
        ("# products live", cat.num_products_live or 0),
    )
    for label, value in rows:
        console.print(f"{label:>20}: {value}", soft_wrap=True)
