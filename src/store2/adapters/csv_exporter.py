"""Exportación CSV de un catálogo completo.

Por qué CSV con `;`:
- Es el formato que abren sin fricción las hojas de cálculo europeas.
- Una fila por producto, recorrido entero vía scroll (no por offset).
"""

from __future__ import annotations

import csv
from typing import AsyncIterable, TextIO

from store2.core.domain.products import Product

HEADER = (
    "Supplier SKU",
    "Name",
    "Price",
    "Price Qty",
    "Currency",
    "Order unit",
    "Manufacturer",
    "Manufacturer SKU",
    "GTIN/EAN",
)


def _writer(out: TextIO):
    return csv.writer(out, delimiter=";", lineterminator="\r\n")


def product_row(product: Product) -> list[str]:
    return [
        product.spn or "",
        product.name or "",
        f"{product.price or 0.0:.2f}",
        f"{product.price_qty or 0.0:.2f}",
        product.currency or "",
        product.order_unit or "",
        product.manufacturer or "",
        product.mpn or "",
        product.gtin or "",
    ]


async def export_products_csv(products: AsyncIterable[Product], out: TextIO) -> int:
    """Escribe cabecera + una fila por producto (recorrido por scroll).

    Devuelve cuántas filas se escribieron.
    """

    writer = _writer(out)
    writer.writerow(HEADER)
    count = 0
    async for product in products:
        writer.writerow(product_row(product))
        count += 1
    return count
