"""Carga de productos desde CSV (create / update / delete por fila).

Formato:
- Separador `;`, comillas dobles opcionales.
- Primera fila = cabecera. Columnas válidas: MODE, SPN, NAME, PRICE,
  ORDER_UNIT, MPN, MANUFACTURER, ECLASS_VERSION, ECLASS_CODE, TAX_CODE.
  MODE y SPN son obligatorias.
- MODE por fila: `C` crea (necesita NAME, PRICE y ORDER_UNIT), `U` actualiza
  solo las columnas no vacías, `D` borra.

Ejemplo:

    MODE;SPN;NAME;PRICE;ORDER_UNIT
    C;1000;"Product 1000";19.50;PCE
    U;1000;;0.49;EA
    D;1000;;;
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, TextIO

from store2.core.domain.area import Area
from store2.core.domain.products import CreateProduct, Eclass, UpdateProduct
from store2.core.services.products import ProductsService

logger = logging.getLogger(__name__)

COLUMNS = (
    "MODE",
    "SPN",
    "NAME",
    "PRICE",
    "ORDER_UNIT",
    "MPN",
    "MANUFACTURER",
    "ECLASS_VERSION",
    "ECLASS_CODE",
    "TAX_CODE",
)

REQUIRED_COLUMNS = ("MODE", "SPN")


class UploadFormatError(ValueError):
    """Fila o cabecera inválida; `line` es 1-based (la cabecera es la 1)."""

    def __init__(self, line: int, message: str) -> None:
        self.line = line
        super().__init__(f"line {line}: {message}")


@dataclass
class UploadRow:
    line: int
    mode: str
    spn: str
    name: str | None = None
    price: float | None = None
    order_unit: str | None = None
    mpn: str | None = None
    manufacturer: str | None = None
    eclass_version: str | None = None
    eclass_code: str | None = None
    tax_code: str | None = None

    def validate(self) -> None:
        if self.mode not in ("C", "U", "D"):
            raise UploadFormatError(self.line, f"unknown mode {self.mode!r}")
        if not self.spn:
            raise UploadFormatError(self.line, "no SPN specified")
        if self.mode == "C":
            if not self.name:
                raise UploadFormatError(self.line, "no name specified")
            if self.price is None or self.price < 0:
                raise UploadFormatError(self.line, "no price specified")
            if not self.order_unit:
                raise UploadFormatError(self.line, "no order unit specified")

    def eclasses(self) -> list[Eclass] | None:
        if self.eclass_version and self.eclass_code:
            return [Eclass(version=self.eclass_version, code=self.eclass_code)]
        return None

    def to_create(self) -> CreateProduct:
        return CreateProduct(
            spn=self.spn,
            name=self.name,
            price=self.price,
            order_unit=self.order_unit,
            mpn=self.mpn,
            manufacturer=self.manufacturer,
            tax_code=self.tax_code,
            eclasses=self.eclasses(),
        )

    def to_update(self) -> UpdateProduct:
        # Solo las columnas con valor pasan a `set`; el resto queda `unset`.
        values: dict[str, Any] = {
            "name": self.name,
            "price": self.price,
            "order_unit": self.order_unit,
            "mpn": self.mpn,
            "manufacturer": self.manufacturer,
            "tax_code": self.tax_code,
            "eclasses": self.eclasses(),
        }
        return UpdateProduct(**{k: v for k, v in values.items() if v is not None})


def _optional(cell: str) -> str | None:
    return cell if cell != "" else None


def _parse_row(line: int, header: list[str], record: list[str]) -> UploadRow:
    if len(record) != len(header):
        raise UploadFormatError(line, f"expected {len(header)} columns, got {len(record)}")

    cells = dict(zip(header, record))
    price = _optional(cells.get("PRICE", ""))
    try:
        parsed_price = float(price) if price is not None else None
    except ValueError:
        raise UploadFormatError(line, f"price {price!r} is not a number") from None

    row = UploadRow(
        line=line,
        mode=cells.get("MODE", "").upper(),
        spn=cells.get("SPN", ""),
        name=_optional(cells.get("NAME", "")),
        price=parsed_price,
        order_unit=_optional(cells.get("ORDER_UNIT", "")),
        mpn=_optional(cells.get("MPN", "")),
        manufacturer=_optional(cells.get("MANUFACTURER", "")),
        eclass_version=_optional(cells.get("ECLASS_VERSION", "")),
        eclass_code=_optional(cells.get("ECLASS_CODE", "")),
        tax_code=_optional(cells.get("TAX_CODE", "")),
    )
    row.validate()
    return row


def read_upload_rows(stream: TextIO) -> Iterator[UploadRow]:
    """Lee y valida filas. Lanza `UploadFormatError` en la primera inválida."""

    reader = csv.reader(stream, delimiter=";")
    header = next(reader, None)
    if not header:
        raise UploadFormatError(1, "no header row")

    header = [cell.strip() for cell in header]
    for cell in header:
        if cell not in COLUMNS:
            raise UploadFormatError(1, f"found invalid column name {cell!r}")
    for required in REQUIRED_COLUMNS:
        if required not in header:
            raise UploadFormatError(1, f"missing required column {required!r}")

    for line, record in enumerate(reader, start=2):
        if not record:
            continue
        yield _parse_row(line, header, record)


async def apply_rows(
    products: ProductsService,
    pin: str,
    rows: Iterable[UploadRow],
    *,
    area: Area | str = Area.WORK,
    on_row: Callable[[UploadRow], None] | None = None,
) -> int:
    """Aplica cada fila contra la API en orden. Devuelve cuántas se aplicaron.

    Se detiene en el primer error (el `StoreError` del servidor se propaga).
    """

    count = 0
    for row in rows:
        if row.mode == "C":
            await products.create(pin, area, row.to_create())
        elif row.mode == "U":
            await products.update(pin, area, row.spn, row.to_update())
        else:
            await products.delete(pin, area, row.spn)
        logger.debug("line %d: %s %s", row.line, row.mode, row.spn)
        count += 1
        if on_row is not None:
            on_row(row)
    return count
