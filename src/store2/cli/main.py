"""CLI `store` (Typer).

Por qué una CLI fina:
- Cada comando es una llamada (o un bucle) sobre la librería; no hay lógica
  de negocio aquí.
- Los `StoreError` se capturan en el borde del comando: mensaje en rojo y
  código de salida 2.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from store2.adapters.csv_exporter import export_products_csv
from store2.adapters.csv_importer import UploadFormatError, UploadRow, apply_rows, read_upload_rows
from store2.cli import doctor
from store2.cli.ui_components import build_catalogs_table, print_catalog
from store2.client import StoreClient
from store2.core.domain.area import Area
from store2.core.errors import StoreError
from store2.core.services.catalogs import CatalogSearchOptions

app = typer.Typer(no_args_is_help=True, help="Command-line client for the Meplato Store API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def make_client() -> StoreClient:
    """Cliente configurado desde entorno / .env / .netrc."""

    return StoreClient.from_settings()


def _fail(exc: Exception) -> typer.Exit:
    _err_console.print(str(exc), style="red", soft_wrap=True, markup=False)
    return typer.Exit(code=2)


def _run(coro) -> None:
    try:
        asyncio.run(coro)
    except (StoreError, UploadFormatError) as exc:
        raise _fail(exc) from exc


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every request to stderr."),
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )


@app.command()
def catalogs(
    skip: int = typer.Option(0, "--skip", min=0, help="Number of catalogs to skip."),
    take: int = typer.Option(0, "--take", min=0, help="Number of catalogs to take."),
    sort: str = typer.Option("", "--sort", help="Sort order, e.g. name or id or -created."),
) -> None:
    """List catalogs."""

    async def _catalogs() -> None:
        options = CatalogSearchOptions(
            skip=skip or None,
            take=take or None,
            sort=sort or None,
        )
        async with make_client() as store:
            res = await store.catalogs.search(options)
        _console.print(build_catalogs_table(res))

    _run(_catalogs())


@app.command()
def catalog(pins: list[str] = typer.Argument(..., help="One or more catalog PINs.")) -> None:
    """Print catalog information."""

    async def _catalog() -> None:
        async with make_client() as store:
            for i, pin in enumerate(pins):
                cat = await store.catalogs.get(pin)
                if i > 0:
                    _console.print()
                print_catalog(_console, cat)

    _run(_catalog())


@app.command()
def download(
    pin: str = typer.Argument(..., help="Catalog PIN."),
    area: Area = typer.Option(Area.default(), "--area", help="Area to download."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file (default: stdout)."),
) -> None:
    """Download a whole catalog as CSV (semicolon separated)."""

    async def _download() -> None:
        async with make_client() as store:
            products = store.products.iter_products(pin, area)
            if output is None:
                count = await export_products_csv(products, sys.stdout)
            else:
                with output.open("w", encoding="utf-8", newline="") as fh:
                    count = await export_products_csv(products, fh)
        _err_console.print(f"Downloaded {count} products")

    _run(_download())


@app.command()
def publish(
    pin: str = typer.Argument(..., help="Catalog PIN."),
    interval: float = typer.Option(5.0, "--interval", min=0.0, help="Seconds between status polls."),
) -> None:
    """Publish a catalog and wait until it is done."""

    async def _publish() -> None:
        async with make_client() as store:
            await store.catalogs.publish(pin)
            while True:
                await asyncio.sleep(interval)
                status = await store.catalogs.publish_status(pin)
                _console.print(
                    f"Step {status.current_step:6d} of {status.total_steps:6d}   {status.percent:03d}%",
                    end="\r",
                )
                if status.done:
                    break
        _console.print(" " * 40 + "\rDone")

    _run(_publish())


@app.command()
def upload(
    pin: str = typer.Argument(..., help="Catalog PIN."),
    infile: Optional[Path] = typer.Option(
        None, "--input", "-i", exists=True, dir_okay=False, help="CSV file (default: stdin)."
    ),
) -> None:
    """Create, update or delete products in the work area from a CSV file.

    Header columns: MODE, SPN, NAME, PRICE, ORDER_UNIT, MPN, MANUFACTURER,
    ECLASS_VERSION, ECLASS_CODE, TAX_CODE. MODE is C, U or D per row.
    """

    def _progress(row: UploadRow) -> None:
        _err_console.print(f"Line {row.line:6d}  {row.mode} {row.spn}", end="\r", markup=False)

    async def _upload() -> None:
        async with make_client() as store:
            if infile is None:
                rows = read_upload_rows(sys.stdin)
                count = await apply_rows(store.products, pin, rows, on_row=_progress)
            else:
                with infile.open("r", encoding="utf-8", newline="") as fh:
                    rows = read_upload_rows(fh)
                    count = await apply_rows(store.products, pin, rows, on_row=_progress)
        _err_console.print(f"Applied {count} rows")

    _run(_upload())


def run() -> None:
    app()


if __name__ == "__main__":
    run()
