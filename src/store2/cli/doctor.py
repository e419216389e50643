"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from store2.client import StoreClient
from store2.core.config import StoreSettings, write_user_env_vars
from store2.core.errors import StoreError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def make_client(settings: StoreSettings) -> StoreClient:
    return StoreClient(settings.client_config())


async def _check_api(settings: StoreSettings) -> tuple[bool, str, str]:
    """HEAD / y GET /: conectividad y credenciales en un solo paso."""

    async with make_client(settings) as store:
        try:
            await store.root.ping()
        except StoreError as exc:
            return False, str(exc), ""
        try:
            me = await store.root.me()
        except StoreError as exc:
            return True, "OK", str(exc)
    user = me.user.email if me.user and me.user.email else "?"
    merchant = me.merchant.name if me.merchant and me.merchant.name else "?"
    return True, "OK", f"{user} @ {merchant}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = StoreSettings()
    config = settings.client_config()

    table = Table(title="Store Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Base URL", "OK", config.base_url)
    if config.has_credentials:
        table.add_row("Credentials", "OK", f"user {config.user!r}")
    else:
        table.add_row("Credentials", "MISSING", "Set STORE_USER / STORE_PASSWORD or use ~/.netrc")
    table.add_row("Timeout", "OK", f"{config.timeout_seconds:g}s")

    # Connectivity
    ok_http, detail_http, detail_me = asyncio.run(_check_api(settings))
    table.add_row("API connectivity", "OK" if ok_http else "FAIL", detail_http)
    if ok_http:
        table.add_row("Authenticated as", "OK" if " @ " in detail_me else "FAIL", detail_me)

    _console.print(table)

    if not ok_http:
        raise typer.Exit(code=2)


@app.command()
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = StoreSettings()
    url = typer.prompt("API base URL", default=settings.url, show_default=True).strip()
    user = typer.prompt("User (API token)", default=settings.user or "", show_default=False).strip()
    password = typer.prompt(
        "Password", default="", show_default=False, hide_input=True, confirmation_prompt=False
    ).strip()

    if not url:
        raise typer.BadParameter("base URL is required")

    env_path = write_user_env_vars(
        {
            "STORE_URL": url,
            "STORE_USER": user,
            "STORE_PASSWORD": password,
        }
    )

    _console.print(f"[green]Saved Store config to:[/green] {env_path}")
