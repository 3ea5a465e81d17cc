"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from gamejolt.adapters.http_client import build_async_client
from gamejolt.core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="gamejolt doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if settings.game_id is not None:
        table.add_row("Game id", "OK", str(settings.game_id))
    else:
        table.add_row("Game id", "MISSING", "Set GAMEJOLT_GAME_ID or run `doctor setup`")
    if settings.private_key:
        table.add_row("Private key", "OK", "Configured")
    else:
        table.add_row("Private key", "MISSING", "Set GAMEJOLT_PRIVATE_KEY or run `doctor setup`")
    table.add_row("API", "OK", f"{settings.api_root}/{settings.api_version}/")
    table.add_row("User config", "OK", str(get_user_env_file()))

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings.api_root, settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores game id and private key in the user config .env)."""

    game_id = typer.prompt("Game id", type=int)
    private_key = typer.prompt("Private key", hide_input=True, confirmation_prompt=False).strip()
    version = typer.prompt("API version", default="v1", show_default=True).strip()

    if game_id <= 0 or not private_key:
        raise typer.BadParameter("game id and private key are required")

    env_path = write_user_env_vars(
        {
            "GAMEJOLT_GAME_ID": str(game_id),
            "GAMEJOLT_PRIVATE_KEY": private_key,
            "GAMEJOLT_API_VERSION": version or "v1",
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
