"""CLI `gamejolt` (Typer + Rich).

Comandos finos: toda la lógica vive en `GameJoltClient`; aquí solo se parsean
argumentos, se verifica la sesión cuando hace falta y se imprime el resultado.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, TypeVar

import typer
from rich.console import Console

from gamejolt.adapters.json_exporter import export_trophies_json
from gamejolt.cli import doctor
from gamejolt.cli.ui_components import (
    build_data_table,
    build_failures_panel,
    build_trophies_table,
    print_banner,
)
from gamejolt.core.config import AppSettings
from gamejolt.core.errors import GameJoltError
from gamejolt.core.services.client import GameJoltClient

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Game Jolt game API client.")
data_app = typer.Typer(no_args_is_help=True, help="Game and user data-store.")
app.add_typer(doctor.app, name="doctor")
app.add_typer(data_app, name="data")

_console = Console()

UserOption = typer.Option(None, "--user", "-u", help="Username (switches to user scope).")
TokenOption = typer.Option(None, "--token", "-t", help="User game token.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    banner: bool = typer.Option(True, "--banner/--no-banner", help="Show the banner."),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if banner:
        print_banner(_console)


def _run(action: Callable[[GameJoltClient], Awaitable[T]]) -> T:
    async def runner() -> T:
        async with GameJoltClient.from_settings(AppSettings()) as client:
            return await action(client)

    try:
        return asyncio.run(runner())
    except GameJoltError as exc:
        _console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


async def _login(client: GameJoltClient, user: str | None, token: str | None) -> bool:
    """Verifica el usuario si se pasaron credenciales; ``True`` = ámbito de usuario."""

    if user is None and token is None:
        return False
    if not user or not token:
        raise typer.BadParameter("--user and --token must be given together")
    if not await client.verify_user(user, token):
        _console.print(f"[red]Verification failed for[/red] {user}")
        raise typer.Exit(code=1)
    return True


@app.command()
def verify(username: str, token: str) -> None:
    """Check a username/token pair against the service."""

    ok = _run(lambda client: client.verify_user(username, token))
    if ok:
        _console.print(f"[green]Verified:[/green] {username}")
    else:
        _console.print(f"[red]Not verified:[/red] {username}")
        raise typer.Exit(code=1)


@app.command()
def trophies(
    username: str,
    token: str,
    achieved: Optional[bool] = typer.Option(
        None, "--achieved/--unachieved", help="Filter by achievement state."
    ),
    json_out: Optional[Path] = typer.Option(None, "--json-out", help="Also export as JSON."),
) -> None:
    """List the trophies of a user."""

    async def action(client: GameJoltClient) -> list:
        await _login(client, username, token)
        if achieved is None:
            return await client.get_all_trophies()
        if achieved:
            return await client.get_achieved_trophies()
        return await client.get_unachieved_trophies()

    result = _run(action)
    _console.print(build_trophies_table(result))
    if json_out:
        path = export_trophies_json(trophies=result, output_path=json_out)
        _console.print(f"[green]Exported:[/green] {path}")


@app.command()
def achieve(username: str, token: str, trophy_id: int) -> None:
    """Mark a trophy as achieved."""

    async def action(client: GameJoltClient) -> bool:
        await _login(client, username, token)
        return await client.achieved_trophy(trophy_id)

    if _run(action):
        _console.print(f"[green]Trophy {trophy_id} achieved[/green]")
    else:
        _console.print(f"[yellow]Trophy {trophy_id} not updated (already achieved?)[/yellow]")


@data_app.command("keys")
def data_keys(user: Optional[str] = UserOption, token: Optional[str] = TokenOption) -> None:
    """List the stored keys."""

    async def action(client: GameJoltClient) -> list[str]:
        if await _login(client, user, token):
            return await client.get_user_data_keys()
        return await client.get_game_data_keys()

    for key in _run(action):
        _console.print(key)


@data_app.command("get")
def data_get(
    key: str, user: Optional[str] = UserOption, token: Optional[str] = TokenOption
) -> None:
    """Print the raw value stored under KEY."""

    async def action(client: GameJoltClient) -> str | None:
        if await _login(client, user, token):
            return await client.get_user_data(key)
        return await client.get_game_data(key)

    value = _run(action)
    if value is None:
        _console.print(f"[yellow]No value for[/yellow] {key}")
        raise typer.Exit(code=1)
    _console.print(value, markup=False, highlight=False)


@data_app.command("set")
def data_set(
    key: str,
    value: str,
    user: Optional[str] = UserOption,
    token: Optional[str] = TokenOption,
) -> None:
    """Store a raw string VALUE under KEY."""

    async def action(client: GameJoltClient) -> bool:
        if await _login(client, user, token):
            return await client.store_user_data(key, value)
        return await client.store_game_data(key, value)

    if not _run(action):
        _console.print(f"[red]The service rejected the value for[/red] {key}")
        raise typer.Exit(code=1)
    _console.print(f"[green]Stored[/green] {key}")


@data_app.command("remove")
def data_remove(
    key: str, user: Optional[str] = UserOption, token: Optional[str] = TokenOption
) -> None:
    """Remove KEY."""

    async def action(client: GameJoltClient) -> bool:
        if await _login(client, user, token):
            return await client.remove_user_data(key)
        return await client.remove_game_data(key)

    if not _run(action):
        _console.print(f"[yellow]Nothing removed for[/yellow] {key}")
        raise typer.Exit(code=1)
    _console.print(f"[green]Removed[/green] {key}")


@data_app.command("load")
def data_load(user: Optional[str] = UserOption, token: Optional[str] = TokenOption) -> None:
    """Load and decode every stored object."""

    async def action(client: GameJoltClient) -> Any:
        if await _login(client, user, token):
            return await client.load_all_user_data_report()
        return await client.load_all_game_data_report()

    report = _run(action)
    _console.print(build_data_table(report.values))
    if not report.complete:
        _console.print(build_failures_panel(report))


@data_app.command("clear")
def data_clear(
    user: Optional[str] = UserOption,
    token: Optional[str] = TokenOption,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    """Remove every stored key."""

    if not yes:
        typer.confirm("Remove every stored key?", abort=True)

    async def action(client: GameJoltClient) -> bool:
        if await _login(client, user, token):
            return await client.clear_all_user_data()
        return await client.clear_all_game_data()

    if not _run(action):
        _console.print("[red]Could not list the stored keys[/red]")
        raise typer.Exit(code=1)
    _console.print("[green]Data store cleared[/green]")


def run() -> None:
    app()
