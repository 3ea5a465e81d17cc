"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gamejolt.core.domain.models import BatchLoadReport, Trophy, TrophyDifficulty

_DIFFICULTY_STYLES: dict[TrophyDifficulty, str] = {
    TrophyDifficulty.EASY: "green",
    TrophyDifficulty.MEDIUM: "yellow",
    TrophyDifficulty.HARD: "red",
    TrophyDifficulty.IMPOSSIBLE: "magenta",
}


def print_banner(console: Console) -> None:
    title = Text("gamejolt", style="bold cyan")
    subtitle = Text("Trofeos • Data-store • Sesiones verificadas", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_trophies_table(trophies: Iterable[Trophy]) -> Table:
    table = Table(title="Trophies")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Difficulty")
    table.add_column("Achieved", style="green")
    table.add_column("Description", style="dim")
    for trophy in trophies:
        style = _DIFFICULTY_STYLES.get(trophy.difficulty, "white")
        table.add_row(
            str(trophy.id),
            trophy.title,
            Text(trophy.difficulty.value, style=style),
            trophy.achieved if trophy.is_achieved else "-",
            trophy.description,
        )
    return table


def build_data_table(values: Mapping[str, Any], *, title: str = "Data store") -> Table:
    table = Table(title=title)
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for key, value in values.items():
        table.add_row(key, repr(value))
    return table


def build_failures_panel(report: BatchLoadReport) -> Panel:
    """Panel con las claves descartadas en un ``load_all``."""

    body = Text()
    for key, reason in report.failures.items():
        body.append(f"- {key}: ", style="bold")
        body.append(f"{reason}\n")
    return Panel(body, title=Text("Skipped keys", style="bold yellow"), border_style="yellow")
