"""Exportación JSON de trofeos.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines.
- Permite guardar un snapshot del progreso sin depender de la CLI.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from gamejolt.core.domain.models import Trophy


def export_trophies_json(*, trophies: Iterable[Trophy], output_path: Path) -> Path:
    """Exporta trofeos a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [trophy.model_dump(mode="json") for trophy in trophies]
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
