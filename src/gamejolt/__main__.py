"""Script de ejecución.

Por qué existe:
- Permite ejecutar la CLI con `python -m gamejolt` durante desarrollo.
- Mantiene un entrypoint simple además del script instalado.
"""

from __future__ import annotations

from gamejolt.cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
