"""Rich Console factory and theme for zhfhir output.

Consoles render into a StringIO buffer so formatting stays a pure
``ServiceResult -> str`` function. In non-TTY environments (tests, pipes)
Rich drops color codes by itself.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ZHFHIR_THEME = Theme(
    {
        "fhir.ok": "bold green",
        "fhir.error": "bold red",
        "fhir.warning": "bold yellow",
        "fhir.op": "bold cyan",
        "fhir.key": "dim",
        "fhir.code": "bold blue",
        "fhir.system": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=ZHFHIR_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
