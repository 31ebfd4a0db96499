"""Rich/JSON output helpers.

JSON mode dumps the ServiceResult unchanged. Human mode prints a status
line, the payload as key/value lines, and a concept table when the
payload carries a value set expansion.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from zhfhir.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from zhfhir.services.result import ServiceResult


def _render_pairs(console: Console, data: dict[str, Any]) -> None:
    for key, value in data.items():
        if key == "value_set":
            continue
        if isinstance(value, (dict, list)):
            value = _json.dumps(value, separators=(",", ":"))
        line = Text("  ")
        line.append(f"{key}: ", style="fhir.key")
        line.append(str(value))
        console.print(line)


def _render_expansion(console: Console, value_set: dict[str, Any]) -> None:
    contains = value_set.get("expansion", {}).get("contains", [])
    if not contains:
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("code", style="fhir.code")
    table.add_column("display")
    table.add_column("system", style="fhir.system")
    for entry in contains:
        table.add_row(
            *(Text(str(entry.get(column, ""))) for column in ("code", "display", "system"))
        )
    console.print(table)


def format_result(
    result: ServiceResult, *, json_output: bool = False, quiet: bool = False
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
        quiet: Human mode only. Print just the status line.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console()
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        line = Text("ERROR: ", style="fhir.error")
        line.append(result.op, style="fhir.op")
        line.append(f" - {message}")
        console.print(line)
        return get_output(console).rstrip("\n")

    line = Text("OK: ", style="fhir.ok")
    line.append(result.op, style="fhir.op")
    console.print(line)
    if not quiet:
        _render_pairs(console, result.data)
        value_set = result.data.get("value_set")
        if isinstance(value_set, dict):
            _render_expansion(console, value_set)
    return get_output(console).rstrip("\n")
