"""Output formatting for CLI results."""

from __future__ import annotations

import json
import sys
from enum import Enum
from typing import Any

from rich.console import Console
from rich.table import Table

console = Console(stderr=True)


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"


def print_output(
    data: dict[str, Any],
    fmt: OutputFormat = OutputFormat.TABLE,
    title: str | None = None,
) -> None:
    """Print a single result record.

    JSON goes to stdout for scripts; the table is a two-column key/value view
    rendered to stderr.
    """
    if fmt == OutputFormat.JSON:
        json.dump(data, sys.stdout, indent=2, default=str, ensure_ascii=False)
        sys.stdout.write("\n")
        return

    table = Table(title=title, show_header=False)
    table.add_column("field", style="bold")
    table.add_column("value", overflow="fold")
    for key, value in data.items():
        table.add_row(key, "" if value is None else str(value))
    console.print(table)
