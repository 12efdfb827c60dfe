"""Rich table rendering helpers."""

from __future__ import annotations

from typing import Any, Sequence

from rich import box
from rich.table import Table


def make_table(
    title: str | None,
    columns: Sequence[str],
    rows: Sequence[Sequence[Any]],
    *,
    show_lines: bool = False,
) -> Table:
    """Build a Rich Table from column headers and row data."""
    table = Table(title=title, show_lines=show_lines, box=box.ROUNDED)
    for col in columns:
        table.add_column(col, no_wrap=False, overflow="fold")
    for row in rows:
        table.add_row(*(str(cell) if cell is not None else "" for cell in row))
    return table
