"""Output dispatcher — renders data as a table, JSON, CSV, or markdown."""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from langfuse_cli.client.errors import err_console
from langfuse_cli.config.models import OutputFormat
from langfuse_cli.output.tables import make_table

console = Console()

NO_DATA = "No data to display"
TABLE_CELL_WIDTH = 50


def to_jsonable(data: Any) -> Any:
    """Convert pydantic models (possibly nested in lists) to plain JSON values."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, (list, tuple)):
        return [to_jsonable(item) for item in data]
    return data


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, (list, dict)) and not value)


def _rows(value: Any) -> list[dict[str, Any]] | None:
    """Return *value* as a list of objects, or ``None`` if it has no tabular shape."""
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list) and all(isinstance(item, dict) for item in value):
        return value
    return None


def _columns(rows: list[dict[str, Any]], columns: Sequence[str] | None) -> list[str]:
    if columns:
        return list(columns)
    keys = {key for row in rows for key, v in row.items() if v is not None}
    return sorted(keys)


def cell_text(value: Any, max_len: int | None = None) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (dict, list)):
        text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
        if max_len is not None and len(text) > max_len:
            return text[:max_len] + "..."
        return text
    return str(value)


def format_json(data: Any) -> str:
    return json.dumps(to_jsonable(data), indent=2, ensure_ascii=False, default=str)


def format_csv(data: Any, columns: Sequence[str] | None = None) -> str:
    value = to_jsonable(data)
    rows = _rows(value)
    if _is_empty(value):
        return NO_DATA
    if rows is None:
        return cell_text(value)
    headers = _columns(rows, columns)
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows([[cell_text(row.get(h)) for h in headers] for row in rows])
    return buf.getvalue()


def format_markdown(data: Any, columns: Sequence[str] | None = None) -> str:
    value = to_jsonable(data)
    rows = _rows(value)
    if _is_empty(value):
        return NO_DATA
    if rows is None:
        return cell_text(value)
    headers = _columns(rows, columns)
    lines = [
        "| " + " | ".join(headers) + " |",
        "|" + " --- |" * len(headers),
    ]
    for row in rows:
        cells = [cell_text(row.get(h)).replace("|", "\\|").replace("\n", " ") for h in headers]
        lines.append("| " + " | ".join(cells) + " |")
    return "\n".join(lines) + "\n"


def format_table(
    data: Any, columns: Sequence[str] | None = None, title: str | None = None,
) -> Table | str:
    value = to_jsonable(data)
    rows = _rows(value)
    if _is_empty(value):
        return NO_DATA
    if rows is None:
        return cell_text(value)
    headers = _columns(rows, columns)
    if not headers:
        return NO_DATA
    body = [[cell_text(row.get(h), TABLE_CELL_WIDTH) for h in headers] for row in rows]
    return make_table(title, headers, body)


def _write_file(path: str, rendered: Table | str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        if isinstance(rendered, Table):
            Console(file=f, width=200, no_color=True).print(rendered)
        else:
            f.write(rendered if rendered.endswith("\n") else rendered + "\n")


def _report_written(path: str) -> None:
    err_console.print(
        f"[green]Output written to:[/] {escape(str(Path(path).resolve()))}",
        highlight=False,
        soft_wrap=True,
    )


def output(
    data: Any,
    fmt: OutputFormat | str = OutputFormat.table,
    *,
    columns: Sequence[str] | None = None,
    title: str | None = None,
    output_path: str | None = None,
) -> None:
    """Render *data* in *fmt* to stdout, or to *output_path* when given.

    *columns* narrows the table view only; CSV and markdown always carry
    every populated field.
    """
    fmt = OutputFormat(fmt)
    rendered: Table | str
    if fmt is OutputFormat.json:
        rendered = format_json(data)
    elif fmt is OutputFormat.csv:
        rendered = format_csv(data)
    elif fmt is OutputFormat.markdown:
        rendered = format_markdown(data)
    else:
        rendered = format_table(data, columns, title)

    if output_path:
        _write_file(output_path, rendered)
        _report_written(output_path)
    elif isinstance(rendered, Table):
        console.print(rendered)
    else:
        console.print(
            rendered,
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
            end="" if rendered.endswith("\n") else "\n",
        )


def output_raw(text: str, output_path: str | None = None) -> None:
    """Write *text* unformatted, for piping."""
    if output_path:
        _write_file(output_path, text)
        _report_written(output_path)
    else:
        console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)
