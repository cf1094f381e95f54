"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en todos los servicios.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.errors import HttpError, OpenStackCliError


def format_value(value: Any) -> str:
    """Representación compacta de un valor para una celda."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, sort_keys=True)
    return str(value)


def build_list_table(
    rows: Iterable[Mapping[str, Any]],
    columns: Sequence[str],
    *,
    title: str | None = None,
) -> Table:
    """Una fila por recurso, solo con las columnas seleccionadas."""

    table = Table(title=title)
    for i, column in enumerate(columns):
        table.add_column(column, style="cyan" if i == 0 else "white", overflow="fold")
    for row in rows:
        table.add_row(*(format_value(row.get(column)) for column in columns))
    return table


def build_show_table(record: Mapping[str, Any], *, title: str | None = None) -> Table:
    """Tabla Field/Value para un único recurso."""

    table = Table(title=title)
    table.add_column("Field", style="bright_green", no_wrap=True)
    table.add_column("Value", style="white", overflow="fold")
    for key in sorted(record):
        table.add_row(key, format_value(record[key]))
    return table


def build_error_panel(exc: OpenStackCliError) -> Panel:
    """Panel de error para stderr."""

    body = Text()
    body.append(exc.message.strip() + "\n")
    if isinstance(exc, HttpError):
        if exc.url:
            body.append(f"\nURL: {exc.url}", style="dim")
        if exc.request_id:
            body.append(f"\nRequest ID: {exc.request_id}", style="dim")
    title = Text(exc.error_code, style="bold red")
    return Panel(body, title=title, border_style="red")
