"""Salida de los comandos: tabla Rich o JSON.

Por qué JSON estable:
- Interoperabilidad con `jq` y pipelines (orden de claves fijo, UTF-8).
- La tabla es solo presentación; el JSON conserva todos los campos decodificados.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Sequence

import typer
from pydantic import BaseModel
from rich.console import Console

from cli.ui_components import build_list_table, build_show_table


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"


def _as_dict(record: BaseModel | dict[str, Any]) -> dict[str, Any]:
    if isinstance(record, BaseModel):
        return record.model_dump(mode="json")
    return dict(record)


def dumps(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


class OutputProcessor:
    def __init__(self, fmt: OutputFormat = OutputFormat.TABLE, console: Console | None = None) -> None:
        self.fmt = fmt
        self._console = console

    @property
    def console(self) -> Console:
        if self._console is None:
            self._console = Console()
        return self._console

    def output_list(
        self,
        records: Sequence[BaseModel | dict[str, Any]],
        columns: Sequence[str],
        *,
        title: str | None = None,
    ) -> None:
        rows = [_as_dict(r) for r in records]
        if self.fmt is OutputFormat.JSON:
            typer.echo(dumps(rows))
            return
        self.console.print(build_list_table(rows, columns, title=title))

    def output_single(self, record: BaseModel | dict[str, Any], *, title: str | None = None) -> None:
        data = _as_dict(record)
        if self.fmt is OutputFormat.JSON:
            typer.echo(dumps(data))
            return
        self.console.print(build_show_table(data, title=title))

    def output_action(self, kind: str, resource_id: str, action: str) -> None:
        """Confirmación de acciones sin cuerpo (202/204)."""

        if self.fmt is OutputFormat.JSON:
            typer.echo(dumps({"id": resource_id, "resource": kind, "action": action}))
            return
        self.console.print(f"{kind} [cyan]{resource_id}[/cyan] {action}", highlight=False)
