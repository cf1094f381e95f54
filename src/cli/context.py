"""Estado compartido de la CLI y ejecución de acciones async.

Por qué un módulo propio:
- Los subcomandos (compute, identity, ...) no repiten la gestión de sesión,
  el `asyncio.run` ni el manejo de errores.
- Los tests sustituyen `open_session` para inyectar un transporte falso.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, NoReturn

import typer
from rich.console import Console

from adapters.clouds import load_cloud_profile
from adapters.session import AsyncOpenStack
from cli.output import OutputFormat, OutputProcessor
from cli.ui_components import build_error_panel
from core.api.endpoint import microversion_header
from core.api.paged import Pagination
from core.config import AppSettings
from core.domain.models import CloudProfile
from core.domain.service_type import ServiceType
from core.errors import OpenStackCliError

logger = logging.getLogger(__name__)

Action = Callable[[AsyncOpenStack, OutputProcessor], Awaitable[None]]


def open_session(profile: CloudProfile, settings: AppSettings) -> AsyncOpenStack:
    return AsyncOpenStack(profile, settings)


@dataclass
class CliState:
    settings: AppSettings
    cloud: str | None = None
    output: OutputFormat = OutputFormat.TABLE
    microversions: dict[ServiceType, str] = field(default_factory=dict)

    def api_headers(self, service_type: ServiceType, *, minimum: str | None = None) -> dict[str, str]:
        """Cabecera de microversión: la pedida por el usuario o `minimum`."""

        version = self.microversions.get(service_type) or minimum
        if not version:
            return {}
        return microversion_header(service_type, version)

    def pagination(self, max_items: int | None) -> Pagination:
        return Pagination.limit(self.settings.max_items if max_items is None else max_items)

    def output_processor(self) -> OutputProcessor:
        return OutputProcessor(self.output)


def get_state(ctx: typer.Context) -> CliState:
    root = ctx.find_root()
    if not isinstance(root.obj, CliState):
        root.obj = CliState(settings=AppSettings())
    return root.obj


async def _run_with_session(state: CliState, action: Action) -> None:
    profile = load_cloud_profile(state.cloud, settings=state.settings)
    async with open_session(profile, state.settings) as session:
        await action(session, state.output_processor())


def run_action(ctx: typer.Context, action: Action) -> None:
    """Ejecuta una acción async y traduce errores del dominio a exit code 1."""

    state = get_state(ctx)
    try:
        asyncio.run(_run_with_session(state, action))
    except OpenStackCliError as exc:
        logger.debug("Command failed", exc_info=True)
        fail(exc)


def fail(exc: OpenStackCliError) -> NoReturn:
    Console(stderr=True).print(build_error_panel(exc))
    raise typer.Exit(code=1) from exc
