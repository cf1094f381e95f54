"""Entrada de la CLI (`osc`).

Estructura:
- Opciones globales en el callback raíz (cloud, formato de salida, logging,
  microversiones).
- Un sub-app de Typer por servicio; cada comando construye descriptores del
  Core y delega la ejecución en `cli.context.run_action`.
"""

from __future__ import annotations

from typing import Optional

import typer
from pydantic import ValidationError

from cli import block_storage, compute, doctor, identity, image, network
from cli.context import CliState, fail
from cli.output import OutputFormat
from core.config import AppSettings
from core.domain.service_type import ServiceType
from core.errors import ConfigError
from core.logging import configure_logging

app = typer.Typer(
    no_args_is_help=True,
    help="OpenStack command-line client (compute, identity, image, network, block-storage).",
    pretty_exceptions_show_locals=False,
)

app.add_typer(compute.app, name="compute")
app.add_typer(identity.app, name="identity")
app.add_typer(image.app, name="image")
app.add_typer(network.app, name="network")
app.add_typer(block_storage.app, name="block-storage")
app.add_typer(doctor.app, name="doctor")


@app.callback()
def main(
    ctx: typer.Context,
    os_cloud: Optional[str] = typer.Option(
        None,
        "--os-cloud",
        envvar="OS_CLOUD",
        help="Cloud de clouds.yaml (si no, variables OS_*).",
    ),
    output: Optional[OutputFormat] = typer.Option(
        None,
        "--output",
        "-o",
        case_sensitive=False,
        help="Formato de salida (defecto: OSC_DEFAULT_OUTPUT).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Logs DEBUG en stderr."),
    log_json: bool = typer.Option(False, "--log-json", help="Logs en JSON (una línea por registro)."),
    os_compute_api_version: Optional[str] = typer.Option(
        None,
        "--os-compute-api-version",
        envvar="OS_COMPUTE_API_VERSION",
        help="Microversión de Nova (p.ej. 2.79).",
    ),
    os_block_storage_api_version: Optional[str] = typer.Option(
        None,
        "--os-block-storage-api-version",
        envvar="OS_VOLUME_API_VERSION",
        help="Microversión de Cinder (p.ej. 3.60).",
    ),
) -> None:
    try:
        settings = AppSettings()
    except ValidationError as exc:
        fail(ConfigError(f"Invalid OSC_* settings: {exc.error_count()} error(s)", details=str(exc)))
    configure_logging(verbose=verbose, json_output=log_json or settings.log_json)

    microversions: dict[ServiceType, str] = {}
    if os_compute_api_version:
        microversions[ServiceType.COMPUTE] = os_compute_api_version
    if os_block_storage_api_version:
        microversions[ServiceType.BLOCK_STORAGE] = os_block_storage_api_version

    ctx.obj = CliState(
        settings=settings,
        cloud=os_cloud,
        output=output or OutputFormat(settings.default_output),
        microversions=microversions,
    )


def run() -> None:
    app()


if __name__ == "__main__":
    run()
