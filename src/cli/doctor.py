"""Doctor command for connection diagnostics."""

from __future__ import annotations

import typer
from rich.table import Table

from adapters.session import AsyncOpenStack
from cli.context import run_action
from cli.output import OutputFormat, OutputProcessor
from core.api.auth import AuthToken
from core.domain.service_type import ServiceType
from core.errors import OpenStackCliError

app = typer.Typer(no_args_is_help=True, help="Connection diagnostics and configuration checks.")


async def collect_checks(session: AsyncOpenStack) -> list[tuple[str, str, str]]:
    """Filas (check, status, details); los fallos por servicio no abortan el resto."""

    profile = session.profile
    rows: list[tuple[str, str, str]] = [
        ("Cloud profile", "OK", profile.name),
        ("Auth type", "OK", profile.auth_type),
        ("Auth URL", "OK" if profile.auth_url else "MISSING", profile.auth_url or "-"),
    ]

    if session.auth_type not in ("none", "noauth"):
        try:
            auth = await session.authorize()
        except OpenStackCliError as exc:
            rows.append(("Authentication", "FAIL", exc.message))
            return rows
        expiry = auth.expires_at.isoformat() if isinstance(auth, AuthToken) and auth.expires_at else "-"
        rows.append(("Authentication", auth.state.value.upper(), f"expires {expiry}"))
        rows.append(("Catalog", "OK", f"{len(session.catalog)} endpoint(s)"))
    else:
        rows.append(("Authentication", "SKIPPED", "auth_type none"))

    for service in ServiceType:
        try:
            url = await session.discover_service_endpoint(service)
        except OpenStackCliError as exc:
            rows.append((service.label(), "MISSING", exc.message))
            continue
        rows.append((service.label(), "OK", url))
    return rows


@app.command()
def run(ctx: typer.Context) -> None:
    """Resolve the cloud profile, authenticate and list the catalog endpoints."""

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        rows = await collect_checks(session)
        if out.fmt is OutputFormat.JSON:
            out.output_list([{"check": c, "status": s, "details": d} for c, s, d in rows], ())
            return

        table = Table(title=f"osc Doctor ({session.profile.name})")
        table.add_column("Check", style="bright_green", no_wrap=True)
        table.add_column("Status", style="white")
        table.add_column("Details", style="dim")
        for check, status, details in rows:
            table.add_row(check, status, details)
        out.console.print(table)

        if any(status == "FAIL" for _, status, _ in rows):
            out.console.print(
                "\n[yellow]Note:[/yellow] check the credentials in clouds.yaml or the OS_* variables."
            )

    run_action(ctx, action)
