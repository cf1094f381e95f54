"""Comandos de Compute (Nova): servers, flavors, keypairs."""

from __future__ import annotations

from typing import Optional

import typer

from adapters.session import AsyncOpenStack
from cli.context import get_state, run_action
from cli.output import OutputProcessor
from core.api.compute import (
    DeleteServer,
    FindFlavor,
    FindServer,
    ListFlavors,
    ListKeypairs,
    ListServers,
    LockServer,
    RebootServer,
    UnlockServer,
)
from core.api.find import find, find_id
from core.api.paged import paged
from core.api.query import decode_as, query, raw_query
from core.domain.models import Flavor, Keypair, Server
from core.domain.service_type import ServiceType

app = typer.Typer(no_args_is_help=True, help="Compute service (servers, flavors, keypairs).")
server_app = typer.Typer(no_args_is_help=True, help="Servers.")
flavor_app = typer.Typer(no_args_is_help=True, help="Flavors.")
keypair_app = typer.Typer(no_args_is_help=True, help="Keypairs.")
app.add_typer(server_app, name="server")
app.add_typer(flavor_app, name="flavor")
app.add_typer(keypair_app, name="keypair")

SERVER_COLUMNS = ("id", "name", "status", "key_name")
FLAVOR_COLUMNS = ("id", "name", "vcpus", "ram", "disk", "is_public")
KEYPAIR_COLUMNS = ("name", "fingerprint", "type")

# `locked_reason` existe desde la microversión 2.73.
_LOCK_REASON_MICROVERSION = "2.73"

MaxItems = typer.Option(None, "--max-items", min=0, help="Máximo de elementos (defecto: OSC_MAX_ITEMS).")


@server_app.command("list")
def server_list(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None, help="Regex sobre el nombre."),
    status: Optional[str] = typer.Option(None, help="ACTIVE, SHUTOFF, ERROR..."),
    host: Optional[str] = typer.Option(None),
    flavor: Optional[str] = typer.Option(None, help="ID del flavor."),
    image: Optional[str] = typer.Option(None, help="ID de la imagen."),
    project: Optional[str] = typer.Option(None, "--project", help="ID del proyecto (admin)."),
    all_projects: bool = typer.Option(False, "--all-projects", help="Todos los proyectos (admin)."),
    locked: Optional[bool] = typer.Option(None, "--locked/--unlocked"),
    sort_key: Optional[str] = typer.Option(None),
    sort_dir: Optional[str] = typer.Option(None),
    max_items: Optional[int] = MaxItems,
) -> None:
    """List servers."""

    state = get_state(ctx)

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        ep = (
            ListServers.builder()
            .set(
                name=name,
                status=status,
                host=host,
                flavor=flavor,
                image=image,
                project_id=project,
                all_tenants=True if all_projects else None,
                locked=locked,
                sort_key=sort_key,
                sort_dir=sort_dir,
            )
            .headers(state.api_headers(ServiceType.COMPUTE))
            .build()
        )
        pager = paged(ep, state.pagination(max_items), state.settings.page_size)
        out.output_list(decode_as(await pager.query(session), list[Server]), SERVER_COLUMNS)

    run_action(ctx, action)


@server_app.command("show")
def server_show(ctx: typer.Context, server: str = typer.Argument(..., help="Nombre o ID.")) -> None:
    """Show a server."""

    state = get_state(ctx)

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        finder = FindServer.build(id=server, extra_headers=state.api_headers(ServiceType.COMPUTE))
        out.output_single(decode_as(await find(finder, session), Server))

    run_action(ctx, action)


@server_app.command("delete")
def server_delete(ctx: typer.Context, server: str = typer.Argument(..., help="Nombre o ID.")) -> None:
    """Delete a server."""

    state = get_state(ctx)

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        headers = state.api_headers(ServiceType.COMPUTE)
        server_id = await find_id(FindServer.build(id=server, extra_headers=headers), session)
        await raw_query(DeleteServer.build(id=server_id, extra_headers=headers), session)
        out.output_action("Server", server_id, "deleted")

    run_action(ctx, action)


@server_app.command("reboot")
def server_reboot(
    ctx: typer.Context,
    server: str = typer.Argument(..., help="Nombre o ID."),
    hard: bool = typer.Option(False, "--hard", help="Reinicio HARD (por defecto SOFT)."),
) -> None:
    """Reboot a server."""

    state = get_state(ctx)

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        headers = state.api_headers(ServiceType.COMPUTE)
        server_id = await find_id(FindServer.build(id=server, extra_headers=headers), session)
        ep = RebootServer.build(id=server_id, type="HARD" if hard else "SOFT", extra_headers=headers)
        await raw_query(ep, session)
        out.output_action("Server", server_id, "rebooted")

    run_action(ctx, action)


@server_app.command("lock")
def server_lock(
    ctx: typer.Context,
    server: str = typer.Argument(..., help="Nombre o ID."),
    reason: Optional[str] = typer.Option(None, "--reason", help="Motivo del bloqueo."),
) -> None:
    """Lock a server."""

    state = get_state(ctx)

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        headers = state.api_headers(ServiceType.COMPUTE)
        server_id = await find_id(FindServer.build(id=server, extra_headers=headers), session)
        if reason:
            headers = state.api_headers(ServiceType.COMPUTE, minimum=_LOCK_REASON_MICROVERSION)
        await raw_query(LockServer.build(id=server_id, locked_reason=reason, extra_headers=headers), session)
        out.output_action("Server", server_id, "locked")

    run_action(ctx, action)


@server_app.command("unlock")
def server_unlock(ctx: typer.Context, server: str = typer.Argument(..., help="Nombre o ID.")) -> None:
    """Unlock a server."""

    state = get_state(ctx)

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        headers = state.api_headers(ServiceType.COMPUTE)
        server_id = await find_id(FindServer.build(id=server, extra_headers=headers), session)
        await raw_query(UnlockServer.build(id=server_id, extra_headers=headers), session)
        out.output_action("Server", server_id, "unlocked")

    run_action(ctx, action)


@flavor_app.command("list")
def flavor_list(
    ctx: typer.Context,
    public: Optional[bool] = typer.Option(None, "--public/--private", help="Solo públicos o privados."),
    all_flavors: bool = typer.Option(False, "--all", help="Públicos y privados (admin)."),
    min_ram: Optional[int] = typer.Option(None, "--min-ram", min=0),
    min_disk: Optional[int] = typer.Option(None, "--min-disk", min=0),
    max_items: Optional[int] = MaxItems,
) -> None:
    """List flavors."""

    state = get_state(ctx)
    is_public = "none" if all_flavors else (None if public is None else str(public).lower())

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        ep = (
            ListFlavors.builder()
            .set(is_public=is_public, min_ram=min_ram, min_disk=min_disk)
            .headers(state.api_headers(ServiceType.COMPUTE))
            .build()
        )
        pager = paged(ep, state.pagination(max_items), state.settings.page_size)
        out.output_list(decode_as(await pager.query(session), list[Flavor]), FLAVOR_COLUMNS)

    run_action(ctx, action)


@flavor_app.command("show")
def flavor_show(ctx: typer.Context, flavor: str = typer.Argument(..., help="Nombre o ID.")) -> None:
    """Show a flavor."""

    state = get_state(ctx)

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        finder = FindFlavor.build(id=flavor, extra_headers=state.api_headers(ServiceType.COMPUTE))
        out.output_single(decode_as(await find(finder, session), Flavor))

    run_action(ctx, action)


@keypair_app.command("list")
def keypair_list(
    ctx: typer.Context,
    user: Optional[str] = typer.Option(None, "--user", help="ID de usuario (admin, microversión 2.10+)."),
) -> None:
    """List keypairs."""

    state = get_state(ctx)

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        ep = ListKeypairs.build(user_id=user, extra_headers=state.api_headers(ServiceType.COMPUTE))
        items = await query(ep, session) or []
        records = [item.get("keypair", item) if isinstance(item, dict) else item for item in items]
        out.output_list(decode_as(records, list[Keypair]), KEYPAIR_COLUMNS)

    run_action(ctx, action)
