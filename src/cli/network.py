"""Comandos de Network (Neutron v2.0): networks, ports."""

from __future__ import annotations

from typing import Optional

import typer

from adapters.session import AsyncOpenStack
from cli.context import get_state, run_action
from cli.output import OutputProcessor
from core.api.find import find, find_id
from core.api.network import CreateNetwork, DeleteNetwork, FindNetwork, ListNetworks, ListPorts
from core.api.paged import paged
from core.api.query import decode_as, query, raw_query
from core.domain.models import Network, Port

app = typer.Typer(no_args_is_help=True, help="Network service (networks, ports).")
network_app = typer.Typer(no_args_is_help=True, help="Networks.")
port_app = typer.Typer(no_args_is_help=True, help="Ports.")
app.add_typer(network_app, name="network")
app.add_typer(port_app, name="port")

NETWORK_COLUMNS = ("id", "name", "status", "subnets")
PORT_COLUMNS = ("id", "name", "mac_address", "fixed_ips", "status")


@network_app.command("list")
def network_list(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None),
    status: Optional[str] = typer.Option(None),
    shared: Optional[bool] = typer.Option(None, "--share/--no-share"),
    external: Optional[bool] = typer.Option(None, "--external/--internal"),
    project: Optional[str] = typer.Option(None, "--project", help="ID del proyecto."),
    max_items: Optional[int] = typer.Option(None, "--max-items", min=0),
) -> None:
    """List networks."""

    state = get_state(ctx)

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        ep = (
            ListNetworks.builder()
            .set(name=name, status=status, shared=shared, external=external, project_id=project)
            .build()
        )
        pager = paged(ep, state.pagination(max_items), state.settings.page_size)
        out.output_list(decode_as(await pager.query(session), list[Network]), NETWORK_COLUMNS)

    run_action(ctx, action)


@network_app.command("show")
def network_show(ctx: typer.Context, network: str = typer.Argument(..., help="Nombre o ID.")) -> None:
    """Show a network."""

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        out.output_single(decode_as(await find(FindNetwork.build(id=network), session), Network))

    run_action(ctx, action)


@network_app.command("create")
def network_create(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Nombre de la red."),
    description: Optional[str] = typer.Option(None),
    enabled: Optional[bool] = typer.Option(None, "--enable/--disable", help="admin_state_up."),
    shared: Optional[bool] = typer.Option(None, "--share/--no-share"),
    external: Optional[bool] = typer.Option(None, "--external/--internal"),
    mtu: Optional[int] = typer.Option(None, "--mtu"),
    project: Optional[str] = typer.Option(None, "--project", help="ID del proyecto (admin)."),
) -> None:
    """Create a network."""

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        new_network = {
            "name": name,
            "description": description,
            "admin_state_up": enabled,
            "shared": shared,
            "external": external,
            "mtu": mtu,
            "project_id": project,
        }
        out.output_single(decode_as(await query(CreateNetwork.build(network=new_network), session), Network))

    run_action(ctx, action)


@network_app.command("delete")
def network_delete(ctx: typer.Context, network: str = typer.Argument(..., help="Nombre o ID.")) -> None:
    """Delete a network."""

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        network_id = await find_id(FindNetwork.build(id=network), session)
        await raw_query(DeleteNetwork.build(id=network_id), session)
        out.output_action("Network", network_id, "deleted")

    run_action(ctx, action)


@port_app.command("list")
def port_list(
    ctx: typer.Context,
    network: Optional[str] = typer.Option(None, "--network", help="Red (nombre o ID)."),
    device_id: Optional[str] = typer.Option(None, "--device-id"),
    device_owner: Optional[str] = typer.Option(None, "--device-owner"),
    mac_address: Optional[str] = typer.Option(None, "--mac-address"),
    status: Optional[str] = typer.Option(None),
    max_items: Optional[int] = typer.Option(None, "--max-items", min=0),
) -> None:
    """List ports."""

    state = get_state(ctx)

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        network_id = await find_id(FindNetwork.build(id=network), session) if network else None
        ep = (
            ListPorts.builder()
            .set(
                network_id=network_id,
                device_id=device_id,
                device_owner=device_owner,
                mac_address=mac_address,
                status=status,
            )
            .build()
        )
        pager = paged(ep, state.pagination(max_items), state.settings.page_size)
        out.output_list(decode_as(await pager.query(session), list[Port]), PORT_COLUMNS)

    run_action(ctx, action)
