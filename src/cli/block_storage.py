"""Comandos de Block Storage (Cinder v3)."""

from __future__ import annotations

from typing import Optional

import typer

from adapters.session import AsyncOpenStack
from cli.context import get_state, run_action
from cli.output import OutputProcessor
from core.api.block_storage import CreateVolume, DeleteVolume, FindVolume, ListVolumes
from core.api.find import find, find_id
from core.api.image import FindImage
from core.api.paged import paged
from core.api.query import decode_as, query, raw_query
from core.domain.models import Volume
from core.domain.service_type import ServiceType

app = typer.Typer(no_args_is_help=True, help="Block storage service (volumes).")
volume_app = typer.Typer(no_args_is_help=True, help="Volumes.")
app.add_typer(volume_app, name="volume")

VOLUME_COLUMNS = ("id", "name", "status", "size", "attachments")

# `force` en DELETE /volumes/{id} existe desde la microversión 3.23.
_FORCE_DELETE_MICROVERSION = "3.23"


@volume_app.command("list")
def volume_list(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None),
    status: Optional[str] = typer.Option(None),
    project: Optional[str] = typer.Option(None, "--project", help="ID del proyecto (admin)."),
    all_projects: bool = typer.Option(False, "--all-projects"),
    max_items: Optional[int] = typer.Option(None, "--max-items", min=0),
) -> None:
    """List volumes."""

    state = get_state(ctx)

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        ep = (
            ListVolumes.builder()
            .set(
                name=name,
                status=status,
                project_id=project,
                all_tenants=True if all_projects else None,
            )
            .headers(state.api_headers(ServiceType.BLOCK_STORAGE))
            .build()
        )
        pager = paged(ep, state.pagination(max_items), state.settings.page_size)
        out.output_list(decode_as(await pager.query(session), list[Volume]), VOLUME_COLUMNS)

    run_action(ctx, action)


@volume_app.command("show")
def volume_show(ctx: typer.Context, volume: str = typer.Argument(..., help="Nombre o ID.")) -> None:
    """Show a volume."""

    state = get_state(ctx)

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        finder = FindVolume.build(id=volume, extra_headers=state.api_headers(ServiceType.BLOCK_STORAGE))
        out.output_single(decode_as(await find(finder, session), Volume))

    run_action(ctx, action)


@volume_app.command("create")
def volume_create(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Nombre del volumen."),
    size: Optional[int] = typer.Option(None, "--size", min=1, help="Tamaño en GiB."),
    image: Optional[str] = typer.Option(None, "--image", help="Imagen origen (nombre o ID)."),
    snapshot: Optional[str] = typer.Option(None, "--snapshot", help="ID del snapshot origen."),
    source: Optional[str] = typer.Option(None, "--source", help="ID del volumen origen."),
    volume_type: Optional[str] = typer.Option(None, "--type"),
    availability_zone: Optional[str] = typer.Option(None, "--availability-zone"),
    description: Optional[str] = typer.Option(None),
) -> None:
    """Create a volume."""

    if size is None and not (snapshot or source):
        raise typer.BadParameter("--size is required unless --snapshot or --source is given", param_hint="--size")

    state = get_state(ctx)

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        image_id = await find_id(FindImage.build(id=image), session) if image else None
        new_volume = {
            "name": name,
            "size": size,
            "image_ref": image_id,
            "snapshot_id": snapshot,
            "source_volid": source,
            "volume_type": volume_type,
            "availability_zone": availability_zone,
            "description": description,
        }
        ep = CreateVolume.build(volume=new_volume, extra_headers=state.api_headers(ServiceType.BLOCK_STORAGE))
        out.output_single(decode_as(await query(ep, session), Volume))

    run_action(ctx, action)


@volume_app.command("delete")
def volume_delete(
    ctx: typer.Context,
    volume: str = typer.Argument(..., help="Nombre o ID."),
    cascade: bool = typer.Option(False, "--cascade", help="Borrar también sus snapshots."),
    force: bool = typer.Option(False, "--force", help="Forzar el borrado (admin)."),
) -> None:
    """Delete a volume."""

    state = get_state(ctx)

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        headers = state.api_headers(ServiceType.BLOCK_STORAGE)
        volume_id = await find_id(FindVolume.build(id=volume, extra_headers=headers), session)
        if force:
            headers = state.api_headers(ServiceType.BLOCK_STORAGE, minimum=_FORCE_DELETE_MICROVERSION)
        ep = DeleteVolume.build(
            id=volume_id,
            cascade=True if cascade else None,
            force=True if force else None,
            extra_headers=headers,
        )
        await raw_query(ep, session)
        out.output_action("Volume", volume_id, "deleted")

    run_action(ctx, action)
