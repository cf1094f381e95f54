"""Comandos de Image (Glance v2)."""

from __future__ import annotations

from typing import List, Optional

import typer

from adapters.session import AsyncOpenStack
from cli.context import get_state, run_action
from cli.output import OutputProcessor
from core.api.find import find, find_id
from core.api.image import DeleteImage, FindImage, ListImages
from core.api.paged import paged
from core.api.query import decode_as, raw_query
from core.domain.models import Image

app = typer.Typer(no_args_is_help=True, help="Image service.")
image_app = typer.Typer(no_args_is_help=True, help="Images.")
app.add_typer(image_app, name="image")

IMAGE_COLUMNS = ("id", "name", "status", "visibility", "size")


@image_app.command("list")
def image_list(
    ctx: typer.Context,
    name: Optional[str] = typer.Option(None),
    visibility: Optional[str] = typer.Option(None, help="public | private | shared | community | all."),
    status: Optional[str] = typer.Option(None),
    owner: Optional[str] = typer.Option(None, help="ID del proyecto propietario."),
    tags: Optional[List[str]] = typer.Option(None, "--tag", help="Repetible; todas deben coincidir."),
    sort: Optional[str] = typer.Option(None, help="p.ej. name:asc,status:desc"),
    max_items: Optional[int] = typer.Option(None, "--max-items", min=0),
) -> None:
    """List images."""

    state = get_state(ctx)

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        ep = (
            ListImages.builder()
            .set(name=name, visibility=visibility, status=status, owner=owner, tag=tags or None, sort=sort)
            .build()
        )
        pager = paged(ep, state.pagination(max_items), state.settings.page_size)
        out.output_list(decode_as(await pager.query(session), list[Image]), IMAGE_COLUMNS)

    run_action(ctx, action)


@image_app.command("show")
def image_show(ctx: typer.Context, image: str = typer.Argument(..., help="Nombre o ID.")) -> None:
    """Show an image."""

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        out.output_single(decode_as(await find(FindImage.build(id=image), session), Image))

    run_action(ctx, action)


@image_app.command("delete")
def image_delete(ctx: typer.Context, image: str = typer.Argument(..., help="Nombre o ID.")) -> None:
    """Delete an image."""

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        image_id = await find_id(FindImage.build(id=image), session)
        await raw_query(DeleteImage.build(id=image_id), session)
        out.output_action("Image", image_id, "deleted")

    run_action(ctx, action)
