"""Comandos de Identity (Keystone v3): projects, users."""

from __future__ import annotations

from typing import List, Optional

import typer

from adapters.session import AsyncOpenStack
from cli.context import get_state, run_action
from cli.output import OutputProcessor
from core.api.find import find, find_id
from core.api.identity import (
    CreateProject,
    CreateUser,
    DeleteProject,
    FindProject,
    FindUser,
    ListProjects,
    ListUsers,
)
from core.api.paged import paged
from core.api.query import decode_as, query, raw_query
from core.domain.models import Project, User

app = typer.Typer(no_args_is_help=True, help="Identity service (projects, users).")
project_app = typer.Typer(no_args_is_help=True, help="Projects.")
user_app = typer.Typer(no_args_is_help=True, help="Users.")
app.add_typer(project_app, name="project")
app.add_typer(user_app, name="user")

PROJECT_COLUMNS = ("id", "name", "domain_id", "enabled")
USER_COLUMNS = ("id", "name", "domain_id", "enabled")


@project_app.command("list")
def project_list(
    ctx: typer.Context,
    domain: Optional[str] = typer.Option(None, "--domain", help="ID del dominio."),
    name: Optional[str] = typer.Option(None),
    enabled: Optional[bool] = typer.Option(None, "--enabled/--disabled"),
    parent: Optional[str] = typer.Option(None, "--parent", help="ID del proyecto padre."),
    max_items: Optional[int] = typer.Option(None, "--max-items", min=0),
) -> None:
    """List projects."""

    state = get_state(ctx)

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        ep = ListProjects.builder().set(domain_id=domain, name=name, enabled=enabled, parent_id=parent).build()
        pager = paged(ep, state.pagination(max_items))
        out.output_list(decode_as(await pager.query(session), list[Project]), PROJECT_COLUMNS)

    run_action(ctx, action)


@project_app.command("show")
def project_show(ctx: typer.Context, project: str = typer.Argument(..., help="Nombre o ID.")) -> None:
    """Show a project."""

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        out.output_single(decode_as(await find(FindProject.build(id=project), session), Project))

    run_action(ctx, action)


@project_app.command("create")
def project_create(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Nombre del proyecto."),
    domain: Optional[str] = typer.Option(None, "--domain", help="ID del dominio."),
    description: Optional[str] = typer.Option(None),
    enabled: Optional[bool] = typer.Option(None, "--enable/--disable"),
    parent: Optional[str] = typer.Option(None, "--parent", help="ID del proyecto padre."),
    tags: Optional[List[str]] = typer.Option(None, "--tag", help="Repetible."),
) -> None:
    """Create a project."""

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        new_project = {
            "name": name,
            "domain_id": domain,
            "description": description,
            "enabled": enabled,
            "parent_id": parent,
            "tags": tags or None,
        }
        out.output_single(decode_as(await query(CreateProject.build(project=new_project), session), Project))

    run_action(ctx, action)


@project_app.command("delete")
def project_delete(ctx: typer.Context, project: str = typer.Argument(..., help="Nombre o ID.")) -> None:
    """Delete a project."""

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        project_id = await find_id(FindProject.build(id=project), session)
        await raw_query(DeleteProject.build(id=project_id), session)
        out.output_action("Project", project_id, "deleted")

    run_action(ctx, action)


@user_app.command("list")
def user_list(
    ctx: typer.Context,
    domain: Optional[str] = typer.Option(None, "--domain", help="ID del dominio."),
    name: Optional[str] = typer.Option(None),
    enabled: Optional[bool] = typer.Option(None, "--enabled/--disabled"),
    max_items: Optional[int] = typer.Option(None, "--max-items", min=0),
) -> None:
    """List users."""

    state = get_state(ctx)

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        ep = ListUsers.builder().set(domain_id=domain, name=name, enabled=enabled).build()
        pager = paged(ep, state.pagination(max_items))
        out.output_list(decode_as(await pager.query(session), list[User]), USER_COLUMNS)

    run_action(ctx, action)


@user_app.command("show")
def user_show(ctx: typer.Context, user: str = typer.Argument(..., help="Nombre o ID.")) -> None:
    """Show a user."""

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        out.output_single(decode_as(await find(FindUser.build(id=user), session), User))

    run_action(ctx, action)


@user_app.command("create")
def user_create(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Nombre del usuario."),
    domain: Optional[str] = typer.Option(None, "--domain", help="ID del dominio."),
    project: Optional[str] = typer.Option(None, "--project", help="Proyecto por defecto (nombre o ID)."),
    password: Optional[str] = typer.Option(None, "--password"),
    password_prompt: bool = typer.Option(False, "--password-prompt", help="Pedir la contraseña interactivamente."),
    email: Optional[str] = typer.Option(None),
    description: Optional[str] = typer.Option(None),
    enabled: Optional[bool] = typer.Option(None, "--enable/--disable"),
) -> None:
    """Create a user."""

    if password_prompt:
        password = typer.prompt("User password", hide_input=True, confirmation_prompt=True)

    async def action(session: AsyncOpenStack, out: OutputProcessor) -> None:
        project_id = await find_id(FindProject.build(id=project), session) if project else None
        new_user = {
            "name": name,
            "domain_id": domain,
            "default_project_id": project_id,
            "password": password,
            "email": email,
            "description": description,
            "enabled": enabled,
        }
        out.output_single(decode_as(await query(CreateUser.build(user=new_user), session), User))

    run_action(ctx, action)
