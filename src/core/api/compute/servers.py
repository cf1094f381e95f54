"""Compute (Nova): servidores.

Rutas relativas a la URL versionada del servicio (`.../v2.1`).
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from core.api.endpoint import JsonBodyParams, Pageable, QueryParams, RestEndpoint, quote_path
from core.api.find import Findable
from core.domain.service_type import ServiceType


class ListServers(Pageable):
    """GET /servers/detail (filtros de la whitelist de Nova)."""

    name: str | None = Field(default=None, description="Regex sobre el nombre (Nova).")
    status: str | None = None
    host: str | None = None
    flavor: str | None = None
    image: str | None = None
    project_id: str | None = None
    user_id: str | None = None
    availability_zone: str | None = None
    ip: str | None = None
    all_tenants: bool | None = None
    changes_since: str | None = None
    changes_before: str | None = None
    tags: str | None = None
    locked: bool | None = None
    sort_key: str | None = None
    sort_dir: str | None = None

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return "servers/detail"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("name", self.name)
        params.push_opt("status", self.status)
        params.push_opt("host", self.host)
        params.push_opt("flavor", self.flavor)
        params.push_opt("image", self.image)
        params.push_opt("project_id", self.project_id)
        params.push_opt("user_id", self.user_id)
        params.push_opt("availability_zone", self.availability_zone)
        params.push_opt("ip", self.ip)
        params.push_opt("all_tenants", self.all_tenants)
        params.push_opt("changes-since", self.changes_since)
        params.push_opt("changes-before", self.changes_before)
        params.push_opt("tags", self.tags)
        params.push_opt("locked", self.locked)
        params.push_opt("sort_key", self.sort_key)
        params.push_opt("sort_dir", self.sort_dir)
        return self.push_paging(params)

    def service_type(self) -> ServiceType:
        return ServiceType.COMPUTE

    def response_key(self) -> str | None:
        return "servers"


class GetServer(RestEndpoint):
    id: str = Field(..., min_length=1)

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return f"servers/{quote_path(self.id)}"

    def service_type(self) -> ServiceType:
        return ServiceType.COMPUTE

    def response_key(self) -> str | None:
        return "server"


class DeleteServer(RestEndpoint):
    id: str = Field(..., min_length=1)

    def method(self) -> str:
        return "DELETE"

    def endpoint(self) -> str:
        return f"servers/{quote_path(self.id)}"

    def service_type(self) -> ServiceType:
        return ServiceType.COMPUTE


class _ServerAction(RestEndpoint):
    """POST /servers/{id}/action; Nova responde 202 sin cuerpo."""

    id: str = Field(..., min_length=1)

    def method(self) -> str:
        return "POST"

    def endpoint(self) -> str:
        return f"servers/{quote_path(self.id)}/action"

    def service_type(self) -> ServiceType:
        return ServiceType.COMPUTE


class RebootServer(_ServerAction):
    type: Literal["SOFT", "HARD"] = "SOFT"

    def body(self) -> tuple[str, bytes] | None:
        return JsonBodyParams().push("reboot", {"type": self.type}).into_body()


class LockServer(_ServerAction):
    # `locked_reason` requiere microversión >= 2.73.
    locked_reason: str | None = None

    def body(self) -> tuple[str, bytes] | None:
        lock = {"locked_reason": self.locked_reason} if self.locked_reason else None
        return JsonBodyParams().push("lock", lock).into_body()


class UnlockServer(_ServerAction):
    def body(self) -> tuple[str, bytes] | None:
        return JsonBodyParams().push("unlock", None).into_body()


class FindServer(Findable):
    def get_ep(self) -> RestEndpoint:
        return GetServer(id=self.id, extra_headers=self.extra_headers)

    def list_ep(self) -> RestEndpoint:
        return ListServers(name=self.id, extra_headers=self.extra_headers)
