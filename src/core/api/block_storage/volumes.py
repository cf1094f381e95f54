"""Block Storage (Cinder v3): volúmenes.

`--force` en el borrado requiere microversión 3.23; la CLI añade la cabecera.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from core.api.endpoint import JsonBodyParams, Pageable, QueryParams, RestEndpoint, quote_path
from core.api.find import Findable
from core.domain.service_type import ServiceType


class ListVolumes(Pageable):
    """GET /volumes/detail."""

    name: str | None = None
    status: str | None = None
    all_tenants: bool | None = None
    project_id: str | None = None
    sort: str | None = None
    with_count: bool | None = None

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return "volumes/detail"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("name", self.name)
        params.push_opt("status", self.status)
        params.push_opt("all_tenants", self.all_tenants)
        params.push_opt("project_id", self.project_id)
        params.push_opt("sort", self.sort)
        params.push_opt("with_count", self.with_count)
        return self.push_paging(params)

    def service_type(self) -> ServiceType:
        return ServiceType.BLOCK_STORAGE

    def response_key(self) -> str | None:
        return "volumes"


class GetVolume(RestEndpoint):
    id: str = Field(..., min_length=1)

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return f"volumes/{quote_path(self.id)}"

    def service_type(self) -> ServiceType:
        return ServiceType.BLOCK_STORAGE

    def response_key(self) -> str | None:
        return "volume"


class NewVolume(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    size: int | None = Field(default=None, ge=1, description="GiB; opcional si se clona de snapshot/volumen.")
    name: str | None = None
    description: str | None = None
    volume_type: str | None = None
    availability_zone: str | None = None
    image_ref: str | None = Field(default=None, alias="imageRef")
    snapshot_id: str | None = None
    source_volid: str | None = None
    multiattach: bool | None = None
    metadata: dict[str, Any] | None = None


class CreateVolume(RestEndpoint):
    volume: NewVolume

    def method(self) -> str:
        return "POST"

    def endpoint(self) -> str:
        return "volumes"

    def body(self) -> tuple[str, bytes] | None:
        return JsonBodyParams().push("volume", self.volume).into_body()

    def service_type(self) -> ServiceType:
        return ServiceType.BLOCK_STORAGE

    def response_key(self) -> str | None:
        return "volume"


class DeleteVolume(RestEndpoint):
    id: str = Field(..., min_length=1)
    cascade: bool | None = None
    force: bool | None = None

    def method(self) -> str:
        return "DELETE"

    def endpoint(self) -> str:
        return f"volumes/{quote_path(self.id)}"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("cascade", self.cascade)
        params.push_opt("force", self.force)
        return params

    def service_type(self) -> ServiceType:
        return ServiceType.BLOCK_STORAGE


class FindVolume(Findable):
    def get_ep(self) -> RestEndpoint:
        return GetVolume(id=self.id, extra_headers=self.extra_headers)

    def list_ep(self) -> RestEndpoint:
        return ListVolumes(name=self.id, extra_headers=self.extra_headers)
