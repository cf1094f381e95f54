"""Image (Glance v2): imágenes.

Glance devuelve el recurso sin sobre en GET /images/{id}: `response_key` es None.
"""

from __future__ import annotations

from pydantic import Field

from core.api.endpoint import Pageable, QueryParams, RestEndpoint, quote_path
from core.api.find import Findable
from core.domain.service_type import ServiceType


class ListImages(Pageable):
    name: str | None = None
    visibility: str | None = Field(default=None, description="public | private | shared | community | all.")
    status: str | None = None
    owner: str | None = None
    member_status: str | None = None
    tag: list[str] | None = None
    sort_key: str | None = None
    sort_dir: str | None = None
    sort: str | None = None

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return "images"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("name", self.name)
        params.push_opt("visibility", self.visibility)
        params.push_opt("status", self.status)
        params.push_opt("owner", self.owner)
        params.push_opt("member_status", self.member_status)
        params.push_opt("tag", self.tag)
        params.push_opt("sort_key", self.sort_key)
        params.push_opt("sort_dir", self.sort_dir)
        params.push_opt("sort", self.sort)
        return self.push_paging(params)

    def service_type(self) -> ServiceType:
        return ServiceType.IMAGE

    def response_key(self) -> str | None:
        return "images"


class GetImage(RestEndpoint):
    id: str = Field(..., min_length=1)

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return f"images/{quote_path(self.id)}"

    def service_type(self) -> ServiceType:
        return ServiceType.IMAGE


class DeleteImage(RestEndpoint):
    id: str = Field(..., min_length=1)

    def method(self) -> str:
        return "DELETE"

    def endpoint(self) -> str:
        return f"images/{quote_path(self.id)}"

    def service_type(self) -> ServiceType:
        return ServiceType.IMAGE


class FindImage(Findable):
    def get_ep(self) -> RestEndpoint:
        return GetImage(id=self.id, extra_headers=self.extra_headers)

    def list_ep(self) -> RestEndpoint:
        return ListImages(name=self.id, extra_headers=self.extra_headers)
