"""Network (Neutron v2.0): redes."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from core.api.endpoint import JsonBodyParams, Pageable, QueryParams, RestEndpoint, quote_path
from core.api.find import Findable
from core.domain.service_type import ServiceType


class ListNetworks(Pageable):
    name: str | None = None
    status: str | None = None
    shared: bool | None = None
    external: bool | None = Field(default=None, description="Filtro `router:external`.")
    admin_state_up: bool | None = None
    project_id: str | None = None
    tags: str | None = None
    tags_any: str | None = None

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return "networks"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("name", self.name)
        params.push_opt("status", self.status)
        params.push_opt("shared", self.shared)
        params.push_opt("router:external", self.external)
        params.push_opt("admin_state_up", self.admin_state_up)
        params.push_opt("project_id", self.project_id)
        params.push_opt("tags", self.tags)
        params.push_opt("tags-any", self.tags_any)
        return self.push_paging(params)

    def service_type(self) -> ServiceType:
        return ServiceType.NETWORK

    def response_key(self) -> str | None:
        return "networks"


class GetNetwork(RestEndpoint):
    id: str = Field(..., min_length=1)

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return f"networks/{quote_path(self.id)}"

    def service_type(self) -> ServiceType:
        return ServiceType.NETWORK

    def response_key(self) -> str | None:
        return "network"


class NewNetwork(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    description: str | None = None
    admin_state_up: bool | None = None
    shared: bool | None = None
    external: bool | None = Field(default=None, alias="router:external")
    mtu: int | None = Field(default=None, ge=68)
    project_id: str | None = None


class CreateNetwork(RestEndpoint):
    network: NewNetwork

    def method(self) -> str:
        return "POST"

    def endpoint(self) -> str:
        return "networks"

    def body(self) -> tuple[str, bytes] | None:
        return JsonBodyParams().push("network", self.network).into_body()

    def service_type(self) -> ServiceType:
        return ServiceType.NETWORK

    def response_key(self) -> str | None:
        return "network"


class DeleteNetwork(RestEndpoint):
    id: str = Field(..., min_length=1)

    def method(self) -> str:
        return "DELETE"

    def endpoint(self) -> str:
        return f"networks/{quote_path(self.id)}"

    def service_type(self) -> ServiceType:
        return ServiceType.NETWORK


class FindNetwork(Findable):
    def get_ep(self) -> RestEndpoint:
        return GetNetwork(id=self.id, extra_headers=self.extra_headers)

    def list_ep(self) -> RestEndpoint:
        return ListNetworks(name=self.id, extra_headers=self.extra_headers)
