"""Compute (Nova): flavors."""

from __future__ import annotations

from pydantic import Field

from core.api.endpoint import Pageable, QueryParams, RestEndpoint, quote_path
from core.api.find import Findable
from core.domain.service_type import ServiceType


class ListFlavors(Pageable):
    """GET /flavors/detail."""

    is_public: str | None = Field(default=None, description="true | false | none (admin: todos).")
    min_ram: int | None = None
    min_disk: int | None = None
    sort_key: str | None = None
    sort_dir: str | None = None

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return "flavors/detail"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("is_public", self.is_public)
        params.push_opt("minRam", self.min_ram)
        params.push_opt("minDisk", self.min_disk)
        params.push_opt("sort_key", self.sort_key)
        params.push_opt("sort_dir", self.sort_dir)
        return self.push_paging(params)

    def service_type(self) -> ServiceType:
        return ServiceType.COMPUTE

    def response_key(self) -> str | None:
        return "flavors"


class GetFlavor(RestEndpoint):
    id: str = Field(..., min_length=1)

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return f"flavors/{quote_path(self.id)}"

    def service_type(self) -> ServiceType:
        return ServiceType.COMPUTE

    def response_key(self) -> str | None:
        return "flavor"


class FindFlavor(Findable):
    def get_ep(self) -> RestEndpoint:
        return GetFlavor(id=self.id, extra_headers=self.extra_headers)

    def list_ep(self) -> RestEndpoint:
        # Nova no filtra flavors por nombre: se lista todo y se filtra en cliente.
        return ListFlavors(is_public="none", extra_headers=self.extra_headers)
