"""Network (Neutron v2.0): puertos."""

from __future__ import annotations

from core.api.endpoint import Pageable, QueryParams
from core.domain.service_type import ServiceType


class ListPorts(Pageable):
    name: str | None = None
    network_id: str | None = None
    device_id: str | None = None
    device_owner: str | None = None
    mac_address: str | None = None
    status: str | None = None
    project_id: str | None = None

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return "ports"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("name", self.name)
        params.push_opt("network_id", self.network_id)
        params.push_opt("device_id", self.device_id)
        params.push_opt("device_owner", self.device_owner)
        params.push_opt("mac_address", self.mac_address)
        params.push_opt("status", self.status)
        params.push_opt("project_id", self.project_id)
        return self.push_paging(params)

    def service_type(self) -> ServiceType:
        return ServiceType.NETWORK

    def response_key(self) -> str | None:
        return "ports"
