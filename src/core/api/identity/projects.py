"""Identity (Keystone v3): proyectos.

Keystone v3 no pagina con marker: los listados no son `Pageable`.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from core.api.endpoint import JsonBodyParams, QueryParams, RestEndpoint, quote_path
from core.api.find import Findable
from core.domain.service_type import ServiceType


class ListProjects(RestEndpoint):
    domain_id: str | None = None
    name: str | None = None
    enabled: bool | None = None
    parent_id: str | None = None
    is_domain: bool | None = None
    tags: str | None = None

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return "projects"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("domain_id", self.domain_id)
        params.push_opt("name", self.name)
        params.push_opt("enabled", self.enabled)
        params.push_opt("parent_id", self.parent_id)
        params.push_opt("is_domain", self.is_domain)
        params.push_opt("tags", self.tags)
        return params

    def service_type(self) -> ServiceType:
        return ServiceType.IDENTITY

    def response_key(self) -> str | None:
        return "projects"


class GetProject(RestEndpoint):
    id: str = Field(..., min_length=1)

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return f"projects/{quote_path(self.id)}"

    def service_type(self) -> ServiceType:
        return ServiceType.IDENTITY

    def response_key(self) -> str | None:
        return "project"


class NewProject(BaseModel):
    name: str = Field(..., min_length=1)
    domain_id: str | None = None
    description: str | None = None
    enabled: bool | None = None
    is_domain: bool | None = None
    parent_id: str | None = None
    tags: list[str] | None = None


class CreateProject(RestEndpoint):
    project: NewProject

    def method(self) -> str:
        return "POST"

    def endpoint(self) -> str:
        return "projects"

    def body(self) -> tuple[str, bytes] | None:
        return JsonBodyParams().push("project", self.project).into_body()

    def service_type(self) -> ServiceType:
        return ServiceType.IDENTITY

    def response_key(self) -> str | None:
        return "project"


class DeleteProject(RestEndpoint):
    id: str = Field(..., min_length=1)

    def method(self) -> str:
        return "DELETE"

    def endpoint(self) -> str:
        return f"projects/{quote_path(self.id)}"

    def service_type(self) -> ServiceType:
        return ServiceType.IDENTITY


class FindProject(Findable):
    def get_ep(self) -> RestEndpoint:
        return GetProject(id=self.id, extra_headers=self.extra_headers)

    def list_ep(self) -> RestEndpoint:
        return ListProjects(name=self.id, extra_headers=self.extra_headers)
