"""Identity (Keystone v3): usuarios."""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr, field_serializer

from core.api.endpoint import JsonBodyParams, QueryParams, RestEndpoint, quote_path
from core.api.find import Findable
from core.domain.service_type import ServiceType


class ListUsers(RestEndpoint):
    domain_id: str | None = None
    name: str | None = None
    enabled: bool | None = None
    idp_id: str | None = None
    password_expires_at: str | None = None

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return "users"

    def parameters(self) -> QueryParams:
        params = QueryParams()
        params.push_opt("domain_id", self.domain_id)
        params.push_opt("name", self.name)
        params.push_opt("enabled", self.enabled)
        params.push_opt("idp_id", self.idp_id)
        params.push_opt("password_expires_at", self.password_expires_at)
        return params

    def service_type(self) -> ServiceType:
        return ServiceType.IDENTITY

    def response_key(self) -> str | None:
        return "users"


class GetUser(RestEndpoint):
    id: str = Field(..., min_length=1)

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return f"users/{quote_path(self.id)}"

    def service_type(self) -> ServiceType:
        return ServiceType.IDENTITY

    def response_key(self) -> str | None:
        return "user"


class NewUser(BaseModel):
    name: str = Field(..., min_length=1)
    domain_id: str | None = None
    default_project_id: str | None = None
    description: str | None = None
    email: str | None = None
    enabled: bool | None = None
    password: SecretStr | None = None

    @field_serializer("password")
    def _reveal_password(self, value: SecretStr | None) -> str | None:
        # Solo se revela al serializar el cuerpo de la petición.
        return value.get_secret_value() if value is not None else None


class CreateUser(RestEndpoint):
    user: NewUser

    def method(self) -> str:
        return "POST"

    def endpoint(self) -> str:
        return "users"

    def body(self) -> tuple[str, bytes] | None:
        return JsonBodyParams().push("user", self.user).into_body()

    def service_type(self) -> ServiceType:
        return ServiceType.IDENTITY

    def response_key(self) -> str | None:
        return "user"


class FindUser(Findable):
    def get_ep(self) -> RestEndpoint:
        return GetUser(id=self.id, extra_headers=self.extra_headers)

    def list_ep(self) -> RestEndpoint:
        return ListUsers(name=self.id, extra_headers=self.extra_headers)
