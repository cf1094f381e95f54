"""Compute (Nova): keypairs.

Nota:
- El listado envuelve cada elemento: {"keypairs": [{"keypair": {...}}]}.
- La paginación de keypairs (2.35+) usa el *nombre* como marker, por eso
  este endpoint no es `Pageable`.
"""

from __future__ import annotations

from core.api.endpoint import QueryParams, RestEndpoint
from core.domain.service_type import ServiceType


class ListKeypairs(RestEndpoint):
    user_id: str | None = None

    def method(self) -> str:
        return "GET"

    def endpoint(self) -> str:
        return "os-keypairs"

    def parameters(self) -> QueryParams:
        return QueryParams().push_opt("user_id", self.user_id)

    def service_type(self) -> ServiceType:
        return ServiceType.COMPUTE

    def response_key(self) -> str | None:
        return "keypairs"
