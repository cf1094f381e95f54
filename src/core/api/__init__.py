"""SDK: descriptores de endpoints y su ejecución.

Por qué un paquete:
- `endpoint`, `query`, `paged`, `find`, `auth` y `catalog` forman el marco
  compartido; cada servicio (compute, identity, ...) solo declara descriptores.
"""

from core.api.auth import Auth, AuthState, AuthToken, NoAuth
from core.api.endpoint import (
    EndpointBuilder,
    JsonBodyParams,
    Pageable,
    QueryParams,
    RestEndpoint,
    microversion_header,
)
from core.api.find import Findable, find, find_id
from core.api.paged import Paged, Pagination, paged
from core.api.query import decode_as, query, query_as, raw_query

__all__ = [
    "Auth",
    "AuthState",
    "AuthToken",
    "EndpointBuilder",
    "Findable",
    "JsonBodyParams",
    "NoAuth",
    "Pageable",
    "Paged",
    "Pagination",
    "QueryParams",
    "RestEndpoint",
    "decode_as",
    "find",
    "find_id",
    "microversion_header",
    "paged",
    "query",
    "query_as",
    "raw_query",
]
