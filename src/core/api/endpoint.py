"""Contrato de endpoint REST.

Un endpoint describe una única llamada a una API de OpenStack sin hacer I/O:
método, ruta resuelta, query string, cuerpo JSON opcional, servicio destino,
clave de sobre de la respuesta y cabeceras estáticas (microversión).

Por qué Pydantic (frozen):
- Los campos obligatorios se validan al construir: si falta uno, la
  construcción falla con `EndpointBuildError` antes de tocar la red.
- Inmutable una vez construido; el pager deriva copias con `model_copy`.
"""

from __future__ import annotations

import json
from abc import abstractmethod
from typing import Any, Generic, Iterator, Mapping, TypeVar
from urllib.parse import quote

from pydantic import BaseModel, Field, ValidationError
from pydantic.config import ConfigDict

from core.domain.service_type import ServiceType
from core.errors import EndpointBuildError

E = TypeVar("E", bound="RestEndpoint")
M = TypeVar("M", bound=BaseModel)

API_VERSION_HEADER = "OpenStack-API-Version"


def build_model(model_cls: type[M], **fields: Any) -> M:
    """Construye un descriptor traduciendo errores de validación."""

    try:
        return model_cls(**fields)
    except ValidationError as exc:
        problems = []
        for error in exc.errors():
            loc = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
            problems.append(f"{loc}: {error.get('msg', 'invalid')}")
        raise EndpointBuildError(
            f"{model_cls.__name__}: " + "; ".join(problems),
            details=problems,
        ) from exc


def quote_path(value: object) -> str:
    """Escapa un parámetro de ruta (ids con '/' o espacios incluidos)."""

    return quote(str(value), safe="")


def _render(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class QueryParams:
    """Query string ordenada que admite claves repetidas."""

    def __init__(self) -> None:
        self._items: list[tuple[str, str]] = []

    def push(self, key: str, value: object) -> "QueryParams":
        if isinstance(value, (list, tuple, set)):
            for item in value:
                self._items.append((key, _render(item)))
        else:
            self._items.append((key, _render(value)))
        return self

    def push_opt(self, key: str, value: object | None) -> "QueryParams":
        if value is not None:
            self.push(key, value)
        return self

    def items(self) -> list[tuple[str, str]]:
        return list(self._items)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueryParams):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"QueryParams({self._items!r})"


class JsonBodyParams:
    """Cuerpo JSON construido clave a clave."""

    content_type = "application/json"

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    def push(self, key: str, value: Any) -> "JsonBodyParams":
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json", by_alias=True, exclude_none=True)
        self._data[key] = value
        return self

    def push_opt(self, key: str, value: Any | None) -> "JsonBodyParams":
        if value is not None:
            self.push(key, value)
        return self

    def into_body(self) -> tuple[str, bytes] | None:
        if not self._data:
            return None
        return self.content_type, json.dumps(self._data).encode("utf-8")


class RestEndpoint(BaseModel):
    """Descriptor inmutable de una operación REST.

    Subclases implementan `method`, `endpoint` y `service_type`; el resto
    tiene defaults razonables (sin query, sin cuerpo, sin sobre).
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    extra_headers: dict[str, str] = Field(
        default_factory=dict,
        description="Cabeceras estáticas de la petición (p.ej. microversión).",
    )

    @abstractmethod
    def method(self) -> str: ...

    @abstractmethod
    def endpoint(self) -> str: ...

    @abstractmethod
    def service_type(self) -> ServiceType: ...

    def parameters(self) -> QueryParams:
        return QueryParams()

    def body(self) -> tuple[str, bytes] | None:
        return None

    def response_key(self) -> str | None:
        return None

    def request_headers(self) -> dict[str, str]:
        return dict(self.extra_headers)

    @classmethod
    def build(cls: type[E], **fields: Any) -> E:
        return build_model(cls, **fields)

    @classmethod
    def builder(cls: type[E]) -> "EndpointBuilder[E]":
        return EndpointBuilder(cls)


class Pageable(RestEndpoint):
    """Endpoint de listado que acepta paginación `limit`/`marker`."""

    limit: int | None = Field(default=None, ge=0)
    marker: str | None = None

    def push_paging(self, params: QueryParams) -> QueryParams:
        params.push_opt("limit", self.limit)
        params.push_opt("marker", self.marker)
        return params


class EndpointBuilder(Generic[E]):
    """Builder fluido para endpoints.

    Los valores `None` se ignoran en `set`, así la CLI puede pasar todas
    sus opciones sin filtrar las que el usuario no indicó.
    """

    def __init__(self, endpoint_cls: type[E]) -> None:
        self._endpoint_cls = endpoint_cls
        self._fields: dict[str, Any] = {}
        self._headers: dict[str, str] = {}

    def set(self, **fields: Any) -> "EndpointBuilder[E]":
        self._fields.update({k: v for k, v in fields.items() if v is not None})
        return self

    def header(self, name: str, value: str) -> "EndpointBuilder[E]":
        self._headers[name] = value
        return self

    def headers(self, headers: Mapping[str, str]) -> "EndpointBuilder[E]":
        self._headers.update(headers)
        return self

    def build(self) -> E:
        return self._endpoint_cls.build(extra_headers=dict(self._headers), **self._fields)


def microversion_header(service_type: ServiceType, version: str) -> dict[str, str]:
    """Cabecera `OpenStack-API-Version` para fijar una microversión."""

    return {API_VERSION_HEADER: f"{service_type.microversion_name()} {version}"}
