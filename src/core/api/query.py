"""Ejecutor de queries: endpoint + sesión -> respuesta decodificada.

Tres modos:
- `raw_query`: respuesta HTTP tal cual (acciones 202/204 sin cuerpo útil).
- `query`: JSON sin tipar, desenvolviendo `response_key()` si existe.
- `query_as`: `query` + validación contra un modelo/tipo Pydantic.

Errores:
- Transporte (DNS, TLS, timeout) -> `TransportError`.
- Status no-2xx -> `HttpError` con el mensaje del sobre de error de OpenStack.
- JSON inválido o forma inesperada -> `DecodeError`.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from core.api.endpoint import RestEndpoint
from core.errors import DecodeError, HttpError, TransportError
from core.interfaces.session import OpenStackSession

logger = logging.getLogger(__name__)

T = TypeVar("T")

_REQUEST_ID_HEADERS = ("x-openstack-request-id", "x-compute-request-id")


def join_url(base: str, path: str) -> str:
    if not path:
        return base
    return base.rstrip("/") + "/" + path.lstrip("/")


def _request_id(response: httpx.Response) -> str | None:
    for name in _REQUEST_ID_HEADERS:
        value = response.headers.get(name)
        if value:
            return value
    return None


def error_message(response: httpx.Response) -> str:
    """Extrae un mensaje legible de los distintos sobres de error.

    Formatos conocidos:
    - Nova/Cinder: {"itemNotFound": {"message": "...", "code": 404}}
    - Neutron:     {"NeutronError": {"type": "...", "message": "..."}}
    - Keystone:    {"error": {"code": 401, "message": "...", "title": "..."}}
    - Glance:      texto/HTML plano
    """

    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        for key in ("message", "faultstring", "detail"):
            if isinstance(data.get(key), str):
                return data[key]
        for value in data.values():
            if isinstance(value, dict) and isinstance(value.get("message"), str):
                return value["message"]

    text = response.text.strip()
    return text or response.reason_phrase or "request failed"


async def raw_query(endpoint: RestEndpoint, session: OpenStackSession) -> httpx.Response:
    """Ejecuta el endpoint y devuelve la respuesta si el status es 2xx."""

    base_url = await session.endpoint_url(endpoint.service_type())
    url = join_url(base_url, endpoint.endpoint())

    headers = httpx.Headers(dict(session.default_headers))
    headers.update(endpoint.request_headers())

    content: bytes | None = None
    body = endpoint.body()
    if body is not None:
        content_type, content = body
        headers["Content-Type"] = content_type

    session.auth.set_header(headers)

    method = endpoint.method()
    params = endpoint.parameters().items()
    logger.debug("%s %s params=%s", method, url, params)
    try:
        response = await session.send(
            method,
            url,
            params=params,
            headers=headers,
            content=content,
        )
    except httpx.HTTPError as exc:
        raise TransportError(f"{method} {url} failed: {exc}") from exc

    request_id = _request_id(response)
    logger.debug("%s %s -> %s (request_id=%s)", method, url, response.status_code, request_id)

    if not response.is_success:
        raise HttpError(
            response.status_code,
            error_message(response),
            url=url,
            request_id=request_id,
        )
    return response


def unwrap(data: Any, response_key: str | None) -> Any:
    if response_key is None:
        return data
    if not isinstance(data, dict) or response_key not in data:
        raise DecodeError(f"Response has no '{response_key}' field")
    return data[response_key]


async def query(endpoint: RestEndpoint, session: OpenStackSession) -> Any:
    """JSON decodificado (y desenvuelto) o `None` si el cuerpo está vacío."""

    response = await raw_query(endpoint, session)
    if not response.content:
        return None
    try:
        data = response.json()
    except ValueError as exc:
        raise DecodeError(f"Response of {endpoint.method()} {endpoint.endpoint()} is not valid JSON") from exc
    return unwrap(data, endpoint.response_key())


def decode_as(data: Any, model: type[T] | Any) -> T:
    """Valida `data` contra un tipo (modelo Pydantic, `list[Modelo]`, ...)."""

    try:
        return TypeAdapter(model).validate_python(data)
    except ValidationError as exc:
        raise DecodeError(f"Unexpected response shape: {exc.error_count()} validation error(s)", details=str(exc)) from exc


async def query_as(endpoint: RestEndpoint, session: OpenStackSession, model: type[T] | Any) -> T:
    return decode_as(await query(endpoint, session), model)


def ensure_list(data: Any) -> list[Any]:
    if data is None:
        return []
    if isinstance(data, list):
        return data
    raise DecodeError(f"Expected a list in the response, got {type(data).__name__}")
