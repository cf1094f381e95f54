"""Contrato de la sesión contra OpenStack.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El ejecutor de queries (`core.api.query`) solo depende de este contrato;
  la sesión real (Keystone + httpx) vive en `adapters.session` y los tests
  pueden sustituirla por una sesión fake.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping, Protocol, Sequence, runtime_checkable

import httpx

from core.domain.service_type import ServiceType

if TYPE_CHECKING:
    from core.api.auth import Auth


@runtime_checkable
class OpenStackSession(Protocol):
    """Contrato mínimo de una sesión autenticada.

    Reglas de diseño:
    - `endpoint_url` y `send` son asíncronos porque pueden hacer I/O
      (descubrimiento de catálogo, HTTP).
    - La sesión pertenece a una única invocación de la CLI: no hay locks.
    """

    auth: Auth
    default_headers: Mapping[str, str]

    async def endpoint_url(self, service_type: ServiceType) -> str:
        """URL base (versionada) del servicio, descubriéndola si hace falta."""

        ...

    async def send(
        self,
        method: str,
        url: str,
        *,
        params: Sequence[tuple[str, str]] | None = None,
        headers: Mapping[str, str] | None = None,
        content: bytes | None = None,
    ) -> httpx.Response:
        """Envía la petición tal cual y devuelve la respuesta sin interpretar."""

        ...
