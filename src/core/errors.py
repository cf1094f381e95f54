"""Taxonomía de errores del cliente.

Por qué una jerarquía propia:
- La CLI captura un único tipo base (`OpenStackCliError`) y decide el
  código de salida; el resto del Core solo lanza.
- Cada error lleva un `error_code` estable para la salida JSON.

Nada se reintenta internamente: un fallo transitorio se propaga tal cual.
"""

from __future__ import annotations


class OpenStackCliError(Exception):
    """Base de todos los errores esperables del cliente."""

    error_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: object = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


class ConfigError(OpenStackCliError):
    error_code = "CONFIG_ERROR"


class EndpointBuildError(OpenStackCliError):
    """A request descriptor was built without its required fields."""

    error_code = "ENDPOINT_BUILD"


class TransportError(OpenStackCliError):
    """The request never produced an HTTP response (DNS, TLS, timeout...)."""

    error_code = "TRANSPORT_ERROR"


class HttpError(OpenStackCliError):
    """The service answered with a non-2xx status."""

    error_code = "HTTP_ERROR"

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        url: str | None = None,
        request_id: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.url = url
        self.request_id = request_id
        super().__init__(
            f"HTTP {status_code}: {message}",
            details={"status_code": status_code, "url": url, "request_id": request_id},
        )


class DecodeError(OpenStackCliError):
    """The body could not be decoded into the expected shape."""

    error_code = "DECODE_ERROR"


class ResourceNotFound(OpenStackCliError):
    error_code = "NOT_FOUND"

    def __init__(self, name_or_id: str) -> None:
        self.name_or_id = name_or_id
        super().__init__(f"No resource found for '{name_or_id}'")


class MultipleResourcesFound(OpenStackCliError):
    error_code = "AMBIGUOUS"

    def __init__(self, name_or_id: str, ids: list[str]) -> None:
        self.name_or_id = name_or_id
        self.ids = ids
        super().__init__(
            f"More than one resource matches '{name_or_id}'; use an ID instead",
            details={"ids": ids},
        )


class AuthHeaderError(OpenStackCliError):
    """The auth token cannot be sent as an HTTP header value."""

    error_code = "AUTH_HEADER"


class AuthError(OpenStackCliError):
    """Keystone rejected the credentials or returned no usable token."""

    error_code = "AUTH_ERROR"


class CatalogError(OpenStackCliError):
    """No endpoint for the requested service in the catalog."""

    error_code = "CATALOG_ERROR"
