"""Sesión autenticada contra OpenStack (Keystone v3 + httpx).

Por qué en adapters:
- Es I/O puro: autenticación, catálogo y envío de peticiones.
- Implementa `core.interfaces.session.OpenStackSession`, que es lo único
  que conoce el ejecutor de queries.

Ciclo de vida:
- Una sesión por invocación de la CLI (`async with AsyncOpenStack(...)`).
- El token y las URLs descubiertas se cachean solo durante esa vida.
- No se refrescan tokens ni se reintenta nada.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

import httpx

from adapters.http_client import build_async_client, default_headers
from core.api.auth import Auth, AuthToken, NoAuth
from core.api.catalog import ServiceCatalog, versioned_base_url
from core.api.query import error_message, join_url
from core.config import AppSettings
from core.domain.models import CloudProfile
from core.domain.service_type import ServiceType
from core.errors import AuthError, CatalogError, ConfigError, DecodeError, HttpError, TransportError

logger = logging.getLogger(__name__)

SUBJECT_TOKEN_HEADER = "X-Subject-Token"

_PASSWORD_TYPES = {"password", "v3password"}
_TOKEN_TYPES = {"token", "v3token"}
_APP_CREDENTIAL_TYPES = {"v3applicationcredential", "applicationcredential", "application_credential"}
_NO_AUTH_TYPES = {"none", "noauth"}


def _parse_expiry(value: object) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparseable token expiry %r", value)
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _ref(id_value: str | None, name_value: str | None) -> dict[str, str] | None:
    if id_value:
        return {"id": id_value}
    if name_value:
        return {"name": name_value}
    return None


class AsyncOpenStack:
    """Sesión de una invocación: posee el `httpx.AsyncClient`."""

    def __init__(
        self,
        profile: CloudProfile,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.profile = profile
        self._settings = settings or AppSettings()
        self._owns_client = client is None
        self._client = client or build_async_client(
            self._settings,
            verify=profile.verify and self._settings.verify_tls,
        )
        self.auth: Auth = NoAuth()
        self.catalog = ServiceCatalog()
        self.default_headers: dict[str, str] = default_headers(self._settings)
        self.token_info: dict[str, Any] = {}
        self._endpoints: dict[ServiceType, str] = {}

    async def __aenter__(self) -> "AsyncOpenStack":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    @property
    def interface(self) -> str:
        return self.profile.interface or self._settings.default_interface

    @property
    def auth_type(self) -> str:
        return self.profile.auth_type.strip().lower()

    # --- Autenticación ---

    def _identity_section(self) -> dict[str, Any]:
        p = self.profile
        auth_type = self.auth_type

        if auth_type in _PASSWORD_TYPES:
            if p.password is None or not (p.username or p.user_id):
                raise ConfigError("Password auth needs a username (or user_id) and a password")
            user: dict[str, Any] = {"password": p.password.get_secret_value()}
            if p.user_id:
                user["id"] = p.user_id
            else:
                user["name"] = p.username
                domain = _ref(p.user_domain_id, p.user_domain_name) or _ref(p.domain_id, p.domain_name)
                if domain:
                    user["domain"] = domain
            return {"methods": ["password"], "password": {"user": user}}

        if auth_type in _TOKEN_TYPES:
            if p.token is None:
                raise ConfigError("Token auth needs a token")
            return {"methods": ["token"], "token": {"id": p.token.get_secret_value()}}

        if auth_type in _APP_CREDENTIAL_TYPES:
            if not p.application_credential_id or p.application_credential_secret is None:
                raise ConfigError("Application credential auth needs an id and a secret")
            return {
                "methods": ["application_credential"],
                "application_credential": {
                    "id": p.application_credential_id,
                    "secret": p.application_credential_secret.get_secret_value(),
                },
            }

        raise ConfigError(f"Unsupported auth_type '{p.auth_type}'")

    def _scope_section(self) -> dict[str, Any] | None:
        p = self.profile
        if self.auth_type in _APP_CREDENTIAL_TYPES:
            # El scope va implícito en la credencial.
            return None
        if p.project_id:
            return {"project": {"id": p.project_id}}
        if p.project_name:
            project: dict[str, Any] = {"name": p.project_name}
            domain = _ref(p.project_domain_id, p.project_domain_name) or _ref(p.domain_id, p.domain_name)
            if domain:
                project["domain"] = domain
            return {"project": project}
        domain = _ref(p.domain_id, p.domain_name)
        if domain:
            return {"domain": domain}
        return None

    def auth_request_body(self) -> dict[str, Any]:
        auth: dict[str, Any] = {"identity": self._identity_section()}
        scope = self._scope_section()
        if scope is not None:
            auth["scope"] = scope
        return {"auth": auth}

    async def authorize(self) -> Auth:
        """Obtiene un token de Keystone y el catálogo asociado."""

        if self.auth_type in _NO_AUTH_TYPES:
            self.auth = NoAuth()
            return self.auth
        if not self.profile.auth_url:
            raise ConfigError("auth_url is not configured (clouds.yaml or OS_AUTH_URL)")

        url = join_url(versioned_base_url(self.profile.auth_url, ServiceType.IDENTITY), "auth/tokens")
        logger.debug("POST %s (auth_type=%s)", url, self.auth_type)
        try:
            response = await self._client.post(url, json=self.auth_request_body())
        except httpx.HTTPError as exc:
            raise TransportError(f"POST {url} failed: {exc}") from exc

        if response.status_code == 401:
            raise AuthError(f"Authentication failed: {error_message(response)}")
        if not response.is_success:
            raise HttpError(response.status_code, error_message(response), url=url)

        token = response.headers.get(SUBJECT_TOKEN_HEADER)
        if not token:
            raise AuthError(f"Keystone response has no {SUBJECT_TOKEN_HEADER} header")
        try:
            body = response.json()
        except ValueError as exc:
            raise DecodeError("Keystone token response is not valid JSON") from exc

        token_info = body.get("token") if isinstance(body, dict) else None
        self.token_info = token_info if isinstance(token_info, dict) else {}
        self.auth = AuthToken.from_expiry(token, _parse_expiry(self.token_info.get("expires_at")))
        self.catalog = ServiceCatalog.from_token_body(body)
        self._endpoints.clear()
        logger.info("Authenticated; catalog has %s endpoint(s)", len(self.catalog))
        return self.auth

    # --- Descubrimiento de endpoints ---

    async def discover_service_endpoint(self, service_type: ServiceType) -> str:
        """URL base del servicio: override del perfil, si no el catálogo (con caché)."""

        cached = self._endpoints.get(service_type)
        if cached is not None:
            return cached

        if self.auth_type not in _NO_AUTH_TYPES and not isinstance(self.auth, AuthToken):
            await self.authorize()

        override = self.profile.endpoint_override.get(service_type.value)
        if override:
            url = override.rstrip("/")
        else:
            if self.auth_type in _NO_AUTH_TYPES:
                raise CatalogError(
                    f"auth_type 'none' needs an endpoint override for '{service_type.value}'"
                )
            url = versioned_base_url(
                self.catalog.endpoint_for(
                    service_type,
                    interface=self.interface,
                    region=self.profile.region_name,
                ),
                service_type,
            )

        logger.info("Endpoint for %s: %s", service_type.value, url)
        self._endpoints[service_type] = url
        return url

    async def endpoint_url(self, service_type: ServiceType) -> str:
        return await self.discover_service_endpoint(service_type)

    async def send(
        self,
        method: str,
        url: str,
        *,
        params: Sequence[tuple[str, str]] | None = None,
        headers: Mapping[str, str] | None = None,
        content: bytes | None = None,
    ) -> httpx.Response:
        return await self._client.request(
            method,
            url,
            params=list(params) if params else None,
            headers=headers,
            content=content,
        )
