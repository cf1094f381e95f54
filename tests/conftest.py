"""
Shared fixtures for all tests.

No real cloud is ever contacted: Keystone and the service APIs are faked
with `httpx.MockTransport` handlers, and the query executor runs against
`FakeSession`, which satisfies the `OpenStackSession` protocol.
"""

from collections.abc import Callable, Mapping, Sequence

import httpx
import pytest

from core.api.auth import Auth, NoAuth
from core.domain.service_type import ServiceType

Handler = Callable[[httpx.Request], httpx.Response]

TOKEN_ID = "gAAAAAB-test-token"


def service_base_url(service_type: ServiceType) -> str:
    return f"http://{service_type.value}.test/{service_type.default_version()}".rstrip("/")


class FakeSession:
    """In-memory session: fixed base URLs, every request goes to `handler`."""

    def __init__(self, handler: Handler, *, auth: Auth | None = None) -> None:
        self.auth = auth or NoAuth()
        self.default_headers = {"User-Agent": "osc-tests", "Accept": "application/json"}
        self.requests: list[httpx.Request] = []
        self._transport = httpx.MockTransport(handler)

    async def endpoint_url(self, service_type: ServiceType) -> str:
        return service_base_url(service_type)

    async def send(
        self,
        method: str,
        url: str,
        *,
        params: Sequence[tuple[str, str]] | None = None,
        headers: Mapping[str, str] | None = None,
        content: bytes | None = None,
    ) -> httpx.Response:
        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.request(
                method,
                url,
                params=list(params) if params else None,
                headers=headers,
                content=content,
            )
        self.requests.append(response.request)
        return response


@pytest.fixture
def fake_session() -> Callable[..., FakeSession]:
    """Factory: `fake_session(handler, auth=...)`."""

    return FakeSession


@pytest.fixture
def catalog() -> list[dict]:
    return [
        {
            "type": "compute",
            "name": "nova",
            "endpoints": [
                {"interface": "public", "region_id": "RegionOne", "url": "http://nova.test:8774/v2.1"},
                {"interface": "internal", "region_id": "RegionOne", "url": "http://nova.internal:8774/v2.1"},
                {"interface": "public", "region_id": "RegionTwo", "url": "http://nova.two:8774/v2.1"},
            ],
        },
        {
            "type": "identity",
            "name": "keystone",
            "endpoints": [
                {"interface": "public", "region_id": "RegionOne", "url": "http://keystone.test:5000"},
            ],
        },
        {
            "type": "network",
            "name": "neutron",
            "endpoints": [
                {"interface": "public", "region_id": "RegionOne", "url": "http://neutron.test:9696/"},
            ],
        },
        {
            "type": "volumev3",
            "name": "cinderv3",
            "endpoints": [
                {"interface": "public", "region_id": "RegionOne", "url": "http://cinder.test:8776/v3/p-123"},
            ],
        },
        {
            "type": "image",
            "name": "glance",
            "endpoints": [
                {"interface": "public", "region_id": "RegionOne", "url": "http://glance.test:9292"},
            ],
        },
    ]


@pytest.fixture
def token_body(catalog: list[dict]) -> dict:
    return {
        "token": {
            "methods": ["password"],
            "expires_at": "2099-01-01T00:00:00.000000Z",
            "issued_at": "2025-01-01T00:00:00.000000Z",
            "user": {"id": "u-1", "name": "demo", "domain": {"id": "default", "name": "Default"}},
            "project": {"id": "p-123", "name": "demo", "domain": {"id": "default", "name": "Default"}},
            "catalog": catalog,
        }
    }


@pytest.fixture
def keystone_handler(token_body: dict) -> Callable[[httpx.Request], httpx.Response | None]:
    """Answers `POST /v3/auth/tokens`; returns None for any other request."""

    def handler(request: httpx.Request) -> httpx.Response | None:
        if request.method == "POST" and request.url.path == "/v3/auth/tokens":
            return httpx.Response(201, json=token_body, headers={"X-Subject-Token": TOKEN_ID})
        return None

    return handler


@pytest.fixture
def token_id() -> str:
    return TOKEN_ID
