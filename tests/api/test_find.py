"""
Tests for name-or-id resolution.
"""

import httpx
import pytest

from core.api.compute import FindServer
from core.api.find import find, find_id
from core.api.network import FindNetwork
from core.errors import EndpointBuildError, HttpError, MultipleResourcesFound, ResourceNotFound

NOT_FOUND = {"itemNotFound": {"code": 404, "message": "Instance could not be found."}}


def nova(servers_by_id: dict[str, dict], listing: list[dict]):
    """GET /servers/{id} from `servers_by_id`; GET /servers/detail returns `listing`."""

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith("/servers/detail"):
            return httpx.Response(200, json={"servers": listing})
        server_id = path.rsplit("/", 1)[-1]
        if server_id in servers_by_id:
            return httpx.Response(200, json={"server": servers_by_id[server_id]})
        return httpx.Response(404, json=NOT_FOUND)

    return handler


class TestFind:
    async def test_direct_id_hit_skips_listing(self, fake_session):
        session = fake_session(nova({"s-1": {"id": "s-1", "name": "web"}}, []))

        resource = await find(FindServer.build(id="s-1"), session)

        assert resource == {"id": "s-1", "name": "web"}
        assert len(session.requests) == 1

    async def test_single_name_match_returns_it(self, fake_session):
        # Nova filters by regex: "web" also returns "web-2".
        listing = [{"id": "s-1", "name": "web"}, {"id": "s-2", "name": "web-2"}]
        session = fake_session(nova({}, listing))

        resource = await find(FindServer.build(id="web"), session)

        assert resource["id"] == "s-1"
        list_request = session.requests[1]
        assert list_request.url.path.endswith("/servers/detail")
        assert list_request.url.params["name"] == "web"

    async def test_zero_matches_raise_not_found(self, fake_session):
        session = fake_session(nova({}, [{"id": "s-2", "name": "web-2"}]))

        with pytest.raises(ResourceNotFound) as exc_info:
            await find(FindServer.build(id="web"), session)
        assert exc_info.value.name_or_id == "web"

    async def test_two_matches_raise_ambiguous(self, fake_session):
        listing = [{"id": "s-1", "name": "web"}, {"id": "s-2", "name": "web"}]
        session = fake_session(nova({}, listing))

        with pytest.raises(MultipleResourcesFound) as exc_info:
            await find(FindServer.build(id="web"), session)
        assert exc_info.value.ids == ["s-1", "s-2"]

    async def test_bad_request_falls_back_to_listing(self, fake_session):
        def handler(request):
            if request.url.path.endswith("/networks"):
                return httpx.Response(200, json={"networks": [{"id": "n-1", "name": "public"}]})
            return httpx.Response(400, json={"NeutronError": {"message": "Invalid input"}})

        assert await find_id(FindNetwork.build(id="public"), fake_session(handler)) == "n-1"

    async def test_other_errors_propagate_without_listing(self, fake_session):
        session = fake_session(lambda request: httpx.Response(500, json={"message": "boom"}))

        with pytest.raises(HttpError) as exc_info:
            await find(FindServer.build(id="web"), session)
        assert exc_info.value.status_code == 500
        assert len(session.requests) == 1

    async def test_extra_headers_reach_both_requests(self, fake_session):
        session = fake_session(nova({}, [{"id": "s-1", "name": "web"}]))
        headers = {"OpenStack-API-Version": "compute 2.79"}

        await find(FindServer.build(id="web", extra_headers=headers), session)

        assert all(r.headers["OpenStack-API-Version"] == "compute 2.79" for r in session.requests)

    def test_empty_name_is_rejected(self):
        with pytest.raises(EndpointBuildError):
            FindServer.build(id="")
