"""
Tests for the endpoint contract: descriptors are pure functions of their inputs.
"""

import json

import pytest
from pydantic import ValidationError

from core.api.block_storage import DeleteVolume
from core.api.compute import GetServer, ListServers, LockServer, RebootServer, UnlockServer
from core.api.endpoint import JsonBodyParams, QueryParams, microversion_header
from core.api.identity import CreateProject, CreateUser
from core.api.image import ListImages
from core.api.network import CreateNetwork, ListNetworks
from core.domain.service_type import ServiceType
from core.errors import EndpointBuildError


def body_json(endpoint) -> dict:
    content_type, content = endpoint.body()
    assert content_type == "application/json"
    return json.loads(content)


class TestQueryParams:
    def test_push_renders_bools_lowercase(self):
        params = QueryParams().push("all_tenants", True).push("locked", False)
        assert params.items() == [("all_tenants", "true"), ("locked", "false")]

    def test_push_list_repeats_key(self):
        params = QueryParams().push("tag", ["a", "b"])
        assert params.items() == [("tag", "a"), ("tag", "b")]

    def test_push_opt_skips_none(self):
        params = QueryParams().push_opt("name", None).push_opt("status", "ACTIVE")
        assert params.items() == [("status", "ACTIVE")]
        assert len(params) == 1


class TestJsonBodyParams:
    def test_empty_body_is_none(self):
        assert JsonBodyParams().into_body() is None

    def test_push_opt_skips_none(self):
        body = JsonBodyParams().push_opt("a", None).push("b", 1).into_body()
        assert json.loads(body[1]) == {"b": 1}


class TestRestEndpoint:
    def test_list_servers_is_deterministic(self):
        first = ListServers.build(name="web", all_tenants=True)
        second = ListServers.build(name="web", all_tenants=True)

        assert first.method() == second.method() == "GET"
        assert first.endpoint() == second.endpoint() == "servers/detail"
        assert first.service_type() is second.service_type() is ServiceType.COMPUTE
        assert first.parameters() == second.parameters()
        assert first.parameters().items() == [("name", "web"), ("all_tenants", "true")]
        assert first.response_key() == "servers"

    def test_paging_params_are_appended_last(self):
        ep = ListServers.build(status="ACTIVE", limit=10, marker="abc")
        assert ep.parameters().items() == [("status", "ACTIVE"), ("limit", "10"), ("marker", "abc")]

    def test_path_parameter_is_escaped(self):
        assert GetServer.build(id="a/b c").endpoint() == "servers/a%2Fb%20c"

    def test_missing_required_field_raises_build_error(self):
        with pytest.raises(EndpointBuildError) as exc_info:
            GetServer.build()
        assert "GetServer" in exc_info.value.message
        assert "id" in exc_info.value.message

    def test_empty_id_raises_build_error(self):
        with pytest.raises(EndpointBuildError):
            GetServer.build(id="")

    def test_unknown_field_raises_build_error(self):
        with pytest.raises(EndpointBuildError):
            ListServers.build(colour="blue")

    def test_negative_limit_raises_build_error(self):
        with pytest.raises(EndpointBuildError):
            ListServers.build(limit=-1)

    def test_endpoint_is_immutable(self):
        ep = GetServer.build(id="s-1")
        with pytest.raises(ValidationError):
            ep.id = "s-2"

    def test_default_request_has_no_body_or_headers(self):
        ep = GetServer.build(id="s-1")
        assert ep.body() is None
        assert ep.request_headers() == {}
        assert len(ep.parameters()) == 0


class TestEndpointBuilder:
    def test_set_ignores_none(self):
        ep = ListServers.builder().set(name=None, status="ERROR").build()
        assert ep.name is None
        assert ep.status == "ERROR"

    def test_headers_are_carried_to_request(self):
        ep = (
            ListServers.builder()
            .header("X-Test", "1")
            .headers(microversion_header(ServiceType.COMPUTE, "2.79"))
            .build()
        )
        assert ep.request_headers() == {"X-Test": "1", "OpenStack-API-Version": "compute 2.79"}

    def test_build_propagates_validation_errors(self):
        with pytest.raises(EndpointBuildError):
            ListServers.builder().set(limit="many").build()


class TestMicroversionHeader:
    def test_block_storage_uses_volume_name(self):
        assert microversion_header(ServiceType.BLOCK_STORAGE, "3.23") == {
            "OpenStack-API-Version": "volume 3.23"
        }


class TestServiceEndpoints:
    def test_server_actions(self):
        assert body_json(RebootServer.build(id="s-1", type="HARD")) == {"reboot": {"type": "HARD"}}
        assert body_json(LockServer.build(id="s-1")) == {"lock": None}
        assert body_json(LockServer.build(id="s-1", locked_reason="maintenance")) == {
            "lock": {"locked_reason": "maintenance"}
        }
        assert body_json(UnlockServer.build(id="s-1")) == {"unlock": None}
        assert RebootServer.build(id="s-1").endpoint() == "servers/s-1/action"

    def test_reboot_type_is_validated(self):
        with pytest.raises(EndpointBuildError):
            RebootServer.build(id="s-1", type="WARM")

    def test_create_project_body_omits_unset_fields(self):
        ep = CreateProject.build(project={"name": "demo", "description": None, "tags": ["a"]})
        assert body_json(ep) == {"project": {"name": "demo", "tags": ["a"]}}
        assert ep.method() == "POST"
        assert ep.service_type() is ServiceType.IDENTITY

    def test_create_user_sends_password_but_hides_it_in_repr(self):
        ep = CreateUser.build(user={"name": "alice", "password": "s3cret"})
        assert body_json(ep) == {"user": {"name": "alice", "password": "s3cret"}}
        assert "s3cret" not in repr(ep)

    def test_create_network_uses_wire_alias(self):
        ep = CreateNetwork.build(network={"name": "ext", "external": True})
        assert body_json(ep) == {"network": {"name": "ext", "router:external": True}}

    def test_network_external_filter(self):
        ep = ListNetworks.build(external=False)
        assert ep.parameters().items() == [("router:external", "false")]

    def test_list_images_repeats_tags(self):
        ep = ListImages.build(tag=["prod", "ubuntu"])
        assert ep.parameters().items() == [("tag", "prod"), ("tag", "ubuntu")]
        assert ep.service_type() is ServiceType.IMAGE

    def test_delete_volume_force(self):
        ep = DeleteVolume.build(id="v-1", force=True)
        assert ep.method() == "DELETE"
        assert ep.endpoint() == "volumes/v-1"
        assert ep.parameters().items() == [("force", "true")]
