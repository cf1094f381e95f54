"""
Tests for the Keystone service catalog and versioned base URLs.
"""

import pytest

from core.api.catalog import ServiceCatalog, versioned_base_url
from core.domain.service_type import ServiceType
from core.errors import CatalogError


class TestServiceCatalog:
    def test_parses_token_body(self, token_body):
        catalog = ServiceCatalog.from_token_body(token_body)
        assert len(catalog) == 7

    def test_selects_interface_and_region(self, token_body):
        catalog = ServiceCatalog.from_token_body(token_body)

        assert catalog.endpoint_for(ServiceType.COMPUTE) == "http://nova.test:8774/v2.1"
        assert catalog.endpoint_for(ServiceType.COMPUTE, interface="internal") == "http://nova.internal:8774/v2.1"
        assert catalog.endpoint_for(ServiceType.COMPUTE, region="RegionTwo") == "http://nova.two:8774/v2.1"

    def test_accepts_legacy_interface_names(self, token_body):
        catalog = ServiceCatalog.from_token_body(token_body)
        assert catalog.endpoint_for(ServiceType.COMPUTE, interface="publicURL") == "http://nova.test:8774/v2.1"

    def test_block_storage_matches_catalog_alias(self, token_body):
        catalog = ServiceCatalog.from_token_body(token_body)
        assert catalog.endpoint_for(ServiceType.BLOCK_STORAGE) == "http://cinder.test:8776/v3/p-123"

    def test_missing_service_raises(self, token_body):
        catalog = ServiceCatalog.from_token_body(token_body)
        with pytest.raises(CatalogError):
            catalog.endpoint_for(ServiceType.PLACEMENT)

    def test_missing_region_raises(self, token_body):
        catalog = ServiceCatalog.from_token_body(token_body)
        with pytest.raises(CatalogError) as exc_info:
            catalog.endpoint_for(ServiceType.NETWORK, region="RegionTwo")
        assert "RegionTwo" in exc_info.value.message

    def test_body_without_catalog_is_empty(self):
        assert len(ServiceCatalog.from_token_body({"token": {}})) == 0


class TestVersionedBaseUrl:
    @pytest.mark.parametrize(
        "url,service_type,expected",
        [
            ("http://nova:8774/v2.1", ServiceType.COMPUTE, "http://nova:8774/v2.1"),
            ("http://nova:8774/v2.1/", ServiceType.COMPUTE, "http://nova:8774/v2.1"),
            ("http://neutron:9696", ServiceType.NETWORK, "http://neutron:9696/v2.0"),
            ("http://glance:9292/", ServiceType.IMAGE, "http://glance:9292/v2"),
            ("http://cinder:8776/v3/abc", ServiceType.BLOCK_STORAGE, "http://cinder:8776/v3/abc"),
            ("http://keystone:5000", ServiceType.IDENTITY, "http://keystone:5000/v3"),
            ("http://cloud/identity/v3", ServiceType.IDENTITY, "http://cloud/identity/v3"),
            ("http://placement:8778", ServiceType.PLACEMENT, "http://placement:8778"),
        ],
    )
    def test_appends_default_version_only_when_missing(self, url, service_type, expected):
        assert versioned_base_url(url, service_type) == expected
