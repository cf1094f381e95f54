"""
Tests for connection profile loading (clouds.yaml, secure.yaml and OS_* variables).
"""

import pytest
import yaml

from adapters.clouds import load_cloud_profile, profile_from_environ
from core.config import AppSettings
from core.errors import ConfigError

CLOUDS = {
    "clouds": {
        "devstack": {
            "auth": {
                "auth_url": "http://keystone.test:5000/v3",
                "username": "demo",
                "project_name": "demo",
                "user_domain_name": "Default",
                "project_domain_name": "Default",
            },
            "region_name": "RegionOne",
            "interface": "internal",
            "compute_endpoint_override": "http://nova.local:8774/v2.1",
            "block_storage_endpoint_override": "http://cinder.local:8776/v3",
        },
        "tokencloud": {
            "auth": {"auth_url": "http://keystone.test:5000", "token": "tok"},
            "verify": False,
        },
    }
}


@pytest.fixture
def clouds_settings(tmp_path, monkeypatch) -> AppSettings:
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "clouds.yaml"
    path.write_text(yaml.safe_dump(CLOUDS), encoding="utf-8")
    return AppSettings(_env_file=None, clouds_yaml_path=path)


class TestLoadCloudProfile:
    def test_reads_named_cloud(self, clouds_settings):
        profile = load_cloud_profile("devstack", settings=clouds_settings, environ={})

        assert profile.name == "devstack"
        assert profile.auth_type == "password"
        assert profile.auth_url == "http://keystone.test:5000/v3"
        assert profile.username == "demo"
        assert profile.region_name == "RegionOne"
        assert profile.interface == "internal"
        assert profile.endpoint_override == {
            "compute": "http://nova.local:8774/v2.1",
            "block-storage": "http://cinder.local:8776/v3",
        }

    def test_merges_secure_yaml(self, clouds_settings, tmp_path):
        secure = {"clouds": {"devstack": {"auth": {"password": "s3cret"}}}}
        (tmp_path / "secure.yaml").write_text(yaml.safe_dump(secure), encoding="utf-8")

        profile = load_cloud_profile("devstack", settings=clouds_settings, environ={})

        assert profile.password.get_secret_value() == "s3cret"
        assert profile.username == "demo"

    def test_token_cloud_infers_auth_type(self, clouds_settings):
        profile = load_cloud_profile("tokencloud", settings=clouds_settings, environ={})

        assert profile.auth_type == "token"
        assert profile.verify is False

    def test_os_cloud_variable_selects_cloud(self, clouds_settings):
        profile = load_cloud_profile(settings=clouds_settings, environ={"OS_CLOUD": "tokencloud"})
        assert profile.name == "tokencloud"

    def test_unknown_cloud_lists_available(self, clouds_settings):
        with pytest.raises(ConfigError) as exc_info:
            load_cloud_profile("prod", settings=clouds_settings, environ={})
        assert "devstack, tokencloud" in exc_info.value.message

    def test_missing_clouds_yaml_raises(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        settings = AppSettings(_env_file=None, clouds_yaml_path=tmp_path / "missing.yaml")

        with pytest.raises(ConfigError):
            load_cloud_profile("devstack", settings=settings, environ={})

    def test_invalid_yaml_raises(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "clouds.yaml"
        path.write_text("clouds: [unclosed", encoding="utf-8")
        settings = AppSettings(_env_file=None, clouds_yaml_path=path)

        with pytest.raises(ConfigError):
            load_cloud_profile("devstack", settings=settings, environ={})


class TestProfileFromEnviron:
    def test_without_cloud_uses_environment(self, clouds_settings):
        environ = {
            "OS_AUTH_URL": "http://keystone.test:5000/v3",
            "OS_USERNAME": "admin",
            "OS_PASSWORD": "pw",
            "OS_PROJECT_NAME": "admin",
            "OS_USER_DOMAIN_NAME": "Default",
            "OS_PROJECT_DOMAIN_NAME": "Default",
            "OS_REGION_NAME": "RegionOne",
            "OS_INTERFACE": "public",
        }

        profile = load_cloud_profile(settings=clouds_settings, environ=environ)

        assert profile.name == "envvars"
        assert profile.auth_type == "password"
        assert profile.username == "admin"
        assert profile.password.get_secret_value() == "pw"
        assert profile.project_domain_name == "Default"
        assert profile.region_name == "RegionOne"

    def test_legacy_tenant_name(self):
        profile = profile_from_environ({"OS_TENANT_NAME": "legacy"})
        assert profile.project_name == "legacy"

    def test_token_without_password_is_token_auth(self):
        assert profile_from_environ({"OS_TOKEN": "tok"}).auth_type == "token"

    def test_explicit_auth_type_and_insecure(self):
        profile = profile_from_environ({"OS_AUTH_TYPE": "none", "OS_INSECURE": "true"})
        assert profile.auth_type == "none"
        assert profile.verify is False

    def test_endpoint_overrides(self):
        profile = profile_from_environ(
            {
                "OS_COMPUTE_ENDPOINT_OVERRIDE": "http://nova.local/v2.1",
                "OS_BLOCK_STORAGE_ENDPOINT_OVERRIDE": "http://cinder.local/v3",
            }
        )
        assert profile.endpoint_override == {
            "compute": "http://nova.local/v2.1",
            "block-storage": "http://cinder.local/v3",
        }
