"""
Tests for settings and logging setup.
"""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError
from pythonjsonlogger.json import JsonFormatter
from rich.logging import RichHandler

from core.config import AppSettings, get_user_config_dir, get_user_env_file
from core.logging import configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestAppSettings:
    def test_defaults(self, monkeypatch):
        for name in ("OSC_PAGE_SIZE", "OSC_MAX_ITEMS", "OSC_DEFAULT_OUTPUT", "OSC_VERIFY_TLS"):
            monkeypatch.delenv(name, raising=False)
        settings = AppSettings(_env_file=None)

        assert settings.page_size == 100
        assert settings.max_items == 10000
        assert settings.default_output == "table"
        assert settings.verify_tls is True
        assert settings.clouds_yaml_path is None

    def test_reads_prefixed_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("OSC_PAGE_SIZE", "25")
        monkeypatch.setenv("OSC_DEFAULT_OUTPUT", "json")
        monkeypatch.setenv("OSC_CLOUDS_YAML_PATH", str(tmp_path / "clouds.yaml"))

        settings = AppSettings(_env_file=None)

        assert settings.page_size == 25
        assert settings.default_output == "json"
        assert settings.clouds_yaml_path == tmp_path / "clouds.yaml"

    @pytest.mark.parametrize("value", ["0", "1001"])
    def test_page_size_is_bounded(self, monkeypatch, value):
        monkeypatch.setenv("OSC_PAGE_SIZE", value)
        with pytest.raises(ValidationError):
            AppSettings(_env_file=None)

    def test_user_config_dir_honours_xdg(self, monkeypatch, tmp_path):
        monkeypatch.setattr("sys.platform", "linux")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_user_config_dir() == Path(tmp_path) / "osc-lite"
        assert get_user_env_file() == Path(tmp_path) / "osc-lite" / ".env"


class TestConfigureLogging:
    def test_default_is_rich_at_warning(self, restore_root_logger):
        configure_logging()

        assert restore_root_logger.level == logging.WARNING
        assert isinstance(restore_root_logger.handlers[0], RichHandler)

    def test_verbose_json(self, restore_root_logger):
        configure_logging(verbose=True, json_output=True)

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING
