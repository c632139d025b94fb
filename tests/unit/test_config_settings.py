"""
Tests unitaires pour la configuration (AdapterConfig) et le logging.
"""
import io
import logging

import pytest

from rube_mcp_adapter.config import AdapterConfig, setup_logging
from rube_mcp_adapter.core.constants import (
    DEFAULT_STREAM_LIMIT,
    MAX_STREAM_LIMIT,
    MIN_STREAM_LIMIT,
)
from rube_mcp_adapter.core.exceptions import ConfigurationError


class TestAdapterConfigFromEnv:
    """Chargement depuis l'environnement."""

    @pytest.mark.unit
    def test_defaults_when_env_empty(self):
        config = AdapterConfig.from_env({})
        assert config.endpoint == "https://api.rube.app"
        assert config.auth_token == ""
        assert config.log_level == "WARNING"
        assert config.stream_limit == DEFAULT_STREAM_LIMIT

    @pytest.mark.unit
    def test_reads_rube_variables(self):
        config = AdapterConfig.from_env({
            "RUBE_ENDPOINT": "http://127.0.0.1:9999/",
            "RUBE_AUTH_TOKEN": "  secret-token ",
            "RUBE_LOG_LEVEL": "debug",
        })
        assert config.endpoint == "http://127.0.0.1:9999"
        assert config.auth_token == "secret-token"
        assert config.log_level == "DEBUG"

    @pytest.mark.unit
    def test_uses_os_environ_by_default(self, monkeypatch):
        monkeypatch.setenv("RUBE_ENDPOINT", "https://rube.example.com")
        monkeypatch.setenv("RUBE_AUTH_TOKEN", "tok")
        config = AdapterConfig.from_env()
        assert config.endpoint == "https://rube.example.com"
        assert config.auth_token == "tok"

    @pytest.mark.unit
    @pytest.mark.parametrize("endpoint", ["ftp://rube.app", "api.rube.app", "https://"])
    def test_invalid_endpoint_raises_configuration_error(self, endpoint):
        with pytest.raises(ConfigurationError) as exc_info:
            AdapterConfig.from_env({"RUBE_ENDPOINT": endpoint})
        assert exc_info.value.code == "config_error"
        assert exc_info.value.details == {"key": "RUBE_ENDPOINT"}

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("1", MIN_STREAM_LIMIT),
            ("999999999999", MAX_STREAM_LIMIT),
            ("0", DEFAULT_STREAM_LIMIT),
            ("abc", DEFAULT_STREAM_LIMIT),
            ("1048576", 1048576),
        ],
    )
    def test_stream_limit_is_clamped(self, raw, expected):
        config = AdapterConfig.from_env({"RUBE_STDIO_STREAM_LIMIT": raw})
        assert config.stream_limit == expected


class TestAdapterConfig:
    """Propriétés de la config."""

    @pytest.mark.unit
    def test_config_is_immutable(self):
        config = AdapterConfig()
        with pytest.raises(AttributeError):
            config.auth_token = "other"  # type: ignore[misc]

    @pytest.mark.unit
    def test_missing_token_still_yields_bearer_header(self):
        assert AdapterConfig().authorization_header == "Bearer "
        assert AdapterConfig(auth_token="abc").authorization_header == "Bearer abc"


class TestSetupLogging:
    """Logs vers stderr uniquement (stdout réservé au JSON-RPC)."""

    @pytest.mark.unit
    def test_logs_go_to_given_stream(self):
        stream = io.StringIO()
        setup_logging("INFO", stream=stream)
        logging.getLogger("rube_mcp_adapter.rpc.dispatcher").info("hello diag")
        assert "hello diag" in stream.getvalue()

    @pytest.mark.unit
    def test_level_filters_messages(self):
        stream = io.StringIO()
        setup_logging("ERROR", stream=stream)
        logging.getLogger("rube_mcp_adapter").warning("ignored")
        assert stream.getvalue() == ""

    @pytest.mark.unit
    def test_repeated_setup_keeps_single_handler(self):
        setup_logging("INFO", stream=io.StringIO())
        setup_logging("INFO", stream=io.StringIO())
        assert len(logging.getLogger("rube_mcp_adapter").handlers) == 1

    @pytest.mark.unit
    def test_unknown_level_falls_back_to_warning(self):
        setup_logging("VERBOSE", stream=io.StringIO())
        assert logging.getLogger("rube_mcp_adapter").level == logging.WARNING
