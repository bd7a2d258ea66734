"""
Unit tests for alpacalink configuration system.

Tests configuration loading, validation, and environment variable overrides.
"""

import os
import tempfile
from pathlib import Path

import pytest
import yaml

from alpacalink.client import AlpacaClient
from alpacalink.config import (
    AlpacaLinkConfig,
    ClientConfig,
    get_config_paths,
    load_config,
)
from alpacalink.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from real config files and ALPACALINK_* variables."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for key in list(os.environ):
        if key.startswith("ALPACALINK_"):
            monkeypatch.delenv(key)


def write_yaml(data) -> str:
    with tempfile.NamedTemporaryFile(
        mode="w", suffix=".yaml", delete=False
    ) as f:
        yaml.dump(data, f)
        return f.name


class TestClientConfig:
    """Tests for ClientConfig model."""

    def test_default_values(self) -> None:
        """Test ClientConfig has sensible defaults."""
        config = ClientConfig()
        assert config.client_id == 1
        assert config.secure is False
        assert config.domain == ""
        assert config.ip == ""
        assert config.port == -1
        assert config.transaction_id == 0
        assert config.timeout == 10.0
        assert config.raise_on_error is False

    def test_port_range(self) -> None:
        """Test port validation (-1 or 1-65535)."""
        ClientConfig(port=-1)
        ClientConfig(port=1)
        ClientConfig(port=65535)

        with pytest.raises(ValueError):
            ClientConfig(port=0)
        with pytest.raises(ValueError):
            ClientConfig(port=65536)
        with pytest.raises(ValueError):
            ClientConfig(port=-2)

    def test_client_id_range(self) -> None:
        """Test client_id must fit in uint32."""
        ClientConfig(client_id=0)
        ClientConfig(client_id=2**32 - 1)

        with pytest.raises(ValueError):
            ClientConfig(client_id=-1)
        with pytest.raises(ValueError):
            ClientConfig(client_id=2**32)

    def test_timeout_range(self) -> None:
        """Test timeout validation (0-300 seconds)."""
        ClientConfig(timeout=0.1)
        ClientConfig(timeout=300.0)

        with pytest.raises(ValueError):
            ClientConfig(timeout=0.0)
        with pytest.raises(ValueError):
            ClientConfig(timeout=301.0)


class TestAlpacaLinkConfig:
    """Tests for the top-level AlpacaLinkConfig."""

    def test_default_configuration(self) -> None:
        config = AlpacaLinkConfig()
        assert isinstance(config.client, ClientConfig)
        assert config.log_level == "INFO"
        assert config.log_file is None

    def test_partial_configuration(self) -> None:
        """Test AlpacaLinkConfig accepts partial overrides."""
        config = AlpacaLinkConfig(client={"ip": "192.168.1.100", "port": 11111})

        assert config.client.ip == "192.168.1.100"
        assert config.client.port == 11111
        assert config.client.client_id == 1  # Default

    def test_log_level_options(self) -> None:
        for level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            config = AlpacaLinkConfig(log_level=level)
            assert config.log_level == level

        with pytest.raises(ValueError):
            AlpacaLinkConfig(log_level="VERBOSE")


class TestConfigFilePaths:
    """Tests for config file path discovery."""

    def test_get_config_paths_returns_list(self) -> None:
        paths = get_config_paths()
        assert isinstance(paths, list)
        assert all(isinstance(p, Path) for p in paths)

    def test_config_paths_include_current_dir(self) -> None:
        """Test current directory is checked first."""
        assert get_config_paths()[0] == Path("./alpacalink.yaml")

    def test_config_paths_include_home_dir(self) -> None:
        assert Path.home() / ".alpacalink" / "config.yaml" in get_config_paths()


class TestLoadConfig:
    """Tests for configuration loading."""

    def test_load_default_config(self) -> None:
        """Test loading config with no file returns defaults."""
        config = load_config()
        assert isinstance(config, AlpacaLinkConfig)
        assert config.client.port == -1

    def test_load_from_yaml_file(self) -> None:
        temp_path = write_yaml({
            "client": {
                "client_id": 65535,
                "secure": True,
                "domain": "alpaca.observerly.com",
            },
            "log_level": "DEBUG",
        })

        try:
            config = load_config(temp_path)
            assert config.client.client_id == 65535
            assert config.client.secure is True
            assert config.client.domain == "alpaca.observerly.com"
            assert config.log_level == "DEBUG"
            # Defaults still applied
            assert config.client.timeout == 10.0
        finally:
            os.unlink(temp_path)

    def test_load_from_current_directory(self) -> None:
        """Test ./alpacalink.yaml is picked up without an explicit path."""
        Path("alpacalink.yaml").write_text("client:\n  ip: 10.0.0.7\n  port: 32323\n")

        config = load_config()

        assert config.client.ip == "10.0.0.7"
        assert config.client.port == 32323

    def test_load_nonexistent_file_raises_error(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_config("/nonexistent/path/config.yaml")
        assert "not found" in str(exc_info.value)

    def test_load_invalid_yaml_raises_error(self) -> None:
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".yaml", delete=False
        ) as f:
            f.write("invalid: yaml: content: [")
            temp_path = f.name

        try:
            with pytest.raises(ConfigurationError) as exc_info:
                load_config(temp_path)
            assert "Invalid YAML" in str(exc_info.value)
        finally:
            os.unlink(temp_path)

    def test_load_invalid_config_raises_error(self) -> None:
        temp_path = write_yaml({"client": {"port": 99999}})

        try:
            with pytest.raises(ConfigurationError) as exc_info:
                load_config(temp_path)
            assert "validation failed" in str(exc_info.value)
        finally:
            os.unlink(temp_path)


class TestEnvironmentOverrides:
    """Tests for environment variable overrides."""

    def test_env_override_string(self, monkeypatch) -> None:
        monkeypatch.setenv("ALPACALINK_CLIENT_IP", "192.168.1.200")
        assert load_config().client.ip == "192.168.1.200"

    def test_env_override_integer(self, monkeypatch) -> None:
        monkeypatch.setenv("ALPACALINK_CLIENT_PORT", "1234")
        assert load_config().client.port == 1234

    def test_env_override_float(self, monkeypatch) -> None:
        monkeypatch.setenv("ALPACALINK_CLIENT_TIMEOUT", "2.5")
        assert load_config().client.timeout == 2.5

    def test_env_override_boolean(self, monkeypatch) -> None:
        monkeypatch.setenv("ALPACALINK_CLIENT_SECURE", "true")
        assert load_config().client.secure is True

    def test_env_override_top_level(self, monkeypatch) -> None:
        monkeypatch.setenv("ALPACALINK_LOG_LEVEL", "warning")
        assert load_config().log_level == "WARNING"

    def test_env_override_with_file(self, monkeypatch) -> None:
        """Test environment variables override file values."""
        temp_path = write_yaml({"client": {"ip": "file-host.local"}})
        monkeypatch.setenv("ALPACALINK_CLIENT_IP", "env-host.local")

        try:
            assert load_config(temp_path).client.ip == "env-host.local"
        finally:
            os.unlink(temp_path)

    def test_invalid_env_value(self, monkeypatch) -> None:
        monkeypatch.setenv("ALPACALINK_CLIENT_PORT", "not-a-port")
        with pytest.raises(ConfigurationError):
            load_config()


class TestConfigIntegration:
    """Integration tests for configuration system."""

    def test_config_roundtrip_to_client(self) -> None:
        """Test saving, loading and building a client from config."""
        original = AlpacaLinkConfig(
            client=ClientConfig(client_id=65535, ip="0.0.0.0", port=8000),
        )
        temp_path = write_yaml(original.model_dump())

        try:
            loaded = load_config(temp_path)
            assert loaded == original

            client = AlpacaClient.from_config(loaded.client)
            assert client.url_base == "http://0.0.0.0:8000"
            assert client.client_id == 65535
        finally:
            os.unlink(temp_path)
