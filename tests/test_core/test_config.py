"""
Tests for vehiclebridge.core.config
=====================================

    - Default values give a runnable in-memory bridge
    - Environment variables override defaults (including nested configs)
    - YAML files are parsed and validated
    - Validation catches invalid values
"""

import pytest
import yaml
from pydantic import ValidationError

from vehiclebridge.core.config import BridgeConfig, CosmosConfig, KafkaConfig, load_config
from vehiclebridge.core.enums import BrokerBackend, LogFormat, StoreBackend
from vehiclebridge.core.exceptions import ConfigurationError


class TestDefaultConfig:

    def test_defaults_select_in_memory_backends(self) -> None:
        config = BridgeConfig()
        assert config.store_backend == StoreBackend.MEMORY
        assert config.broker_backend == BrokerBackend.MEMORY

    def test_default_logging(self) -> None:
        config = BridgeConfig()
        assert config.log_level == "INFO"
        assert config.log_format == LogFormat.CONSOLE

    def test_default_nested_configs(self) -> None:
        config = BridgeConfig()
        assert config.cosmos.endpoint is None
        assert config.cosmos.database == "vehicles"
        assert config.cosmos.container == "cars"
        assert config.kafka.bootstrap_servers == "localhost:9092"
        assert config.kafka.acks == "1"


class TestEnvironmentOverrides:

    def test_top_level_env_var(self, monkeypatch) -> None:
        monkeypatch.setenv("VEHICLEBRIDGE_STORE_BACKEND", "cosmos")
        monkeypatch.setenv("VEHICLEBRIDGE_LOG_LEVEL", "DEBUG")

        config = BridgeConfig()

        assert config.store_backend == StoreBackend.COSMOS
        assert config.log_level == "DEBUG"

    def test_nested_env_var(self, monkeypatch) -> None:
        monkeypatch.setenv("VEHICLEBRIDGE_COSMOS__ENDPOINT", "https://acct.documents.azure.com:443/")
        monkeypatch.setenv("VEHICLEBRIDGE_KAFKA__CLIENT_ID", "bridge-7")

        config = BridgeConfig()

        assert config.cosmos.endpoint == "https://acct.documents.azure.com:443/"
        assert config.kafka.client_id == "bridge-7"

    def test_constructor_wins_over_env(self, monkeypatch) -> None:
        monkeypatch.setenv("VEHICLEBRIDGE_BROKER_BACKEND", "kafka")
        assert BridgeConfig(broker_backend="memory").broker_backend == BrokerBackend.MEMORY


class TestValidation:

    def test_unknown_backend_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BridgeConfig(store_backend="mongo")

    def test_invalid_environment_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BridgeConfig(environment="qa")

    def test_invalid_acks_rejected(self) -> None:
        with pytest.raises(ValidationError):
            KafkaConfig(acks="2")

    def test_request_timeout_lower_bound(self) -> None:
        with pytest.raises(ValidationError):
            KafkaConfig(request_timeout_ms=10)


class TestLoadConfig:

    def test_load_from_yaml(self, tmp_path) -> None:
        path = tmp_path / "vehiclebridge.yaml"
        path.write_text(yaml.safe_dump({
            "environment": "prod",
            "store_backend": "cosmos",
            "broker_backend": "kafka",
            "cosmos": {"endpoint": "https://acct.documents.azure.com:443/", "key": "a2V5"},
            "kafka": {"bootstrap_servers": "ns.servicebus.windows.net:9093"},
        }))

        config = load_config(str(path))

        assert config.environment == "prod"
        assert config.store_backend == StoreBackend.COSMOS
        assert config.cosmos == CosmosConfig(
            endpoint="https://acct.documents.azure.com:443/", key="a2V5"
        )
        assert config.kafka.bootstrap_servers == "ns.servicebus.windows.net:9093"

    def test_empty_yaml_gives_defaults(self, tmp_path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)).store_backend == StoreBackend.MEMORY

    def test_missing_explicit_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_non_mapping_yaml(self, tmp_path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(str(path))
        assert exc_info.value.error_code == "INVALID_CONFIG_FILE"

    def test_malformed_yaml(self, tmp_path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("store_backend: [unclosed\n")
        with pytest.raises(ConfigurationError):
            load_config(str(path))

    def test_auto_detects_file_in_cwd(self, tmp_path, monkeypatch) -> None:
        (tmp_path / "vehiclebridge.yaml").write_text("log_level: WARNING\n")
        monkeypatch.chdir(tmp_path)
        assert load_config().log_level == "WARNING"

    def test_no_file_uses_defaults(self, tmp_path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert load_config().log_level == "INFO"
