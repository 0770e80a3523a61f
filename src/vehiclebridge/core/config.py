"""
vehiclebridge.core.config - Configuration Management
======================================================

Configuration can be loaded from multiple sources with the following
priority (highest first):

    1. Explicit constructor arguments (load_config passes YAML values here)
    2. Environment variables (prefixed with VEHICLEBRIDGE_)
    3. Default values defined in the models below

Architecture Context:
    BridgeConfig is created once at startup and handed to the facade, which
    uses it to pick and build the two backends:

        BridgeConfig
            ├── store_backend + CosmosConfig  → VehicleStore
            ├── broker_backend + KafkaConfig  → MessageBroker
            └── log_level / log_format        → configure_logging()

    The backend selectors replace a runtime profile tag: a deployment picks
    "cosmos" + "kafka" for production and "memory" + "memory" for local runs.

Usage:
    config = BridgeConfig()                      # env vars + defaults
    config = load_config("vehiclebridge.yaml")   # YAML + env vars
    config = BridgeConfig(store_backend="cosmos")

Environment Variables:
    VEHICLEBRIDGE_LOG_LEVEL=DEBUG
    VEHICLEBRIDGE_STORE_BACKEND=cosmos
    VEHICLEBRIDGE_BROKER_BACKEND=kafka
    VEHICLEBRIDGE_COSMOS__ENDPOINT=https://my-account.documents.azure.com:443/
    VEHICLEBRIDGE_COSMOS__KEY=...
    VEHICLEBRIDGE_KAFKA__BOOTSTRAP_SERVERS=my-ns.servicebus.windows.net:9093
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from vehiclebridge.core.enums import BrokerBackend, LogFormat, StoreBackend
from vehiclebridge.core.exceptions import ConfigurationError


# =============================================================================
# Cosmos DB Configuration
# =============================================================================
# Only used when store_backend is "cosmos". Endpoint and key have no usable
# default; the backend factory refuses to build a CosmosVehicleStore without
# them.
# =============================================================================
class CosmosConfig(BaseModel):
    """Connection settings for the Azure Cosmos DB document store.

    Attributes:
        endpoint: Account URI, e.g. ``https://acct.documents.azure.com:443/``.
        key: Account key (primary or secondary).
        database: Database holding the car container.
        container: Container holding one document per car reading.
    """

    endpoint: Optional[str] = Field(
        default=None,
        description="Cosmos DB account endpoint URI",
    )
    key: Optional[str] = Field(
        default=None,
        description="Cosmos DB account key",
    )
    database: str = Field(
        default="vehicles",
        description="Database name",
    )
    container: str = Field(
        default="cars",
        description="Container name",
    )


# =============================================================================
# Kafka Configuration
# =============================================================================
# Only used when broker_backend is "kafka". Azure Event Hubs exposes a Kafka
# endpoint, so the same settings cover both.
# =============================================================================
class KafkaConfig(BaseModel):
    """Producer settings for the Kafka-protocol broker.

    Attributes:
        bootstrap_servers: Comma-separated ``host:port`` list.
        client_id: Client name reported to the broker.
        acks: Acknowledgment level the producer requests from the broker.
            The bridge never waits for it; it only affects delivery logging.
        request_timeout_ms: Producer request timeout. Timeouts are owned by
            the broker client, the bridge adds none of its own.
        security_protocol: ``PLAINTEXT`` locally, ``SASL_SSL`` for Event Hubs.
        sasl_mechanism: SASL mechanism when ``SASL_SSL`` is used.
        sasl_username: SASL username (``$ConnectionString`` for Event Hubs).
        sasl_password: SASL password (the Event Hubs connection string).
    """

    bootstrap_servers: str = Field(
        default="localhost:9092",
        description="Comma-separated list of bootstrap servers",
    )
    client_id: str = Field(
        default="vehicle-bridge",
        description="Client id reported to the broker",
    )
    acks: Literal["0", "1", "all"] = Field(
        default="1",
        description="Producer acknowledgment level",
    )
    request_timeout_ms: int = Field(
        default=30000,
        ge=1000,
        description="Producer request timeout in milliseconds",
    )
    security_protocol: str = Field(
        default="PLAINTEXT",
        description="PLAINTEXT, SSL, SASL_PLAINTEXT or SASL_SSL",
    )
    sasl_mechanism: Optional[str] = Field(
        default=None,
        description="SASL mechanism, e.g. PLAIN",
    )
    sasl_username: Optional[str] = Field(
        default=None,
        description="SASL username",
    )
    sasl_password: Optional[str] = Field(
        default=None,
        description="SASL password",
    )


# =============================================================================
# Main Configuration
# =============================================================================
# Environment Variable Mapping:
#   VEHICLEBRIDGE_LOG_LEVEL        → config.log_level
#   VEHICLEBRIDGE_STORE_BACKEND    → config.store_backend
#   VEHICLEBRIDGE_COSMOS__KEY      → config.cosmos.key  (nested, double underscore)
#   VEHICLEBRIDGE_KAFKA__CLIENT_ID → config.kafka.client_id
# =============================================================================
class BridgeConfig(BaseSettings):
    """Top-level configuration for the vehicle bridge.

    Attributes:
        environment: Deployment environment.
        log_level: Minimum level for structured logs.
        log_format: ``console`` for humans, ``json`` for log shippers.
        store_backend: Which VehicleStore implementation to build.
        broker_backend: Which MessageBroker implementation to build.
        cosmos: Cosmos DB settings (see CosmosConfig).
        kafka: Kafka producer settings (see KafkaConfig).

    Example:
        >>> config = BridgeConfig(
        ...     store_backend="cosmos",
        ...     cosmos=CosmosConfig(endpoint="https://...", key="..."),
        ... )
    """

    # -------------------------------------------------------------------------
    # General Settings
    # -------------------------------------------------------------------------
    environment: Literal["dev", "staging", "prod"] = Field(
        default="dev",
        description="Deployment environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_format: LogFormat = Field(
        default=LogFormat.CONSOLE,
        description="Log renderer: console or json",
    )

    # -------------------------------------------------------------------------
    # Backend Selection
    # -------------------------------------------------------------------------
    store_backend: StoreBackend = Field(
        default=StoreBackend.MEMORY,
        description="Document store implementation: memory or cosmos",
    )
    broker_backend: BrokerBackend = Field(
        default=BrokerBackend.MEMORY,
        description="Message broker implementation: memory or kafka",
    )

    # -------------------------------------------------------------------------
    # Nested Configurations
    # -------------------------------------------------------------------------
    cosmos: CosmosConfig = Field(
        default_factory=CosmosConfig,
        description="Cosmos DB configuration",
    )
    kafka: KafkaConfig = Field(
        default_factory=KafkaConfig,
        description="Kafka producer configuration",
    )

    model_config = {
        "env_prefix": "VEHICLEBRIDGE_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
    }


# =============================================================================
# Configuration Loader
# =============================================================================
def load_config(path: Optional[str] = None) -> BridgeConfig:
    """Load bridge configuration from a YAML file and environment variables.

    Args:
        path: Path to a YAML configuration file. If None, looks for
            ``vehiclebridge.yaml`` in the current directory and falls back
            to defaults plus environment variables.

    Returns:
        A fully validated BridgeConfig instance.

    Raises:
        FileNotFoundError: If an explicit path is provided but doesn't exist.
        ConfigurationError: If the YAML file cannot be parsed or does not
            contain a mapping at the top level.
    """
    if path is None:
        default_path = Path("vehiclebridge.yaml")
        if default_path.exists():
            path = str(default_path)

    yaml_data: dict[str, Any] = {}
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(config_path) as f:
            try:
                raw_data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ConfigurationError(
                    message=f"Invalid YAML in configuration file: {path}",
                    error_code="INVALID_CONFIG_FILE",
                    details={"path": path, "error": str(exc)},
                ) from exc

        if raw_data is None:
            raw_data = {}
        if not isinstance(raw_data, dict):
            raise ConfigurationError(
                message="Configuration file must contain a mapping at the top level",
                error_code="INVALID_CONFIG_FILE",
                details={"path": path, "type": type(raw_data).__name__},
            )
        yaml_data = raw_data

    return BridgeConfig(**yaml_data)
