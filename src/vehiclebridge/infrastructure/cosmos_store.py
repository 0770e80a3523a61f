"""
vehiclebridge.infrastructure.cosmos_store - Azure Cosmos DB Vehicle Store
==========================================================================

VehicleStore implementation backed by an Azure Cosmos DB (SQL API)
container, using the async client from ``azure-cosmos``.

Queries:
    find_by_brand         SELECT * FROM c WHERE c.brand = @brand
    find_distinct_brands  SELECT DISTINCT c.brand FROM c WHERE IS_DEFINED(c.brand)

Both queries run across partitions and are paged by the client; pages are
fetched only as the caller iterates. Every ``AzureError`` raised by the
client (HTTP errors, connectivity failures, client-side timeouts) is
reported as a StoreError, with the original exception chained for the logs.
A document that does not validate into the target model is skipped and
logged; it does not end the query.

Usage:
    >>> store = CosmosVehicleStore(CosmosConfig(endpoint=..., key=...))
    >>> await store.connect()
    >>> async for car in store.find_by_brand("Toyota"):
    ...     ...
    >>> await store.disconnect()
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from typing import Any, Optional, TypeVar

import structlog
from azure.core.exceptions import AzureError
from azure.cosmos.aio import CosmosClient
from pydantic import ValidationError

from vehiclebridge.core.config import CosmosConfig
from vehiclebridge.core.exceptions import ConfigurationError, StoreError
from vehiclebridge.core.models import Car, CarBrand
from vehiclebridge.infrastructure.vehicle_store import VehicleStore


logger = structlog.get_logger()

T = TypeVar("T")

CARS_BY_BRAND_QUERY = "SELECT * FROM c WHERE c.brand = @brand"
DISTINCT_BRANDS_QUERY = "SELECT DISTINCT c.brand FROM c WHERE IS_DEFINED(c.brand)"


class CosmosVehicleStore(VehicleStore):
    """Vehicle store reading from an Azure Cosmos DB container.

    Args:
        config: Account, database and container settings.
        container: An already-built async ``ContainerProxy`` (or any object
            exposing ``query_items``). When given, no client is created and
            ``connect()`` only marks the store ready. Used by tests and by
            processes that share one CosmosClient.

    Raises:
        ConfigurationError: If no container is injected and the config
            lacks an endpoint or key.
    """

    def __init__(self, config: CosmosConfig, container: Optional[Any] = None) -> None:
        if container is None and not (config.endpoint and config.key):
            raise ConfigurationError(
                message="Cosmos DB endpoint and key are required for the cosmos store backend",
                error_code="MISSING_COSMOS_CREDENTIALS",
                details={"endpoint_set": bool(config.endpoint), "key_set": bool(config.key)},
            )

        self._config = config
        self._client: Optional[CosmosClient] = None
        self._container: Optional[Any] = container
        self._owns_client: bool = container is None
        self._logger = logger.bind(
            component="vehicle_store",
            impl="cosmos",
            database=config.database,
            container=config.container,
        )

    @property
    def is_connected(self) -> bool:
        return self._container is not None and (
            not self._owns_client or self._client is not None
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def connect(self) -> None:
        """Create the Cosmos client and verify the container is reachable.

        Raises:
            StoreError: If the account, database or container cannot be read.
        """
        if not self._owns_client:
            self._logger.info("vehicle_store_connected", injected=True)
            return
        if self._client is not None:
            return

        client = CosmosClient(self._config.endpoint, credential=self._config.key)
        try:
            database = client.get_database_client(self._config.database)
            container = database.get_container_client(self._config.container)
            await container.read()
        except AzureError as exc:
            await client.close()
            raise StoreError(
                message=f"Cannot reach Cosmos DB container: {exc}",
                operation="connect",
                error_code="COSMOS_CONNECT_FAILED",
            ) from exc

        self._client = client
        self._container = container
        self._logger.info("vehicle_store_connected", injected=False)

    async def disconnect(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.close()
            self._client = None
            self._container = None
        self._logger.info("vehicle_store_disconnected")

    # =========================================================================
    # Queries
    # =========================================================================

    def find_by_brand(self, brand: str) -> AsyncIterator[Car]:
        return self._query(
            "find_by_brand",
            CARS_BY_BRAND_QUERY,
            [{"name": "@brand", "value": brand}],
            Car.model_validate,
        )

    def find_distinct_brands(self) -> AsyncIterator[CarBrand]:
        return self._query(
            "find_distinct_brands",
            DISTINCT_BRANDS_QUERY,
            None,
            CarBrand.model_validate,
        )

    async def _query(
        self,
        operation: str,
        query: str,
        parameters: Optional[list[dict[str, Any]]],
        convert: Callable[[dict[str, Any]], T],
    ) -> AsyncIterator[T]:
        container = self._ensure_connected(operation)
        self._logger.debug("query_started", operation=operation)

        pages = container.query_items(query=query, parameters=parameters)
        try:
            async for document in pages:
                try:
                    item = convert(document)
                except ValidationError as exc:
                    self._logger.warning(
                        "document_skipped",
                        operation=operation,
                        document_id=document.get("id"),
                        errors=exc.error_count(),
                    )
                    continue
                yield item
        except AzureError as exc:
            raise StoreError(
                message=f"Cosmos DB query failed: {exc}",
                operation=operation,
                error_code="COSMOS_QUERY_FAILED",
                details={"status_code": getattr(exc, "status_code", None)},
            ) from exc

    def _ensure_connected(self, operation: str) -> Any:
        if not self.is_connected:
            raise StoreError(
                message="Vehicle store is not connected. Call connect() first.",
                operation=operation,
                error_code="STORE_NOT_CONNECTED",
            )
        return self._container
