"""
vehiclebridge.infrastructure - Document Store Layer
=====================================================

Read-side backends consumed by the bridge.

    VehicleStore (ABC)
        ├── InMemoryVehicleStore   (development/testing)
        └── CosmosVehicleStore     (Azure Cosmos DB)

CosmosVehicleStore is imported from its own module so that the azure client
is only loaded when the cosmos backend is selected:
    from vehiclebridge.infrastructure.cosmos_store import CosmosVehicleStore
"""

from vehiclebridge.infrastructure.vehicle_store import InMemoryVehicleStore, VehicleStore

__all__ = [
    "VehicleStore",
    "InMemoryVehicleStore",
]
