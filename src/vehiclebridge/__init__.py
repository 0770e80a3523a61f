"""
Vehicle Bridge
===============

Forwards vehicle readings to a message broker and streams them back from a
document store:

    push_data(car)              → Kafka / Event Hubs topic "myeventhub"
    get_cars_by_brand(brand)    ← Cosmos DB, as a lazy QueryStream[Car]
    get_all_brands()            ← Cosmos DB, as a lazy QueryStream[CarBrand]

Read paths report both "nothing matched" and "store failed" as
DataNotFoundError. Write-path broker faults reach the caller unchanged.

Quick Start:
    >>> from vehiclebridge import VehicleBridge
    >>> async with VehicleBridge() as bridge:
    ...     await bridge.push_data(car)
"""

__version__ = "0.1.0"

from vehiclebridge.facade import VehicleBridge

__all__ = ["VehicleBridge", "__version__"]
