"""
Bridge Demo — Push Readings and Query Them Back
=================================================

This example runs the bridge end to end on the in-memory backends:
push a few readings to the broker, seed the store, then stream cars by
brand and the distinct brands.

It also shows the "no data" outcome: an unknown brand surfaces as
DataNotFoundError, exactly like a store fault would.

Point it at real backends by setting, for example:
    VEHICLEBRIDGE_STORE_BACKEND=cosmos
    VEHICLEBRIDGE_COSMOS__ENDPOINT=https://<account>.documents.azure.com:443/
    VEHICLEBRIDGE_COSMOS__KEY=<key>
    VEHICLEBRIDGE_BROKER_BACKEND=kafka
    VEHICLEBRIDGE_KAFKA__BOOTSTRAP_SERVERS=<namespace>.servicebus.windows.net:9093

Usage:
    python examples/bridge_demo.py
"""

from __future__ import annotations

import asyncio

from vehiclebridge.core.config import load_config
from vehiclebridge.core.enums import StoreBackend
from vehiclebridge.core.exceptions import DataNotFoundError
from vehiclebridge.core.logging_config import configure_logging
from vehiclebridge.core.models import Car
from vehiclebridge.facade import VehicleBridge
from vehiclebridge.service.vehicle_data_service import EVENT_HUB_TOPIC


READINGS = [
    Car(car_id="1", brand="Toyota", model="Corolla", year=2021, color="white"),
    Car(car_id="2", brand="Honda", model="Civic", year=2019, mileage=42000),
    Car(car_id="3", brand="Toyota", model="Yaris", year=2020),
]


async def main() -> None:
    """Push readings, then stream them back through the query paths."""
    config = load_config()
    configure_logging(config)

    async with VehicleBridge(config) as bridge:
        # Publish: returns once the broker accepted the handoff
        for car in READINGS:
            await bridge.push_data(car)

        # The in-memory store starts empty; seed it with what we pushed
        if config.store_backend == StoreBackend.MEMORY:
            for car in READINGS:
                await bridge.store.save(car)

        print("Vehicle Bridge Demo")
        print("-" * 40)
        print(f"Store    : {config.store_backend.value}")
        print(f"Broker   : {config.broker_backend.value} → {EVENT_HUB_TOPIC}")
        print()

        print("Toyotas:")
        async for car in bridge.get_cars_by_brand("Toyota"):
            print(f"  {car.car_id:>4}  {car.model or '-':<10} {car.year or '-'}")

        brands = await bridge.get_all_brands().collect()
        print()
        print(f"Brands   : {', '.join(b.brand for b in brands)}")

        try:
            await bridge.get_cars_by_brand("Lada").collect()
        except DataNotFoundError as exc:
            print(f"Lada     : {exc.error_code}")


if __name__ == "__main__":
    asyncio.run(main())
