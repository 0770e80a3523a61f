"""
vehiclebridge.service - The Bridge
====================================

    - CloudDataService:     Public contract (ABC)
    - VehicleDataService:   Implementation over a VehicleStore + MessageBroker
    - QueryStream:          Restartable lazy result of the read paths
    - operators:            Stream stages used to build the read paths
"""

from vehiclebridge.service.base import CloudDataService
from vehiclebridge.service.streams import QueryStream
from vehiclebridge.service.vehicle_data_service import EVENT_HUB_TOPIC, VehicleDataService

__all__ = [
    "CloudDataService",
    "VehicleDataService",
    "QueryStream",
    "EVENT_HUB_TOPIC",
]
