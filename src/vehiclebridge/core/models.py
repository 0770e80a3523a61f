"""
vehiclebridge.core.models - Core Data Models
==============================================

The Pydantic models that flow through the bridge.

Model Overview:
    Car       → One vehicle reading (published and queried)
    CarBrand  → A distinct brand value (query result only)

Data Flow:
    ┌──────────────┐   Car    ┌──────────────┐  BrokerMessage  ┌──────────┐
    │  Producer     │ ──────→ │   Bridge      │ ──────────────→ │  Broker  │
    └──────────────┘          │              │                  └──────────┘
                              │              │  Car / CarBrand  ┌──────────┐
    ┌──────────────┐  stream  │              │ ←────────────── │  Store   │
    │  Consumer     │ ←────── │              │                  └──────────┘
    └──────────────┘          └──────────────┘

Design Principles:
    1. Immutable: models are frozen, the bridge never mutates a record
    2. Self-validating: an empty car_id or brand is rejected at creation
    3. Store-friendly: documents keyed by "id" validate into Car.car_id;
       store bookkeeping fields (_rid, _etag, ...) are ignored
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# =============================================================================
# Car Model
# =============================================================================
# A single vehicle reading. The bridge treats everything except car_id and
# brand as opaque payload.
# =============================================================================
class Car(BaseModel):
    """A vehicle reading published to the broker and read from the store.

    Attributes:
        car_id: Identifier of the reading. Accepts ``id`` on input so that
            raw store documents validate directly.
        brand: Manufacturer name. Used as the query key on the read path.
        model: Model name within the brand.
        year: Model year.
        color: Exterior color.
        mileage: Odometer reading at the time of the record.
        price: Listed price.
        timestamp: When the reading was taken (UTC), if the producer set
            one. Never filled in by the bridge.

    Example:
        >>> car = Car(car_id="1", brand="Toyota", model="Corolla", year=2021)
        >>> Car.model_validate({"id": "1", "brand": "Toyota"}).car_id
        '1'
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    car_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("car_id", "id", "carId"),
        description="Identifier of the vehicle reading",
    )
    brand: str = Field(
        min_length=1,
        description="Manufacturer name (query key)",
    )
    model: Optional[str] = Field(
        default=None,
        description="Model name within the brand",
    )
    year: Optional[int] = Field(
        default=None,
        description="Model year",
    )
    color: Optional[str] = Field(
        default=None,
        description="Exterior color",
    )
    mileage: Optional[float] = Field(
        default=None,
        description="Odometer reading",
    )
    price: Optional[float] = Field(
        default=None,
        description="Listed price",
    )
    timestamp: Optional[datetime] = Field(
        default=None,
        description="When the reading was taken (UTC)",
    )


# =============================================================================
# CarBrand Model
# =============================================================================
class CarBrand(BaseModel):
    """A distinct brand value returned by the brand enumeration query.

    Example:
        >>> CarBrand(brand="Honda")
        CarBrand(brand='Honda')
    """

    model_config = ConfigDict(frozen=True)

    brand: str = Field(
        description="Manufacturer name",
    )
