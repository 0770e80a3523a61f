"""
vehiclebridge.core.exceptions - Custom Exception Hierarchy
============================================================

This module defines the structured exception hierarchy for the vehicle
bridge. Backends raise backend-specific errors; the bridge decides which of
them callers get to see.

Exception Hierarchy:
    VehicleBridgeError (base)
        ├── ConfigurationError   - Invalid config, missing required values
        ├── StoreError           - Document store read failures
        ├── BrokerError          - Message broker transport failures
        └── DataNotFoundError    - The single fault surfaced by read paths

Error Flow Through the Bridge:
    Write path:
        MessageBroker raises BrokerError
            → VehicleDataService lets it propagate unchanged

    Read paths:
        VehicleStore raises StoreError (possibly mid-stream)
            → map_errors stage logs it
            → caller receives DataNotFoundError (original detail dropped)
        VehicleStore completes with zero items
            → error_if_empty stage
            → caller receives DataNotFoundError

Usage:
    >>> from vehiclebridge.core.exceptions import StoreError
    >>> raise StoreError(
    ...     message="Cosmos DB query failed",
    ...     error_code="COSMOS_QUERY_FAILED",
    ...     details={"status_code": 503},
    ... )
"""

from __future__ import annotations

from typing import Any, Optional


# =============================================================================
# Base Exception
# =============================================================================
# All bridge exceptions inherit from this base class, so callers can catch
# every bridge-specific error with a single except clause.
# =============================================================================
class VehicleBridgeError(Exception):
    """Base exception for all vehicle bridge errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code, UPPER_SNAKE_CASE.
        details: Arbitrary dict with additional debugging context.

    Example:
        >>> try:
        ...     await service.push_data(car)
        ... except VehicleBridgeError as e:
        ...     print(f"[{e.error_code}] {e.message}")
    """

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)

        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize this exception to a dictionary.

        Returns:
            Dictionary with error_type, message, error_code, and details.
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


# =============================================================================
# Configuration Error
# =============================================================================
# Raised at startup when the selected backends cannot be built from the
# given configuration. The process should fail fast.
# =============================================================================
class ConfigurationError(VehicleBridgeError):
    """Raised when bridge configuration is invalid or incomplete.

    Common Causes:
        - Cosmos backend selected without an endpoint or key
        - Unknown backend name
        - Facade used before ``initialize()``

    Example:
        >>> raise ConfigurationError(
        ...     message="Cosmos endpoint is required",
        ...     error_code="MISSING_COSMOS_ENDPOINT",
        ... )
    """

    def __init__(
        self,
        message: str,
        error_code: str = "CONFIG_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)


# =============================================================================
# Store Error
# =============================================================================
# The one fault type a VehicleStore is allowed to raise. Adapters translate
# their native client errors (e.g. azure AzureError) into StoreError so the
# bridge has a single type to intercept.
# =============================================================================
class StoreError(VehicleBridgeError):
    """Raised when the document store fails to produce query results.

    May be raised before the first item or after partial results.

    Attributes:
        operation: Name of the store operation that failed
            (e.g. "find_by_brand").

    Example:
        >>> raise StoreError(
        ...     message="Service unavailable",
        ...     operation="find_by_brand",
        ...     details={"status_code": 503},
        ... )
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        error_code: str = "STORE_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        enriched_details = details or {}
        if operation:
            enriched_details["operation"] = operation

        super().__init__(message=message, error_code=error_code, details=enriched_details)

        self.operation = operation


# =============================================================================
# Broker Error
# =============================================================================
# Raised by MessageBroker implementations when a message cannot be handed
# off. The bridge never translates it: write-path callers see it as is.
# =============================================================================
class BrokerError(VehicleBridgeError):
    """Raised when the message broker rejects or cannot accept a message.

    Attributes:
        destination: Topic the message was addressed to, if known.

    Example:
        >>> raise BrokerError(
        ...     message="Failed to send: broker not available",
        ...     destination="myeventhub",
        ...     error_code="SEND_FAILED",
        ... )
    """

    def __init__(
        self,
        message: str,
        destination: Optional[str] = None,
        error_code: str = "BROKER_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        enriched_details = details or {}
        if destination:
            enriched_details["destination"] = destination

        super().__init__(message=message, error_code=error_code, details=enriched_details)

        self.destination = destination


# =============================================================================
# Data Not Found Error
# =============================================================================
# The normalized read-path fault. It is raised both for empty results and
# for store failures, and carries no backend detail.
# =============================================================================
class DataNotFoundError(VehicleBridgeError):
    """Raised by read paths when no data can be returned.

    Callers cannot tell an empty result from a store failure: both surface
    as this error. Store details are logged, never attached here.

    Example:
        >>> async for car in service.get_cars_by_brand("Zzz"):
        ...     ...
        Traceback (most recent call last):
        DataNotFoundError: Data not found
    """

    def __init__(
        self,
        message: str = "Data not found",
        error_code: str = "DATA_NOT_FOUND",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, error_code=error_code, details=details)
