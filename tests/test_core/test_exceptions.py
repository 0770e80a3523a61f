"""
Tests for vehiclebridge.core.exceptions
=========================================
"""

import pytest

from vehiclebridge.core.exceptions import (
    BrokerError,
    ConfigurationError,
    DataNotFoundError,
    StoreError,
    VehicleBridgeError,
)


class TestExceptionHierarchy:

    @pytest.mark.parametrize(
        "error",
        [
            ConfigurationError("bad config"),
            StoreError("query failed"),
            BrokerError("send failed"),
            DataNotFoundError(),
        ],
    )
    def test_all_derive_from_base(self, error) -> None:
        assert isinstance(error, VehicleBridgeError)

    def test_default_error_codes(self) -> None:
        assert ConfigurationError("x").error_code == "CONFIG_ERROR"
        assert StoreError("x").error_code == "STORE_ERROR"
        assert BrokerError("x").error_code == "BROKER_ERROR"
        assert DataNotFoundError().error_code == "DATA_NOT_FOUND"

    def test_data_not_found_carries_no_backend_detail(self) -> None:
        error = DataNotFoundError()
        assert str(error) == "Data not found"
        assert error.details == {}


class TestErrorContext:

    def test_store_error_records_operation(self) -> None:
        error = StoreError("timeout", operation="find_by_brand", details={"status_code": 408})
        assert error.operation == "find_by_brand"
        assert error.details == {"status_code": 408, "operation": "find_by_brand"}

    def test_broker_error_records_destination(self) -> None:
        error = BrokerError("down", destination="myeventhub")
        assert error.destination == "myeventhub"
        assert error.details["destination"] == "myeventhub"

    def test_to_dict(self) -> None:
        error = BrokerError("down", error_code="SEND_FAILED")
        assert error.to_dict() == {
            "error_type": "BrokerError",
            "message": "down",
            "error_code": "SEND_FAILED",
            "details": {},
        }

    def test_repr(self) -> None:
        assert repr(StoreError("x", error_code="E")) == (
            "StoreError(message='x', error_code='E', details={})"
        )
