"""
Vehicle Bridge Test Suite
=========================

Test organization mirrors the source code structure:
    tests/
    ├── test_core/          → Tests for vehiclebridge.core (config, models, errors, logging)
    ├── test_infrastructure/→ Tests for vehiclebridge.infrastructure (in-memory + Cosmos stores)
    ├── test_integrations/  → Tests for vehiclebridge.integrations (brokers, factories)
    ├── test_service/       → Tests for vehiclebridge.service (stream stages, data service)
    ├── test_facade.py      → Tests for the VehicleBridge lifecycle
    └── conftest.py         → Shared pytest fixtures

Running Tests:
    pytest                          # Run all tests
    pytest tests/test_service/      # Run only service tests
    pytest --cov=vehiclebridge      # Run with coverage report
"""
