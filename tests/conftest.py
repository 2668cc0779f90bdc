# tests/conftest.py
from __future__ import annotations

import os
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

# ============================================================
# Force mock mode before app.main is imported: no real provider
# calls from the test suite, whatever the developer's .env says.
# ============================================================
os.environ["GHN_TOKEN"] = ""
os.environ["GHTK_TOKEN"] = ""
os.environ["SHIPPING_PROVIDER"] = "ghn"

from app.api.deps import get_shipping_fee_service  # noqa: E402
from app.main import app  # noqa: E402
from app.services.shipping_fee import FeeRequest, ShippingFeeService  # noqa: E402


@pytest.fixture
def mock_service() -> ShippingFeeService:
    return ShippingFeeService(fee_gateway=None, address_gateway=None)


@pytest.fixture
def client(mock_service: ShippingFeeService) -> Iterator[TestClient]:
    app.dependency_overrides[get_shipping_fee_service] = lambda: mock_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_shipping_fee_service, None)


@pytest.fixture
def valid_request() -> FeeRequest:
    return FeeRequest(to_district_id=1442, to_ward_code="20109", weight=1000)
