# app/api/deps.py
from __future__ import annotations

from functools import lru_cache

from app.core.config import get_settings
from app.services.shipping_fee import ShippingFeeService, build_shipping_fee_service


@lru_cache
def get_shipping_fee_service() -> ShippingFeeService:
    """
    Process-wide service built from the settings singleton.

    Tests replace this dependency through app.dependency_overrides.
    """
    return build_shipping_fee_service(get_settings())
