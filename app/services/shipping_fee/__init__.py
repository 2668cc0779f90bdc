# app/services/shipping_fee/__init__.py
from __future__ import annotations

from .mock_fee import estimate_mock_fee
from .service import ShippingFeeService, build_shipping_fee_service
from .types import AddressUnit, FeeBreakdown, FeeRequest, FieldError, ServiceOption
from .validate import validate_fee_request

__all__ = [
    "AddressUnit",
    "FeeBreakdown",
    "FeeRequest",
    "FieldError",
    "ServiceOption",
    "ShippingFeeService",
    "build_shipping_fee_service",
    "estimate_mock_fee",
    "validate_fee_request",
]
