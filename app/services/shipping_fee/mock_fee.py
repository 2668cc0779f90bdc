# app/services/shipping_fee/mock_fee.py
from __future__ import annotations

from typing import List, Optional

from .messages import FeeMessage
from .types import FeeBreakdown, FeeRequest, ServiceOption

# placeholder tariff, fixed for compatibility with existing clients
MOCK_BASE_FEE = 15000
MOCK_WEIGHT_UNIT_GRAMS = 500
MOCK_WEIGHT_FEE_PER_UNIT = 5000
MOCK_DISTANCE_FEE = 20000
MOCK_INSURANCE_RATE = 0.005
MOCK_COD_RATE = 0.01

MOCK_SOURCE = "mock"


def _rate_fee(value: Optional[int], rate: float) -> int:
    if value is not None and value > 0:
        return int(value * rate)
    return 0


def estimate_mock_fee(req: FeeRequest) -> FeeBreakdown:
    """
    Deterministic fee used when the provider is unconfigured or unreachable.

    service = 15000 + floor(weight/500)*5000 + (0 if same district else 20000)
    insurance = 0.5% of insurance_value, cod = 1% of cod_value
    Only called on requests that passed validation (weight is set).
    """
    weight = int(req.weight or 0)
    weight_fee = (weight // MOCK_WEIGHT_UNIT_GRAMS) * MOCK_WEIGHT_FEE_PER_UNIT
    distance_fee = 0 if req.is_same_district() else MOCK_DISTANCE_FEE
    service_fee = MOCK_BASE_FEE + weight_fee + distance_fee

    insurance_fee = _rate_fee(req.insurance_value, MOCK_INSURANCE_RATE)
    cod_fee = _rate_fee(req.cod_value, MOCK_COD_RATE)

    return FeeBreakdown(
        success=True,
        message=FeeMessage.CALC_SUCCESS_MOCK,
        source=MOCK_SOURCE,
        total=service_fee + insurance_fee + cod_fee,
        service_fee=service_fee,
        insurance_fee=insurance_fee,
        cod_fee=cod_fee,
    )


def mock_services() -> List[ServiceOption]:
    return [
        ServiceOption(service_id=1, short_name="Express", service_type_id=1),
        ServiceOption(service_id=2, short_name="Standard", service_type_id=2),
        ServiceOption(service_id=3, short_name="Economy", service_type_id=3),
    ]
