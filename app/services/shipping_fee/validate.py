# app/services/shipping_fee/validate.py
from __future__ import annotations

from typing import List, Optional

from .messages import FeeField, FeeMessage
from .types import FeeRequest, FieldError

MAX_WEIGHT_GRAMS = 50000
MAX_INSURANCE_VALUE = 5_000_000
MAX_COD_VALUE = 5_000_000
MAX_DIMENSION_CM = 200
SERVICE_TYPE_IDS = (1, 2, 3)  # 1=Express 2=Standard 3=Economy


def _check_required(req: FeeRequest, errors: List[FieldError]) -> None:
    if req.to_district_id is None:
        errors.append(FieldError(FeeField.TO_DISTRICT_ID, FeeMessage.TO_DISTRICT_REQUIRED))

    if req.to_ward_code is None or not str(req.to_ward_code).strip():
        errors.append(FieldError(FeeField.TO_WARD_CODE, FeeMessage.TO_WARD_REQUIRED))


def _check_weight(req: FeeRequest, errors: List[FieldError]) -> None:
    w = req.weight
    if w is None:
        errors.append(FieldError(FeeField.WEIGHT, FeeMessage.WEIGHT_REQUIRED))
    elif w <= 0:
        errors.append(FieldError(FeeField.WEIGHT, FeeMessage.WEIGHT_INVALID))
    elif w > MAX_WEIGHT_GRAMS:
        errors.append(FieldError(FeeField.WEIGHT, FeeMessage.WEIGHT_MAX_EXCEEDED))


def _check_service_type(req: FeeRequest, errors: List[FieldError]) -> None:
    if req.service_type_id is not None and req.service_type_id not in SERVICE_TYPE_IDS:
        errors.append(FieldError(FeeField.SERVICE_TYPE_ID, FeeMessage.SERVICE_TYPE_INVALID))


def _check_bounded(
    value: Optional[int],
    field: str,
    negative_msg: str,
    max_msg: str,
    max_value: int,
    errors: List[FieldError],
) -> None:
    # absent is fine; negative and over-limit are distinct errors
    if value is None:
        return
    if value < 0:
        errors.append(FieldError(field, negative_msg))
    elif value > max_value:
        errors.append(FieldError(field, max_msg))


def validate_fee_request(req: FeeRequest) -> List[FieldError]:
    """
    Collect every field-level error of a fee request (no short-circuit).

    Origin district/ward are optional and never checked: the provider
    uses the shop's registered address when they are absent.
    Returns [] when the request is acceptable.
    """
    errors: List[FieldError] = []

    _check_required(req, errors)
    _check_weight(req, errors)
    _check_service_type(req, errors)

    _check_bounded(
        req.insurance_value,
        FeeField.INSURANCE_VALUE,
        FeeMessage.INSURANCE_VALUE_NEGATIVE,
        FeeMessage.INSURANCE_VALUE_MAX_EXCEEDED,
        MAX_INSURANCE_VALUE,
        errors,
    )
    _check_bounded(
        req.cod_value,
        FeeField.COD_VALUE,
        FeeMessage.COD_VALUE_NEGATIVE,
        FeeMessage.COD_VALUE_MAX_EXCEEDED,
        MAX_COD_VALUE,
        errors,
    )

    for name, value in (
        (FeeField.LENGTH, req.length),
        (FeeField.WIDTH, req.width),
        (FeeField.HEIGHT, req.height),
    ):
        _check_bounded(
            value,
            name,
            FeeMessage.DIMENSION_NEGATIVE,
            FeeMessage.DIMENSION_MAX_EXCEEDED,
            MAX_DIMENSION_CM,
            errors,
        )

    return errors
