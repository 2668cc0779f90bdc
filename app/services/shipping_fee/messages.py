# app/services/shipping_fee/messages.py
from __future__ import annotations


class FeeField:
    # request wire names, also used as FieldError.field
    TO_DISTRICT_ID = "to_district_id"
    TO_WARD_CODE = "to_ward_code"
    WEIGHT = "weight"
    SERVICE_TYPE_ID = "service_type_id"
    INSURANCE_VALUE = "insurance_value"
    COD_VALUE = "cod_value"
    LENGTH = "length"
    WIDTH = "width"
    HEIGHT = "height"


class FeeMessage:
    TO_DISTRICT_REQUIRED = "Delivery district is required"
    TO_WARD_REQUIRED = "Delivery ward is required"

    WEIGHT_REQUIRED = "Weight is required"
    WEIGHT_INVALID = "Weight must be greater than 0"
    WEIGHT_MAX_EXCEEDED = "Weight cannot exceed 50000g (50kg)"

    SERVICE_TYPE_INVALID = "Service type must be 1 (Express), 2 (Standard), or 3 (Economy)"

    INSURANCE_VALUE_NEGATIVE = "Insurance value cannot be negative"
    INSURANCE_VALUE_MAX_EXCEEDED = "Insurance value cannot exceed 5,000,000 VND"
    COD_VALUE_NEGATIVE = "COD value cannot be negative"
    COD_VALUE_MAX_EXCEEDED = "COD value cannot exceed 5,000,000 VND"

    DIMENSION_NEGATIVE = "Dimension values cannot be negative"
    DIMENSION_MAX_EXCEEDED = "Dimension cannot exceed 200cm"

    CALC_SUCCESS = "Fee calculation successful"
    CALC_SUCCESS_MOCK = "Fee calculation successful (Mock Data)"

    VALIDATION_FAILED = "Validation failed"
    GHN_CALL_FAILED = "Failed to call GHN API"
    GHTK_CALL_FAILED = "Failed to call GHTK API"
