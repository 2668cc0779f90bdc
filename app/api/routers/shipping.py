# app/api/routers/shipping.py
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from app.api.deps import get_shipping_fee_service
from app.api.routers.shipping_schemas import (
    ApiResponse,
    DistrictOut,
    FeeBreakdownOut,
    FeeCalcIn,
    ProvinceOut,
    ServiceOut,
    WardOut,
)
from app.services.shipping_fee import ShippingFeeService

logger = logging.getLogger("shipfee.api")

router = APIRouter(prefix="/api/shipping", tags=["shipping"])


# ---------- address dropdowns ----------


@router.get("/provinces", response_model=ApiResponse[List[ProvinceOut]])
def get_provinces(svc: ShippingFeeService = Depends(get_shipping_fee_service)):
    logger.info("GET /api/shipping/provinces")
    items = [ProvinceOut.from_unit(x) for x in svc.list_provinces()]
    return ApiResponse[List[ProvinceOut]](
        success=True, message=f"Retrieved {len(items)} provinces", data=items
    )


@router.get("/districts/{province_id}", response_model=ApiResponse[List[DistrictOut]])
def get_districts(province_id: int, svc: ShippingFeeService = Depends(get_shipping_fee_service)):
    logger.info("GET /api/shipping/districts/%s", province_id)
    items = [DistrictOut.from_unit(x) for x in svc.list_districts(province_id)]
    return ApiResponse[List[DistrictOut]](
        success=True, message=f"Retrieved {len(items)} districts", data=items
    )


@router.get("/wards/{district_id}", response_model=ApiResponse[List[WardOut]])
def get_wards(district_id: int, svc: ShippingFeeService = Depends(get_shipping_fee_service)):
    logger.info("GET /api/shipping/wards/%s", district_id)
    items = [WardOut.from_unit(x) for x in svc.list_wards(district_id)]
    return ApiResponse[List[WardOut]](success=True, message=f"Retrieved {len(items)} wards", data=items)


@router.get("/services", response_model=ApiResponse[List[ServiceOut]])
def get_services(
    from_district_id: int = Query(...),
    to_district_id: int = Query(...),
    svc: ShippingFeeService = Depends(get_shipping_fee_service),
):
    logger.info("GET /api/shipping/services %s -> %s", from_district_id, to_district_id)
    items = [ServiceOut.from_option(x) for x in svc.list_services(from_district_id, to_district_id)]
    return ApiResponse[List[ServiceOut]](
        success=True, message=f"Retrieved {len(items)} services", data=items
    )


# ---------- fee ----------


@router.post(
    "/calculate",
    response_model=ApiResponse[FeeBreakdownOut],
    responses={400: {"model": ApiResponse[FeeBreakdownOut]}},
)
def calculate_fee(payload: FeeCalcIn, svc: ShippingFeeService = Depends(get_shipping_fee_service)):
    logger.info(
        "POST /api/shipping/calculate %s -> %s/%s, %sg",
        payload.from_district_id,
        payload.to_district_id,
        payload.to_ward_code,
        payload.weight,
    )

    result = svc.calculate_fee(payload.to_fee_request())
    out = FeeBreakdownOut.from_breakdown(result)

    if result.success:
        return ApiResponse[FeeBreakdownOut](success=True, message=result.message, data=out)

    # validation errors and provider rejections: 400 with the breakdown (errors included)
    body = ApiResponse[FeeBreakdownOut](success=False, message=result.message, data=out)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump(mode="json"))


@router.get("/health", response_model=ApiResponse[str])
def health_check():
    return ApiResponse[str](success=True, message="API is up", data="OK")
