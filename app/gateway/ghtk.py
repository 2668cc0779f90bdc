# app/gateway/ghtk.py
from __future__ import annotations

from typing import Any, Dict

from app.services.shipping_fee.coerce import to_int, to_str
from app.services.shipping_fee.messages import FeeMessage
from app.services.shipping_fee.types import FeeBreakdown, FeeRequest

from .base import HttpGateway

GHTK_FEE_PATH = "/services/shipment/fee"

# service_type_id 1 (Express) travels by air, the rest by road
_TRANSPORT_BY_SERVICE_TYPE = {1: "fly", 2: "road", 3: "road"}


def build_fee_params(req: FeeRequest) -> Dict[str, Any]:
    """
    GHTK addresses by name, not by id. Absent values are omitted so the
    provider applies its own defaults (shop pick address, road transport).
    """
    params: Dict[str, Any] = {"weight": req.weight}
    pairs = (
        ("pick_province", req.from_province_name),
        ("pick_district", req.from_district_name),
        ("province", req.to_province_name),
        ("district", req.to_district_name),
        ("ward", req.to_ward_code),
        ("value", req.insurance_value),
    )
    for key, value in pairs:
        if value is not None:
            params[key] = value
    if req.service_type_id is not None:
        transport = _TRANSPORT_BY_SERVICE_TYPE.get(req.service_type_id)
        if transport:
            params["transport"] = transport
    return params


class GhtkGateway(HttpGateway):
    provider = "ghtk"

    def calculate_fee(self, req: FeeRequest) -> FeeBreakdown:
        op = "fee"
        body = self._request_json(op, "GET", GHTK_FEE_PATH, params=build_fee_params(req))

        ok = body.get("success")
        if not isinstance(ok, bool):
            raise self._protocol_error(op, "fee response without success flag")
        if not ok:
            message = to_str(body.get("message")) or FeeMessage.GHTK_CALL_FAILED
            return FeeBreakdown.failure(message, source=self.provider)

        fee = body.get("fee")
        if not isinstance(fee, dict):
            raise self._protocol_error(op, "fee response without fee object")

        service_fee = to_int(fee.get("fee"))
        insurance_fee = to_int(fee.get("insurance_fee"))
        return FeeBreakdown(
            success=True,
            message=FeeMessage.CALC_SUCCESS,
            source=self.provider,
            total=service_fee + insurance_fee,
            service_fee=service_fee,
            insurance_fee=insurance_fee,
        )
