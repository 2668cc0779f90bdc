# app/gateway/ghn.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from app.services.shipping_fee.coerce import to_int, to_str
from app.services.shipping_fee.messages import FeeMessage
from app.services.shipping_fee.types import (
    FEE_FIELDS,
    AddressUnit,
    FeeBreakdown,
    FeeRequest,
    ServiceOption,
)

from .base import HttpGateway
from .errors import UpstreamRejected

# envelope code, independent of the HTTP status
GHN_SUCCESS_CODE = 200


class GhnEndpoints:
    """GHN public API paths (https://api.ghn.vn/home/docs/detail)."""

    # master data (GET, header Token)
    PROVINCE = "/shiip/public-api/master-data/province"
    DISTRICT = "/shiip/public-api/master-data/district"  # ?province_id=
    WARD = "/shiip/public-api/master-data/ward"  # ?district_id=

    # shipping order (POST, headers Token + ShopId)
    CALCULATE_FEE = "/shiip/public-api/v2/shipping-order/fee"
    AVAILABLE_SERVICES = "/shiip/public-api/v2/shipping-order/available-services"


# request fields sent only when present, in wire order
_OPTIONAL_FEE_FIELDS = (
    "service_id",
    "service_type_id",
    "from_district_id",
    "from_ward_code",
    "length",
    "width",
    "height",
    "insurance_value",
    "cod_value",
    "cod_failed_amount",
    "coupon",
)


def build_fee_payload(req: FeeRequest) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "to_district_id": req.to_district_id,
        "to_ward_code": req.to_ward_code,
        "weight": req.weight,
    }
    for key in _OPTIONAL_FEE_FIELDS:
        value = getattr(req, key)
        if value is not None:
            payload[key] = value
    return payload


def map_fee_data(data: Dict[str, Any]) -> FeeBreakdown:
    fees = {k: to_int(data.get(k)) for k in FEE_FIELDS}
    return FeeBreakdown(success=True, message=FeeMessage.CALC_SUCCESS, source=GhnGateway.provider, **fees)


class GhnGateway(HttpGateway):
    provider = "ghn"

    def _headers(self) -> Dict[str, str]:
        h = super()._headers()
        h["ShopId"] = str(self.credentials.shop_id)
        return h

    # ---------- fee ----------

    def calculate_fee(self, req: FeeRequest) -> FeeBreakdown:
        op = "fee"
        body = self._request_json(op, "POST", GhnEndpoints.CALCULATE_FEE, json=build_fee_payload(req))

        code = to_int(body.get("code"), default=-1)
        if code != GHN_SUCCESS_CODE:
            # business rejection (bad district/ward pair, etc.): not a transport failure
            message = to_str(body.get("message")) or FeeMessage.GHN_CALL_FAILED
            return FeeBreakdown.failure(message, source=self.provider)

        data = body.get("data")
        if not isinstance(data, dict):
            raise self._protocol_error(op, "fee response without data object")
        return map_fee_data(data)

    # ---------- master data ----------

    def _list_data(self, op: str, method: str, path: str, **kw: Any) -> List[Dict[str, Any]]:
        body = self._request_json(op, method, path, **kw)

        code = to_int(body.get("code"), default=-1)
        if code != GHN_SUCCESS_CODE:
            raise UpstreamRejected(
                to_str(body.get("message")) or f"code={body.get('code')!r}",
                provider=self.provider,
                op=op,
            )

        data = body.get("data")
        if data is None:
            return []
        if not isinstance(data, list):
            raise self._protocol_error(op, "list response data is not an array")
        return [x for x in data if isinstance(x, dict)]

    def list_provinces(self) -> List[AddressUnit]:
        items = self._list_data("provinces", "GET", GhnEndpoints.PROVINCE)
        return [
            AddressUnit(
                id=to_int(x.get("ProvinceID")),
                name=to_str(x.get("ProvinceName")),
                code=to_str(x.get("Code")),
            )
            for x in items
        ]

    def list_districts(self, province_id: int) -> List[AddressUnit]:
        items = self._list_data(
            "districts", "GET", GhnEndpoints.DISTRICT, params={"province_id": province_id}
        )
        return [
            AddressUnit(
                id=to_int(x.get("DistrictID")),
                name=to_str(x.get("DistrictName")),
                parent_id=province_id,
            )
            for x in items
        ]

    def list_wards(self, district_id: int) -> List[AddressUnit]:
        items = self._list_data("wards", "GET", GhnEndpoints.WARD, params={"district_id": district_id})
        out: List[AddressUnit] = []
        for x in items:
            # WardCode is documented as string but some environments return an int
            code: Optional[str] = to_str(x.get("WardCode"))
            out.append(AddressUnit(id=code or "", name=to_str(x.get("WardName")), parent_id=district_id))
        return out

    def list_services(self, from_district_id: int, to_district_id: int) -> List[ServiceOption]:
        items = self._list_data(
            "services",
            "POST",
            GhnEndpoints.AVAILABLE_SERVICES,
            json={
                "shop_id": self.credentials.shop_id,
                "from_district": from_district_id,
                "to_district": to_district_id,
            },
        )
        return [
            ServiceOption(
                service_id=to_int(x.get("service_id")),
                short_name=to_str(x.get("short_name")),
                service_type_id=to_int(x.get("service_type_id")),
            )
            for x in items
        ]
