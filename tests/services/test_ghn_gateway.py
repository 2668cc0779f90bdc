# tests/services/test_ghn_gateway.py
from __future__ import annotations

import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from app.core.config import ProviderCredentials
from app.gateway.errors import UpstreamProtocolError, UpstreamRejected, UpstreamUnavailable
from app.gateway.ghn import GhnEndpoints, GhnGateway, build_fee_payload
from app.services.shipping_fee.messages import FeeMessage
from app.services.shipping_fee.types import FeeRequest

BASE = "https://dev-online-gateway.ghn.vn"


def _cred() -> ProviderCredentials:
    return ProviderCredentials(token="tok-123", shop_id=885, base_url=BASE, timeout_s=2.0)


def _gateway(handler: Callable[[httpx.Request], httpx.Response], seen: List[httpx.Request]) -> GhnGateway:
    def _wrapped(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    return GhnGateway(_cred(), transport=httpx.MockTransport(_wrapped))


def _json(status: int, body: Any) -> Callable[[httpx.Request], httpx.Response]:
    return lambda _req: httpx.Response(status, json=body)


# ---------------------------------------------------------
# payload
# ---------------------------------------------------------


def test_fee_payload_only_required_when_nothing_else_given():
    req = FeeRequest(to_district_id=1442, to_ward_code="20109", weight=1000)
    assert build_fee_payload(req) == {"to_district_id": 1442, "to_ward_code": "20109", "weight": 1000}


def test_fee_payload_keeps_zero_values_and_omits_none():
    req = FeeRequest(
        to_district_id=1442,
        to_ward_code="20109",
        weight=1000,
        from_district_id=1454,
        from_ward_code="21211",
        service_type_id=2,
        insurance_value=0,
        cod_value=150000,
        length=10,
        width=0,
        coupon="GHN10",
    )
    payload = build_fee_payload(req)
    assert payload["insurance_value"] == 0
    assert payload["width"] == 0
    assert payload["cod_value"] == 150000
    assert payload["coupon"] == "GHN10"
    assert payload["from_district_id"] == 1454
    for absent in ("height", "service_id", "cod_failed_amount"):
        assert absent not in payload
    # name fields are not part of the GHN wire format
    assert "to_province_name" not in payload


# ---------------------------------------------------------
# fee
# ---------------------------------------------------------


def test_calculate_fee_success_maps_fields_and_sends_headers():
    seen: List[httpx.Request] = []
    data: Dict[str, Any] = {
        "total": 36300,
        "service_fee": "36300",
        "insurance_fee": 0,
        "pick_station_fee": 0.0,
        "coupon_value": None,
        "r2s_fee": "n/a",
        "cod_fee": 1500,
    }
    gw = _gateway(_json(200, {"code": 200, "message": "Success", "data": data}), seen)

    b = gw.calculate_fee(FeeRequest(to_district_id=1442, to_ward_code="20109", weight=1000))

    assert b.success is True
    assert b.source == "ghn"
    assert b.message == FeeMessage.CALC_SUCCESS
    assert b.total == 36300
    assert b.service_fee == 36300
    assert b.cod_fee == 1500
    assert b.coupon_value == 0
    assert b.r2s_fee == 0
    assert b.cod_failed_fee == 0

    (req,) = seen
    assert req.method == "POST"
    assert str(req.url) == BASE + GhnEndpoints.CALCULATE_FEE
    assert req.headers["Token"] == "tok-123"
    assert req.headers["ShopId"] == "885"
    assert json.loads(req.content) == {"to_district_id": 1442, "to_ward_code": "20109", "weight": 1000}


def test_calculate_fee_provider_rejection_is_not_raised():
    # GHN answers business errors with HTTP 400 and a JSON envelope
    seen: List[httpx.Request] = []
    gw = _gateway(_json(400, {"code": 400, "message": "Ward code invalid", "data": None}), seen)

    b = gw.calculate_fee(FeeRequest(to_district_id=1442, to_ward_code="x", weight=1000))

    assert b.success is False
    assert b.message == "Ward code invalid"
    assert b.total == 0


def test_calculate_fee_rejection_without_message_uses_default():
    gw = _gateway(_json(200, {"code": 500}), [])
    b = gw.calculate_fee(FeeRequest(to_district_id=1, to_ward_code="1", weight=1))
    assert b.success is False
    assert b.message == FeeMessage.GHN_CALL_FAILED


def test_calculate_fee_string_success_code_is_accepted():
    gw = _gateway(_json(200, {"code": "200", "data": {"total": 100, "service_fee": 100}}), [])
    b = gw.calculate_fee(FeeRequest(to_district_id=1, to_ward_code="1", weight=1))
    assert b.success is True
    assert b.total == 100


def test_calculate_fee_transport_error_raises_unavailable():
    def _boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    gw = _gateway(_boom, [])
    with pytest.raises(UpstreamUnavailable) as ei:
        gw.calculate_fee(FeeRequest(to_district_id=1, to_ward_code="1", weight=1))
    assert ei.value.provider == "ghn"
    assert ei.value.op == "fee"


def test_calculate_fee_timeout_raises_unavailable():
    def _slow(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(UpstreamUnavailable):
        _gateway(_slow, []).calculate_fee(FeeRequest(to_district_id=1, to_ward_code="1", weight=1))


def test_calculate_fee_non_json_raises_protocol_error():
    gw = _gateway(lambda _r: httpx.Response(200, text="<html>maintenance</html>"), [])
    with pytest.raises(UpstreamProtocolError) as ei:
        gw.calculate_fee(FeeRequest(to_district_id=1, to_ward_code="1", weight=1))
    assert ei.value.status_code == 200


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(503, json={"code": 503, "message": "Service Unavailable"}),
        httpx.Response(500, json={"code": 200, "data": {"total": 1}}),
        httpx.Response(502, text="<html>Bad Gateway</html>"),
    ],
)
def test_calculate_fee_server_error_raises_unavailable(response: httpx.Response):
    gw = _gateway(lambda _r: response, [])
    with pytest.raises(UpstreamUnavailable) as ei:
        gw.calculate_fee(FeeRequest(to_district_id=1, to_ward_code="1", weight=1))
    assert ei.value.status_code == response.status_code


def test_list_server_error_raises_unavailable():
    gw = _gateway(_json(504, {"code": 504, "message": "Gateway Timeout"}), [])
    with pytest.raises(UpstreamUnavailable):
        gw.list_provinces()


@pytest.mark.parametrize("body", [[1, 2, 3], {"code": 200, "data": None}, {"code": 200, "data": [1]}])
def test_calculate_fee_malformed_envelope_raises_protocol_error(body):
    gw = _gateway(_json(200, body), [])
    with pytest.raises(UpstreamProtocolError):
        gw.calculate_fee(FeeRequest(to_district_id=1, to_ward_code="1", weight=1))


# ---------------------------------------------------------
# master data
# ---------------------------------------------------------


def test_list_provinces_maps_items():
    seen: List[httpx.Request] = []
    body = {
        "code": 200,
        "data": [
            {"ProvinceID": 201, "ProvinceName": "Hà Nội", "Code": "4"},
            {"ProvinceID": "202", "ProvinceName": "Hồ Chí Minh", "Code": 8},
        ],
    }
    gw = _gateway(_json(200, body), seen)

    provinces = gw.list_provinces()

    assert [(p.id, p.name, p.code) for p in provinces] == [(201, "Hà Nội", "4"), (202, "Hồ Chí Minh", "8")]
    assert seen[0].method == "GET"
    assert seen[0].url.path == GhnEndpoints.PROVINCE


def test_list_districts_passes_province_id_and_sets_parent():
    seen: List[httpx.Request] = []
    body = {"code": 200, "data": [{"DistrictID": 1442, "DistrictName": "Quận 1"}]}
    gw = _gateway(_json(200, body), seen)

    districts = gw.list_districts(202)

    assert [(d.id, d.name, d.parent_id) for d in districts] == [(1442, "Quận 1", 202)]
    assert seen[0].url.params["province_id"] == "202"


def test_list_wards_stringifies_integer_codes():
    body = {
        "code": 200,
        "data": [
            {"WardCode": "20109", "WardName": "Phường Bến Nghé"},
            {"WardCode": 20110, "WardName": "Phường Bến Thành"},
        ],
    }
    seen: List[httpx.Request] = []
    wards = _gateway(_json(200, body), seen).list_wards(1442)

    assert [w.id for w in wards] == ["20109", "20110"]
    assert all(w.parent_id == 1442 for w in wards)
    assert seen[0].url.params["district_id"] == "1442"


def test_list_null_data_is_empty():
    assert _gateway(_json(200, {"code": 200, "data": None}), []).list_provinces() == []


def test_list_rejection_raises():
    gw = _gateway(_json(401, {"code": 401, "message": "Token is not valid"}), [])
    with pytest.raises(UpstreamRejected) as ei:
        gw.list_provinces()
    assert "Token is not valid" in str(ei.value)


def test_list_services_posts_shop_and_districts():
    seen: List[httpx.Request] = []
    body = {
        "code": 200,
        "data": [{"service_id": 53320, "short_name": "Chuẩn", "service_type_id": 2}],
    }
    services = _gateway(_json(200, body), seen).list_services(1454, 1442)

    assert [(s.service_id, s.short_name, s.service_type_id) for s in services] == [(53320, "Chuẩn", 2)]
    assert seen[0].method == "POST"
    assert json.loads(seen[0].content) == {"shop_id": 885, "from_district": 1454, "to_district": 1442}
