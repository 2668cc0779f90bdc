# app/services/shipping_fee/service.py
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from app.gateway.errors import UpstreamError
from app.geo import vn_registry
from app.obs.metrics import mock_fallback_total

from .messages import FeeMessage
from .mock_fee import estimate_mock_fee, mock_services
from .types import AddressUnit, FeeBreakdown, FeeRequest, ServiceOption
from .validate import validate_fee_request

if TYPE_CHECKING:
    from app.core.config import AppSettings
    from app.gateway.base import AddressGateway, FeeGateway

logger = logging.getLogger("shipfee.service")


class ShippingFeeService:
    """
    validate -> provider (if configured) -> mock fallback.

    A gateway of None means the provider is not configured (mock mode).
    Any UpstreamError (transport / malformed response) falls back to mock
    data; a provider-reported business failure is returned unchanged.
    """

    def __init__(
        self,
        fee_gateway: Optional["FeeGateway"] = None,
        address_gateway: Optional["AddressGateway"] = None,
    ):
        self.fee_gateway = fee_gateway
        self.address_gateway = address_gateway

    @property
    def mock_mode(self) -> bool:
        return self.fee_gateway is None

    # ---------- fee ----------

    def calculate_fee(self, req: FeeRequest) -> FeeBreakdown:
        errors = validate_fee_request(req)
        if errors:
            logger.warning("fee validation failed: %d error(s) %s", len(errors), [e.field for e in errors])
            return FeeBreakdown.failure(FeeMessage.VALIDATION_FAILED, errors=errors, source="validation")

        if self.fee_gateway is None:
            logger.warning("shipping provider not configured, using mock fee")
            mock_fallback_total.labels("fee", "unconfigured").inc()
            return estimate_mock_fee(req)

        try:
            result = self.fee_gateway.calculate_fee(req)
        except UpstreamError as e:
            logger.error("fee calculation upstream failure, falling back to mock: %s", e)
            mock_fallback_total.labels("fee", "upstream_error").inc()
            return estimate_mock_fee(req)

        if not result.success:
            logger.info("provider %s rejected fee request: %s", self.fee_gateway.provider, result.message)
        return result

    # ---------- master data ----------

    def list_provinces(self) -> List[AddressUnit]:
        if self.address_gateway is None:
            mock_fallback_total.labels("provinces", "unconfigured").inc()
            return vn_registry.list_provinces()
        try:
            return self.address_gateway.list_provinces()
        except UpstreamError as e:
            logger.error("province list upstream failure, using static data: %s", e)
            mock_fallback_total.labels("provinces", "upstream_error").inc()
            return vn_registry.list_provinces()

    def list_districts(self, province_id: int) -> List[AddressUnit]:
        if self.address_gateway is None:
            mock_fallback_total.labels("districts", "unconfigured").inc()
            return vn_registry.list_districts(province_id)
        try:
            return self.address_gateway.list_districts(province_id)
        except UpstreamError as e:
            logger.error("district list upstream failure (province_id=%s), using mock: %s", province_id, e)
            mock_fallback_total.labels("districts", "upstream_error").inc()
            return vn_registry.list_districts(province_id)

    def list_wards(self, district_id: int) -> List[AddressUnit]:
        if self.address_gateway is None:
            mock_fallback_total.labels("wards", "unconfigured").inc()
            return vn_registry.list_wards(district_id)
        try:
            return self.address_gateway.list_wards(district_id)
        except UpstreamError as e:
            logger.error("ward list upstream failure (district_id=%s), using mock: %s", district_id, e)
            mock_fallback_total.labels("wards", "upstream_error").inc()
            return vn_registry.list_wards(district_id)

    def list_services(self, from_district_id: int, to_district_id: int) -> List[ServiceOption]:
        if self.address_gateway is None:
            mock_fallback_total.labels("services", "unconfigured").inc()
            return mock_services()
        try:
            return self.address_gateway.list_services(from_district_id, to_district_id)
        except UpstreamError as e:
            logger.error("service list upstream failure, using mock: %s", e)
            mock_fallback_total.labels("services", "upstream_error").inc()
            return mock_services()


def build_shipping_fee_service(settings: "AppSettings") -> ShippingFeeService:
    """
    Wire gateways from settings. Address lookups always go to GHN (GHTK has
    no master-data API); the fee call goes to SHIPPING_PROVIDER.
    """
    from app.gateway.ghn import GhnGateway
    from app.gateway.ghtk import GhtkGateway

    ghn_cred = settings.ghn_credentials()
    ghn = GhnGateway(ghn_cred) if ghn_cred.configured else None

    fee_gateway: Optional["FeeGateway"]
    if settings.SHIPPING_PROVIDER == "ghtk":
        ghtk_cred = settings.ghtk_credentials()
        fee_gateway = GhtkGateway(ghtk_cred) if ghtk_cred.configured else None
    else:
        fee_gateway = ghn

    return ShippingFeeService(fee_gateway=fee_gateway, address_gateway=ghn)
