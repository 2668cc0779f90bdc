# app/gateway/base.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

import httpx

from app.core.config import ProviderCredentials
from app.obs.metrics import upstream_calls_total
from app.services.shipping_fee.types import AddressUnit, FeeBreakdown, FeeRequest, ServiceOption

from .errors import UpstreamProtocolError, UpstreamUnavailable

logger = logging.getLogger("shipfee.gateway")


class FeeGateway(Protocol):
    provider: str

    def calculate_fee(self, req: FeeRequest) -> FeeBreakdown: ...


class AddressGateway(Protocol):
    provider: str

    def list_provinces(self) -> List[AddressUnit]: ...

    def list_districts(self, province_id: int) -> List[AddressUnit]: ...

    def list_wards(self, district_id: int) -> List[AddressUnit]: ...

    def list_services(self, from_district_id: int, to_district_id: int) -> List[ServiceOption]: ...


class HttpGateway:
    """
    Shared outbound plumbing: one httpx.Client per call, JSON in / JSON out.

    `transport` is only injected by tests (httpx.MockTransport).
    """

    provider = "upstream"

    def __init__(
        self,
        credentials: ProviderCredentials,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.credentials = credentials
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json", "Token": self.credentials.token}

    def _request_json(
        self,
        op: str,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        url = f"{self.credentials.base_url}{path}"
        logger.info("%s %s %s (op=%s)", self.provider, method, url, op)

        try:
            with httpx.Client(
                timeout=self.credentials.timeout_s,
                headers=self._headers(),
                transport=self._transport,
            ) as client:
                resp = client.request(method, url, params=params, json=json)
        except httpx.HTTPError as e:
            upstream_calls_total.labels(self.provider, op, "unavailable").inc()
            raise UpstreamUnavailable(
                f"{type(e).__name__}: {e}", provider=self.provider, op=op
            ) from e

        # 5xx is an outage whatever the body says; 4xx envelopes carry business errors
        if resp.status_code >= 500:
            upstream_calls_total.labels(self.provider, op, "unavailable").inc()
            raise UpstreamUnavailable(
                f"http {resp.status_code}",
                provider=self.provider,
                op=op,
                status_code=resp.status_code,
            )

        try:
            body = resp.json()
        except ValueError as e:
            upstream_calls_total.labels(self.provider, op, "protocol_error").inc()
            raise UpstreamProtocolError(
                f"non-JSON response (http {resp.status_code})",
                provider=self.provider,
                op=op,
                status_code=resp.status_code,
            ) from e

        if not isinstance(body, dict):
            upstream_calls_total.labels(self.provider, op, "protocol_error").inc()
            raise UpstreamProtocolError(
                f"unexpected body type {type(body).__name__} (http {resp.status_code})",
                provider=self.provider,
                op=op,
                status_code=resp.status_code,
            )

        upstream_calls_total.labels(self.provider, op, "responded").inc()
        return body

    def _protocol_error(self, op: str, message: str) -> UpstreamProtocolError:
        upstream_calls_total.labels(self.provider, op, "bad_envelope").inc()
        return UpstreamProtocolError(message, provider=self.provider, op=op)
