# app/obs/metrics.py
import time

from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware

http_requests_total = Counter("http_requests_total", "HTTP requests", ["method", "path", "code"])
http_request_duration = Histogram(
    "http_request_duration_seconds", "HTTP request duration seconds", ["method", "path"]
)

# outcome: responded | unavailable | protocol_error | bad_envelope
upstream_calls_total = Counter(
    "shipfee_upstream_calls_total", "Calls to the shipping provider", ["provider", "op", "outcome"]
)

# reason: unconfigured | upstream_error
mock_fallback_total = Counter(
    "shipfee_mock_fallback_total", "Answers served from mock data", ["op", "reason"]
)

UNMATCHED_PATH = "<unmatched>"


class PrometheusMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        # route template keeps label cardinality bounded (/districts/{province_id});
        # unmatched paths (404s, scanners) share one label
        route = request.scope.get("route")
        path = getattr(route, "path", None) or UNMATCHED_PATH
        http_requests_total.labels(request.method, path, str(response.status_code)).inc()
        http_request_duration.labels(request.method, path).observe(elapsed)
        return response
