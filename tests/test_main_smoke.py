# tests/test_main_smoke.py
from fastapi.testclient import TestClient

from app.main import app


def test_openapi_endpoint_alive():
    """/openapi.json is served and lists the shipping routes."""
    client = TestClient(app)
    r = client.get("/openapi.json")
    assert r.status_code == 200
    paths = r.json()["paths"]
    for p in (
        "/api/shipping/provinces",
        "/api/shipping/districts/{province_id}",
        "/api/shipping/wards/{district_id}",
        "/api/shipping/calculate",
        "/api/shipping/health",
    ):
        assert p in paths


def test_healthz():
    client = TestClient(app)
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_metrics_exposed_after_a_request(client: TestClient):
    client.get("/api/shipping/health")
    r = client.get("/metrics")
    assert r.status_code == 200
    assert "http_requests_total" in r.text
    assert "shipfee_upstream_calls" in r.text


def test_metrics_unmatched_paths_share_one_label(client: TestClient):
    client.get("/no-such-page-7f3a")
    r = client.get("/metrics")
    assert 'path="<unmatched>"' in r.text
    assert "no-such-page-7f3a" not in r.text
