"""
tests/test_health.py -- Integration tests for GET /api/v1/health.

Covers:
  - 200 response with status, version, and configured fields
  - No request body or headers required
"""

from __future__ import annotations


def test_health_returns_200(api_client):
    resp = api_client.get("/api/v1/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert "version" in data


def test_health_reports_configured_adapter(api_client):
    data = api_client.get("/api/v1/health").json()
    assert data["configured"] is True


def test_health_no_headers_required(api_client):
    resp = api_client.get("/api/v1/health", headers={})
    assert resp.status_code == 200
