"""Integration tests for metrics exposure and request tracing."""

from __future__ import annotations


def test_metrics_endpoint_available(client):
    client.post("/api/contact", json={"name": "Ada", "email": "ada@example.com", "message": "Hi"})

    response = client.get("/metrics")

    assert response.status_code == 200
    body = response.content.decode()
    assert "recipebox_http_requests_total" in body
    assert 'recipebox_contact_submissions_total{result="accepted"}' in body


def test_upstream_calls_are_counted(proxied_client):
    proxied_client.get("/api/search", params={"q": "soup"})

    body = proxied_client.get("/metrics").content.decode()

    assert 'recipebox_upstream_requests_total{endpoint="search",status="200"}' in body


def test_request_id_echoed_when_provided(client):
    request_id = "test-request-123"
    response = client.get("/contact", headers={"X-Request-ID": request_id})
    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == request_id


def test_request_id_generated_when_missing(client):
    response = client.get("/api/placeholder/10/10")
    assert response.status_code == 200
    generated = response.headers.get("X-Request-ID")
    assert generated
    assert len(generated) >= 8
