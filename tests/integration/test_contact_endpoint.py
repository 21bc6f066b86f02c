"""Integration tests for the demo contact endpoint."""

from __future__ import annotations

import pytest
from fastapi import status

VALID = {"name": "Ada", "email": "ada@example.com", "message": "Hello there"}


def test_json_submission_is_acknowledged(client):
    response = client.post("/api/contact", json=VALID)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"ok": True, "message": "Received (demo)"}


def test_form_submission_is_acknowledged(client):
    response = client.post("/api/contact", data=VALID)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["ok"] is True


def test_malformed_json_is_rejected(client):
    response = client.post(
        "/api/contact",
        content=b'{"name": "Ada",',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "Invalid JSON body"}


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Ada", "email": "ada@example.com"},
        {"name": "   ", "email": "ada@example.com", "message": "Hi"},
        {"name": "Ada", "email": "ada@example.com", "message": 5},
        [],
    ],
)
def test_missing_fields_are_rejected(client, payload):
    response = client.post("/api/contact", json=payload)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "Missing fields"}


def test_empty_body_counts_as_missing_fields(client):
    response = client.post("/api/contact")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "Missing fields"}


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
def test_other_methods_are_not_allowed(client, method):
    response = client.request(method, "/api/contact")

    assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
    assert response.json() == {"error": "Method not allowed"}
