"""Integration tests for the Spoonacular proxy endpoints."""

from __future__ import annotations

import httpx
import pytest
from fastapi import status


def test_search_forwards_to_complex_search_with_key(proxied_client, upstream):
    response = proxied_client.get("/api/search", params={"q": "pasta", "number": 2, "cuisine": "italian"})

    assert response.status_code == status.HTTP_200_OK
    assert [item["id"] for item in response.json()["results"]] == [101, 103]

    forwarded = upstream.last_request
    assert forwarded.url.path == "/recipes/complexSearch"
    assert forwarded.url.params.multi_items() == [
        ("apiKey", "test-key"),
        ("query", "pasta"),
        ("number", "2"),
        ("cuisine", "italian"),
    ]


def test_search_ignores_caller_supplied_api_key(proxied_client, upstream):
    response = proxied_client.get(
        "/api/search", params=[("q", "soup"), ("apiKey", "stolen"), ("APIKEY", "other")]
    )

    assert response.status_code == status.HTTP_200_OK
    forwarded = upstream.last_request.url.params
    assert forwarded.get_list("apiKey") == ["test-key"]
    assert "APIKEY" not in forwarded
    assert forwarded["query"] == "soup"


def test_search_path_parameter_selects_upstream_endpoint(proxied_client, upstream):
    response = proxied_client.get(
        "/api/search", params={"path": "recipes/101/information", "includeNutrition": "false"}
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["id"] == 101
    forwarded = upstream.last_request
    assert forwarded.url.path == "/recipes/101/information"
    assert "path" not in forwarded.url.params
    assert forwarded.url.params["includeNutrition"] == "false"


@pytest.mark.parametrize("path", ["../admin", "recipes/../../etc", "https://evil.test/x", "/recipes"])
def test_search_rejects_unsafe_paths(proxied_client, upstream, path):
    response = proxied_client.get("/api/search", params={"path": path})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "Invalid path"}
    assert upstream.requests == []


def test_upstream_error_status_and_body_are_mirrored(proxied_client, upstream):
    upstream.failure = (402, "Your daily points limit of 150 has been reached.")

    response = proxied_client.get("/api/search", params={"q": "soup"})

    assert response.status_code == 402
    assert response.json() == {"error": "Your daily points limit of 150 has been reached."}


def test_upstream_transport_failure_is_a_500(proxied_client, upstream):
    upstream.error = httpx.ConnectError("connection refused")

    response = proxied_client.get("/api/recipe", params={"id": 101})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "connection refused"}


def test_missing_key_is_reported_before_anything_else(client):
    search = client.get("/api/search", params={"q": "pasta"})
    recipe = client.get("/api/recipe")

    for response in (search, recipe):
        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"error": "Missing SPOONACULAR_KEY"}


def test_recipe_information_proxy(proxied_client, upstream):
    response = proxied_client.get("/api/recipe", params={"id": "101"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["title"] == "Recipe 101"
    forwarded = upstream.last_request
    assert forwarded.url.path == "/recipes/101/information"
    assert forwarded.url.params["includeNutrition"] == "false"
    assert forwarded.url.params["apiKey"] == "test-key"


def test_recipe_requires_id(proxied_client, upstream):
    response = proxied_client.get("/api/recipe")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "Missing recipe id"}
    assert upstream.requests == []


def test_recipe_not_found_upstream_is_mirrored(proxied_client):
    response = proxied_client.get("/api/recipe", params={"id": "abc"})

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert "Not found" in response.json()["error"]


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nope")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Not Found"}
