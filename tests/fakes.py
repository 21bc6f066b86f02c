"""Test doubles for the upstream provider and the local proxy."""

from __future__ import annotations

import asyncio
import re
from typing import Any, Optional

import httpx

from recipebox.client import ClientApp
from recipebox.db.kv_store import KeyValueStore, MemoryKeyValueStore
from recipebox.integrations.spoonacular import SpoonacularClient

CATALOG: list[dict[str, Any]] = [
    {"id": 101, "title": "Creamy Garlic Pasta", "image": "https://img.test/101.jpg", "cuisine": "italian"},
    {"id": 102, "title": "Chicken Curry", "image": "https://img.test/102.jpg", "cuisine": "indian"},
    {"id": 103, "title": "Pasta Primavera", "image": None, "cuisine": "italian"},
    {"id": 104, "title": "Lemon Chicken", "image": "https://img.test/104.jpg", "cuisine": "greek"},
    {"id": 105, "title": "Tomato Soup", "image": "https://img.test/105.jpg", "cuisine": "american"},
]

_INFORMATION_PATH = re.compile(r"/recipes/(\d+)/information")


def recipe_information(recipe_id: int, title: Optional[str] = None) -> dict[str, Any]:
    """Spoonacular-shaped recipe information payload."""

    return {
        "id": recipe_id,
        "title": title or f"Recipe {recipe_id}",
        "image": f"https://img.test/{recipe_id}.jpg",
        "servings": 4,
        "readyInMinutes": 25,
        "sourceUrl": f"https://example.test/recipes/{recipe_id}",
        "summary": "A <b>quick</b> weeknight dish.",
        "extendedIngredients": [
            {"original": "200 g spaghetti"},
            {"original": "2 cloves garlic"},
        ],
        "analyzedInstructions": [
            {
                "name": "",
                "steps": [
                    {"number": 1, "step": "Boil the pasta."},
                    {"number": 2, "step": "Toss with garlic."},
                ],
            }
        ],
    }


def _matches(entry: dict[str, Any], text: str, cuisine: Optional[str]) -> bool:
    if text and text.lower() not in entry["title"].lower():
        return False
    if cuisine and entry["cuisine"] != cuisine:
        return False
    return True


def _search_results(text: str, cuisine: Optional[str], number: int) -> list[dict[str, Any]]:
    return [
        {"id": entry["id"], "title": entry["title"], "image": entry["image"], "imageType": "jpg"}
        for entry in CATALOG
        if _matches(entry, text, cuisine)
    ][:number]


class FakeSpoonacular:
    """Upstream API double that records every request it receives."""

    def __init__(self, api_key: str = "test-key") -> None:
        self.api_key = api_key
        self.requests: list[httpx.Request] = []
        self.failure: Optional[tuple[int, str]] = None
        self.error: Optional[Exception] = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.failure is not None:
            status_code, text = self.failure
            return httpx.Response(status_code, text=text)

        params = request.url.params
        path = request.url.path
        if path == "/recipes/complexSearch":
            number = int(params.get("number", "10"))
            results = _search_results(params.get("query", ""), params.get("cuisine"), number)
            return httpx.Response(
                200,
                json={"results": results, "offset": 0, "number": number, "totalResults": len(results)},
            )
        match = _INFORMATION_PATH.fullmatch(path)
        if match is not None:
            return httpx.Response(200, json=recipe_information(int(match.group(1))))
        return httpx.Response(404, json={"status": "failure", "code": 404, "message": "Not found"})

    def client(self) -> SpoonacularClient:
        return SpoonacularClient(
            api_key=self.api_key,
            base_url="https://api.spoonacular.test",
            timeout=5.0,
            transport=httpx.MockTransport(self.handler),
        )

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


class FakeProxy:
    """Local proxy double used by the client controllers.

    ``gates`` holds per-query events: a search for that text waits until the
    event is set, which lets tests finish requests out of order.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.failing_ids: set[int] = set()
        self.search_status = 200
        self.gates: dict[str, asyncio.Event] = {}
        self.in_flight = 0
        self.max_in_flight = 0
        self.titles: dict[int, str] = {}
        self.minimal_ids: set[int] = set()
        self.summaries: dict[int, str] = {}

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        params = request.url.params
        if request.url.path == "/api/search":
            text = params.get("q", "")
            gate = self.gates.get(text)
            if gate is not None:
                await gate.wait()
            if self.search_status != 200:
                return httpx.Response(self.search_status, json={"error": "upstream down"})
            results = _search_results(text, params.get("cuisine"), int(params.get("number", "12")))
            return httpx.Response(200, json={"results": results})

        if request.url.path == "/api/recipe":
            recipe_id = int(params["id"])
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
            try:
                await asyncio.sleep(0)
                if recipe_id in self.failing_ids:
                    return httpx.Response(404, json={"error": f"Recipe {recipe_id} not found"})
                if recipe_id in self.minimal_ids:
                    payload = {"id": recipe_id, "title": f"Recipe {recipe_id}"}
                    if recipe_id in self.summaries:
                        payload["summary"] = self.summaries[recipe_id]
                    return httpx.Response(200, json=payload)
                return httpx.Response(
                    200, json=recipe_information(recipe_id, self.titles.get(recipe_id))
                )
            finally:
                self.in_flight -= 1

        if request.url.path == "/api/contact":
            return httpx.Response(200, json={"ok": True, "message": "Received (demo)"})
        return httpx.Response(404, json={"error": "Not Found"})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler), base_url="http://proxy.test")

    def calls(self, path: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.url.path == path]


def build_client_app(
    proxy: FakeProxy,
    page: str = "recipes",
    store: Optional[KeyValueStore] = None,
) -> ClientApp:
    """Client application for *page* wired to *proxy*."""

    return ClientApp.for_page(page, proxy.client(), store if store is not None else MemoryKeyValueStore())
