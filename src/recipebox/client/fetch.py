"""HTTP adapter between the client controllers and the local proxy endpoints."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from recipebox.models import RecipeDetail, RecipeSummary, parse_summaries

logger = logging.getLogger(__name__)

SEARCH_PATH = "/api/search"
RECIPE_PATH = "/api/recipe"


class RecipeFetchError(RuntimeError):
    """Raised when a recipe detail cannot be loaded from the proxy."""

    def __init__(self, recipe_id: int, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.recipe_id = recipe_id
        self.status_code = status_code


class FetchAdapter:
    """Issue proxy requests and turn responses into recipe models.

    Listing calls degrade to an empty result on any network, status or parse
    failure; detail calls raise :class:`RecipeFetchError` so the caller can offer
    a retry.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        search_path: str = SEARCH_PATH,
        recipe_path: str = RECIPE_PATH,
    ) -> None:
        self._client = client
        self._search_path = search_path
        self._recipe_path = recipe_path

    async def _get_json(self, url: str, params: Optional[dict[str, Any]] = None) -> Any:
        response = await self._client.get(url, params=params)
        response.raise_for_status()
        return response.json()

    async def fetch_list(self, path_and_query: str) -> list[RecipeSummary]:
        """Fetch ``/api/search?<path_and_query>``; never raises."""

        url = f"{self._search_path}?{path_and_query.lstrip('?')}"
        try:
            payload = await self._get_json(url)
            return parse_summaries(payload)
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Error fetching from API: status=%s url=%s", exc.response.status_code, url
            )
        except httpx.HTTPError as exc:
            logger.warning("Error fetching from API: %s url=%s", exc, url)
        except ValueError as exc:
            logger.warning("Unreadable search response: %s url=%s", exc, url)
        return []

    async def fetch_detail(self, recipe_id: int) -> RecipeDetail:
        """Fetch one recipe's full information or raise :class:`RecipeFetchError`."""

        try:
            payload = await self._get_json(self._recipe_path, params={"id": recipe_id})
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.warning("Recipe %s request failed status=%s", recipe_id, status_code)
            raise RecipeFetchError(
                recipe_id, _error_message(exc.response), status_code=status_code
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("Recipe %s request failed: %s", recipe_id, exc)
            raise RecipeFetchError(recipe_id, str(exc) or "Network error") from exc
        except ValueError as exc:
            raise RecipeFetchError(recipe_id, "Invalid response from server") from exc

        try:
            return RecipeDetail.from_upstream(payload)
        except ValueError as exc:
            logger.warning("Recipe %s payload rejected: %s", recipe_id, exc)
            raise RecipeFetchError(recipe_id, "Invalid recipe data") from exc


def _error_message(response: httpx.Response) -> str:
    """Prefer the proxy's ``{"error": ...}`` text over a bare status line."""

    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
        return body["error"]
    return f"Request failed with status {response.status_code}"


__all__ = ["FetchAdapter", "RecipeFetchError", "SEARCH_PATH", "RECIPE_PATH"]
