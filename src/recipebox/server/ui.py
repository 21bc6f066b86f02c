"""HTML pages for the recipebox site, pre-rendered by the client subsystem."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Optional

import httpx
from fastapi import APIRouter, Depends, Path, Query, Request
from fastapi.responses import HTMLResponse, Response

from recipebox.client import ClientApp
from recipebox.config import Settings, get_settings
from recipebox.filter_options import (
    CUISINE_LOOKUP,
    DIET_LOOKUP,
    INTOLERANCE_LOOKUP,
    MEAL_TYPE_LOOKUP,
    normalize_choice,
)
from recipebox.models import SearchFilters, SearchQueryDescriptor
from recipebox.server import deps

logger = logging.getLogger(__name__)

INTERNAL_BASE_URL = "http://recipebox.internal"
MAX_PLACEHOLDER_SIDE = 2000

PLACEHOLDER_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
    'viewBox="0 0 {width} {height}">'
    '<rect width="100%" height="100%" fill="#e5e7eb"/>'
    '<text x="50%" y="50%" fill="#6b7280" font-family="sans-serif" font-size="{font_size}" '
    'text-anchor="middle" dominant-baseline="middle">{width}×{height}</text>'
    "</svg>"
)

router = APIRouter(include_in_schema=False)


@asynccontextmanager
async def _page_client(
    request: Request, transport_factory: Callable[[object], httpx.AsyncBaseTransport]
) -> AsyncIterator[httpx.AsyncClient]:
    """Client that sends the page's proxy calls back into this application."""

    headers = {}
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        headers["X-Request-ID"] = request_id
    async with httpx.AsyncClient(
        transport=transport_factory(request.app), base_url=INTERNAL_BASE_URL, headers=headers
    ) as client:
        yield client


async def _render(
    page: str,
    request: Request,
    settings: Settings,
    store_factory: deps.PageStoreFactory,
    transport_factory: Callable[[object], httpx.AsyncBaseTransport],
    descriptor: Optional[SearchQueryDescriptor] = None,
    view: Optional[int] = None,
) -> str:
    async with _page_client(request, transport_factory) as client:
        page_app = ClientApp.for_page(page, client, store_factory(), settings)
        await page_app.start(descriptor)
        if view is not None:
            await page_app.modal.open(view)
    return page_app.document.html()


@router.get("/", response_class=HTMLResponse)
async def home_page(
    request: Request,
    settings: Settings = Depends(get_settings),
    store_factory: deps.PageStoreFactory = Depends(deps.get_page_store_factory),
    transport_factory=Depends(deps.get_page_transport_factory),
) -> str:
    """Landing page with a featured recipe list."""

    return await _render("index", request, settings, store_factory, transport_factory)


@router.get("/recipes", response_class=HTMLResponse)
async def recipes_page(
    request: Request,
    q: str = Query(default=""),
    number: Optional[str] = Query(default=None),
    cuisine: Optional[str] = Query(default=None),
    diet: Optional[str] = Query(default=None),
    intolerances: Optional[str] = Query(default=None),
    meal_type: Optional[str] = Query(default=None, alias="type"),
    view: Optional[int] = Query(default=None),
    settings: Settings = Depends(get_settings),
    store_factory: deps.PageStoreFactory = Depends(deps.get_page_store_factory),
    transport_factory=Depends(deps.get_page_transport_factory),
) -> str:
    """Search page with the results for the query string already rendered."""

    descriptor = SearchQueryDescriptor(
        text=q.strip(),
        page_size=number or settings.default_page_size,
        filters=SearchFilters(
            cuisine=normalize_choice(cuisine, CUISINE_LOOKUP),
            diet=normalize_choice(diet, DIET_LOOKUP),
            intolerances=normalize_choice(intolerances, INTOLERANCE_LOOKUP),
            meal_type=normalize_choice(meal_type, MEAL_TYPE_LOOKUP),
        ),
    )
    logger.debug("Rendering recipes page key=%s view=%s", descriptor.cache_key(), view)
    return await _render(
        "recipes", request, settings, store_factory, transport_factory, descriptor, view
    )


@router.get("/contact", response_class=HTMLResponse)
async def contact_page(
    request: Request,
    settings: Settings = Depends(get_settings),
    store_factory: deps.PageStoreFactory = Depends(deps.get_page_store_factory),
    transport_factory=Depends(deps.get_page_transport_factory),
) -> str:
    return await _render("contact", request, settings, store_factory, transport_factory)


@router.get("/api/placeholder/{width}/{height}")
def placeholder_image(
    width: int = Path(..., ge=1, le=MAX_PLACEHOLDER_SIDE),
    height: int = Path(..., ge=1, le=MAX_PLACEHOLDER_SIDE),
) -> Response:
    """Grey SVG box used when a recipe has no image."""

    font_size = max(10, min(width, height) // 8)
    svg = PLACEHOLDER_SVG.format(width=width, height=height, font_size=font_size)
    return Response(
        svg,
        media_type="image/svg+xml",
        headers={"Cache-Control": "public, max-age=86400"},
    )


__all__ = ["router"]
