"""ASGI application for recipebox."""

from __future__ import annotations

import json
import logging
from time import perf_counter
from typing import Any, Optional
from uuid import uuid4

import httpx
from fastapi import Depends, FastAPI, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipebox import __version__, metrics
from recipebox.config import Settings, get_settings
from recipebox.integrations.spoonacular import (
    COMPLEX_SEARCH_PATH,
    MissingCredentialError,
    SpoonacularClient,
    UpstreamResponse,
)
from recipebox.logging_utils import configure_logging as configure_app_logging
from recipebox.models import ContactMessage
from recipebox.server import deps, ui

logger = logging.getLogger(__name__)

CONTACT_OK = {"ok": True, "message": "Received (demo)"}


class ProxyError(Exception):
    """An error returned to the caller as ``{"error": message}``."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _json_safe(value: Any) -> Any:
    """Convert non-serializable values into JSON-safe representations."""

    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, (list, tuple)):
        return [_json_safe(entry) for entry in value]
    if isinstance(value, dict):
        return {key: _json_safe(sub_value) for key, sub_value in value.items()}
    return repr(value)


def _configure_logging(settings: Settings) -> None:
    configure_app_logging(settings.log_level, settings.log_format, [settings.spoonacular_key or ""])


def _is_safe_path(path: str) -> bool:
    return ".." not in path and "://" not in path and not path.startswith("/")


def _relay(response: UpstreamResponse) -> Any:
    """Return the upstream JSON body or raise with the upstream status and text."""

    if not response.ok:
        raise ProxyError(response.status_code, response.text)
    try:
        return response.json()
    except ValueError as exc:
        raise ProxyError(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Invalid upstream response: {exc}") from exc


async def _forward(endpoint: str, call) -> Any:
    try:
        response = await call()
    except MissingCredentialError as exc:
        metrics.UPSTREAM_REQUESTS.labels(endpoint=endpoint, status="missing_key").inc()
        raise ProxyError(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc)) from exc
    except httpx.HTTPError as exc:
        metrics.UPSTREAM_REQUESTS.labels(endpoint=endpoint, status="error").inc()
        logger.warning("Upstream %s request failed: %s", endpoint, exc)
        raise ProxyError(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or exc.__class__.__name__) from exc

    metrics.UPSTREAM_REQUESTS.labels(endpoint=endpoint, status=str(response.status_code)).inc()
    if not response.ok:
        logger.warning("Upstream %s returned status=%s", endpoint, response.status_code)
    return _relay(response)


async def _contact_payload(request: Request) -> dict[str, Any]:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError as exc:
        raise ProxyError(status.HTTP_400_BAD_REQUEST, "Invalid JSON body") from exc
    return body if isinstance(body, dict) else {}


def create_app() -> FastAPI:
    """Create and configure a FastAPI application instance."""

    settings = get_settings()
    _configure_logging(settings)

    application = FastAPI(title="Recipebox", version=__version__)
    application.include_router(ui.router)
    logger.debug("Application created with log level %s", settings.log_level)

    if settings.log_requests:
        access_logger = logging.getLogger("recipebox.access")

        @application.middleware("http")
        async def log_request_response(request: Request, call_next):
            """Log request/response details without leaking sensitive data."""

            request_id = request.headers.get("X-Request-ID") or uuid4().hex
            request.state.request_id = request_id
            start = perf_counter()
            method = request.method
            path = request.url.path
            try:
                response: Response = await call_next(request)
            except Exception:
                duration_ms = (perf_counter() - start) * 1000
                access_logger.exception(
                    "HTTP %s %s status=500 duration_ms=%.2f",
                    method,
                    path,
                    duration_ms,
                    extra={"request_id": request_id},
                )
                metrics.REQUEST_COUNT.labels(method=method, path=path, status="500").inc()
                metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000.0)
                raise

            duration_ms = (perf_counter() - start) * 1000
            response.headers.setdefault("X-Request-ID", request_id)
            access_logger.info(
                "HTTP %s %s status=%s duration_ms=%.2f",
                method,
                path,
                response.status_code,
                duration_ms,
                extra={"request_id": request_id},
            )
            metrics.REQUEST_COUNT.labels(method=method, path=path, status=str(response.status_code)).inc()
            metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000.0)
            return response

    @application.exception_handler(ProxyError)
    async def proxy_error_handler(request: Request, exc: ProxyError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @application.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": _json_safe(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        log_kwargs: dict[str, Any] = {}
        request_id = getattr(request.state, "request_id", None)
        if request_id:
            log_kwargs["extra"] = {"request_id": request_id}
        logger.warning(
            "Validation error on %s %s: %s",
            request.method,
            request.url.path,
            exc.errors(),
            **log_kwargs,
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request", "detail": _json_safe(exc.errors())},
        )

    @application.get("/api/search", summary="Proxy a recipe search to the upstream provider")
    async def search_proxy(
        request: Request,
        client: SpoonacularClient = Depends(deps.get_upstream_client),
    ) -> Any:
        if not client.has_credentials:
            raise MissingCredentialError()

        path: Optional[str] = None
        params: list[tuple[str, str]] = []
        for key, value in request.query_params.multi_items():
            if key == "path":
                path = value
            elif key.lower() == "apikey":
                continue
            else:
                params.append((key, value))

        if path and not _is_safe_path(path):
            raise ProxyError(status.HTTP_400_BAD_REQUEST, "Invalid path")

        target = path or COMPLEX_SEARCH_PATH
        if target == COMPLEX_SEARCH_PATH:
            params = [("query" if key == "q" else key, value) for key, value in params]

        logger.debug("Proxying search path=%s params=%s", target, params)
        return await _forward("search", lambda: client.get(target, params))

    @application.get("/api/recipe", summary="Proxy one recipe's information")
    async def recipe_proxy(
        recipe_id: Optional[str] = Query(default=None, alias="id"),
        client: SpoonacularClient = Depends(deps.get_upstream_client),
    ) -> Any:
        if not client.has_credentials:
            raise MissingCredentialError()
        if not recipe_id or not recipe_id.strip():
            raise ProxyError(status.HTTP_400_BAD_REQUEST, "Missing recipe id")
        return await _forward("recipe", lambda: client.recipe_information(recipe_id.strip()))

    @application.exception_handler(MissingCredentialError)
    async def missing_credential_handler(request: Request, exc: MissingCredentialError):
        logger.error("Upstream credential is not configured")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(exc)}
        )

    @application.post("/api/contact", summary="Accept a contact form submission (demo)")
    async def contact_submit(request: Request) -> dict[str, Any]:
        try:
            payload = await _contact_payload(request)
        except ProxyError:
            metrics.CONTACT_SUBMISSIONS.labels(result="invalid_json").inc()
            raise

        try:
            message = ContactMessage.model_validate(
                {field: payload.get(field) for field in ("name", "email", "message")}
            )
        except ValidationError as exc:
            metrics.CONTACT_SUBMISSIONS.labels(result="missing_fields").inc()
            raise ProxyError(status.HTTP_400_BAD_REQUEST, "Missing fields") from exc

        metrics.CONTACT_SUBMISSIONS.labels(result="accepted").inc()
        logger.info("Contact form submission name=%s email=%s", message.name, message.email)
        return CONTACT_OK

    @application.api_route(
        "/api/contact",
        methods=["GET", "PUT", "PATCH", "DELETE"],
        include_in_schema=False,
    )
    async def contact_method_not_allowed() -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            content={"error": "Method not allowed"},
            headers={"Allow": "POST"},
        )

    @application.get("/metrics", include_in_schema=False)
    def metrics_endpoint() -> Response:
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return application


app = create_app()

__all__ = ["ProxyError", "app", "create_app"]
