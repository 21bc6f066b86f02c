"""Run the recipebox ASGI application with uvicorn."""

from __future__ import annotations

import asyncio
import os
from typing import Optional

import uvicorn

APP_IMPORT_PATH = "recipebox.server.app:app"


async def _serve_for(server: uvicorn.Server, duration: float) -> None:
    """Serve until *duration* seconds have passed (used for smoke runs)."""

    async def _stop_later() -> None:
        await asyncio.sleep(duration)
        server.should_exit = True

    asyncio.create_task(_stop_later())
    await server.serve()


def parse_duration(value: str | None) -> Optional[float]:
    if not value:
        return None
    try:
        parsed = float(value)
    except ValueError as exc:
        raise SystemExit(f"Invalid RECIPEBOX_SERVER_DURATION '{value}': {exc}") from exc
    if parsed <= 0:
        raise SystemExit("RECIPEBOX_SERVER_DURATION must be greater than 0 when provided.")
    return parsed


def serve(
    host: str = "127.0.0.1",
    port: int = 8000,
    *,
    reload: bool = False,
    duration: Optional[float] = None,
) -> None:
    """Start uvicorn; with *duration* the server exits on its own after that many seconds."""

    if reload and duration is not None:
        raise SystemExit("Reload mode cannot be combined with a serve duration.")

    if reload:
        uvicorn.run(APP_IMPORT_PATH, host=host, port=port, reload=True)
        return

    server = uvicorn.Server(uvicorn.Config(APP_IMPORT_PATH, host=host, port=port, reload=False))
    if duration is not None:
        asyncio.run(_serve_for(server, duration))
        return
    server.run()


def main() -> None:
    """Entry point configured entirely from ``RECIPEBOX_SERVER_*`` variables."""

    serve(
        host=os.environ.get("RECIPEBOX_SERVER_HOST", "127.0.0.1"),
        port=int(os.environ.get("RECIPEBOX_SERVER_PORT", "8000")),
        reload=os.environ.get("RELOAD") == "1",
        duration=parse_duration(os.environ.get("RECIPEBOX_SERVER_DURATION")),
    )


if __name__ == "__main__":
    main()
