"""ASGI application factory and dependencies for the recipebox server."""

from recipebox.server.app import app, create_app

__all__ = ["app", "create_app"]
