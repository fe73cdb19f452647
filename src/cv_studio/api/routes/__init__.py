"""Route handlers for the API."""

from cv_studio.api.routes import export, health, templates

__all__ = ["export", "health", "templates"]
