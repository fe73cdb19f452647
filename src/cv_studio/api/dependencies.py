"""Shared dependencies for API routes."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from cv_studio.config import ExportSettings
from cv_studio.export.capture import DeviceClass, detect_device_class
from cv_studio.export.orchestrator import ExportOrchestrator
from cv_studio.export.preview import PreviewSurface
from cv_studio.templates import create_default_registry
from cv_studio.templates.registry import TemplateRegistry, TemplateSession


@lru_cache(maxsize=1)
def get_registry() -> TemplateRegistry:
    """Return the process-wide template registry."""
    return create_default_registry()


@lru_cache(maxsize=1)
def get_settings() -> ExportSettings:
    return ExportSettings.from_env()


def get_template_session(
    registry: Annotated[TemplateRegistry, Depends(get_registry)],
) -> TemplateSession:
    """Return a fresh template session for the current request.

    Sessions are never shared between requests, so concurrent previews
    cannot change each other's selected template.
    """
    return registry.session()


def get_preview_surface(
    settings: Annotated[ExportSettings, Depends(get_settings)],
) -> PreviewSurface:
    return PreviewSurface(settings.preview_dir)


def get_orchestrator(
    settings: Annotated[ExportSettings, Depends(get_settings)],
    registry: Annotated[TemplateRegistry, Depends(get_registry)],
    preview: Annotated[PreviewSurface, Depends(get_preview_surface)],
) -> ExportOrchestrator:
    return ExportOrchestrator(settings, templates=registry, preview=preview)


def get_device_class(
    user_agent: Annotated[str | None, Header(description="Client user agent")] = None,
) -> DeviceClass:
    """Classify the calling device from its ``User-Agent`` header."""
    return detect_device_class(user_agent)


def select_template(session: TemplateSession, template_id: str) -> TemplateSession:
    """Select *template_id* on *session* or raise 404.

    Raises:
        HTTPException: If no template with that id is registered (404).
    """
    if not session.select(template_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Template '{template_id}' not found",
        )
    return session
