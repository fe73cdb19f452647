"""Template registry for HTML CV rendering."""

from __future__ import annotations

from cv_studio.templates.base import CVTemplate
from cv_studio.templates.classic import ClassicTemplate
from cv_studio.templates.dublin_tech import DublinTechTemplate
from cv_studio.templates.harvard import HarvardTemplate
from cv_studio.templates.irish_finance import IrishFinanceTemplate
from cv_studio.templates.modern import ModernTemplate
from cv_studio.templates.registry import TemplateRegistry, TemplateSession

__all__ = [
    "BUILTIN_TEMPLATES",
    "CVTemplate",
    "TemplateRegistry",
    "TemplateSession",
    "create_default_registry",
    "get_template",
    "list_templates",
]

BUILTIN_TEMPLATES: tuple[type[CVTemplate], ...] = (
    DublinTechTemplate,
    IrishFinanceTemplate,
    ClassicTemplate,
    ModernTemplate,
    HarvardTemplate,
)


def create_default_registry() -> TemplateRegistry:
    """Return a new registry populated with the built-in templates."""
    registry = TemplateRegistry()
    for template_cls in BUILTIN_TEMPLATES:
        registry.register(template_cls())
    return registry


_DEFAULT_REGISTRY = create_default_registry()


def get_template(template_id: str) -> CVTemplate:
    """Return the built-in template registered under *template_id*.

    Raises:
        ValueError: If no template with that id exists.
    """
    template = _DEFAULT_REGISTRY.get(template_id)
    if template is None:
        available = ", ".join(sorted(_DEFAULT_REGISTRY.ids()))
        msg = f"Unknown template {template_id!r}. Available: {available}"
        raise ValueError(msg)
    return template


def list_templates() -> list[str]:
    """Return sorted ids of all built-in templates."""
    return sorted(_DEFAULT_REGISTRY.ids())
