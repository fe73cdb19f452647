"""Template registry and the current-template session."""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING

from cv_studio.exceptions import NoTemplateSelectedError

if TYPE_CHECKING:
    from cv_studio.models.content import CVData
    from cv_studio.templates.base import CVTemplate

__all__ = ["TemplateRegistry", "TemplateSession"]

logger = logging.getLogger(__name__)


class TemplateSession:
    """Holds a pointer to the selected template of one registry.

    The registry owns one shared session for single-user callers; servers
    should create a session per request with :meth:`TemplateRegistry.session`.
    """

    __slots__ = ("_current", "_registry")

    def __init__(self, registry: TemplateRegistry) -> None:
        self._registry = registry
        self._current: CVTemplate | None = None

    @property
    def current(self) -> CVTemplate | None:
        return self._current

    def select(self, template_id: str) -> bool:
        """Point the session at *template_id*.

        Returns ``False`` and leaves the selection unchanged if the id is
        not registered.
        """
        template = self._registry.get(template_id)
        if template is None:
            logger.debug("Ignoring selection of unknown template %r", template_id)
            return False
        self._current = template
        return True

    def _require(self) -> CVTemplate:
        if self._current is None:
            raise NoTemplateSelectedError()
        return self._current

    def render(self, cv: CVData) -> str:
        return self._require().render(cv)

    def validate(self, cv: CVData) -> list[str]:
        return self._require().validate(cv)

    def get_css(self) -> str:
        return self._require().get_css()


class TemplateRegistry:
    """Catalogue of template definitions keyed by id.

    Iteration order is registration order; re-registering an id replaces
    the definition in place.
    """

    def __init__(self) -> None:
        self._templates: dict[str, CVTemplate] = {}
        self._session = TemplateSession(self)

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def register(self, template: CVTemplate) -> None:
        if template.id in self._templates:
            logger.debug("Replacing template %r", template.id)
        self._templates[template.id] = template

    def get(self, template_id: str) -> CVTemplate | None:
        return self._templates.get(template_id)

    def all(self) -> list[CVTemplate]:
        return list(self._templates.values())

    def ids(self) -> list[str]:
        return list(self._templates)

    def get_by_category(self, category: str) -> list[CVTemplate]:
        return [t for t in self._templates.values() if category in t.categories]

    def categories(self) -> dict[str, int]:
        """Return ``{category: template_count}``, most common first."""
        counts = Counter(tag for t in self._templates.values() for tag in t.categories)
        return dict(counts.most_common())

    def session(self) -> TemplateSession:
        """Return a new, independent session with nothing selected."""
        return TemplateSession(self)

    # ------------------------------------------------------------------
    # Shared-session conveniences
    # ------------------------------------------------------------------

    @property
    def current(self) -> CVTemplate | None:
        return self._session.current

    def select(self, template_id: str) -> bool:
        return self._session.select(template_id)

    def render(self, cv: CVData) -> str:
        return self._session.render(cv)

    def validate(self, cv: CVData) -> list[str]:
        return self._session.validate(cv)

    def get_css(self) -> str:
        return self._session.get_css()
