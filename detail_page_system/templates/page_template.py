"""
Page Template - Process-wide HTML template with an explicit load lifecycle.

The template is read once at startup and shared read-only by every request.
Binding works on its own string; the cached copy is never modified.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from ..config import Config
from ..core.errors import TemplateLoadError
from ..infrastructure.logger import system_logger

logger = logging.getLogger("PageTemplate")


class TemplateState(str, Enum):
    """Load state of the page template."""

    UNLOADED = "UNLOADED"  # init not called yet
    LOADED = "LOADED"
    FAILED = "FAILED"  # asset missing or unreadable


class PageTemplate:
    """Read-only page template plus its load state."""

    def __init__(
        self,
        html: str = "",
        source: str = "<memory>",
        state: Optional[TemplateState] = None,
    ):
        self._html = html
        self._source = source
        if state is None:
            state = TemplateState.LOADED if html else TemplateState.UNLOADED
        self._state = state

    @property
    def html(self) -> str:
        return self._html

    @property
    def source(self) -> str:
        return self._source

    @property
    def state(self) -> TemplateState:
        return self._state

    @property
    def is_loaded(self) -> bool:
        return self._state == TemplateState.LOADED

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "PageTemplate":
        """
        Read a template file.

        Raises:
            TemplateLoadError: if the file is missing, unreadable or empty
        """
        path = Path(path)
        try:
            html = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateLoadError(f"Failed to load template {path}: {e}") from e
        if not html.strip():
            raise TemplateLoadError(f"Template {path} is empty")
        return cls(html=html, source=str(path), state=TemplateState.LOADED)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "PageTemplate":
        """Like from_file, but a failure yields a FAILED template instead of raising."""
        try:
            template = cls.from_file(path)
        except TemplateLoadError as e:
            logger.error(str(e))
            system_logger.template_loaded(str(path), loaded=False)
            return cls(source=str(path), state=TemplateState.FAILED)

        system_logger.template_loaded(str(path), loaded=True, size=len(template.html))
        return template


# Singleton
_template: Optional[PageTemplate] = None


def init_page_template(path: Optional[Union[str, Path]] = None) -> PageTemplate:
    """Load the shared template once; later calls return the same instance."""
    global _template
    if _template is None or _template.state == TemplateState.UNLOADED:
        _template = PageTemplate.load(path or Config.TEMPLATE_PATH)
    return _template


def get_page_template() -> PageTemplate:
    """Shared template, or an UNLOADED sentinel if init was never called."""
    return _template if _template is not None else PageTemplate()


def set_page_template(template: PageTemplate) -> None:
    """Set custom template (for testing)."""
    global _template
    _template = template


def reset_page_template() -> None:
    """Reset template (for testing)."""
    global _template
    _template = None
