"""Templates package: page template store and binder."""

from .page_template import (
    PageTemplate,
    TemplateState,
    get_page_template,
    init_page_template,
    reset_page_template,
    set_page_template,
)
from .template_binder import apply_visibility, bind

__all__ = [
    "PageTemplate",
    "TemplateState",
    "get_page_template",
    "init_page_template",
    "reset_page_template",
    "set_page_template",
    "apply_visibility",
    "bind",
]
