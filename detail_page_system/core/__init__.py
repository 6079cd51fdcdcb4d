"""
Core module: request/content data models and the error taxonomy.
"""

from detail_page_system.core.errors import (
    DetailPageError,
    MalformedResponse,
    ProviderError,
    ProviderUnavailable,
    TemplateLoadError,
)
from detail_page_system.core.models import (
    CONTENT_FIELDS,
    UNSPECIFIED,
    GeneratedContent,
    IngredientRow,
    PageResult,
    ProductRequest,
    SEOResult,
    split_brand_name,
)

__all__ = [
    # Models
    "CONTENT_FIELDS",
    "UNSPECIFIED",
    "GeneratedContent",
    "IngredientRow",
    "PageResult",
    "ProductRequest",
    "SEOResult",
    "split_brand_name",
    # Errors
    "DetailPageError",
    "MalformedResponse",
    "ProviderError",
    "ProviderUnavailable",
    "TemplateLoadError",
]
