"""
Page Generation System - High-level facade over the detail page pipeline.

request -> prompt -> provider (with fallback) -> repaired copy
        -> ingredient table -> bound HTML + SEO metadata
"""

import logging
from typing import Any, Dict, Optional, Union

from detail_page_system.core.errors import MalformedResponse, ProviderUnavailable
from detail_page_system.core.models import PageResult, ProductRequest
from detail_page_system.infrastructure.llm_provider import LLMProviderManager, get_llm_provider
from detail_page_system.infrastructure.logger import system_logger
from detail_page_system.logic_blocks.bulk_parser import parse_bulk_text
from detail_page_system.logic_blocks.ingredient_table import (
    render_ingredient_table,
    synthesize_ingredient_table,
)
from detail_page_system.logic_blocks.prompt_builder import (
    BRAND,
    PARSE_FIELDS,
    build_generation_prompt,
    build_parse_prompt,
)
from detail_page_system.logic_blocks.response_repair import (
    content_from_response,
    repair_json_object,
)
from detail_page_system.logic_blocks.seo_keywords import synthesize_seo
from detail_page_system.templates.page_template import PageTemplate, get_page_template
from detail_page_system.templates.template_binder import bind

logger = logging.getLogger("PagePipeline")

SYSTEM_PROMPT = f'You write Korean e-commerce detail page copy for "{BRAND}". Reply with JSON only.'

PARSE_KEYS = set(PARSE_FIELDS) | {"haccp"}
NO_PRODUCT_NAME = "No product name found in text"


class PageGenerationSystem:
    """
    Generates product detail pages.

    Provider manager and template default to the process-wide singletons;
    tests inject their own.
    """

    def __init__(
        self,
        provider_manager: Optional[LLMProviderManager] = None,
        template: Optional[PageTemplate] = None,
    ):
        self._provider_manager = provider_manager
        self._template = template

    @property
    def provider_manager(self) -> LLMProviderManager:
        return self._provider_manager or get_llm_provider()

    @property
    def template(self) -> PageTemplate:
        return self._template or get_page_template()

    def generate(self, request: Union[ProductRequest, Dict[str, Any]]) -> PageResult:
        """
        Generate a detail page.

        Args:
            request: ProductRequest or its camelCase dict form

        Returns:
            PageResult with bound HTML and SEO metadata

        Raises:
            pydantic.ValidationError: if the request dict is invalid
            ProviderUnavailable: if no provider produced a reply
        """
        if not isinstance(request, ProductRequest):
            request = ProductRequest.model_validate(request)

        logger.info(f"Generating page for {request.product_name}")

        response = self.provider_manager.generate(
            build_generation_prompt(request), system=SYSTEM_PROMPT
        )
        generated, used_fallback = content_from_response(response.content, request)
        if used_fallback:
            system_logger.fallback_used("content", f"unusable reply from {response.provider}")

        ingredient_source = "none"
        if request.ingredients and not generated.ingredient_table:
            rows, ingredient_source = synthesize_ingredient_table(
                request.ingredients, self.provider_manager
            )
            if ingredient_source == "rules":
                system_logger.fallback_used("ingredients", "rule-based ingredient parser")
            generated = generated.model_copy(
                update={"ingredient_table": render_ingredient_table(rows)}
            )

        html = bind(self.template, generated, request)
        seo = synthesize_seo(request.product_name, request.category)

        system_logger.page_generated(request.product_name, response.provider, seo.keyword_count)

        return PageResult(
            html=html,
            seo=seo,
            provider=response.provider,
            used_fallback=used_fallback,
            ingredient_source=ingredient_source,
        )

    def parse(self, text: str) -> Dict[str, Any]:
        """
        Extract request fields from a free-form product description.

        Returns:
            {"data": {...}, "source": "provider" | "rules"}

        Raises:
            MalformedResponse: if the provider reply cannot be repaired, or
                the chosen source yields no product name
        """
        try:
            response = self.provider_manager.generate(build_parse_prompt(text), temperature=0.0)
        except ProviderUnavailable as e:
            logger.warning(f"No provider for parse, using rule parser: {e}")
            system_logger.fallback_used("parse", "no provider available")
            data = parse_bulk_text(text)
            if not data.get("productName"):
                raise MalformedResponse(NO_PRODUCT_NAME, raw=text) from e
            return {"data": data, "source": "rules"}

        raw = repair_json_object(response.content)
        data = {key: value for key, value in raw.items() if key in PARSE_KEYS and value not in (None, "")}
        if not data.get("productName"):
            raise MalformedResponse(NO_PRODUCT_NAME, raw=response.content)
        return {"data": data, "source": "provider"}


# Singleton
_page_system: Optional[PageGenerationSystem] = None


def get_page_system() -> PageGenerationSystem:
    """Get or create the page generation system."""
    global _page_system
    if _page_system is None:
        _page_system = PageGenerationSystem()
    return _page_system


def set_page_system(system: Optional[PageGenerationSystem]) -> None:
    """Set custom page system (for testing)."""
    global _page_system
    _page_system = system
