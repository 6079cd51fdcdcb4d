"""Logic blocks package - Reusable content transformation functions."""
from .bulk_parser import parse_bulk_text
from .fallback_content import build_fallback_content
from .ingredient_table import (
    parse_ingredients_fallback,
    render_ingredient_table,
    synthesize_ingredient_table,
)
from .prompt_builder import (
    build_generation_prompt,
    build_ingredient_prompt,
    build_parse_prompt,
    detect_mode,
)
from .response_repair import content_from_response, repair_json_object
from .seo_keywords import generate_keywords, synthesize_seo

__all__ = [
    "parse_bulk_text",
    "build_fallback_content",
    "parse_ingredients_fallback",
    "render_ingredient_table",
    "synthesize_ingredient_table",
    "build_generation_prompt",
    "build_ingredient_prompt",
    "build_parse_prompt",
    "detect_mode",
    "content_from_response",
    "repair_json_object",
    "generate_keywords",
    "synthesize_seo",
]
