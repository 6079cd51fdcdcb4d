"""
Ingredient Table Block - Turns a raw ingredient string into table rows.
Uses the LLM for row extraction and falls back to a deterministic parser.
"""

import html
import logging
import re
from typing import Any, Dict, List, Tuple

from pydantic import ValidationError

from ..core.errors import MalformedResponse, ProviderUnavailable
from ..core.models import UNSPECIFIED, IngredientRow
from .prompt_builder import build_ingredient_prompt
from .response_repair import repair_json_object

logger = logging.getLogger("IngredientTable")

PERCENT_PATTERN = re.compile(r"\d+(?:\.\d+)?\s*%")
PAREN_PATTERN = re.compile(r"\(([^()]*)\)")

PARSE_ERROR_NAME = "파싱 오류"


def _parse_error_row() -> IngredientRow:
    return IngredientRow(name=PARSE_ERROR_NAME, percentage="-", origin="-")


def split_ingredients(text: str) -> List[str]:
    """Split on commas that are not inside parentheses."""
    segments = []
    current = []
    depth = 0
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth = max(depth - 1, 0)
        if ch == "," and depth == 0:
            segments.append("".join(current))
            current = []
            continue
        current.append(ch)
    segments.append("".join(current))
    return [s.strip() for s in segments if s.strip()]


def parse_ingredient_segment(segment: str) -> IngredientRow:
    """
    Parse one "name N% (origin)" segment.

    Raises:
        ValueError: if nothing is left for the ingredient name
    """
    percent_match = PERCENT_PATTERN.search(segment)
    paren_match = PAREN_PATTERN.search(segment)

    percentage = percent_match.group(0).replace(" ", "") if percent_match else UNSPECIFIED
    origin = paren_match.group(1).strip() if paren_match else UNSPECIFIED

    name = PERCENT_PATTERN.sub("", segment, count=1)
    while PAREN_PATTERN.search(name):
        name = PAREN_PATTERN.sub("", name)
    name = re.sub(r"\s+", " ", name).strip(" ,")
    if not name:
        raise ValueError(f"No ingredient name in segment: {segment!r}")

    return IngredientRow(name=name, percentage=percentage, origin=origin)


def parse_ingredients_fallback(text: str) -> List[IngredientRow]:
    """
    Deterministic ingredient parser. Never raises.

    Args:
        text: Comma-separated ingredient string

    Returns:
        Parsed rows, or a single parse-error row when nothing was usable
    """
    rows = []
    for segment in split_ingredients(text or ""):
        try:
            rows.append(parse_ingredient_segment(segment))
        except ValueError:
            continue

    if not rows:
        logger.warning("Ingredient text yielded no rows")
        return [_parse_error_row()]
    return rows


def rows_from_response(raw: str) -> List[IngredientRow]:
    """Extract rows from a provider reply shaped like {"rows": [...]}."""
    data: Dict[str, Any] = repair_json_object(raw)
    items = data.get("rows")
    if not isinstance(items, list):
        return []

    rows = []
    for item in items:
        if not isinstance(item, dict):
            continue
        try:
            rows.append(IngredientRow.model_validate(item))
        except ValidationError:
            continue
    return rows


def synthesize_ingredient_table(text: str, provider_manager) -> Tuple[List[IngredientRow], str]:
    """
    Build ingredient rows, preferring the LLM.

    Args:
        text: Raw ingredient string
        provider_manager: LLMProviderManager used for the secondary call

    Returns:
        (rows, source) where source is "provider" or "rules"
    """
    try:
        response = provider_manager.generate(
            build_ingredient_prompt(text), temperature=0.0, max_tokens=1500
        )
        rows = rows_from_response(response.content)
        if rows:
            logger.info(f"LLM extracted {len(rows)} ingredient rows")
            return rows, "provider"
        logger.warning("LLM returned no ingredient rows, using parser")
    except (ProviderUnavailable, MalformedResponse) as e:
        logger.warning(f"LLM ingredient extraction failed: {e}, using parser")

    return parse_ingredients_fallback(text), "rules"


def render_ingredient_table(rows: List[IngredientRow]) -> str:
    """Render rows as an HTML table."""
    body = "\n".join(
        "      <tr>"
        f'<td class="border px-3 py-2">{html.escape(row.name)}</td>'
        f'<td class="border px-3 py-2 text-center">{html.escape(row.percentage)}</td>'
        f'<td class="border px-3 py-2">{html.escape(row.origin)}</td>'
        "</tr>"
        for row in rows
    )
    return (
        '<table class="w-full text-sm border-collapse mb-4">\n'
        '    <thead class="bg-gray-100">\n'
        '      <tr><th class="border px-3 py-2">원재료명</th>'
        '<th class="border px-3 py-2">함량</th>'
        '<th class="border px-3 py-2">원산지</th></tr>\n'
        "    </thead>\n"
        "    <tbody>\n"
        f"{body}\n"
        "    </tbody>\n"
        "</table>"
    )
