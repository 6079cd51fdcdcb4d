"""
Template Binder - Fills the page template from generated copy and the request.

Pure string work: no I/O, and a missing anchor is simply a no-op replace.
Generated copy is substituted verbatim (it may carry <br>); request text is
escaped wherever it lands inside a computed block.
"""

import logging
import re
from html import escape
from typing import Dict, List

from ..core.models import GeneratedContent, ProductRequest
from .page_template import PageTemplate

logger = logging.getLogger("TemplateBinder")

IMAGE_ANCHOR = "<!-- 이미지가 여기에 삽입됩니다 -->"
PRODUCT_INFO_ANCHOR = "<!-- 제품 정보가 여기에 삽입됩니다 -->"
INGREDIENTS_ANCHOR = "<!-- 성분 정보가 여기에 삽입됩니다 -->"
CAUTION_NOTICE_ANCHOR = "<!-- 주의사항 알림이 여기에 삽입됩니다 -->"
WARNING_ANCHOR = '<div id="warningSection"></div>'

HIDDEN_ATTR = 'style="display: none;"'

VERIFICATION_CARD = "verificationCard"
HACCP_CARD = "haccpCard"
INGREDIENTS_SECTION = "ingredientsSection"


def _element_pattern(element_id: str, tag: str) -> "re.Pattern":
    return re.compile(
        rf'(<{tag}\b[^>]*\bid="{re.escape(element_id)}"[^>]*>)(.*?)(</{tag}>)',
        re.DOTALL,
    )


SHIPPING_TITLE_PATTERN = _element_pattern("shippingTitle", "h3")
SHIPPING_CONTENT_PATTERN = _element_pattern("shippingContent", "p")


PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")


def _strip_braces(value: str) -> str:
    return value.replace("{{", "").replace("}}", "")


def substitute_placeholders(html: str, generated: GeneratedContent, product_name: str) -> str:
    """
    Replace schema placeholders and {{productName}} in one pass.

    Only the template is scanned; substituted values never carry a
    placeholder into the output. Unknown keys are left as they are.
    """
    values = {key: _strip_braces(value or "") for key, value in generated.placeholders().items()}
    values["productName"] = _strip_braces(escape(product_name))
    return PLACEHOLDER_PATTERN.sub(lambda m: values.get(m.group(1), m.group(0)), html)


def override_shipping(html: str, request: ProductRequest) -> str:
    """User shipping title/content replace the generated inner text."""
    if request.shipping_title:
        title = escape(request.shipping_title)
        html = SHIPPING_TITLE_PATTERN.sub(lambda m: m.group(1) + title + m.group(3), html, count=1)
    if request.shipping_info:
        content = escape(request.shipping_info).replace("\n", "<br>")
        html = SHIPPING_CONTENT_PATTERN.sub(lambda m: m.group(1) + content + m.group(3), html, count=1)
    return html


def build_images_block(request: ProductRequest) -> str:
    alt = escape(request.product_name)
    return "\n".join(
        f'<img src="{escape(url)}" alt="{alt}" class="w-full rounded-lg shadow-lg mb-6">'
        for url in request.images
    )


def build_spec_cards(request: ProductRequest) -> str:
    """Spec cards for the product-info grid; "" when nothing is known."""
    specs = [
        ("구성", request.composition),
        ("소비기한", request.expiry),
        ("제품종류", request.product_type),
        ("보관방법", request.storage_type),
        ("배송정보", request.shipping_info),
    ]
    cards = [
        '<div class="bg-white rounded-lg p-4 shadow">'
        f'<span class="block font-bold text-gray-500 text-sm">{label}</span>'
        f'<span class="block mt-1">{escape(value)}</span>'
        "</div>"
        for label, value in specs
        if value
    ]
    return "\n".join(cards)


def build_ingredients_block(generated: GeneratedContent, request: ProductRequest) -> str:
    """
    Image, then table (or raw text), then nutrition, then allergy.

    Returns "" when there is no image, table or raw ingredient text.
    """
    if not (request.ingredients_image or generated.ingredient_table or request.ingredients):
        return ""

    parts: List[str] = []
    if request.ingredients_image:
        parts.append(
            f'<img src="{escape(request.ingredients_image)}" '
            f'alt="{escape(request.product_name)} 품목제조보고서" class="w-full rounded-lg mb-6">'
        )

    parts.append('<h4 class="font-bold mb-3 text-lg">🍜 원재료 및 성분</h4>')
    if generated.ingredient_table:
        parts.append(generated.ingredient_table)
    elif request.ingredients:
        parts.append(f'<p class="mb-4">{escape(request.ingredients)}</p>')

    if generated.nutrition_table:
        parts.append('<h4 class="font-bold mb-3 text-lg">📊 영양 정보</h4>')
        parts.append(generated.nutrition_table)

    if request.allergy_info:
        allergy = escape(request.allergy_info)
    else:
        allergy = generated.allergy_info
    if allergy:
        parts.append('<h4 class="font-bold mb-3 text-lg">⚠️ 알레르기 정보</h4>')
        parts.append(f'<p class="text-red-600">{allergy}</p>')

    return "\n".join(parts)


def build_caution_notice(caution: str) -> str:
    return (
        '<p class="mt-4 inline-block bg-red-600 text-white text-sm font-bold px-4 py-2 rounded-full">'
        f'<i class="fas fa-exclamation-triangle mr-2"></i>{escape(caution)}</p>'
    )


def build_warning_block(caution: str) -> str:
    return (
        '<div id="warningSection" class="mt-6 p-4 bg-red-50 border-2 border-red-400 rounded-lg">\n'
        '  <p class="text-red-700 font-bold">\n'
        f'    <i class="fas fa-exclamation-triangle mr-2"></i>{escape(caution)}\n'
        "  </p>\n"
        "</div>"
    )


def compute_visibility(request: ProductRequest, has_ingredients: bool) -> Dict[str, bool]:
    """Element id -> visible, decided once per request."""
    return {
        HACCP_CARD: request.haccp,
        VERIFICATION_CARD: not request.haccp,
        INGREDIENTS_SECTION: has_ingredients,
    }


def apply_visibility(html: str, visibility: Dict[str, bool]) -> str:
    """
    Render the visibility map in one pass.

    The hidden attribute is added or removed so the result does not depend
    on the template's default for that element.
    """
    if not visibility:
        return html

    ids = "|".join(re.escape(element_id) for element_id in visibility)
    pattern = re.compile(rf'id="({ids})"(\s+style="display:\s*none;?")?')

    def render(match: "re.Match") -> str:
        element_id = match.group(1)
        if visibility[element_id]:
            return f'id="{element_id}"'
        return f'id="{element_id}" {HIDDEN_ATTR}'

    return pattern.sub(render, html)


def bind(template: PageTemplate, generated: GeneratedContent, request: ProductRequest) -> str:
    """
    Produce the final page HTML.

    Args:
        template: Loaded page template (never modified)
        generated: Schema-complete generated copy
        request: The validated product request

    Returns:
        Bound HTML, or "" if the template is not loaded
    """
    if not template.is_loaded:
        logger.warning(f"Template not loaded (state={template.state.value}), returning empty page")
        return ""

    html = substitute_placeholders(template.html, generated, request.product_name)
    html = override_shipping(html, request)

    if request.images:
        html = html.replace(IMAGE_ANCHOR, build_images_block(request), 1)

    spec_cards = build_spec_cards(request)
    if spec_cards:
        html = html.replace(PRODUCT_INFO_ANCHOR, spec_cards, 1)

    ingredients_block = build_ingredients_block(generated, request)
    if ingredients_block:
        html = html.replace(INGREDIENTS_ANCHOR, ingredients_block, 1)

    if request.caution:
        html = html.replace(CAUTION_NOTICE_ANCHOR, build_caution_notice(request.caution), 1)
        html = html.replace(WARNING_ANCHOR, build_warning_block(request.caution), 1)
    else:
        html = html.replace(CAUTION_NOTICE_ANCHOR, "", 1)

    return apply_visibility(html, compute_visibility(request, bool(ingredients_block)))
