"""
SEO Keyword Block - Rule-based keyword and metadata synthesis.

Keyword volume must be reproducible, so nothing here calls a provider.
"""

import re
from datetime import datetime
from typing import Iterable, List, Optional

from ..core.models import SEOResult, split_brand_name

MAX_KEYWORDS = 50
SUMMARY_LENGTH = 20
BRIEF_LENGTH = 40
ELLIPSIS = "…"

BRAND_HOUSE = "만원요리 최씨남매"

# Brand-house keywords; clean-name combinations are added in between
HOUSE_KEYWORDS = (
    "만원요리추천", "최씨남매추천", "만원요리배송",
    "최씨남매쇼핑", "만원요리할인", "최씨남매이벤트",
    "만원요리신제품", "최씨남매베스트", "만원요리세일",
    "최씨남매특가",
)

NAME_INTENTS = (
    "추천", "구매", "배송", "할인", "가격", "리뷰",
    "후기", "베스트", "인기", "판매", "쇼핑", "온라인",
)

CATEGORY_INTENTS = (
    "추천", "베스트", "쇼핑", "배송", "할인",
    "인기", "맛집", "판매", "구매",
)

BRAND_INTENTS = ("제품", "추천", "맛집", "베스트", "할인", "구매", "특가", "공식몰")

GENERIC_KEYWORDS = (
    "냉동식품", "간편식", "밀키트", "집밥", "혼밥",
    "배달음식", "온라인장보기", "식료품쇼핑", "푸드마켓", "먹거리쇼핑",
)

UNIT_PATTERN = re.compile(r"\d+(?:\.\d+)?\s*(?:kg|g|ml|l)", re.IGNORECASE)


def truncate(text: str, length: int) -> str:
    """Cut text to ``length`` characters, marking the cut with an ellipsis."""
    if len(text) <= length:
        return text
    return text[:length] + ELLIPSIS


def dedupe_keywords(keywords: Iterable[str], limit: int = MAX_KEYWORDS) -> List[str]:
    """Drop empties and duplicates keeping first-seen order, then cap."""
    seen = set()
    unique = []
    for keyword in keywords:
        if not keyword or keyword in seen:
            continue
        seen.add(keyword)
        unique.append(keyword)
    return unique[:limit]


def generate_name_variations(name: str) -> List[str]:
    """Clean name, unit-stripped, space-stripped, and intent combinations."""
    if not name:
        return []
    without_units = re.sub(r"\s+", " ", UNIT_PATTERN.sub("", name)).strip()
    variations = [name, without_units, re.sub(r"\s", "", name)]
    variations.extend(f"{name}{suffix}" for suffix in NAME_INTENTS)
    return variations


def generate_keywords(product_name: str, category: str = "") -> List[str]:
    """
    Generate the ordered, deduplicated keyword list.

    Args:
        product_name: Full product name, optionally with a "[brand]" prefix
        category: Product category

    Returns:
        At most MAX_KEYWORDS unique keywords
    """
    brand, clean_name = split_brand_name(product_name)
    category = (category or "").strip()

    keywords = [
        "만원요리", "최씨남매", "만원요리최씨남매",
        f"만원요리{clean_name}" if clean_name else "",
        f"최씨남매{clean_name}" if clean_name else "",
    ]
    keywords.extend(HOUSE_KEYWORDS)

    keywords.extend(generate_name_variations(clean_name))

    if category:
        keywords.append(category)
        keywords.extend(f"{category}{suffix}" for suffix in CATEGORY_INTENTS)

    if brand:
        keywords.append(brand)
        if clean_name:
            keywords.append(f"{brand}{clean_name}")
        keywords.extend(f"{brand}{suffix}" for suffix in BRAND_INTENTS)

    keywords.extend(GENERIC_KEYWORDS)

    return dedupe_keywords(keywords)


def synthesize_seo(product_name: str, category: str = "", year: Optional[int] = None) -> SEOResult:
    """
    Build SEO metadata for a product page.

    Args:
        product_name: Full product name
        category: Product category
        year: Copyright year (defaults to the current year)

    Returns:
        SEOResult
    """
    year = year or datetime.now().year
    brand, clean_name = split_brand_name(product_name)
    clean_name = clean_name or product_name
    category = (category or "").strip()

    keywords = generate_keywords(product_name, category)

    description = f"{product_name} - {BRAND_HOUSE} 검증 상품."
    if category:
        description += f" {category} 카테고리 베스트셀러."
    description += " 전국 배송, 신선도 보장"

    brief = re.sub(r"\s+", " ", f"{category or '추천'} {brand} 상품").strip()

    translations = None
    if clean_name.isascii():
        translations = {"en": f"{clean_name} | Manwonyori Choi Siblings"}

    return SEOResult(
        title=f"{product_name} | {BRAND_HOUSE}",
        description=description,
        keywords=keywords,
        keywordCount=len(keywords),
        author=BRAND_HOUSE,
        copyright=f"© {year} {BRAND_HOUSE}. All rights reserved.",
        summary=truncate(clean_name, SUMMARY_LENGTH),
        brief=truncate(brief, BRIEF_LENGTH),
        altText=f"{product_name} 상세페이지 이미지",
        translations=translations,
    )
