import json
import re
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# First "[...]" group in a product name is the brand, e.g. "[최씨남매] 함흥냉면"
BRAND_PATTERN = re.compile(r"\[(.+?)\]")

UNSPECIFIED = "미표기"


def split_brand_name(product_name: str) -> Tuple[str, str]:
    """Return (brand, clean_name) for a product name."""
    match = BRAND_PATTERN.search(product_name or "")
    brand = match.group(1).strip() if match else ""
    clean_name = BRAND_PATTERN.sub("", product_name or "", count=1).strip()
    return brand, clean_name


# --- Input Record ---
class ProductRequest(BaseModel):
    """Validated product record for one page generation request."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    product_name: str = Field(..., alias="productName", min_length=1)
    category: str = ""
    composition: str = ""
    expiry: str = ""
    product_type: str = Field("", alias="productType")
    storage_type: str = Field("", alias="storageType")
    ingredients: str = ""
    characteristics: str = ""
    caution: str = ""
    haccp: bool = False
    images: List[str] = Field(default_factory=list)
    shipping_info: str = Field("", alias="shippingInfo")
    shipping_title: str = Field("", alias="shippingTitle")
    badge1: str = ""
    badge2: str = ""
    allergy_info: str = Field("", alias="allergyInfo")
    ingredients_image: str = Field("", alias="ingredientsImage")

    @field_validator(
        "category",
        "composition",
        "expiry",
        "product_type",
        "storage_type",
        "ingredients",
        "characteristics",
        "caution",
        "shipping_info",
        "shipping_title",
        "badge1",
        "badge2",
        "allergy_info",
        "ingredients_image",
        mode="before",
    )
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("haccp", mode="before")
    @classmethod
    def none_to_false(cls, v):
        return False if v is None else v

    @field_validator("images", mode="before")
    @classmethod
    def drop_blank_images(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            v = v.splitlines()
        return [str(url).strip() for url in v if url and str(url).strip()]

    @property
    def is_detailed(self) -> bool:
        """Detailed mode when any descriptive field was supplied."""
        return bool(self.composition or self.ingredients or self.characteristics)

    @property
    def brand(self) -> str:
        return split_brand_name(self.product_name)[0]

    @property
    def clean_name(self) -> str:
        return split_brand_name(self.product_name)[1]


# --- Generated Copy (fixed template schema) ---
class GeneratedContent(BaseModel):
    """
    Every text field the page template can reference.

    Aliases are the template placeholder keys; substitution iterates this
    schema, never whatever keys a provider happened to return.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    hero_title: str = Field("", alias="heroTitle")
    hero_subtitle: str = Field("", alias="heroSubtitle")
    badge1: str = ""
    badge2: str = ""
    badge3: str = ""
    product_clean_name: str = Field("", alias="productCleanName")
    story_content: str = Field("", alias="storyContent")
    why1_title: str = Field("", alias="why1Title")
    why1_text: str = Field("", alias="why1Text")
    why2_title: str = Field("", alias="why2Title")
    why2_text: str = Field("", alias="why2Text")
    why3_title: str = Field("", alias="why3Title")
    why3_text: str = Field("", alias="why3Text")
    why4_title: str = Field("", alias="why4Title")
    why4_text: str = Field("", alias="why4Text")
    how1_title: str = Field("", alias="how1Title")
    how1_text: str = Field("", alias="how1Text")
    how2_title: str = Field("", alias="how2Title")
    how2_text: str = Field("", alias="how2Text")
    storage_type: str = Field("", alias="storageType")
    shipping_title: str = Field("", alias="shippingTitle")
    shipping_content: str = Field("", alias="shippingContent")
    ingredient_table: str = Field("", alias="ingredientTable")
    nutrition_table: str = Field("", alias="nutritionTable")
    allergy_info: str = Field("", alias="allergyInfo")
    footer_title: str = Field("", alias="footerTitle")
    footer_subtitle: str = Field("", alias="footerSubtitle")
    footer_badge1: str = Field("", alias="footerBadge1")
    footer_badge2: str = Field("", alias="footerBadge2")
    footer_badge3: str = Field("", alias="footerBadge3")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_text(cls, v):
        # Providers return numbers, lists and nulls for text slots
        if v is None:
            return ""
        if isinstance(v, str):
            return v
        if isinstance(v, (list, tuple)):
            return ", ".join(str(item) for item in v if item is not None)
        if isinstance(v, dict):
            return json.dumps(v, ensure_ascii=False)
        return str(v)

    def placeholders(self) -> Dict[str, str]:
        """Placeholder key -> value for every schema field."""
        return self.model_dump(by_alias=True)


CONTENT_FIELDS: Tuple[str, ...] = tuple(
    field.alias or name for name, field in GeneratedContent.model_fields.items()
)


class IngredientRow(BaseModel):
    """One row of the ingredient table."""

    name: str = Field(..., min_length=1)
    percentage: str = UNSPECIFIED
    origin: str = UNSPECIFIED

    @field_validator("percentage", "origin", mode="before")
    @classmethod
    def default_unspecified(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return UNSPECIFIED
        return str(v).strip()


# --- Output Records ---
class SEOResult(BaseModel):
    """Derived SEO metadata for a product page."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str
    keywords: List[str] = Field(default_factory=list)
    keyword_count: int = Field(0, alias="keywordCount")
    author: str = ""
    copyright: str = ""
    summary: str = ""
    brief: str = ""
    alt_text: str = Field("", alias="altText")
    translations: Optional[Dict[str, str]] = None


class PageResult(BaseModel):
    """Rendered page plus metadata about how it was produced."""

    html: str
    seo: SEOResult
    provider: str = "none"
    used_fallback: bool = False
    ingredient_source: str = "none"

    def to_response(self) -> Dict[str, Any]:
        return {
            "success": True,
            "html": self.html,
            "seo": self.seo.model_dump(by_alias=True),
        }
