"""
API Request and Response Models.

The generate endpoint takes ProductRequest directly; these cover the rest.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class ParseRequest(BaseModel):
    """Free-form product description to extract fields from."""

    text: str = Field(
        ...,
        min_length=1,
        description="Pasted product description (e.g. 품목제조보고서 text)",
        examples=["제품명    [최씨남매] 함흥냉면\n카테고리    면류"],
    )


class GenerateResponse(BaseModel):
    success: bool = Field(True, description="Whether generation succeeded")
    html: str = Field(..., description="Bound detail page HTML")
    seo: Dict[str, Any] = Field(..., description="SEO metadata (camelCase keys)")


class ParseResponse(BaseModel):
    success: bool = True
    data: Dict[str, Any] = Field(default_factory=dict, description="Extracted request fields")
    source: str = Field(..., description='"provider" or "rules"')


class HealthResponse(BaseModel):
    """Service health and provider configuration."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(..., description="Service status")
    providers: Dict[str, bool] = Field(..., description="Provider name -> API key configured")
    active_provider: str = Field(..., alias="activeProvider")
    template_loaded: bool = Field(..., alias="templateLoaded")


class ErrorResponse(BaseModel):
    success: bool = False
    error: str = Field(..., description="Error message")
