"""
Detail Page System - AI-assisted product detail pages for 만원요리 최씨남매.
"""

__version__ = "1.0.0"

from .page_pipeline import PageGenerationSystem

__all__ = ["PageGenerationSystem"]
