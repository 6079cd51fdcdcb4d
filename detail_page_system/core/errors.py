"""
Error taxonomy for the detail page pipeline.

Only ProviderUnavailable (and request validation, raised by pydantic) ever
reach a caller; the others are recovered inside the pipeline.
"""

from typing import List, Optional


class DetailPageError(Exception):
    """Base class for all pipeline errors."""


class ProviderError(DetailPageError):
    """A single generative provider failed (network, auth, quota, empty reply)."""

    def __init__(self, provider: str, reason: str):
        self.provider = provider
        self.reason = reason
        super().__init__(f"{provider}: {reason}")


class ProviderUnavailable(DetailPageError):
    """Every configured provider failed or none is configured."""

    def __init__(self, attempts: Optional[List] = None):
        self.attempts = attempts or []
        if self.attempts:
            reasons = "; ".join(f"{a.provider}: {a.error}" for a in self.attempts)
        else:
            reasons = "no providers registered"
        super().__init__(f"No text-generation provider available ({reasons})")


class MalformedResponse(DetailPageError):
    """Provider text could not be coerced into a JSON object."""

    def __init__(self, message: str, raw: str = ""):
        self.raw = raw
        super().__init__(message)


class TemplateLoadError(DetailPageError):
    """The page template asset is missing or unreadable."""
