"""
Configuration management for the detail page system
"""

import os
from pathlib import Path
from typing import Dict, List

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_TEMPLATE_PATH = Path(__file__).parent / "templates" / "assets" / "template-final.html"


class Config:
    """Application configuration"""

    # Anthropic (CLAUDE_API_KEY kept for older .env files)
    ANTHROPIC_API_KEY: str = os.getenv("ANTHROPIC_API_KEY") or os.getenv("CLAUDE_API_KEY", "")
    ANTHROPIC_MODEL: str = os.getenv("ANTHROPIC_MODEL", "claude-3-5-sonnet-latest")

    # OpenAI
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

    # Mistral
    MISTRAL_API_KEY: str = os.getenv("MISTRAL_API_KEY", "")
    MISTRAL_MODEL: str = os.getenv("MISTRAL_MODEL", "open-mistral-7b")

    # Provider order: primary first, then fallbacks
    PROVIDER_ORDER: List[str] = [
        p.strip().lower()
        for p in os.getenv("PROVIDER_ORDER", "anthropic,openai").split(",")
        if p.strip()
    ]

    # Generation defaults
    MAX_TOKENS: int = int(os.getenv("MAX_TOKENS", "2000"))
    TEMPERATURE: float = float(os.getenv("TEMPERATURE", "0.7"))
    PROVIDER_TIMEOUT_SECONDS: float = float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "60"))

    # Template asset
    TEMPLATE_PATH: str = os.getenv("TEMPLATE_PATH", str(DEFAULT_TEMPLATE_PATH))

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")
    CORS_ORIGINS: List[str] = os.getenv("CORS_ORIGINS", "*").split(",")

    @classmethod
    def api_key_for(cls, provider: str) -> str:
        """API key for a provider name, empty if unknown or unset"""
        return getattr(cls, f"{provider.upper()}_API_KEY", "") or ""

    @classmethod
    def model_for(cls, provider: str) -> str:
        return getattr(cls, f"{provider.upper()}_MODEL", "") or ""

    @classmethod
    def provider_status(cls) -> Dict[str, bool]:
        """Configuration presence for each known provider"""
        return {
            "anthropic": bool(cls.ANTHROPIC_API_KEY),
            "openai": bool(cls.OPENAI_API_KEY),
            "mistral": bool(cls.MISTRAL_API_KEY),
        }

    @classmethod
    def active_provider(cls) -> str:
        """First provider in PROVIDER_ORDER that has a key, or 'none'"""
        status = cls.provider_status()
        for name in cls.PROVIDER_ORDER:
            if status.get(name):
                return name
        return "none"
