"""
LLM Provider: Abstraction layer for multiple LLM backends.
Supports Anthropic, OpenAI and Mistral, tried in a fixed order with fallback.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import anthropic
from mistralai import Mistral
from openai import OpenAI

from detail_page_system.config import Config
from detail_page_system.core.errors import ProviderError, ProviderUnavailable
from detail_page_system.infrastructure.logger import system_logger

logger = logging.getLogger("LLMProvider")

DEFAULT_SYSTEM = "You are a helpful assistant."


@dataclass
class LLMResponse:
    """Standardized LLM response."""
    content: str
    model: str
    provider: str
    tokens_used: int = 0
    latency_ms: float = 0.0


@dataclass
class ProviderAttempt:
    """Outcome of a single provider call: a response or a failure reason."""
    provider: str
    success: bool
    response: Optional[LLMResponse] = None
    error: str = ""


class BaseLLMProvider(ABC):
    """Abstract base for LLM providers."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self._api_key = api_key if api_key is not None else Config.api_key_for(self.provider_name)
        self._model = model or Config.model_for(self.provider_name)
        self._timeout = timeout if timeout is not None else Config.PROVIDER_TIMEOUT_SECONDS
        self._client = None

    @property
    @abstractmethod
    def provider_name(self) -> str:
        pass

    @property
    def default_model(self) -> str:
        return self._model

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    @abstractmethod
    def _create_client(self):
        """Build the SDK client."""
        pass

    @abstractmethod
    def _complete(
        self, client, prompt: str, system: str, temperature: float, max_tokens: int
    ) -> Tuple[str, int]:
        """Run one completion, returning (text, tokens_used)."""
        pass

    def _get_client(self):
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def generate(
        self,
        prompt: str,
        system: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> LLMResponse:
        """
        Generate text completion.

        Raises:
            ProviderError: not configured, SDK/network failure, or empty reply
        """
        if not self.is_configured:
            raise ProviderError(self.provider_name, "not configured")

        start_time = time.time()
        try:
            content, tokens = self._complete(
                self._get_client(),
                prompt,
                system or DEFAULT_SYSTEM,
                temperature,
                max_tokens,
            )
        except Exception as e:
            raise ProviderError(self.provider_name, str(e)) from e

        if not content or not content.strip():
            raise ProviderError(self.provider_name, "empty response")

        return LLMResponse(
            content=content,
            model=self._model,
            provider=self.provider_name,
            tokens_used=tokens,
            latency_ms=(time.time() - start_time) * 1000,
        )


class AnthropicProvider(BaseLLMProvider):
    """Anthropic Claude provider."""

    @property
    def provider_name(self) -> str:
        return "anthropic"

    def _create_client(self):
        return anthropic.Anthropic(api_key=self._api_key, timeout=self._timeout)

    def _complete(self, client, prompt, system, temperature, max_tokens):
        response = client.messages.create(
            model=self._model,
            max_tokens=max_tokens,
            system=system,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
        )
        content = "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )
        tokens = response.usage.input_tokens + response.usage.output_tokens
        return content, tokens


class OpenAIProvider(BaseLLMProvider):
    """OpenAI GPT provider."""

    @property
    def provider_name(self) -> str:
        return "openai"

    def _create_client(self):
        return OpenAI(api_key=self._api_key, timeout=self._timeout)

    def _complete(self, client, prompt, system, temperature, max_tokens):
        response = client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        content = response.choices[0].message.content or ""
        tokens = response.usage.total_tokens if response.usage else 0
        return content, tokens


class MistralProvider(BaseLLMProvider):
    """Mistral AI provider."""

    @property
    def provider_name(self) -> str:
        return "mistral"

    def _create_client(self):
        return Mistral(api_key=self._api_key, timeout_ms=int(self._timeout * 1000))

    def _complete(self, client, prompt, system, temperature, max_tokens):
        response = client.chat.complete(
            model=self._model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        content = response.choices[0].message.content or ""
        tokens = response.usage.total_tokens if response.usage else 0
        return content, tokens


PROVIDER_CLASSES: Dict[str, type] = {
    "anthropic": AnthropicProvider,
    "openai": OpenAIProvider,
    "mistral": MistralProvider,
}


def first_success(attempts: Iterable[ProviderAttempt]) -> LLMResponse:
    """
    Return the response of the first successful attempt.

    ``attempts`` is consumed lazily, so a generator of calls stops at the
    first success and later providers are never contacted.

    Raises:
        ProviderUnavailable: with every failed attempt when none succeeded
    """
    failures: List[ProviderAttempt] = []
    for attempt in attempts:
        if attempt.success:
            return attempt.response
        failures.append(attempt)
    raise ProviderUnavailable(failures)


class LLMProviderManager:
    """
    Manages an ordered list of LLM providers with fallback support.
    """

    def __init__(self, providers: Optional[List[BaseLLMProvider]] = None):
        self._providers: List[BaseLLMProvider] = []
        if providers is None:
            self._register_from_config()
        else:
            for provider in providers:
                self.register_provider(provider)

    def _register_from_config(self) -> None:
        """Register providers in PROVIDER_ORDER."""
        for name in Config.PROVIDER_ORDER:
            provider_cls = PROVIDER_CLASSES.get(name)
            if provider_cls is None:
                logger.warning(f"Unknown provider in PROVIDER_ORDER: {name}")
                continue
            self.register_provider(provider_cls())

    def register_provider(self, provider: BaseLLMProvider) -> None:
        """Append a provider to the fallback order."""
        self._providers.append(provider)
        logger.info(
            f"Registered LLM provider: {provider.provider_name} "
            f"(configured={provider.is_configured})"
        )

    @property
    def provider_names(self) -> List[str]:
        return [p.provider_name for p in self._providers]

    def get_available_providers(self) -> List[str]:
        """Providers that have credentials."""
        return [p.provider_name for p in self._providers if p.is_configured]

    def attempt(
        self,
        provider: BaseLLMProvider,
        prompt: str,
        system: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> ProviderAttempt:
        """Call one provider, capturing failure as a result instead of raising."""
        try:
            response = provider.generate(
                prompt,
                system=system,
                temperature=Config.TEMPERATURE if temperature is None else temperature,
                max_tokens=max_tokens or Config.MAX_TOKENS,
            )
        except ProviderError as e:
            logger.warning(f"Provider {provider.provider_name} failed: {e.reason}")
            system_logger.provider_attempt(provider.provider_name, success=False, error=e.reason)
            return ProviderAttempt(provider=provider.provider_name, success=False, error=e.reason)

        logger.info(
            f"Provider {provider.provider_name} answered "
            f"({len(response.content)} chars, {response.latency_ms:.0f}ms)"
        )
        system_logger.provider_attempt(provider.provider_name, success=True)
        return ProviderAttempt(provider=provider.provider_name, success=True, response=response)

    def generate(
        self,
        prompt: str,
        system: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """
        Generate with automatic fallback, one provider at a time.

        Raises:
            ProviderUnavailable: when every provider failed or none is registered
        """
        return first_success(
            self.attempt(provider, prompt, system, temperature, max_tokens)
            for provider in self._providers
        )


# Singleton
_llm_manager: Optional[LLMProviderManager] = None


def get_llm_provider() -> LLMProviderManager:
    """Get or create LLM provider manager."""
    global _llm_manager
    if _llm_manager is None:
        _llm_manager = LLMProviderManager()
    return _llm_manager


def reset_llm_provider() -> None:
    """Reset LLM provider (for testing)."""
    global _llm_manager
    _llm_manager = None
