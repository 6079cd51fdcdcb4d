"""
Shared fixtures: scripted providers and the bundled template.
No test talks to a real provider.
"""

import json

import pytest

from detail_page_system.config import DEFAULT_TEMPLATE_PATH
from detail_page_system.core.models import CONTENT_FIELDS
from detail_page_system.infrastructure.llm_provider import (
    BaseLLMProvider,
    LLMProviderManager,
    reset_llm_provider,
)
from detail_page_system.page_pipeline import set_page_system
from detail_page_system.templates.page_template import PageTemplate, reset_page_template


class ScriptedProvider(BaseLLMProvider):
    """Provider returning canned replies in order; "" once they run out."""

    def __init__(self, name="fake", replies=None, error=None, configured=True):
        self._name = name
        super().__init__(api_key="test-key" if configured else "", model="fake-model", timeout=1)
        self.replies = list(replies or [])
        self.error = error
        self.prompts = []

    @property
    def provider_name(self) -> str:
        return self._name

    def _create_client(self):
        return object()

    def _complete(self, client, prompt, system, temperature, max_tokens):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        reply = self.replies.pop(0) if self.replies else ""
        return reply, 10


def content_reply(**overrides) -> str:
    """A complete, valid generation reply."""
    data = {key: f"{key} 문구" for key in CONTENT_FIELDS}
    data["ingredientTable"] = ""
    data["nutritionTable"] = ""
    data["allergyInfo"] = ""
    data.update(overrides)
    return json.dumps(data, ensure_ascii=False)


@pytest.fixture(autouse=True)
def reset_singletons():
    yield
    reset_llm_provider()
    reset_page_template()
    set_page_system(None)


@pytest.fixture
def make_provider():
    return ScriptedProvider


@pytest.fixture
def make_manager():
    def build(*providers):
        return LLMProviderManager(providers=list(providers))
    return build


@pytest.fixture
def reply():
    return content_reply


@pytest.fixture
def template():
    return PageTemplate.load(DEFAULT_TEMPLATE_PATH)
