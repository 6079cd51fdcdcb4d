"""
HTTP tests for the FastAPI application.
Run with: pytest tests/test_api.py
"""

import pytest
from fastapi.testclient import TestClient

from detail_page_system.api.app import app
from detail_page_system.data.products import BULK_TEXT
from detail_page_system.page_pipeline import PageGenerationSystem, set_page_system
from detail_page_system.templates.page_template import set_page_template


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def install_system(make_provider, make_manager, template):
    def install(*providers):
        set_page_template(template)
        set_page_system(PageGenerationSystem(provider_manager=make_manager(*providers), template=template))
    return install


class TestGenerateEndpoint:
    def test_success(self, client, install_system, make_provider, reply):
        install_system(make_provider(replies=[reply()]))

        response = client.post("/api/generate", json={
            "productName": "[최씨남매] 함흥냉면",
            "category": "면류",
            "haccp": True,
        })

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert "<html" in body["html"]
        assert body["seo"]["keywordCount"] == len(body["seo"]["keywords"])

    def test_missing_product_name(self, client, install_system, make_provider):
        provider = make_provider(replies=["{}"])
        install_system(provider)

        response = client.post("/api/generate", json={"category": "면류"})

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert "productName" in body["error"]
        assert provider.prompts == []

    def test_all_providers_unavailable(self, client, install_system, make_provider):
        install_system(make_provider("anthropic", configured=False), make_provider("openai", configured=False))

        response = client.post("/api/generate", json={"productName": "물냉면"})

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert "not configured" in body["error"]


class TestParseEndpoint:
    def test_rules_fallback(self, client, install_system):
        install_system()

        response = client.post("/api/parse", json={"text": BULK_TEXT})

        assert response.status_code == 200
        body = response.json()
        assert body == {"success": True, "data": body["data"], "source": "rules"}
        assert body["data"]["category"] == "면류"

    def test_nothing_extracted(self, client, install_system):
        install_system()
        response = client.post("/api/parse", json={"text": "무슨 제품인지 모름"})
        assert response.status_code == 422
        assert response.json()["success"] is False

    def test_provider_reply_without_product_name(self, client, install_system, make_provider):
        install_system(make_provider(replies=['{"category": "면류", "productName": ""}']))
        response = client.post("/api/parse", json={"text": "면류 제품"})
        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert "product name" in body["error"]

    def test_empty_text_rejected(self, client, install_system):
        install_system()
        response = client.post("/api/parse", json={"text": ""})
        assert response.status_code == 422


class TestHealthEndpoint:
    def test_reports_template_and_providers(self, client, install_system):
        install_system()

        body = client.get("/api/health").json()

        assert body["status"] == "ok"
        assert body["templateLoaded"] is True
        assert set(body["providers"]) == {"anthropic", "openai", "mistral"}
        assert "activeProvider" in body

    def test_template_not_loaded(self, client):
        assert client.get("/api/health").json()["templateLoaded"] is False
