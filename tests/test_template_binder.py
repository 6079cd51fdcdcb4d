"""
Tests for the page template store and binder.
Run with: pytest tests/test_template_binder.py
"""

import pytest

from detail_page_system.core.models import GeneratedContent, ProductRequest
from detail_page_system.logic_blocks.fallback_content import build_fallback_content
from detail_page_system.templates.page_template import (
    PageTemplate,
    TemplateState,
    get_page_template,
    init_page_template,
)
from detail_page_system.templates.template_binder import (
    CAUTION_NOTICE_ANCHOR,
    IMAGE_ANCHOR,
    PRODUCT_INFO_ANCHOR,
    WARNING_ANCHOR,
    apply_visibility,
    bind,
)

HIDDEN = 'style="display: none;"'


def is_hidden(html: str, element_id: str) -> bool:
    return f'id="{element_id}" {HIDDEN}' in html


def render(template, **fields):
    request = ProductRequest(productName=fields.pop("productName", "[최씨남매] 함흥냉면"), **fields)
    return bind(template, build_fallback_content(request), request)


class TestPageTemplate:
    def test_bundled_template_loads(self, template):
        assert template.state == TemplateState.LOADED
        assert "{{heroTitle}}" in template.html

    def test_missing_file_fails_without_raising(self, tmp_path):
        template = PageTemplate.load(tmp_path / "missing.html")
        assert template.state == TemplateState.FAILED
        assert not template.is_loaded

    def test_uninitialised_store_is_unloaded(self):
        assert get_page_template().state == TemplateState.UNLOADED

    def test_init_once(self, tmp_path):
        path = tmp_path / "page.html"
        path.write_text("<h1>{{heroTitle}}</h1>", encoding="utf-8")
        first = init_page_template(path)
        second = init_page_template(tmp_path / "other.html")
        assert first is second
        assert get_page_template() is first

    def test_binding_does_not_mutate_template(self, template):
        before = template.html
        render(template, haccp=True, caution="재냉동 금지")
        assert template.html == before


class TestBindBasics:
    def test_not_loaded_returns_empty(self):
        request = ProductRequest(productName="물냉면")
        assert bind(PageTemplate(), build_fallback_content(request), request) == ""
        failed = PageTemplate(state=TemplateState.FAILED)
        assert bind(failed, build_fallback_content(request), request) == ""

    def test_every_placeholder_resolved(self, template):
        html = render(template)
        assert "{{" not in html
        assert "함흥냉면" in html

    def test_empty_generated_fields_become_blank(self, template):
        request = ProductRequest(productName="물냉면")
        html = bind(template, GeneratedContent(), request)
        assert "{{" not in html

    def test_placeholder_inside_generated_copy_not_resolved(self, template):
        request = ProductRequest(productName="물냉면")
        generated = GeneratedContent(footerBadge3="{{heroTitle}}", heroTitle="제목")
        html = bind(template, generated, request)
        assert "{{" not in html
        assert "}}" not in html

    def test_placeholders_resolved_in_one_pass(self):
        small = PageTemplate("<h1>{{heroTitle}}</h1><p>{{badge1}}</p><i>{{unknownKey}}</i>")
        request = ProductRequest(productName="{{heroTitle}} 냉면")
        generated = GeneratedContent(heroTitle="제목", badge1="{{productName}}")
        html = bind(small, generated, request)
        assert html == "<h1>제목</h1><p>productName</p><i>{{unknownKey}}</i>"

    def test_generated_copy_verbatim(self, template):
        request = ProductRequest(productName="물냉면")
        html = bind(template, GeneratedContent(heroSubtitle="한 줄<br>두 줄"), request)
        assert "한 줄<br>두 줄" in html

    def test_request_text_escaped(self, template):
        html = render(template, productName="<script>x</script>", composition="1kg & 2봉")
        assert "<script>x</script>" not in html
        assert "&lt;script&gt;" in html
        assert "1kg &amp; 2봉" in html

    def test_shipping_override(self, template):
        html = render(template, shippingTitle="새벽 배송", shippingInfo="밤 11시 전 주문 시\n다음날 도착")
        assert '<h3 id="shippingTitle" class="font-bold text-lg mb-2">새벽 배송</h3>' in html
        assert "밤 11시 전 주문 시<br>다음날 도착" in html

    def test_generated_shipping_kept_without_override(self, template):
        assert "배송 안내" in render(template)


class TestTrustCards:
    def test_haccp_true(self, template):
        html = render(template, haccp=True)
        assert not is_hidden(html, "haccpCard")
        assert is_hidden(html, "verificationCard")

    def test_haccp_false(self, template):
        html = render(template, haccp=False)
        assert is_hidden(html, "haccpCard")
        assert not is_hidden(html, "verificationCard")


class TestVisibility:
    def test_adds_and_removes_hidden_attribute(self):
        html = '<div id="a" style="display: none;"></div><div id="b"></div>'
        result = apply_visibility(html, {"a": True, "b": False})
        assert result == '<div id="a"></div><div id="b" style="display: none;"></div>'

    def test_never_duplicates_attribute(self):
        html = '<div id="a" style="display: none;"></div>'
        assert apply_visibility(html, {"a": False}) == html

    def test_other_ids_untouched(self):
        html = '<div id="ab" style="display: none;"></div>'
        assert apply_visibility(html, {"a": True}) == html


class TestComputedBlocks:
    def test_images_injected(self, template):
        html = render(template, images=["https://img.example/1.jpg", "https://img.example/2.jpg"])
        assert IMAGE_ANCHOR not in html
        assert html.count('alt="[최씨남매] 함흥냉면"') == 2

    def test_no_images_leaves_anchor(self, template):
        assert IMAGE_ANCHOR in render(template)

    def test_spec_cards(self, template):
        html = render(template, composition="2인분", expiry="12개월")
        assert PRODUCT_INFO_ANCHOR not in html
        assert "구성" in html and "2인분" in html
        assert "12개월" in html

    def test_no_specs_leaves_anchor(self, template):
        assert PRODUCT_INFO_ANCHOR in render(template)

    def test_ingredients_hidden_without_data(self, template):
        assert is_hidden(render(template), "ingredientsSection")

    def test_raw_ingredients_shown(self, template):
        html = render(template, ingredients="밀가루, 전분", allergyInfo="밀 함유")
        assert not is_hidden(html, "ingredientsSection")
        assert "밀가루, 전분" in html
        assert "밀 함유" in html

    def test_table_preferred_over_raw_text(self, template):
        request = ProductRequest(productName="물냉면", ingredients="밀가루")
        generated = GeneratedContent(ingredientTable="<table>TABLE</table>")
        html = bind(template, generated, request)
        assert "<table>TABLE</table>" in html
        assert '<p class="mb-4">밀가루</p>' not in html

    def test_ingredients_image_alone_shows_section(self, template):
        html = render(template, ingredientsImage="https://img.example/report.jpg")
        assert not is_hidden(html, "ingredientsSection")
        assert "https://img.example/report.jpg" in html

    def test_caution_present(self, template):
        html = render(template, caution="해동 후 재냉동 금지")
        assert CAUTION_NOTICE_ANCHOR not in html
        assert WARNING_ANCHOR not in html
        assert html.count("해동 후 재냉동 금지") == 2

    def test_caution_absent(self, template):
        html = render(template)
        assert CAUTION_NOTICE_ANCHOR not in html
        assert WARNING_ANCHOR in html


@pytest.mark.parametrize("haccp", [True, False])
def test_cards_are_mutually_exclusive(template, haccp):
    html = render(template, haccp=haccp)
    assert is_hidden(html, "haccpCard") != is_hidden(html, "verificationCard")
