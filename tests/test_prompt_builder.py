"""
Unit tests for prompt construction.
Run with: pytest tests/test_prompt_builder.py
"""

from detail_page_system.core.models import CONTENT_FIELDS, ProductRequest
from detail_page_system.logic_blocks.prompt_builder import (
    NOT_PROVIDED,
    build_generation_prompt,
    build_ingredient_prompt,
    build_parse_prompt,
    detect_mode,
)


class TestGenerationPrompt:
    def test_simple_mode(self):
        req = ProductRequest(productName="물냉면", category="면류")
        prompt = build_generation_prompt(req)
        assert detect_mode(req) == "simple"
        assert "간단 입력" in prompt
        assert "물냉면" in prompt
        assert NOT_PROVIDED in prompt

    def test_detailed_mode_keeps_report_rule(self):
        req = ProductRequest(productName="물냉면", ingredients="밀가루 45%")
        prompt = build_generation_prompt(req)
        assert detect_mode(req) == "detailed"
        assert "상세 입력" in prompt
        assert "밀가루 45%" in prompt
        assert "품목제조보고서" in prompt

    def test_demands_full_schema(self):
        prompt = build_generation_prompt(ProductRequest(productName="물냉면"))
        for key in CONTENT_FIELDS:
            assert f'"{key}"' in prompt
        assert "JSON" in prompt

    def test_pure(self):
        req = ProductRequest(productName="물냉면", haccp=True)
        assert build_generation_prompt(req) == build_generation_prompt(req)


class TestNarrowPrompts:
    def test_ingredient_prompt(self):
        prompt = build_ingredient_prompt("밀가루 45% (미국산)")
        assert "밀가루 45% (미국산)" in prompt
        assert '"rows"' in prompt

    def test_parse_prompt_lists_request_fields(self):
        prompt = build_parse_prompt("제품명 물냉면")
        assert "제품명 물냉면" in prompt
        assert '"productName"' in prompt
        assert '"ingredients"' in prompt
