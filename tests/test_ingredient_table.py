"""
Unit tests for ingredient table synthesis.
Run with: pytest tests/test_ingredient_table.py
"""

import json

from detail_page_system.core.models import UNSPECIFIED, IngredientRow
from detail_page_system.logic_blocks.ingredient_table import (
    parse_ingredients_fallback,
    render_ingredient_table,
    split_ingredients,
    synthesize_ingredient_table,
)


def as_tuples(rows):
    return [(r.name, r.percentage, r.origin) for r in rows]


class TestSplitIngredients:
    def test_commas_inside_parentheses_kept(self):
        assert split_ingredients("밀가루 45% (미국산, 호주산), 감자전분 35% (국산)") == [
            "밀가루 45% (미국산, 호주산)",
            "감자전분 35% (국산)",
        ]

    def test_blank_segments_dropped(self):
        assert split_ingredients("소금, , 설탕,") == ["소금", "설탕"]


class TestFallbackParser:
    def test_reference_example(self):
        rows = parse_ingredients_fallback("밀가루 45% (미국산, 호주산), 감자전분 35% (국산)")
        assert as_tuples(rows) == [
            ("밀가루", "45%", "미국산, 호주산"),
            ("감자전분", "35%", "국산"),
        ]

    def test_missing_percentage_and_origin(self):
        rows = parse_ingredients_fallback("정제소금")
        assert as_tuples(rows) == [("정제소금", UNSPECIFIED, UNSPECIFIED)]

    def test_decimal_percentage(self):
        rows = parse_ingredients_fallback("참기름 2.5% (국산)")
        assert rows[0].percentage == "2.5%"

    def test_empty_input_yields_error_row(self):
        assert as_tuples(parse_ingredients_fallback("")) == [("파싱 오류", "-", "-")]

    def test_unparseable_input_yields_error_row(self):
        assert as_tuples(parse_ingredients_fallback("45% (국산), , ")) == [("파싱 오류", "-", "-")]

    def test_segment_without_name_skipped(self):
        rows = parse_ingredients_fallback("45% (국산), 설탕")
        assert as_tuples(rows) == [("설탕", UNSPECIFIED, UNSPECIFIED)]


class TestRenderIngredientTable:
    def test_headers_and_rows(self):
        html = render_ingredient_table([IngredientRow(name="밀가루", percentage="45%", origin="미국산")])
        assert "<table" in html
        for header in ("원재료명", "함량", "원산지"):
            assert header in html
        assert "밀가루" in html and "45%" in html

    def test_cells_escaped(self):
        html = render_ingredient_table([IngredientRow(name="<b>소금</b>")])
        assert "<b>" not in html
        assert "&lt;b&gt;소금" in html


class TestSynthesizeIngredientTable:
    TEXT = "밀가루 45% (미국산, 호주산), 감자전분 35% (국산)"

    def test_provider_rows_used(self, make_provider, make_manager):
        reply = json.dumps({"rows": [
            {"name": "밀가루", "percentage": "45%", "origin": "미국산, 호주산"},
            {"name": "감자전분", "percentage": "35%", "origin": ""},
        ]}, ensure_ascii=False)
        manager = make_manager(make_provider(replies=[reply]))

        rows, source = synthesize_ingredient_table(self.TEXT, manager)

        assert source == "provider"
        assert as_tuples(rows)[1] == ("감자전분", "35%", UNSPECIFIED)

    def test_no_provider_uses_rules(self, make_provider, make_manager):
        manager = make_manager(make_provider(configured=False))
        rows, source = synthesize_ingredient_table(self.TEXT, manager)
        assert source == "rules"
        assert len(rows) == 2

    def test_malformed_reply_uses_rules(self, make_provider, make_manager):
        manager = make_manager(make_provider(replies=["표를 만들 수 없습니다"]))
        rows, source = synthesize_ingredient_table(self.TEXT, manager)
        assert source == "rules"
        assert rows[0].name == "밀가루"

    def test_zero_rows_uses_rules(self, make_provider, make_manager):
        manager = make_manager(make_provider(replies=['{"rows": []}']))
        _, source = synthesize_ingredient_table(self.TEXT, manager)
        assert source == "rules"
