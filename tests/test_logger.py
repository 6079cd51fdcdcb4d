"""
Tests for structured pipeline event logging.
Run with: pytest tests/test_logger.py
"""

import json
import logging

from detail_page_system.infrastructure.logger import StructuredLogger


def events(caplog, name):
    return [json.loads(r.getMessage()) for r in caplog.records if r.name == name]


class TestStructuredLogger:
    def test_entries_are_json_with_fields(self, caplog):
        slog = StructuredLogger("DPS.test.fields")
        with caplog.at_level(logging.INFO, logger="DPS.test.fields"):
            slog.page_generated("[최씨남매] 함흥냉면", "anthropic", 50)

        [entry] = events(caplog, "DPS.test.fields")
        assert entry["type"] == "page"
        assert entry["product"] == "[최씨남매] 함흥냉면"
        assert entry["keyword_count"] == 50
        assert entry["level"] == "INFO"

    def test_failed_attempt_is_warning(self, caplog):
        slog = StructuredLogger("DPS.test.attempt")
        with caplog.at_level(logging.INFO, logger="DPS.test.attempt"):
            slog.provider_attempt("openai", success=False, error="timeout")

        record = [r for r in caplog.records if r.name == "DPS.test.attempt"][0]
        assert record.levelno == logging.WARNING
        assert json.loads(record.getMessage())["error"] == "timeout"

    def test_file_handler_only_when_dir_exists(self, tmp_path):
        with_dir = StructuredLogger("DPS.test.file", log_dir=str(tmp_path))
        without_dir = StructuredLogger("DPS.test.nofile", log_dir=str(tmp_path / "missing"))
        assert any(isinstance(h, logging.FileHandler) for h in with_dir.logger.handlers)
        assert not any(isinstance(h, logging.FileHandler) for h in without_dir.logger.handlers)
