"""
Structured Logging for the Detail Page System.

Pipeline events (provider attempts, fallbacks, generated pages, template
loads) are emitted as one JSON object per line so they can be grepped or
shipped as-is. Ordinary module logging stays on named stdlib loggers.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from detail_page_system.config import Config

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


class StructuredLogger:
    """JSON event logger on top of a named stdlib logger."""

    def __init__(self, name: str, log_dir: Optional[str] = None):
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO))
        if not self.logger.handlers:
            self._attach_handlers(Path(log_dir or Config.LOG_DIR))

    def _attach_handlers(self, log_dir: Path) -> None:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        self.logger.addHandler(console)

        # Events also go to logs/system.log, only when that directory exists
        if log_dir.is_dir():
            self.logger.addHandler(
                logging.FileHandler(log_dir / "system.log", encoding="utf-8")
            )

    def log(self, level: int, message: str, **fields: Any) -> None:
        entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": logging.getLevelName(level),
            "logger": self.name,
            "message": message,
        }
        entry.update(fields)
        self.logger.log(level, json.dumps(entry, ensure_ascii=False, default=str))

    def info(self, message: str, **fields: Any) -> None:
        self.log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self.log(logging.WARNING, message, **fields)

    def error(self, message: str, **fields: Any) -> None:
        self.log(logging.ERROR, message, **fields)

    # --- Pipeline events ---

    def provider_attempt(self, provider: str, success: bool, error: str = ""):
        """One provider call and its outcome."""
        level = logging.INFO if success else logging.WARNING
        self.log(level, f"Provider {provider}: {'ok' if success else 'failed'}",
                 type="provider_attempt", provider=provider, success=success, error=error)

    def fallback_used(self, stage: str, reason: str):
        """A degraded path was taken (fallback copy, rule parser)."""
        self.warning(f"Fallback used in {stage}", type="fallback", stage=stage, reason=reason)

    def page_generated(self, product_name: str, provider: str, keyword_count: int):
        self.info(f"Page generated: {product_name}", type="page",
                  product=product_name, provider=provider, keyword_count=keyword_count)

    def template_loaded(self, path: str, loaded: bool, size: int = 0):
        level = logging.INFO if loaded else logging.ERROR
        self.log(level, f"Template {'loaded' if loaded else 'unavailable'}: {path}",
                 type="template", path=path, loaded=loaded, size=size)


# Global logger instance
system_logger = StructuredLogger("DPS")
