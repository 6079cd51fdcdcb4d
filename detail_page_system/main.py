"""
Main entry point for the Detail Page System.

    python -m detail_page_system.main            # serve the API
    python -m detail_page_system.main demo       # render the sample page to output/
"""

import json
import sys
from pathlib import Path

import uvicorn

from detail_page_system.config import Config


def serve():
    uvicorn.run(
        "detail_page_system.api.app:app",
        host=Config.HOST,
        port=Config.PORT,
        log_level=Config.LOG_LEVEL.lower(),
    )


def demo(output_dir: str = "output"):
    """Generate the sample page with the configured providers."""
    from detail_page_system.data.products import HAMHEUNG_NAENGMYEON
    from detail_page_system.page_pipeline import PageGenerationSystem
    from detail_page_system.templates.page_template import init_page_template

    print("\n" + "=" * 70)
    print("DETAIL PAGE GENERATION")
    print("=" * 70)

    init_page_template()
    result = PageGenerationSystem().generate(HAMHEUNG_NAENGMYEON)

    out = Path(output_dir)
    out.mkdir(exist_ok=True)
    (out / "detail_page.html").write_text(result.html, encoding="utf-8")
    (out / "seo.json").write_text(
        json.dumps(result.seo.model_dump(by_alias=True), ensure_ascii=False, indent=2),
        encoding="utf-8",
    )

    print(f"Provider: {result.provider} (fallback copy: {result.used_fallback})")
    print(f"Ingredient table: {result.ingredient_source}")
    print(f"Keywords: {result.seo.keyword_count}")
    print(f"Written to {out.resolve()}")


def main():
    if len(sys.argv) > 1 and sys.argv[1] == "demo":
        demo()
    else:
        serve()


if __name__ == "__main__":
    main()
