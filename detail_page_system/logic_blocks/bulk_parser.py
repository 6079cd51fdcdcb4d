"""
Bulk Parser Block - Rule-based extraction of product fields from pasted text.

Handles the line-per-field layout of a 품목제조보고서 paste, e.g.
"제품명    [최씨남매] 함흥냉면". Used when no provider can read the text.
"""

import re
from typing import Any, Dict, Tuple

# Checked in order; the first label found in a line wins
LABEL_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("제품명", "productName"),
    ("카테고리", "category"),
    ("구성 및 규격", "composition"),
    ("소비기한", "expiry"),
    ("제품종류", "productType"),
    ("보관방법", "storageType"),
    ("유형", "storageType"),
    ("알레르기", "allergyInfo"),
    ("원재료", "ingredients"),
    ("성분", "ingredients"),
    ("제품특성", "characteristics"),
    ("주의사항", "caution"),
    ("배송", "shippingInfo"),
)

VALUE_SEPARATOR = re.compile(r"\s{2,}|\t|:\s*")
# Words after "HACCP" that mean the product is not certified
NEGATIVE_VALUES = {"없음", "해당없음", "미인증", "미해당", "x", "no", "n", "false"}
HACCP_PATTERN = re.compile(r"HACCP", re.IGNORECASE)
WORD_SEPARATOR = re.compile(r"[\s:：,/()]+")


def extract_value(line: str) -> str:
    """Text after the label: split on 2+ spaces, a tab, or a colon."""
    parts = VALUE_SEPARATOR.split(line.strip(), maxsplit=1)
    if len(parts) < 2:
        return ""
    return parts[1].replace('"', "").strip()


def haccp_flag(line: str) -> bool:
    """
    Certification flag from the text after the HACCP token.

    A bare mention ("HACCP", "HACCP인증", "HACCP 인증") counts as certified.
    """
    rest = line[HACCP_PATTERN.search(line).end():]
    words = WORD_SEPARATOR.split(rest.replace('"', "").lower())
    return not any(word in NEGATIVE_VALUES for word in words if word)


def parse_bulk_text(text: str) -> Dict[str, Any]:
    """
    Extract request fields from labelled lines.

    Args:
        text: Free-form pasted product description

    Returns:
        Dict keyed by request field names (camelCase); only fields found
    """
    data: Dict[str, Any] = {}

    for raw_line in (text or "").splitlines():
        line = raw_line.strip()
        if not line:
            continue

        if HACCP_PATTERN.search(line):
            data["haccp"] = haccp_flag(line)
            continue

        for label, field in LABEL_FIELDS:
            if label in line:
                value = extract_value(line)
                if value and field not in data:
                    data[field] = value
                break

    return data
