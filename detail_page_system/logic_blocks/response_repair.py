"""
Response Repair Block - Coerces raw provider text into a JSON object.
Falls back to the static content record when the text cannot be repaired.
"""

import json
import logging
import re
from typing import Any, Dict, Tuple

from pydantic import ValidationError

from ..core.errors import MalformedResponse
from ..core.models import GeneratedContent, ProductRequest
from .fallback_content import build_fallback_content

logger = logging.getLogger("ResponseRepair")

FENCE_PATTERN = re.compile(r"```[A-Za-z]*")
# Non-printable controls except \t \n \r
CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
UNQUOTED_KEY = re.compile(r"([{,]\s*)([A-Za-z_][A-Za-z0-9_]*)\s*:")
TRAILING_COMMA = re.compile(r",\s*([}\]])")

_STRING_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t"}


def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` markers wherever they appear."""
    return FENCE_PATTERN.sub("", text)


def extract_object_span(text: str) -> str:
    """
    Keep only the text between the first "{" and the last "}".

    Raises:
        MalformedResponse: if no such span exists
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise MalformedResponse("No JSON object found in response", raw=text)
    return text[start:end + 1]


def escape_string_controls(text: str) -> str:
    """Escape literal newlines/tabs/CRs inside JSON string literals only."""
    out = []
    in_string = False
    escape = False
    for ch in text:
        if in_string:
            if escape:
                escape = False
                out.append(ch)
                continue
            if ch == "\\":
                escape = True
                out.append(ch)
                continue
            if ch == '"':
                in_string = False
                out.append(ch)
                continue
            out.append(_STRING_ESCAPES.get(ch, ch))
            continue

        if ch == '"':
            in_string = True
        out.append(ch)
    return "".join(out)


def sanitize_json_text(text: str) -> str:
    """Drop stray control characters and escape the ones inside strings."""
    return escape_string_controls(CONTROL_CHARS.sub("", text))


def requote_single_quoted(text: str) -> str:
    """
    Rewrite 'single-quoted' strings as "double-quoted" ones.

    Apostrophes inside double-quoted strings are left alone; double quotes
    inside single-quoted strings are escaped.
    """
    out = []
    quote = None
    escape = False
    for ch in text:
        if quote is None:
            if ch == '"':
                quote = '"'
            elif ch == "'":
                quote = "'"
                ch = '"'
            out.append(ch)
            continue

        if escape:
            escape = False
            if quote == "'" and ch == "'":
                # \' is not a JSON escape
                out[-1] = "'"
                continue
            out.append(ch)
            continue
        if ch == "\\":
            escape = True
            out.append(ch)
            continue
        if ch == quote:
            quote = None
            out.append('"')
            continue
        if quote == "'" and ch == '"':
            out.append('\\"')
            continue
        out.append(ch)
    return "".join(out)


def lenient_repair(text: str) -> str:
    """
    Best-effort fixes for almost-JSON: single quotes, bare keys,
    trailing commas. Controls inside the requoted strings are escaped.
    """
    repaired = requote_single_quoted(text)
    repaired = UNQUOTED_KEY.sub(r'\1"\2":', repaired)
    repaired = TRAILING_COMMA.sub(r"\1", repaired)
    return escape_string_controls(repaired)


def repair_json_object(raw: str) -> Dict[str, Any]:
    """
    Parse a provider reply into a dict, repairing it if needed.

    Args:
        raw: Raw provider text (may carry prose and code fences)

    Returns:
        Parsed JSON object

    Raises:
        MalformedResponse: if neither strict nor lenient parsing succeeds
    """
    if not raw or not raw.strip():
        raise MalformedResponse("Empty response", raw=raw or "")

    text = sanitize_json_text(extract_object_span(strip_code_fences(raw)))

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        logger.info("Strict JSON parse failed, trying lenient repair")
        try:
            data = json.loads(lenient_repair(text))
        except json.JSONDecodeError as e:
            raise MalformedResponse(f"Could not repair JSON: {e}", raw=raw) from e

    if not isinstance(data, dict):
        raise MalformedResponse("Response JSON is not an object", raw=raw)
    return data


def content_from_response(raw: str, request: ProductRequest) -> Tuple[GeneratedContent, bool]:
    """
    Turn a provider reply into GeneratedContent. Never raises.

    Returns:
        (content, used_fallback)
    """
    try:
        data = repair_json_object(raw)
        content = GeneratedContent.model_validate(data)
    except (MalformedResponse, ValidationError) as e:
        logger.warning(f"Unusable provider response, using fallback record: {e}")
        return build_fallback_content(request), True

    if not any(content.placeholders().values()):
        logger.warning("Provider JSON had no known fields, using fallback record")
        return build_fallback_content(request), True

    return content, False
