"""
Prompt Builder Block - Builds provider prompts from a product request.
All functions are pure: same request, same prompt.
"""

import json

from ..core.models import CONTENT_FIELDS, ProductRequest

BRAND = "만원요리 최씨남매"
NOT_PROVIDED = "미입력"

# Description of each field the provider must fill
CONTENT_SCHEMA = {
    "heroTitle": "MZ세대가 주목할 제품의 역사적 스토리를 담은 제목",
    "heroSubtitle": "제품의 매력을 2줄로 설명",
    "badge1": "핵심 장점 1",
    "badge2": "핵심 장점 2",
    "badge3": "핵심 장점 3",
    "productCleanName": "브랜드를 제거한 깨끗한 제품명",
    "storyContent": "제품의 유래나 역사를 담은 3~4문장의 스토리",
    "why1Title": "장점 제목 1",
    "why1Text": "장점 설명 1",
    "why2Title": "장점 제목 2",
    "why2Text": "장점 설명 2",
    "why3Title": "장점 제목 3",
    "why3Text": "장점 설명 3",
    "why4Title": "장점 제목 4",
    "why4Text": "장점 설명 4",
    "how1Title": "활용법 1",
    "how1Text": "자세한 활용 방법 설명 1",
    "how2Title": "활용법 2",
    "how2Text": "자세한 활용 방법 설명 2",
    "storageType": "보관 방법 (예: 냉동)",
    "shippingTitle": "배송 안내 제목",
    "shippingContent": "배송 안내 문구",
    "ingredientTable": "빈 문자열로 두세요",
    "nutritionTable": "영양정보가 주어진 경우에만 HTML 표, 아니면 빈 문자열",
    "allergyInfo": "알레르기 유발 성분 안내, 모르면 빈 문자열",
    "footerTitle": "제품의 핵심 메시지 (예: 집에서 만나는 함흥의 그 맛!)",
    "footerSubtitle": "만원요리 최씨남매가 검증한 [제품명]을<br>이제 간편하게 집에서 만나보세요!",
    "footerBadge1": "제품 특징 1",
    "footerBadge2": "제품 특징 2",
    "footerBadge3": "제품 특징 3",
}

# Fields the parse prompt may extract from free text
PARSE_FIELDS = {
    "productName": "제품명",
    "category": "카테고리",
    "composition": "구성 및 규격",
    "expiry": "소비기한",
    "productType": "제품종류",
    "storageType": "보관방법/유형",
    "ingredients": "원재료 및 성분 (원문 그대로)",
    "characteristics": "제품특성",
    "caution": "주의사항",
    "allergyInfo": "알레르기 정보",
    "shippingInfo": "배송 정보",
}


def detect_mode(request: ProductRequest) -> str:
    """Return "detailed" when descriptive fields are present, else "simple"."""
    return "detailed" if request.is_detailed else "simple"


def _value(text: str) -> str:
    return text if text else NOT_PROVIDED


def _schema_block() -> str:
    schema = {key: CONTENT_SCHEMA.get(key, "") for key in CONTENT_FIELDS}
    return json.dumps(schema, ensure_ascii=False, indent=2)


def build_generation_prompt(request: ProductRequest) -> str:
    """
    Build the main copy-generation prompt.

    Args:
        request: Validated product request

    Returns:
        Prompt text demanding a single JSON object with the content schema
    """
    mode = detect_mode(request)

    lines = [
        f'당신은 "{BRAND}" 브랜드의 상세페이지 콘텐츠 전문가입니다.',
        "다음 제품 정보를 바탕으로 상세페이지에 들어갈 문구를 JSON 데이터로만 생성해주세요.",
        "",
        f"입력 방식: {'상세 입력' if mode == 'detailed' else '간단 입력'}",
        "",
        "제품 정보:",
        f"- 제품명: {request.product_name}",
        f"- 카테고리: {_value(request.category)}",
        f"- 구성 및 규격: {_value(request.composition)}",
        f"- 소비기한: {_value(request.expiry)}",
        f"- 제품종류: {_value(request.product_type)}",
        f"- 보관방법: {_value(request.storage_type)}",
        f"- 원재료 및 성분: {_value(request.ingredients)}",
        f"- 제품특성: {_value(request.characteristics)}",
        f"- 알레르기 정보: {_value(request.allergy_info)}",
        f"- 배송 정보: {_value(request.shipping_info)}",
        f"- HACCP: {'인증' if request.haccp else '미인증'}",
        f"- 주의사항: {_value(request.caution)}",
        "",
    ]

    if mode == "detailed":
        lines += [
            "중요 규칙:",
            "1. 품목제조보고서 성분 정보는 절대 변경하지 말고 그대로 사용",
            "2. 입력된 정보를 우선 사용하되, MZ 친화적으로 다듬기",
            "3. 부족한 부분만 보완",
        ]
    else:
        lines += [
            "미션:",
            "1. 제품의 역사적 배경/스토리를 MZ 세대가 흥미로워할 한 줄로 요약",
            "2. 제품명과 카테고리만으로 장점과 활용법을 추론",
        ]

    lines += [
        f'- "{BRAND}" 브랜드 일관성 유지, 간결하고 임팩트 있게',
        "",
        "다음 JSON 형식으로만 응답하세요:",
        _schema_block(),
        "",
        "중요: 반드시 유효한 JSON 객체 하나만 반환하고, 설명이나 주석, 코드 블록 없이 JSON만 출력하세요.",
    ]
    return "\n".join(lines)


def build_ingredient_prompt(ingredients_text: str) -> str:
    """Narrow prompt turning a comma-separated ingredient string into table rows."""
    return "\n".join([
        "다음 원재료 문자열을 표의 행으로 변환하세요.",
        "",
        f"원재료: {ingredients_text}",
        "",
        "규칙:",
        "- 쉼표로 구분된 각 원재료가 하나의 행입니다 (괄호 안의 쉼표는 구분자가 아닙니다).",
        '- percentage: "45%"처럼 숫자% 패턴이 있으면 그 값, 없으면 "미표기"',
        '- origin: 괄호 안의 원산지 텍스트, 없으면 "미표기"',
        "- name: 함량과 괄호를 제외한 원재료명",
        "",
        "다음 JSON 형식으로만 응답하세요:",
        '{"rows": [{"name": "원재료명", "percentage": "45%", "origin": "국산"}]}',
    ])


def build_parse_prompt(text: str) -> str:
    """Prompt extracting product request fields from a free-form description."""
    schema = json.dumps(PARSE_FIELDS, ensure_ascii=False, indent=2)
    return "\n".join([
        "다음은 한국어 제품 설명(품목제조보고서 등)입니다. 각 항목을 추출하세요.",
        "",
        "제품 설명:",
        text,
        "",
        "다음 키를 가진 JSON 객체 하나로만 응답하세요. 찾을 수 없는 항목은 빈 문자열로 두세요:",
        schema,
        'HACCP 인증이 언급되면 "haccp": true 를 추가하세요.',
    ])
