"""
Fallback Block - Static content record used when no provider reply is usable.
"""

from html import escape

from ..core.models import GeneratedContent, ProductRequest


def build_fallback_content(request: ProductRequest) -> GeneratedContent:
    """
    Deterministic page copy derived only from the request.

    Args:
        request: Validated product request

    Returns:
        GeneratedContent with every template field filled
    """
    # Copy is substituted into the page verbatim, so request text is escaped here
    product_name = escape(request.product_name)
    clean_name = escape(request.clean_name or request.product_name)

    return GeneratedContent(
        heroTitle=product_name,
        heroSubtitle="만원요리 최씨남매가 엄선한 프리미엄 상품",
        badge1=escape(request.badge1) or "최고 품질",
        badge2=escape(request.badge2) or "빠른 배송",
        badge3="안전 포장",
        productCleanName=clean_name,
        storyContent=f"{clean_name}, 만원요리 최씨남매가 직접 먹어보고 고른 제품입니다.",
        why1Title="엄선된 재료",
        why1Text="최고급 원재료만을 사용하여 만든 프리미엄 제품입니다.",
        why2Title="전문가 검증",
        why2Text="식품 전문가들이 직접 검증한 안전한 제품입니다.",
        why3Title="합리적 가격",
        why3Text="최상의 품질을 합리적인 가격으로 제공합니다.",
        why4Title="신선도 보장",
        why4Text="철저한 온도관리로 신선함을 그대로 전달합니다.",
        how1Title="간편 조리",
        how1Text="포장을 뜯고 간단한 조리만으로 맛있게 즐기실 수 있습니다.",
        how2Title="다양한 활용",
        how2Text="여러 요리에 활용 가능한 만능 식재료입니다.",
        storageType=escape(request.storage_type) or "냉동",
        shippingTitle="배송 안내",
        shippingContent="주문 후 신선하게 포장하여 전국으로 배송해드립니다.",
        allergyInfo=escape(request.allergy_info),
        footerTitle=f"집에서 만나는 {clean_name}의 맛!",
        footerSubtitle=f"만원요리 최씨남매가 검증한 {clean_name}을<br>이제 간편하게 집에서 만나보세요!",
        footerBadge1="대용량 구성",
        footerBadge2="HACCP 인증" if request.haccp else "안전 인증",
        footerBadge3="합배송 가능",
    )
