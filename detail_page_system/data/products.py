"""
Sample product records for demos and tests.
"""

# Detailed entry with HACCP and a caution notice
HAMHEUNG_NAENGMYEON = {
    "productName": "[최씨남매] 함흥냉면",
    "category": "면류",
    "composition": "냉면 사리 2인분 + 비빔장 2봉",
    "expiry": "제조일로부터 12개월",
    "productType": "냉동식품",
    "storageType": "냉동",
    "ingredients": "밀가루 45% (미국산, 호주산), 감자전분 35% (국산), 정제소금, 비빔장 20% (고춧가루(중국산), 설탕)",
    "characteristics": "쫄깃한 면발과 매콤달콤한 비빔장",
    "caution": "해동 후 재냉동하지 마세요",
    "haccp": True,
    "images": ["https://example.com/images/naengmyeon-main.jpg"],
    "allergyInfo": "밀, 대두 함유",
}

# Simple entry: name and category only
SIMPLE_DUMPLING = {
    "productName": "[최씨남매] 고기만두 1.4kg",
    "category": "만두",
}

# Bulk-paste text in the 품목제조보고서 layout
BULK_TEXT = """제품명    [최씨남매] 함흥냉면
카테고리    면류
구성 및 규격    냉면 사리 2인분 + 비빔장 2봉
소비기한    제조일로부터 12개월
제품종류    냉동식품
유형    냉동
성분    밀가루 45% (미국산, 호주산), 감자전분 35% (국산)
주의사항    해동 후 재냉동하지 마세요
HACCP    인증
"""
