"""AliExpress 응답 envelope 추출 전략

배포마다 응답 형태가 달라서 알려진 경로를 순서대로 시도합니다.
각 추출기는 순수 함수 `raw -> items | None` 입니다.
"""

from typing import Any, Callable, Optional

ItemList = list[dict[str, Any]]
Extractor = Callable[[Any], Optional[ItemList]]


def _as_item_list(value: Any) -> Optional[ItemList]:
    if not isinstance(value, list):
        return None
    items = [item for item in value if isinstance(item, dict)]
    return items or None


def extract_result_items(raw: Any) -> Optional[ItemList]:
    """{"result": {"items": [...]}}"""
    if not isinstance(raw, dict):
        return None
    result = raw.get("result")
    if not isinstance(result, dict):
        return None
    return _as_item_list(result.get("items"))


def extract_items(raw: Any) -> Optional[ItemList]:
    """{"items": [...]}"""
    if not isinstance(raw, dict):
        return None
    return _as_item_list(raw.get("items"))


def extract_results(raw: Any) -> Optional[ItemList]:
    """{"results": [...]}"""
    if not isinstance(raw, dict):
        return None
    return _as_item_list(raw.get("results"))


EXTRACTORS: tuple[Extractor, ...] = (
    extract_result_items,
    extract_items,
    extract_results,
)


def extract_products(raw: Any, extractors: tuple[Extractor, ...] = EXTRACTORS) -> ItemList:
    """첫 번째로 비어 있지 않은 목록을 반환, 없으면 빈 목록"""
    for extractor in extractors:
        items = extractor(raw)
        if items:
            return items
    return []
