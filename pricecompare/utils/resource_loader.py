"""리소스 파일(YAML) 로더 유틸리티"""
import os
import yaml
from typing import Any, Dict
from functools import lru_cache

from pricecompare.core.logging import logger


def get_resource_path(relative_path: str) -> str:
    """프로젝트 루트 기준 리소스 절대 경로 반환"""
    # pricecompare/utils/resource_loader.py -> pricecompare/utils -> pricecompare -> root
    base_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    return os.path.join(base_dir, "resources", relative_path)


@lru_cache(maxsize=32)
def load_yaml_resource(relative_path: str) -> Dict[str, Any]:
    """YAML 리소스 로드 및 캐싱"""
    path = get_resource_path(relative_path)
    if not os.path.exists(path):
        logger.warning(f"Resource not found: {path}")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except Exception as e:
        logger.error(f"Failed to load YAML resource {path}: {e}")
        return {}


def load_restricted_terms() -> list[str]:
    """차단어 목록 로드 (카테고리 그룹을 하나의 목록으로 병합, 중복 제거)"""
    data = load_yaml_resource("policy/restricted_terms.yaml")
    terms: list[str] = []
    seen: set[str] = set()
    for group in (data.get("categories") or {}).values():
        for term in group or []:
            normalized = str(term).strip().lower()
            if normalized and normalized not in seen:
                seen.add(normalized)
                terms.append(normalized)
    return terms


def load_restricted_message() -> str:
    """차단 시 응답에 실을 안내 문구"""
    data = load_yaml_resource("policy/restricted_terms.yaml")
    return data.get("message") or "This product category is restricted"


def load_category_rules(source: str) -> Dict[str, Any]:
    """소스별 카테고리 추론 규칙 로드

    Returns:
        {"default": str, "rules": [(category, (keyword, ...)), ...]}
    """
    data = load_yaml_resource("normalization/categories.yaml")
    section = data.get(source) or {}
    rules = [
        (rule["category"], tuple(str(k).lower() for k in rule.get("keywords", [])))
        for rule in section.get("rules", [])
        if rule.get("category")
    ]
    return {"default": section.get("default", "Other Categories"), "rules": rules}
