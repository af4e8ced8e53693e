"""
Category grouping for crimenearby.

Maps raw police.uk category ids (hyphenated, e.g. ``violent-crime``) to
display groups with a severity flag, and derives per-group counts and
total/serious splits.
"""

from typing import Dict, Iterable, List
from .models import CategoryCount, CategoryGroupSpec, IncidentRecord, Totals

# 원시 카테고리 → (표시 그룹, 심각 여부)
CATEGORY_MAPPING: Dict[str, CategoryGroupSpec] = {
    # 강도
    "robbery": CategoryGroupSpec(name="Robbery", is_serious=True),
    "theft-from-the-person": CategoryGroupSpec(name="Robbery", is_serious=True),
    # 절도/상점 절도
    "bicycle-theft": CategoryGroupSpec(name="Theft & Shoplifting", is_serious=False),
    "shoplifting": CategoryGroupSpec(name="Theft & Shoplifting", is_serious=False),
    # 차량
    "vehicle-crime": CategoryGroupSpec(name="Vehicle crime", is_serious=False),
    # 폭력
    "violent-crime": CategoryGroupSpec(name="Violence", is_serious=True),
    # 기타
    "other-crime": CategoryGroupSpec(name="Other", is_serious=False),
    "other-theft": CategoryGroupSpec(name="Other", is_serious=False),
    # 공공질서
    "public-order": CategoryGroupSpec(name="Public order", is_serious=False),
    "anti-social-behaviour": CategoryGroupSpec(name="Public order", is_serious=False),
    # 마약/무기
    "drugs": CategoryGroupSpec(name="Drugs & Weapons", is_serious=True),
    "possession-of-weapons": CategoryGroupSpec(name="Drugs & Weapons", is_serious=True),
    # 주거침입/방화
    "burglary": CategoryGroupSpec(name="Burglary & Arson", is_serious=False),
    "criminal-damage-arson": CategoryGroupSpec(name="Burglary & Arson", is_serious=False),
}

SERIOUS_GROUPS = frozenset({"Robbery", "Violence", "Drugs & Weapons"})

def is_serious_group(name: str) -> bool:
    """표시 그룹 이름이 심각 그룹인지 확인합니다."""
    return name in SERIOUS_GROUPS

def fallback_label(raw: str) -> str:
    """매핑에 없는 카테고리를 ``Title Case`` 표시 이름으로 변환합니다."""
    spaced = raw.replace("-", " ").replace("_", " ")
    return " ".join(word[:1].upper() + word[1:].lower() for word in spaced.split(" "))

def group_spec(raw: str) -> CategoryGroupSpec:
    """
    원시 카테고리의 그룹 스펙을 반환합니다.
    
    매핑에 없으면 fallback_label 결과와 심각 그룹 포함 여부로 구성합니다.
    """
    spec = CATEGORY_MAPPING.get(raw)
    if spec is not None:
        return spec
    label = fallback_label(raw)
    return CategoryGroupSpec(name=label, is_serious=is_serious_group(label))

def group_counts(records: Iterable[IncidentRecord]) -> List[CategoryCount]:
    """
    그룹별 건수를 계산합니다.
    
    Args:
        records: 사건 레코드 목록
        
    Returns:
        건수 내림차순 CategoryCount 목록 (동률은 처음 등장한 순서 유지)
    """
    buckets: Dict[str, int] = {}
    for r in records:
        name = group_spec(r.category).name
        buckets[name] = buckets.get(name, 0) + 1
    ordered = sorted(buckets.items(), key=lambda kv: -kv[1])
    return [CategoryCount(category=name, count=count) for name, count in ordered]

def total_and_serious(records: Iterable[IncidentRecord]) -> Totals:
    """전체 건수와 심각 건수를 계산합니다."""
    total = 0
    serious = 0
    for r in records:
        total += 1
        if group_spec(r.category).is_serious:
            serious += 1
    return Totals(total=total, serious=serious)
