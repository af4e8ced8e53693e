"""
테스트 설정 및 픽스처

이 모듈은 pytest 설정과 공통 픽스처를 제공합니다.
"""

import pytest
import inspect
from typing import Callable, List, Optional, Tuple
from crimenearby.settings import Settings
from crimenearby.core.models import Coordinate, Tile
from crimenearby.core.outcomes import IncidentBatch, NoDataForMonth
from crimenearby.core.normalize import to_incident
from crimenearby.adapters.cache.memory import InMemoryIncidentCache


class FakeIncidentSource:
    """호출 기록을 남기는 테스트용 사건 소스"""
    
    def __init__(self, handler: Callable[[str, str], object]):
        """
        Args:
            handler: (셀 이름, 월) → FetchOutcome 또는 발생시킬 예외
        """
        self.handler = handler
        self.calls: List[Tuple[str, str]] = []
    
    async def fetch_month(self, iso_month: str, *,
                          tile: Optional[Tile] = None,
                          point: Optional[Coordinate] = None):
        name = tile.name if tile is not None else "point"
        self.calls.append((name, iso_month))
        outcome = self.handler(name, iso_month)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def make_raw(idx: int = 1, category: str = "violent-crime", month: str = "2025-06",
             lat: str = "53.48", lon: str = "-2.24") -> dict:
    """police.uk 응답 항목 형식의 원시 딕셔너리"""
    return {
        "id": idx,
        "persistent_id": f"pid-{idx}",
        "category": category,
        "month": month,
        "location": {
            "latitude": lat,
            "longitude": lon,
            "street": {"id": 1000 + idx, "name": "On or near Market Street"},
        },
    }


@pytest.fixture
def sample_settings():
    """테스트용 설정"""
    settings = Settings()
    settings.observability.service_name = "test-service"
    settings.observability.build_version = "1.0.0"
    settings.observability.log_level = "INFO"
    settings.aggregation.window_timeout_sec = None
    return settings


@pytest.fixture
def region_tiles(sample_settings) -> List[Tile]:
    """기본 지역 타일 (NW, NE, SW, SE)"""
    return [Tile.from_poly(name, poly) for name, poly in sample_settings.region.tiles.items()]


@pytest.fixture
def tile_a() -> Tile:
    return Tile.from_poly("A", "53.55,-2.35:53.55,-2.245:53.48,-2.245:53.48,-2.35")


@pytest.fixture
def tile_b() -> Tile:
    return Tile.from_poly("B", "53.48,-2.245:53.48,-2.14:53.41,-2.14:53.41,-2.245")


@pytest.fixture
def fresh_cache():
    """격리된 캐시"""
    return InMemoryIncidentCache(precision=3)


@pytest.fixture
def fake_source_factory():
    """FakeIncidentSource 생성 함수"""
    return FakeIncidentSource


@pytest.fixture
def raw_factory():
    """원시 응답 항목 생성 함수"""
    return make_raw


@pytest.fixture
def two_records_for_b():
    """타일 A는 항상 404, 타일 B는 항상 2건"""
    def handler(name, month):
        if name == "A":
            return NoDataForMonth(month=month)
        return IncidentBatch(records=[
            to_incident(make_raw(1, "violent-crime", month)),
            to_incident(make_raw(2, "shoplifting", month)),
        ])
    return handler


# pytest 설정
def pytest_collection_modifyitems(config, items):
    """테스트 아이템 수정"""
    for item in items:
        # 비동기 테스트에 asyncio 마커 추가
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)
        
        # 느린 테스트 마커 추가
        if "performance" in item.name or "stress" in item.name:
            item.add_marker(pytest.mark.slow)
        
        # 통합 테스트 마커 추가
        if "integration" in item.name:
            item.add_marker(pytest.mark.integration)
