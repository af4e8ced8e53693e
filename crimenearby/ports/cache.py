"""
Incident cache port interface.

This module defines the protocol for the (selector scope, location cell,
month) keyed record cache used by the aggregator.
"""

from typing import List, Optional, Protocol
from crimenearby.core.models import IncidentRecord

POINT_SCOPE = "point"

class IncidentCachePort(Protocol):
    """사건 캐시 포트 인터페이스"""
    
    def get(self, lat: float, lon: float, month: str, *,
            scope: str = POINT_SCOPE) -> Optional[List[IncidentRecord]]:
        """
        캐시된 레코드를 조회합니다.
        
        Args:
            lat: 셀 위도
            lon: 셀 경도
            month: ``YYYY-MM``
            scope: 조회 선택자 구분 (단일 좌표는 ``point``, 타일은 폴리곤별 값)
        
        Returns:
            레코드 목록 또는 None (미스)
        """
        ...
    
    def set(self, lat: float, lon: float, month: str, records: List[IncidentRecord], *,
            scope: str = POINT_SCOPE) -> None:
        """레코드를 저장합니다 (마지막 쓰기 우선)."""
        ...
