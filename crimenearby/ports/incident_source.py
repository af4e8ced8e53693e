"""
Incident source port interface.

This module defines the protocol for querying one calendar month of
incidents for one spatial selector.
"""

from typing import Optional, Protocol
from crimenearby.core.models import Coordinate, Tile
from crimenearby.core.outcomes import FetchOutcome

class IncidentSourcePort(Protocol):
    """사건 데이터 소스 포트 인터페이스"""
    
    async def fetch_month(self, iso_month: str, *,
                          tile: Optional[Tile] = None,
                          point: Optional[Coordinate] = None) -> FetchOutcome:
        """
        한 달치 사건을 조회합니다.
        
        Args:
            iso_month: ``YYYY-MM``
            tile: 폴리곤 타일 (point보다 우선)
            point: 단일 좌표
            
        Returns:
            조회 결과 (IncidentBatch / NoDataForMonth / HttpError / MalformedBody)
        """
        ...
