"""
In-memory incident cache for crimenearby.

Session-lifetime store keyed by (scope, rounded lat, rounded lon, month).
No TTL and no size bound: the supported region is small and fixed.
"""

import threading
from typing import Dict, List, Optional, Tuple
from crimenearby.core.models import IncidentRecord
from crimenearby.ports.cache import POINT_SCOPE

CacheKey = Tuple[str, float, float, str]

class InMemoryIncidentCache:
    """프로세스 내 사건 캐시 (마지막 쓰기 우선)"""
    
    def __init__(self, precision: int = 3):
        """
        초기화합니다.
        
        Args:
            precision: 좌표 반올림 자릿수 (3 ≈ 110m)
        """
        self.precision = precision
        self._store: Dict[CacheKey, List[IncidentRecord]] = {}
        self._lock = threading.Lock()
    
    def key(self, lat: float, lon: float, month: str, scope: str = POINT_SCOPE) -> CacheKey:
        return (scope, round(lat, self.precision), round(lon, self.precision), month)
    
    def get(self, lat: float, lon: float, month: str, *,
            scope: str = POINT_SCOPE) -> Optional[List[IncidentRecord]]:
        with self._lock:
            records = self._store.get(self.key(lat, lon, month, scope))
        return list(records) if records is not None else None
    
    def set(self, lat: float, lon: float, month: str, records: List[IncidentRecord], *,
            scope: str = POINT_SCOPE) -> None:
        with self._lock:
            self._store[self.key(lat, lon, month, scope)] = list(records)
    
    def clear(self) -> None:
        with self._lock:
            self._store.clear()
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
