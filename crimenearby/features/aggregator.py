"""
Window aggregation for crimenearby.

This module fans a month query out over every configured tile for each
month of a rolling window, merges the partial results in canonical
(month, tile, response) order and reports which months were attempted.
Tile-level failures are logged and skipped, never raised.
"""

import asyncio
import time
from datetime import date, datetime
from typing import List, Optional, Sequence, Union
from crimenearby.core.models import AggregationResult, Coordinate, IncidentRecord, MonthSnapshot, Tile
from crimenearby.core.months import month_window
from crimenearby.core.outcomes import HttpError, IncidentBatch, MalformedBody, NoDataForMonth
from crimenearby.observability import metrics
from crimenearby.observability.logging_setup import get_logger
from crimenearby.ports.cache import POINT_SCOPE, IncidentCachePort
from crimenearby.ports.incident_source import IncidentSourcePort

log = get_logger("crimenearby.aggregator")

class AggregationError(ValueError):
    """윈도우 단위 설정 오류"""

class IncidentAggregator:
    """타일 × 월 조회 집계기"""
    
    def __init__(self,
                 source: IncidentSourcePort,
                 cache: IncidentCachePort,
                 *,
                 parallel_tiles: bool = False,
                 max_concurrency: int = 4):
        """
        초기화합니다.
        
        Args:
            source: 사건 데이터 소스
            cache: (선택자 구분, 좌표 셀, 월) 캐시
            parallel_tiles: 같은 월의 타일을 동시에 조회할지 여부
            max_concurrency: 동시 조회 최대 개수
        """
        self.source = source
        self.cache = cache
        self.parallel_tiles = parallel_tiles
        self.max_concurrency = max(1, max_concurrency)
    
    async def _fetch_cell(self, month: str, *,
                          tile: Optional[Tile] = None,
                          point: Optional[Coordinate] = None) -> Optional[List[IncidentRecord]]:
        """
        캐시 확인 후 소스를 조회합니다.
        
        Returns:
            레코드 목록 (빈 목록 가능), 실패 시 None
        """
        if tile is not None:
            cell, scope = tile.anchor, tile.cache_scope
            label = f"tile={tile.name}"
        else:
            cell, scope = point, POINT_SCOPE
            label = f"point={cell.lat},{cell.lon}"
        
        cached = self.cache.get(cell.lat, cell.lon, month, scope=scope)
        if cached is not None:
            metrics.cache_lookups.labels(result="hit").inc()
            log.debug(f"캐시 적중 {month} {label} count:{len(cached)}")
            return cached
        metrics.cache_lookups.labels(result="miss").inc()
        
        try:
            outcome = await self.source.fetch_month(month, tile=tile, point=point)
        except Exception as e:
            metrics.tile_fetches.labels(outcome="error").inc()
            log.warning(f"조회 오류 {month} {label} error:{e!r}")
            return None
        
        if isinstance(outcome, IncidentBatch):
            metrics.tile_fetches.labels(outcome="ok").inc()
            # 빈 결과도 캐시 (세션 내 재조회 방지)
            self.cache.set(cell.lat, cell.lon, month, outcome.records, scope=scope)
            log.debug(f"{month} count:{len(outcome.records)} {label}")
            return outcome.records
        if isinstance(outcome, NoDataForMonth):
            metrics.tile_fetches.labels(outcome="no_data").inc()
            log.debug(f"{month} 데이터 없음(404) {label}")
        elif isinstance(outcome, HttpError):
            metrics.tile_fetches.labels(outcome="http_error").inc()
            log.warning(f"{month} HTTP {outcome.status} {label}")
        elif isinstance(outcome, MalformedBody):
            metrics.tile_fetches.labels(outcome="malformed_body").inc()
            log.warning(f"{month} 응답 본문 오류 {label} excerpt:{outcome.excerpt!r}")
        else:
            metrics.tile_fetches.labels(outcome="error").inc()
            log.warning(f"{month} 알 수 없는 조회 결과 {label} outcome:{outcome!r}")
        return None
    
    async def _fetch_month_tiles(self, month: str, tiles: Sequence[Tile]) -> List[Optional[List[IncidentRecord]]]:
        if not self.parallel_tiles:
            return [await self._fetch_cell(month, tile=t) for t in tiles]
        
        sem = asyncio.Semaphore(self.max_concurrency)
        
        async def _guarded(t: Tile):
            async with sem:
                return await self._fetch_cell(month, tile=t)
        
        # gather는 인자 순서를 유지하므로 타일 순서 그대로 병합됨
        return list(await asyncio.gather(*(_guarded(t) for t in tiles)))
    
    async def fetch_window(self,
                           months_back: int,
                           tiles: Sequence[Tile],
                           anchor_date: Optional[Union[date, datetime]] = None) -> AggregationResult:
        """
        최근 ``months_back`` 개월 × 전체 타일을 조회해 병합합니다.
        
        Args:
            months_back: 조회할 개월 수 (anchor 월 포함, 1 이상)
            tiles: 타일 목록 (설정 순서 유지)
            anchor_date: 기준 날짜 (None이면 오늘, UTC)
            
        Returns:
            AggregationResult (months 는 시도한 모든 월, 최신 → 과거)
            
        Raises:
            AggregationError: months_back < 1 또는 타일 없음
        """
        if months_back < 1:
            raise AggregationError(f"months_back 은 1 이상이어야 합니다: {months_back}")
        if not tiles:
            raise AggregationError("타일 목록이 비어 있습니다")
        
        started = time.perf_counter()
        months_used: List[str] = []
        merged: List[IncidentRecord] = []
        
        for month in month_window(anchor_date, months_back):
            month_total = 0
            for chunk in await self._fetch_month_tiles(month, tiles):
                if chunk is None:
                    continue
                merged.extend(chunk)
                month_total += len(chunk)
            
            # 데이터 유무와 관계없이 시도한 월은 기록
            months_used.append(month)
            log.debug(f"{month} monthTotal:{month_total}")
        
        metrics.incidents_merged.inc(len(merged))
        metrics.window_duration_seconds.observe(time.perf_counter() - started)
        log.info(f"윈도우 조회 완료 months:{months_used} tiles:{len(tiles)} records:{len(merged)}")
        return AggregationResult(months=months_used, records=merged)
    
    async def fetch_point_window(self,
                                 months_back: int,
                                 point: Coordinate,
                                 anchor_date: Optional[Union[date, datetime]] = None) -> AggregationResult:
        """
        단일 좌표로 최근 ``months_back`` 개월을 조회합니다.
        
        fetch_window 와 달리 레코드가 하나 이상 있는 월만 months 에 포함합니다.
        """
        if months_back < 1:
            raise AggregationError(f"months_back 은 1 이상이어야 합니다: {months_back}")
        
        months_used: List[str] = []
        merged: List[IncidentRecord] = []
        for month in month_window(anchor_date, months_back):
            chunk = await self._fetch_cell(month, point=point)
            if chunk:
                months_used.append(month)
                merged.extend(chunk)
        
        metrics.incidents_merged.inc(len(merged))
        return AggregationResult(months=months_used, records=merged)
    
    async def fetch_latest_month(self,
                                 point: Coordinate,
                                 anchor_date: Optional[Union[date, datetime]] = None,
                                 window: int = 6) -> MonthSnapshot:
        """
        최신 월부터 거슬러 올라가 첫 번째로 데이터가 있는 월을 반환합니다.
        
        Args:
            point: 조회 좌표
            anchor_date: 기준 날짜
            window: 최대 조회 개월 수
            
        Returns:
            MonthSnapshot (없으면 가장 오래된 시도 월 + 빈 목록)
        """
        months = month_window(anchor_date, max(1, window))
        for month in months:
            chunk = await self._fetch_cell(month, point=point)
            if chunk:
                return MonthSnapshot(month=month, records=chunk)
        return MonthSnapshot(month=months[-1], records=[])
