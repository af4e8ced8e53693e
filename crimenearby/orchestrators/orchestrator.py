"""
Nearby-incidents orchestrator for crimenearby.

This module composes geofence, aggregator, categorizer and place
resolver into the single "recent incidents near a point" operation
consumed by the presentation layer. It never raises: window-level
failures are converted into an empty but well-formed result.
"""

import asyncio
from datetime import date, datetime
from typing import List, Optional, Sequence, Union
from crimenearby.core.categorize import group_counts, total_and_serious
from crimenearby.core.geofence import Geofence
from crimenearby.core.models import AggregationResult, Coordinate, MonthSnapshot, NearbyResult, Tile
from crimenearby.core.months import iso_month, month_window
from crimenearby.adapters.cache.memory import InMemoryIncidentCache
from crimenearby.features.aggregator import IncidentAggregator
from crimenearby.features.place_resolver import PlaceResolver
from crimenearby.observability import metrics
from crimenearby.observability.logging_setup import get_logger
from crimenearby.ports.cache import IncidentCachePort
from crimenearby.ports.geocoder import ReverseGeocoderPort
from crimenearby.ports.incident_source import IncidentSourcePort
from crimenearby.settings import Settings

log = get_logger("crimenearby.orchestrator")

class NearbyOrchestrator:
    """주변 사건 조회 오케스트레이터"""
    
    def __init__(self,
                 geofence: Geofence,
                 aggregator: IncidentAggregator,
                 place_resolver: PlaceResolver,
                 tiles: Sequence[Tile],
                 *,
                 months_back: int = 6,
                 radius_m: float = 1609.0,
                 window_timeout_sec: Optional[float] = None):
        """
        초기화합니다.
        
        Args:
            geofence: 좌표 검증기
            aggregator: 타일 × 월 집계기
            place_resolver: 장소 이름 변환기
            tiles: 지역 타일 목록
            months_back: 기본 조회 개월 수
            radius_m: 표시용 반경 (계산에는 사용하지 않음)
            window_timeout_sec: 윈도우 조회 타임아웃 (None이면 무제한)
        """
        self.geofence = geofence
        self.aggregator = aggregator
        self.place_resolver = place_resolver
        self.tiles: List[Tile] = list(tiles)
        self.months_back = months_back
        self.radius_m = radius_m
        self.window_timeout_sec = window_timeout_sec
    
    @classmethod
    def from_settings(cls,
                      settings: Settings,
                      source: IncidentSourcePort,
                      geocoder: ReverseGeocoderPort,
                      cache: Optional[IncidentCachePort] = None) -> "NearbyOrchestrator":
        """설정으로부터 전체 파이프라인을 구성합니다."""
        region = settings.region
        agg = settings.aggregation
        if cache is None:
            cache = InMemoryIncidentCache(precision=agg.cache_precision)
        tiles = [Tile.from_poly(name, poly) for name, poly in region.tiles.items()]
        return cls(
            Geofence.from_settings(region),
            IncidentAggregator(source, cache,
                               parallel_tiles=agg.parallel_tiles,
                               max_concurrency=agg.max_concurrency),
            PlaceResolver(geocoder, region.fallback_place),
            tiles,
            months_back=agg.months_back,
            radius_m=region.default_radius_m,
            window_timeout_sec=agg.window_timeout_sec,
        )
    
    async def _safe_window(self, months_back: int,
                           anchor_date: Optional[Union[date, datetime]]) -> AggregationResult:
        try:
            window = self.aggregator.fetch_window(months_back, self.tiles, anchor_date)
            if self.window_timeout_sec:
                return await asyncio.wait_for(window, timeout=self.window_timeout_sec)
            return await window
        except Exception as e:
            metrics.window_failures.inc()
            log.error(f"윈도우 조회 실패, 빈 결과로 대체 error:{e!r}")
            return AggregationResult()
    
    async def fetch_nearby(self,
                           raw_coordinate: Optional[Coordinate] = None,
                           months_back: Optional[int] = None,
                           anchor_date: Optional[Union[date, datetime]] = None) -> NearbyResult:
        """
        좌표 주변의 최근 사건을 조회합니다.
        
        Args:
            raw_coordinate: 사용자 좌표 (None 이면 지역 중심)
            months_back: 조회 개월 수 (None 이면 설정값)
            anchor_date: 기준 날짜 (None 이면 오늘, UTC)
            
        Returns:
            NearbyResult (실패해도 항상 반환)
        """
        anchor = self.geofence.validate(raw_coordinate)
        months = self.months_back if months_back is None else months_back
        
        aggregation, place = await asyncio.gather(
            self._safe_window(months, anchor_date),
            self.place_resolver.resolve(anchor),
        )
        
        totals = total_and_serious(aggregation.records)
        categories = group_counts(aggregation.records)
        log.info(f"주변 사건 조회 완료 place:{place} total:{totals.total} serious:{totals.serious}")
        
        return NearbyResult(
            aggregation=aggregation,
            totals=totals,
            categories=categories,
            place_name=place,
            coordinate=anchor,
            radius_m=self.radius_m,
            month=aggregation.latest_month or iso_month(anchor_date),
        )
    
    async def fetch_point_window(self,
                                 raw_coordinate: Optional[Coordinate] = None,
                                 months_back: Optional[int] = None,
                                 anchor_date: Optional[Union[date, datetime]] = None) -> AggregationResult:
        """
        검증된 단일 좌표로 최근 사건을 조회합니다.
        
        Returns:
            AggregationResult (레코드가 있는 월만 포함, 실패 시 빈 결과)
        """
        anchor = self.geofence.validate(raw_coordinate)
        months = self.months_back if months_back is None else months_back
        try:
            return await self.aggregator.fetch_point_window(months, anchor, anchor_date)
        except Exception as e:
            metrics.window_failures.inc()
            log.error(f"좌표 윈도우 조회 실패, 빈 결과로 대체 error:{e!r}")
            return AggregationResult()
    
    async def fetch_latest(self,
                           raw_coordinate: Optional[Coordinate] = None,
                           anchor_date: Optional[Union[date, datetime]] = None) -> MonthSnapshot:
        """
        검증된 단일 좌표에서 데이터가 있는 가장 최근 월을 조회합니다.
        
        Returns:
            MonthSnapshot (실패 시 가장 오래된 시도 월 + 빈 목록)
        """
        anchor = self.geofence.validate(raw_coordinate)
        window = max(1, self.months_back)
        try:
            return await self.aggregator.fetch_latest_month(anchor, anchor_date, window=window)
        except Exception as e:
            metrics.window_failures.inc()
            log.error(f"최근 월 조회 실패 error:{e!r}")
            return MonthSnapshot(month=month_window(anchor_date, window)[-1])
