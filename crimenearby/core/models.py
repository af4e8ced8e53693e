"""
Core domain models for crimenearby.

This module defines the core domain models using Pydantic v2
for type safety and validation.
"""

import math
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator

from crimenearby.common.geo import format_poly, in_bounding_box, parse_poly, ring_centroid

class Coordinate(BaseModel):
    """위도/경도 좌표 (범위 검증은 Geofence 담당)"""
    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float

class BoundingBox(BaseModel):
    """지원 지역 경계 상자"""
    model_config = ConfigDict(frozen=True)

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def contains(self, coord: Coordinate) -> bool:
        return in_bounding_box(coord.lat, coord.lon,
                               self.min_lat, self.max_lat,
                               self.min_lon, self.max_lon)

class Tile(BaseModel):
    """조회용 폴리곤 타일"""
    model_config = ConfigDict(frozen=True)

    name: str
    ring: Tuple[Coordinate, ...]

    @field_validator("ring")
    @classmethod
    def _at_least_triangle(cls, v):
        if len(v) < 3:
            raise ValueError("타일 폴리곤은 최소 3개의 꼭짓점이 필요합니다")
        return v

    @classmethod
    def from_poly(cls, name: str, poly: str) -> "Tile":
        ring = tuple(Coordinate(lat=lat, lon=lon) for lat, lon in parse_poly(poly))
        return cls(name=name, ring=ring)

    def poly_param(self) -> str:
        """API ``poly`` 파라미터 문자열"""
        return format_poly([(c.lat, c.lon) for c in self.ring])

    @property
    def anchor(self) -> Coordinate:
        """꼭짓점 평균 좌표"""
        lat, lon = ring_centroid([(c.lat, c.lon) for c in self.ring])
        return Coordinate(lat=lat, lon=lon)

    @property
    def cache_scope(self) -> str:
        """캐시 키 구분자 (폴리곤이 같을 때만 같은 항목을 공유)"""
        return f"poly:{self.poly_param()}"

class Street(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    name: Optional[str] = None

class IncidentLocation(BaseModel):
    """API가 문자열로 내려주는 위치 정보"""
    model_config = ConfigDict(frozen=True)

    latitude: str = "0"
    longitude: str = "0"
    street: Optional[Street] = None

    @property
    def coordinate(self) -> Coordinate:
        # 한쪽이라도 해석 불가하면 (0, 0)
        try:
            lat = float(self.latitude)
            lon = float(self.longitude)
        except (TypeError, ValueError):
            return Coordinate(lat=0.0, lon=0.0)
        if not (math.isfinite(lat) and math.isfinite(lon)):
            return Coordinate(lat=0.0, lon=0.0)
        return Coordinate(lat=lat, lon=lon)

class IncidentRecord(BaseModel):
    """사건 레코드 (응답 항목 하나당 한 번 생성, 불변)"""
    model_config = ConfigDict(frozen=True)

    id: str
    category: str = "unknown"
    month: str = "----"
    location: IncidentLocation = Field(default_factory=IncidentLocation)

    @property
    def coordinate(self) -> Coordinate:
        return self.location.coordinate

class CategoryGroupSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    is_serious: bool

class CategoryCount(BaseModel):
    category: str
    count: int = Field(ge=0)

class Totals(BaseModel):
    total: int = Field(default=0, ge=0)
    serious: int = Field(default=0, ge=0)

class AggregationResult(BaseModel):
    """조회 시도한 월 목록 + 병합된 레코드"""
    months: List[str] = Field(default_factory=list)
    records: List[IncidentRecord] = Field(default_factory=list)

    @property
    def latest_month(self) -> Optional[str]:
        return self.months[0] if self.months else None

class MonthSnapshot(BaseModel):
    """단일 월 스냅샷"""
    month: str
    records: List[IncidentRecord] = Field(default_factory=list)

class NearbyResult(BaseModel):
    """프레젠테이션 계층으로 전달되는 최종 결과"""
    aggregation: AggregationResult
    totals: Totals
    categories: List[CategoryCount] = Field(default_factory=list)
    place_name: str
    coordinate: Coordinate
    radius_m: float
    month: str
