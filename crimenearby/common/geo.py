"""
Geographic utilities for crimenearby.

This module provides coordinate validation, bounding-box checks and
conversion between polygon rings and the ``lat,lon:lat,lon`` string
format used by the police data API.
"""

import math
from typing import List, Tuple

def validate_coordinates(lat: float, lon: float) -> bool:
    """
    좌표가 유효한지 확인합니다.
    
    Args:
        lat: 위도
        lon: 경도
        
    Returns:
        유한한 값이고 범위 안이면 True
    """
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    return -90 <= lat <= 90 and -180 <= lon <= 180

def in_bounding_box(lat: float, lon: float,
                    min_lat: float, max_lat: float,
                    min_lon: float, max_lon: float) -> bool:
    """경계 상자 포함 여부 (경계선 포함, NaN/inf는 False)"""
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    return min_lat <= lat <= max_lat and min_lon <= lon <= max_lon

def parse_poly(poly: str) -> List[Tuple[float, float]]:
    """
    ``lat,lon:lat,lon:...`` 문자열을 (위도, 경도) 목록으로 변환합니다.
    
    Args:
        poly: 폴리곤 문자열
        
    Returns:
        [(위도, 경도), ...]
        
    Raises:
        ValueError: 형식이 잘못된 경우
    """
    ring: List[Tuple[float, float]] = []
    for pair in poly.strip().split(":"):
        parts = pair.split(",")
        if len(parts) != 2:
            raise ValueError(f"잘못된 폴리곤 좌표: {pair!r}")
        ring.append((float(parts[0]), float(parts[1])))
    return ring

def format_poly(ring: List[Tuple[float, float]]) -> str:
    """(위도, 경도) 목록을 API용 ``lat,lon:lat,lon`` 문자열로 변환합니다."""
    return ":".join(f"{lat!r},{lon!r}" for lat, lon in ring)

def ring_centroid(ring: List[Tuple[float, float]]) -> Tuple[float, float]:
    """
    꼭짓점 평균 좌표를 계산합니다.
    
    닫힌 링(마지막 점 == 첫 점)이면 중복 점은 제외합니다.
    """
    if not ring:
        raise ValueError("빈 폴리곤")
    points = ring[:-1] if len(ring) > 1 and ring[0] == ring[-1] else ring
    lat = sum(p[0] for p in points) / len(points)
    lon = sum(p[1] for p in points) / len(points)
    return (lat, lon)
