"""
Place name resolution for crimenearby.

Reverse-resolves a coordinate to a human-readable place name, falling
back to a static name on any failure.
"""

from crimenearby.core.models import Coordinate
from crimenearby.observability import metrics
from crimenearby.observability.logging_setup import get_logger
from crimenearby.ports.geocoder import ReverseGeocoderPort

log = get_logger("crimenearby.place")

class PlaceResolver:
    """좌표 → 장소 이름 변환기 (예외를 밖으로 던지지 않음)"""
    
    def __init__(self, geocoder: ReverseGeocoderPort, fallback_name: str = "Manchester"):
        self.geocoder = geocoder
        self.fallback_name = fallback_name
    
    async def resolve(self, coord: Coordinate) -> str:
        """
        장소 이름을 반환합니다.
        
        첫 번째 결과의 locality → sub_administrative_area → administrative_area
        순으로 사용하고, 실패하면 fallback_name 을 반환합니다.
        """
        try:
            placemarks = await self.geocoder.reverse(coord.lat, coord.lon)
        except Exception as e:
            metrics.place_resolutions.labels(outcome="error").inc()
            log.warning(f"역지오코딩 실패 lat:{coord.lat} lon:{coord.lon} error:{e!r}")
            return self.fallback_name
        
        if placemarks:
            p = placemarks[0]
            name = p.locality or p.sub_administrative_area or p.administrative_area
            if name:
                metrics.place_resolutions.labels(outcome="resolved").inc()
                return name
        
        metrics.place_resolutions.labels(outcome="fallback").inc()
        return self.fallback_name

class StaticGeocoder:
    """항상 빈 결과를 돌려주는 지오코더 (역지오코딩 비활성화용)"""
    
    async def reverse(self, lat: float, lon: float):
        return []
