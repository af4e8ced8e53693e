"""
Geofence for crimenearby.

Validates a coordinate against the supported bounding box and falls
back to the configured region centre when it is missing or outside.
"""

from typing import Optional
from crimenearby.core.models import BoundingBox, Coordinate
from crimenearby.observability.logging_setup import get_logger

log = get_logger("crimenearby.geofence")

class Geofence:
    """지원 지역 경계 검사기"""

    def __init__(self, bbox: BoundingBox, fallback_center: Coordinate):
        self.bbox = bbox
        self.fallback_center = fallback_center

    @classmethod
    def from_settings(cls, region) -> "Geofence":
        """settings.Region 으로부터 생성"""
        return cls(
            BoundingBox(min_lat=region.min_lat, max_lat=region.max_lat,
                        min_lon=region.min_lon, max_lon=region.max_lon),
            Coordinate(lat=region.center_lat, lon=region.center_lon),
        )

    def validate(self, coord: Optional[Coordinate]) -> Coordinate:
        """
        좌표를 검증합니다.
        
        Args:
            coord: 입력 좌표 (None 가능)
            
        Returns:
            경계 안이면 입력 그대로, 아니면 중심 좌표
        """
        if coord is None:
            return self.fallback_center
        if not self.bbox.contains(coord):
            log.debug(f"지원 지역 밖 좌표, 중심으로 대체 lat:{coord.lat} lon:{coord.lon}")
            return self.fallback_center
        return coord
