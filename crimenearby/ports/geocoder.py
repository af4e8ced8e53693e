"""
Reverse geocoder port interface.

This module defines the protocol for resolving a coordinate to
placemarks.
"""

from typing import List, Optional, Protocol
from pydantic import BaseModel

class Placemark(BaseModel):
    """역지오코딩 결과 한 건"""
    locality: Optional[str] = None
    sub_administrative_area: Optional[str] = None
    administrative_area: Optional[str] = None

class ReverseGeocoderPort(Protocol):
    """역지오코딩 포트 인터페이스"""
    
    async def reverse(self, lat: float, lon: float) -> List[Placemark]:
        """
        좌표를 장소 목록으로 변환합니다.
        
        Args:
            lat: 위도
            lon: 경도
            
        Returns:
            Placemark 목록 (없으면 빈 목록)
        """
        ...
