"""
OpenStreetMap Nominatim reverse geocoder for crimenearby.

This module resolves a coordinate to placemarks using the public
Nominatim ``/reverse`` endpoint (JSON v2 with address details).
"""

import aiohttp
from typing import Any, Dict, List, Optional
from crimenearby.ports.geocoder import Placemark
from crimenearby.observability.logging_setup import get_logger

log = get_logger("crimenearby.geocoder")

LOCALITY_KEYS = ("city", "town", "village", "hamlet", "suburb")
SUB_ADMIN_KEYS = ("county", "state_district")
ADMIN_KEYS = ("state",)

class GeocodingError(Exception):
    """역지오코딩 요청 실패"""

def _first(address: Dict[str, Any], keys) -> Optional[str]:
    for k in keys:
        v = address.get(k)
        if isinstance(v, str) and v:
            return v
    return None

def placemark_from_address(address: Dict[str, Any]) -> Placemark:
    """Nominatim address 객체 → Placemark"""
    return Placemark(
        locality=_first(address, LOCALITY_KEYS),
        sub_administrative_area=_first(address, SUB_ADMIN_KEYS),
        administrative_area=_first(address, ADMIN_KEYS),
    )

class NominatimGeocoder:
    """Nominatim 역지오코딩 클라이언트"""
    
    def __init__(self,
                 base_url: str = "https://nominatim.openstreetmap.org",
                 timeout: float = 5.0,
                 user_agent: str = "crimenearby/0.1",
                 language: str = "en",
                 session: Optional[aiohttp.ClientSession] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.user_agent = user_agent
        self.language = language
        self.session = session
        self._owns_session = session is None
    
    async def __aenter__(self):
        if self.session is None:
            self.session = aiohttp.ClientSession(
                headers={"User-Agent": self.user_agent, "Accept-Language": self.language},
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self._owns_session = True
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session and self._owns_session:
            await self.session.close()
            self.session = None
    
    async def reverse(self, lat: float, lon: float) -> List[Placemark]:
        """
        좌표를 역지오코딩합니다.
        
        Args:
            lat: 위도
            lon: 경도
            
        Returns:
            Placemark 목록 (결과 없으면 빈 목록)
            
        Raises:
            GeocodingError: 세션 없음 또는 200 이외 응답
        """
        if not self.session:
            raise GeocodingError("세션이 초기화되지 않았습니다. async with를 사용하세요.")
        
        params = {
            "lat": repr(lat),
            "lon": repr(lon),
            "format": "jsonv2",
            "addressdetails": "1",
            "zoom": "14",
        }
        async with self.session.get(f"{self.base_url}/reverse", params=params) as response:
            if response.status != 200:
                raise GeocodingError(f"Nominatim HTTP {response.status}")
            data = await response.json(content_type=None)
        
        if not isinstance(data, dict) or "error" in data:
            log.debug(f"역지오코딩 결과 없음 lat:{lat} lon:{lon}")
            return []
        
        address = data.get("address")
        if not isinstance(address, dict):
            return []
        return [placemark_from_address(address)]
