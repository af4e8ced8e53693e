"""
data.police.uk API client for crimenearby.

This module provides a client for the street-level crime endpoint,
returning one fetch outcome per (spatial selector, month) query.
"""

import json
import aiohttp
from typing import Dict, Optional
from crimenearby.core.models import Coordinate, Tile
from crimenearby.core.normalize import to_incidents
from crimenearby.core.outcomes import (
    FetchOutcome, IncidentBatch, NoDataForMonth, HttpError, MalformedBody, excerpt
)
from crimenearby.observability.logging_setup import get_logger

log = get_logger("crimenearby.police_api")

CRIMES_ENDPOINT = "/crimes-street/all-crime"

class PoliceAPIClient:
    """data.police.uk API 클라이언트"""
    
    def __init__(self, 
                 base_url: str = "https://data.police.uk/api", 
                 timeout: float = 15.0,
                 user_agent: str = "crimenearby/0.1",
                 session: Optional[aiohttp.ClientSession] = None):
        """
        초기화합니다.
        
        Args:
            base_url: API 기본 URL
            timeout: 요청 타임아웃 (초)
            user_agent: User-Agent 헤더
            session: 외부에서 관리하는 세션 (선택)
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.user_agent = user_agent
        self.session = session
        self._owns_session = session is None
        
        log.info(f"Police API 클라이언트 초기화됨 base_url:{self.base_url}")
    
    async def __aenter__(self):
        """비동기 컨텍스트 매니저 진입"""
        if self.session is None:
            self.session = aiohttp.ClientSession(
                headers={"User-Agent": self.user_agent, "Accept": "application/json"},
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self._owns_session = True
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """비동기 컨텍스트 매니저 종료"""
        if self.session and self._owns_session:
            await self.session.close()
            self.session = None
    
    @staticmethod
    def build_params(iso_month: str, *,
                     tile: Optional[Tile] = None,
                     point: Optional[Coordinate] = None) -> Dict[str, str]:
        """쿼리 파라미터 생성 (tile 우선)"""
        params = {"date": iso_month}
        if tile is not None:
            params["poly"] = tile.poly_param()
        elif point is not None:
            params["lat"] = repr(point.lat)
            params["lng"] = repr(point.lon)
        return params
    
    async def fetch_month(self, iso_month: str, *,
                          tile: Optional[Tile] = None,
                          point: Optional[Coordinate] = None) -> FetchOutcome:
        """
        한 달치 사건을 조회합니다. 재시도는 하지 않습니다.
        
        Args:
            iso_month: ``YYYY-MM``
            tile: 폴리곤 타일
            point: 단일 좌표
            
        Returns:
            FetchOutcome
            
        Raises:
            RuntimeError: 세션 없이 호출한 경우
            aiohttp.ClientError: 전송 계층 오류
        """
        if not self.session:
            raise RuntimeError("세션이 초기화되지 않았습니다. async with를 사용하세요.")
        
        url = f"{self.base_url}{CRIMES_ENDPOINT}"
        params = self.build_params(iso_month, tile=tile, point=point)
        log.debug(f"GET {url} params:{params}")
        
        async with self.session.get(url, params=params) as response:
            status = response.status
            if status == 404:
                return NoDataForMonth(month=iso_month)
            if not 200 <= status < 300:
                return HttpError(status=status)
            body = (await response.read()).decode("utf-8", errors="replace")
        
        try:
            records = to_incidents(json.loads(body))
        except ValueError as e:
            # json.JSONDecodeError 도 ValueError
            log.debug(f"응답 본문 해석 실패 month:{iso_month} error:{e}")
            return MalformedBody(excerpt=excerpt(body))
        
        return IncidentBatch(records=records)
