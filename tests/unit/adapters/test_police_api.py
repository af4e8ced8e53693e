"""
Police API 클라이언트 단위 테스트

aiohttp 세션을 목업으로 대체해 상태 코드/본문별 조회 결과를 검증합니다.
"""

import json
import pytest
import aiohttp
from unittest.mock import AsyncMock, MagicMock, patch

from crimenearby.adapters.police_api.client import PoliceAPIClient, CRIMES_ENDPOINT
from crimenearby.core.models import Coordinate, Tile
from crimenearby.core.outcomes import HttpError, IncidentBatch, MalformedBody, NoDataForMonth


def mock_session(status: int, body: bytes = b"[]"):
    """session.get(...) 이 비동기 컨텍스트 매니저로 응답을 돌려주도록 구성"""
    response = MagicMock()
    response.status = status
    response.read = AsyncMock(return_value=body)
    session = MagicMock()
    session.get.return_value.__aenter__.return_value = response
    session.get.return_value.__aexit__.return_value = False
    return session


@pytest.fixture
def tile():
    return Tile.from_poly("NW", "53.55,-2.35:53.55,-2.245:53.48,-2.245:53.48,-2.35")


class TestPoliceAPIClientBasics:
    """초기화/파라미터 테스트"""
    
    def test_initialization_strips_trailing_slash(self):
        client = PoliceAPIClient(base_url="https://data.police.uk/api/")
        assert client.base_url == "https://data.police.uk/api"
        assert client.session is None
    
    def test_params_tile_takes_precedence(self, tile):
        params = PoliceAPIClient.build_params("2025-06", tile=tile, point=Coordinate(lat=1, lon=2))
        assert params == {"date": "2025-06", "poly": tile.poly_param()}
    
    def test_params_point(self):
        params = PoliceAPIClient.build_params("2025-06", point=Coordinate(lat=53.4794, lon=-2.2453))
        assert params == {"date": "2025-06", "lat": "53.4794", "lng": "-2.2453"}
    
    def test_params_date_only(self):
        assert PoliceAPIClient.build_params("2025-06") == {"date": "2025-06"}
    
    @pytest.mark.asyncio
    async def test_fetch_without_session(self):
        client = PoliceAPIClient()
        with pytest.raises(RuntimeError, match="세션이 초기화되지 않았습니다"):
            await client.fetch_month("2025-06")
    
    @pytest.mark.asyncio
    async def test_context_manager_creates_and_closes_session(self):
        with patch("aiohttp.ClientSession") as session_class:
            session = MagicMock()
            session.close = AsyncMock()
            session_class.return_value = session
            
            client = PoliceAPIClient()
            async with client as c:
                assert c.session is session
            
            session.close.assert_awaited_once()
            assert client.session is None
    
    @pytest.mark.asyncio
    async def test_injected_session_not_closed(self):
        session = MagicMock()
        session.close = AsyncMock()
        async with PoliceAPIClient(session=session) as c:
            assert c.session is session
        session.close.assert_not_called()


class TestFetchMonthOutcomes:
    """상태 코드/본문별 결과 테스트"""
    
    @pytest.mark.asyncio
    async def test_ok_records(self, tile, raw_factory):
        body = json.dumps([raw_factory(1), raw_factory(2, "drugs")]).encode()
        session = mock_session(200, body)
        client = PoliceAPIClient(session=session)
        
        outcome = await client.fetch_month("2025-06", tile=tile)
        
        assert isinstance(outcome, IncidentBatch)
        assert [r.id for r in outcome.records] == ["1", "2"]
        assert outcome.records[1].category == "drugs"
        args, kwargs = session.get.call_args
        assert args[0] == "https://data.police.uk/api" + CRIMES_ENDPOINT
        assert kwargs["params"] == {"date": "2025-06", "poly": tile.poly_param()}
    
    @pytest.mark.asyncio
    async def test_ok_empty(self, tile):
        outcome = await PoliceAPIClient(session=mock_session(200, b"[]")).fetch_month("2025-06", tile=tile)
        assert outcome == IncidentBatch(records=[])
    
    @pytest.mark.asyncio
    async def test_404_is_no_data(self, tile):
        outcome = await PoliceAPIClient(session=mock_session(404, b"")).fetch_month("2025-06", tile=tile)
        assert outcome == NoDataForMonth(month="2025-06")
    
    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 429, 500, 503, 302])
    async def test_other_status_is_http_error(self, tile, status):
        outcome = await PoliceAPIClient(session=mock_session(status, b"oops")).fetch_month("2025-06", tile=tile)
        assert outcome == HttpError(status=status)
    
    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [b"<html>busy</html>", b'{"error": "x"}', b"[1, 2]", b"\xff\xfe"])
    async def test_malformed_body(self, tile, body):
        outcome = await PoliceAPIClient(session=mock_session(200, body)).fetch_month("2025-06", tile=tile)
        assert isinstance(outcome, MalformedBody)
    
    @pytest.mark.asyncio
    async def test_malformed_excerpt_is_bounded(self, tile):
        body = b"x" * 5000
        outcome = await PoliceAPIClient(session=mock_session(200, body)).fetch_month("2025-06", tile=tile)
        assert isinstance(outcome, MalformedBody)
        assert outcome.excerpt == "x" * 200
    
    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, tile):
        session = MagicMock()
        session.get.return_value.__aenter__.side_effect = aiohttp.ClientConnectionError("down")
        with pytest.raises(aiohttp.ClientError):
            await PoliceAPIClient(session=session).fetch_month("2025-06", tile=tile)
