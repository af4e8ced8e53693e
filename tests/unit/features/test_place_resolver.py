"""
장소 이름 변환기 단위 테스트
"""

import pytest
from unittest.mock import AsyncMock

from crimenearby.core.models import Coordinate
from crimenearby.features.place_resolver import PlaceResolver, StaticGeocoder
from crimenearby.ports.geocoder import Placemark

CENTER = Coordinate(lat=53.4794, lon=-2.2453)


def geocoder_returning(result=None, error=None):
    geocoder = AsyncMock()
    if error is not None:
        geocoder.reverse.side_effect = error
    else:
        geocoder.reverse.return_value = result
    return geocoder


class TestPlaceResolver:
    
    @pytest.mark.asyncio
    async def test_locality_first(self):
        geocoder = geocoder_returning([Placemark(locality="Salford", sub_administrative_area="Greater Manchester")])
        assert await PlaceResolver(geocoder).resolve(CENTER) == "Salford"
        geocoder.reverse.assert_awaited_once_with(53.4794, -2.2453)
    
    @pytest.mark.asyncio
    async def test_sub_admin_then_admin(self):
        resolver = PlaceResolver(geocoder_returning([Placemark(sub_administrative_area="Greater Manchester")]))
        assert await resolver.resolve(CENTER) == "Greater Manchester"
        
        resolver = PlaceResolver(geocoder_returning([Placemark(administrative_area="England")]))
        assert await resolver.resolve(CENTER) == "England"
    
    @pytest.mark.asyncio
    async def test_only_first_placemark_used(self):
        geocoder = geocoder_returning([Placemark(), Placemark(locality="Stockport")])
        assert await PlaceResolver(geocoder).resolve(CENTER) == "Manchester"
    
    @pytest.mark.asyncio
    async def test_empty_result_falls_back(self):
        assert await PlaceResolver(geocoder_returning([])).resolve(CENTER) == "Manchester"
    
    @pytest.mark.asyncio
    async def test_error_falls_back(self):
        resolver = PlaceResolver(geocoder_returning(error=TimeoutError()), fallback_name="Leeds")
        assert await resolver.resolve(CENTER) == "Leeds"
    
    @pytest.mark.asyncio
    async def test_static_geocoder(self):
        assert await StaticGeocoder().reverse(1.0, 2.0) == []
        assert await PlaceResolver(StaticGeocoder()).resolve(CENTER) == "Manchester"
