"""
Common 모듈 단위 테스트

이 모듈은 좌표 검증, 경계 상자, 폴리곤 문자열 유틸리티를 테스트합니다.
"""

import math
import pytest
from hypothesis import given, strategies as st

from crimenearby.common.geo import (
    validate_coordinates, in_bounding_box, parse_poly, format_poly, ring_centroid
)

MANCHESTER_BBOX = dict(min_lat=53.35, max_lat=53.60, min_lon=-2.40, max_lon=-2.10)


class TestValidateCoordinates:
    """좌표 유효성 테스트"""
    
    def test_valid(self):
        assert validate_coordinates(53.4794, -2.2453)
        assert validate_coordinates(-90, 180)
    
    def test_out_of_range(self):
        assert not validate_coordinates(91, 0)
        assert not validate_coordinates(0, -181)
    
    def test_non_finite(self):
        assert not validate_coordinates(math.nan, 0)
        assert not validate_coordinates(0, math.inf)


class TestInBoundingBox:
    """경계 상자 포함 테스트"""
    
    def test_center_inside(self):
        assert in_bounding_box(53.4794, -2.2453, **MANCHESTER_BBOX)
    
    @pytest.mark.parametrize("lat,lon", [
        (53.35, -2.40), (53.60, -2.10), (53.35, -2.10), (53.60, -2.40),
    ])
    def test_edges_inclusive(self, lat, lon):
        assert in_bounding_box(lat, lon, **MANCHESTER_BBOX)
    
    @pytest.mark.parametrize("lat,lon", [
        (53.3499, -2.2), (53.6001, -2.2), (53.5, -2.4001), (53.5, -2.0999),
        (51.5074, -0.1278),
    ])
    def test_outside(self, lat, lon):
        assert not in_bounding_box(lat, lon, **MANCHESTER_BBOX)
    
    def test_nan_is_outside(self):
        assert not in_bounding_box(math.nan, -2.2, **MANCHESTER_BBOX)
        assert not in_bounding_box(53.5, -math.inf, **MANCHESTER_BBOX)


class TestPoly:
    """폴리곤 문자열 테스트"""
    
    def test_parse(self):
        ring = parse_poly("53.55,-2.35:53.55,-2.245:53.48,-2.245")
        assert ring == [(53.55, -2.35), (53.55, -2.245), (53.48, -2.245)]
    
    def test_parse_strips_whitespace(self):
        assert parse_poly(" 1,2:3,4 ") == [(1.0, 2.0), (3.0, 4.0)]
    
    @pytest.mark.parametrize("poly", ["", "1,2:3", "1,2,3:4,5", "a,b:1,2", "1,2::3,4"])
    def test_parse_malformed(self, poly):
        with pytest.raises(ValueError):
            parse_poly(poly)
    
    def test_format(self):
        assert format_poly([(53.55, -2.35), (53.48, -2.245)]) == "53.55,-2.35:53.48,-2.245"
    
    @given(st.lists(
        st.tuples(st.floats(-90, 90, allow_nan=False), st.floats(-180, 180, allow_nan=False)),
        min_size=1, max_size=10,
    ))
    def test_format_then_parse_is_lossless(self, ring):
        assert parse_poly(format_poly(ring)) == ring


class TestRingCentroid:
    """꼭짓점 평균 테스트"""
    
    def test_square(self):
        assert ring_centroid([(0, 0), (0, 2), (2, 2), (2, 0)]) == (1.0, 1.0)
    
    def test_closed_ring_ignores_repeat(self):
        assert ring_centroid([(0, 0), (0, 2), (2, 2), (2, 0), (0, 0)]) == (1.0, 1.0)
    
    def test_single_point(self):
        assert ring_centroid([(53.5, -2.2)]) == (53.5, -2.2)
    
    def test_empty(self):
        with pytest.raises(ValueError):
            ring_centroid([])
