# crimenearby/settings.py
from __future__ import annotations
from pydantic import BaseModel, Field

class PoliceAPIConfig(BaseModel):
    base_url: str = "https://data.police.uk/api"
    timeout_sec: float = 15.0
    user_agent: str = "crimenearby/0.1"

class GeocoderConfig(BaseModel):
    enabled: bool = True
    base_url: str = "https://nominatim.openstreetmap.org"
    timeout_sec: float = 5.0
    user_agent: str = "crimenearby/0.1"
    language: str = "en"

class Region(BaseModel):
    name: str = "Manchester"
    min_lat: float = 53.35
    max_lat: float = 53.60
    min_lon: float = -2.40
    max_lon: float = -2.10
    center_lat: float = 53.4794
    center_lon: float = -2.2453
    fallback_place: str = "Manchester"
    default_radius_m: float = 1609.0          # 1마일, 지도 뷰 전달용
    # "lat,lon:lat,lon:..." 형식 타일 (NW, NE, SW, SE)
    tiles: dict[str, str] = Field(default_factory=lambda: {
        "NW": "53.55,-2.35:53.55,-2.245:53.48,-2.245:53.48,-2.35",
        "NE": "53.55,-2.245:53.55,-2.14:53.48,-2.14:53.48,-2.245",
        "SW": "53.48,-2.35:53.48,-2.245:53.41,-2.245:53.41,-2.35",
        "SE": "53.48,-2.245:53.48,-2.14:53.41,-2.14:53.41,-2.245",
    })

class Aggregation(BaseModel):
    months_back: int = 6
    cache_precision: int = 3                  # 소수점 3자리 ≈ 110m
    parallel_tiles: bool = False
    max_concurrency: int = 4
    window_timeout_sec: float | None = None   # 설정 시 months × tiles × 호출 타임아웃보다 커야 함

class Observability(BaseModel):
    http_port: int = 8099
    metrics_enabled: bool = True
    service_name: str = "CrimeNearby"
    build_version: str = "0.1.0"
    build_date: str = "2025-09-01"
    log_level: str = "INFO"
    log_json: bool = False

class Settings(BaseModel):
    police_api: PoliceAPIConfig = Field(default_factory=PoliceAPIConfig)
    geocoder: GeocoderConfig = Field(default_factory=GeocoderConfig)
    region: Region = Field(default_factory=Region)
    aggregation: Aggregation = Field(default_factory=Aggregation)
    observability: Observability = Field(default_factory=Observability)
