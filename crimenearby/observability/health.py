"""
HTTP endpoints for crimenearby.

This module implements health, readiness, metrics and info endpoints
plus the incident query endpoints consumed by the presentation layer.
"""

import time
from typing import Optional
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import Response, JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from crimenearby.core.models import Coordinate
from crimenearby.orchestrators.orchestrator import NearbyOrchestrator
from crimenearby.settings import Settings
from crimenearby.observability.logging_setup import get_logger

log = get_logger("crimenearby.http")

MAX_MONTHS_BACK = 12

def create_app(settings: Settings, orchestrator: Optional[NearbyOrchestrator] = None) -> FastAPI:
    """FastAPI 애플리케이션을 생성합니다."""
    app = FastAPI(
        title=settings.observability.service_name,
        version=settings.observability.build_version,
        description="Recent street-level incidents around a point"
    )
    
    start_time = time.time()
    
    @app.get("/health")
    async def health():
        """헬스 체크 엔드포인트"""
        return JSONResponse({
            "status": "ok",
            "service": settings.observability.service_name,
            "timestamp": time.time()
        })
    
    @app.get("/ready")
    async def ready():
        """레디니스 체크 엔드포인트"""
        if orchestrator is None:
            return JSONResponse({
                "status": "not_ready",
                "service": settings.observability.service_name,
                "timestamp": time.time()
            }, status_code=503)
        return JSONResponse({
            "status": "ready",
            "service": settings.observability.service_name,
            "tiles": len(orchestrator.tiles),
            "timestamp": time.time()
        })
    
    @app.get("/metrics")
    async def metrics():
        """Prometheus 메트릭 엔드포인트"""
        if not settings.observability.metrics_enabled:
            raise HTTPException(status_code=503, detail="Metrics disabled")
        
        try:
            return Response(
                generate_latest(),
                media_type=CONTENT_TYPE_LATEST
            )
        except Exception as e:
            log.error(f"메트릭 생성 오류: {e}")
            raise HTTPException(status_code=500, detail="Metrics generation failed")
    
    @app.get("/info")
    async def info():
        """서비스 정보 엔드포인트"""
        uptime = time.time() - start_time
        region = settings.region
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "build_date": settings.observability.build_date,
            "uptime_seconds": int(uptime),
            "metrics_enabled": settings.observability.metrics_enabled,
            "log_level": settings.observability.log_level,
            "region": {
                "name": region.name,
                "bbox": [region.min_lat, region.min_lon, region.max_lat, region.max_lon],
                "center": [region.center_lat, region.center_lon],
                "radius_m": region.default_radius_m,
                "tiles": list(region.tiles.keys()),
            },
            "months_back": settings.aggregation.months_back,
        })
    
    @app.get("/incidents/nearby")
    async def incidents_nearby(lat: Optional[float] = None,
                               lon: Optional[float] = None,
                               months_back: Optional[int] = Query(default=None, ge=1, le=MAX_MONTHS_BACK)):
        """주변 사건 조회 엔드포인트"""
        if orchestrator is None:
            raise HTTPException(status_code=503, detail="Pipeline not configured")
        
        # 위도/경도 중 하나라도 없으면 좌표 없음으로 처리
        coord = Coordinate(lat=lat, lon=lon) if lat is not None and lon is not None else None
        result = await orchestrator.fetch_nearby(coord, months_back)
        return JSONResponse(result.model_dump(mode="json"))
    
    @app.get("/incidents/point")
    async def incidents_point(lat: Optional[float] = None,
                              lon: Optional[float] = None,
                              months_back: Optional[int] = Query(default=None, ge=1, le=MAX_MONTHS_BACK)):
        """단일 좌표 기간 조회 엔드포인트 (데이터가 있는 월만)"""
        if orchestrator is None:
            raise HTTPException(status_code=503, detail="Pipeline not configured")
        
        coord = Coordinate(lat=lat, lon=lon) if lat is not None and lon is not None else None
        result = await orchestrator.fetch_point_window(coord, months_back)
        return JSONResponse(result.model_dump(mode="json"))
    
    @app.get("/incidents/latest")
    async def incidents_latest(lat: Optional[float] = None, lon: Optional[float] = None):
        """데이터가 있는 최근 월 조회 엔드포인트"""
        if orchestrator is None:
            raise HTTPException(status_code=503, detail="Pipeline not configured")
        
        coord = Coordinate(lat=lat, lon=lon) if lat is not None and lon is not None else None
        snapshot = await orchestrator.fetch_latest(coord)
        return JSONResponse(snapshot.model_dump(mode="json"))
    
    @app.get("/")
    async def root():
        """루트 엔드포인트"""
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "endpoints": {
                "health": "/health",
                "ready": "/ready", 
                "metrics": "/metrics",
                "info": "/info",
                "incidents_nearby": "/incidents/nearby",
                "incidents_point": "/incidents/point",
                "incidents_latest": "/incidents/latest"
            }
        })
    
    return app
