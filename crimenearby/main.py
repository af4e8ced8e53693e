# crimenearby/main.py
import os, asyncio, signal
import uvicorn
from crimenearby.settings import Settings
from crimenearby.observability.health import create_app
from crimenearby.observability.logging_setup import setup_logging, get_logger
from crimenearby.adapters.police_api.client import PoliceAPIClient
from crimenearby.adapters.geocoding.nominatim import NominatimGeocoder
from crimenearby.features.place_resolver import StaticGeocoder
from crimenearby.orchestrators.orchestrator import NearbyOrchestrator

def _b(name, default=False): return os.getenv(name, str(default)).lower() in ("1","true","yes","on")

def build_settings() -> Settings:
    s = Settings()

    # Police API
    s.police_api.base_url = os.getenv("POLICE_API_BASE_URL", s.police_api.base_url)
    s.police_api.timeout_sec = float(os.getenv("POLICE_API_TIMEOUT", s.police_api.timeout_sec))
    s.police_api.user_agent = os.getenv("HTTP_USER_AGENT", s.police_api.user_agent)

    # 역지오코딩
    s.geocoder.enabled = _b("GEOCODER_ENABLED", s.geocoder.enabled)
    s.geocoder.base_url = os.getenv("GEOCODER_BASE_URL", s.geocoder.base_url)
    s.geocoder.timeout_sec = float(os.getenv("GEOCODER_TIMEOUT", s.geocoder.timeout_sec))
    s.geocoder.user_agent = os.getenv("HTTP_USER_AGENT", s.geocoder.user_agent)
    s.geocoder.language = os.getenv("GEOCODER_LANGUAGE", s.geocoder.language)

    # 집계
    s.aggregation.months_back = int(os.getenv("MONTHS_BACK", s.aggregation.months_back))
    s.aggregation.parallel_tiles = _b("PARALLEL_TILES", s.aggregation.parallel_tiles)
    s.aggregation.max_concurrency = int(os.getenv("MAX_CONCURRENCY", s.aggregation.max_concurrency))
    timeout = os.getenv("WINDOW_TIMEOUT_SEC")
    if timeout is not None:
        s.aggregation.window_timeout_sec = float(timeout) or None

    # 관측성
    s.observability.http_port = int(os.getenv("HTTP_PORT", s.observability.http_port))
    s.observability.metrics_enabled = _b("METRICS_ENABLED", s.observability.metrics_enabled)
    s.observability.log_level = os.getenv("LOG_LEVEL", s.observability.log_level)
    s.observability.log_json = _b("LOG_JSON", s.observability.log_json)

    return s

async def main():
    s = build_settings()
    setup_logging(s.observability.log_level, json=s.observability.log_json)
    log = get_logger()
    log.info("설정 로드 완료")

    police = PoliceAPIClient(
        base_url=s.police_api.base_url,
        timeout=s.police_api.timeout_sec,
        user_agent=s.police_api.user_agent,
    )
    geocoder = NominatimGeocoder(
        base_url=s.geocoder.base_url,
        timeout=s.geocoder.timeout_sec,
        user_agent=s.geocoder.user_agent,
        language=s.geocoder.language,
    )

    async with police, geocoder:
        orch = NearbyOrchestrator.from_settings(
            s, police, geocoder if s.geocoder.enabled else StaticGeocoder()
        )
        log.info(f"오케스트레이터 생성 완료 tiles:{len(orch.tiles)} months_back:{orch.months_back}")

        app = create_app(s, orch)
        server = uvicorn.Server(
            uvicorn.Config(app, host="0.0.0.0", port=s.observability.http_port, log_level="info")
        )
        http_task = asyncio.create_task(server.serve())
        log.info("HTTP 서버 시작됨")

        stop = asyncio.Future()
        try:
            loop = asyncio.get_running_loop()
            for sig in (signal.SIGTERM, signal.SIGINT):
                try: loop.add_signal_handler(sig, lambda: (not stop.done()) and stop.set_result(True))
                except NotImplementedError: pass
        except RuntimeError: pass

        await asyncio.wait({stop, http_task}, return_when=asyncio.FIRST_COMPLETED)
        server.should_exit = True
        await http_task

def run():
    asyncio.run(main())

if __name__ == "__main__":
    run()
