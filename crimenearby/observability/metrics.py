"""
Metrics definitions for crimenearby.

This module defines Prometheus metrics for monitoring
the incident aggregation pipeline.
"""

from prometheus_client import Counter, Histogram

# 카운터 메트릭
tile_fetches = Counter(
    "tile_fetches_total",
    "Source client calls per (tile, month) by outcome",
    ["outcome"]
)

cache_lookups = Counter(
    "incident_cache_lookups_total",
    "Incident cache lookups",
    ["result"]
)

incidents_merged = Counter(
    "incidents_merged_total",
    "Records appended to merged window results"
)

window_failures = Counter(
    "window_failures_total",
    "Window-level aggregation failures absorbed by the orchestrator"
)

place_resolutions = Counter(
    "place_resolutions_total",
    "Reverse geocoding attempts",
    ["outcome"]
)

# 히스토그램 메트릭
window_duration_seconds = Histogram(
    "window_duration_seconds",
    "Time spent fetching a full tiles x months window",
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0]
)
