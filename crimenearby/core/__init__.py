"""
Core domain models and pure functions for crimenearby.

This module contains the domain models and pure business logic
that are independent of external I/O and infrastructure concerns.
"""

from .models import (
    Coordinate, BoundingBox, Tile, IncidentRecord, IncidentLocation, Street,
    CategoryGroupSpec, CategoryCount, Totals, AggregationResult, MonthSnapshot, NearbyResult,
)
from .outcomes import FetchOutcome, IncidentBatch, NoDataForMonth, HttpError, MalformedBody
from .normalize import to_incident, to_incidents
from .categorize import group_counts, total_and_serious, is_serious_group
from .geofence import Geofence

__all__ = [
    "Coordinate", "BoundingBox", "Tile", "IncidentRecord", "IncidentLocation", "Street",
    "CategoryGroupSpec", "CategoryCount", "Totals", "AggregationResult", "MonthSnapshot",
    "NearbyResult", "FetchOutcome", "IncidentBatch", "NoDataForMonth", "HttpError",
    "MalformedBody", "to_incident", "to_incidents", "group_counts", "total_and_serious",
    "is_serious_group", "Geofence",
]
