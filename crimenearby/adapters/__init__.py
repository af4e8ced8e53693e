"""
Adapters for crimenearby hexagonal architecture.

This module contains the concrete implementations of port interfaces
that handle external I/O and infrastructure concerns.
"""

from .police_api import PoliceAPIClient
from .geocoding import NominatimGeocoder, GeocodingError
from .cache import InMemoryIncidentCache

__all__ = ["PoliceAPIClient", "NominatimGeocoder", "GeocodingError", "InMemoryIncidentCache"]
