"""
Port interfaces for crimenearby hexagonal architecture.

This module defines the port interfaces (Protocols) that define
the contracts between the core domain and external adapters.
"""

from .incident_source import IncidentSourcePort
from .cache import IncidentCachePort
from .geocoder import Placemark, ReverseGeocoderPort

__all__ = ["IncidentSourcePort", "IncidentCachePort", "Placemark", "ReverseGeocoderPort"]
