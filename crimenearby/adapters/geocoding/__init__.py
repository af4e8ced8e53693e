from .nominatim import NominatimGeocoder, GeocodingError

__all__ = ["NominatimGeocoder", "GeocodingError"]
