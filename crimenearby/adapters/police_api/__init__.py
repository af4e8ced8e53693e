from .client import PoliceAPIClient

__all__ = ["PoliceAPIClient"]
