"""crimenearby - recent street-level incidents around a point."""

__version__ = "0.1.0"
