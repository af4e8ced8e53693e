from .memory import InMemoryIncidentCache

__all__ = ["InMemoryIncidentCache"]
