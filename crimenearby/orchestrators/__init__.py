"""
Orchestrators for crimenearby.

This module contains the orchestrators that coordinate
the flow between ports and adapters.
"""
from .orchestrator import NearbyOrchestrator

__all__ = ["NearbyOrchestrator"]
