"""
Service layer for taskstreak

Services:
- TrackerService: tasks, daily progress and statistics

Use ServiceContainer to build services against a store.
"""

from taskstreak.services.container import ServiceContainer
from taskstreak.services.tracker_service import TrackerService

__all__ = [
    "ServiceContainer",
    "TrackerService",
]
