"""
Service Container - Dependency Injection Container

Holds the store for one application instance and lazily builds services
on top of it. The API keeps one container on app.state; there is no
process-wide instance.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

from taskstreak.stats import DISTINCT_DAYS
from taskstreak.store.base import TrackerStore

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """
    Simple dependency injection container for services.

    Services are lazy-loaded on first access via properties.
    """

    store: TrackerStore
    streak_mode: str = DISTINCT_DAYS
    seed_defaults: bool = True

    _tracker_service: Optional[object] = field(default=None, init=False, repr=False)

    @property
    def tracker_service(self):
        """Get TrackerService instance (lazy-loaded)"""
        if self._tracker_service is None:
            from taskstreak.services.tracker_service import TrackerService
            self._tracker_service = TrackerService(self.store, streak_mode=self.streak_mode)
            logger.debug("TrackerService instantiated")
        return self._tracker_service

    async def startup(self) -> None:
        """Open the store and seed default tasks if configured"""
        await self.store.open()
        if self.seed_defaults:
            await self.store.seed_defaults()

    async def shutdown(self) -> None:
        await self.store.close()
