"""
Facade services for the synchronization core.

External callers (an API layer, the CLI) use these services rather than
the engine classes directly.

Example:
    from syndication.core.services import SyncService

    service = SyncService(store)
    outcome = service.sync_feed(feed, user)
"""

from syndication.core.services.fetcher_service import FetcherService, create_fetcher_service
from syndication.core.services.scheduler_service import (
    SchedulerService,
    create_scheduler_service,
)
from syndication.core.services.sync_service import SyncService, create_sync_service

__all__ = [
    # Services
    "FetcherService",
    "SchedulerService",
    "SyncService",
    # Factory functions
    "create_fetcher_service",
    "create_scheduler_service",
    "create_sync_service",
]
