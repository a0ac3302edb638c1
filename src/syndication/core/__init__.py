"""Feed synchronization core.

External code (an API layer, the CLI) should go through the service
facades:

    from syndication.core.services import SyncService, FetcherService

    service = SyncService(store)
    report = service.sync_user(user)

Available Services:
    - SyncService: single feed, category, user and all-user syncs
    - FetcherService: metadata preview of a newly subscribed feed
    - SchedulerService: periodic all-user sync
"""

# Service Facades
from syndication.core.services import (
    FetcherService,
    SchedulerService,
    SyncService,
    create_fetcher_service,
    create_scheduler_service,
    create_sync_service,
)

# Result types (for type hints and return values)
from syndication.core.detector import DetectionResult
from syndication.core.fetcher import FetchResult
from syndication.core.parser import FeedDocument, RemoteItem
from syndication.core.scheduler import SchedulerStats
from syndication.core.sync import FeedSyncOutcome, SyncReport

__all__ = [
    # Service Facades
    "FetcherService",
    "SchedulerService",
    "SyncService",
    # Service factory functions
    "create_fetcher_service",
    "create_scheduler_service",
    "create_sync_service",
    # Result types
    "DetectionResult",
    "FeedDocument",
    "FeedSyncOutcome",
    "FetchResult",
    "RemoteItem",
    "SchedulerStats",
    "SyncReport",
]
