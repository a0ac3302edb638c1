"""
Facade for periodic sync scheduling.
"""

from typing import TYPE_CHECKING, Optional

from syndication.config import Config
from syndication.logger import get_logger

if TYPE_CHECKING:
    from apscheduler.schedulers.background import BackgroundScheduler

    from syndication.core.scheduler import SchedulerStats
    from syndication.core.sync import SyncEngine, SyncReport


class SchedulerService:
    """Facade for periodic sync scheduling."""

    def __init__(
        self,
        engine: "SyncEngine",
        interval_minutes: Optional[int] = None,
        scheduler: Optional["BackgroundScheduler"] = None,
        config: Optional[Config] = None,
    ):
        """Initialize scheduler service.

        Args:
            engine: Engine to run on each tick
            interval_minutes: Override the sync interval
            scheduler: Optional APScheduler instance
            config: Config to use instead of the global one
        """
        from syndication.core.factories import create_scheduler

        self._scheduler = create_scheduler(
            engine,
            interval_minutes=interval_minutes,
            scheduler=scheduler,
            config=config,
        )
        self._logger = get_logger(__name__)

    def start(self) -> None:
        """Start periodic syncing; the first run is due immediately."""
        self._scheduler.start()

    def stop(self) -> None:
        """Stop periodic syncing without waiting for an in-flight run."""
        self._scheduler.stop()

    def is_running(self) -> bool:
        """Check if the scheduler is running."""
        return self._scheduler.is_running()

    def run_now(self) -> Optional["SyncReport"]:
        """Run one sync pass immediately on the calling thread."""
        return self._scheduler.run_now()

    def get_stats(self) -> "SchedulerStats":
        """Get scheduler statistics."""
        return self._scheduler.get_stats()


def create_scheduler_service(
    engine: "SyncEngine",
    interval_minutes: Optional[int] = None,
    scheduler: Optional["BackgroundScheduler"] = None,
    config: Optional[Config] = None,
) -> SchedulerService:
    """Create a SchedulerService instance.

    Args:
        engine: Engine to run on each tick
        interval_minutes: Override the sync interval
        scheduler: Optional APScheduler instance
        config: Optional config

    Returns:
        Configured SchedulerService
    """
    return SchedulerService(
        engine,
        interval_minutes=interval_minutes,
        scheduler=scheduler,
        config=config,
    )
