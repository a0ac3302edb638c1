"""
Periodic synchronization scheduler.

Uses APScheduler to run a full sync of every user's feeds on a fixed
interval.
"""

import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_MISSED, JobExecutionEvent
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from syndication.config import SyncConfig, get_config
from syndication.core.sync import SyncEngine, SyncReport
from syndication.logger import get_logger

logger = get_logger(__name__)

SYNC_JOB_ID = "sync_all_users"


@dataclass
class SchedulerStats:
    """Statistics for scheduled sync runs."""

    total_runs: int = 0
    successful_runs: int = 0
    failed_runs: int = 0
    missed_runs: int = 0
    last_run_time: Optional[datetime] = None
    last_report: Optional[SyncReport] = None
    last_error: Optional[str] = None
    next_run_time: Optional[datetime] = None
    uptime_seconds: float = 0.0


class SyncScheduler:
    """Runs ``SyncEngine.sync_all_users`` on a recurring interval."""

    def __init__(
        self,
        engine: SyncEngine,
        interval_minutes: Optional[int] = None,
        timezone: Optional[str] = None,
        scheduler: Optional[BackgroundScheduler] = None,
        sync_config: Optional[SyncConfig] = None,
    ):
        """Initialize sync scheduler.

        Args:
            engine: Engine whose ``sync_all_users`` is run on each tick
            interval_minutes: Minutes between runs (default from config)
            timezone: Scheduler timezone name (default from config)
            scheduler: APScheduler instance to use instead of a new one
            sync_config: Sync section to use instead of the global config
        """
        sync_config = sync_config or get_config().sync

        self.engine = engine
        self.interval_minutes = interval_minutes or sync_config.interval_minutes
        self.timezone = ZoneInfo(timezone or sync_config.timezone)

        self.scheduler = scheduler or BackgroundScheduler(timezone=self.timezone)
        self.scheduler.add_listener(self._on_job_event, EVENT_JOB_ERROR | EVENT_JOB_MISSED)

        self.stats = SchedulerStats()
        self.start_time: Optional[datetime] = None
        self._stats_lock = threading.Lock()

    def start(self) -> None:
        """Register the sync job, due immediately, and start the timer thread."""
        if self.scheduler.running:
            logger.warning("Scheduler is already running")
            return

        self.scheduler.add_job(
            func=self._run_sync,
            trigger=IntervalTrigger(minutes=self.interval_minutes, timezone=self.timezone),
            id=SYNC_JOB_ID,
            name="Sync all users",
            next_run_time=datetime.now(self.timezone),
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self.scheduler.start()
        self.start_time = datetime.now()

        logger.info(f"Scheduler started (every {self.interval_minutes} minutes)")

    def stop(self) -> None:
        """Stop scheduling. An in-flight run is not waited for."""
        if not self.scheduler.running:
            logger.warning("Scheduler is not running")
            return

        self.scheduler.shutdown(wait=False)
        if self.start_time:
            self.stats.uptime_seconds = (datetime.now() - self.start_time).total_seconds()

        logger.info("Scheduler stopped")

    def is_running(self) -> bool:
        """Check if the scheduler is running.

        Returns:
            True if scheduler is running
        """
        return self.scheduler.running

    def run_now(self) -> Optional[SyncReport]:
        """Run one sync pass on the calling thread.

        Returns:
            The SyncReport, or None if the run failed
        """
        return self._run_sync()

    def get_stats(self) -> SchedulerStats:
        """Get scheduler statistics.

        Returns:
            SchedulerStats with current statistics
        """
        if self.scheduler.running:
            job = self.scheduler.get_job(SYNC_JOB_ID)
            self.stats.next_run_time = job.next_run_time if job else None
            if self.start_time:
                self.stats.uptime_seconds = (datetime.now() - self.start_time).total_seconds()

        return self.stats

    def _run_sync(self) -> Optional[SyncReport]:
        """Job body: one ``sync_all_users`` pass with bookkeeping."""
        try:
            report = self.engine.sync_all_users()
        except Exception as e:
            logger.exception(f"Scheduled sync failed: {e}")
            with self._stats_lock:
                self.stats.total_runs += 1
                self.stats.failed_runs += 1
                self.stats.last_run_time = datetime.now()
                self.stats.last_error = f"{type(e).__name__}: {e}"
            return None

        with self._stats_lock:
            self.stats.total_runs += 1
            self.stats.successful_runs += 1
            self.stats.last_run_time = datetime.now()
            self.stats.last_report = report
            self.stats.last_error = None

        return report

    def _on_job_event(self, event: JobExecutionEvent) -> None:
        """Handle job error and missed events.

        Args:
            event: Job event
        """
        if event.code == EVENT_JOB_MISSED:
            logger.warning(f"Job {event.job_id} missed its run time")
            with self._stats_lock:
                self.stats.missed_runs += 1
        elif event.exception:
            logger.error(f"Job {event.job_id} failed: {type(event.exception).__name__}: {event.exception}")
