"""Unit tests for the sync scheduler."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from syndication.config import SyncConfig
from syndication.core.scheduler import SYNC_JOB_ID, SchedulerStats, SyncScheduler
from syndication.core.sync import SyncReport
from syndication.errors import StoreError


@pytest.fixture
def engine():
    """Mock engine returning an empty report."""
    mock_engine = MagicMock()
    mock_engine.sync_all_users.return_value = SyncReport(scope="all")
    return mock_engine


@pytest.fixture
def mock_apscheduler():
    """Mock APScheduler instance that starts out stopped."""
    scheduler = MagicMock()
    scheduler.running = False
    return scheduler


class TestSchedulerStats:
    """Tests for SchedulerStats dataclass."""

    def test_scheduler_stats_creation(self):
        stats = SchedulerStats()

        assert stats.total_runs == 0
        assert stats.failed_runs == 0
        assert stats.last_report is None
        assert stats.uptime_seconds == 0.0


class TestSyncScheduler:
    """Tests for SyncScheduler."""

    def test_init_defaults(self, engine):
        """Test interval and timezone come from config."""
        scheduler = SyncScheduler(engine, sync_config=SyncConfig())

        assert scheduler.interval_minutes == 5
        assert str(scheduler.timezone) == "UTC"
        assert scheduler.is_running() is False

    def test_init_with_custom_params(self, engine):
        scheduler = SyncScheduler(engine, interval_minutes=15, timezone="Europe/Berlin")

        assert scheduler.interval_minutes == 15
        assert str(scheduler.timezone) == "Europe/Berlin"

    def test_start_registers_immediate_job(self, engine, mock_apscheduler):
        """Test start adds one interval job due now and starts the loop."""
        scheduler = SyncScheduler(engine, interval_minutes=5, scheduler=mock_apscheduler)
        before = datetime.now(timezone.utc)

        scheduler.start()

        mock_apscheduler.start.assert_called_once()
        kwargs = mock_apscheduler.add_job.call_args.kwargs
        assert kwargs["id"] == SYNC_JOB_ID
        assert kwargs["max_instances"] == 1
        assert kwargs["coalesce"] is True
        assert isinstance(kwargs["trigger"], IntervalTrigger)
        assert kwargs["trigger"].interval == timedelta(minutes=5)
        assert kwargs["next_run_time"] >= before

    def test_start_when_running(self, engine, mock_apscheduler):
        mock_apscheduler.running = True
        scheduler = SyncScheduler(engine, scheduler=mock_apscheduler)

        scheduler.start()

        mock_apscheduler.add_job.assert_not_called()
        mock_apscheduler.start.assert_not_called()

    def test_stop_does_not_wait(self, engine, mock_apscheduler):
        """Test stop shuts down without waiting for an in-flight run."""
        scheduler = SyncScheduler(engine, scheduler=mock_apscheduler)
        scheduler.start()
        mock_apscheduler.running = True

        scheduler.stop()

        mock_apscheduler.shutdown.assert_called_once_with(wait=False)

    def test_stop_when_not_running(self, engine, mock_apscheduler):
        scheduler = SyncScheduler(engine, scheduler=mock_apscheduler)

        scheduler.stop()

        mock_apscheduler.shutdown.assert_not_called()

    def test_start_stop_real_scheduler(self, engine):
        """Test the job is registered on a real BackgroundScheduler."""
        scheduler = SyncScheduler(engine, interval_minutes=5, scheduler=BackgroundScheduler(timezone="UTC"))

        scheduler.start()
        try:
            assert scheduler.is_running() is True
            job = scheduler.scheduler.get_job(SYNC_JOB_ID)
            assert job is not None
            assert job.max_instances == 1
            assert job.trigger.interval == timedelta(minutes=5)
        finally:
            scheduler.stop()

        assert scheduler.is_running() is False

    def test_run_now_records_success(self, engine):
        scheduler = SyncScheduler(engine, sync_config=SyncConfig())

        report = scheduler.run_now()

        assert report is engine.sync_all_users.return_value
        stats = scheduler.get_stats()
        assert stats.total_runs == 1
        assert stats.successful_runs == 1
        assert stats.last_report is report
        assert stats.last_run_time is not None

    def test_run_now_records_failure(self, engine):
        """Test a failing run is logged and counted, not raised."""
        engine.sync_all_users.side_effect = StoreError("database is locked")
        scheduler = SyncScheduler(engine, sync_config=SyncConfig())

        assert scheduler.run_now() is None

        stats = scheduler.get_stats()
        assert stats.total_runs == 1
        assert stats.failed_runs == 1
        assert stats.last_error == "StoreError: database is locked"

    def test_failure_then_success_clears_error(self, engine):
        engine.sync_all_users.side_effect = [StoreError("boom"), SyncReport(scope="all")]
        scheduler = SyncScheduler(engine, sync_config=SyncConfig())

        scheduler.run_now()
        scheduler.run_now()

        stats = scheduler.get_stats()
        assert stats.total_runs == 2
        assert stats.successful_runs == 1
        assert stats.last_error is None
