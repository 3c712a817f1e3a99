"""Scheduler for the periodic leaderboard refresh.

The refresh job runs once as soon as the scheduler starts and then on a fixed
interval (hourly by default). A run that would overlap one still in progress
is skipped rather than queued.
"""

from datetime import datetime, timezone
from typing import Dict, Any, Optional
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from apscheduler.events import EVENT_JOB_EXECUTED, EVENT_JOB_ERROR, EVENT_JOB_MISSED, EVENT_JOB_MAX_INSTANCES

from config.config import REFRESH_JOB_ID
from data_pipeline.aggregator import AggregatorConfig, RefreshResult, refresh
from utils.logging import get_logger

logger = get_logger(__name__)


class RefreshJob:
    """Runs the aggregator and keeps the outcome of the last run."""

    def __init__(self, config: AggregatorConfig):
        self.config = config
        self.logger = get_logger(f"{__name__}.RefreshJob")
        self.last_result: Optional[RefreshResult] = None
        self.runs = 0

    def run(self) -> RefreshResult:
        """Execute one refresh. Never raises, so the interval keeps firing."""
        self.runs += 1
        self.logger.info(f"Starting leaderboard refresh #{self.runs}")
        try:
            result = refresh(self.config)
        except Exception as e:
            self.logger.exception(f"Error processing data: {e}")
            result = RefreshResult(status="failed", error=str(e))

        self.last_result = result
        self.logger.info(
            f"Refresh #{self.runs} finished with status {result.status} "
            f"({result.records} records)"
        )
        return result


class RefreshScheduler:
    """Owns the background scheduler and the refresh job."""

    def __init__(self, config: Optional[AggregatorConfig] = None):
        """Initialize the scheduler.

        Args:
            config: Aggregator configuration; also supplies the interval
        """
        self.config = config or AggregatorConfig()
        self.logger = get_logger(f"{__name__}.RefreshScheduler")
        self.scheduler = BackgroundScheduler(timezone=timezone.utc)
        self.job = RefreshJob(self.config)

        # Setup scheduler event listeners
        self.scheduler.add_listener(
            self._job_listener,
            EVENT_JOB_EXECUTED | EVENT_JOB_ERROR | EVENT_JOB_MISSED | EVENT_JOB_MAX_INSTANCES,
        )

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def start(self):
        """Schedule the refresh (first run immediately) and start the scheduler."""
        self.logger.info(
            f"Starting refresh scheduler (every {self.config.refresh_interval_sec}s)"
        )
        self.scheduler.add_job(
            func=self.job.run,
            trigger=IntervalTrigger(seconds=self.config.refresh_interval_sec),
            id=REFRESH_JOB_ID,
            name="Leaderboard refresh",
            next_run_time=datetime.now(timezone.utc),
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self.scheduler.start()
        self.logger.info("Refresh scheduler started")

    def stop(self):
        """Stop the scheduler."""
        self.logger.info("Stopping refresh scheduler")
        if self.scheduler.running:
            self.scheduler.shutdown(wait=True)
        self.logger.info("Refresh scheduler stopped")

    def run_now(self) -> RefreshResult:
        """Run a refresh synchronously in the calling thread."""
        self.logger.info("Running immediate refresh")
        return self.job.run()

    def get_status(self) -> Dict[str, Any]:
        """Get scheduler and refresh status."""
        last = self.job.last_result
        return {
            "scheduler_running": self.scheduler.running,
            "refresh_interval_sec": self.config.refresh_interval_sec,
            "jobs": [
                {
                    "id": job.id,
                    "name": job.name,
                    "next_run": job.next_run_time.isoformat() if job.next_run_time else None
                }
                for job in self.scheduler.get_jobs()
            ],
            "runs": self.job.runs,
            "last_refresh": last.to_dict() if last else None,
        }

    def _job_listener(self, event):
        """Listen to job execution events."""
        if event.code == EVENT_JOB_MAX_INSTANCES:
            self.logger.warning(f"Job {event.job_id} still running; skipping overlapping run")
        elif event.code == EVENT_JOB_MISSED:
            self.logger.warning(f"Job {event.job_id} missed its run time")
        elif event.exception:
            self.logger.error(f"Job {event.job_id} failed: {event.exception}")
        else:
            self.logger.info(f"Job {event.job_id} executed successfully")


# Global scheduler instance
_scheduler = None


def get_scheduler(config: Optional[AggregatorConfig] = None) -> RefreshScheduler:
    """Get the global scheduler instance."""
    global _scheduler
    if _scheduler is None:
        _scheduler = RefreshScheduler(config)
    return _scheduler


def start_scheduler(config: Optional[AggregatorConfig] = None) -> RefreshScheduler:
    """Start the global scheduler."""
    scheduler = get_scheduler(config)
    if not scheduler.running:
        scheduler.start()
    return scheduler


def stop_scheduler():
    """Stop the global scheduler."""
    global _scheduler
    if _scheduler is not None:
        _scheduler.stop()
        _scheduler = None
