"""Background day-rollover scheduling."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from apscheduler.schedulers.background import BackgroundScheduler as APScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .logging_config import get_logger
from .services.habits import RolloverReport, rollover_all

if TYPE_CHECKING:
    from .context import AppContext

logger = get_logger("scheduler")

ROLLOVER_JOB_ID = "day_rollover"


class RolloverScheduler:
    """Runs the day-rollover pass over all habits on a fixed interval."""

    def __init__(self, ctx: AppContext):
        """Initialize the scheduler with app context.

        Args:
            ctx: Application context with repository, clock and config
        """
        self.ctx = ctx
        self.scheduler: Optional[APScheduler] = None

    def run_rollover(self) -> Optional[RolloverReport]:
        """Execute one rollover pass. Errors are logged, not raised."""
        today = self.ctx.clock.today()
        try:
            return rollover_all(self.ctx.habit_repo, today)
        except Exception as exc:
            logger.error(f"Rollover for {today} failed: {exc}", exc_info=True)
            return None

    def start(self) -> None:
        """Run a rollover immediately, then every configured interval."""
        if self.scheduler is not None:
            logger.warning("Scheduler already running")
            return

        self.run_rollover()

        self.scheduler = APScheduler(timezone=self.ctx.config.tzinfo())
        minutes = self.ctx.config.ROLLOVER_INTERVAL_MINUTES
        self.scheduler.add_job(
            func=self.run_rollover,
            trigger=IntervalTrigger(minutes=minutes),
            id=ROLLOVER_JOB_ID,
            name="Habit Day Rollover",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self.scheduler.start()
        logger.info(f"Rollover scheduler started (every {minutes} min)")

    def stop(self) -> None:
        """Stop the background scheduler gracefully."""
        if self.scheduler is not None:
            self.scheduler.shutdown(wait=True)
            self.scheduler = None
            logger.info("Rollover scheduler stopped")

    @property
    def running(self) -> bool:
        return self.scheduler is not None


def create_scheduler(ctx: AppContext, *, auto_start: bool = False) -> RolloverScheduler:
    """Create and optionally start a rollover scheduler."""
    scheduler = RolloverScheduler(ctx)
    if auto_start:
        scheduler.start()
    return scheduler
