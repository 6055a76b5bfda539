"""
Design Refresh Scheduler
========================

Re-runs the Canva auto designer on a daily cron when the market moved
enough to make yesterday's material stale.

Scheduling is handled by APScheduler:
- A cron job built from DESIGN_REFRESH_CRON / DESIGN_REFRESH_TIMEZONE
  (default "0 8 * * *", America/New_York)
- One immediate check when the scheduler starts

Update Decision (first match wins):
    no previous run                         → "Initial run - no previous data"
    |price change| ≥ threshold (5%)         → "Price changed by X% ..."
    fast fee ≥ 2× or ≤ ½ of the last run    → "Fee changed significantly ..."
    ≥ 24h since the last run                → "Scheduled daily update ..."
    anything else                           → skip
    error while checking                    → run anyway,
                                              "Error checking conditions - running as fallback"

State Persistence:
    Run history lives in exports/course_updates/automation_history.json
    (last 100 runs). Each run also writes a detailed report next to it;
    reports and history entries older than the retention window are removed
    after every run.
"""

import asyncio
import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import Awaitable, Callable

import httpx
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from src.agents.base import utc_now
from src.agents.canva_auto_designer import CanvaAutoDesigner
from src.tools.btc_price import btc_price
from src.tools.fee_estimates import get_fee_estimates
from src.utils.config import SchedulerConfig, get_config
from src.utils.logger import Logger

logger = Logger("Scheduler")

HISTORY_SUBDIR = "course_updates"
HISTORY_FILENAME = "automation_history.json"
REPORT_PREFIX = "design_refresh_"
MAX_HISTORY = 100
JOB_ID = "design_refresh"


def _parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class DesignRefreshScheduler:
    """
    Daily design refresh driven by price and fee movement.

    Example:
        scheduler = DesignRefreshScheduler()
        scheduler.start()          # inside a running event loop

        record = await scheduler.run_update_check(force=True)
        print(scheduler.get_status())
    """

    def __init__(
        self,
        designer: CanvaAutoDesigner | None = None,
        config: SchedulerConfig | None = None,
        exports_dir: Path | None = None,
        price_fetcher: Callable[[], Awaitable[dict]] | None = None,
        fee_fetcher: Callable[[], Awaitable[dict]] | None = None,
        clock: Callable[[], datetime] | None = None
    ):
        """
        Args:
            designer: Designer to run (built lazily when omitted)
            config: Scheduler settings (defaults to config.scheduler)
            exports_dir: Root export directory (defaults to config.exports_dir)
            price_fetcher: Coroutine returning {"usd": price}
            fee_fetcher: Coroutine returning mempool fee estimates
            clock: Callable returning the current aware datetime
        """
        self._designer = designer
        self.config = config or get_config().scheduler
        self.updates_dir = (exports_dir or get_config().exports_dir) / HISTORY_SUBDIR
        self.history_file = self.updates_dir / HISTORY_FILENAME
        self.price_fetcher = price_fetcher or btc_price
        self.fee_fetcher = fee_fetcher or get_fee_estimates
        self.clock = clock or utc_now
        self.scheduler = AsyncIOScheduler(timezone=self.config.timezone)
        self.is_running = False

    @property
    def designer(self) -> CanvaAutoDesigner:
        if self._designer is None:
            self._designer = CanvaAutoDesigner()
        return self._designer

    # ==========================================================================
    # History
    # ==========================================================================

    def load_history(self) -> list[dict]:
        """Run history, oldest first. Unreadable files count as empty."""
        if not self.history_file.exists():
            return []

        try:
            with open(self.history_file, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Failed to load update history", {"error": str(e)})
            return []

    def save_history(self, history: list[dict]) -> None:
        """Persist the most recent MAX_HISTORY runs."""
        self.updates_dir.mkdir(parents=True, exist_ok=True)
        with open(self.history_file, "w", encoding="utf-8") as f:
            json.dump(history[-MAX_HISTORY:], f, indent=2, default=str)

    # ==========================================================================
    # Update decision
    # ==========================================================================

    async def should_update(self) -> tuple[bool, str]:
        """
        Decide whether the designer should run now.

        Returns:
            (should_run, reason)
        """
        try:
            last = next(
                (run for run in reversed(self.load_history()) if run.get("bitcoin_data")),
                None
            )
            if last is None:
                return True, "Initial run - no previous data"

            current_fees, current_price = await asyncio.gather(self.fee_fetcher(), self.price_fetcher())

            last_price = last["bitcoin_data"]["price"]
            change = abs((current_price["usd"] - last_price) / last_price * 100)
            if change >= self.config.price_change_percent:
                return True, (
                    f"Price changed by {change:.1f}% "
                    f"({last_price:,.0f} → {current_price['usd']:,.0f})"
                )

            last_fast = last["bitcoin_data"]["fees"]["fast"]
            current_fast = current_fees["fastestFee"]
            multiplier = self.config.fee_change_multiplier
            if current_fast >= last_fast * multiplier or current_fast <= last_fast / multiplier:
                return True, f"Fee changed significantly ({last_fast} → {current_fast} sat/vB)"

            hours = (self.clock() - _parse_timestamp(last["timestamp"])).total_seconds() / 3600
            if hours >= 24:
                return True, f"Scheduled daily update ({hours:.1f}h since last update)"

            return False, "No significant changes detected"

        except (RuntimeError, httpx.HTTPError, ValueError, KeyError, TypeError, ZeroDivisionError) as e:
            logger.error("Error checking if update should run", e)
            return True, "Error checking conditions - running as fallback"

    # ==========================================================================
    # Running
    # ==========================================================================

    async def perform_update(self, reason: str) -> dict:
        """
        Run the designer once and write a detailed report.

        Returns:
            History record; on failure bitcoin_data is None and updates_failed is 1
        """
        logger.info(f"Starting design refresh: {reason}")
        now = self.clock()

        try:
            summary = await self.designer.run()
        except Exception as e:
            logger.error("Design refresh failed", e)
            return {
                "timestamp": now.isoformat(),
                "bitcoin_data": None,
                "updates_applied": 0,
                "updates_failed": 1,
                "trigger_reason": reason,
                "error": str(e),
                "next_check": (now + timedelta(hours=1)).isoformat(),
            }

        record = {
            "timestamp": now.isoformat(),
            "bitcoin_data": summary["bitcoin_data"],
            "updates_applied": 1 + summary["designs_created"],
            "updates_failed": 0,
            "trigger_reason": reason,
            "next_check": (now + timedelta(hours=1)).isoformat(),
        }

        self.updates_dir.mkdir(parents=True, exist_ok=True)
        report_path = self.updates_dir / f"{REPORT_PREFIX}{int(now.timestamp() * 1000)}.json"
        with open(report_path, "w", encoding="utf-8") as f:
            json.dump({**record, "designer_summary": summary}, f, indent=2, default=str, ensure_ascii=False)

        logger.info("Design refresh completed", {"applied": record["updates_applied"], "report": str(report_path)})
        return record

    def clean_old_backups(self) -> int:
        """
        Drop history entries and reports older than the retention window.

        Returns:
            Number of history entries and report files removed
        """
        cutoff = self.clock() - timedelta(days=self.config.backup_retention_days)
        removed = 0

        history = self.load_history()
        recent = [run for run in history if _parse_timestamp(run["timestamp"]) > cutoff]
        if len(recent) != len(history):
            self.save_history(recent)
            removed += len(history) - len(recent)

        for report in self.updates_dir.glob(f"{REPORT_PREFIX}*.json"):
            if report.stat().st_mtime < cutoff.timestamp():
                report.unlink()
                removed += 1

        if removed:
            logger.info(f"Cleaned {removed} old backup records")
        return removed

    async def run_update_check(self, force: bool = False) -> dict | None:
        """
        Check conditions and refresh designs when warranted.

        Overlapping calls are skipped while a check is in progress.

        Args:
            force: Skip the decision and refresh now

        Returns:
            The new history record, or None when nothing ran
        """
        if self.is_running:
            logger.warning("Update check already running, skipping")
            return None

        self.is_running = True
        try:
            if force:
                should, reason = True, "Forced update"
            else:
                should, reason = await self.should_update()

            if not should:
                logger.info(f"No update needed: {reason}")
                return None

            record = await self.perform_update(reason)

            history = self.load_history()
            history.append(record)
            self.save_history(history)
            self.clean_old_backups()

            if record["updates_failed"]:
                logger.warning(f"Design refresh had {record['updates_failed']} failures")
            return record

        finally:
            self.is_running = False

    def _trigger(self) -> CronTrigger:
        parts = self.config.cron.split()
        if len(parts) == 5:
            minute, hour, day, month, day_of_week = parts
            return CronTrigger(
                minute=minute,
                hour=hour,
                day=day,
                month=month,
                day_of_week=day_of_week,
                timezone=self.config.timezone
            )

        logger.warning(f"Invalid cron expression '{self.config.cron}', defaulting to daily at 8am")
        return CronTrigger(hour=8, minute=0, timezone=self.config.timezone)

    def start(self) -> bool:
        """
        Schedule the cron job and an immediate first check.

        Must be called from inside a running event loop.

        Returns:
            False when the refresh is disabled
        """
        if not self.config.enabled:
            logger.info("Design refresh is disabled")
            return False

        self.scheduler.add_job(self.run_update_check, trigger=self._trigger(), id=JOB_ID, replace_existing=True)
        self.scheduler.add_job(self.run_update_check, id=f"{JOB_ID}_initial", replace_existing=True)

        if not self.scheduler.running:
            self.scheduler.start()

        logger.info("Design refresh scheduler started", {
            "schedule": self.config.cron,
            "timezone": self.config.timezone,
            "price_change_percent": self.config.price_change_percent,
            "fee_change_multiplier": self.config.fee_change_multiplier,
        })
        return True

    def stop(self) -> None:
        """Stop the scheduler."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Design refresh scheduler stopped")

    def get_status(self) -> dict:
        history = self.load_history()
        job = self.scheduler.get_job(JOB_ID)

        return {
            "enabled": self.config.enabled,
            "schedule": self.config.cron,
            "timezone": self.config.timezone,
            "is_running": self.is_running,
            "last_update": history[-1]["timestamp"] if history else None,
            "last_reason": history[-1]["trigger_reason"] if history else None,
            "total_updates": len(history),
            "successful_updates": sum(1 for run in history if run["updates_applied"] > 0),
            "failed_updates": sum(1 for run in history if run["updates_failed"] > 0),
            "next_scheduled": job.next_run_time.isoformat() if getattr(job, "next_run_time", None) else None,
        }
