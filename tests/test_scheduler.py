"""
Tests for the design refresh scheduler
======================================
"""

import json
import os
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from src.tools.scheduler import DesignRefreshScheduler
from src.utils.config import SchedulerConfig

# Matches the clock fixture
FIXED_NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)

CONFIG = SchedulerConfig(
    enabled=True,
    cron="0 8 * * *",
    timezone="UTC",
    price_change_percent=5,
    fee_change_multiplier=2,
    backup_retention_days=30,
)


class FakeDesigner:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.runs = 0

    async def run(self) -> dict:
        self.runs += 1
        if self.fail:
            raise RuntimeError("Canva exploded")
        return {
            "bitcoin_data": {"price": 65000, "fees": {"fast": 12, "medium": 6, "slow": 2}, "congestion": "Medium"},
            "csv_path": "bitcoin_designs.csv",
            "designs_path": None,
            "designs_created": 2,
            "news_headlines": [],
        }


def _fetchers(price: float = 60000, fast: int = 10):
    async def price_fetcher():
        return {"usd": price}

    async def fee_fetcher():
        return {"fastestFee": fast, "halfHourFee": 5, "economyFee": 2}

    return price_fetcher, fee_fetcher


def _record(hours_ago: float, price: float | None = 60000, fast: int = 10, **extra) -> dict:
    data = {"price": price, "fees": {"fast": fast, "medium": 5, "slow": 2}} if price is not None else None
    return {
        "timestamp": (FIXED_NOW - timedelta(hours=hours_ago)).isoformat(),
        "bitcoin_data": data,
        "updates_applied": 0 if data is None else 1,
        "updates_failed": 1 if data is None else 0,
        "trigger_reason": "test",
        **extra,
    }


def _scheduler(exports_dir, clock, designer=None, price: float = 60000, fast: int = 10) -> DesignRefreshScheduler:
    price_fetcher, fee_fetcher = _fetchers(price, fast)
    return DesignRefreshScheduler(
        designer=designer or FakeDesigner(),
        config=CONFIG,
        exports_dir=exports_dir,
        price_fetcher=price_fetcher,
        fee_fetcher=fee_fetcher,
        clock=clock,
    )


class TestShouldUpdate:
    """Update decision."""

    @pytest.mark.asyncio
    async def test_initial_run(self, exports_dir, clock) -> None:
        assert await _scheduler(exports_dir, clock).should_update() == (True, "Initial run - no previous data")

    @pytest.mark.asyncio
    async def test_price_move(self, exports_dir, clock) -> None:
        scheduler = _scheduler(exports_dir, clock, price=65000)
        scheduler.save_history([_record(hours_ago=2)])

        assert await scheduler.should_update() == (True, "Price changed by 8.3% (60,000 → 65,000)")

    @pytest.mark.parametrize("fast", [20, 5])
    @pytest.mark.asyncio
    async def test_fee_move(self, exports_dir, clock, fast) -> None:
        scheduler = _scheduler(exports_dir, clock, price=60600, fast=fast)
        scheduler.save_history([_record(hours_ago=2)])

        assert await scheduler.should_update() == (True, f"Fee changed significantly (10 → {fast} sat/vB)")

    @pytest.mark.asyncio
    async def test_daily_update(self, exports_dir, clock) -> None:
        scheduler = _scheduler(exports_dir, clock, price=60000, fast=12)
        scheduler.save_history([_record(hours_ago=25)])

        assert await scheduler.should_update() == (True, "Scheduled daily update (25.0h since last update)")

    @pytest.mark.asyncio
    async def test_no_change(self, exports_dir, clock) -> None:
        scheduler = _scheduler(exports_dir, clock, price=60000, fast=12)
        scheduler.save_history([_record(hours_ago=2)])

        assert await scheduler.should_update() == (False, "No significant changes detected")

    @pytest.mark.asyncio
    async def test_failed_runs_are_not_a_baseline(self, exports_dir, clock) -> None:
        scheduler = _scheduler(exports_dir, clock, price=60000, fast=12)
        scheduler.save_history([_record(hours_ago=3), _record(hours_ago=1, price=None)])

        assert await scheduler.should_update() == (False, "No significant changes detected")

    @pytest.mark.asyncio
    async def test_fetch_error_runs_as_fallback(self, exports_dir, clock) -> None:
        async def broken():
            raise httpx.ConnectError("offline")

        scheduler = _scheduler(exports_dir, clock)
        scheduler.price_fetcher = broken
        scheduler.save_history([_record(hours_ago=2)])

        assert await scheduler.should_update() == (True, "Error checking conditions - running as fallback")


class TestRunUpdateCheck:
    """Running, history and reports."""

    @pytest.mark.asyncio
    async def test_forced_run_records_history_and_report(self, exports_dir, clock) -> None:
        designer = FakeDesigner()
        scheduler = _scheduler(exports_dir, clock, designer=designer)

        record = await scheduler.run_update_check(force=True)

        assert designer.runs == 1
        assert record["trigger_reason"] == "Forced update"
        assert record["updates_applied"] == 3
        assert record["next_check"] == "2024-06-01T13:00:00+00:00"
        assert scheduler.load_history() == [record]

        report = exports_dir / "course_updates" / "design_refresh_1717243200000.json"
        saved = json.loads(report.read_text(encoding="utf-8"))
        assert saved["designer_summary"]["designs_created"] == 2
        assert scheduler.is_running is False

    @pytest.mark.asyncio
    async def test_skips_when_nothing_changed(self, exports_dir, clock) -> None:
        designer = FakeDesigner()
        scheduler = _scheduler(exports_dir, clock, designer=designer, fast=12)
        scheduler.save_history([_record(hours_ago=2)])

        assert await scheduler.run_update_check() is None
        assert designer.runs == 0
        assert len(scheduler.load_history()) == 1

    @pytest.mark.asyncio
    async def test_overlapping_check_is_skipped(self, exports_dir, clock) -> None:
        designer = FakeDesigner()
        scheduler = _scheduler(exports_dir, clock, designer=designer)
        scheduler.is_running = True

        assert await scheduler.run_update_check(force=True) is None
        assert designer.runs == 0

    @pytest.mark.asyncio
    async def test_designer_failure_is_recorded(self, exports_dir, clock) -> None:
        scheduler = _scheduler(exports_dir, clock, designer=FakeDesigner(fail=True))

        record = await scheduler.run_update_check(force=True)

        assert record["bitcoin_data"] is None
        assert record["updates_failed"] == 1
        assert record["error"] == "Canva exploded"
        assert scheduler.get_status()["failed_updates"] == 1


class TestMaintenance:
    """Retention, status and trigger parsing."""

    def test_history_is_capped(self, exports_dir, clock) -> None:
        scheduler = _scheduler(exports_dir, clock)
        scheduler.save_history([_record(hours_ago=i) for i in range(150, 0, -1)])

        assert len(scheduler.load_history()) == 100

    def test_corrupt_history_reads_empty(self, exports_dir, clock) -> None:
        scheduler = _scheduler(exports_dir, clock)
        scheduler.updates_dir.mkdir(parents=True)
        scheduler.history_file.write_text("{not json", encoding="utf-8")

        assert scheduler.load_history() == []

    def test_retention_removes_old_entries_and_reports(self, exports_dir, clock) -> None:
        scheduler = _scheduler(exports_dir, clock)
        scheduler.save_history([_record(hours_ago=40 * 24), _record(hours_ago=24)])

        old_report = scheduler.updates_dir / "design_refresh_1.json"
        new_report = scheduler.updates_dir / "design_refresh_2.json"
        old_report.write_text("{}", encoding="utf-8")
        new_report.write_text("{}", encoding="utf-8")
        old_time = (FIXED_NOW - timedelta(days=40)).timestamp()
        os.utime(old_report, (old_time, old_time))

        assert scheduler.clean_old_backups() == 2
        assert len(scheduler.load_history()) == 1
        assert not old_report.exists()
        assert new_report.exists()

    def test_status_summarizes_history(self, exports_dir, clock) -> None:
        scheduler = _scheduler(exports_dir, clock)
        scheduler.save_history([_record(hours_ago=5), _record(hours_ago=1, price=None)])

        status = scheduler.get_status()

        assert status["total_updates"] == 2
        assert status["successful_updates"] == 1
        assert status["failed_updates"] == 1
        assert status["last_update"] == "2024-06-01T11:00:00+00:00"
        assert status["next_scheduled"] is None

    def test_start_respects_disabled_flag(self, exports_dir, clock) -> None:
        scheduler = DesignRefreshScheduler(
            designer=FakeDesigner(),
            config=SchedulerConfig(
                enabled=False, cron="0 8 * * *", timezone="UTC",
                price_change_percent=5, fee_change_multiplier=2, backup_retention_days=30,
            ),
            exports_dir=exports_dir,
            clock=clock,
        )

        assert scheduler.start() is False

    def test_invalid_cron_defaults_to_eight(self, exports_dir, clock) -> None:
        scheduler = _scheduler(exports_dir, clock)
        scheduler.config = SchedulerConfig(
            enabled=True, cron="every morning", timezone="UTC",
            price_change_percent=5, fee_change_multiplier=2, backup_retention_days=30,
        )

        fields = {field.name: str(field) for field in scheduler._trigger().fields}

        assert fields["hour"] == "8"
        assert fields["minute"] == "0"
