"""Tests for the scheduler hand-off."""

from datetime import datetime, timedelta, timezone

from cronx.cron import schedule as schedule_module
from cronx.cron.expression import CronExpression
from cronx.cron.schedule import compute_next_run, time_until_next_run, to_schedule
from cronx.cron.types import CronSchedule, DayBase


class TestToSchedule:
    """Tests for building field-keyed schedules."""

    def test_fields(self):
        expr = CronExpression.from_string("0 9 * * 1-5", offset=2)
        schedule = to_schedule(expr, day_base=DayBase.ONE, target_offset=0)

        assert schedule == CronSchedule(
            minute="0", hour="7", day_of_month="*", month="*", day_of_week="2-6"
        )
        assert schedule.to_cron_string() == "0 7 * * 2-6"

    def test_camel_case_dump(self):
        """Dumping by alias gives camelCase keys."""
        expr = CronExpression.from_string("30 8 1 * *", offset=0)
        data = to_schedule(expr).model_dump(by_alias=True)

        assert data == {
            "minute": "30",
            "hour": "8",
            "dayOfMonth": "1",
            "month": "*",
            "dayOfWeek": "*",
        }

    def test_accepts_camel_case_input(self):
        schedule = CronSchedule.model_validate(
            {"minute": "0", "hour": "0", "dayOfMonth": "L", "month": "*", "dayOfWeek": "*"}
        )
        assert schedule.day_of_month == "L"


class TestComputeNextRun:
    """Tests for next-run computation."""

    def test_next_run_same_day(self):
        expr = CronExpression.from_string("0 9 * * *", offset=0)
        now = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)

        assert compute_next_run(expr, now) == datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)

    def test_next_run_uses_offset(self):
        """9:00 at UTC+2 fires at 7:00 UTC."""
        expr = CronExpression.from_string("0 9 * * *", offset=2)
        now = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)

        assert compute_next_run(expr, now) == datetime(2024, 1, 2, 7, 0, tzinfo=timezone.utc)

    def test_naive_now_is_utc(self):
        expr = CronExpression.from_string("*/15 * * * *", offset=0)
        next_run = compute_next_run(expr, datetime(2024, 1, 1, 8, 5))

        assert next_run == datetime(2024, 1, 1, 8, 15, tzinfo=timezone.utc)

    def test_base_one_expression(self):
        """Day numbering is converted before croniter sees it."""
        expr = CronExpression.from_string("0 9 * * 2", offset=0, day_base=DayBase.ONE)
        # 2024-01-01 is a Monday
        now = datetime(2024, 1, 2, 0, 0, tzinfo=timezone.utc)

        assert compute_next_run(expr, now) == datetime(2024, 1, 8, 9, 0, tzinfo=timezone.utc)

    def test_croniter_failure_returns_none(self, monkeypatch):
        def broken(*args, **kwargs):
            raise ValueError("boom")

        monkeypatch.setattr(schedule_module, "croniter", broken)
        expr = CronExpression.from_string("0 9 * * *", offset=0)

        assert compute_next_run(expr) is None
        assert time_until_next_run(expr) is None

    def test_time_until_next_run(self):
        expr = CronExpression.from_string("0 9 * * *", offset=0)
        now = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)

        assert time_until_next_run(expr, now) == timedelta(hours=1)
