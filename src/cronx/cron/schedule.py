"""Hand-off of cron expressions to an external scheduler.

The scheduler itself (timers, execution) lives outside cronx. This
module produces the field-keyed schedule it consumes and computes
upcoming fire times with croniter for display and sanity checks.
"""

import logging
from datetime import datetime, timedelta, timezone

from croniter import croniter

from cronx.cron.expression import CronExpression
from cronx.cron.normalize import format_expression
from cronx.cron.types import CronSchedule, DayBase

logger = logging.getLogger(__name__)


def to_schedule(
    expr: CronExpression,
    day_base: DayBase = DayBase.ZERO,
    target_offset: float = 0.0,
) -> CronSchedule:
    """Build the field-keyed schedule for a scheduler running at target_offset.

    Args:
        expr: The expression to schedule.
        day_base: Day-of-week numbering the scheduler expects.
        target_offset: UTC offset (hours) of the scheduler's clock.

    Returns:
        The normalized schedule.
    """
    minute, hour, day_of_month, month, day_of_week = format_expression(
        expr, day_base=day_base, target_offset=target_offset
    ).split(" ")
    return CronSchedule(
        minute=minute,
        hour=hour,
        day_of_month=day_of_month,
        month=month,
        day_of_week=day_of_week,
    )


def compute_next_run(
    expr: CronExpression,
    now: datetime | None = None,
) -> datetime | None:
    """Compute the next time an expression fires.

    Args:
        expr: The expression, in its own UTC offset.
        now: Current time (defaults to UTC now).

    Returns:
        Next run time as an aware UTC datetime, or None if croniter
        cannot evaluate the expression.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    schedule = to_schedule(expr, day_base=DayBase.ZERO, target_offset=0.0)

    try:
        cron = croniter(schedule.to_cron_string(), now.astimezone(timezone.utc))
        next_run = cron.get_next(datetime)
    except Exception as e:
        logger.error(f"Error computing next run for '{expr}': {e}")
        return None

    return next_run.astimezone(timezone.utc)


def time_until_next_run(
    expr: CronExpression,
    now: datetime | None = None,
) -> timedelta | None:
    """Get the time remaining until the next scheduled run.

    Args:
        expr: The expression.
        now: Current time.

    Returns:
        Time until next run, or None if it cannot be computed.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    next_run = compute_next_run(expr, now)
    if next_run is None:
        return None

    return next_run - now
