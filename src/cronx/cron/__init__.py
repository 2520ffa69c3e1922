"""Cron expression grammar, value type and normalization.

Example:
    from cronx.cron import CronExpression, DayBase

    expr = CronExpression.from_string("0 9 * * 1-5", offset=2)
    expr.format(day_base=DayBase.ONE, target_offset=0)  # "0 7 * * 2-6"
"""

from cronx.cron.expression import CronExpression, get_local_utc_offset
from cronx.cron.fields import (
    DAY_NAMES,
    FIELD_ORDER,
    MONTH_NAMES,
    FieldKind,
    check_expression,
    validate_expression,
    validate_field,
)
from cronx.cron.normalize import format_expression, remap_day_base, shift_hours
from cronx.cron.schedule import compute_next_run, time_until_next_run, to_schedule
from cronx.cron.types import CronSchedule, DayBase

__all__ = [
    # Value type
    "CronExpression",
    "get_local_utc_offset",
    # Grammar
    "FieldKind",
    "FIELD_ORDER",
    "MONTH_NAMES",
    "DAY_NAMES",
    "validate_field",
    "validate_expression",
    "check_expression",
    # Normalization
    "shift_hours",
    "remap_day_base",
    "format_expression",
    # Scheduler hand-off
    "CronSchedule",
    "DayBase",
    "to_schedule",
    "compute_next_run",
    "time_until_next_run",
]
