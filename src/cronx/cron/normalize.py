"""Timezone and day-of-week normalization of cron expressions.

These are pure string transforms: the hour field is shifted by a UTC
offset difference and the day-of-week field is renumbered between the
Sunday=0 and Sunday=1 conventions. Ranges that cross the end of their
cycle after a transform are split into two comma-joined ranges.

Shifting hours does not move the day fields: "0 1 * * 1" at UTC+2 is
rendered as "0 23 * * 1" in UTC, not as Sunday 23:00.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from cronx.config import settings
from cronx.cron.fields import is_number
from cronx.cron.types import DayBase
from cronx.exceptions import InvalidCronExpression, UnrepresentableShiftError

if TYPE_CHECKING:
    from cronx.cron.expression import CronExpression

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24
DAYS_PER_WEEK = 7

_LAST_WEEKDAY_RE = re.compile(r"^(\d+)L$")
_NTH_WEEKDAY_RE = re.compile(r"^(\d+)#(\d+)$")


def _bad_hour(field: str, part: str) -> InvalidCronExpression:
    return InvalidCronExpression(
        field,
        f"cannot shift hour token '{part}'",
        field_index=1,
        field_name="hour",
    )


def _wraps(base: str) -> bool:
    start, sep, end = base.partition("-")
    return bool(sep) and is_number(start) and is_number(end) and int(start) > int(end)


def _hour_values(part: str, field: str) -> list[int]:
    """Expand a stepped hour token (``*/n``, ``a/n``, ``a-b/n``) into hours."""
    base, _, step_text = part.partition("/")
    step = int(step_text)

    if base == "*":
        start, end = 0, HOURS_PER_DAY - 1
    elif "-" in base:
        start_text, _, end_text = base.partition("-")
        if not (is_number(start_text) and is_number(end_text)):
            raise _bad_hour(field, part)
        start, end = int(start_text), int(end_text)
    elif is_number(base):
        start, end = int(base), HOURS_PER_DAY - 1
    else:
        raise _bad_hour(field, part)

    # A wrapping range walks past 23 back to 0
    span = (end - start) % HOURS_PER_DAY
    return [(start + i) % HOURS_PER_DAY for i in range(0, span + 1, step)]


def _shift_hour_part(part: str, delta: int, field: str) -> list[str]:
    if part == "*":
        return ["*"]

    if "/" in part:
        base, _, step_text = part.partition("/")
        if not is_number(step_text) or int(step_text) < 1:
            raise _bad_hour(field, part)
        if base == "*" and delta % int(step_text) == 0:
            return [part]
        if delta % HOURS_PER_DAY == 0 and not _wraps(base):
            return [part]
        hours = sorted({(h - delta) % HOURS_PER_DAY for h in _hour_values(part, field)})
        return [str(h) for h in hours]

    if "-" in part:
        start_text, _, end_text = part.partition("-")
        if not (is_number(start_text) and is_number(end_text)):
            raise _bad_hour(field, part)
        start = (int(start_text) - delta) % HOURS_PER_DAY
        end = (int(end_text) - delta) % HOURS_PER_DAY

        if start == end:
            return [str(start)]
        if start < end:
            return [f"{start}-{end}"]
        # Wraps past midnight: split into start-23 and 0-end
        first = "23" if start == 23 else f"{start}-23"
        second = "0" if end == 0 else f"0-{end}"
        return [first, second]

    if not is_number(part):
        raise _bad_hour(field, part)
    return [str((int(part) - delta) % HOURS_PER_DAY)]


def shift_hours(hour_field: str, delta_hours: float) -> str:
    """Shift an hour field back by a number of hours.

    A value ``h`` becomes ``(h - delta) mod 24``, so converting from
    UTC+3 to UTC uses ``delta_hours=3``.

    Args:
        hour_field: The hour field (e.g. "9", "9-17", "8,20", "*/2").
        delta_hours: Whole number of hours to subtract.

    Returns:
        The shifted hour field.

    Raises:
        UnrepresentableShiftError: If delta_hours is not a whole number.
        InvalidCronExpression: If the field contains an unshiftable token.
    """
    if not float(delta_hours).is_integer():
        raise UnrepresentableShiftError(
            f"Hour field '{hour_field}' cannot be shifted by a fractional {delta_hours} hours"
        )
    delta = int(delta_hours)

    if hour_field == "*" or delta % HOURS_PER_DAY == 0 and "-" not in hour_field:
        return hour_field

    shifted: list[str] = []
    for part in hour_field.split(","):
        shifted.extend(_shift_hour_part(part, delta, hour_field))

    result = ",".join(shifted)
    logger.debug(f"Shifted hours '{hour_field}' by {delta}: '{result}'")
    return result


def _shift_minutes(minute_field: str, hour_field: str, delta_hours: float) -> tuple[str, int]:
    """Apply a fractional-hour shift to the minute field.

    A single minute absorbs the shift and carries into the hours. ``*``
    and an aligned ``*/n`` are unchanged by the shift, as long as every
    hour fires.

    Returns:
        The new minute field and the whole-hour shift to apply to the hours.

    Raises:
        UnrepresentableShiftError: For any other minute or hour shape.
    """
    minute_delta = round(delta_hours * 60)
    if is_number(minute_field):
        total = int(minute_field) - minute_delta
        return str(total % 60), -(total // 60)

    if hour_field == "*":
        if minute_field == "*":
            return minute_field, 0
        base, _, step = minute_field.partition("/")
        if (
            base == "*"
            and is_number(step)
            and 60 % int(step) == 0
            and minute_delta % int(step) == 0
        ):
            return minute_field, 0

    raise UnrepresentableShiftError(
        f"Minutes '{minute_field}' with hours '{hour_field}' cannot absorb "
        f"a shift of {delta_hours} hours"
    )


def _to_base(value: int, from_base: DayBase) -> int:
    if from_base == DayBase.ONE:
        return (value + 6) % DAYS_PER_WEEK
    return value + 1


def _remap_range(start: int, end: int, step: str | None, from_base: DayBase) -> list[str]:
    target = DayBase.ZERO if from_base == DayBase.ONE else DayBase.ONE
    mapped_start = _to_base(start, from_base)
    mapped_end = _to_base(end, from_base)
    suffix = f"/{step}" if step else ""

    if mapped_start <= mapped_end:
        return [f"{mapped_start}-{mapped_end}{suffix}"]

    if step:
        # Step alignment does not survive a split; list the days instead
        span = (end - start) % DAYS_PER_WEEK
        days = {
            _to_base(from_base.first + (start - from_base.first + i) % DAYS_PER_WEEK, from_base)
            for i in range(0, span + 1, int(step))
        }
        return [str(day) for day in sorted(days)]

    first = str(target.last) if mapped_start == target.last else f"{mapped_start}-{target.last}"
    second = str(target.first) if mapped_end == target.first else f"{target.first}-{mapped_end}"
    return [first, second]


def _remap_piece(piece: str, from_base: DayBase) -> list[str]:
    if not piece or piece in ("*", "?", "L") or piece[0].isalpha():
        return [piece]

    match = _LAST_WEEKDAY_RE.match(piece)
    if match:
        return [f"{_to_base(int(match.group(1)), from_base)}L"]

    match = _NTH_WEEKDAY_RE.match(piece)
    if match:
        return [f"{_to_base(int(match.group(1)), from_base)}#{match.group(2)}"]

    base, _, step = piece.partition("/")
    if step and base == "*":
        return [piece]

    if "-" in base:
        start_text, _, end_text = base.partition("-")
        if is_number(start_text) and is_number(end_text):
            return _remap_range(int(start_text), int(end_text), step or None, from_base)
        return [piece]

    if is_number(base):
        mapped = str(_to_base(int(base), from_base))
        return [f"{mapped}/{step}" if step else mapped]

    return [piece]


def remap_day_base(day_of_week_field: str, from_base: DayBase) -> str:
    """Convert a day-of-week field to the other numbering convention.

    Converting from base 1 maps ``n`` to ``(n + 6) mod 7``; converting
    from base 0 maps ``n`` to ``n + 1``. The weekday of ``nL`` and
    ``n#m`` is remapped; names, ``*``, ``?`` and ``L`` are left unchanged.

    Args:
        day_of_week_field: The day-of-week field (e.g. "1,3-5", "MON", "*").
        from_base: The numbering the field is currently written in.

    Returns:
        The field in the opposite numbering.

    Example:
        remap_day_base("5", DayBase.ONE)      # "4"
        remap_day_base("0,2-4", DayBase.ZERO) # "1,3-5"
        remap_day_base("3-1", DayBase.ZERO)   # "4-7,1-2"
    """
    from_base = DayBase(from_base)
    pieces: list[str] = []
    for piece in day_of_week_field.split(","):
        pieces.extend(_remap_piece(piece.strip(), from_base))
    return ",".join(pieces)


def format_expression(
    expr: CronExpression,
    day_base: DayBase | None = None,
    target_offset: float = 0.0,
) -> str:
    """Render an expression for another UTC offset and day numbering.

    The hour field is shifted by ``expr.offset - target_offset`` and the
    day-of-week field is renumbered when ``day_base`` differs from the
    expression's own. Other fields are left as they are, except that a
    fractional-hour shift also moves a single-value minute field.

    Args:
        expr: The expression to render.
        day_base: Target day-of-week numbering (defaults to settings.day_base).
        target_offset: UTC offset in hours to render for.

    Returns:
        The converted expression string.

    Raises:
        UnrepresentableShiftError: If a fractional shift cannot be expressed.
    """
    target_base = DayBase(settings.day_base if day_base is None else day_base)
    delta = expr.offset - target_offset

    minute = expr.minute
    if float(delta).is_integer():
        hour_delta = int(delta)
    else:
        minute, hour_delta = _shift_minutes(expr.minute, expr.hour, delta)

    hour = shift_hours(expr.hour, hour_delta)

    day_of_week = expr.day_of_week
    if target_base != expr.day_base:
        day_of_week = remap_day_base(expr.day_of_week, expr.day_base)

    result = " ".join((minute, hour, expr.day_of_month, expr.month, day_of_week))
    logger.debug(
        f"Formatted '{expr}' (UTC{expr.offset:+g}, base {int(expr.day_base)}) "
        f"as '{result}' (UTC{target_offset:+g}, base {int(target_base)})"
    )
    return result
