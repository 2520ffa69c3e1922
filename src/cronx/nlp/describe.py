"""Describe cron expressions in English.

Common shapes ("every 15 minutes", "every weekday at 9 AM", "every year
on December 25th at noon") get fixed phrasings. Anything else is
described field by field. Expressions with more than one hour share a
single minute, so descriptions never mix minutes across hours.
"""

import logging
from typing import Literal

from cronx.config import settings
from cronx.cron.expression import CronExpression
from cronx.cron.fields import DAY_NAMES, MONTH_NAMES, is_number
from cronx.cron.types import DayBase

logger = logging.getLogger(__name__)

DAYS_OF_WEEK = (
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
)
MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
NTH = ("first", "second", "third", "fourth", "fifth")

TimeFormat = Literal["12h", "24h"]


def ordinal(n: int | str) -> str:
    """Number with its English ordinal suffix (1st, 2nd, 3rd, 11th, 22nd)."""
    n = int(n)
    if 11 <= n % 100 <= 13:
        return f"{n}th"
    return f"{n}{ {1: 'st', 2: 'nd', 3: 'rd'}.get(n % 10, 'th') }"


def join_words(items: list[str], oxford_comma: bool = False) -> str:
    """Join words as an English list ("a, b and c")."""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    comma = "," if oxford_comma else ""
    return f"{', '.join(items[:-1])}{comma} and {items[-1]}"


def _day_name(token: str) -> str:
    if is_number(token):
        return DAYS_OF_WEEK[int(token) % 7]
    return DAYS_OF_WEEK[DAY_NAMES.index(token.upper())]


def _month_name(token: str) -> str:
    if is_number(token):
        return MONTHS[int(token) - 1]
    return MONTHS[MONTH_NAMES.index(token.upper())]


def _is_value(token: str) -> bool:
    """A single plain value: no list, range, step or extension."""
    return is_number(token) or token.isalpha() and len(token) == 3


def _every(field: str) -> str | None:
    """Step of a bare "*/n" field, or None for anything else."""
    base, sep, step = field.partition("/")
    if sep and base == "*" and is_number(step):
        return step
    return None


def _split_step(token: str) -> tuple[str, str | None, str]:
    """Split a stepped element "a-b/n" into (start, end, step)."""
    base, _, step = token.partition("/")
    start, sep, end = base.partition("-")
    return start, end if sep else None, step


def _is_plain_range(token: str) -> bool:
    start, sep, end = token.partition("-")
    return bool(sep) and _is_value(start) and _is_value(end)


class CronDescriber:
    """Turns cron expressions into English descriptions.

    Example:
        describer = CronDescriber(time_format="24h")
        describer.describe("30 9 * * 1-5")   # "Every weekday at 9:30"
    """

    def __init__(
        self,
        time_format: TimeFormat = "12h",
        use_oxford_comma: bool = False,
    ) -> None:
        """Initialize the describer.

        Args:
            time_format: "12h" (9:30 AM) or "24h" (9:30).
            use_oxford_comma: Put a comma before "and" in lists of three or more.
        """
        self.time_format = time_format
        self.use_oxford_comma = use_oxford_comma

    def _join(self, items: list[str]) -> str:
        return join_words(items, self.use_oxford_comma)

    def format_time(self, hour: int, minute: int) -> str:
        """Format a time of day in the configured clock style."""
        if hour == 12 and minute == 0:
            return "noon"
        if hour == 0 and minute == 0:
            return "midnight"

        if self.time_format == "24h":
            return f"{hour}:{minute:02d}"

        period = "PM" if hour >= 12 else "AM"
        display_hour = hour % 12 or 12
        if minute == 0:
            return f"{display_hour} {period}"
        return f"{display_hour}:{minute:02d} {period}"

    def describe(self, expr: CronExpression | str) -> str:
        """Describe an expression.

        Args:
            expr: A CronExpression or its string form.

        Returns:
            English description, starting with a capital letter.

        Raises:
            InvalidCronExpression: If a string argument is not a valid expression.
        """
        if isinstance(expr, str):
            expr = CronExpression.from_string(expr, offset=0.0)
        if expr.day_base != DayBase.ZERO:
            expr = expr.to_day_base(DayBase.ZERO)

        description = self._shortcut(*expr.fields) or self._generic(*expr.fields)
        logger.debug(f"Described '{expr}' as '{description}'")
        return description

    # -----------------------------------------------------------------------
    # Fixed phrasings
    # -----------------------------------------------------------------------

    def _shortcut(
        self, minute: str, hour: str, day_of_month: str, month: str, day_of_week: str
    ) -> str | None:
        any_dom = day_of_month in ("*", "?")
        any_dow = day_of_week in ("*", "?")
        every_day = any_dom and month == "*" and any_dow

        if every_day:
            if minute == "*" and hour == "*":
                return "Every minute"
            if _every(minute) and hour == "*":
                return f"Every {_every(minute)} minutes"
            if minute == "0" and hour == "*":
                return "Every hour"
            if minute == "0" and _every(hour):
                return f"Every {_every(hour)} hours"
            if minute == "0" and hour == "0":
                return "Every day at midnight"
            if minute == "0" and hour == "12":
                return "Every day at noon"

        if not (is_number(minute) and is_number(hour)):
            return None
        at = self.format_time(int(hour), int(minute))

        if every_day:
            return f"Every day at {at}"

        if any_dom and month == "*":
            days = self._weekly_days(day_of_week)
            if days:
                return f"Every {days} at {at}"

        if month == "*" and any_dow:
            if day_of_month == "L":
                return f"On the last day of every month at {at}"
            if is_number(day_of_month):
                return f"On the {ordinal(day_of_month)} day of every month at {at}"

        if any_dow and _is_value(month) and is_number(day_of_month):
            return f"Every year on {_month_name(month)} {ordinal(day_of_month)} at {at}"

        return None

    def _weekly_days(self, day_of_week: str) -> str | None:
        if day_of_week == "1-5":
            return "weekday"
        if day_of_week == "0,6":
            return "Saturday and Sunday"
        tokens = day_of_week.split(",")
        if not all(_is_value(token) for token in tokens):
            return None
        return self._join([_day_name(token) for token in tokens])

    # -----------------------------------------------------------------------
    # Field-by-field assembly
    # -----------------------------------------------------------------------

    def _generic(
        self, minute: str, hour: str, day_of_month: str, month: str, day_of_week: str
    ) -> str:
        clauses = [self._time_phrase(minute, hour)]

        dom = self._day_of_month_phrase(day_of_month)
        dow = self._day_of_week_phrase(day_of_week)
        if dom and dow:
            # cron fires when either day field matches
            clauses.append(f"{dom} or {dow}")
        elif dom or dow:
            clauses.append(dom or dow)

        month_phrase = self._month_phrase(month)
        if month_phrase:
            clauses.append(month_phrase)

        description = ", ".join(clauses)
        return description[0].upper() + description[1:]

    def _hour_times(self, hour: str, minute: int) -> list[str] | None:
        tokens = hour.split(",")
        if not all(is_number(token) for token in tokens):
            return None
        return [self.format_time(int(token), minute) for token in tokens]

    def _time_phrase(self, minute: str, hour: str) -> str:
        if is_number(minute):
            m = int(minute)
            times = self._hour_times(hour, m)
            if times:
                return f"at {self._join(times)}"
            if "/" in hour:
                qualifier = self._hour_qualifier(hour)
                return qualifier if m == 0 else f"at {m} minutes past the hour, {qualifier}"
            minute_phrase = "every hour" if m == 0 else f"at {m} minutes past the hour"
        elif minute == "*":
            minute_phrase = "every minute"
        elif "/" not in minute:
            minute_phrase = f"at minutes {minute}"
        else:
            minute_phrase = self._join([self._minute_item(token) for token in minute.split(",")])

        qualifier = self._hour_qualifier(hour)
        return f"{minute_phrase} {qualifier}" if qualifier else minute_phrase

    def _minute_item(self, token: str) -> str:
        if "/" in token:
            start, end, step = _split_step(token)
            if start == "*":
                return f"every {step} minutes"
            if end:
                return f"every {step} minutes from minute {start} to {end}"
            return f"every {step} minutes starting at minute {start}"
        start, sep, end = token.partition("-")
        if sep:
            return f"at minutes {start} to {end}"
        return f"at minute {token}"

    def _hour_qualifier(self, hour: str) -> str:
        if hour == "*":
            return ""
        times = self._hour_times(hour, 0)
        if times:
            noun = "hours" if len(times) > 1 else "hour"
            return f"during the {self._join(times)} {noun}"
        return self._join([self._hour_item(token) for token in hour.split(",")])

    def _hour_item(self, token: str) -> str:
        if "/" in token:
            start, end, step = _split_step(token)
            if start == "*":
                return f"every {step} hours"
            if end:
                span = f"from {self.format_time(int(start), 0)} to {self.format_time(int(end), 0)}"
                return f"every {step} hours {span}"
            return f"every {step} hours starting at {self.format_time(int(start), 0)}"
        start, sep, end = token.partition("-")
        if sep:
            return f"from {self.format_time(int(start), 0)} to {self.format_time(int(end), 0)}"
        return f"during the {self.format_time(int(token), 0)} hour"

    def _day_of_month_phrase(self, day_of_month: str) -> str:
        if day_of_month in ("*", "?"):
            return ""
        step = _every(day_of_month)
        if step:
            return f"every {step} days"

        tokens = day_of_month.split(",")
        if all(is_number(token) for token in tokens):
            noun = "days" if len(tokens) > 1 else "day"
            return f"on the {self._join([ordinal(t) for t in tokens])} {noun} of the month"
        if len(tokens) == 1 and _is_plain_range(day_of_month):
            start, _, end = day_of_month.partition("-")
            return f"from the {ordinal(start)} to the {ordinal(end)} day of the month"
        return f"{self._join([self._day_of_month_item(t) for t in tokens])} of the month"

    def _day_of_month_item(self, token: str) -> str:
        if token == "L":
            return "on the last day"
        if token.startswith("L-"):
            return f"on the {ordinal(int(token[2:]) + 1)} to last day"
        if token.endswith("W"):
            return f"on the weekday nearest the {ordinal(token[:-1])}"
        if "/" in token:
            start, end, step = _split_step(token)
            if start == "*":
                return f"every {step} days"
            if end:
                return f"every {step} days from the {ordinal(start)} to the {ordinal(end)}"
            return f"every {step} days starting on the {ordinal(start)}"
        start, sep, end = token.partition("-")
        if sep:
            return f"from the {ordinal(start)} to the {ordinal(end)}"
        return f"on the {ordinal(token)}"

    def _month_phrase(self, month: str) -> str:
        if month == "*":
            return ""
        step = _every(month)
        if step:
            return f"every {step} months"

        tokens = month.split(",")
        if all(_is_value(token) for token in tokens):
            return f"in {self._join([_month_name(token) for token in tokens])}"
        return self._join([self._month_item(token) for token in tokens])

    def _month_item(self, token: str) -> str:
        if "/" in token:
            start, end, step = _split_step(token)
            if start == "*":
                return f"every {step} months"
            if end:
                return f"every {step} months from {_month_name(start)} to {_month_name(end)}"
            return f"every {step} months starting in {_month_name(start)}"
        start, sep, end = token.partition("-")
        if sep:
            return f"from {_month_name(start)} to {_month_name(end)}"
        return f"in {_month_name(token)}"

    def _day_of_week_phrase(self, day_of_week: str) -> str:
        if day_of_week in ("*", "?"):
            return ""
        if day_of_week == "1-5":
            return "on weekdays"
        if day_of_week == "0,6":
            return "on weekends"
        step = _every(day_of_week)
        if step:
            return f"every {step} days of the week"

        tokens = day_of_week.split(",")
        if "/" in day_of_week:
            return self._join([self._day_of_week_item(token) for token in tokens])
        if len(tokens) == 1 and _is_plain_range(day_of_week):
            start, _, end = day_of_week.partition("-")
            return f"from {_day_name(start)} to {_day_name(end)}"
        return f"on {self._join([self._day_of_week_name(token) for token in tokens])}"

    def _day_of_week_item(self, token: str) -> str:
        if "/" in token:
            start, end, step = _split_step(token)
            if start == "*":
                return f"every {step} days of the week"
            if end:
                return f"every {step} days of the week from {_day_name(start)} to {_day_name(end)}"
            return f"every {step} days of the week starting on {_day_name(start)}"
        if _is_plain_range(token):
            start, _, end = token.partition("-")
            return f"from {_day_name(start)} to {_day_name(end)}"
        return f"on {self._day_of_week_name(token)}"

    def _day_of_week_name(self, token: str) -> str:
        if token == "L":
            return "the last day of the week"
        if token.endswith("L"):
            return f"the last {_day_name(token[:-1])} of the month"
        if "#" in token:
            day, _, week = token.partition("#")
            return f"the {NTH[int(week) - 1]} {_day_name(day)} of the month"
        if "-" in token:
            first, _, last = token.partition("-")
            return f"{_day_name(first)} to {_day_name(last)}"
        return _day_name(token)


def describe(
    expr: CronExpression | str,
    *,
    time_format: TimeFormat | None = None,
    use_oxford_comma: bool | None = None,
) -> str:
    """Describe a cron expression in English.

    Args:
        expr: A CronExpression or its string form.
        time_format: "12h" or "24h" (defaults to settings.time_format).
        use_oxford_comma: Defaults to settings.use_oxford_comma.

    Returns:
        The description.

    Raises:
        InvalidCronExpression: If a string argument is not a valid expression.
    """
    describer = CronDescriber(
        time_format=time_format or settings.time_format,
        use_oxford_comma=(
            settings.use_oxford_comma if use_oxford_comma is None else use_oxford_comma
        ),
    )
    return describer.describe(expr)
