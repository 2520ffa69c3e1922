"""Pattern library for natural-language schedules.

Each matcher recognizes one category of phrasing in normalized
(lowercased, whitespace-collapsed) text and returns a Match. Matchers
are independent of each other; the composer decides how their results
combine. The order of MATCHERS is the precedence order.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Callable

from cronx.exceptions import InvalidNaturalLanguageInput

logger = logging.getLogger(__name__)

FIELD_KEYS = ("minute", "hour", "day_of_month", "month", "day_of_week")

DAY_WORDS = {
    "sunday": 0, "sun": 0,
    "monday": 1, "mon": 1,
    "tuesday": 2, "tues": 2, "tue": 2,
    "wednesday": 3, "wed": 3,
    "thursday": 4, "thurs": 4, "thur": 4, "thu": 4,
    "friday": 5, "fri": 5,
    "saturday": 6, "sat": 6,
}

MONTH_WORDS = {
    "january": 1, "jan": 1,
    "february": 2, "feb": 2,
    "march": 3, "mar": 3,
    "april": 4, "apr": 4,
    "may": 5,
    "june": 6, "jun": 6,
    "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sept": 9, "sep": 9,
    "october": 10, "oct": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12,
}

NTH_WORDS = {
    "first": 1, "1st": 1,
    "second": 2, "2nd": 2,
    "third": 3, "3rd": 3,
    "fourth": 4, "4th": 4,
    "fifth": 5, "5th": 5,
}


def _alternation(words: dict[str, int]) -> str:
    # Longest first so "march" wins over "mar"
    return "|".join(sorted(words, key=len, reverse=True))


_DAYS = _alternation(DAY_WORDS)
_MONTHS = _alternation(MONTH_WORDS)
_NTHS = _alternation(NTH_WORDS)
_ORDINAL = r"(\d{1,2})(?:st|nd|rd|th)"
_OF_MONTH = r"of (?:the |each |every )?month\b"

_TIME = r"(?:noon|midnight|\d{1,2}(?::\d{2})?(?:\s*(?:am|pm))?\b)"
_RANGE_TIME = r"(noon|midnight|\d{1,2}(?::\d{2})?(?:\s*(?:am|pm))?)"
_MERIDIAN_TIME = r"(noon|midnight|\d{1,2}(?::\d{2})?\s*(?:am|pm))"

_KEYWORD_RE = re.compile(
    r"^(?:every (?:1 |one )?(minute|hour|day|week|month|year)s?"
    r"|(minutely|hourly|daily|weekly|monthly|yearly|annually))$"
)
_INTERVAL_RE = re.compile(r"\bevery (\d+) (minute|hour|day|month)s?\b")
_CADENCE_RE = re.compile(
    r"\bevery (minute|hour|day|week|month|year)\b"
    r"|\b(minutely|hourly|daily|weekly|monthly|yearly|annually)\b"
)
_WEEKDAY_RE = re.compile(r"\bweekdays?\b")
_WEEKEND_RE = re.compile(r"\bweekends?\b")
_DAY_RE = re.compile(rf"\b({_DAYS})s?\b")
_DAY_RANGE_RE = re.compile(
    rf"\b({_DAYS})s?(?:\s*-\s*|\s+(?:to|through|thru|until)\s+)({_DAYS})s?\b"
)
_NTH_DAY_RE = re.compile(rf"\b({_NTHS}|last)\s+({_DAYS})\b")
_MONTH_RE = re.compile(rf"\b({_MONTHS})\b")
_MONTH_RANGE_RE = re.compile(
    rf"\b({_MONTHS})(?:\s*-\s*|\s+(?:to|through|thru|until)\s+)({_MONTHS})\b"
)
_MONTH_DAY_RE = re.compile(rf"\b({_MONTHS})\s+{_ORDINAL}\b")
_LAST_DAY_RE = re.compile(rf"\blast day {_OF_MONTH}")
_FIRST_DAY_RE = re.compile(rf"\bfirst day {_OF_MONTH}")
_ORDINAL_RE = re.compile(rf"\b{_ORDINAL}\b")
_DOM_ANCHOR_RE = re.compile(
    rf"\b{_ORDINAL}(?: day)? {_OF_MONTH}|\bon the {_ORDINAL}\b|\bevery {_ORDINAL}\b"
)
_AT_RE = re.compile(
    rf"\bat\s+({_TIME}(?!\s*minutes?)(?:\s*(?:,\s*and|,|and)\s*{_TIME})*)"
)
_TIME_TOKEN_RE = re.compile(_TIME)
_PAST_HOUR_RE = re.compile(r"\b(\d{1,2}) minutes? past (?:the |every )?hour\b")
_CLOCK_RE = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*(am|pm)?$")
_TIME_RANGE_RES = (
    re.compile(
        rf"\bfrom\s+{_RANGE_TIME}(?:\s*-\s*|\s+(?:to|until|till|through)\s+){_RANGE_TIME}"
    ),
    re.compile(rf"\bbetween\s+{_RANGE_TIME}\s+and\s+{_RANGE_TIME}"),
    re.compile(rf"\b{_MERIDIAN_TIME}(?:\s*-\s*|\s+(?:to|until|till)\s+){_MERIDIAN_TIME}"),
)
_EMBEDDED_MINUTES_RE = re.compile(r"\bevery (\d+) minutes?\b")
_EMBEDDED_HOURS_RE = re.compile(r"\bevery (\d+) hours?\b")
_EVERY_MINUTE_RE = re.compile(r"\bevery minute\b")

_KEYWORD_EXPRESSIONS = {
    "minute": "* * * * *",
    "hour": "0 * * * *",
    "day": "0 0 * * *",
    "week": "0 0 * * 0",
    "month": "0 0 1 * *",
    "year": "0 0 1 1 *",
}

_ADVERB_UNITS = {
    "minutely": "minute",
    "hourly": "hour",
    "daily": "day",
    "weekly": "week",
    "monthly": "month",
    "yearly": "year",
    "annually": "year",
}

# (field, lowest, highest) for "every N <unit>"
_INTERVAL_UNITS = {
    "minute": ("minute", 1, 59),
    "hour": ("hour", 1, 23),
    "day": ("day_of_month", 1, 31),
    "month": ("month", 1, 12),
}


@dataclass(frozen=True)
class Match:
    """Result of running one matcher over the input.

    Attributes:
        matched: Whether the matcher recognized anything.
        fields: Field assignments, keyed by FIELD_KEYS names.
        defaults: Values used only when no matcher assigns the field.
        complete: The fields form a whole expression; skip composition.
    """

    matched: bool
    fields: dict[str, str] = field(default_factory=dict)
    defaults: dict[str, str] = field(default_factory=dict)
    complete: bool = False


NO_MATCH = Match(matched=False)

Matcher = Callable[[str], Match]


def _bounded(text: str, token: str, low: int, high: int, what: str) -> int:
    """Parse a captured number and check it against its bounds."""
    value = int(token)
    if not low <= value <= high:
        raise InvalidNaturalLanguageInput(text, token, f"{low}-{high}", what=what)
    return value


def parse_time(text: str, token: str) -> tuple[int, int]:
    """Convert a time token to a 24-hour (hour, minute) pair.

    Args:
        text: The full normalized input, for error reporting.
        token: A time such as "9am", "6:30 pm", "17:45", "noon".

    Returns:
        (hour, minute) tuple.

    Raises:
        InvalidNaturalLanguageInput: If the hour or minute is out of range.
    """
    token = token.strip()
    if token == "noon":
        return 12, 0
    if token == "midnight":
        return 0, 0

    match = _CLOCK_RE.match(token)
    if not match:
        raise InvalidNaturalLanguageInput(text, token, "a time such as 9am or 17:30", what="time")

    hour = int(match.group(1))
    minute = _bounded(text, match.group(2), 0, 59, "minute") if match.group(2) else 0
    meridian = match.group(3)

    if meridian:
        _bounded(text, match.group(1), 1, 12, "12-hour clock hour")
        if meridian == "pm" and hour != 12:
            hour += 12
        elif meridian == "am" and hour == 12:
            hour = 0
    else:
        _bounded(text, match.group(1), 0, 23, "hour")

    return hour, minute


def find_time_range(text: str) -> tuple[str, str] | None:
    """Find a "from X to Y" style time range.

    Returns:
        The two raw time tokens, or None.
    """
    for pattern in _TIME_RANGE_RES:
        match = pattern.search(text)
        if match:
            return match.group(1), match.group(2)
    return None


def has_day_words(text: str) -> bool:
    """Check whether the text names any day of the week."""
    return bool(
        _WEEKDAY_RE.search(text) or _WEEKEND_RE.search(text) or _DAY_RE.search(text)
    )


# ---------------------------------------------------------------------------
# Tier 1: exact keywords
# ---------------------------------------------------------------------------


def match_keyword(text: str) -> Match:
    """Whole-input cadence keywords ("hourly", "every 1 day", "weekly")."""
    match = _KEYWORD_RE.match(text)
    if not match:
        return NO_MATCH
    unit = match.group(1) or _ADVERB_UNITS[match.group(2)]
    expression = _KEYWORD_EXPRESSIONS[unit]
    return Match(
        matched=True,
        fields=dict(zip(FIELD_KEYS, expression.split(" "))),
        complete=True,
    )


# ---------------------------------------------------------------------------
# Tier 2: intervals and cadence words
# ---------------------------------------------------------------------------


def match_interval(text: str) -> Match:
    """"every N minutes|hours|days|months" as a step on that field."""
    match = _INTERVAL_RE.search(text)
    if not match:
        return NO_MATCH

    token, unit = match.group(1), match.group(2)
    key, low, high = _INTERVAL_UNITS[unit]
    count = _bounded(text, token, low, high, f"{unit} interval")
    step = "*" if count == 1 else f"*/{count}"

    if unit == "minute":
        return Match(matched=True, fields={"minute": step}, defaults={"hour": "*"})
    if unit == "hour":
        if count == 1 or find_time_range(text):
            # A time range carries the step itself
            return Match(matched=True, defaults={"hour": "*"})
        return Match(matched=True, fields={"hour": step})
    if unit == "month":
        return Match(matched=True, fields={"month": step}, defaults={"day_of_month": "1"})
    if count == 1:
        return Match(matched=True)
    return Match(matched=True, fields={"day_of_month": step})


def match_cadence(text: str) -> Match:
    """Cadence words inside longer phrases ("every day at 3pm", "hourly from 9am")."""
    match = _CADENCE_RE.search(text)
    if not match:
        return NO_MATCH

    unit = match.group(1) or _ADVERB_UNITS[match.group(2)]
    if unit == "minute":
        return Match(matched=True, fields={"minute": "*"}, defaults={"hour": "*"})
    if unit == "hour":
        return Match(matched=True, defaults={"hour": "*"})
    if unit == "week":
        return Match(matched=True, defaults={"day_of_week": "0"})
    if unit == "month":
        return Match(matched=True, defaults={"day_of_month": "1"})
    if unit == "year":
        return Match(matched=True, defaults={"day_of_month": "1", "month": "1"})
    return Match(matched=True)


# ---------------------------------------------------------------------------
# Tier 3: day of week
# ---------------------------------------------------------------------------


def match_day_of_week(text: str) -> Match:
    """Weekdays, weekends, day ranges, nth weekdays and named-day lists."""
    nth = []
    for match in _NTH_DAY_RE.finditer(text):
        day = DAY_WORDS[match.group(2)]
        if match.group(1) == "last":
            nth.append(f"{day}L")
        else:
            nth.append(f"{day}#{NTH_WORDS[match.group(1)]}")
    if nth:
        return Match(matched=True, fields={"day_of_week": ",".join(dict.fromkeys(nth))})

    match = _DAY_RANGE_RE.search(text)
    if match:
        start, end = DAY_WORDS[match.group(1)], DAY_WORDS[match.group(2)]
        value = str(start) if start == end else f"{start}-{end}"
        return Match(matched=True, fields={"day_of_week": value})

    weekday = bool(_WEEKDAY_RE.search(text))
    weekend = bool(_WEEKEND_RE.search(text))
    named = {DAY_WORDS[name] for name in _DAY_RE.findall(text)}

    if weekday and not weekend and not named:
        return Match(matched=True, fields={"day_of_week": "1-5"})

    days = set(named)
    if weekday:
        days.update(range(1, 6))
    if weekend:
        days.update((0, 6))
    if not days:
        return NO_MATCH
    if len(days) == 7:
        return Match(matched=True, fields={"day_of_week": "*"})
    return Match(matched=True, fields={"day_of_week": ",".join(str(d) for d in sorted(days))})


# ---------------------------------------------------------------------------
# Tier 4: day of month
# ---------------------------------------------------------------------------


def match_day_of_month(text: str) -> Match:
    """"15th of the month", "on the 1st and 15th", "last day of the month"."""
    # Month+day captures ("December 25th") and nth weekdays own their ordinals
    if _MONTH_DAY_RE.search(text) or _NTH_DAY_RE.search(text):
        return NO_MATCH

    if _LAST_DAY_RE.search(text):
        return Match(matched=True, fields={"day_of_month": "L"})
    if _FIRST_DAY_RE.search(text):
        return Match(matched=True, fields={"day_of_month": "1"})

    if not _DOM_ANCHOR_RE.search(text):
        return NO_MATCH

    days = {
        _bounded(text, token, 1, 31, "day of the month")
        for token in _ORDINAL_RE.findall(text)
    }
    return Match(matched=True, fields={"day_of_month": ",".join(str(d) for d in sorted(days))})


# ---------------------------------------------------------------------------
# Tier 5: months
# ---------------------------------------------------------------------------


def match_month(text: str) -> Match:
    """Month names, month ranges and month+day dates ("December 25th")."""
    range_match = _MONTH_RANGE_RE.search(text)
    if range_match:
        start = MONTH_WORDS[range_match.group(1)]
        end = MONTH_WORDS[range_match.group(2)]
        if start == end:
            month = str(start)
        elif start < end:
            month = f"{start}-{end}"
        else:
            # Month ranges cannot wrap; split at December
            month = f"{start}-12,1-{end}" if end > 1 else f"{start}-12,1"
    else:
        months = {MONTH_WORDS[name] for name in _MONTH_RE.findall(text)}
        if not months:
            return NO_MATCH
        month = ",".join(str(m) for m in sorted(months))

    days = {
        _bounded(text, day, 1, 31, "day of the month")
        for _, day in _MONTH_DAY_RE.findall(text)
    }
    if days:
        return Match(
            matched=True,
            fields={"month": month, "day_of_month": ",".join(str(d) for d in sorted(days))},
        )

    defaults = {} if has_day_words(text) else {"day_of_month": "1"}
    return Match(matched=True, fields={"month": month}, defaults=defaults)


# ---------------------------------------------------------------------------
# Tier 6: times of day
# ---------------------------------------------------------------------------


def match_time(text: str) -> Match:
    """Times after "at": "at 3pm", "at 9am and 5pm", "at noon", "at 17:30".

    Several times share one minute value: the first non-zero minute
    given, otherwise zero. "at 9:15 and 17:45" becomes "15 9,17".
    """
    past = _PAST_HOUR_RE.search(text)
    if past:
        minute = _bounded(text, past.group(1), 0, 59, "minute")
        return Match(matched=True, fields={"minute": str(minute)}, defaults={"hour": "*"})

    match = _AT_RE.search(text)
    if not match:
        return NO_MATCH

    times = [parse_time(text, token) for token in _TIME_TOKEN_RE.findall(match.group(1))]
    hours = list(dict.fromkeys(hour for hour, _ in times))
    minute = next((m for _, m in times if m != 0), times[0][1])

    if len({m for _, m in times}) > 1:
        logger.info(
            f"Times in '{text}' use different minutes; using minute {minute} for all of them"
        )

    return Match(
        matched=True,
        fields={"minute": str(minute), "hour": ",".join(str(h) for h in hours)},
    )


# ---------------------------------------------------------------------------
# Tier 7: time ranges
# ---------------------------------------------------------------------------


def match_time_range(text: str) -> Match:
    """Hour ranges: "from 9am to 5pm", "between 9am and 5pm", "9am-5pm".

    Minutes on the endpoints are ignored. A range ending before it starts
    ("from 10pm to 6am") is kept as a wrapping range such as "22-6".
    """
    found = find_time_range(text)
    if not found:
        return NO_MATCH

    start, _ = parse_time(text, found[0])
    end, _ = parse_time(text, found[1])
    hours = str(start) if start == end else f"{start}-{end}"

    step = _EMBEDDED_HOURS_RE.search(text)
    if step:
        count = _bounded(text, step.group(1), 1, 23, "hour interval")
        if count > 1:
            hours = f"{hours}/{count}"

    minute = "0"
    embedded = _EMBEDDED_MINUTES_RE.search(text)
    if embedded:
        count = _bounded(text, embedded.group(1), 1, 59, "minute interval")
        minute = "*" if count == 1 else f"*/{count}"
    elif _EVERY_MINUTE_RE.search(text):
        minute = "*"

    return Match(matched=True, fields={"minute": minute, "hour": hours})


MATCHERS: tuple[Matcher, ...] = (
    match_keyword,
    match_interval,
    match_cadence,
    match_day_of_week,
    match_day_of_month,
    match_month,
    match_time,
    match_time_range,
)
