"""Per-field grammar and validation for 5-field cron expressions.

Each field is a comma list of elements. An element is ``*``, a single
value, a range ``a-b``, or either of those with a step suffix ``/n``.
Day-of-month and day-of-week additionally accept their extension atoms
(``?``, ``L``, ``L-n``, ``nW``, ``nL``, ``n#m``).
"""

import logging
import re
from enum import Enum

from cronx.cron.types import DayBase
from cronx.exceptions import InvalidCronExpression

logger = logging.getLogger(__name__)

MONTH_NAMES = (
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
)
DAY_NAMES = ("SUN", "MON", "TUE", "WED", "THU", "FRI", "SAT")

_LAST_OFFSET_RE = re.compile(r"^L-(\d+)$")
_NEAREST_WEEKDAY_RE = re.compile(r"^(\d+)W$")
_LAST_WEEKDAY_RE = re.compile(r"^(\d+)L$")
_NTH_WEEKDAY_RE = re.compile(r"^(\d+)#(\d+)$")


class FieldKind(str, Enum):
    """Position of a field within a cron expression."""

    MINUTE = "minute"
    HOUR = "hour"
    DAY_OF_MONTH = "day of month"
    MONTH = "month"
    DAY_OF_WEEK = "day of week"

    @property
    def position(self) -> int:
        """Zero-based position of the field."""
        return FIELD_ORDER.index(self)

    def bounds(self, day_base: DayBase = DayBase.ZERO) -> tuple[int, int]:
        """Inclusive numeric bounds of the field.

        Args:
            day_base: Numbering of the day-of-week field.

        Returns:
            (minimum, maximum) tuple.
        """
        if self is FieldKind.DAY_OF_WEEK:
            base = DayBase(day_base)
            return base.first, base.last
        return _BOUNDS[self]


FIELD_ORDER = (
    FieldKind.MINUTE,
    FieldKind.HOUR,
    FieldKind.DAY_OF_MONTH,
    FieldKind.MONTH,
    FieldKind.DAY_OF_WEEK,
)

_BOUNDS = {
    FieldKind.MINUTE: (0, 59),
    FieldKind.HOUR: (0, 23),
    FieldKind.DAY_OF_MONTH: (1, 31),
    FieldKind.MONTH: (1, 12),
}

# Only hour and day-of-week ranges may wrap past their maximum
_WRAPPING_KINDS = frozenset({FieldKind.HOUR, FieldKind.DAY_OF_WEEK})


def is_number(token: str) -> bool:
    """Check whether a token is a plain non-negative decimal integer."""
    return token.isascii() and token.isdigit()


def _in_bounds(token: str, low: int, high: int) -> bool:
    return is_number(token) and low <= int(token) <= high


def resolve_value(token: str, kind: FieldKind, day_base: DayBase = DayBase.ZERO) -> int | None:
    """Resolve a single value token to its number.

    Month and day names resolve to their position in the field's
    numbering (``JAN`` -> 1, ``SUN`` -> the base's Sunday).

    Args:
        token: The value token.
        kind: The field the token belongs to.
        day_base: Numbering of the day-of-week field.

    Returns:
        The numeric value, or None if the token is not a valid value.
    """
    low, high = kind.bounds(day_base)
    if is_number(token):
        value = int(token)
        return value if low <= value <= high else None

    upper = token.upper()
    if kind is FieldKind.MONTH and upper in MONTH_NAMES:
        return MONTH_NAMES.index(upper) + 1
    if kind is FieldKind.DAY_OF_WEEK and upper in DAY_NAMES:
        return DAY_NAMES.index(upper) + int(day_base)
    return None


def _is_extension(token: str, kind: FieldKind, day_base: DayBase) -> bool:
    """Check the field-specific extension atoms."""
    if kind is FieldKind.DAY_OF_MONTH:
        if token in ("?", "L"):
            return True
        match = _LAST_OFFSET_RE.match(token) or _NEAREST_WEEKDAY_RE.match(token)
        return bool(match) and _in_bounds(match.group(1), 1, 31)

    if kind is FieldKind.DAY_OF_WEEK:
        low, high = kind.bounds(day_base)
        if token in ("?", "L"):
            return True
        match = _LAST_WEEKDAY_RE.match(token)
        if match:
            return _in_bounds(match.group(1), low, high)
        match = _NTH_WEEKDAY_RE.match(token)
        if match:
            return _in_bounds(match.group(1), low, high) and _in_bounds(match.group(2), 1, 5)

    return False


def _is_valid_range(token: str, kind: FieldKind, day_base: DayBase) -> bool:
    start, sep, end = token.partition("-")
    if not sep:
        return resolve_value(token, kind, day_base) is not None

    start_value = resolve_value(start, kind, day_base)
    end_value = resolve_value(end, kind, day_base)
    if start_value is None or end_value is None:
        return False
    if kind not in _WRAPPING_KINDS and start_value > end_value:
        return False
    return True


def _is_valid_element(element: str, kind: FieldKind, day_base: DayBase) -> bool:
    if element == "*":
        return True

    if "/" in element:
        base, _, step = element.partition("/")
        if not is_number(step) or int(step) < 1:
            return False
        return base == "*" or _is_valid_range(base, kind, day_base)

    if _is_extension(element, kind, day_base):
        return True

    return _is_valid_range(element, kind, day_base)


def validate_field(value: str, kind: FieldKind, day_base: DayBase = DayBase.ZERO) -> bool:
    """Validate a single cron field.

    Args:
        value: The field text (e.g. "*/15", "1-5", "MON,WED").
        kind: Which of the five fields this is.
        day_base: Numbering of the day-of-week field.

    Returns:
        True if the field matches its grammar.
    """
    if not value:
        return False
    elements = value.split(",")
    # "?" stands for the whole field, never a list element
    if len(elements) > 1 and "?" in elements:
        return False
    return all(_is_valid_element(element, kind, day_base) for element in elements)


def check_expression(text: str, day_base: DayBase = DayBase.ZERO) -> tuple[str, ...]:
    """Validate a complete expression and return its fields.

    Args:
        text: The cron expression.
        day_base: Numbering of the day-of-week field.

    Returns:
        The five fields, in order.

    Raises:
        InvalidCronExpression: If the arity is wrong or a field is invalid.
    """
    if not isinstance(text, str):
        raise InvalidCronExpression(repr(text), "expected a string")

    parts = text.split()
    if len(parts) != len(FIELD_ORDER):
        raise InvalidCronExpression(
            text, f"expected {len(FIELD_ORDER)} fields, got {len(parts)}"
        )

    for kind, value in zip(FIELD_ORDER, parts):
        if not validate_field(value, kind, day_base):
            low, high = kind.bounds(day_base)
            raise InvalidCronExpression(
                text,
                f"'{value}' is not valid (values {low}-{high})",
                field_index=kind.position,
                field_name=kind.value,
            )

    return tuple(parts)


def validate_expression(text: str, day_base: DayBase = DayBase.ZERO) -> bool:
    """Validate a cron expression without raising.

    Args:
        text: The cron expression.
        day_base: Numbering of the day-of-week field.

    Returns:
        True if the expression is valid.
    """
    try:
        check_expression(text, day_base)
        return True
    except InvalidCronExpression as e:
        logger.debug(f"Rejected cron expression: {e}")
        return False
