"""Compose pattern matches into a cron expression.

The composer folds over the ordered matchers. The first matcher to
assign a field wins; fields nobody assigns take a matcher's default,
then the seed value. Input that no matcher recognizes becomes
"* * * * *" (or raises, in strict mode).
"""

import logging

from cronx.config import settings
from cronx.cron.expression import CronExpression
from cronx.cron.fields import FIELD_ORDER
from cronx.exceptions import (
    InvalidCronExpression,
    InvalidNaturalLanguageInput,
    UnrecognizedScheduleError,
)
from cronx.nlp.patterns import FIELD_KEYS, MATCHERS, Matcher

logger = logging.getLogger(__name__)

FALLBACK_EXPRESSION = "* * * * *"

SEED_FIELDS = {
    "minute": "0",
    "hour": "0",
    "day_of_month": "*",
    "month": "*",
    "day_of_week": "*",
}


def normalize_text(text: str) -> str:
    """Lowercase the text and collapse runs of whitespace."""
    return " ".join(text.lower().split())


def compose(
    text: str,
    matchers: tuple[Matcher, ...] = MATCHERS,
) -> dict[str, str] | None:
    """Run the matchers over normalized text and merge their results.

    Args:
        text: Normalized schedule text.
        matchers: Matchers in precedence order.

    Returns:
        Field values keyed by FIELD_KEYS, or None if nothing matched.

    Raises:
        InvalidNaturalLanguageInput: If a matcher captured an out-of-range number.
    """
    assigned: dict[str, str] = {}
    defaults: dict[str, str] = {}
    matched_any = False

    for matcher in matchers:
        result = matcher(text)
        if not result.matched:
            continue

        logger.debug(
            f"{matcher.__name__} matched '{text}': fields={result.fields} "
            f"defaults={result.defaults}"
        )
        if result.complete:
            return {key: result.fields[key] for key in FIELD_KEYS}

        matched_any = True
        for key, value in result.fields.items():
            assigned.setdefault(key, value)
        for key, value in result.defaults.items():
            defaults.setdefault(key, value)

    if not matched_any:
        return None

    return {
        key: assigned.get(key, defaults.get(key, SEED_FIELDS[key]))
        for key in FIELD_KEYS
    }


def parse(
    text: str,
    *,
    strict: bool | None = None,
    offset: float | None = None,
) -> CronExpression:
    """Convert a natural-language schedule into a cron expression.

    Args:
        text: Schedule description, e.g. "every weekday at 9am".
        strict: Raise on unrecognized input instead of returning
            "* * * * *" (defaults to settings.strict_parsing).
        offset: UTC offset in hours the schedule is meant in.

    Returns:
        The validated expression.

    Raises:
        InvalidNaturalLanguageInput: If a captured number is out of range
            or the composed expression fails validation.
        UnrecognizedScheduleError: In strict mode, if nothing matched.

    Example:
        str(parse("every day at 3pm"))    # "0 15 * * *"
        str(parse("every 15 minutes"))    # "*/15 * * * *"
    """
    normalized = normalize_text(text)
    strict = settings.strict_parsing if strict is None else strict

    fields = compose(normalized)
    if fields is None:
        if strict:
            raise UnrecognizedScheduleError(normalized)
        logger.info(f"No schedule pattern matched '{normalized}', using '{FALLBACK_EXPRESSION}'")
        return CronExpression.from_string(FALLBACK_EXPRESSION, offset=offset)

    expression = " ".join(fields[key] for key in FIELD_KEYS)
    try:
        result = CronExpression.from_string(expression, offset=offset)
    except InvalidCronExpression as e:
        if e.field_index is None:
            raise InvalidNaturalLanguageInput(
                normalized, expression, "a 5-field expression", what="schedule"
            ) from e
        kind = FIELD_ORDER[e.field_index]
        low, high = kind.bounds()
        raise InvalidNaturalLanguageInput(
            normalized,
            fields[FIELD_KEYS[e.field_index]],
            f"{low}-{high}",
            what=kind.value,
        ) from e

    logger.debug(f"Parsed '{normalized}' as '{result}'")
    return result
