"""Natural-language schedules: parsing into and describing cron expressions."""

from cronx.nlp.composer import compose, normalize_text, parse
from cronx.nlp.describe import CronDescriber, describe, join_words, ordinal
from cronx.nlp.patterns import MATCHERS, Match

__all__ = [
    "parse",
    "compose",
    "normalize_text",
    "describe",
    "CronDescriber",
    "ordinal",
    "join_words",
    "MATCHERS",
    "Match",
]
