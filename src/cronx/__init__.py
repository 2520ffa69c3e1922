"""cronx - natural-language schedules to cron expressions and back."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("cronx")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

from cronx.cron.expression import CronExpression, get_local_utc_offset
from cronx.cron.fields import validate_expression as validate
from cronx.cron.normalize import format_expression
from cronx.cron.types import DayBase
from cronx.exceptions import (
    CronxError,
    InvalidCronExpression,
    InvalidNaturalLanguageInput,
    UnrecognizedScheduleError,
    UnrepresentableShiftError,
)
from cronx.nlp.composer import parse
from cronx.nlp.describe import describe

__all__ = [
    # Operations
    "parse",
    "describe",
    "validate",
    "format_expression",
    "get_local_utc_offset",
    # Types
    "CronExpression",
    "DayBase",
    # Errors
    "CronxError",
    "InvalidCronExpression",
    "InvalidNaturalLanguageInput",
    "UnrecognizedScheduleError",
    "UnrepresentableShiftError",
]
