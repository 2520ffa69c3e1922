"""Validated, immutable cron expression value.

A CronExpression carries the five cron fields plus the UTC offset they
are written in and the day-of-week numbering they use. Every way of
building one goes through the field validator; transforms return new
instances.
"""

import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from cronx.config import settings
from cronx.cron.fields import check_expression
from cronx.cron.types import DayBase

logger = logging.getLogger(__name__)


def get_local_utc_offset() -> float:
    """Get the local timezone offset in hours.

    Positive values are east of Greenwich (e.g. 1.0 for CET), negative
    values west (e.g. -5.0 for EST). Half-hour zones give fractions.

    Returns:
        The local UTC offset in hours.
    """
    offset = datetime.now().astimezone().utcoffset()
    if offset is None:
        return 0.0
    return offset.total_seconds() / 3600


def _default_offset() -> float:
    if settings.utc_offset is not None:
        return settings.utc_offset
    return get_local_utc_offset()


class CronExpression(BaseModel):
    """A 5-field cron expression bound to a UTC offset.

    Attributes:
        minute: Minute field.
        hour: Hour field.
        day_of_month: Day-of-month field.
        month: Month field.
        day_of_week: Day-of-week field.
        offset: UTC offset (hours) the expression is written in.
        day_base: Numbering of the day-of-week field.

    Example:
        expr = CronExpression.from_string("0 9 * * 1-5", offset=-5)
        str(expr)                        # "0 9 * * 1-5"
        expr.format(target_offset=0)     # "0 14 * * 1-5"
    """

    model_config = ConfigDict(frozen=True)

    minute: str = Field(..., description="Minute field")
    hour: str = Field(..., description="Hour field")
    day_of_month: str = Field(..., description="Day-of-month field")
    month: str = Field(..., description="Month field")
    day_of_week: str = Field(..., description="Day-of-week field")
    offset: float = Field(
        default_factory=_default_offset,
        description="UTC offset in hours the expression is written in",
    )
    day_base: DayBase = Field(
        default=DayBase.ZERO,
        description="Day-of-week numbering (Sunday=0 or Sunday=1)",
    )

    @model_validator(mode="after")
    def _validate_fields(self) -> "CronExpression":
        """Run the field grammar over the joined expression."""
        check_expression(str(self), self.day_base)
        return self

    @classmethod
    def from_string(
        cls,
        text: str,
        offset: float | None = None,
        day_base: DayBase = DayBase.ZERO,
    ) -> "CronExpression":
        """Create an expression from its wire format.

        Args:
            text: Five whitespace-separated fields.
            offset: UTC offset in hours (defaults to the configured or local offset).
            day_base: Numbering used by the day-of-week field.

        Returns:
            The validated expression.

        Raises:
            InvalidCronExpression: If the text is not a valid expression.
        """
        minute, hour, day_of_month, month, day_of_week = check_expression(text, day_base)
        kwargs: dict[str, Any] = {}
        if offset is not None:
            kwargs["offset"] = offset
        return cls(
            minute=minute,
            hour=hour,
            day_of_month=day_of_month,
            month=month,
            day_of_week=day_of_week,
            day_base=day_base,
            **kwargs,
        )

    @classmethod
    def from_natural_language(
        cls,
        text: str,
        offset: float | None = None,
        strict: bool | None = None,
    ) -> "CronExpression":
        """Create an expression from a natural-language schedule.

        Args:
            text: Schedule description (e.g. "every weekday at 9am").
            offset: UTC offset in hours the schedule is meant in.
            strict: Raise instead of falling back on unrecognized input.

        Returns:
            The parsed expression.
        """
        from cronx.nlp.composer import parse

        return parse(text, strict=strict, offset=offset)

    def __str__(self) -> str:
        return " ".join(self.fields)

    @property
    def fields(self) -> tuple[str, str, str, str, str]:
        """The five fields in wire order."""
        return (
            self.minute,
            self.hour,
            self.day_of_month,
            self.month,
            self.day_of_week,
        )

    def to_dict(self) -> dict[str, str]:
        """Field-keyed structure with camelCase keys."""
        return {
            "minute": self.minute,
            "hour": self.hour,
            "dayOfMonth": self.day_of_month,
            "month": self.month,
            "dayOfWeek": self.day_of_week,
        }

    def with_offset(self, offset: float) -> "CronExpression":
        """Return the same fields bound to a different UTC offset."""
        return self.model_copy(update={"offset": offset})

    def to_day_base(self, day_base: DayBase) -> "CronExpression":
        """Return an equivalent expression using another day-of-week numbering.

        Args:
            day_base: Target numbering.

        Returns:
            A new expression; self if the base already matches.
        """
        from cronx.cron.normalize import remap_day_base

        day_base = DayBase(day_base)
        if day_base == self.day_base:
            return self
        return CronExpression(
            minute=self.minute,
            hour=self.hour,
            day_of_month=self.day_of_month,
            month=self.month,
            day_of_week=remap_day_base(self.day_of_week, self.day_base),
            offset=self.offset,
            day_base=day_base,
        )

    def format(
        self,
        day_base: DayBase | None = None,
        target_offset: float = 0.0,
    ) -> str:
        """Render the expression for another offset and day numbering.

        Args:
            day_base: Target day-of-week numbering (defaults to settings).
            target_offset: UTC offset in hours to convert to.

        Returns:
            The converted expression string.
        """
        from cronx.cron.normalize import format_expression

        return format_expression(self, day_base=day_base, target_offset=target_offset)

    def describe(self) -> str:
        """Describe the expression in English using the configured style."""
        from cronx.nlp.describe import describe

        return describe(self)
