"""Type definitions shared by the cron modules."""

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DayBase(IntEnum):
    """Numbering convention of the day-of-week field.

    Attributes:
        ZERO: Sunday=0 ... Saturday=6 (classic crontab).
        ONE: Sunday=1 ... Saturday=7.
    """

    ZERO = 0
    ONE = 1

    @property
    def first(self) -> int:
        """Numeric value of Sunday in this base."""
        return int(self)

    @property
    def last(self) -> int:
        """Numeric value of Saturday in this base."""
        return int(self) + 6


class CronSchedule(BaseModel):
    """Field-keyed schedule handed to an external scheduler.

    Serializes with camelCase keys (``dayOfMonth``, ``dayOfWeek``) when
    dumped with ``by_alias=True``.

    Attributes:
        minute: Minute field.
        hour: Hour field.
        day_of_month: Day-of-month field.
        month: Month field.
        day_of_week: Day-of-week field.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    minute: str = Field(..., description="Minute field")
    hour: str = Field(..., description="Hour field")
    day_of_month: str = Field(..., description="Day-of-month field")
    month: str = Field(..., description="Month field")
    day_of_week: str = Field(..., description="Day-of-week field")

    def to_cron_string(self) -> str:
        """Join the fields into the 5-field wire format."""
        return " ".join(
            (self.minute, self.hour, self.day_of_month, self.month, self.day_of_week)
        )
