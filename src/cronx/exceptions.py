"""Exceptions raised by cronx.

None of these derive from ValueError, so they pass through pydantic
validators untouched instead of being wrapped in a ValidationError.
"""


class CronxError(Exception):
    """Base class for all cronx errors."""

    pass


class InvalidCronExpression(CronxError):
    """A cron expression has the wrong arity or a field fails its grammar.

    Attributes:
        expression: The offending expression text.
        field_index: Zero-based index of the bad field, or None for arity errors.
        field_name: Human-readable name of the bad field, if any.
        reason: Short explanation of the failure.
    """

    def __init__(
        self,
        expression: str,
        reason: str,
        field_index: int | None = None,
        field_name: str | None = None,
    ) -> None:
        self.expression = expression
        self.reason = reason
        self.field_index = field_index
        self.field_name = field_name

        if field_index is None:
            message = f"Invalid cron expression '{expression}': {reason}"
        else:
            message = (
                f"Invalid cron expression '{expression}': field {field_index} "
                f"({field_name}) {reason}"
            )
        super().__init__(message)


class InvalidNaturalLanguageInput(CronxError):
    """A number captured from a natural-language schedule is out of bounds.

    Attributes:
        text: The normalized input text.
        token: The captured token (e.g. "0" from "every 0 minutes").
        bound: Description of the valid range (e.g. "1-59").
    """

    def __init__(
        self,
        text: str,
        token: str,
        bound: str,
        what: str = "value",
        message: str | None = None,
    ) -> None:
        self.text = text
        self.token = token
        self.bound = bound
        self.what = what
        super().__init__(
            message
            or f"'{token}' is not a valid {what} in '{text}' (expected {bound})"
        )


class UnrecognizedScheduleError(InvalidNaturalLanguageInput):
    """Raised in strict mode when no pattern recognizes the input."""

    def __init__(self, text: str) -> None:
        super().__init__(
            text,
            token=text,
            bound="a recognized schedule phrase",
            what="schedule",
            message=f"Unrecognized schedule: '{text}'",
        )


class UnrepresentableShiftError(CronxError):
    """A timezone shift cannot be expressed in cron syntax.

    Raised for fractional-hour shifts when the minute field is not a
    single number.
    """

    pass
