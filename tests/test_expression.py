"""Tests for the CronExpression value type."""

import pytest
from pydantic import ValidationError

from cronx.config import settings
from cronx.cron.expression import CronExpression, get_local_utc_offset
from cronx.cron.types import DayBase
from cronx.exceptions import InvalidCronExpression


class TestCronExpression:
    """Tests for building and transforming expressions."""

    def test_from_string(self):
        """Fields, offset and base are kept."""
        expr = CronExpression.from_string("30 9 * * 1-5", offset=-5)

        assert expr.minute == "30"
        assert expr.hour == "9"
        assert expr.day_of_week == "1-5"
        assert expr.offset == -5
        assert expr.day_base == DayBase.ZERO
        assert str(expr) == "30 9 * * 1-5"

    def test_from_string_normalizes_whitespace(self):
        """The string form uses single spaces."""
        expr = CronExpression.from_string(" 0   12 * *  * ", offset=0)
        assert str(expr) == "0 12 * * *"

    def test_invalid_string_raises(self):
        """Malformed text raises InvalidCronExpression, not a pydantic error."""
        with pytest.raises(InvalidCronExpression):
            CronExpression.from_string("0 9 * *", offset=0)
        with pytest.raises(InvalidCronExpression):
            CronExpression.from_string("0 9 * * 7", offset=0)

    def test_direct_construction_is_validated(self):
        """Building from keyword fields runs the same grammar."""
        with pytest.raises(InvalidCronExpression) as exc_info:
            CronExpression(
                minute="0", hour="25", day_of_month="*", month="*", day_of_week="*", offset=0
            )
        assert exc_info.value.field_index == 1

    def test_base_one_day_of_week(self):
        """Sunday=7 is valid under base 1."""
        expr = CronExpression.from_string("0 0 * * 7", offset=0, day_base=DayBase.ONE)
        assert expr.day_base == DayBase.ONE

    def test_is_immutable(self):
        """Assigning a field fails."""
        expr = CronExpression.from_string("0 9 * * *", offset=0)
        with pytest.raises(ValidationError):
            expr.hour = "10"

    def test_equality_and_hash(self):
        """Expressions with the same fields and offset are equal."""
        a = CronExpression.from_string("0 9 * * *", offset=1)
        b = CronExpression.from_string("0 9 * * *", offset=1)
        assert a == b
        assert hash(a) == hash(b)
        assert a != a.with_offset(2)

    def test_default_offset_from_settings(self, monkeypatch):
        """CRONX_UTC_OFFSET supplies the offset when none is given."""
        monkeypatch.setattr(settings, "utc_offset", 3.0)
        expr = CronExpression.from_string("0 9 * * *")
        assert expr.offset == 3.0

    def test_to_dict(self):
        """The field-keyed structure uses camelCase keys."""
        expr = CronExpression.from_string("0 9 1 6 1-5", offset=0)
        assert expr.to_dict() == {
            "minute": "0",
            "hour": "9",
            "dayOfMonth": "1",
            "month": "6",
            "dayOfWeek": "1-5",
        }

    def test_to_day_base(self):
        """Renumbering returns a new expression in the target base."""
        expr = CronExpression.from_string("0 9 * * 0,6", offset=0)
        remapped = expr.to_day_base(DayBase.ONE)

        assert remapped.day_of_week == "1,7"
        assert remapped.day_base == DayBase.ONE
        assert expr.day_of_week == "0,6"
        assert remapped.to_day_base(DayBase.ONE) is remapped

    def test_format(self):
        """format() converts offset and base."""
        expr = CronExpression.from_string("0 9 * * 1-5", offset=2)
        assert expr.format(day_base=DayBase.ONE, target_offset=0) == "0 7 * * 2-6"

    def test_describe(self):
        expr = CronExpression.from_string("0 9 * * 1-5", offset=0)
        assert expr.describe() == "Every weekday at 9 AM"

    def test_from_natural_language(self):
        """Natural-language input goes through the parser."""
        expr = CronExpression.from_natural_language("every day at 3pm", offset=1)
        assert str(expr) == "0 15 * * *"
        assert expr.offset == 1


class TestLocalOffset:
    """Tests for local offset detection."""

    def test_offset_is_plausible(self):
        offset = get_local_utc_offset()
        assert isinstance(offset, float)
        assert -12 <= offset <= 14
