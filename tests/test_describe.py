"""Tests for English descriptions of cron expressions."""

import pytest

from cronx.config import settings
from cronx.cron.expression import CronExpression
from cronx.cron.types import DayBase
from cronx.exceptions import InvalidCronExpression
from cronx.nlp.composer import parse
from cronx.nlp.describe import CronDescriber, describe, join_words, ordinal


class TestShortcuts:
    """Tests for the fixed phrasings of common shapes."""

    @pytest.mark.parametrize(
        "expression,expected",
        [
            ("* * * * *", "Every minute"),
            ("*/15 * * * *", "Every 15 minutes"),
            ("0 * * * *", "Every hour"),
            ("0 */2 * * *", "Every 2 hours"),
            ("0 0 * * *", "Every day at midnight"),
            ("0 12 * * *", "Every day at noon"),
            ("30 9 * * *", "Every day at 9:30 AM"),
            ("0 0 * * 1", "Every Monday at midnight"),
            ("0 8 * * 1-5", "Every weekday at 8 AM"),
            ("0 10 * * 0,6", "Every Saturday and Sunday at 10 AM"),
            ("0 15 * * 1,3,5", "Every Monday, Wednesday and Friday at 3 PM"),
            ("0 9 * * FRI", "Every Friday at 9 AM"),
            ("0 12 15 * *", "On the 15th day of every month at noon"),
            ("0 23 L * *", "On the last day of every month at 11 PM"),
            ("0 9 25 12 *", "Every year on December 25th at 9 AM"),
            ("0 0 1 JAN *", "Every year on January 1st at midnight"),
        ],
    )
    def test_shortcut(self, expression, expected):
        assert describe(expression, time_format="12h", use_oxford_comma=False) == expected

    def test_oxford_comma(self):
        result = describe("0 15 * * 1,3,5", time_format="12h", use_oxford_comma=True)
        assert result == "Every Monday, Wednesday, and Friday at 3 PM"


class TestGenericDescriptions:
    """Tests for field-by-field descriptions."""

    @pytest.mark.parametrize(
        "expression,expected",
        [
            ("*/30 9-17 * * 1-5", "Every 30 minutes from 9 AM to 5 PM, on weekdays"),
            ("0 9-17/2 * * *", "Every 2 hours from 9 AM to 5 PM"),
            ("0 22-6 * * *", "Every hour from 10 PM to 6 AM"),
            ("15 * * * *", "At 15 minutes past the hour"),
            ("30 8,20 * * *", "At 8:30 AM and 8:30 PM"),
            ("0 */2 * * 1-5", "Every 2 hours, on weekdays"),
            ("0 0 1,15 * *", "At midnight, on the 1st and 15th days of the month"),
            ("0 9 * * 1#2", "At 9 AM, on the second Monday of the month"),
            ("0 9 * * 5L", "At 9 AM, on the last Friday of the month"),
            ("0 9 L-2 * *", "At 9 AM, on the 3rd to last day of the month"),
            ("0 9 15W * *", "At 9 AM, on the weekday nearest the 15th of the month"),
            ("0 0 1 */3 *", "At midnight, on the 1st day of the month, every 3 months"),
            (
                "0 0 1 1,4,7,10 *",
                "At midnight, on the 1st day of the month, in January, April, July and October",
            ),
            ("0 9 1 * 1", "At 9 AM, on the 1st day of the month or on Monday"),
            ("0 9 * * MON-FRI", "At 9 AM, from Monday to Friday"),
            ("* * * * 0,6", "Every minute, on weekends"),
            ("0 6 * 6-8 *", "At 6 AM, from June to August"),
        ],
    )
    def test_generic(self, expression, expected):
        assert describe(expression, time_format="12h", use_oxford_comma=False) == expected

    @pytest.mark.parametrize(
        "expression,expected",
        [
            (
                "0 0 1 1-6/2,12 *",
                "At midnight, on the 1st day of the month, "
                "every 2 months from January to June and in December",
            ),
            (
                "0 0 * * 1-5/2,0",
                "At midnight, every 2 days of the week from Monday to Friday and on Sunday",
            ),
            (
                "0 0 1-10/2,15 * *",
                "At midnight, every 2 days from the 1st to the 10th and on the 15th of the month",
            ),
            ("0 0 * * */2,1", "At midnight, every 2 days of the week and on Monday"),
            ("*/15,30 * * * *", "Every 15 minutes and at minute 30"),
            ("0 */2,5 * * *", "Every 2 hours and during the 5 AM hour"),
        ],
    )
    def test_stepped_list_elements(self, expression, expected):
        """Each list element carries its own step."""
        assert describe(expression, time_format="12h", use_oxford_comma=False) == expected

    def test_day_of_month_extensions_in_list(self):
        result = describe("0 9 1,L-2 * *", time_format="12h", use_oxford_comma=False)
        assert result == "At 9 AM, on the 1st and on the 3rd to last day of the month"


class TestTimeFormat:
    """Tests for 12h and 24h rendering."""

    def test_24h(self):
        describer = CronDescriber(time_format="24h")
        assert describer.describe("30 21 * * *") == "Every day at 21:30"
        assert describer.describe("0 9 * * *") == "Every day at 9:00"

    def test_noon_and_midnight_in_both_formats(self):
        for time_format in ("12h", "24h"):
            describer = CronDescriber(time_format=time_format)
            assert describer.format_time(12, 0) == "noon"
            assert describer.format_time(0, 0) == "midnight"

    def test_12h_edges(self):
        describer = CronDescriber()
        assert describer.format_time(0, 30) == "12:30 AM"
        assert describer.format_time(12, 5) == "12:05 PM"
        assert describer.format_time(23, 0) == "11 PM"

    def test_settings_are_defaults(self, monkeypatch):
        monkeypatch.setattr(settings, "time_format", "24h")
        monkeypatch.setattr(settings, "use_oxford_comma", True)
        assert describe("0 18 * * 1,2,3") == "Every Monday, Tuesday, and Wednesday at 18:00"


class TestDescribeInput:
    """Tests for accepted inputs."""

    def test_expression_object(self):
        expr = CronExpression.from_string("0 9 * * 1-5", offset=0)
        assert describe(expr, time_format="12h") == "Every weekday at 9 AM"

    def test_base_one_is_converted(self):
        """Sunday=1 numbering is described by day name, not number."""
        expr = CronExpression.from_string("0 9 * * 2-6", offset=0, day_base=DayBase.ONE)
        assert describe(expr, time_format="12h") == "Every weekday at 9 AM"

    @pytest.mark.parametrize(
        "expression,expected",
        [
            ("0 9 * * 7#1", "At 9 AM, on the first Saturday of the month"),
            ("0 9 * * 2#1", "At 9 AM, on the first Monday of the month"),
            ("0 9 * * 7L", "At 9 AM, on the last Saturday of the month"),
        ],
    )
    def test_base_one_nth_weekday(self, expression, expected):
        expr = CronExpression.from_string(expression, offset=0, day_base=DayBase.ONE)
        assert describe(expr, time_format="12h") == expected

    @pytest.mark.parametrize("text", ["", "* * *", "0 25 * * *"])
    def test_invalid_input_raises(self, text):
        with pytest.raises(InvalidCronExpression):
            describe(text)

    @pytest.mark.parametrize(
        "phrase",
        ["every day at 3pm", "every weekday at 8am", "every 15 minutes", "last day of the month at 11pm"],
    )
    def test_describes_parsed_phrases(self, phrase):
        """Anything the parser produces can be described."""
        assert describe(parse(phrase, offset=0))


class TestHelpers:
    """Tests for ordinal and list helpers."""

    @pytest.mark.parametrize(
        "n,expected",
        [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (12, "12th"),
         (13, "13th"), (21, "21st"), (22, "22nd"), (31, "31st"), (111, "111th")],
    )
    def test_ordinal(self, n, expected):
        assert ordinal(n) == expected

    def test_join_words(self):
        assert join_words(["a"]) == "a"
        assert join_words(["a", "b"]) == "a and b"
        assert join_words(["a", "b", "c"]) == "a, b and c"
        assert join_words(["a", "b", "c"], oxford_comma=True) == "a, b, and c"
        assert join_words(["a", "b"], oxford_comma=True) == "a and b"
