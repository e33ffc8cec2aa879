from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

import pytest

from objutil.date import DateParts, padding, read_date, to_datetime


# ==================== FIXTURES ====================
@pytest.fixture
def sample_moments():
    """Moments covering single-digit and two/three-digit fields."""
    return [
        datetime(2018, 1, 1, 1, 1, 1, 1000),
        datetime(2024, 12, 31, 23, 59, 58, 987654),
    ]


def expected_parts(moment: datetime) -> dict:
    ms = moment.microsecond // 1000
    return {
        "y": moment.year,
        "m": moment.month,
        "d": moment.day,
        "D": moment.isoweekday() % 7,
        "H": moment.hour,
        "M": moment.minute,
        "S": moment.second,
        "T": ms,
        "mm": f"{moment.month:02d}",
        "dd": f"{moment.day:02d}",
        "HH": f"{moment.hour:02d}",
        "MM": f"{moment.minute:02d}",
        "SS": f"{moment.second:02d}",
        "TT": f"{ms:03d}",
    }


FORMAT_CASES = [
    ("%y-%m-%d %H:%M:%S.%T", "{y}-{m}-{d} {H}:{M}:{S}.{T}"),
    ("%%%y-%%m-%d %H:%%%M:%S.%%%T", "%{y}-%m-{d} {H}:%{M}:{S}.%{T}"),
    ("%y-%mm-%dd %HH:%MM:%SS.%TT", "{y}-{mm}-{dd} {HH}:{MM}:{SS}.{TT}"),
]


# ==================== PADDING TESTS ====================
class TestPadding:
    """Test cases for padding utility function."""

    @pytest.mark.parametrize(
        "src, length, char, expected",
        [
            (1, 2, "0", "01"),
            (1, 2, "-", "-1"),
            ("7", 3, "0", "007"),
            (123, 2, "0", "123"),
            (5, 3, "ab", "abab5"),
            (5, 2, "", "05"),
        ],
    )
    def test_padding(self, src, length, char, expected):
        assert padding(src, length, char) == expected

    def test_default_char(self):
        assert padding(9, 4) == "0009"


# ==================== READ_DATE TESTS ====================
class TestReadDate:
    """Test cases for read_date without pattern."""

    def test_fields_match_datetime(self, sample_moments):
        for moment in sample_moments:
            parts = read_date(moment)
            assert isinstance(parts, DateParts)
            assert parts.as_dict() == expected_parts(moment)

    def test_long_names(self):
        parts = read_date(datetime(2018, 1, 1, 1, 2, 3, 4000))
        assert (parts.year, parts.month, parts.date, parts.day) == (2018, 1, 1, 1)  # Monday
        assert (parts.hour, parts.minute, parts.second, parts.millisecond) == (1, 2, 3, 4)

    def test_sunday_is_zero(self):
        assert read_date(date(2024, 3, 17)).day == 0
        assert read_date(date(2024, 3, 16)).day == 6

    def test_short_keys_follow_field_edits(self):
        parts = read_date(datetime(2018, 1, 1, 1, 1, 1, 1000))
        for name in ("year", "month", "date", "day", "hour", "minute", "second", "millisecond"):
            setattr(parts, name, getattr(parts, name) + 1)
        assert parts["y"] == parts.year == 2019
        assert parts["m"] == parts.month == 2
        assert parts["D"] == parts.day == 2
        assert parts["T"] == parts.millisecond == 2
        assert parts["mm"] == "02"
        assert parts["TT"] == "002"

    def test_unknown_key_raises(self):
        with pytest.raises(KeyError):
            read_date(date(2024, 1, 1))["Y"]


class TestReadDateFormat:
    """Test cases for read_date with pattern and DateParts.format."""

    @pytest.mark.parametrize("pattern, template", FORMAT_CASES)
    def test_format_method(self, sample_moments, pattern, template):
        for moment in sample_moments:
            assert read_date(moment).format(pattern) == template.format(**expected_parts(moment))

    @pytest.mark.parametrize("pattern, template", FORMAT_CASES)
    def test_direct_pattern(self, sample_moments, pattern, template):
        for moment in sample_moments:
            assert read_date(moment, pattern) == template.format(**expected_parts(moment))

    def test_known_values(self):
        moment = datetime(2018, 1, 1, 1, 1, 1, 1000)
        assert read_date(moment, "%y-%m-%d %H:%M:%S.%T") == "2018-1-1 1:1:1.1"
        assert read_date(moment, "%y-%mm-%dd %HH:%MM:%SS.%TT") == "2018-01-01 01:01:01.001"

    def test_text_without_tokens_untouched(self):
        assert read_date(date(2024, 1, 1), "week %w, 100%") == "week %w, 100%"

    def test_four_percent_signs_halved(self):
        assert read_date(date(2024, 1, 1), "%%%%y") == "%%y"

    def test_empty_pattern_returns_parts(self):
        assert isinstance(read_date(date(2024, 1, 1), ""), DateParts)


class TestToDatetime:
    """Test cases for input normalization."""

    def test_iso_string(self):
        assert read_date("2018-01-01T01:01:01.001", "%y-%mm-%dd %HH:%MM:%SS.%TT") == "2018-01-01 01:01:01.001"

    def test_date_only_string(self):
        parts = read_date("2024-02-29")
        assert (parts.year, parts.month, parts.date, parts.hour) == (2024, 2, 29, 0)

    def test_date_object_has_midnight(self):
        parts = read_date(date(2024, 6, 15))
        assert (parts.hour, parts.minute, parts.second, parts.millisecond) == (0, 0, 0, 0)

    def test_aware_datetime_keeps_wall_clock(self):
        moment = datetime(2024, 1, 1, 23, 30, tzinfo=ZoneInfo("America/New_York"))
        parts = read_date(moment)
        assert (parts.date, parts.hour, parts.minute) == (1, 23, 30)

    @pytest.mark.parametrize("tz", ["UTC", "Asia/Tokyo", "America/Sao_Paulo"])
    def test_timestamp_in_timezone(self, tz):
        ts = 1514768461
        moment = datetime.fromtimestamp(ts, ZoneInfo(tz))
        assert read_date(ts, tz=tz).as_dict() == expected_parts(moment)

    def test_timestamp_utc_value(self):
        assert read_date(1514768461, "%y-%mm-%dd %HH:%MM:%SS", tz="UTC") == "2018-01-01 01:01:01"

    def test_float_timestamp(self):
        parts = read_date(1514768461.5, tz="UTC")
        assert parts.millisecond == 500

    def test_timestamp_default_local_timezone(self):
        ts = 1514768461
        assert to_datetime(ts).timestamp() == datetime.fromtimestamp(ts, UTC).timestamp()

    def test_invalid_string_raises(self):
        with pytest.raises(ValueError):
            read_date("not-a-date")

    @pytest.mark.parametrize("value", [None, True, [2024, 1, 1], object()])
    def test_unsupported_types_raise(self, value):
        with pytest.raises(TypeError):
            read_date(value)
