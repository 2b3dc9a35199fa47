from datetime import date, datetime, timedelta, timezone

from activity.clock import day_bounds, format_timestamp, parse_timestamp, year_bounds


class TestStorageFormat:

    def test_fixed_width_utc(self):
        dt = datetime(2024, 5, 1, 14, 0, 0, 500, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(dt) == "2024-05-01T12:00:00.000500Z"

    def test_naive_is_utc(self):
        assert format_timestamp(datetime(2024, 5, 1, 12)) == "2024-05-01T12:00:00.000000Z"

    def test_small_years_are_zero_padded(self):
        assert format_timestamp(datetime(999, 1, 2, tzinfo=timezone.utc)).startswith("0999-01-02T")

    def test_parse_inverts_format(self):
        dt = datetime(2024, 2, 29, 23, 59, 59, 999999, tzinfo=timezone.utc)
        assert parse_timestamp(format_timestamp(dt)) == dt


class TestBounds:

    def test_year_bounds_half_open(self):
        assert year_bounds(2023) == ("2023-01-01T00:00:00.000000Z", "2024-01-01T00:00:00.000000Z")

    def test_year_9999_end_sorts_after_the_whole_year(self):
        start, end = year_bounds(9999)
        assert start == "9999-01-01T00:00:00.000000Z"
        assert "9999-12-31T23:59:59.999999Z" < end

    def test_day_bounds(self):
        assert day_bounds(date(2024, 12, 31)) == (
            "2024-12-31T00:00:00.000000Z",
            "2025-01-01T00:00:00.000000Z",
        )
