from activity.clock import current_year, format_timestamp, utc_now
from activity.ingest import ingest_batch
from activity.query import events_for_year


def _ev(source, ts, context=""):
    return {"source": source, "context": context, "timestamp": ts}


class TestYearRange:

    def test_last_representable_year(self, store):
        ingest_batch(store, [
            _ev("git", "9999-06-01T00:00:00Z"),
            _ev("git", "9999-12-31T23:59:59.999999Z", "late"),
            _ev("git", "9998-12-31T23:59:59Z"),
        ])
        events = events_for_year(store, 9999)
        assert [(e.timestamp.month, e.context) for e in events] == [(12, "late"), (6, "")]

    def test_new_year_boundary(self, store):
        ingest_batch(store, [
            _ev("git", "2023-12-31T23:59:59Z"),
            _ev("git", "2024-01-01T00:00:00Z"),
        ])

        [last_of_2023] = events_for_year(store, 2023)
        [first_of_2024] = events_for_year(store, 2024)

        assert last_of_2023.timestamp.year == 2023
        assert last_of_2023.timestamp.second == 59
        assert first_of_2024.timestamp.year == 2024

    def test_offsets_are_compared_in_utc(self, store):
        # 00:30 on Jan 1 in +01:00 is still 2023 in UTC
        ingest_batch(store, [_ev("git", "2024-01-01T00:30:00+01:00")])
        assert len(events_for_year(store, 2023)) == 1
        assert events_for_year(store, 2024) == []

    def test_defaults_to_current_year(self, store):
        ingest_batch(store, [
            _ev("git", format_timestamp(utc_now())),
            _ev("git", f"{current_year() - 1}-06-01T00:00:00Z"),
        ])
        [event] = events_for_year(store)
        assert event.timestamp.year == current_year()

    def test_empty_year_is_an_empty_list(self, store):
        assert events_for_year(store, 1999) == []

    def test_out_of_range_years_match_nothing(self, store):
        ingest_batch(store, [_ev("git", "2024-01-01T00:00:00Z")])
        assert events_for_year(store, 0) == []
        assert events_for_year(store, -5) == []
        assert events_for_year(store, 12345) == []


class TestFilteringAndOrder:

    def test_source_filter_exact_match(self, store):
        ingest_batch(store, [
            _ev("a", "2024-03-01T09:00:00Z"),
            _ev("b", "2024-03-01T10:00:00Z"),
            _ev("ab", "2024-03-01T11:00:00Z"),
        ])
        events = events_for_year(store, 2024, source="a")
        assert [e.source for e in events] == ["a"]

    def test_newest_first(self, store):
        ingest_batch(store, [
            _ev("git", "2024-02-01T00:00:00Z"),
            _ev("git", "2024-11-01T00:00:00Z"),
            _ev("git", "2024-06-01T00:00:00.5Z"),
            _ev("git", "2024-06-01T00:00:00Z"),
        ])
        stamps = [e.timestamp for e in events_for_year(store, 2024)]
        assert stamps == sorted(stamps, reverse=True)
        assert stamps[0].month == 11

    def test_event_fields_returned(self, store):
        ingest_batch(store, [{
            "source": "git",
            "context": "repo",
            "timestamp": "2024-04-04T04:04:04Z",
            "metadata": {"message": "fix", "files": ["a.py"]},
        }])
        [event] = events_for_year(store, 2024)
        assert event.source == "git"
        assert event.context == "repo"
        assert event.metadata == {"message": "fix", "files": ["a.py"]}
