"""Tests for schedule data models and entry parsing."""

from datetime import date

import pytest

from nodejs_schedule.models import (
    ScheduleEntry,
    normalize_version_key,
    parse_schedule_date,
    parse_schedule_entry,
)


class TestNormalizeVersionKey:
    @pytest.mark.parametrize(
        "key, expected",
        [("v4", "4"), ("v0.12", "0.12"), ("4", "4"), ("0.12", "0.12"), ("v10", "10")],
    )
    def test_strips_leading_v_only(self, key, expected):
        assert normalize_version_key(key) == expected


class TestParseScheduleDate:
    def test_iso_date(self):
        assert parse_schedule_date("2015-09-08") == date(2015, 9, 8)

    def test_time_component_ignored(self):
        assert parse_schedule_date("2018-04-30T00:00:00Z") == date(2018, 4, 30)

    @pytest.mark.parametrize("value", ["", "not-a-date", "2018-13-01", "30/04/2018"])
    def test_malformed_date_raises_value_error(self, value):
        with pytest.raises(ValueError):
            parse_schedule_date(value)

    @pytest.mark.parametrize("value", ["2015-09-081", "2015-09-08garbage", "2015-09-08 ", "2015-09-08Tgarbage"])
    def test_trailing_text_raises_value_error(self, value):
        with pytest.raises(ValueError):
            parse_schedule_date(value)

    def test_non_string_raises_type_error(self):
        with pytest.raises(TypeError):
            parse_schedule_date(20180430)


class TestParseScheduleEntry:
    def test_full_record(self):
        entry = parse_schedule_entry(
            "v4",
            {
                "start": "2015-09-08",
                "lts": "2015-10-12",
                "maintenance": "2017-04-01",
                "end": "2018-04-30",
                "codename": "Argon",
            },
        )
        assert entry == ScheduleEntry(
            version="4",
            start=date(2015, 9, 8),
            end=date(2018, 4, 30),
            lts=date(2015, 10, 12),
            maintenance=date(2017, 4, 1),
            codename="Argon",
        )

    def test_minimal_record(self):
        entry = parse_schedule_entry("v0.12", {"start": "2015-02-06", "end": "2016-12-31"})
        assert entry.version == "0.12"
        assert entry.lts is None
        assert entry.maintenance is None
        assert entry.codename is None

    def test_empty_codename_becomes_none(self):
        entry = parse_schedule_entry("v5", {"start": "2015-10-29", "end": "2016-06-30", "codename": ""})
        assert entry.codename is None

    @pytest.mark.parametrize("missing", ["start", "end"])
    def test_missing_required_date(self, missing):
        record = {"start": "2015-09-08", "end": "2018-04-30"}
        del record[missing]
        with pytest.raises(KeyError):
            parse_schedule_entry("v4", record)

    def test_record_not_an_object(self):
        with pytest.raises(TypeError):
            parse_schedule_entry("v4", ["2015-09-08", "2018-04-30"])


class TestScheduleEntry:
    def test_to_dict_omits_unset_fields(self):
        entry = ScheduleEntry(version="0.12", start=date(2015, 2, 6), end=date(2016, 12, 31))
        assert entry.to_dict() == {"version": "0.12", "start": "2015-02-06", "end": "2016-12-31"}

    def test_to_dict_full(self):
        entry = ScheduleEntry(
            version="6",
            start=date(2016, 4, 26),
            end=date(2019, 4, 30),
            lts=date(2016, 10, 18),
            maintenance=date(2018, 4, 30),
            codename="Boron",
        )
        assert entry.to_dict() == {
            "version": "6",
            "start": "2016-04-26",
            "end": "2019-04-30",
            "lts": "2016-10-18",
            "maintenance": "2018-04-30",
            "codename": "Boron",
        }

    def test_entry_is_mutable(self):
        entry = ScheduleEntry(version="4", start=date(2015, 9, 8), end=date(2018, 4, 30))
        entry.version = "4-mutated"
        assert entry.version == "4-mutated"
