"""
tests/calendar/test_sources.py

Covers:
  - Calendar.load against the bundled calendars
  - YamlDirectorySource: lookup, suffixes, empty and malformed files
  - MappingSource
  - Unknown names and names escaping the directory
"""

from datetime import date

import pytest
import yaml

from banktime.calendar import (
    Calendar,
    CalendarError,
    CalendarNotFoundError,
    InvalidCalendarError,
    MappingSource,
    YamlDirectorySource,
)
from banktime.calendar import sources


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def calendar_dir(tmp_path):
    (tmp_path / "target.yml").write_text(
        "business_days: [Monday, Tuesday, Wednesday, Thursday, Friday]\n"
        "holidays:\n"
        "  - 1st Jan, 2013\n"
        "  - 29 Mar 2013\n"
    )
    (tmp_path / "sixday.yaml").write_text("business_days: [mon, tue, wed, thu, fri, sat]\n")
    (tmp_path / "empty.yml").write_text("")
    (tmp_path / "notes.txt").write_text("not a calendar")
    return tmp_path


@pytest.fixture
def source(calendar_dir):
    return YamlDirectorySource(calendar_dir)


# ── Bundled calendars ─────────────────────────────────────────────────────────

class TestLoadBundled:

    def test_loads_weekdays(self):
        cal = Calendar.load("weekdays")
        assert isinstance(cal, Calendar)
        assert cal.name == "weekdays"
        assert cal.business_days == list(Calendar.default_business_days)
        assert cal.holidays == set()

    def test_reads_the_yaml_file(self, monkeypatch):
        seen = []
        real_safe_load = yaml.safe_load

        def spy(stream):
            seen.append(stream.name)
            return real_safe_load(stream)

        monkeypatch.setattr(sources.yaml, "safe_load", spy)
        Calendar.load("weekdays")
        assert len(seen) == 1
        assert seen[0].endswith("weekdays.yml")

    def test_invalid_calendar_raises(self):
        with pytest.raises(CalendarNotFoundError):
            Calendar.load("invalid-calendar")

    def test_not_found_is_lookup_error(self):
        with pytest.raises(LookupError):
            Calendar.load("invalid-calendar")

    def test_bundled_names(self):
        assert "weekdays" in YamlDirectorySource().names()


# ── YamlDirectorySource ───────────────────────────────────────────────────────

class TestYamlDirectorySource:

    def test_loads_calendar(self, source):
        cal = Calendar.load("target", source)
        assert cal.business_days == ["mon", "tue", "wed", "thu", "fri"]
        assert cal.holidays == {date(2013, 1, 1), date(2013, 3, 29)}
        assert not cal.is_business_day(date(2013, 3, 29))

    def test_yaml_suffix(self, source):
        cal = Calendar.load("sixday", source)
        assert cal.is_business_day(date(2013, 1, 5))

    def test_empty_file_is_default_calendar(self, source):
        assert source.fetch("empty") == {}
        assert Calendar.load("empty", source) == Calendar()

    def test_names(self, source):
        assert source.names() == ["empty", "sixday", "target"]

    def test_names_missing_directory(self, tmp_path):
        assert YamlDirectorySource(tmp_path / "nowhere").names() == []

    def test_unknown_name(self, source):
        with pytest.raises(CalendarNotFoundError):
            source.fetch("notes")

    @pytest.mark.parametrize("name", ["", ".", "..", "../target", "sub/target"])
    def test_rejects_paths(self, source, name):
        with pytest.raises(CalendarNotFoundError):
            source.fetch(name)

    def test_non_mapping_document(self, calendar_dir, source):
        (calendar_dir / "listy.yml").write_text("- mon\n- tue\n")
        with pytest.raises(InvalidCalendarError):
            source.fetch("listy")

    def test_malformed_yaml(self, calendar_dir, source):
        (calendar_dir / "broken.yml").write_text("business_days: [mon, tue\n")
        with pytest.raises(InvalidCalendarError):
            source.fetch("broken")

    def test_bad_weekday_fails_load(self, calendar_dir, source):
        (calendar_dir / "bad.yml").write_text("business_days: [mon, Notaday]\n")
        with pytest.raises(InvalidCalendarError):
            Calendar.load("bad", source)

    def test_bad_holiday_fails_load(self, calendar_dir, source):
        (calendar_dir / "bad.yml").write_text("holidays: [not a date at all]\n")
        with pytest.raises(CalendarError):
            Calendar.load("bad", source)

    def test_yaml_native_dates(self, calendar_dir, source):
        # unquoted ISO dates arrive from YAML as date objects
        (calendar_dir / "iso.yml").write_text("holidays: [2013-12-25, 2013-12-26]\n")
        cal = Calendar.load("iso", source)
        assert cal.holidays == {date(2013, 12, 25), date(2013, 12, 26)}


# ── MappingSource ─────────────────────────────────────────────────────────────

class TestMappingSource:

    @pytest.fixture
    def source(self):
        return MappingSource({
            "weekend": {"business_days": ["sat", "sun"]},
            "plain": {},
        })

    def test_loads_calendar(self, source):
        cal = Calendar.load("weekend", source)
        assert cal.business_days == ["sat", "sun"]
        assert cal.name == "weekend"

    def test_unknown_name(self, source):
        with pytest.raises(CalendarNotFoundError):
            Calendar.load("weekdays", source)

    def test_names(self, source):
        assert source.names() == ["plain", "weekend"]
