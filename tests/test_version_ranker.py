"""Tests for version ranking over search results."""

from datetime import datetime, timezone

import pytest

from conftest import FakeIndex, component
from rundeck_options.resolution.models import Coordinate
from rundeck_options.search.index import format_label, hit_to_record
from rundeck_options.search.query import SortHint, TermFilter, VersionFilter
from rundeck_options.search.ranker import VersionRanker


def _releases(versions):
    return FakeIndex([component("releases", "com.foo", "bar", v) for v in versions])


class TestRank:
    """Ranking and truncation."""

    def test_truncates_to_highest_ranked(self):
        index = _releases([f"1.{n}" for n in range(1, 11)])
        ranker = VersionRanker(index)

        ranked = ranker.rank(VersionFilter(group_id="com.foo"), 3)

        assert [r.value for r in ranked] == ["1.10", "1.9", "1.8"]

    def test_requests_wide_window_sorted_by_recency(self):
        index = _releases(["1.0"])
        VersionRanker(index).rank(VersionFilter(repository="releases"), 10)

        filters, sort, offset, limit = index.calls[0]
        assert sort == (SortHint("assets.last_updated", descending=True),)
        assert offset == 0
        assert limit == 2000
        assert TermFilter("repository_name", "releases") in filters

    def test_window_grows_with_limit(self):
        index = _releases(["1.0"])
        VersionRanker(index).rank(VersionFilter(), 3000)
        assert index.calls[0][3] == 3000

    def test_fewer_matches_than_limit(self):
        ranked = VersionRanker(_releases(["1.0", "2.0"])).rank(VersionFilter(), 10)
        assert [r.value for r in ranked] == ["2.0", "1.0"]

    def test_limit_must_be_positive(self):
        with pytest.raises(ValueError):
            VersionRanker(_releases([])).rank(VersionFilter(), 0)

    def test_duplicates_are_kept(self):
        ranked = VersionRanker(_releases(["1.0", "1.0"])).rank(VersionFilter(), 10)
        assert [r.value for r in ranked] == ["1.0", "1.0"]


class TestLatest:
    """Latest version and latest snapshot convenience lookups."""

    def test_latest_version(self):
        ranker = VersionRanker(_releases(["1.9", "1.10", "1.2"]))
        assert ranker.latest_version(Coordinate("releases", "com.foo", "bar")) == "1.10"

    def test_latest_version_none_when_empty(self):
        ranker = VersionRanker(_releases([]))
        assert ranker.latest_version(Coordinate("releases", "com.foo", "bar")) is None

    def test_latest_version_filters_extension(self):
        index = FakeIndex([
            component("releases", "com.foo", "bar", "2.0", extension="war"),
            component("releases", "com.foo", "bar", "1.0"),
        ])
        ranker = VersionRanker(index)
        assert ranker.latest_version(Coordinate("releases", "com.foo", "bar")) == "1.0"

    def test_latest_snapshot(self, index):
        ranker = VersionRanker(index)

        latest = ranker.latest_snapshot(Coordinate("snapshots", "com.foo", "bar"), "1.2.3-SNAPSHOT")

        assert latest == "1.2.3-20180102.192026-6"
        filters, sort, _, limit = index.calls[-1]
        assert sort == ()
        assert limit == 2000

    def test_latest_snapshot_none_when_no_builds(self, index):
        ranker = VersionRanker(index)
        assert ranker.latest_snapshot(Coordinate("snapshots", "com.foo", "bar"), "9.9-SNAPSHOT") is None


class TestRecordMapping:
    """Index documents to version records."""

    def test_label_with_last_modified(self):
        record = hit_to_record(component("releases", "com.foo", "bar", "1.2.3", last_modified=1514920826000))

        assert record.value == "1.2.3"
        assert record.label == "1.2.3 (2018-01-02 19:20:26)"
        assert record.last_modified == datetime(2018, 1, 2, 19, 20, 26, tzinfo=timezone.utc)

    def test_label_without_last_modified(self):
        record = hit_to_record(component("releases", "com.foo", "bar", "1.2.3"))
        assert record.label == "1.2.3 (null)"
        assert record.last_modified is None

    def test_document_without_assets(self):
        assert hit_to_record({"version": "3.0"}).label == "3.0 (null)"

    def test_to_option(self):
        record = hit_to_record({"version": "3.0"})
        assert record.to_option() == {"name": "3.0 (null)", "value": "3.0"}

    def test_format_label(self):
        assert format_label("1.0", None) == "1.0 (null)"
