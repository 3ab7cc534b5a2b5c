"""Tests for caromar.utils.analytics."""

from __future__ import annotations

import copy
from datetime import datetime, timedelta, timezone

from caromar.utils import analytics
from tests.conftest import repo

NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def _iso(days_ago: float) -> str:
    return (NOW - timedelta(days=days_ago)).strftime("%Y-%m-%dT%H:%M:%SZ")


def _sample() -> list[dict]:
    return [
        repo("alpha", language="Python", stargazers_count=50, forks_count=5, watchers_count=50,
             size=1000, open_issues_count=3, private=True, updated_at=_iso(2),
             created_at="2023-01-10T00:00:00Z"),
        repo("beta", language="Go", stargazers_count=5, forks_count=1, watchers_count=5,
             size=200, open_issues_count=0, fork=True, updated_at=_iso(400),
             created_at="2023-01-20T00:00:00Z"),
        repo("gamma", language="Python", stargazers_count=20, forks_count=0, watchers_count=20,
             size=300, open_issues_count=4, archived=True, updated_at=_iso(20),
             created_at="2024-03-05T00:00:00Z"),
        repo("delta", language=None, stargazers_count=0, forks_count=0, watchers_count=0,
             size=0, open_issues_count=0, updated_at=_iso(100),
             created_at="2024-03-28T00:00:00Z"),
    ]


class TestTotals:
    def test_sums_and_counts(self):
        t = analytics.totals(_sample())
        assert t == {
            "total_repos": 4,
            "total_stars": 75,
            "total_forks": 6,
            "total_watchers": 75,
            "total_size": 1500,
            "total_issues": 7,
            "private_repos": 1,
            "forked_repos": 1,
            "archived_repos": 1,
        }

    def test_empty(self):
        t = analytics.totals([])
        assert t["total_repos"] == 0
        assert all(v == 0 for v in t.values())

    def test_missing_fields_count_as_zero(self):
        t = analytics.totals([{"name": "bare"}])
        assert t["total_repos"] == 1
        assert t["total_stars"] == 0


class TestLanguageHistogram:
    def test_descending_and_excludes_missing(self):
        hist = analytics.language_histogram(_sample())
        assert list(hist.items()) == [("Python", 2), ("Go", 1)]
        assert None not in hist

    def test_ties_keep_first_seen_order(self):
        records = [repo("a", language="Rust"), repo("b", language="C"), repo("c", language="")]
        assert list(analytics.language_histogram(records)) == ["Rust", "C"]


class TestTopAndRecent:
    def test_top_by_stars(self):
        names = [r["name"] for r in analytics.top_by_stars(_sample(), 2)]
        assert names == ["alpha", "gamma"]

    def test_top_n_larger_than_input(self):
        assert len(analytics.top_by_stars(_sample(), 50)) == 4

    def test_top_is_stable(self):
        records = [repo("first", stargazers_count=1), repo("second", stargazers_count=1)]
        assert [r["name"] for r in analytics.top_by_stars(records, 2)] == ["first", "second"]

    def test_most_recently_updated(self):
        names = [r["name"] for r in analytics.most_recently_updated(_sample(), 3)]
        assert names == ["alpha", "gamma", "delta"]

    def test_unparseable_dates_sort_last(self):
        records = [repo("bad", updated_at="not a date"), repo("good", updated_at=_iso(1))]
        assert [r["name"] for r in analytics.most_recently_updated(records)] == ["good", "bad"]

    def test_input_not_mutated(self):
        records = _sample()
        before = copy.deepcopy(records)
        analytics.top_by_stars(records, 2)
        analytics.most_recently_updated(records, 2)
        analytics.report(records, now=NOW)
        assert records == before


class TestAverages:
    def test_rounded(self):
        avg = analytics.averages(_sample())
        assert avg == {
            "avg_stars": 19,  # 75 / 4 = 18.75
            "avg_forks": 2,  # 1.5 rounds half up
            "avg_watchers": 19,
            "avg_size": 375,
            "avg_issues": 2,  # 1.75
        }

    def test_empty_is_no_data(self):
        assert analytics.averages([]) is None


class TestActivityBuckets:
    def test_trending(self):
        names = [r["name"] for r in analytics.activity_bucket(_sample(), "trending", now=NOW)]
        assert names == ["alpha", "gamma"]

    def test_abandoned(self):
        names = [r["name"] for r in analytics.activity_bucket(_sample(), "abandoned", now=NOW)]
        assert names == ["beta"]

    def test_active(self):
        names = [r["name"] for r in analytics.activity_bucket(_sample(), "active", now=NOW)]
        assert names == ["alpha"]

    def test_unknown_bucket_returns_input(self):
        records = _sample()
        assert analytics.activity_bucket(records, "whatever", now=NOW) == records


class TestTimelineAndRange:
    def test_timeline_by_month(self):
        assert analytics.creation_timeline(_sample()) == {"2023-01": 2, "2024-03": 2}

    def test_created_between_inclusive(self):
        hits = analytics.created_between(
            _sample(),
            datetime(2023, 1, 10, tzinfo=timezone.utc),
            datetime(2024, 3, 5),
        )
        assert [r["name"] for r in hits] == ["alpha", "beta", "gamma"]


class TestReport:
    def test_shape(self):
        rep = analytics.report(_sample(), now=NOW)
        assert set(rep) == {
            "overview", "languages", "top_repositories", "recent_activity",
            "averages", "timeline", "trending", "abandoned", "active",
        }
        assert rep["overview"]["total_repos"] == 4
        assert len(rep["top_repositories"]) == 4
        assert rep["trending"] == 2
        assert rep["abandoned"] == 1
        assert rep["active"] == 1

    def test_top_five_only(self):
        records = [repo(f"r{i}", stargazers_count=i) for i in range(8)]
        rep = analytics.report(records, now=NOW)
        assert [r["name"] for r in rep["top_repositories"]] == ["r7", "r6", "r5", "r4", "r3"]
        assert len(rep["recent_activity"]) == 5
