"""
Tests for the maintenance checks.
"""

from datetime import datetime, timedelta, timezone

from package_health_gate.checks.base import Verdict
from package_health_gate.checks.maintenance import (
    check_maintenance,
    check_open_issues,
    check_recency,
    months_since,
)
from package_health_gate.config import GateConfig
from package_health_gate.resolvers.repository import (
    LookupStatus,
    RepositoryCoordinate,
    RepositoryLookup,
)
from package_health_gate.vcs.base import RepositorySnapshot

NOW = datetime(2024, 12, 1, tzinfo=timezone.utc)
CONFIG = GateConfig()
FOUND = RepositoryLookup(
    LookupStatus.FOUND,
    RepositoryCoordinate("owner", "repo"),
    "https://github.com/owner/repo",
)


def months_ago(months: int) -> datetime:
    return NOW - timedelta(days=30 * months)


def make_snapshot(pushed_at: datetime | None, open_issues: int) -> RepositorySnapshot:
    return RepositorySnapshot(
        stargazer_count=0,
        fork_count=0,
        pushed_at=pushed_at,
        license_id=None,
        open_issue_count=open_issues,
    )


class TestRecency:
    def test_recent_push_passes(self):
        result = check_recency(months_ago(5), CONFIG, now=NOW)
        assert result.name == "Recent Activity"
        assert result.verdict is Verdict.PASS

    def test_stale_push_fails(self):
        result = check_recency(months_ago(7), CONFIG, now=NOW)
        assert result.verdict is Verdict.FAIL
        assert "7.0 months" in result.message

    def test_exactly_at_limit_passes(self):
        result = check_recency(months_ago(6), CONFIG, now=NOW)
        assert result.verdict is Verdict.PASS

    def test_missing_push_date_fails(self):
        result = check_recency(None, CONFIG, now=NOW)
        assert result.verdict is Verdict.FAIL

    def test_naive_timestamps_are_treated_as_utc(self):
        pushed_at = datetime(2024, 11, 1)
        assert months_since(pushed_at, now=NOW) == 1.0


class TestOpenIssues:
    def test_regular_project_under_ceiling(self):
        result = check_open_issues(100, False, CONFIG)
        assert result.verdict is Verdict.PASS

    def test_regular_project_over_ceiling(self):
        result = check_open_issues(150, False, CONFIG)
        assert result.verdict is Verdict.FAIL
        assert result.details == {"open_issues": 150, "is_large": False}

    def test_large_project_uses_higher_ceiling(self):
        result = check_open_issues(150, True, CONFIG)
        assert result.verdict is Verdict.PASS

    def test_large_project_over_ceiling_is_informational(self):
        result = check_open_issues(600, True, CONFIG)
        assert result.verdict is Verdict.INFO
        assert not result.is_failure

    def test_same_count_fails_when_not_large(self):
        result = check_open_issues(600, False, CONFIG)
        assert result.verdict is Verdict.FAIL

    def test_strict_mode_fails_large_project(self):
        config = GateConfig(strict_large_issues=True)
        result = check_open_issues(600, True, config)
        assert result.verdict is Verdict.FAIL


class TestCheckMaintenance:
    def test_both_checks_run(self):
        results = check_maintenance(
            FOUND, make_snapshot(months_ago(1), 10), False, CONFIG, now=NOW
        )
        assert [r.name for r in results] == ["Recent Activity", "Open Issues"]
        assert all(r.verdict is Verdict.PASS for r in results)

    def test_checks_are_independent(self):
        results = check_maintenance(
            FOUND, make_snapshot(months_ago(12), 10), False, CONFIG, now=NOW
        )
        verdicts = {r.name: r.verdict for r in results}
        assert verdicts == {
            "Recent Activity": Verdict.FAIL,
            "Open Issues": Verdict.PASS,
        }

    def test_skipped_without_repository(self):
        lookup = RepositoryLookup(LookupStatus.NOT_FOUND)
        results = check_maintenance(lookup, None, False, CONFIG, now=NOW)
        assert len(results) == 1
        assert results[0].verdict is Verdict.SKIPPED
        assert not results[0].is_failure
        assert "No GitHub repository found" in results[0].message

    def test_skipped_with_malformed_url(self):
        lookup = RepositoryLookup(
            LookupStatus.MALFORMED, url="https://github.com/someorg"
        )
        results = check_maintenance(lookup, None, False, CONFIG, now=NOW)
        assert results[0].verdict is Verdict.SKIPPED
        assert "malformed" in results[0].message
        assert results[0].details == {"lookup": "malformed"}
