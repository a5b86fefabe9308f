"""Maintenance checks: push recency and open issue volume."""

from datetime import datetime, timezone

from package_health_gate.checks.base import (
    CheckContext,
    CheckResult,
    CheckSpec,
    Verdict,
)
from package_health_gate.config import GateConfig
from package_health_gate.resolvers.repository import LookupStatus, RepositoryLookup
from package_health_gate.vcs.base import RepositorySnapshot

RECENCY = "Recent Activity"
ISSUES = "Open Issues"
NAME = "Maintenance"

DAYS_PER_MONTH = 30


def months_since(pushed_at: datetime, now: datetime | None = None) -> float:
    """Elapsed time in 30-day months."""
    if pushed_at.tzinfo is None:
        pushed_at = pushed_at.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (now - pushed_at).total_seconds() / (DAYS_PER_MONTH * 24 * 60 * 60)


def check_recency(
    pushed_at: datetime | None, config: GateConfig, now: datetime | None = None
) -> CheckResult:
    """
    Checks how long ago the repository last received a push.

    Fails when the last push is older than ``max_months_since_push``
    months, or when no push date is known.
    """
    if pushed_at is None:
        return CheckResult(
            RECENCY, Verdict.FAIL, "Last push date is not available.", {}
        )

    months = months_since(pushed_at, now)
    details = {"pushed_at": pushed_at.isoformat(), "months": round(months, 1)}

    if months > config.max_months_since_push:
        return CheckResult(
            RECENCY,
            Verdict.FAIL,
            f"No push for {months:.1f} months "
            f"(limit {config.max_months_since_push}).",
            details,
        )
    return CheckResult(
        RECENCY, Verdict.PASS, f"Last push {months:.1f} months ago.", details
    )


def check_open_issues(
    open_issue_count: int, is_large: bool, config: GateConfig
) -> CheckResult:
    """
    Checks the number of open issues against a size-aware ceiling.

    - Regular projects fail above ``max_open_issues``.
    - Large projects are allowed up to ``max_open_issues_large``. Above that
      the result is informational, or a failure when ``strict_large_issues``
      is enabled.
    """
    details = {"open_issues": open_issue_count, "is_large": is_large}

    if not is_large:
        if open_issue_count > config.max_open_issues:
            return CheckResult(
                ISSUES,
                Verdict.FAIL,
                f"🐞 {open_issue_count} open issues "
                f"(limit {config.max_open_issues}).",
                details,
            )
        return CheckResult(
            ISSUES, Verdict.PASS, f"🐞 {open_issue_count} open issues.", details
        )

    if open_issue_count > config.max_open_issues_large:
        verdict = Verdict.FAIL if config.strict_large_issues else Verdict.INFO
        return CheckResult(
            ISSUES,
            verdict,
            f"🐞 {open_issue_count} open issues exceeds the large-project "
            f"limit of {config.max_open_issues_large}.",
            details,
        )
    return CheckResult(
        ISSUES,
        Verdict.PASS,
        f"🐞 {open_issue_count} open issues (large project).",
        details,
    )


def check_maintenance(
    lookup: RepositoryLookup,
    snapshot: RepositorySnapshot | None,
    is_large: bool,
    config: GateConfig,
    now: datetime | None = None,
) -> list[CheckResult]:
    """
    Runs both maintenance checks, or skips them without a repository.

    A package whose repository cannot be located cannot fail maintenance.
    """
    if not lookup.found or snapshot is None:
        if lookup.status is LookupStatus.MALFORMED:
            reason = f"Repository URL is malformed ({lookup.url})"
        else:
            reason = "No GitHub repository found"
        return [
            CheckResult(
                NAME,
                Verdict.SKIPPED,
                f"{reason}; maintenance not evaluated.",
                {"lookup": lookup.status.value},
            )
        ]

    return [
        check_recency(snapshot.pushed_at, config, now),
        check_open_issues(snapshot.open_issue_count, is_large, config),
    ]


def _check(context: CheckContext) -> list[CheckResult]:
    return check_maintenance(
        context.lookup,
        context.snapshot,
        context.is_large,
        context.config,
        context.now,
    )


CHECK = CheckSpec(name=NAME, checker=_check)
