"""Popularity check."""

from package_health_gate.checks.base import (
    CheckContext,
    CheckResult,
    CheckSpec,
    Verdict,
)
from package_health_gate.config import GateConfig
from package_health_gate.sources.pypi import DownloadStats
from package_health_gate.vcs.base import RepositorySnapshot

NAME = "Popularity"


def is_large_project(downloads: DownloadStats | None, config: GateConfig) -> bool:
    """A project is large when its monthly downloads reach the configured cutoff."""
    return (
        downloads is not None
        and downloads.last_month >= config.large_project_downloads
    )


def check_popularity(
    downloads: DownloadStats | None,
    snapshot: RepositorySnapshot | None,
    config: GateConfig,
) -> CheckResult:
    """
    Evaluates popularity from registry downloads and repository signals.

    Passes when any one of these holds:
    - last-month downloads >= min_downloads
    - stars >= min_stars
    - forks >= min_forks

    With neither download stats nor a repository snapshot there is no
    evidence at all, and the check fails.
    """
    details = {
        "downloads": downloads.last_month if downloads else None,
        "stars": snapshot.stargazer_count if snapshot else None,
        "forks": snapshot.fork_count if snapshot else None,
        "is_large": is_large_project(downloads, config),
    }

    if downloads is None and snapshot is None:
        return CheckResult(
            NAME,
            Verdict.FAIL,
            "No download statistics or repository data available.",
            details,
        )

    # (threshold met, description)
    signals: list[tuple[bool, str]] = []
    if downloads is not None:
        signals.append(
            (
                downloads.last_month >= config.min_downloads,
                f"📈 {downloads.last_month} downloads last month",
            )
        )
    if snapshot is not None:
        signals.append(
            (
                snapshot.stargazer_count >= config.min_stars,
                f"⭐ {snapshot.stargazer_count} stars",
            )
        )
        signals.append(
            (
                snapshot.fork_count >= config.min_forks,
                f"🍴 {snapshot.fork_count} forks",
            )
        )

    summary = ", ".join(text for _, text in signals)
    if any(met for met, _ in signals):
        return CheckResult(NAME, Verdict.PASS, f"Widely used: {summary}.", details)
    return CheckResult(
        NAME,
        Verdict.FAIL,
        f"Not widely used: {summary}.",
        details,
    )


def _check(context: CheckContext) -> list[CheckResult]:
    return [check_popularity(context.downloads, context.snapshot, context.config)]


CHECK = CheckSpec(name=NAME, checker=_check)
