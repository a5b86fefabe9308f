"""
Core evaluation logic for Package Health Gate.

Each package goes through the same sequence:
metadata -> repository lookup -> repository snapshot + download stats
-> criterion checks -> package verdict. Package verdicts are folded into a
single run verdict.
"""

from datetime import datetime
from typing import Iterable, NamedTuple

from rich.console import Console
from rich.markup import escape

from package_health_gate.checks import CHECKS, CheckContext, CheckResult, Verdict
from package_health_gate.checks.popularity import is_large_project
from package_health_gate.config import GateConfig, is_package_excluded
from package_health_gate.resolvers.repository import (
    RepositoryLookup,
    resolve_repository,
)
from package_health_gate.sources.pypi import (
    fetch_download_stats,
    fetch_package_metadata,
)
from package_health_gate.vcs import BaseVCSProvider, get_vcs_provider

console = Console()

VERDICT_STYLES = {
    Verdict.PASS: ("✅", "green"),
    Verdict.FAIL: ("❌", "red"),
    Verdict.WARN: ("⚠️ ", "yellow"),
    Verdict.INFO: ("ℹ️ ", "cyan"),
    Verdict.SKIPPED: ("⏭️ ", "dim"),
}


class PackageVerdict(NamedTuple):
    """The result of evaluating one package."""

    package_name: str
    results: list[CheckResult]
    lookup: RepositoryLookup | None = None
    excluded: bool = False

    @property
    def has_issue(self) -> bool:
        return any(result.is_failure for result in self.results)

    def result_for(self, name: str) -> CheckResult | None:
        for result in self.results:
            if result.name == name:
                return result
        return None


class RunVerdict(NamedTuple):
    """The result of evaluating a whole package list."""

    packages: list[PackageVerdict]

    @property
    def failed(self) -> bool:
        return any(package.has_issue for package in self.packages)

    @property
    def failing_packages(self) -> list[str]:
        return [p.package_name for p in self.packages if p.has_issue]


def report_result(result: CheckResult) -> None:
    """Print one diagnostic line for a check."""
    icon, style = VERDICT_STYLES[result.verdict]
    label = escape(f"[{result.name}]")
    console.print(
        f"   {icon} [{style}]{label}[/{style}] {escape(result.message)}",
        highlight=False,
    )


def evaluate_package(
    package_name: str,
    config: GateConfig,
    provider: BaseVCSProvider | None = None,
    now: datetime | None = None,
) -> PackageVerdict:
    """
    Evaluate a single package against every criterion.

    Args:
        package_name: Name of the package on PyPI.
        config: Effective configuration.
        provider: VCS provider; a GitHub provider is created on demand.
        now: Reference time for recency checks (defaults to the current time).

    Returns:
        PackageVerdict with one CheckResult per evaluated criterion.

    Raises:
        PackageNotFoundError: If PyPI has no record of the package.
        ValueError: If the repository is inaccessible or no token is configured.
        httpx.HTTPError: If PyPI or GitHub cannot be reached.
    """
    console.print(f"\n🔍 Checking [bold cyan]{package_name}[/bold cyan]")

    metadata = fetch_package_metadata(package_name)
    downloads = fetch_download_stats(package_name)

    lookup = resolve_repository(metadata)
    snapshot = None
    if lookup.found and lookup.coordinate is not None:
        if provider is None:
            provider = get_vcs_provider("github", token=config.token)
        owner, name = lookup.coordinate
        console.print(
            f"   [dim]Repository: {provider.get_repository_url(owner, name)}[/dim]"
        )
        snapshot = provider.get_repository_snapshot(owner, name)

    context = CheckContext(
        package_name=package_name,
        config=config,
        metadata=metadata,
        downloads=downloads,
        lookup=lookup,
        snapshot=snapshot,
        is_large=is_large_project(downloads, config),
        now=now,
    )

    results: list[CheckResult] = []
    for spec in CHECKS:
        for result in spec.checker(context):
            report_result(result)
            results.append(result)

    return PackageVerdict(package_name, results, lookup)


def evaluate_packages(
    package_names: Iterable[str],
    config: GateConfig,
    provider: BaseVCSProvider | None = None,
    now: datetime | None = None,
) -> RunVerdict:
    """
    Evaluate packages one after another.

    The first unrecoverable error propagates and stops the run; policy
    failures are collected in the returned RunVerdict.
    """
    verdicts = []
    for package_name in package_names:
        if is_package_excluded(package_name, config):
            console.print(
                f"\n⏭️  Skipping [bold yellow]{package_name}[/bold yellow] (excluded)"
            )
            verdicts.append(PackageVerdict(package_name, [], excluded=True))
            continue

        verdicts.append(evaluate_package(package_name, config, provider, now))
    return RunVerdict(verdicts)
