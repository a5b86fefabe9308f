"""
Command-line interface for Package Health Gate.
"""

import json
import os
from pathlib import Path
from typing import Any

import httpx
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from package_health_gate.checks import CheckResult, Verdict
from package_health_gate.checks.license_policy import NAME as LICENSE
from package_health_gate.checks.maintenance import ISSUES, RECENCY
from package_health_gate.checks.maintenance import NAME as MAINTENANCE
from package_health_gate.checks.popularity import NAME as POPULARITY
from package_health_gate.config import GateConfig, load_gate_config, set_verify_ssl
from package_health_gate.core import PackageVerdict, RunVerdict, evaluate_packages
from package_health_gate.http_client import close_http_client
from package_health_gate.requirements import read_package_list
from package_health_gate.sources.pypi import PackageNotFoundError

# --- Typer App ---
app = typer.Typer(
    help="Check PyPI dependencies for popularity, maintenance and license health."
)
console = Console()

# Worst verdict first
VERDICT_SEVERITY = [
    Verdict.FAIL,
    Verdict.WARN,
    Verdict.INFO,
    Verdict.PASS,
    Verdict.SKIPPED,
]
VERDICT_COLORS = {
    Verdict.PASS: "green",
    Verdict.FAIL: "red",
    Verdict.WARN: "yellow",
    Verdict.INFO: "cyan",
    Verdict.SKIPPED: "dim",
}


# --- Helper Functions ---


def fail_run(message: str) -> None:
    """Report a failed run, as a workflow error when running in GitHub Actions."""
    console.print(f"[red]{escape(message)}[/red]")
    if os.getenv("GITHUB_ACTIONS") == "true":
        typer.echo(f"::error::{message}")


def _worst(results: list[CheckResult]) -> Verdict | None:
    verdicts = {result.verdict for result in results}
    for verdict in VERDICT_SEVERITY:
        if verdict in verdicts:
            return verdict
    return None


def _criterion_cell(package: PackageVerdict, names: tuple[str, ...]) -> str:
    results = [r for r in package.results if r.name in names]
    verdict = _worst(results)
    if verdict is None:
        return "[dim]-[/dim]"
    color = VERDICT_COLORS[verdict]
    return f"[{color}]{verdict.value}[/{color}]"


def display_results(run: RunVerdict, verbose: bool = False):
    """Display the per-package verdicts in a rich table."""
    table = Table(title="Package Health Gate Report")
    table.add_column("Package", justify="left", style="cyan", no_wrap=True)
    table.add_column("Popularity", justify="center")
    table.add_column("Maintenance", justify="center")
    table.add_column("License", justify="center")
    table.add_column("Status", justify="left")
    if verbose:
        table.add_column("Observations", justify="left")

    for package in run.packages:
        if package.excluded:
            status = "[dim]Excluded[/dim]"
        elif package.has_issue:
            status = "[red]Blocked ✗[/red]"
        else:
            status = "[green]Healthy ✓[/green]"

        row = [
            package.package_name,
            _criterion_cell(package, (POPULARITY,)),
            _criterion_cell(package, (MAINTENANCE, RECENCY, ISSUES)),
            _criterion_cell(package, (LICENSE,)),
            status,
        ]
        if verbose:
            concerns = [
                r.message for r in package.results if r.verdict is not Verdict.PASS
            ]
            row.append(escape(" • ".join(concerns)) or "No concerns")
        table.add_row(*row)

    console.print()
    console.print(table)


def build_report(run: RunVerdict) -> dict[str, Any]:
    """Convert a run verdict to a JSON-serializable report."""
    packages = []
    for package in run.packages:
        lookup = package.lookup
        packages.append(
            {
                "name": package.package_name,
                "excluded": package.excluded,
                "has_issue": package.has_issue,
                "repository": str(lookup.coordinate)
                if lookup and lookup.coordinate
                else None,
                "repository_lookup": lookup.status.value if lookup else None,
                "checks": [
                    {
                        "name": result.name,
                        "verdict": result.verdict.value,
                        "message": result.message,
                        "details": result.details or {},
                    }
                    for result in package.results
                ],
            }
        )
    return {"failed": run.failed, "packages": packages}


@app.command()
def check(
    package_list: Path | None = typer.Argument(
        None,
        help="Path to a requirements-style package list. Defaults to the configured path or the 'package_list_path' action input.",
    ),
    token: str | None = typer.Option(
        None,
        "--token",
        help="GitHub token. The GITHUB_TOKEN environment variable takes precedence.",
    ),
    min_downloads: int | None = typer.Option(
        None,
        "--min-downloads",
        help="Monthly downloads that make a package popular (default: 10000).",
    ),
    min_stars: int | None = typer.Option(
        None, "--min-stars", help="Stars that make a package popular (default: 1000)."
    ),
    min_forks: int | None = typer.Option(
        None, "--min-forks", help="Forks that make a package popular (default: 100)."
    ),
    large_project_downloads: int | None = typer.Option(
        None,
        "--large-project-downloads",
        help="Monthly downloads that mark a large project (default: 1000000).",
    ),
    max_months_since_push: int | None = typer.Option(
        None,
        "--max-months-since-push",
        help="Months without a push before a package is stale (default: 6).",
    ),
    max_open_issues: int | None = typer.Option(
        None, "--max-open-issues", help="Open issue ceiling (default: 100)."
    ),
    max_open_issues_large: int | None = typer.Option(
        None,
        "--max-open-issues-large",
        help="Open issue ceiling for large projects (default: 500).",
    ),
    strict_large_issues: bool | None = typer.Option(
        None,
        "--strict-large-issues",
        help="Fail large projects over their issue ceiling instead of only warning.",
    ),
    banned_license: list[str] | None = typer.Option(
        None,
        "--banned-license",
        help="License token to reject (repeatable, replaces the default denylist).",
    ),
    exclude: list[str] | None = typer.Option(
        None,
        "--exclude",
        "-x",
        help="Package to skip (repeatable).",
    ),
    report: Path | None = typer.Option(
        None,
        "--report",
        "-o",
        help="Write a JSON report to this path.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show observations in the summary table.",
    ),
    insecure: bool = typer.Option(
        False,
        "--insecure",
        help="Disable SSL certificate verification for HTTPS requests.",
    ),
):
    """Check every package in a package list and fail if any is unhealthy."""
    set_verify_ssl(not insecure)

    overrides = {
        "package_list_path": package_list,
        "token": token,
        "min_downloads": min_downloads,
        "min_stars": min_stars,
        "min_forks": min_forks,
        "large_project_downloads": large_project_downloads,
        "max_months_since_push": max_months_since_push,
        "max_open_issues": max_open_issues,
        "max_open_issues_large": max_open_issues_large,
        "strict_large_issues": strict_large_issues,
        "banned_licenses": banned_license or None,
        "exclude": exclude or None,
    }

    try:
        config = load_gate_config(overrides)
    except ValueError as e:
        fail_run(f"Error: {e}")
        raise typer.Exit(code=1) from None

    if config.package_list_path is None:
        fail_run("Error: No package list given. Pass a path or set package_list_path.")
        raise typer.Exit(code=1)

    try:
        console.print(f"📄 Reading packages from [bold]{config.package_list_path}[/bold]")
        packages = read_package_list(config.package_list_path)
        console.print(f"🔍 Checking {len(packages)} package(s)...")
        run = evaluate_packages(packages, config)
    except (OSError, ValueError, PackageNotFoundError, httpx.HTTPError) as e:
        fail_run(f"Error: {e}")
        raise typer.Exit(code=1) from None
    finally:
        close_http_client()

    if run.packages:
        display_results(run, verbose=verbose)
    else:
        console.print("No packages to check.")

    if report:
        report.write_text(json.dumps(build_report(run), indent=2), encoding="utf-8")
        console.print(f"[dim]Report written to {report}[/dim]")

    if run.failed:
        failing = ", ".join(run.failing_packages)
        fail_run(f"⚠️ Health check failed for: {failing}")
        raise typer.Exit(code=1)

    console.print("[green]🎉 All packages passed the health check![/green]")


@app.command()
def show_config():
    """Display the effective configuration."""
    try:
        config = load_gate_config()
    except ValueError as e:
        fail_run(f"Error: {e}")
        raise typer.Exit(code=1) from None

    table = Table(
        title="Effective Configuration", show_header=True, header_style="bold magenta"
    )
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", justify="left")

    for field in GateConfig._fields:
        value = getattr(config, field)
        if field == "token":
            value = "set" if value else "not set"
        elif isinstance(value, tuple):
            value = ", ".join(value) or "-"
        table.add_row(field, escape(str(value)))

    console.print(table)


if __name__ == "__main__":
    app()
