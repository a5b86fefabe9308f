"""License check."""

from typing import Callable, NamedTuple

from package_health_gate.checks.base import (
    CheckContext,
    CheckResult,
    CheckSpec,
    Verdict,
)
from package_health_gate.config import GateConfig
from package_health_gate.sources.pypi import PackageMetadata
from package_health_gate.vcs.base import RepositorySnapshot

NAME = "License"

LICENSE_CLASSIFIER_PREFIX = "License ::"
CLASSIFIER_SEPARATOR = "::"
# Values meaning "no license declared"
PLACEHOLDER_VALUES = frozenset({"UNKNOWN", "NOASSERTION"})


class ResolvedLicense(NamedTuple):
    """License string together with where it was found."""

    value: str
    source: str | None = None


def normalize_license(value: str | None) -> str:
    """Trim a declared license, treating placeholders as empty."""
    if not value:
        return ""
    value = value.strip()
    if value.upper() in PLACEHOLDER_VALUES:
        return ""
    return value


def license_summary(value: str) -> str:
    """
    First line of a license value, for display.

    Some packages paste the full license text into the field.
    """
    lines = value.strip().splitlines()
    return lines[0].strip() if lines else ""


def _from_license_field(
    metadata: PackageMetadata, _snapshot: RepositorySnapshot | None
) -> str:
    return normalize_license(metadata.license) or normalize_license(
        metadata.license_expression
    )


def _from_classifiers(
    metadata: PackageMetadata, _snapshot: RepositorySnapshot | None
) -> str:
    # Later classifiers are more specific than "License :: OSI Approved"
    matches = [
        c for c in metadata.classifiers if c.startswith(LICENSE_CLASSIFIER_PREFIX)
    ]
    if not matches:
        return ""
    return normalize_license(matches[-1].rsplit(CLASSIFIER_SEPARATOR, 1)[-1])


def _from_repository(
    _metadata: PackageMetadata, snapshot: RepositorySnapshot | None
) -> str:
    if snapshot is None:
        return ""
    return normalize_license(snapshot.license_id)


LicenseResolver = Callable[[PackageMetadata, RepositorySnapshot | None], str]

# Tried in order; the first non-empty value wins
LICENSE_RESOLVERS: tuple[tuple[str, LicenseResolver], ...] = (
    ("license field", _from_license_field),
    ("classifiers", _from_classifiers),
    ("repository", _from_repository),
)


def resolve_license(
    metadata: PackageMetadata, snapshot: RepositorySnapshot | None = None
) -> ResolvedLicense:
    """Resolve the package license through the fallback chain."""
    for source, resolver in LICENSE_RESOLVERS:
        value = resolver(metadata, snapshot)
        if value:
            return ResolvedLicense(value, source)
    return ResolvedLicense("")


def find_banned_license(license_name: str, banned: tuple[str, ...]) -> str | None:
    """
    Return the first banned token contained in ``license_name``.

    Matching is plain substring containment, so "GPL" also matches "LGPL-3.0".
    """
    for token in banned:
        if token and token in license_name:
            return token
    return None


def check_license(resolved: ResolvedLicense, config: GateConfig) -> CheckResult:
    """
    Evaluates the resolved license against the denylist.

    - No license information: Warn (fails the run)
    - Contains a banned token: Fail
    - Otherwise: Pass
    """
    summary = license_summary(resolved.value)
    details = {
        "license": resolved.value,
        "summary": summary,
        "source": resolved.source,
    }

    if not resolved.value:
        return CheckResult(
            NAME, Verdict.WARN, "📜 Insufficient license information.", details
        )

    banned = find_banned_license(resolved.value, config.banned_licenses)
    if banned:
        return CheckResult(
            NAME,
            Verdict.FAIL,
            f"📜 {summary}: banned license ({banned}).",
            {**details, "banned": banned},
        )
    return CheckResult(NAME, Verdict.PASS, f"📜 {summary}.", details)


def _check(context: CheckContext) -> list[CheckResult]:
    resolved = resolve_license(context.metadata, context.snapshot)
    return [check_license(resolved, context.config)]


CHECK = CheckSpec(name=NAME, checker=_check)
