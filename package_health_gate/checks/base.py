"""
Shared check types and context helpers.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Callable, NamedTuple

from package_health_gate.config import GateConfig
from package_health_gate.resolvers.repository import RepositoryLookup
from package_health_gate.sources.pypi import DownloadStats, PackageMetadata
from package_health_gate.vcs.base import RepositorySnapshot


class Verdict(Enum):
    """Outcome of one check."""

    PASS = "Pass"
    FAIL = "Fail"
    WARN = "Warn"  # missing evidence; fails the run
    INFO = "Info"  # noteworthy, never fails the run
    SKIPPED = "Skipped"


FAILING_VERDICTS = frozenset({Verdict.FAIL, Verdict.WARN})


class CheckResult(NamedTuple):
    """A single criterion outcome for one package."""

    name: str
    verdict: Verdict
    message: str
    details: dict[str, Any] | None = None

    @property
    def is_failure(self) -> bool:
        return self.verdict in FAILING_VERDICTS


class CheckContext(NamedTuple):
    """Evidence gathered for one package, shared by all checks."""

    package_name: str
    config: GateConfig
    metadata: PackageMetadata
    downloads: DownloadStats | None
    lookup: RepositoryLookup
    snapshot: RepositorySnapshot | None
    is_large: bool = False
    now: datetime | None = None


class CheckSpec(NamedTuple):
    """Specification for a criterion check."""

    name: str
    checker: Callable[[CheckContext], list[CheckResult]]
