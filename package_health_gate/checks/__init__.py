"""
Criterion checks run against every package.
"""

from package_health_gate.checks import license_policy, maintenance, popularity
from package_health_gate.checks.base import (
    CheckContext,
    CheckResult,
    CheckSpec,
    Verdict,
)

__all__ = [
    "CHECKS",
    "CheckContext",
    "CheckResult",
    "CheckSpec",
    "Verdict",
]

# Evaluation order; each check reads the shared CheckContext only
CHECKS: tuple[CheckSpec, ...] = (
    popularity.CHECK,
    maintenance.CHECK,
    license_policy.CHECK,
)
