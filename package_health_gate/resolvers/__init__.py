"""
Resolvers mapping registry metadata to source repositories.
"""

from package_health_gate.resolvers.repository import (
    GITHUB_DOMAIN,
    LookupStatus,
    RepositoryCoordinate,
    RepositoryLookup,
    parse_repository_url,
    resolve_repository,
)

__all__ = [
    "GITHUB_DOMAIN",
    "LookupStatus",
    "RepositoryCoordinate",
    "RepositoryLookup",
    "parse_repository_url",
    "resolve_repository",
]
