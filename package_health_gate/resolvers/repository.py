"""
Locate the source repository of a package from its registry metadata.
"""

import re
from enum import Enum
from typing import Callable, NamedTuple

from package_health_gate.sources.pypi import PackageMetadata

GITHUB_DOMAIN = "github.com"

# First path segments GitHub uses for its own pages, never for an owner
RESERVED_OWNERS = frozenset(
    {
        "about",
        "apps",
        "collections",
        "enterprise",
        "features",
        "login",
        "marketplace",
        "orgs",
        "settings",
        "sponsors",
        "topics",
        "users",
    }
)


class RepositoryCoordinate(NamedTuple):
    """Owner/name pair identifying a hosted repository."""

    owner: str
    name: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


class LookupStatus(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"


class RepositoryLookup(NamedTuple):
    """Outcome of repository resolution."""

    status: LookupStatus
    coordinate: RepositoryCoordinate | None = None
    url: str | None = None

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND


def _project_url_candidates(metadata: PackageMetadata) -> list[str]:
    return [url for url in (metadata.project_urls or {}).values() if url]


def _home_page_candidates(metadata: PackageMetadata) -> list[str]:
    return [metadata.home_page] if metadata.home_page else []


# Tried in order; the first structurally valid URL wins
CANDIDATE_SOURCES: tuple[Callable[[PackageMetadata], list[str]], ...] = (
    _project_url_candidates,
    _home_page_candidates,
)


def parse_repository_url(
    url: str, domain: str = GITHUB_DOMAIN
) -> RepositoryCoordinate | None:
    """
    Extract ``(owner, name)`` from a hosting URL.

    Args:
        url: URL such as ``https://github.com/psf/requests/issues``.
        domain: Hosting domain marker.

    Returns:
        RepositoryCoordinate, or None if the URL has no ``<domain>/<owner>/<name>``
        part or points at a GitHub page such as ``sponsors/<user>``.
    """
    pattern = re.escape(domain) + r"/([^/\s?#]+)/([^/\s?#]+)"
    match = re.search(pattern, url, re.IGNORECASE)
    if not match:
        return None

    owner, name = match.group(1), match.group(2)
    if owner.lower() in RESERVED_OWNERS:
        return None
    if name.endswith(".git"):
        name = name[: -len(".git")]
    if not name:
        return None
    return RepositoryCoordinate(owner, name)


def resolve_repository(
    metadata: PackageMetadata, domain: str = GITHUB_DOMAIN
) -> RepositoryLookup:
    """
    Find the hosted repository for a package.

    Project URLs are scanned first, then the home page. Only URLs containing
    ``domain`` are considered. Never raises.

    Returns:
        RepositoryLookup tagged FOUND, NOT_FOUND (no URL mentions the domain)
        or MALFORMED (URLs mention the domain but none names a repository).
    """
    first_malformed = None

    for source in CANDIDATE_SOURCES:
        for url in source(metadata):
            if domain.lower() not in url.lower():
                continue
            coordinate = parse_repository_url(url, domain)
            if coordinate is not None:
                return RepositoryLookup(LookupStatus.FOUND, coordinate, url)
            if first_malformed is None:
                first_malformed = url

    if first_malformed is not None:
        return RepositoryLookup(LookupStatus.MALFORMED, url=first_malformed)
    return RepositoryLookup(LookupStatus.NOT_FOUND)
