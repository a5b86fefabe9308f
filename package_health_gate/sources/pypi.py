"""
PyPI metadata and pypistats download statistics.
"""

from typing import NamedTuple

import httpx
from rich.console import Console

from package_health_gate.http_client import _get_http_client

PYPI_JSON_API = "https://pypi.org/pypi"
PYPISTATS_API = "https://pypistats.org/api/packages"

console = Console()


class PackageNotFoundError(Exception):
    """Raised when the registry has no record of a package."""

    pass


class PackageMetadata(NamedTuple):
    """Registry record for a single package."""

    name: str
    license: str | None = None
    classifiers: tuple[str, ...] = ()
    project_urls: dict[str, str] | None = None
    home_page: str | None = None
    license_expression: str | None = None  # PEP 639 field


class DownloadStats(NamedTuple):
    """Recent download counts from pypistats."""

    last_month: int


def fetch_package_metadata(package_name: str) -> PackageMetadata:
    """
    Fetch the PyPI JSON record for a package.

    Args:
        package_name: Package name as listed on PyPI.

    Returns:
        PackageMetadata built from the ``info`` section.

    Raises:
        PackageNotFoundError: If PyPI answers 404.
        httpx.HTTPError: On any other transport or HTTP failure.
    """
    client = _get_http_client()
    response = client.get(f"{PYPI_JSON_API}/{package_name}/json")
    if response.status_code == 404:
        raise PackageNotFoundError(f"Package {package_name} not found on PyPI.")
    response.raise_for_status()

    info = response.json().get("info") or {}
    return PackageMetadata(
        name=info.get("name") or package_name,
        license=info.get("license"),
        classifiers=tuple(info.get("classifiers") or ()),
        project_urls=dict(info.get("project_urls") or {}),
        home_page=info.get("home_page") or None,
        license_expression=info.get("license_expression"),
    )


def fetch_download_stats(package_name: str) -> DownloadStats | None:
    """
    Fetch last-month downloads from pypistats.

    Best effort: any failure is reported and yields None.
    """
    try:
        client = _get_http_client()
        response = client.get(f"{PYPISTATS_API}/{package_name.lower()}/recent")
        response.raise_for_status()
        last_month = response.json()["data"]["last_month"]
        return DownloadStats(last_month=int(last_month))
    except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
        console.print(
            f"    [yellow]⚠️  Download statistics unavailable for {package_name}: {e}[/yellow]"
        )
        return None
