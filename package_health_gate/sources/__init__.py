"""
Package registry data sources.
"""

from package_health_gate.sources.pypi import (
    DownloadStats,
    PackageMetadata,
    PackageNotFoundError,
    fetch_download_stats,
    fetch_package_metadata,
)

__all__ = [
    "DownloadStats",
    "PackageMetadata",
    "PackageNotFoundError",
    "fetch_download_stats",
    "fetch_package_metadata",
]
