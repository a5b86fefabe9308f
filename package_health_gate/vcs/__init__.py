"""
VCS (Version Control System) abstraction layer for Package Health Gate.
"""

from package_health_gate.vcs.base import BaseVCSProvider, RepositorySnapshot
from package_health_gate.vcs.github import GitHubProvider

__all__ = [
    "BaseVCSProvider",
    "RepositorySnapshot",
    "GitHubProvider",
    "get_vcs_provider",
]

# Registry of supported VCS providers
_PROVIDERS: dict[str, type[BaseVCSProvider]] = {
    "github": GitHubProvider,
}


def get_vcs_provider(platform: str = "github", **kwargs) -> BaseVCSProvider:
    """
    Factory function to get VCS provider instance.

    Args:
        platform: VCS platform name. Default: 'github'
        **kwargs: Provider-specific configuration (e.g., token)

    Raises:
        ValueError: If platform is not supported

    Example:
        >>> provider = get_vcs_provider("github", token="ghp_xxx")
        >>> snapshot = provider.get_repository_snapshot("owner", "repo")
    """
    platform_lower = platform.lower()

    if platform_lower not in _PROVIDERS:
        supported = ", ".join(sorted(_PROVIDERS.keys()))
        raise ValueError(
            f"Unsupported VCS platform: {platform}. Supported platforms: {supported}"
        )

    return _PROVIDERS[platform_lower](**kwargs)
