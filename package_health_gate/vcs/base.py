"""
Base types shared by VCS providers.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import NamedTuple


class RepositorySnapshot(NamedTuple):
    """Repository signals used by the gate."""

    stargazer_count: int
    fork_count: int
    pushed_at: datetime | None
    license_id: str | None
    open_issue_count: int


class BaseVCSProvider(ABC):
    """Interface every hosting provider implements."""

    @abstractmethod
    def get_platform_name(self) -> str:
        """Return the platform identifier, e.g. 'github'."""

    @abstractmethod
    def get_repository_url(self, owner: str, repo: str) -> str:
        """Construct the browsable repository URL."""

    @abstractmethod
    def count_open_issues(self, owner: str, repo: str) -> int:
        """Return the exact number of open issues, pull requests excluded."""

    @abstractmethod
    def get_repository_snapshot(self, owner: str, repo: str) -> RepositorySnapshot:
        """Fetch the repository summary together with its open issue count."""
