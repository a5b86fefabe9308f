"""
GitHub VCS provider implementation for Package Health Gate.

Uses the GitHub GraphQL API for the repository summary and for the
issue search that yields an exact open issue count.
"""

from datetime import datetime
from typing import Any

import httpx

from package_health_gate.http_client import _get_http_client
from package_health_gate.vcs.base import BaseVCSProvider, RepositorySnapshot

# GitHub API endpoint
GITHUB_GRAPHQL_API = "https://api.github.com/graphql"

REPOSITORY_QUERY = """
query GetRepository($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    stargazerCount
    forkCount
    pushedAt
    licenseInfo {
      name
      spdxId
    }
  }
}
"""

OPEN_ISSUES_QUERY = """
query CountOpenIssues($searchQuery: String!) {
  search(query: $searchQuery, type: ISSUE) {
    issueCount
  }
}
"""


def open_issues_search_query(owner: str, repo: str) -> str:
    """Build the search string matching open issues (not pull requests)."""
    return f"repo:{owner}/{repo} is:issue is:open"


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None


class GitHubProvider(BaseVCSProvider):
    """GitHub VCS provider using GraphQL API."""

    def __init__(self, token: str | None = None):
        """
        Initialize GitHub provider.

        Args:
            token: GitHub access token, resolved by the caller.

        Raises:
            ValueError: If no token is provided.
        """
        self.token = token
        if not self.token:
            raise ValueError(
                "GITHUB_TOKEN is required to query GitHub.\n"
                "\n"
                "Provide it in one of these ways:\n"
                "1. export GITHUB_TOKEN='your_token_here'\n"
                "2. add GITHUB_TOKEN=your_token_here to a .env file\n"
                "3. pass --token, or set the 'token' input of the GitHub Action\n"
            )

    def get_platform_name(self) -> str:
        """Return 'github' as the platform identifier."""
        return "github"

    def get_repository_url(self, owner: str, repo: str) -> str:
        """Construct GitHub repository URL."""
        return f"https://github.com/{owner}/{repo}"

    def get_repository_snapshot(self, owner: str, repo: str) -> RepositorySnapshot:
        """
        Fetch stars, forks, last push, license and open issues.

        Raises:
            ValueError: If repository not found or is inaccessible
            httpx.HTTPStatusError: If GitHub API returns an error
        """
        data = self._query_graphql(REPOSITORY_QUERY, {"owner": owner, "name": repo})
        repo_info = data.get("repository")
        if repo_info is None:
            raise ValueError(f"Repository {owner}/{repo} not found or is inaccessible.")

        open_issue_count = self.count_open_issues(owner, repo)
        return self._normalize_github_data(repo_info, open_issue_count)

    def count_open_issues(self, owner: str, repo: str) -> int:
        """
        Count open issues through the search API.

        The repository's own counter includes pull requests, so it is not used.
        """
        data = self._query_graphql(
            OPEN_ISSUES_QUERY,
            {"searchQuery": open_issues_search_query(owner, repo)},
        )
        return int((data.get("search") or {}).get("issueCount") or 0)

    def _query_graphql(
        self, query: str, variables: dict[str, Any]
    ) -> dict[str, Any]:
        """
        Execute GraphQL query against GitHub API.

        Raises:
            httpx.HTTPStatusError: If API returns an error
        """
        headers = {
            "Authorization": f"bearer {self.token}",
            "Content-Type": "application/json",
        }
        client = _get_http_client()
        response = client.post(
            GITHUB_GRAPHQL_API,
            json={"query": query, "variables": variables},
            headers=headers,
            timeout=30,
        )
        response.raise_for_status()
        data = response.json()

        if "errors" in data:
            raise httpx.HTTPStatusError(
                f"GitHub API Errors: {data['errors']}",
                request=response.request,
                response=response,
            )

        return data.get("data") or {}

    def _normalize_github_data(
        self, repo_info: dict[str, Any], open_issue_count: int
    ) -> RepositorySnapshot:
        license_data = repo_info.get("licenseInfo") or {}
        return RepositorySnapshot(
            stargazer_count=repo_info.get("stargazerCount") or 0,
            fork_count=repo_info.get("forkCount") or 0,
            pushed_at=_parse_timestamp(repo_info.get("pushedAt")),
            license_id=license_data.get("spdxId") or None,
            open_issue_count=open_issue_count,
        )
