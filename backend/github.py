"""
Client for the GitHub repository listing shown on the projects section.
"""

from __future__ import annotations

from typing import Optional, Protocol

import requests

REQUEST_TIMEOUT = 30  # seconds

REPO_FIELDS = (
    "name",
    "description",
    "html_url",
    "updated_at",
    "language",
    "stargazers_count",
    "forks_count",
)


class RepositorySource(Protocol):
    def list_repos(self) -> list[dict]:
        ...


class GithubClient:
    """
    Lists a user's public repositories, most recently updated first.

    Unauthenticated, so subject to GitHub's per-IP rate limit.
    """

    def __init__(
        self,
        username: str,
        api_url: str = "https://api.github.com",
        per_page: int = 10,
        session: Optional[requests.Session] = None,
    ):
        self.username = username
        self.api_url = api_url.rstrip("/")
        self.per_page = per_page
        self._session = session or requests.Session()

    def list_repos(self) -> list[dict]:
        """
        Returns:
            list[dict]: One dict per repository, reduced to REPO_FIELDS.

        Raises:
            requests.RequestException: On transport errors or non-2xx status.
            ValueError: If the payload is not a list of repositories.
        """
        url = f"{self.api_url}/users/{self.username}/repos"
        response = self._session.get(
            url,
            params={"sort": "updated", "per_page": self.per_page},
            headers={"Accept": "application/vnd.github+json"},
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()

        repos = response.json()
        if not isinstance(repos, list) or not all(isinstance(repo, dict) for repo in repos):
            raise ValueError(f"unexpected payload from {url}")
        return [{key: repo.get(key) for key in REPO_FIELDS} for repo in repos]
