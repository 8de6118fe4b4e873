"""GitHub REST client used to show a profile's public repositories."""

import logging
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

import httpx

from core.config import settings
from core.exceptions import ExternalServiceError, GitHubUserNotFoundError

logger = logging.getLogger(__name__)

REPO_LIMIT = 5


@dataclass(frozen=True)
class GitHubRepo:
    """Public repository summary."""

    name: str
    html_url: str
    description: Optional[str] = None
    stargazers_count: int = 0
    watchers_count: int = 0
    forks_count: int = 0


class GitHubClient:
    """Fetches public repositories for a GitHub user."""

    def __init__(
        self,
        base_url: str = settings.github_api_url,
        token: str = settings.github_token,
        timeout: float = settings.github_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "devconnect-api",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def get_repos(self, username: str) -> list[GitHubRepo]:
        """Return up to five of the user's oldest-first public repositories.

        Raises:
            GitHubUserNotFoundError: GitHub answered 404
            ExternalServiceError: network failure or any other non-2xx answer
        """
        url = f"{self._base_url}/users/{quote(username, safe='')}/repos"
        params = {"per_page": REPO_LIMIT, "sort": "created", "direction": "asc"}

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(url, params=params, headers=self._headers())
        except httpx.HTTPError as exc:
            logger.warning("GitHub request failed for %s: %s", username, exc)
            raise ExternalServiceError("github") from exc

        if response.status_code == 404:
            raise GitHubUserNotFoundError(username)
        if response.is_error:
            logger.warning(
                "GitHub returned %d for %s", response.status_code, username
            )
            raise ExternalServiceError("github")

        try:
            items = response.json()
        except ValueError as exc:
            logger.warning("GitHub sent a non-JSON body for %s", username)
            raise ExternalServiceError("github") from exc
        if not isinstance(items, list):
            logger.warning("GitHub sent an unexpected payload for %s", username)
            raise ExternalServiceError("github")

        return [self._to_repo(item) for item in items[:REPO_LIMIT]]

    @staticmethod
    def _to_repo(data: dict[str, Any]) -> GitHubRepo:
        return GitHubRepo(
            name=data.get("name", ""),
            html_url=data.get("html_url", ""),
            description=data.get("description"),
            stargazers_count=data.get("stargazers_count", 0),
            watchers_count=data.get("watchers_count", 0),
            forks_count=data.get("forks_count", 0),
        )
