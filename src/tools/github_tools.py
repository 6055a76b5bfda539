"""
GitHub REST Helpers
===================

Read-only GitHub calls behind DevRadar: releases, commits and pull
requests for a repository such as `bitcoin/bitcoin`.

GitHub API Notes:
- Uses httpx for async HTTP requests
- A token is optional; unauthenticated calls get 60 requests/hour,
  authenticated ones 5000
- Every list endpoint takes `per_page` (max 100)
"""

import httpx

from src.tools.http import request_json
from src.utils.config import get_config
from src.utils.logger import Logger

logger = Logger("GitHubTools")

# GitHub API base URL
GITHUB_API = "https://api.github.com"


def _github_headers() -> dict:
    """Standard GitHub headers, with a bearer token when one is configured."""
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28"
    }

    token = get_config().github.token
    if token:
        headers["Authorization"] = f"Bearer {token}"

    return headers


async def _github_get(
    endpoint: str,
    params: dict | None = None,
    client: httpx.AsyncClient | None = None
) -> list | dict:
    """
    GET an API endpoint.

    Args:
        endpoint: API path (e.g., /repos/owner/repo/releases)
        params: Query parameters
        client: Optional shared client

    Raises:
        httpx.HTTPError: On transport failures or 4xx/5xx responses
    """
    logger.debug(f"GET {endpoint}", params)
    return await request_json(
        "GET",
        f"{GITHUB_API}{endpoint}",
        params=params,
        headers=_github_headers(),
        client=client
    )


async def fetch_releases(
    repository: str,
    limit: int = 10,
    client: httpx.AsyncClient | None = None
) -> list[dict]:
    """
    Latest releases, newest first.

    Returns:
        [{tag, name, published_at, url, prerelease}]
    """
    data = await _github_get(f"/repos/{repository}/releases", {"per_page": limit}, client)

    return [
        {
            "tag": release.get("tag_name"),
            "name": release.get("name") or release.get("tag_name"),
            "published_at": release.get("published_at"),
            "url": release.get("html_url"),
            "prerelease": bool(release.get("prerelease")),
        }
        for release in data[:limit]
    ]


async def fetch_commits(
    repository: str,
    limit: int = 30,
    client: httpx.AsyncClient | None = None
) -> list[dict]:
    """
    Recent commits on the default branch.

    Returns:
        [{sha, message, author, date}] with the message cut to its first line
    """
    data = await _github_get(f"/repos/{repository}/commits", {"per_page": limit}, client)

    commits = []
    for item in data[:limit]:
        commit = item.get("commit") or {}
        author = commit.get("author") or {}
        commits.append({
            "sha": (item.get("sha") or "")[:12],
            "message": (commit.get("message") or "").split("\n", 1)[0],
            "author": author.get("name") or (item.get("author") or {}).get("login"),
            "date": author.get("date"),
        })

    return commits


async def fetch_pull_requests(
    repository: str,
    state: str = "open",
    limit: int = 30,
    client: httpx.AsyncClient | None = None
) -> list[dict]:
    """
    Pull requests, most recently updated first.

    Returns:
        [{number, title, author, created_at, updated_at, labels}]
    """
    data = await _github_get(
        f"/repos/{repository}/pulls",
        {"state": state, "per_page": limit, "sort": "updated", "direction": "desc"},
        client
    )

    return [
        {
            "number": pr.get("number"),
            "title": pr.get("title"),
            "author": (pr.get("user") or {}).get("login"),
            "created_at": pr.get("created_at"),
            "updated_at": pr.get("updated_at"),
            "labels": [label.get("name") for label in pr.get("labels") or []],
        }
        for pr in data[:limit]
    ]
