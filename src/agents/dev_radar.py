"""
DevRadar
========

Tracks development on a GitHub repository (`bitcoin/bitcoin` unless told
otherwise): releases, recent commits, open pull requests and a few derived
insights.

When GitHub cannot be reached the response keeps its shape with empty lists
and a `message` explaining that live data is unavailable.
"""

import asyncio
from collections import Counter
from datetime import datetime

import httpx

from src.agents.base import BaseAgent
from src.tools import github_tools
from src.utils.config import get_config

UNAVAILABLE_MESSAGE = "GitHub data unavailable"

_REPOSITORY_SCHEMA = {
    "type": "object",
    "properties": {
        "repository": {
            "type": "string",
            "description": "owner/name, e.g. bitcoin/bitcoin"
        }
    }
}


class DevRadar(BaseAgent):
    """Release and activity tracking for Bitcoin repositories."""

    name = "DevRadar"

    tools = [
        {
            "name": "track_releases",
            "description": "List the latest releases of a repository",
            "inputSchema": _REPOSITORY_SCHEMA
        },
        {
            "name": "monitor_activity",
            "description": "Recent commits and open pull requests of a repository",
            "inputSchema": _REPOSITORY_SCHEMA
        },
        {
            "name": "get_insights",
            "description": "Contributor and release cadence insights for a repository",
            "inputSchema": _REPOSITORY_SCHEMA
        },
    ]

    def __init__(self, client: httpx.AsyncClient | None = None, **kwargs):
        """
        Args:
            client: Optional shared httpx client for GitHub calls
        """
        super().__init__(**kwargs)
        self.client = client

    def _handlers(self) -> dict:
        return {
            "track_releases": lambda args: self.track_releases(args.get("repository")),
            "monitor_activity": lambda args: self.monitor_activity(args.get("repository")),
            "get_insights": lambda args: self.get_insights(args.get("repository")),
        }

    async def process(self, args: dict) -> dict:
        """Legacy entry: `{action, repository}`."""
        action = args.get("action")
        handler = self._handlers().get(action)
        if handler is None:
            raise ValueError(f"Unknown action: {action}")
        return await handler(args)

    def _repository(self, repository: str | None) -> str:
        return repository or get_config().github.default_repo

    async def _fetch(self, coro, what: str, repository: str) -> list | None:
        try:
            return await coro
        except (httpx.HTTPError, ValueError) as e:
            self.logger.warning(f"Could not fetch {what} for {repository}: {e}")
            return None

    # ==========================================================================
    # Builders
    # ==========================================================================

    async def track_releases(self, repository: str | None = None) -> dict:
        repository = self._repository(repository)
        self.logger.info(f"Tracking releases for {repository}")

        releases = await self._fetch(
            github_tools.fetch_releases(repository, client=self.client), "releases", repository
        )

        result = {
            "repository": repository,
            "releases": releases or [],
            "latest_release": releases[0] if releases else None,
        }
        if releases is None:
            result["message"] = UNAVAILABLE_MESSAGE
        return result

    async def monitor_activity(self, repository: str | None = None) -> dict:
        repository = self._repository(repository)
        self.logger.info(f"Monitoring activity for {repository}")

        commits, pulls = await asyncio.gather(
            self._fetch(github_tools.fetch_commits(repository, client=self.client), "commits", repository),
            self._fetch(github_tools.fetch_pull_requests(repository, client=self.client), "pull requests", repository),
        )

        result = {
            "repository": repository,
            "recent_commits": commits or [],
            "open_pull_requests": pulls or [],
            "commit_count": len(commits or []),
            "open_pull_request_count": len(pulls or []),
        }
        if commits is None or pulls is None:
            result["message"] = UNAVAILABLE_MESSAGE
        return result

    async def get_insights(self, repository: str | None = None) -> dict:
        """Top authors, active labels and days between the latest releases."""
        repository = self._repository(repository)
        self.logger.info(f"Building development insights for {repository}")

        releases, commits, pulls = await asyncio.gather(
            self._fetch(github_tools.fetch_releases(repository, client=self.client), "releases", repository),
            self._fetch(github_tools.fetch_commits(repository, client=self.client), "commits", repository),
            self._fetch(github_tools.fetch_pull_requests(repository, client=self.client), "pull requests", repository),
        )

        authors = Counter(commit["author"] for commit in commits or [] if commit.get("author"))
        labels = Counter(label for pr in pulls or [] for label in pr["labels"])

        result = {
            "repository": repository,
            "top_contributors": [
                {"author": author, "commits": count} for author, count in authors.most_common(5)
            ],
            "active_areas": [label for label, _ in labels.most_common(5)],
            "release_cadence_days": release_cadence_days(releases or []),
            "latest_release": (releases or [None])[0],
            "insights": [],
        }

        if releases:
            result["insights"].append(f"Latest release is {releases[0]['tag']}")
        if authors:
            result["insights"].append(f"{len(authors)} contributors in the last {len(commits)} commits")
        if pulls:
            result["insights"].append(f"{len(pulls)} open pull requests under review")

        if releases is None or commits is None or pulls is None:
            result["message"] = UNAVAILABLE_MESSAGE
        return result


def release_cadence_days(releases: list[dict]) -> float | None:
    """Mean days between consecutive published releases, None under two."""
    dates = sorted(
        datetime.fromisoformat(release["published_at"].replace("Z", "+00:00"))
        for release in releases
        if release.get("published_at")
    )
    if len(dates) < 2:
        return None

    gaps = [(later - earlier).total_seconds() / 86400 for earlier, later in zip(dates, dates[1:])]
    return round(sum(gaps) / len(gaps), 1)
