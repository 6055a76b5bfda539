"""
Tests for DevRadar and the GitHub helpers
=========================================
"""

import httpx
import pytest

from src.agents.dev_radar import UNAVAILABLE_MESSAGE, DevRadar, release_cadence_days
from src.tools import github_tools
from src.utils.config import reset_config

RELEASES = [
    {"tag_name": "v27.1", "name": "Bitcoin Core 27.1", "published_at": "2024-06-17T00:00:00Z",
     "html_url": "https://github.com/bitcoin/bitcoin/releases/tag/v27.1", "prerelease": False},
    {"tag_name": "v27.0", "name": None, "published_at": "2024-04-16T00:00:00Z",
     "html_url": "https://github.com/bitcoin/bitcoin/releases/tag/v27.0", "prerelease": False},
]

COMMITS = [
    {"sha": "a" * 40, "commit": {"message": "net: fix relay\n\nLonger body", "author": {"name": "alice", "date": "2024-06-01T00:00:00Z"}}},
    {"sha": "b" * 40, "commit": {"message": "wallet: tidy", "author": {"name": "bob", "date": "2024-05-31T00:00:00Z"}}},
    {"sha": "c" * 40, "commit": {"message": "net: tests", "author": {"name": "alice", "date": "2024-05-30T00:00:00Z"}}},
]

PULLS = [
    {"number": 101, "title": "Add feature", "user": {"login": "carol"},
     "created_at": "2024-05-01T00:00:00Z", "updated_at": "2024-06-01T00:00:00Z",
     "labels": [{"name": "P2P"}]},
]


def _github_handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path.endswith("/releases"):
        return httpx.Response(200, json=RELEASES)
    if path.endswith("/commits"):
        return httpx.Response(200, json=COMMITS)
    if path.endswith("/pulls"):
        return httpx.Response(200, json=PULLS)
    return httpx.Response(404)


class TestGitHubTools:
    """Response shaping."""

    @pytest.mark.asyncio
    async def test_releases_fall_back_to_tag_for_name(self, mock_client) -> None:
        releases = await github_tools.fetch_releases("bitcoin/bitcoin", client=mock_client(_github_handler))

        assert releases[1]["name"] == "v27.0"
        assert releases[0]["tag"] == "v27.1"

    @pytest.mark.asyncio
    async def test_commit_message_is_first_line(self, mock_client) -> None:
        commits = await github_tools.fetch_commits("bitcoin/bitcoin", client=mock_client(_github_handler))

        assert commits[0] == {
            "sha": "a" * 12,
            "message": "net: fix relay",
            "author": "alice",
            "date": "2024-06-01T00:00:00Z",
        }

    @pytest.mark.asyncio
    async def test_token_sent_when_configured(self, mock_client, monkeypatch) -> None:
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
        reset_config()
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        await github_tools.fetch_pull_requests("bitcoin/bitcoin", client=mock_client(handler))

        assert seen[0].headers["Authorization"] == "Bearer ghp_test"
        assert seen[0].url.params["state"] == "open"

    @pytest.mark.asyncio
    async def test_no_authorization_without_token(self, mock_client) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        await github_tools.fetch_releases("bitcoin/bitcoin", client=mock_client(handler))

        assert "Authorization" not in seen[0].headers


class TestDevRadar:
    """Agent tools."""

    @pytest.mark.asyncio
    async def test_track_releases_defaults_to_bitcoin_core(self, mock_client) -> None:
        radar = DevRadar(client=mock_client(_github_handler))

        result = await radar.handle_tool_call("track_releases", {})

        assert result["repository"] == "bitcoin/bitcoin"
        assert result["latest_release"]["tag"] == "v27.1"
        assert "message" not in result

    @pytest.mark.asyncio
    async def test_insights_summarise_activity(self, mock_client) -> None:
        radar = DevRadar(client=mock_client(_github_handler))

        insights = await radar.get_insights("bitcoin/bitcoin")

        assert insights["top_contributors"][0] == {"author": "alice", "commits": 2}
        assert insights["active_areas"] == ["P2P"]
        assert insights["release_cadence_days"] == 62.0
        assert "Latest release is v27.1" in insights["insights"]

    @pytest.mark.asyncio
    async def test_unreachable_github_keeps_shape(self, mock_client) -> None:
        radar = DevRadar(client=mock_client(lambda r: httpx.Response(503)))

        activity = await radar.monitor_activity("bitcoin/bitcoin")

        assert activity["recent_commits"] == []
        assert activity["open_pull_request_count"] == 0
        assert activity["message"] == UNAVAILABLE_MESSAGE

    @pytest.mark.asyncio
    async def test_process_rejects_unknown_action(self) -> None:
        with pytest.raises(ValueError, match="Unknown action: deploy"):
            await DevRadar().process({"action": "deploy"})

    def test_release_cadence_needs_two_dates(self) -> None:
        assert release_cadence_days(RELEASES[:1]) is None
        assert release_cadence_days([{"published_at": None}, RELEASES[0]]) is None
