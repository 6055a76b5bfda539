"""
Tests for the Canva tools
=========================
"""

import json

import httpx
import pytest

from src.tools.canva_api import CanvaTools


def _canva(mock_client, handler) -> CanvaTools:
    return CanvaTools(
        access_token="test-token",
        base_url="https://canva.test/rest/v1",
        client=mock_client(handler),
    )


class TestCanvaConfiguration:
    """Behaviour without credentials."""

    @pytest.mark.asyncio
    async def test_unconfigured_returns_error_result(self) -> None:
        canva = CanvaTools(base_url="https://canva.test/rest/v1")

        result = await canva.list_designs()

        assert result.success is False
        assert result.error == "Canva is not configured. Set CANVA_ACCESS_TOKEN in .env"

    @pytest.mark.asyncio
    async def test_http_error_is_folded_into_result(self, mock_client) -> None:
        canva = _canva(mock_client, lambda r: httpx.Response(401, text="invalid token"))

        result = await canva.get_design("DAF123")

        assert result.success is False
        assert result.error == "Canva API error: 401 - invalid token"


class TestCanvaDesigns:
    """Listing and creating designs."""

    @pytest.mark.asyncio
    async def test_list_designs_follows_continuation(self, mock_client) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if "continuation" not in request.url.params:
                return httpx.Response(200, json={"items": [{"id": "d1"}, {"id": "d2"}], "continuation": "next"})
            return httpx.Response(200, json={"items": [{"id": "d3"}]})

        result = await _canva(mock_client, handler).list_designs(query="bitcoin", limit=10)

        assert result.success is True
        assert [d["id"] for d in result.data["designs"]] == ["d1", "d2", "d3"]
        assert result.data["has_more"] is False
        assert seen[0].headers["Authorization"] == "Bearer test-token"
        assert seen[0].url.params["query"] == "bitcoin"
        assert seen[1].url.params["continuation"] == "next"

    @pytest.mark.asyncio
    async def test_list_designs_stops_at_limit(self, mock_client) -> None:
        page = {"items": [{"id": f"d{i}"} for i in range(3)], "continuation": "more"}
        result = await _canva(mock_client, lambda r: httpx.Response(200, json=page)).list_designs(limit=2)

        assert result.data["count"] == 2
        assert result.data["has_more"] is True

    @pytest.mark.asyncio
    async def test_create_custom_size_design(self, mock_client) -> None:
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"design": {"id": "DAF9", "title": "Fee Guide"}})

        result = await _canva(mock_client, handler).create_design(title="Fee Guide", width=1200, height=800)

        assert result.data == {"id": "DAF9", "title": "Fee Guide"}
        assert bodies[0] == {
            "design_type": {"type": "custom", "width": 1200, "height": 800},
            "title": "Fee Guide",
        }

    @pytest.mark.asyncio
    async def test_export_rejects_unknown_format(self, mock_client) -> None:
        canva = _canva(mock_client, lambda r: httpx.Response(200, json={}))

        result = await canva.export_design("DAF9", "gif")

        assert result.success is False
        assert "Unsupported export format" in result.error


class TestCanvaWorkflows:
    """Connection check and education designs."""

    @pytest.mark.asyncio
    async def test_connection_reports_user(self, mock_client) -> None:
        payload = {"team_user": {"user_id": "u1", "team_id": "t1"}}
        canva = _canva(mock_client, lambda r: httpx.Response(200, json=payload))

        result = await canva.test_connection()

        assert result.data == {
            "connected": True,
            "user_id": "u1",
            "team_id": "t1",
            "api_url": "https://canva.test/rest/v1",
        }

    @pytest.mark.asyncio
    async def test_education_designs_titles_carry_market_data(self, mock_client) -> None:
        titles = []

        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            titles.append(body["title"])
            return httpx.Response(200, json={"design": {"id": f"id{len(titles)}"}})

        result = await _canva(mock_client, handler).create_bitcoin_education_designs(
            {"price": 108000.4, "congestion": "Medium"}
        )

        assert result.success is True
        assert result.data["method"] == "rest_api"
        assert [d["design_type"] for d in result.data["designs"]] == ["price_alert", "fee_guide", "achievement"]
        assert "Bitcoin Price Alert - $108,000 (Medium congestion)" in titles
