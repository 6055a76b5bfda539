"""
Tests for the command line entry point
======================================
"""

import json

import pytest

from src.main import build_parser, main


class TestParser:
    """Argument parsing."""

    def test_assessment_defaults(self) -> None:
        args = build_parser().parse_args(["assessment"])

        assert (args.topic, args.difficulty, args.count, args.types) == ("fees", "beginner", 5, None)

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestCommands:
    """Offline commands."""

    @pytest.mark.asyncio
    async def test_tools_lists_registry(self, capsys) -> None:
        assert await main(["tools"]) == 0

        out = capsys.readouterr().out
        assert "get_bitcoin_price" in out
        assert "create_lightning_curriculum" in out

    @pytest.mark.asyncio
    async def test_call_runs_tool(self, capsys) -> None:
        assert await main(["call", "get_bitcoin_education_recommendation"]) == 0

        result = json.loads(capsys.readouterr().out)
        assert result["success"] is True
        assert result["data"]["platform_priority"] == ["twitter", "substack", "nostr"]

    @pytest.mark.asyncio
    async def test_call_rejects_bad_input(self) -> None:
        assert await main(["call", "no_such_tool"]) == 2
        assert await main(["call", "get_bitcoin_price", "--args", "{oops"]) == 2

    @pytest.mark.asyncio
    async def test_status_with_no_history(self, capsys) -> None:
        assert await main(["status"]) == 0

        status = json.loads(capsys.readouterr().out)
        assert status["total_updates"] == 0
        assert status["last_update"] is None
