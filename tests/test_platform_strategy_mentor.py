"""
Tests for the platform strategy mentor
======================================
"""

import pytest

from src.agents.platform_strategy_mentor import PlatformStrategyMentor, strategy_for


@pytest.fixture
def mentor() -> PlatformStrategyMentor:
    return PlatformStrategyMentor()


class TestPlatformScoring:
    """Per-platform scores."""

    @pytest.mark.parametrize("platform,score", [
        ("youtube", 88.5),
        ("twitter", 82.0),
        ("linkedin", 76.0),
        ("substack", 75.5),
        ("nostr", 70.8),
    ])
    def test_overall_scores(self, mentor, platform, score) -> None:
        assert mentor.analyze_platform(platform).overall_score == pytest.approx(score)

    def test_analysis_components(self, mentor) -> None:
        analysis = mentor.analyze_platform("twitter")

        assert analysis.audience_fit == 82.5
        assert analysis.monetization_potential == 77.5
        assert analysis.recommended_strategy == "Primary platform: Daily threads, heavy engagement, community building"

    def test_unknown_platform_raises(self, mentor) -> None:
        with pytest.raises(ValueError, match="Platform myspace not found"):
            mentor.analyze_platform("myspace")

    def test_strategy_thresholds_are_strict(self) -> None:
        assert strategy_for("twitter", 80) == "Secondary platform: 3-4 tweets/week, selective engagement"
        assert strategy_for("twitter", 60) == "Minimal presence: Cross-post only"
        assert strategy_for("friendster", 99) == "Platform not recommended"


class TestPlatformComparison:
    """Ranking and effort allocation."""

    def test_ranking_and_allocation(self, mentor) -> None:
        comparison = mentor.compare_platforms()

        assert comparison.primary_platform == "youtube"
        assert comparison.secondary_platforms == ["twitter", "linkedin"]
        assert comparison.avoid_platforms == []
        assert comparison.resource_allocation == {"youtube": 60, "twitter": 20.0, "linkedin": 20.0}
        assert comparison.cross_posting_strategy.startswith("Primary (youtube)")

    @pytest.mark.asyncio
    async def test_recommendation_tool(self, mentor) -> None:
        result = await mentor.handle_tool_call("get_bitcoin_education_recommendation", {})

        assert result["platform_priority"] == ["twitter", "substack", "nostr"]
        assert result["recommended_strategy"]
