"""
Tests for the History and Lightning agents
==========================================
"""

import pytest

from src.agents.history_timeline_builder import MARKET_CYCLES, HistoryTimelineBuilder, build_timeline_eras
from src.agents.lightning_educator import (
    LightningEducator,
    curriculum_difficulty,
    estimate_curriculum_duration,
    learning_effectiveness,
)


# ============================================================================
# History
# ============================================================================


class TestTimelineEras:
    """Scope and date filtering."""

    def test_comprehensive_covers_every_era(self) -> None:
        eras = build_timeline_eras("comprehensive")

        assert [era["name"] for era in eras] == [
            "Pre-Bitcoin Era", "Bitcoin Genesis", "Early Adoption", "Growth and Conflict", "Institutional Era",
        ]
        assert all("events" not in era for era in eras)

    def test_pre_bitcoin_scope_is_one_era(self) -> None:
        eras = build_timeline_eras("pre_bitcoin_history")

        assert len(eras) == 1
        assert eras[0]["major_events"][0]["title"] == "Diffie-Hellman Key Exchange"

    def test_regulatory_scope_keeps_only_regulatory_events(self) -> None:
        eras = build_timeline_eras("regulatory_timeline")
        events = [event for era in eras for event in era["major_events"]]

        assert {event["category"] for event in events} == {"regulatory"}
        assert [era["name"] for era in eras] == ["Growth and Conflict", "Institutional Era"]

    def test_date_range_is_inclusive_by_year(self) -> None:
        eras = build_timeline_eras("comprehensive", "2009-01-01", "2010-12-31")
        titles = [event["title"] for era in eras for event in era["major_events"]]

        assert titles == [
            "Genesis Block Mined", "First Bitcoin Transaction", "Bitcoin Pizza Day", "Mt. Gox Launches",
        ]


class TestHistoryTimelineBuilder:
    """Tool responses."""

    @pytest.mark.asyncio
    async def test_interactive_timeline_defaults(self) -> None:
        result = await HistoryTimelineBuilder().handle_tool_call(
            "create_interactive_timeline", {"timeline_scope": "market_evolution"}
        )

        spec = result["timeline_specification"]
        assert spec["title"] == "Bitcoin market evolution Timeline"
        assert spec["interactivity_level"] == "interactive_exploration"
        assert spec["educational_focus"] == ["technical_evolution", "economic_impact"]
        assert spec["target_audience"] == "basic_knowledge"
        assert len(result["educational_components"]["learning_objectives"]) == 4

    def test_market_cycles_only_for_cycle_analysis(self) -> None:
        builder = HistoryTimelineBuilder()

        cycles = builder.analyze_historical_patterns({"pattern_type": "market_cycles", "predictive_element": True})
        adoption = builder.analyze_historical_patterns({"pattern_type": "adoption_curves"})

        assert cycles["market_cycle_analysis"]["identified_cycles"] == MARKET_CYCLES
        assert "predictive_caveat" in cycles
        assert "market_cycle_analysis" not in adoption
        assert "predictive_caveat" not in adoption

    def test_anonymous_creator_gets_identity_note(self) -> None:
        result = HistoryTimelineBuilder().build_personality_profiles({"personality_category": "founders_developers"})
        satoshi = next(p for p in result["profiles"] if p["name"] == "Satoshi Nakamoto")

        assert satoshi["identity_note"] == "Identity unknown; discussed through contributions only"
        assert "anonymous" not in satoshi
        assert result["personality_profiling"]["anonymity_respect"] == "respect_anonymity"

    def test_narrative_chapters_are_numbered(self) -> None:
        result = HistoryTimelineBuilder().build_historical_narrative({})

        assert [c["chapter"] for c in result["chapters"]] == list(range(1, len(result["chapters"]) + 1))
        assert result["narrative_framework"]["style"] == "storytelling_approach"
        assert result["key_events"] == {}

    def test_documentary_segments_are_eight_minutes(self) -> None:
        result = HistoryTimelineBuilder().create_documentary_segments({})

        assert result["segments"]
        assert {s["duration_minutes"] for s in result["segments"]} == {8}


# ============================================================================
# Lightning
# ============================================================================


class TestCurriculumSizing:
    """Duration, difficulty and effectiveness."""

    @pytest.mark.parametrize("areas,availability,expected", [
        (2, None, "4-6 weeks"),
        (4, None, "8-12 weeks"),
        (4, "limited", "8-12 weeks"),
        (6, "limited", "12-16 weeks"),
        (8, "limited", "16-24 weeks"),
        (5, "extensive", "4-6 weeks"),
    ])
    def test_duration_bands(self, areas, availability, expected) -> None:
        assert estimate_curriculum_duration(areas, availability) == expected

    def test_difficulty_accumulates(self) -> None:
        assert curriculum_difficulty({}, ["fundamentals"]) == "Beginner-friendly"
        assert curriculum_difficulty({"bitcoin_knowledge_level": "beginner"}, []) == "Moderate"
        assert curriculum_difficulty(
            {"bitcoin_knowledge_level": "beginner", "technical_background": "non_technical"}, ["development"]
        ) == "Advanced"

    def test_effectiveness_rewards_hands_on(self) -> None:
        assert learning_effectiveness({}) == 83
        assert learning_effectiveness({"preferred_learning_style": "hands_on"}) == 93


class TestLightningEducator:
    """Tool responses."""

    @pytest.mark.asyncio
    async def test_curriculum_lists_focus_areas(self, clock) -> None:
        result = await LightningEducator(clock=clock).handle_tool_call("create_lightning_curriculum", {
            "learner_profile": {"bitcoin_knowledge_level": "beginner", "time_availability": "limited"},
            "curriculum_focus": ["fundamentals", "channel_management"],
            "learning_environment": "testnet",
        })

        curriculum = result["lightning_curriculum"]
        assert curriculum["curriculum_id"] == "lightning_curriculum_1717243200000"
        assert [m["area"] for m in curriculum["learning_path"]["core_curriculum"]] == [
            "fundamentals", "channel_management",
        ]
        assert "assessment_framework" not in curriculum
        assert result["estimated_duration"] == "4-6 weeks"
        assert result["difficulty_assessment"] == "Moderate"

    def test_assessment_framework_only_with_preferences(self) -> None:
        result = LightningEducator().create_lightning_curriculum({
            "assessment_preferences": {"project_based_assessment": True},
        })

        assert result["lightning_curriculum"]["assessment_framework"] == {
            "theoretical_assessment": True,
            "practical_assessment": True,
            "project_based_assessment": True,
            "continuous_assessment": True,
        }

    def test_mainnet_practice_has_amount_limit(self) -> None:
        educator = LightningEducator()

        mainnet = educator.setup_practice_environment({"environment_type": "mainnet_guided"})
        testnet = educator.setup_practice_environment({"environment_type": "testnet"})

        assert mainnet["practice_environment"]["safety_measures"]["max_payment_sats"] == 10_000
        assert mainnet["safety_rating"] == 9
        assert testnet["practice_environment"]["safety_measures"]["max_payment_sats"] is None
        assert testnet["safety_rating"] == 10

    def test_project_hours_scale_with_scope(self) -> None:
        result = LightningEducator().develop_lightning_projects({
            "project_types": ["payment_app", "api_integration"],
            "project_scope": "proof_of_concept",
        })

        program = result["development_program"]
        assert [p["estimated_hours"] for p in program["projects"]] == [20, 15]
        assert program["total_estimated_hours"] == 35
