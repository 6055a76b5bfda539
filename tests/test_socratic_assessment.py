"""
Tests for the Socratic tutor and the assessment generator
=========================================================
"""

import pytest

from src.agents.assessment_generator import (
    AssessmentConfig,
    AssessmentGenerator,
    fill_template,
    points_for,
)
from src.agents.socratic_tutor import QUESTION_BANK, SocraticTutor
from src.tools import btc_price as btc_price_module
from src.tools.btc_price import PriceUnavailableError
from src.tools.fee_estimates import FeeDataUnavailableError

FEES = {"fastestFee": 20, "halfHourFee": 12, "hourFee": 8, "economyFee": 4, "minimumFee": 1}


async def _price() -> dict:
    return {"usd": 65000.0}


async def _fees() -> dict:
    return dict(FEES)


async def _price_down() -> dict:
    raise PriceUnavailableError("Unable to fetch Bitcoin price")


async def _fees_down() -> dict:
    raise FeeDataUnavailableError("Unable to fetch fee estimates")


@pytest.fixture
def tutor(cache, rng, clock) -> SocraticTutor:
    return SocraticTutor(cache=cache, rng=rng, clock=clock)


@pytest.fixture
def generator(tutor, cache, rng, clock) -> AssessmentGenerator:
    return AssessmentGenerator(
        tutor=tutor, cache=cache, price_fetcher=_price, fee_fetcher=_fees, rng=rng, clock=clock
    )


# ============================================================================
# Socratic tutor
# ============================================================================


class TestSocraticTutor:
    """Question selection."""

    @pytest.mark.asyncio
    async def test_questions_come_from_bank(self, tutor) -> None:
        result = await tutor.generate_questions("fees", "beginner", 3)

        assert len(result.questions) == 3
        assert len(set(result.questions)) == 3
        assert set(result.questions) <= set(QUESTION_BANK["fees"]["beginner"])
        assert result.learning_objectives

    @pytest.mark.asyncio
    async def test_count_capped_at_bank_size(self, tutor) -> None:
        result = await tutor.generate_questions("fees", "intermediate", 50)

        assert len(result.questions) == len(QUESTION_BANK["fees"]["intermediate"])

    @pytest.mark.asyncio
    async def test_selection_cached_for_the_lesson(self, tutor) -> None:
        first = await tutor.generate_questions("mining", "beginner", 2)
        second = await tutor.generate_questions("mining", "beginner", 2)

        assert first.questions == second.questions

    @pytest.mark.asyncio
    async def test_cached_lesson_survives_caller_mutation(self, tutor) -> None:
        first = await tutor.generate_questions("wallets", "beginner", 3)
        expected = list(first.questions)
        first.questions.clear()
        first.learning_objectives.append("scribble")

        second = await tutor.generate_questions("wallets", "beginner", 3)

        assert second.questions == expected
        assert "scribble" not in second.learning_objectives

    @pytest.mark.parametrize("count", [0, -1])
    @pytest.mark.asyncio
    async def test_non_positive_count_selects_nothing(self, tutor, count) -> None:
        result = await tutor.generate_questions("fees", "advanced", count)

        assert result.questions == []

    @pytest.mark.asyncio
    async def test_unknown_topic_raises(self, tutor) -> None:
        with pytest.raises(ValueError, match="not found in question bank"):
            await tutor.generate_questions("astrology", "beginner", 3)

    @pytest.mark.asyncio
    async def test_process_reports_errors_as_status(self, tutor) -> None:
        result = await tutor.process({"topic": "astrology"})

        assert result["status"] == "error"
        assert "astrology" in result["message"]

    @pytest.mark.asyncio
    async def test_mixed_questions_dedupe_objectives(self, tutor) -> None:
        result = await tutor.generate_mixed_questions(["fees", "fees"], "beginner", 2)

        assert result.topic == "fees, fees"
        assert len(result.learning_objectives) == len(set(result.learning_objectives))


# ============================================================================
# Assessment generator
# ============================================================================


class TestScoring:
    """Points and templates."""

    @pytest.mark.parametrize("difficulty,question_type,expected", [
        ("beginner", "multiple_choice", 2),
        ("beginner", "true_false", 1),
        ("intermediate", "true_false", 2),
        ("advanced", "true_false", 3),
        ("intermediate", "short_answer", 5),
        ("advanced", "reflection", 15),
    ])
    def test_points_round_half_up(self, difficulty, question_type, expected) -> None:
        assert points_for(difficulty, question_type) == expected

    def test_fill_template_replaces_every_occurrence(self) -> None:
        assert fill_template("{fee} then {fee} and {other}", {"fee": "5"}) == "5 then 5 and {other}"


class TestAssessmentGenerator:
    """Question mixing, live data and caching."""

    @pytest.mark.asyncio
    async def test_default_types_split_evenly(self, generator) -> None:
        questions = await generator.generate_questions("fees", "beginner", 5)

        assert [q.type for q in questions] == [
            "multiple_choice", "multiple_choice", "true_false", "true_false", "scenario",
        ]
        assert questions[0].correct_answer == 0
        assert questions[2].options == ["True", "False"]

    @pytest.mark.asyncio
    async def test_zero_count_yields_nothing(self, generator) -> None:
        assert await generator.generate_questions("fees", "beginner", 0) == []

    @pytest.mark.asyncio
    async def test_unknown_type_is_skipped(self, generator) -> None:
        questions = await generator.generate_questions("fees", "beginner", 2, ["essay", "reflection"])

        assert [q.type for q in questions] == ["reflection"]

    @pytest.mark.asyncio
    async def test_scenario_uses_live_price(self, generator) -> None:
        questions = await generator.generate_scenario_questions("fees", "beginner", 1)

        assert "$65,000" in questions[0].question
        assert questions[0].live_data_context["btc_price_usd"] == 65000.0
        assert questions[0].live_data_context["generated_at"] == "2024-06-01T12:00:00+00:00"

    @pytest.mark.asyncio
    async def test_calculation_answers_closed_form(self, generator) -> None:
        questions = await generator.generate_calculation_questions("fees", "beginner", 2)

        assert questions[0].question == "Calculate the fee for a transaction: Size = 250 bytes, Fee rate = 20 sat/vB"
        assert questions[0].correct_answer == "5000 satoshis"
        assert questions[1].correct_answer == "0.001 BTC"
        assert questions[0].time_limit_seconds == 120

    @pytest.mark.asyncio
    async def test_market_outage_uses_fallbacks(self, tutor, cache, rng, clock) -> None:
        generator = AssessmentGenerator(
            tutor=tutor, cache=cache, price_fetcher=_price_down, fee_fetcher=_fees_down, rng=rng, clock=clock
        )

        questions = await generator.generate_calculation_questions("fees", "beginner", 1)

        assert questions[0].live_data_context["btc_price_usd"] == 50000
        assert questions[0].correct_answer == "2500 satoshis"

    @pytest.mark.asyncio
    async def test_assessment_totals_and_defaults(self, generator) -> None:
        assessment = await generator.generate_assessment(AssessmentConfig(topic="fees", question_count=5))

        assert assessment.title == "Fees Beginner Assessment"
        assert assessment.id == "fees-beginner-1717243200000"
        assert assessment.total_points == 10
        assert assessment.time_limit_minutes == 20
        assert assessment.passing_score_percentage == 70
        assert assessment.rubrics is None

    @pytest.mark.asyncio
    async def test_advanced_assessment_has_rubrics(self, generator) -> None:
        assessment = await generator.generate_assessment(
            AssessmentConfig(topic="fees", difficulty="advanced", question_count=3)
        )

        assert [r.criteria for r in assessment.rubrics] == ["Technical Understanding", "Practical Application"]
        assert assessment.passing_score_percentage == 80

    @pytest.mark.asyncio
    async def test_cached_assessment_is_copied(self, generator) -> None:
        config = AssessmentConfig(topic="fees", question_count=3)

        first = await generator.generate_assessment(config)
        first.questions.clear()
        second = await generator.generate_assessment(config)

        assert len(second.questions) == 3
        assert second.id == first.id

    @pytest.mark.asyncio
    async def test_tool_returns_plain_dict(self, generator) -> None:
        result = await generator.handle_tool_call(
            "generate_assessment", {"topic": "fees", "difficulty": "beginner", "question_count": 2}
        )

        assert result["topic"] == "fees"
        assert "rubrics" not in result
        assert all("hints" not in q for q in result["questions"])


class TestLiveDataFallbacks:
    """Market outages never break question generation."""

    @pytest.mark.asyncio
    async def test_malformed_price_payload_falls_back(self, tutor, cache, rng, clock, monkeypatch) -> None:
        async def garbled(*args, **kwargs):
            return {"bitcoin": "unexpected"}

        monkeypatch.setattr(btc_price_module, "request_json", garbled)
        generator = AssessmentGenerator(
            tutor=tutor, cache=cache, price_fetcher=btc_price_module.btc_price, fee_fetcher=_fees,
            rng=rng, clock=clock,
        )

        questions = await generator.generate_scenario_questions("fees", "beginner", 1)

        assert "$50,000" in questions[0].question
        assert questions[0].live_data_context["btc_price_usd"] == 50000

    @pytest.mark.asyncio
    async def test_any_fetcher_error_falls_back(self, tutor, cache, rng, clock) -> None:
        async def broken_price():
            raise KeyError("usd")

        async def broken_fees():
            raise TypeError("unexpected payload")

        generator = AssessmentGenerator(
            tutor=tutor, cache=cache, price_fetcher=broken_price, fee_fetcher=broken_fees, rng=rng, clock=clock
        )

        questions = await generator.generate_calculation_questions("fees", "beginner", 1)

        assert questions[0].correct_answer == "2500 satoshis"

    @pytest.mark.asyncio
    async def test_price_outage_scenario_text(self, tutor, cache, rng, clock) -> None:
        generator = AssessmentGenerator(
            tutor=tutor, cache=cache, price_fetcher=_price_down, fee_fetcher=_fees, rng=rng, clock=clock
        )

        questions = await generator.generate_scenario_questions("fees", "beginner", 1)

        assert "$50,000" in questions[0].question
        assert "$65,000" not in questions[0].question

    @pytest.mark.parametrize("topic,difficulty", [("astrology", "beginner"), ("fees", "expert")])
    @pytest.mark.asyncio
    async def test_scenario_without_templates_is_empty(self, tutor, cache, rng, clock, topic, difficulty) -> None:
        calls = []

        async def counting_price():
            calls.append("price")
            return {"usd": 65000.0}

        generator = AssessmentGenerator(
            tutor=tutor, cache=cache, price_fetcher=counting_price, fee_fetcher=_fees, rng=rng, clock=clock
        )

        assert await generator.generate_scenario_questions(topic, difficulty, 3) == []
        assert calls == []

    @pytest.mark.parametrize("topic,difficulty", [("astrology", "beginner"), ("mining", "advanced")])
    @pytest.mark.asyncio
    async def test_calculation_without_templates_is_empty(self, generator, topic, difficulty) -> None:
        assert await generator.generate_calculation_questions(topic, difficulty, 3) == []


class TestAssessmentBuild:
    """Totals, rubrics, caching and failures."""

    @pytest.mark.asyncio
    async def test_rubric_bands(self, generator) -> None:
        assessment = await generator.generate_assessment(
            AssessmentConfig(topic="fees", difficulty="advanced", question_count=2)
        )

        for rubric in assessment.rubrics:
            assert rubric.points_possible == 25
            assert {band: level.points for band, level in rubric.performance_levels.items()} == {
                "excellent": 25, "good": 20, "satisfactory": 15, "needs_improvement": 10,
            }

    @pytest.mark.asyncio
    async def test_total_points_across_mixed_types(self, generator) -> None:
        assessment = await generator.generate_assessment(AssessmentConfig(
            topic="fees",
            question_count=3,
            question_types=["multiple_choice", "calculation", "reflection"],
        ))

        assert [q.type for q in assessment.questions] == ["multiple_choice", "calculation", "reflection"]
        assert assessment.total_points == sum(q.points for q in assessment.questions) == 12
        assert assessment.time_limit_minutes == 24

    @pytest.mark.asyncio
    async def test_build_runs_once_while_cached(self, generator, monkeypatch) -> None:
        builds = []
        original = generator._build_assessment

        async def counting_build(config):
            builds.append(config.topic)
            return await original(config)

        monkeypatch.setattr(generator, "_build_assessment", counting_build)
        config = AssessmentConfig(topic="mining", question_count=2)

        await generator.generate_assessment(config)
        await generator.generate_assessment(config)

        assert builds == ["mining"]

    @pytest.mark.asyncio
    async def test_generation_error_logged_and_reraised(self, generator, monkeypatch) -> None:
        logged = []
        monkeypatch.setattr(generator.logger, "error", lambda message, error=None, data=None: logged.append(error))

        with pytest.raises(ValueError, match="not found in question bank") as excinfo:
            await generator.generate_assessment(AssessmentConfig(topic="astrology", question_count=2))

        assert logged == [excinfo.value]
