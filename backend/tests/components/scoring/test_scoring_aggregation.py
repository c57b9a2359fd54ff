"""Overall score, level assessment, feedback generators and weight presets."""

import pytest

from conftest import make_breakdown
from interview_prep.components.scoring.metadata import SCORING_CATEGORIES, scoring_metadata_payload
from interview_prep.components.scoring.rules import BREAKDOWN_CATEGORIES, DEFAULT_WEIGHTS, PRESET_WEIGHTS
from interview_prep.components.scoring.schemas import ScoringCriteria, ScoringWeights
from interview_prep.components.scoring.service import (
    assess_level,
    build_detailed_score,
    calculate_overall_score,
    create_improvement_plan,
    generate_recommendations,
    get_default_weights,
    get_preset_weights,
    identify_strengths,
    identify_weaknesses,
    role_complexity,
)
from interview_prep.components.scoring.weights import ScoringWeightsService


class TestWeights:
    def test_default_weights_sum_to_one(self):
        assert sum(DEFAULT_WEIGHTS.values()) == pytest.approx(1.0)

    @pytest.mark.parametrize("name", sorted(PRESET_WEIGHTS))
    def test_presets_sum_to_one_and_cover_all_categories(self, name):
        preset = PRESET_WEIGHTS[name]
        assert set(preset) == set(BREAKDOWN_CATEGORIES)
        assert sum(preset.values()) == pytest.approx(1.0)

    def test_unknown_preset(self):
        assert get_preset_weights("astronaut") is None

    def test_default_weights_are_a_copy(self):
        weights = get_default_weights()
        weights["examples"] = 0.9
        assert DEFAULT_WEIGHTS["examples"] == 0.05

    def test_weights_schema_rejects_bad_sum(self):
        values = dict(DEFAULT_WEIGHTS, examples=0.5)
        with pytest.raises(ValueError):
            ScoringWeights(**values)

    def test_weights_schema_rejects_out_of_range(self):
        values = dict(DEFAULT_WEIGHTS, examples=-0.05, clarity=0.2)
        with pytest.raises(ValueError):
            ScoringWeights(**values)


class TestOverallScore:
    def test_weighted_average(self):
        breakdown = make_breakdown(
            technical_accuracy=80, communication_skills=60, problem_solving=70, confidence=50,
            relevance=90, clarity=40, structure=100, examples=35,
        )
        # 12 + 12 + 10.5 + 5 + 13.5 + 4 + 10 + 1.75 = 68.75
        assert calculate_overall_score(breakdown) == 69

    @pytest.mark.parametrize("value", [0, 1, 37, 50, 99, 100])
    def test_uniform_breakdown_returns_value(self, value):
        assert calculate_overall_score(make_breakdown(float(value))) == value

    def test_bounded(self):
        assert calculate_overall_score(make_breakdown(0.0)) == 0
        assert calculate_overall_score(make_breakdown(100.0)) == 100

    def test_custom_weights_mapping(self):
        breakdown = make_breakdown(50.0, technical_accuracy=90.0)
        assert calculate_overall_score(breakdown, {"technical_accuracy": 1.0}) == 90

    def test_custom_weights_model(self):
        breakdown = make_breakdown(50.0, technical_accuracy=90.0)
        technical = ScoringWeights(**PRESET_WEIGHTS["technical"])
        default = calculate_overall_score(breakdown)
        assert calculate_overall_score(breakdown, technical) > default

    def test_zero_weights(self):
        assert calculate_overall_score(make_breakdown(80.0), {"examples": 0.0}) == 0

    def test_breakdown_values_are_clamped(self):
        breakdown = make_breakdown(150.0, examples=-20.0)
        assert breakdown.technical_accuracy == 100.0
        assert breakdown.examples == 0.0


class TestLevelAssessment:
    def test_thresholds_without_seniority(self):
        assert assess_level(make_breakdown(90.0), "Backend Engineer") == "senior"
        assert assess_level(make_breakdown(75.0), "Backend Engineer") == "mid"
        assert assess_level(make_breakdown(55.0), "Backend Engineer") == "junior"
        assert assess_level(make_breakdown(10.0), "Backend Engineer") == "junior"

    def test_seniority_offset_lowers_thresholds(self):
        assert assess_level(make_breakdown(76.0), "Senior Backend Engineer") == "senior"
        assert assess_level(make_breakdown(66.0), "Principal Engineer") == "senior"

    def test_first_keyword_in_table_order_wins(self):
        # "Senior" is checked before "Lead"
        assert role_complexity("Senior Lead Engineer") == 10
        assert role_complexity("Staff Engineer") == 15
        assert role_complexity("Engineer") == 0

    def test_lead_is_never_produced(self):
        for value in range(0, 101, 5):
            for role in ("Lead Engineer", "Principal Engineer", "Engineering Manager", ""):
                assert assess_level(make_breakdown(float(value)), role) != "lead"

    def test_monotonic_in_overall_score(self):
        order = {"junior": 0, "mid": 1, "senior": 2, "lead": 3}
        for role in ("", "Senior Engineer", "Principal Engineer"):
            levels = [order[assess_level(make_breakdown(float(v)), role)] for v in range(101)]
            assert levels == sorted(levels)

    def test_custom_weights_feed_level(self):
        breakdown = make_breakdown(50.0, technical_accuracy=90.0)
        assert assess_level(breakdown, "Backend Engineer") == "junior"
        assert assess_level(breakdown, "Backend Engineer", {"technical_accuracy": 1.0}) == "senior"

    def test_detailed_score_level_agrees_with_weighted_overall(self):
        breakdown = make_breakdown(60.0, technical_accuracy=96.0)
        criteria = ScoringCriteria(question_type="technical", role="Backend Engineer")
        default = build_detailed_score(breakdown, "", criteria)
        weighted = build_detailed_score(breakdown, "", criteria, ScoringWeights(**PRESET_WEIGHTS["technical"]))
        assert (default.overall, default.level_assessment) == (65, "junior")
        assert (weighted.overall, weighted.level_assessment) == (71, "mid")


class TestGenerators:
    CRITERIA = ScoringCriteria(question_type="behavioral", role="Product Manager")

    def test_strengths_top_three_above_threshold(self):
        breakdown = make_breakdown(
            50.0, technical_accuracy=95, communication_skills=90, problem_solving=85, confidence=82,
        )
        strengths = identify_strengths(breakdown, "ok")
        assert strengths == [
            SCORING_CATEGORIES["technical_accuracy"]["strength"],
            SCORING_CATEGORIES["communication_skills"]["strength"],
            SCORING_CATEGORIES["problem_solving"]["strength"],
        ]

    def test_strengths_capped_at_five(self):
        response = "In my experience " + "x" * 320
        strengths = identify_strengths(make_breakdown(95.0), response)
        assert len(strengths) == 5
        assert strengths[-1] == "Supports answers with concrete examples"

    def test_weaknesses_bottom_three_and_brevity(self):
        weaknesses = identify_weaknesses(make_breakdown(40.0), "")
        assert len(weaknesses) == 4
        assert weaknesses[-1] == "Responses are too brief and lack detail"

    def test_no_weaknesses_when_strong(self):
        assert identify_weaknesses(make_breakdown(90.0), "x" * 100) == []

    def test_recommendations_for_categories_below_seventy(self):
        breakdown = make_breakdown(90.0, clarity=60.0, examples=20.0)
        assert generate_recommendations(breakdown, self.CRITERIA) == [
            SCORING_CATEGORIES["clarity"]["recommendation"],
            SCORING_CATEGORIES["examples"]["recommendation"],
        ]

    def test_recommendations_capped_at_five(self):
        assert len(generate_recommendations(make_breakdown(10.0), self.CRITERIA)) == 5

    def test_improvement_plan_weakest_first(self):
        breakdown = make_breakdown(90.0, clarity=60.0, examples=20.0, confidence=40.0)
        plan = create_improvement_plan(breakdown, self.CRITERIA)
        assert plan.short_term == [
            SCORING_CATEGORIES["examples"]["short_term"],
            SCORING_CATEGORIES["confidence"]["short_term"],
        ]
        assert plan.long_term == [
            SCORING_CATEGORIES["examples"]["long_term"],
            SCORING_CATEGORIES["confidence"]["long_term"],
            SCORING_CATEGORIES["clarity"]["long_term"],
        ]

    def test_empty_plan_when_nothing_weak(self):
        plan = create_improvement_plan(make_breakdown(85.0), self.CRITERIA)
        assert plan.short_term == []
        assert plan.long_term == []


class TestMetadata:
    def test_payload_lists_every_category(self):
        payload = scoring_metadata_payload()
        keys = [c["key"] for c in payload["categories"]]
        assert keys == BREAKDOWN_CATEGORIES
        labels = {c["key"]: c["label"] for c in payload["categories"]}
        assert labels["examples"] == "Use of Examples"
        assert set(payload["presets"]) == set(PRESET_WEIGHTS)


class TestScoringWeightsService:
    def test_defaults_for_unknown_user(self, db):
        result = ScoringWeightsService(db).fetch_user_scoring_weights("user-1")
        assert result.is_default is True
        assert result.weights.model_dump() == DEFAULT_WEIGHTS

    def test_preset_round_trip(self, db):
        service = ScoringWeightsService(db)
        assert service.apply_preset("user-1", "technical") is True
        stored = service.fetch_user_scoring_weights("user-1")
        assert stored.preset_name == "technical"
        assert stored.is_default is False
        preset = service.get_preset_weights("technical")
        assert stored.weights.model_dump() == pytest.approx(preset.model_dump())
        assert sum(stored.weights.model_dump().values()) == pytest.approx(1.0)

    def test_preset_overwrites_in_place(self, db):
        service = ScoringWeightsService(db)
        service.apply_preset("user-1", "technical")
        service.apply_preset("user-1", "behavioral")
        stored = service.fetch_user_scoring_weights("user-1")
        assert stored.preset_name == "behavioral"
        assert stored.weights.communication_skills == pytest.approx(PRESET_WEIGHTS["behavioral"]["communication_skills"])

    def test_unknown_preset_not_applied(self, db):
        service = ScoringWeightsService(db)
        assert service.apply_preset("user-1", "astronaut") is False
        assert service.fetch_user_scoring_weights("user-1").is_default is True

    def test_custom_weights_and_reset(self, db):
        service = ScoringWeightsService(db)
        custom = ScoringWeights(**dict(DEFAULT_WEIGHTS, examples=0.10, clarity=0.05))
        assert service.save_scoring_weights("user-1", custom) is True
        assert service.fetch_user_scoring_weights("user-1").weights.examples == pytest.approx(0.10)
        assert service.reset_to_defaults("user-1") is True
        assert service.fetch_user_scoring_weights("user-1").is_default is True

    def test_all_presets(self):
        presets = ScoringWeightsService.get_all_presets()
        assert set(presets) == {"technical", "behavioral", "product-manager", "leadership"}
