"""Tests for the risk scoring engine entry point."""
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest
from pydantic import ValidationError

from healthrisk.domain.catalog import default_catalog
from healthrisk.domain.engine import RiskScoringEngine, assess
from healthrisk.domain.models import RiskLevel
from healthrisk.domain.recommendations import ELDERLY_RECOMMENDATION


@pytest.fixture
def engine():
    return RiskScoringEngine(default_catalog())


class TestScenarios:
    """Reference scenarios."""

    def test_chest_pain_with_difficulty_breathing(self, engine):
        result = engine.assess(["chest pain", "difficulty breathing"], 45, [])

        names = [m.name for m in result.matched_combinations]
        assert "chest_pain_breathing" in names
        match = next(m for m in result.matched_combinations if m.name == "chest_pain_breathing")
        assert match.multiplier == 1.8
        assert result.has_critical_combination
        assert result.risk_level == RiskLevel.CRITICAL
        assert result.base_score == pytest.approx(19.5)
        assert result.final_score == pytest.approx(19.5 * 2.0 * 1.2)
        # Critical combination: CRITICAL spans scores 25-100.
        assert result.risk_percentage == 86
        assert result.next_assessment_in == timedelta(hours=4)

    def test_runny_nose(self, engine):
        result = engine.assess(["runny nose"], 25, [])

        assert result.base_score == pytest.approx(3.2)
        assert result.matched_combinations == []
        assert not result.has_critical_combination
        assert result.age_category == "young_adult"
        assert result.risk_level == RiskLevel.MINIMAL
        assert 0 <= result.risk_percentage <= 15

    def test_elderly_diabetic_with_fever_and_cough(self, engine):
        result = engine.assess(["fever", "cough"], 80, ["diabetes"])

        assert result.age_category == "very_elderly"
        assert result.combination_multiplier == 1.0
        assert result.age_multiplier == 2.0
        assert result.condition_multiplier == pytest.approx(1.7)
        expected = result.base_score * 1.0 * 2.0 * 1.7
        assert result.final_score == pytest.approx(min(expected, 100))
        assert result.final_score == pytest.approx(46.58)
        assert [c.condition for c in result.applied_conditions] == ["diabetes"]
        assert ELDERLY_RECOMMENDATION in result.recommendations.short_term
        assert "Monitor blood sugar levels closely" in result.recommendations.lifestyle


class TestProperties:
    """Properties that hold for any valid input."""

    def test_deterministic(self, engine):
        first = engine.assess(["fever", "stiff neck", "severe headache"], 33, ["asthma"])
        second = engine.assess(["fever", "stiff neck", "severe headache"], 33, ["asthma"])
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    def test_adding_symptoms_never_lowers_score(self, engine):
        symptoms = []
        previous = 0.0
        for symptom in ["nausea", "sweating", "chest pain", "dizziness", "fainting", "runny nose"]:
            symptoms.append(symptom)
            score = engine.assess(symptoms, 58, ["hypertension"]).final_score
            assert score >= previous
            previous = score

    def test_score_is_bounded(self, engine):
        result = engine.assess(
            ["cardiac arrest", "difficulty breathing", "chest pain", "blue lips/fingers", "seizures"] * 3,
            100,
            ["heart failure", "organ transplant", "dialysis", "copd", "active cancer", "diabetes"],
        )
        assert 0 <= result.final_score <= 100
        assert result.final_score == 100
        assert result.risk_percentage == 100

    def test_critical_override(self, engine):
        # Meningitis pattern: the raw score lands in the HIGH band for an adult.
        result = engine.assess(["severe headache", "stiff neck"], 40, [])
        assert result.critical_combination == "meningitis_signs"
        assert 25 <= result.final_score < 45
        assert result.risk_level == RiskLevel.CRITICAL
        assert 80 <= result.risk_percentage <= 100

    def test_unknown_symptom(self, engine):
        result = engine.assess(["xyzzy-not-a-real-symptom"], 30, [])
        assert result.final_score == 3
        assert result.symptoms[0].weight == 3
        assert result.risk_level == RiskLevel.MINIMAL

    def test_concurrent_calls_agree(self, engine):
        args = (["high fever", "confusion", "severe weakness"], 70, ["copd"])
        expected = engine.assess(*args)
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: engine.assess(*args), range(32)))
        assert all(r == expected for r in results)


class TestAssessment:
    """Shape of the assessment result."""

    def test_additional_info_is_passed_through(self, engine):
        info = {"gender": "female", "smoker": False}
        result = engine.assess(["cough"], 30, [], additional_info=info)
        assert result.additional_info == info

    def test_additional_info_is_not_scored(self, engine):
        plain = engine.assess(["cough"], 30, [])
        with_info = engine.assess(["cough"], 30, [], additional_info={"smoker": True})
        assert plain.final_score == with_info.final_score

    def test_conditions_default_to_empty(self, engine):
        result = engine.assess(["cough"], 30)
        assert result.conditions == []
        assert result.condition_multiplier == 1.0

    def test_result_is_frozen(self, engine):
        result = engine.assess(["cough"], 30)
        with pytest.raises(ValidationError):
            result.final_score = 0

    def test_catalog_version_recorded(self, engine):
        assert engine.assess(["cough"], 30).catalog_version == default_catalog().version

    def test_module_level_assess(self):
        result = assess(["runny nose"], 25)
        assert result.risk_level == RiskLevel.MINIMAL

    def test_recommendations_never_empty(self, engine):
        for symptoms in (["gas"], ["cough", "fever"], ["severe headache", "stiff neck"]):
            recs = engine.assess(symptoms, 30).recommendations
            assert recs.immediate or recs.short_term
