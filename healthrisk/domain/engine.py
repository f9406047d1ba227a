import logging
from typing import Any, Dict, Optional, Sequence

from .catalog import default_catalog
from .models import RiskAssessment, RiskCatalog
from .recommendations import generate_recommendations, next_assessment_interval
from .rules import aggregate_score, classify_risk, risk_percentage


logger = logging.getLogger(__name__)


class RiskScoringEngine:
    """Scores reported symptoms, age and conditions against one catalog snapshot.

    The engine holds no state besides the catalog.
    """

    def __init__(self, catalog: Optional[RiskCatalog] = None):
        self.catalog = catalog or default_catalog()

    def assess(
        self,
        symptoms: Sequence[str],
        age: float,
        conditions: Optional[Sequence[str]] = None,
        additional_info: Optional[Dict[str, Any]] = None,
    ) -> RiskAssessment:
        """
        Produce a risk assessment for pre-validated input.

        Args:
            symptoms: Reported symptoms (at least one)
            age: Patient age in years, >= 0
            conditions: Pre-existing conditions
            additional_info: Extra context carried through to the result, not scored

        Returns:
            A new RiskAssessment
        """
        symptoms = list(symptoms)
        conditions = list(conditions or [])

        breakdown = aggregate_score(symptoms, age, conditions, self.catalog)
        combinations = breakdown.combinations
        level = classify_risk(breakdown.final_score, combinations.has_critical_combination, age)
        percentage = risk_percentage(breakdown.final_score, level, age, combinations.has_critical_combination)

        if combinations.matches:
            logger.debug("Matched combinations: %s", [m.name for m in combinations.matches])
        logger.info("Risk assessed: level=%s score=%.1f (%s%%)", level.value, breakdown.final_score, percentage)

        return RiskAssessment(
            age=age,
            conditions=conditions,
            additional_info=dict(additional_info or {}),
            symptoms=breakdown.symptoms,
            base_score=breakdown.base_score,
            combination_multiplier=breakdown.combination_multiplier,
            combination_adjusted_score=breakdown.combination_adjusted_score,
            age_category=breakdown.age_category,
            age_multiplier=breakdown.age_multiplier,
            age_adjusted_score=breakdown.age_adjusted_score,
            condition_multiplier=breakdown.condition_multiplier,
            final_score=breakdown.final_score,
            applied_conditions=breakdown.applied_conditions,
            matched_combinations=combinations.matches,
            critical_combination=combinations.critical_combination,
            has_critical_combination=combinations.has_critical_combination,
            risk_level=level,
            risk_percentage=percentage,
            recommendations=generate_recommendations(level, age, breakdown.applied_conditions),
            next_assessment_in=next_assessment_interval(level),
            catalog_version=self.catalog.version,
        )


def assess(
    symptoms: Sequence[str],
    age: float,
    conditions: Optional[Sequence[str]] = None,
    additional_info: Optional[Dict[str, Any]] = None,
) -> RiskAssessment:
    """Assess against the built-in catalog."""
    return RiskScoringEngine().assess(symptoms, age, conditions, additional_info)
