import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .models import (
    AgeBand,
    AppliedCondition,
    CombinationAnalysis,
    CombinationMatch,
    RiskCatalog,
    RiskLevel,
    ScoreBreakdown,
    SymptomDetail,
    Urgency,
)
from .normalization import normalize_term


logger = logging.getLogger(__name__)


# A critical combination forces CRITICAL once the score reaches this value.
CRITICAL_OVERRIDE_SCORE = 25


@dataclass(frozen=True)
class RiskThresholds:
    critical: float
    high: float
    moderate: float
    low: float


DEFAULT_THRESHOLDS = RiskThresholds(critical=45, high=25, moderate=12, low=5)
ELDERLY_THRESHOLDS = RiskThresholds(critical=40, high=22, moderate=11, low=4.5)
VERY_ELDERLY_THRESHOLDS = RiskThresholds(critical=35, high=20, moderate=10, low=4)
YOUNG_CHILD_THRESHOLDS = RiskThresholds(critical=35, high=20, moderate=10, low=4)


# level -> (percentage from, percentage to)
PERCENTAGE_BANDS = {
    RiskLevel.MINIMAL: (0, 15),
    RiskLevel.LOW: (15, 25),
    RiskLevel.MODERATE: (25, 50),
    RiskLevel.HIGH: (50, 80),
    RiskLevel.CRITICAL: (80, 100),
}

SCORE_CEILING = 100.0


def symptom_weight(symptom: str, catalog: RiskCatalog) -> float:
    return catalog.weight_for(normalize_term(symptom))


def classify_age(age: float, catalog: RiskCatalog) -> AgeBand:
    bands = catalog.age_bands
    if age < bands[0].lower_bound:
        return bands[0]
    for band in bands:
        if band.contains(age):
            return band
    return bands[-1]


def aggregate_conditions(
    conditions: Iterable[str], catalog: RiskCatalog
) -> Tuple[float, List[AppliedCondition]]:
    """
    Compound the multipliers of every recognised condition.

    Args:
        conditions: Condition names as supplied by the patient
        catalog: Active risk catalog

    Returns:
        Tuple of (product of multipliers, conditions that matched the catalog)
    """
    product = 1.0
    applied: List[AppliedCondition] = []
    for condition in conditions:
        normalized = normalize_term(condition)
        multiplier = catalog.condition_multiplier_for(normalized)
        if multiplier is None:
            continue
        product *= multiplier
        applied.append(AppliedCondition(condition=condition, normalized=normalized, multiplier=multiplier))
    return product, applied


def _symptom_present(required: str, reported: Sequence[str]) -> bool:
    return any(required in symptom or symptom in required for symptom in reported)


def detect_combinations(symptoms: Iterable[str], catalog: RiskCatalog) -> CombinationAnalysis:
    """
    Find every dangerous symptom combination present in the report.

    A required symptom counts as present when it contains, or is contained in,
    a reported symptom after normalization. The highest multiplier among the
    matches is the one applied to the score.
    """
    reported = [s for s in (normalize_term(symptom) for symptom in symptoms) if s]
    matches: List[CombinationMatch] = []
    highest_multiplier = 1.0
    critical_combination: Optional[str] = None

    for pattern in catalog.combinations:
        matched_count = sum(1 for required in pattern.required_symptoms if _symptom_present(required, reported))
        if matched_count < pattern.match_threshold:
            continue

        total = len(pattern.required_symptoms)
        matches.append(
            CombinationMatch(
                name=pattern.name,
                required_symptoms=pattern.required_symptoms,
                multiplier=pattern.multiplier,
                urgency=pattern.urgency,
                description=pattern.description,
                matched_count=matched_count,
                total_required=total,
                confidence=matched_count / total,
            )
        )
        if pattern.multiplier > highest_multiplier:
            highest_multiplier = pattern.multiplier
            critical_combination = pattern.name

    return CombinationAnalysis(
        matches=matches,
        highest_multiplier=highest_multiplier,
        critical_combination=critical_combination,
        has_critical_combination=any(m.urgency is Urgency.CRITICAL for m in matches),
    )


def aggregate_score(
    symptoms: Sequence[str], age: float, conditions: Sequence[str], catalog: RiskCatalog
) -> ScoreBreakdown:
    details = [
        SymptomDetail(original=s, normalized=normalize_term(s), weight=symptom_weight(s, catalog))
        for s in symptoms
    ]
    # Repeated symptoms are counted each time they are reported.
    base_score = sum((d.weight for d in details), 0.0)

    combinations = detect_combinations(symptoms, catalog)
    combination_adjusted = base_score * combinations.highest_multiplier

    band = classify_age(age, catalog)
    age_adjusted = combination_adjusted * band.multiplier

    condition_multiplier, applied = aggregate_conditions(conditions, catalog)
    final_score = age_adjusted * condition_multiplier
    if combinations.has_critical_combination:
        final_score *= catalog.critical_boost
    final_score = min(final_score, catalog.max_score)

    logger.debug(
        "Score stages: base=%.2f combination=%.2f age=%.2f final=%.2f",
        base_score, combination_adjusted, age_adjusted, final_score,
    )

    return ScoreBreakdown(
        symptoms=details,
        base_score=base_score,
        combination_multiplier=combinations.highest_multiplier,
        combination_adjusted_score=combination_adjusted,
        age_category=band.name,
        age_multiplier=band.multiplier,
        age_adjusted_score=age_adjusted,
        condition_multiplier=condition_multiplier,
        applied_conditions=applied,
        final_score=final_score,
        combinations=combinations,
    )


def thresholds_for_age(age: Optional[float]) -> RiskThresholds:
    if age is None:
        return DEFAULT_THRESHOLDS
    if age >= 75:
        return VERY_ELDERLY_THRESHOLDS
    if age >= 65:
        return ELDERLY_THRESHOLDS
    if age < 5:
        return YOUNG_CHILD_THRESHOLDS
    return DEFAULT_THRESHOLDS


def classify_risk(score: float, has_critical_combination: bool = False, age: Optional[float] = None) -> RiskLevel:
    if has_critical_combination and score >= CRITICAL_OVERRIDE_SCORE:
        return RiskLevel.CRITICAL

    thresholds = thresholds_for_age(age)
    if score >= thresholds.critical:
        return RiskLevel.CRITICAL
    if score >= thresholds.high:
        return RiskLevel.HIGH
    if score >= thresholds.moderate:
        return RiskLevel.MODERATE
    if score >= thresholds.low:
        return RiskLevel.LOW
    return RiskLevel.MINIMAL


def level_score_range(
    level: RiskLevel, age: Optional[float] = None, has_critical_combination: bool = False
) -> Tuple[float, float]:
    """
    Score sub-range that classifies as ``level`` for this patient.

    The cut-points are the age-adjusted thresholds used by ``classify_risk``.
    When a critical combination matched, CRITICAL starts at the override
    floor instead of the regular critical threshold.
    """
    thresholds = thresholds_for_age(age)
    critical_from = thresholds.critical
    if has_critical_combination:
        critical_from = min(critical_from, CRITICAL_OVERRIDE_SCORE)
    cut_points = (
        0.0,
        thresholds.low,
        thresholds.moderate,
        min(thresholds.high, critical_from),
        critical_from,
        SCORE_CEILING,
    )
    return cut_points[level.rank], cut_points[level.rank + 1]


def risk_percentage(
    score: float,
    level: RiskLevel,
    age: Optional[float] = None,
    has_critical_combination: bool = False,
) -> int:
    """Map a score onto 0-100 by interpolating within the level's score range."""
    score_from, score_to = level_score_range(level, age, has_critical_combination)
    pct_from, pct_to = PERCENTAGE_BANDS[level]
    if score_to > score_from:
        value = pct_from + (score - score_from) / (score_to - score_from) * (pct_to - pct_from)
    else:
        value = pct_from
    value = min(pct_to, max(pct_from, value))
    # Round half up.
    return math.floor(value + 0.5)
