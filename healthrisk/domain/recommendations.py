import re
from datetime import timedelta
from typing import Dict, List, Sequence, Tuple

from .models import AppliedCondition, Recommendations, RiskLevel


# level -> (immediate, short term)
LEVEL_RECOMMENDATIONS: Dict[RiskLevel, Tuple[Tuple[str, ...], Tuple[str, ...]]] = {
    RiskLevel.CRITICAL: (
        (
            "Seek immediate emergency medical attention",
            "Call emergency services or go to the nearest emergency room",
            "Do not drive yourself; call an ambulance or have someone drive you",
        ),
        ("Bring a list of your symptoms, conditions and medications with you",),
    ),
    RiskLevel.HIGH: (
        (
            "Contact your doctor today or visit urgent care",
            "Monitor symptoms closely",
        ),
        ("Schedule a follow-up appointment within 24-48 hours",),
    ),
    RiskLevel.MODERATE: (
        ("Consider scheduling a doctor appointment",),
        (
            "Monitor symptoms for 24-48 hours",
            "Seek medical care if symptoms worsen",
        ),
    ),
    RiskLevel.LOW: (
        (),
        (
            "Monitor symptoms",
            "Consider self-care measures",
        ),
    ),
    RiskLevel.MINIMAL: (
        (),
        (
            "Rest and keep observing your symptoms",
            "Reassess if new symptoms appear or existing ones change",
        ),
    ),
}

INFANT_RECOMMENDATION = "Infants and toddlers under 2 require prompt medical evaluation"
ELDERLY_RECOMMENDATION = "Adults over 65 should monitor symptoms closely and seek care early if they change"

# Keywords are matched as whole words in the normalized names of the applied conditions.
CONDITION_ADVICE: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("diabetes", "prediabetes"), "Monitor blood sugar levels closely"),
    (("hypertension", "high blood pressure"), "Monitor blood pressure regularly"),
    (
        ("heart", "coronary", "cardiomyopathy", "arrhythmia", "cardiovascular"),
        "Avoid strenuous activity until cleared by your doctor",
    ),
    (
        ("asthma", "copd", "emphysema", "bronchitis", "lung"),
        "Keep your inhaler or prescribed respiratory medication within reach",
    ),
    (("pregnancy",), "Tell your obstetric care provider about any new symptoms"),
    (
        ("immunocompromised", "chemotherapy", "organ transplant", "hivaids"),
        "Avoid crowded places and contact with people who are unwell",
    ),
    (("kidney", "dialysis"), "Follow your fluid intake guidance and report reduced urine output"),
)

_CONDITION_ADVICE_PATTERNS = [
    (re.compile(r"\b(?:%s)\b" % "|".join(re.escape(k) for k in keywords)), advice)
    for keywords, advice in CONDITION_ADVICE
]

GENERAL_LIFESTYLE = (
    "Stay hydrated",
    "Get adequate rest",
    "Maintain a healthy diet",
)

NEXT_ASSESSMENT_INTERVALS = {
    RiskLevel.CRITICAL: timedelta(hours=4),
    RiskLevel.HIGH: timedelta(hours=12),
    RiskLevel.MODERATE: timedelta(days=1),
    RiskLevel.LOW: timedelta(days=3),
    RiskLevel.MINIMAL: timedelta(days=7),
}


def generate_recommendations(
    level: RiskLevel, age: float, applied_conditions: Sequence[AppliedCondition] = ()
) -> Recommendations:
    immediate_base, short_term_base = LEVEL_RECOMMENDATIONS[level]
    immediate = list(immediate_base)
    short_term = list(short_term_base)

    if age < 2:
        immediate.insert(0, INFANT_RECOMMENDATION)
    elif age > 65:
        short_term.append(ELDERLY_RECOMMENDATION)

    lifestyle: List[str] = []
    names = [c.normalized for c in applied_conditions]
    for pattern, advice in _CONDITION_ADVICE_PATTERNS:
        if any(pattern.search(name) for name in names):
            lifestyle.append(advice)
    lifestyle.extend(GENERAL_LIFESTYLE)

    return Recommendations(immediate=immediate, short_term=short_term, lifestyle=lifestyle)


def next_assessment_interval(level: RiskLevel) -> timedelta:
    """How long to wait before the patient should be reassessed."""
    return NEXT_ASSESSMENT_INTERVALS[level]
