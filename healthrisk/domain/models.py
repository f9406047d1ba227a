from datetime import timedelta
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from .normalization import normalize_term


DEFAULT_SYMPTOM_WEIGHT = 3.0


class RiskLevel(str, Enum):
    MINIMAL = "MINIMAL"
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return _RISK_LEVEL_ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank >= other.rank


_RISK_LEVEL_ORDER = [
    RiskLevel.MINIMAL,
    RiskLevel.LOW,
    RiskLevel.MODERATE,
    RiskLevel.HIGH,
    RiskLevel.CRITICAL,
]


class Urgency(str, Enum):
    HIGH = "high"
    CRITICAL = "critical"


class SymptomWeight(BaseModel):
    model_config = ConfigDict(frozen=True)

    symptom: str
    weight: float = Field(..., ge=1, le=10)

    @field_validator("symptom")
    @classmethod
    def normalize_symptom(cls, v: str) -> str:
        v = normalize_term(v)
        if not v:
            raise ValueError("Symptom name cannot be empty")
        return v


class AgeBand(BaseModel):
    """A half-open age range [lower_bound, upper_bound); upper_bound None means open-ended."""

    model_config = ConfigDict(frozen=True)

    name: str
    lower_bound: float = Field(..., ge=0)
    upper_bound: Optional[float] = None
    multiplier: float = Field(..., gt=0)

    @model_validator(mode="after")
    def check_bounds(self):
        if self.upper_bound is not None and self.upper_bound <= self.lower_bound:
            raise ValueError(f"Age band '{self.name}' upper bound must be above its lower bound")
        return self

    def contains(self, age: float) -> bool:
        if age < self.lower_bound:
            return False
        return self.upper_bound is None or age < self.upper_bound


class ConditionMultiplier(BaseModel):
    model_config = ConfigDict(frozen=True)

    condition: str
    multiplier: float = Field(..., ge=1.0)

    @field_validator("condition")
    @classmethod
    def normalize_condition(cls, v: str) -> str:
        v = normalize_term(v)
        if not v:
            raise ValueError("Condition name cannot be empty")
        return v


class CombinationPattern(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    required_symptoms: Tuple[str, ...] = Field(..., min_length=2)
    match_threshold: int
    multiplier: float = Field(..., gt=1.0)
    urgency: Urgency
    description: str

    @model_validator(mode="before")
    @classmethod
    def default_threshold(cls, data: Any):
        # Three or more symptoms: any two of them are enough. Smaller patterns need all.
        if isinstance(data, dict) and data.get("match_threshold") is None:
            required = data.get("required_symptoms") or ()
            data = dict(data)
            data["match_threshold"] = 2 if len(required) >= 3 else len(required)
        return data

    @field_validator("required_symptoms")
    @classmethod
    def normalize_required(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        normalized = tuple(normalize_term(s) for s in v)
        if not all(normalized):
            raise ValueError("Combination symptoms cannot be empty")
        return normalized

    @model_validator(mode="after")
    def check_threshold(self):
        if not 1 <= self.match_threshold <= len(self.required_symptoms):
            raise ValueError(
                f"Combination '{self.name}' threshold must be between 1 and {len(self.required_symptoms)}"
            )
        return self


class RiskCatalog(BaseModel):
    """Immutable snapshot of every table the scoring engine reads."""

    model_config = ConfigDict(frozen=True)

    version: str = "1.0"
    default_weight: float = Field(DEFAULT_SYMPTOM_WEIGHT, ge=1, le=10)
    critical_boost: float = Field(1.2, ge=1.0)
    max_score: float = Field(100.0, gt=0, le=100)
    symptom_weights: Tuple[SymptomWeight, ...] = ()
    age_bands: Tuple[AgeBand, ...] = Field(..., min_length=1)
    condition_multipliers: Tuple[ConditionMultiplier, ...] = ()
    combinations: Tuple[CombinationPattern, ...] = ()

    _weights: Dict[str, float] = PrivateAttr(default_factory=dict)
    _conditions: Dict[str, float] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def check_age_bands(self):
        bands = self.age_bands
        if bands[0].lower_bound != 0:
            raise ValueError("The first age band must start at 0")
        for current, following in zip(bands, bands[1:]):
            if current.upper_bound != following.lower_bound:
                raise ValueError(
                    f"Age bands '{current.name}' and '{following.name}' are not contiguous"
                )
        if bands[-1].upper_bound is not None:
            raise ValueError("The last age band must be open-ended")
        return self

    def model_post_init(self, __context: Any) -> None:
        # Later entries win, so a catalog may override an earlier weight.
        self._weights = {entry.symptom: entry.weight for entry in self.symptom_weights}
        self._conditions = {entry.condition: entry.multiplier for entry in self.condition_multipliers}

    def weight_for(self, normalized_symptom: str) -> float:
        return self._weights.get(normalized_symptom, self.default_weight)

    def condition_multiplier_for(self, normalized_condition: str) -> Optional[float]:
        return self._conditions.get(normalized_condition)

    def weights_by_symptom(self) -> Dict[str, float]:
        return dict(self._weights)


class SymptomDetail(BaseModel):
    model_config = ConfigDict(frozen=True)

    original: str
    normalized: str
    weight: float


class AppliedCondition(BaseModel):
    model_config = ConfigDict(frozen=True)

    condition: str
    normalized: str
    multiplier: float


class CombinationMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    required_symptoms: Tuple[str, ...]
    multiplier: float
    urgency: Urgency
    description: str
    matched_count: int
    total_required: int
    confidence: float = Field(..., ge=0.0, le=1.0)


class CombinationAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    matches: List[CombinationMatch] = []
    highest_multiplier: float = 1.0
    critical_combination: Optional[str] = None
    has_critical_combination: bool = False


class ScoreBreakdown(BaseModel):
    """Every intermediate stage of the score, kept for explainability."""

    model_config = ConfigDict(frozen=True)

    symptoms: List[SymptomDetail]
    base_score: float
    combination_multiplier: float
    combination_adjusted_score: float
    age_category: str
    age_multiplier: float
    age_adjusted_score: float
    condition_multiplier: float
    applied_conditions: List[AppliedCondition]
    final_score: float = Field(..., ge=0)
    combinations: CombinationAnalysis


class Recommendations(BaseModel):
    model_config = ConfigDict(frozen=True)

    immediate: List[str] = []
    short_term: List[str] = []
    lifestyle: List[str] = []


class RiskAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    age: float
    conditions: List[str] = []
    additional_info: Dict[str, Any] = {}
    symptoms: List[SymptomDetail]

    base_score: float
    combination_multiplier: float
    combination_adjusted_score: float
    age_category: str
    age_multiplier: float
    age_adjusted_score: float
    condition_multiplier: float
    final_score: float = Field(..., ge=0, le=100)

    applied_conditions: List[AppliedCondition] = []
    matched_combinations: List[CombinationMatch] = []
    critical_combination: Optional[str] = None
    has_critical_combination: bool = False

    risk_level: RiskLevel
    risk_percentage: int = Field(..., ge=0, le=100)
    recommendations: Recommendations
    next_assessment_in: timedelta
    catalog_version: str
