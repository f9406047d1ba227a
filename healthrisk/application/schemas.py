from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from healthrisk.domain.models import RiskAssessment


MAX_TERM_LENGTH = 100


class Location(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class AdditionalInfo(BaseModel):
    """Optional patient context. Carried through to the result, never scored."""

    model_config = ConfigDict(extra="allow")

    gender: Optional[Literal["male", "female", "other", "prefer_not_to_say"]] = None
    smoker: Optional[bool] = None
    physically_active: Optional[bool] = None


class RiskAssessmentRequest(BaseModel):
    age: float = Field(..., ge=0, le=150)
    symptoms: List[str] = Field(..., min_length=1)
    conditions: List[str] = []
    location: Optional[Location] = None
    additional_info: Optional[AdditionalInfo] = None
    user_id: Optional[str] = None

    @field_validator("symptoms", "conditions")
    @classmethod
    def validate_terms(cls, v: List[str]):
        cleaned = []
        for item in v:
            item = item.strip()
            if not 1 <= len(item) <= MAX_TERM_LENGTH:
                raise ValueError(f"Each entry must be between 1 and {MAX_TERM_LENGTH} characters")
            cleaned.append(item)
        return cleaned


class RiskAssessmentResponse(BaseModel):
    id: Optional[str] = None
    assessment: RiskAssessment
    message: str


class RiskHistoryEntry(BaseModel):
    id: str
    user_id: str
    created_at: datetime
    request: RiskAssessmentRequest
    assessment: RiskAssessment
