from typing import List, Protocol

from healthrisk.application.schemas import RiskAssessmentRequest, RiskHistoryEntry
from healthrisk.domain.models import RiskAssessment, RiskCatalog


class CatalogPort(Protocol):
    def current(self) -> RiskCatalog:
        """
        Returns the active catalog snapshot. Snapshots are never mutated.
        """
        ...


class RiskHistoryPort(Protocol):
    def save(self, user_id: str, request: RiskAssessmentRequest, assessment: RiskAssessment) -> str:
        """
        Persists an assessment and returns its record id.
        """
        ...

    def list_for_user(self, user_id: str, limit: int = 10) -> List[RiskHistoryEntry]:
        ...
