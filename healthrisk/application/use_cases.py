import logging
from typing import Any, Dict, List, Optional

from healthrisk.application.ports import CatalogPort, RiskHistoryPort
from healthrisk.application.schemas import RiskAssessmentRequest, RiskAssessmentResponse, RiskHistoryEntry
from healthrisk.domain.catalog import default_catalog
from healthrisk.domain.engine import RiskScoringEngine
from healthrisk.domain.models import RiskCatalog


logger = logging.getLogger(__name__)


def build_message(level: str, percentage: int) -> str:
    return f"Risk assessment completed. Level: {level} ({percentage}%)"


class RiskAssessmentUseCase:
    def __init__(self, catalogs: Optional[CatalogPort] = None, history: Optional[RiskHistoryPort] = None):
        self.catalogs = catalogs
        self.history = history

    def _catalog(self) -> RiskCatalog:
        if self.catalogs is None:
            return default_catalog()
        return self.catalogs.current()

    def assess(self, request: RiskAssessmentRequest) -> RiskAssessmentResponse:
        # One catalog snapshot per request.
        engine = RiskScoringEngine(self._catalog())
        additional_info = request.additional_info.model_dump(exclude_none=True) if request.additional_info else None
        assessment = engine.assess(request.symptoms, request.age, request.conditions, additional_info)

        record_id = None
        if request.user_id and self.history is not None:
            try:
                record_id = self.history.save(request.user_id, request, assessment)
            except Exception as e:
                logger.exception("Failed to save risk assessment for user %s: %s", request.user_id, e)

        return RiskAssessmentResponse(
            id=record_id,
            assessment=assessment,
            message=build_message(assessment.risk_level.value, assessment.risk_percentage),
        )

    def history_for(self, user_id: str, limit: int = 10) -> List[RiskHistoryEntry]:
        if self.history is None:
            return []
        return self.history.list_for_user(user_id, limit=limit)

    def symptom_weights(self) -> Dict[str, Any]:
        catalog = self._catalog()
        return {
            "weights": catalog.weights_by_symptom(),
            "default_weight": catalog.default_weight,
            "version": catalog.version,
            "description": "Symptom weights used in risk assessment algorithm",
        }
