import threading
from datetime import datetime, timezone
from typing import Dict, List
from uuid import uuid4

from healthrisk.application.ports import RiskHistoryPort
from healthrisk.application.schemas import RiskAssessmentRequest, RiskHistoryEntry
from healthrisk.domain.models import RiskAssessment
from healthrisk.infrastructure.config import DEFAULT_HISTORY_LIMIT


class InMemoryRiskHistoryAdapter(RiskHistoryPort):
    """Keeps the most recent assessments per user in process memory."""

    def __init__(self, max_entries_per_user: int = DEFAULT_HISTORY_LIMIT):
        self.max_entries_per_user = max_entries_per_user
        self._entries: Dict[str, List[RiskHistoryEntry]] = {}
        self._lock = threading.Lock()

    def save(self, user_id: str, request: RiskAssessmentRequest, assessment: RiskAssessment) -> str:
        entry = RiskHistoryEntry(
            id=uuid4().hex,
            user_id=user_id,
            created_at=datetime.now(timezone.utc),
            request=request,
            assessment=assessment,
        )
        with self._lock:
            entries = self._entries.setdefault(user_id, [])
            entries.insert(0, entry)
            del entries[self.max_entries_per_user:]
        return entry.id

    def list_for_user(self, user_id: str, limit: int = 10) -> List[RiskHistoryEntry]:
        with self._lock:
            return list(self._entries.get(user_id, [])[:limit])
