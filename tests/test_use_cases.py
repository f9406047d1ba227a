import logging

import pytest

from healthrisk.application.schemas import RiskAssessmentRequest, RiskAssessmentResponse
from healthrisk.application.use_cases import RiskAssessmentUseCase
from healthrisk.domain.catalog import build_catalog
from healthrisk.domain.models import RiskAssessment, RiskLevel


class DummyHistory:
    def __init__(self):
        self.saved = []

    def save(self, user_id, request, assessment):
        self.saved.append((user_id, request, assessment))
        return f"record-{len(self.saved)}"

    def list_for_user(self, user_id, limit=10):
        return [entry for entry in self.saved if entry[0] == user_id][:limit]


class FailingHistory:
    def save(self, user_id, request, assessment):
        raise RuntimeError("storage offline")

    def list_for_user(self, user_id, limit=10):
        return []


class DummyCatalogs:
    def __init__(self, catalog):
        self.catalog = catalog
        self.calls = 0

    def current(self):
        self.calls += 1
        return self.catalog


def test_assess_returns_response():
    usecase = RiskAssessmentUseCase()
    request = RiskAssessmentRequest(age=45, symptoms=["chest pain", "difficulty breathing"])
    response = usecase.assess(request)
    assert isinstance(response, RiskAssessmentResponse)
    assert isinstance(response.assessment, RiskAssessment)
    assert response.assessment.risk_level == RiskLevel.CRITICAL
    assert response.id is None
    assert response.message == (
        f"Risk assessment completed. Level: CRITICAL ({response.assessment.risk_percentage}%)"
    )


def test_additional_info_reaches_assessment():
    usecase = RiskAssessmentUseCase()
    request = RiskAssessmentRequest(age=30, symptoms=["cough"], additional_info={"gender": "male"})
    response = usecase.assess(request)
    assert response.assessment.additional_info == {"gender": "male"}


def test_saves_history_for_known_user():
    history = DummyHistory()
    usecase = RiskAssessmentUseCase(history=history)
    response = usecase.assess(RiskAssessmentRequest(age=30, symptoms=["cough"], user_id="user-1"))
    assert response.id == "record-1"
    assert history.saved[0][0] == "user-1"
    assert history.saved[0][2] == response.assessment


def test_anonymous_requests_are_not_saved():
    history = DummyHistory()
    usecase = RiskAssessmentUseCase(history=history)
    usecase.assess(RiskAssessmentRequest(age=30, symptoms=["cough"]))
    assert history.saved == []


def test_history_failure_keeps_assessment(caplog):
    usecase = RiskAssessmentUseCase(history=FailingHistory())
    with caplog.at_level(logging.ERROR):
        response = usecase.assess(RiskAssessmentRequest(age=30, symptoms=["cough"], user_id="user-1"))
    assert response.id is None
    assert response.assessment.risk_level is not None
    assert "Failed to save risk assessment" in caplog.text


def test_uses_current_catalog_snapshot():
    catalogs = DummyCatalogs(build_catalog(version="snapshot-7"))
    usecase = RiskAssessmentUseCase(catalogs=catalogs)
    response = usecase.assess(RiskAssessmentRequest(age=30, symptoms=["cough"]))
    assert response.assessment.catalog_version == "snapshot-7"
    assert catalogs.calls == 1


def test_history_for():
    history = DummyHistory()
    usecase = RiskAssessmentUseCase(history=history)
    for _ in range(3):
        usecase.assess(RiskAssessmentRequest(age=30, symptoms=["cough"], user_id="user-1"))
    assert len(usecase.history_for("user-1", limit=2)) == 2
    assert usecase.history_for("someone-else") == []
    assert RiskAssessmentUseCase().history_for("user-1") == []


def test_symptom_weights_view():
    usecase = RiskAssessmentUseCase()
    view = usecase.symptom_weights()
    assert view["weights"]["chest pain"] == 9.5
    assert view["default_weight"] == 3
    assert view["version"] == "1.0"
    assert "description" in view


@pytest.mark.parametrize("symptoms,age,expected", [
    (["runny nose"], 25, RiskLevel.MINIMAL),
    (["severe headache", "stiff neck"], 40, RiskLevel.CRITICAL),
])
def test_levels_end_to_end(symptoms, age, expected):
    response = RiskAssessmentUseCase().assess(RiskAssessmentRequest(age=age, symptoms=symptoms))
    assert response.assessment.risk_level == expected
