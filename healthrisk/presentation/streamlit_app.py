import logging
import re
from typing import List, Tuple

import streamlit as st
from pydantic import ValidationError

from healthrisk.application.schemas import RiskAssessmentRequest
from healthrisk.application.use_cases import RiskAssessmentUseCase
from healthrisk.domain.models import RiskAssessment, RiskLevel
from healthrisk.infrastructure.catalog_loader import CatalogError, CatalogProvider
from healthrisk.infrastructure.config import Settings
from healthrisk.infrastructure.history.memory_store import InMemoryRiskHistoryAdapter


logger = logging.getLogger(__name__)


DISCLAIMER = (
    "⚕️ **DISCLAIMER:** This is NOT medical advice and NOT a diagnosis. "
    "The risk score is a rule-based estimate for educational purposes only. "
    "If you experience emergency symptoms, seek immediate care (call local emergency number)."
)

RISK_COLORS = {
    RiskLevel.CRITICAL: "#DC2626",
    RiskLevel.HIGH: "#EA580C",
    RiskLevel.MODERATE: "#D97706",
    RiskLevel.LOW: "#16A34A",
    RiskLevel.MINIMAL: "#059669",
}
FALLBACK_COLOR = "#6B7280"

_TERM_SPLIT_RE = re.compile(r"[,\n;]")


def risk_color(level) -> str:
    try:
        return RISK_COLORS[RiskLevel(level)]
    except ValueError:
        return FALLBACK_COLOR


def parse_terms(text: str) -> List[str]:
    """Split free text on commas, semicolons and newlines, dropping blanks."""
    if not text:
        return []
    return [part.strip() for part in _TERM_SPLIT_RE.split(text) if part.strip()]


def format_breakdown(assessment: RiskAssessment) -> List[Tuple[str, str]]:
    return [
        ("Base symptom score", f"{assessment.base_score:.1f}"),
        ("Combination multiplier", f"×{assessment.combination_multiplier:.2f}"),
        ("After combinations", f"{assessment.combination_adjusted_score:.1f}"),
        (f"Age factor ({assessment.age_category})", f"×{assessment.age_multiplier:.2f}"),
        ("After age adjustment", f"{assessment.age_adjusted_score:.1f}"),
        ("Conditions multiplier", f"×{assessment.condition_multiplier:.2f}"),
        ("Final score", f"{assessment.final_score:.1f} / 100"),
    ]


def _init_session_state(settings: Settings):
    if "risk_use_case" not in st.session_state:
        st.session_state.catalog_provider = CatalogProvider.from_settings(settings)
        st.session_state.risk_use_case = RiskAssessmentUseCase(
            catalogs=st.session_state.catalog_provider,
            history=InMemoryRiskHistoryAdapter(max_entries_per_user=settings.history_limit),
        )
    if "last_response" not in st.session_state:
        st.session_state.last_response = None


def _render_sidebar(settings: Settings):
    st.sidebar.title("⚙️ Settings")

    catalog = st.session_state.catalog_provider.current()
    st.sidebar.caption(f"**Catalog version:** {catalog.version}")
    if settings.risk_catalog_path:
        st.sidebar.caption(f"**Catalog file:** {settings.risk_catalog_path}")
        if st.sidebar.button("🔄 Reload catalog", use_container_width=True):
            if st.session_state.catalog_provider.reload():
                st.sidebar.success("Catalog reloaded")
            else:
                st.sidebar.error("Catalog reload failed; previous catalog kept")

    st.sidebar.text_input("Your name or ID (optional, keeps history)", key="user_id")


def _render_assessment(response):
    assessment = response.assessment
    color = risk_color(assessment.risk_level)

    st.markdown(
        f"<h2 style='color:{color}'>{assessment.risk_level.value} risk · {assessment.risk_percentage}%</h2>",
        unsafe_allow_html=True,
    )
    st.progress(assessment.risk_percentage / 100)
    st.caption(response.message)

    if assessment.has_critical_combination:
        st.error("⚠️ A dangerous combination of symptoms was detected. Seek emergency care.")

    st.markdown("## 🧮 Score Breakdown")
    for label, value in format_breakdown(assessment):
        st.markdown(f"- **{label}:** {value}")

    if assessment.matched_combinations:
        st.markdown("## 🚨 Symptom Combinations")
        for match in assessment.matched_combinations:
            st.markdown(
                f"- **{match.description}** ({match.urgency.value}, ×{match.multiplier}, "
                f"{match.matched_count}/{match.total_required} symptoms)"
            )

    if assessment.applied_conditions:
        st.markdown("## 🩺 Conditions Considered")
        for condition in assessment.applied_conditions:
            st.markdown(f"- {condition.condition} (×{condition.multiplier})")

    st.markdown("## 📝 Recommendations")
    recs = assessment.recommendations
    for title, items in (
        ("Immediate", recs.immediate),
        ("Next days", recs.short_term),
        ("Lifestyle", recs.lifestyle),
    ):
        if items:
            st.markdown(f"**{title}**")
            for item in items:
                st.markdown(f"- {item}")

    hours = int(assessment.next_assessment_in.total_seconds() // 3600)
    st.info(f"Reassess your symptoms in about {hours} hours.")


def _render_history(use_case: RiskAssessmentUseCase, user_id: str):
    entries = use_case.history_for(user_id, limit=5)
    if not entries:
        return
    st.markdown("## 🕑 Recent Assessments")
    for entry in entries:
        a = entry.assessment
        st.markdown(
            f"- {entry.created_at:%Y-%m-%d %H:%M} · **{a.risk_level.value}** ({a.risk_percentage}%) · "
            f"{', '.join(entry.request.symptoms)}"
        )


def main():
    settings = Settings()
    logging.basicConfig(level=settings.log_level)

    st.set_page_config(
        page_title="Health Risk Assessment",
        page_icon="⚕️",
        layout="centered",
        initial_sidebar_state="expanded",
    )

    try:
        _init_session_state(settings)
    except CatalogError as e:
        logger.exception("Could not load risk catalog: %s", e)
        st.error(f"❌ **Risk catalog could not be loaded**\n\n{e}")
        st.stop()

    _render_sidebar(settings)

    st.markdown("# 🏥 Health Risk Assessment")
    st.info(DISCLAIMER)

    with st.form("risk_form"):
        age = st.number_input("Age (years)", min_value=0.0, max_value=150.0, value=30.0, step=1.0)
        symptoms_text = st.text_area("Symptoms (comma or line separated)", placeholder="e.g., fever, cough")
        conditions_text = st.text_area("Pre-existing conditions (optional)", placeholder="e.g., diabetes")
        gender = st.selectbox("Gender (optional)", ["", "male", "female", "other", "prefer_not_to_say"])
        submitted = st.form_submit_button("Assess risk", use_container_width=True)

    use_case: RiskAssessmentUseCase = st.session_state.risk_use_case
    user_id = (st.session_state.get("user_id") or "").strip() or None

    if submitted:
        try:
            request = RiskAssessmentRequest(
                age=age,
                symptoms=parse_terms(symptoms_text),
                conditions=parse_terms(conditions_text),
                additional_info={"gender": gender} if gender else None,
                user_id=user_id,
            )
        except ValidationError as e:
            for error in e.errors():
                field = ".".join(str(p) for p in error["loc"])
                st.error(f"**{field}:** {error['msg']}")
        else:
            with st.spinner("🔬 Calculating risk..."):
                st.session_state.last_response = use_case.assess(request)

    if st.session_state.last_response is not None:
        _render_assessment(st.session_state.last_response)

    if user_id:
        _render_history(use_case, user_id)


if __name__ == "__main__":
    main()
