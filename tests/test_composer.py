import httpx
import pytest
from sqlalchemy import func, select

from app.diagnosis_engine.composer import (
    DiagnosisComposer,
    build_search_query,
    compose_narrative,
    generate_treatment_recommendations,
)
from app.diagnosis_engine.schemas import SearchResult
from app.diagnosis_engine.search_client import SearchClient
from app.shared.exceptions import MissingInput
from app.system_models.diagnosis_model.diagnosis_model import Diagnosis

GENERIC_TEMPLATE = """Based on the identified condition: leaf rust, here are general recommendations:

1. **Immediate Action**: Remove affected plant parts and dispose of them properly
2. **Prevention**: Ensure proper spacing between plants for air circulation
3. **Treatment**: Consider organic fungicides or pesticides appropriate for the condition
4. **Monitoring**: Check plants regularly for early detection
5. **Soil Management**: Ensure proper drainage and soil health

Please consult with local agricultural extension officers for specific treatment options available in your area."""


class TestNarrative:
    def test_both_inputs(self):
        assert (
            compose_narrative("leaves turning yellow", "nitrogen deficiency")
            == "Symptoms reported: leaves turning yellow. Visual analysis suggests: nitrogen deficiency."
        )

    def test_voice_only_notes_image_pending(self):
        narrative = compose_narrative("leaves turning yellow", None)
        assert narrative.startswith("Symptoms reported: leaves turning yellow. Awaiting image input")

    def test_image_only_notes_symptoms_pending(self):
        assert (
            compose_narrative(None, "Tomato Late Blight")
            == "Visual analysis suggests: Tomato Late Blight. Awaiting verbal symptoms."
        )

    def test_neither_input(self):
        with pytest.raises(MissingInput):
            compose_narrative(None, None)

    def test_deterministic(self):
        assert compose_narrative("wilting", "blight") == compose_narrative("wilting", "blight")

    def test_search_query(self):
        assert build_search_query("wilting", "blight") == "wilting blight"
        assert build_search_query("wilting", None) == "wilting"
        assert build_search_query(None, "blight") == "blight"


class TestRecommendations:
    def test_generic_template_when_no_results(self):
        assert generate_treatment_recommendations([], "leaf rust") == GENERIC_TEMPLATE

    def test_itemized_results_in_received_order(self):
        results = [
            SearchResult(title="Zeta guide", snippet="Spray copper.", link="https://z.example"),
            SearchResult(title="Alpha guide", snippet="Rotate crops.", link="https://a.example"),
        ]

        text = generate_treatment_recommendations(results, "blight")

        assert text.startswith("**Treatment Recommendations for blight:**\n\n**1. Zeta guide**\n")
        assert "**1. Zeta guide**\nSpray copper.\nSource: https://z.example\n\n**2. Alpha guide**" in text
        assert text.index("Zeta guide") < text.index("Alpha guide")
        assert text.endswith(
            "**Additional Recommendations:**\n"
            "• Consult local agricultural extension services\n"
            "• Consider integrated pest management approaches\n"
            "• Monitor weather conditions that may worsen the condition\n"
            "• Keep records of treatments applied for future reference"
        )
        assert text.count("• ") == 4


def _search_client(service_settings, make_transport, handler):
    transport = make_transport(handler)
    return SearchClient(service_settings, transport), transport


class TestDiagnosisComposer:
    @pytest.mark.asyncio
    async def test_both_inputs_verbatim_in_combined_result(self, db_session, service_settings, make_transport):
        items = [{"title": "Blight control", "snippet": "Use resistant seed.", "link": "https://b.example"}]
        search, transport = _search_client(
            service_settings, make_transport, lambda request: httpx.Response(200, json={"items": items})
        )

        composed = await DiagnosisComposer(search).create_diagnosis(
            db_session, "brown spots on leaves", "Tomato Early Blight", "tw"
        )

        diagnosis = composed.diagnosis
        assert "brown spots on leaves" in diagnosis.combined_result
        assert "Tomato Early Blight" in diagnosis.combined_result
        assert diagnosis.combined_result.startswith(
            "Symptoms reported: brown spots on leaves. Visual analysis suggests: Tomato Early Blight.\n\n"
        )
        assert diagnosis.combined_result.endswith(diagnosis.treatment_recommendations)
        assert "**1. Blight control**" in diagnosis.treatment_recommendations
        assert composed.search_results_count == 1
        assert diagnosis.language == "tw"
        assert diagnosis.id
        assert diagnosis.created_at is not None
        assert transport.requests[0].url.params["q"].startswith("brown spots on leaves Tomato Early Blight ")

    @pytest.mark.asyncio
    async def test_search_failure_falls_back_to_template(self, db_session, service_settings, make_transport):
        def handler(request):
            raise httpx.ConnectError("offline", request=request)

        search, _ = _search_client(service_settings, make_transport, handler)

        composed = await DiagnosisComposer(search).create_diagnosis(db_session, None, "leaf rust", "ee")

        assert composed.search_results_count == 0
        assert composed.diagnosis.treatment_recommendations == GENERIC_TEMPLATE
        assert composed.diagnosis.combined_result == (
            "Visual analysis suggests: leaf rust. Awaiting verbal symptoms.\n\n" + GENERIC_TEMPLATE
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("voice,image", [(None, None), ("", ""), ("   ", None)])
    async def test_missing_input_never_reaches_search_or_store(
        self, db_session, service_settings, make_transport, voice, image
    ):
        search, transport = _search_client(
            service_settings, make_transport, lambda request: httpx.Response(200, json={"items": []})
        )

        with pytest.raises(MissingInput):
            await DiagnosisComposer(search).create_diagnosis(db_session, voice, image, "tw")

        assert transport.calls == 0
        count = (await db_session.execute(select(func.count()).select_from(Diagnosis))).scalar_one()
        assert count == 0

    @pytest.mark.asyncio
    async def test_narrative_identical_across_calls(self, db_session, service_settings, make_transport):
        search, _ = _search_client(
            service_settings, make_transport, lambda request: httpx.Response(200, json={"items": []})
        )
        composer = DiagnosisComposer(search)

        first = await composer.create_diagnosis(db_session, "wilting", "Fusarium wilt", "tw")
        second = await composer.create_diagnosis(db_session, "wilting", "Fusarium wilt", "tw")

        assert first.diagnosis.id != second.diagnosis.id
        assert first.diagnosis.combined_result == second.diagnosis.combined_result

    @pytest.mark.asyncio
    async def test_inputs_are_trimmed(self, db_session, service_settings, make_transport):
        search, _ = _search_client(
            service_settings, make_transport, lambda request: httpx.Response(200, json={"items": []})
        )

        composed = await DiagnosisComposer(search).create_diagnosis(
            db_session, "  leaves turning yellow ", "  ", "tw"
        )

        assert composed.diagnosis.voice_input == "leaves turning yellow"
        assert composed.diagnosis.image_result is None
        assert composed.diagnosis.combined_result.startswith(
            "Symptoms reported: leaves turning yellow. Awaiting image input"
        )
