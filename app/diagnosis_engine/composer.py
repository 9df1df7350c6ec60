# app/diagnosis_engine/composer.py
"""
Diagnosis Composer

Pipeline:
1. Merge whichever of voice input / image result is present into a narrative
2. Search the web for treatment references (optional, never fatal)
3. Build the recommendations block (template or itemized citations)
4. Persist narrative + recommendations as one Diagnosis
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.diagnosis_engine.schemas import SearchResult
from app.diagnosis_engine.search_client import SearchClient, search_client as default_search_client
from app.shared.exceptions import MissingInput
from app.system_models.diagnosis_model.diagnosis_model import Diagnosis
from app.system_models.diagnosis_model.diagnosis_schemas import DiagnosisCreate
from app.system_services import diagnosis_store

logger = logging.getLogger(__name__)

GENERIC_RECOMMENDATIONS = """Based on the identified condition: {disease_info}, here are general recommendations:

1. **Immediate Action**: Remove affected plant parts and dispose of them properly
2. **Prevention**: Ensure proper spacing between plants for air circulation
3. **Treatment**: Consider organic fungicides or pesticides appropriate for the condition
4. **Monitoring**: Check plants regularly for early detection
5. **Soil Management**: Ensure proper drainage and soil health

Please consult with local agricultural extension officers for specific treatment options available in your area."""

ADDITIONAL_RECOMMENDATIONS = (
    "\n**Additional Recommendations:**\n"
    "• Consult local agricultural extension services\n"
    "• Consider integrated pest management approaches\n"
    "• Monitor weather conditions that may worsen the condition\n"
    "• Keep records of treatments applied for future reference"
)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def compose_narrative(voice_input: Optional[str], image_result: Optional[str]) -> str:
    """Merge the available inputs into the narrative shown before recommendations."""
    if voice_input and image_result:
        return f"Symptoms reported: {voice_input}. Visual analysis suggests: {image_result}."
    if voice_input:
        return f"Symptoms reported: {voice_input}. Awaiting image input for complete diagnosis."
    if image_result:
        return f"Visual analysis suggests: {image_result}. Awaiting verbal symptoms."
    raise MissingInput("Either voiceInput or imageResult must be provided.")


def build_search_query(voice_input: Optional[str], image_result: Optional[str]) -> str:
    return " ".join(part for part in (voice_input, image_result) if part)


def generate_treatment_recommendations(
    search_results: List[SearchResult], disease_info: str
) -> str:
    """Generic advisory when search found nothing, itemized citations otherwise."""
    if not search_results:
        return GENERIC_RECOMMENDATIONS.format(disease_info=disease_info)

    lines = [f"**Treatment Recommendations for {disease_info}:**\n"]
    # Upstream order is authoritative
    for index, result in enumerate(search_results, start=1):
        lines.append(f"**{index}. {result.title}**")
        lines.append(result.snippet)
        lines.append(f"Source: {result.link}\n")
    return "\n".join(lines) + "\n" + ADDITIONAL_RECOMMENDATIONS


@dataclass
class ComposedDiagnosis:
    diagnosis: Diagnosis
    search_results_count: int


class DiagnosisComposer:
    """Builds and stores one Diagnosis from whatever inputs are present."""

    def __init__(self, search_client: Optional[SearchClient] = None):
        self.search_client = search_client or default_search_client

    async def create_diagnosis(
        self,
        db: AsyncSession,
        voice_input: Optional[str],
        image_result: Optional[str],
        language: str,
    ) -> ComposedDiagnosis:
        voice_input = _clean(voice_input)
        image_result = _clean(image_result)

        logger.info(f"\n{'='*70}")
        logger.info("COMPOSE DIAGNOSIS")
        logger.info(f"{'='*70}")
        logger.info(f"🎙️  Voice input: {'yes' if voice_input else 'no'}")
        logger.info(f"🖼️  Image result: {'yes' if image_result else 'no'}")
        logger.info(f"🌐 Language: {language}")

        # Raises MissingInput before search or storage is touched
        narrative = compose_narrative(voice_input, image_result)

        search_results = await self.search_client.search_treatment_info(
            build_search_query(voice_input, image_result)
        )
        if not search_results:
            logger.warning("⚠️  No search results, using generic recommendations")

        recommendations = generate_treatment_recommendations(
            search_results, image_result or voice_input
        )

        diagnosis = await diagnosis_store.create_diagnosis(
            db,
            DiagnosisCreate(
                voice_input=voice_input,
                image_result=image_result,
                combined_result=f"{narrative}\n\n{recommendations}",
                treatment_recommendations=recommendations,
                language=language,
            ),
        )

        logger.info(f"✅ Diagnosis {diagnosis.id} created ({len(search_results)} references)")
        return ComposedDiagnosis(diagnosis=diagnosis, search_results_count=len(search_results))


diagnosis_composer = DiagnosisComposer()
