# app/localization/routes.py
"""
Output Routes - localized text + synthesized speech for stored diagnoses
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.connection import get_db
from app.localization.languages import get_language, tts_languages
from app.localization.localizer import Localizer, localizer
from app.localization.schemas import LocalizeRequest, LocalizeResponse, SpeakersResponse
from app.shared.exceptions import DiagnosisServiceError, UnsupportedLanguage

router = APIRouter()
logger = logging.getLogger(__name__)


def get_localizer() -> Localizer:
    return localizer


@router.post("/localize", response_model=LocalizeResponse)
async def localize_output(
    request: LocalizeRequest,
    db: AsyncSession = Depends(get_db),
    service: Localizer = Depends(get_localizer),
):
    """
    Translate a diagnosis into its language and generate speech audio.

    The audio is returned (and stored) as a base64 `data:audio/wav` URI.

    **Request Body:**
    ```json
    {
        "diagnosisId": "7f3c9a52-3f0e-4c39-9a57-2f7f0f4e2b1d",
        "speakerId": "twi_speaker_4"
    }
    ```
    """
    try:
        result = await service.localize(db, request.diagnosis_id, request.speaker_id)
    except DiagnosisServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception as e:
        logger.error(f"❌ Localization error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Localization failed: {str(e)}")

    return LocalizeResponse(**result.model_dump())


@router.get("/speakers/{language}", response_model=SpeakersResponse)
async def get_available_speakers(language: str):
    """Voices available for a language; the first one is the default."""
    entry = get_language(language)
    if entry is None or not entry.supports_tts:
        error = UnsupportedLanguage(language, tts_languages(), feature="TTS")
        raise HTTPException(status_code=404, detail=error.to_detail())

    return SpeakersResponse(
        language=entry.code,
        language_name=entry.display_name,
        available_speakers=list(entry.voice_ids),
        default_speaker=entry.default_voice,
    )
