# app/localization/localizer.py
"""
Localization Composer

Re-renders a stored diagnosis in its target language:
1. Load the diagnosis
2. Check the language has a synthesized voice
3. Translate the narrative (optional; failure falls back to the original text)
4. Pick the voice (explicit speaker, else the language default)
5. Synthesize speech (mandatory; failure aborts)
6. Store localized text + audio data URI back on the record
"""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.localization.languages import SOURCE_LANGUAGE, default_speaker, get_language, tts_languages
from app.localization.schemas import LocalizationResult
from app.localization.translation_client import (
    TranslationClient,
    translation_client as default_translation_client,
)
from app.localization.tts_client import TTSClient, tts_client as default_tts_client
from app.shared.exceptions import (
    MissingParameter,
    NotFound,
    UnsupportedLanguage,
    UpstreamError,
)
from app.system_services import diagnosis_store

logger = logging.getLogger(__name__)


class Localizer:
    def __init__(
        self,
        translator: Optional[TranslationClient] = None,
        synthesizer: Optional[TTSClient] = None,
    ):
        self.translator = translator or default_translation_client
        self.synthesizer = synthesizer or default_tts_client

    async def _translate_or_fallback(self, text: str, language: str):
        if not self.translator.configured or language == SOURCE_LANGUAGE:
            logger.info("ℹ️  Translation skipped")
            return text, False
        try:
            return await self.translator.translate(text, language), True
        except UpstreamError as e:
            logger.warning(f"⚠️  Translation failed, using original text: {e.message}")
            return text, False

    async def localize(
        self, db: AsyncSession, diagnosis_id: Optional[str], speaker_id: Optional[str] = None
    ) -> LocalizationResult:
        if not diagnosis_id or not diagnosis_id.strip():
            raise MissingParameter("Diagnosis ID is required.")

        logger.info(f"\n{'='*70}")
        logger.info(f"LOCALIZE DIAGNOSIS {diagnosis_id}")
        logger.info(f"{'='*70}")

        diagnosis = await diagnosis_store.get_diagnosis(db, diagnosis_id)
        if diagnosis is None:
            raise NotFound("Diagnosis not found.", diagnosisId=diagnosis_id)

        language = diagnosis.language
        entry = get_language(language)
        if entry is None or not entry.supports_tts:
            raise UnsupportedLanguage(language, tts_languages(), feature="TTS")

        localized_text, translated = await self._translate_or_fallback(
            diagnosis.combined_result, language
        )

        selected_speaker = speaker_id or default_speaker(language)
        logger.info(f"🗣️  Speaker: {selected_speaker}")

        audio = await self.synthesizer.synthesize(localized_text, language, selected_speaker)
        audio_url = self.synthesizer.to_data_uri(audio)

        await diagnosis_store.save_localization(db, diagnosis, localized_text, audio_url)
        logger.info(f"✅ Localization stored on {diagnosis.id}")

        return LocalizationResult(
            localized_text=localized_text,
            audio_url=audio_url,
            speaker_id=selected_speaker,
            language=language,
            translated=translated,
        )


localizer = Localizer()
