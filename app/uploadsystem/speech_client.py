# app/uploadsystem/speech_client.py
"""
Speech Recognizer Adapter - Ghana NLP ASR

Sends raw audio bytes to the ASR endpoint and normalizes the many response
shapes it has used (plain text, JSON string, JSON object).
"""
import logging
from typing import Any, Optional
from urllib.parse import urlsplit

import httpx

from app.localization.languages import get_language, supported_languages
from app.shared.exceptions import (
    EmptyTranscription,
    MissingInput,
    ServiceNotConfigured,
    UnsupportedLanguage,
)
from app.shared.upstream import call_upstream, response_body
from app.uploadsystem.upload_schemas import Transcription
from config.serviceconfig import ServiceSettings, service_settings

logger = logging.getLogger(__name__)

SERVICE_NAME = "speech recognition"

_TEXT_KEYS = ("transcription", "text", "transcribedText", "result")


def _extract_text(data: Any) -> str:
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    if isinstance(data, dict):
        for key in _TEXT_KEYS:
            value = data.get(key)
            if isinstance(value, str):
                return value
        return ""
    return str(data)


def _as_float(value: Any) -> Optional[float]:
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


class SpeechClient:
    """Thin client around the speech-to-text service"""

    def __init__(
        self,
        settings: Optional[ServiceSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or service_settings
        self._transport = transport

    def _headers(self) -> dict:
        headers = {
            "Content-Type": self.settings.ASR_AUDIO_CONTENT_TYPE,
            "Cache-Control": "no-cache",
        }
        if self.settings.GHANA_API_KEY:
            headers["Ocp-Apim-Subscription-Key"] = self.settings.GHANA_API_KEY
        return headers

    async def transcribe(self, audio_bytes: bytes, language: str) -> Transcription:
        """
        Transcribe an audio clip.

        Args:
            audio_bytes: Raw audio, must not be empty
            language: Registered language code (e.g. "tw")

        Returns:
            Transcription with non-blank text
        """
        if not audio_bytes:
            raise MissingInput("No audio file uploaded.")

        entry = get_language(language)
        if entry is None:
            raise UnsupportedLanguage(language, supported_languages())

        if not self.settings.GHANA_ASR_BASE_URL:
            raise ServiceNotConfigured(SERVICE_NAME, "Speech recognition endpoint is not configured")

        logger.info(
            f"🎙️  Transcribing {len(audio_bytes)} bytes in {entry.code} ({entry.display_name})"
        )

        response = await call_upstream(
            SERVICE_NAME,
            "POST",
            self.settings.GHANA_ASR_BASE_URL,
            timeout=self.settings.ASR_TIMEOUT_SECONDS,
            transport=self._transport,
            params={"language": entry.code},
            content=audio_bytes,
            headers=self._headers(),
        )

        data = response_body(response)
        text = _extract_text(data).strip()
        if not text:
            logger.warning(f"⚠️  ASR returned no transcription: {str(data)[:200]}")
            raise EmptyTranscription(
                SERVICE_NAME,
                "No transcription received from ASR service",
                rawResponse=data,
                suggestion="The audio might be unclear or in an unsupported format",
            )

        confidence = duration = None
        if isinstance(data, dict):
            confidence = _as_float(data.get("confidence"))
            duration = _as_float(data.get("duration"))

        logger.info(f"✅ Transcription complete: {len(text)} chars")
        return Transcription(
            text=text,
            language=entry.code,
            language_name=entry.display_name,
            confidence=confidence,
            duration_seconds=duration,
            raw_response=data,
        )

    async def check_connection(self) -> int:
        """Probe the ASR host root and return the HTTP status it answers with."""
        if not self.settings.GHANA_ASR_BASE_URL:
            raise ServiceNotConfigured(SERVICE_NAME, "Speech recognition endpoint is not configured")

        parts = urlsplit(self.settings.GHANA_ASR_BASE_URL)
        root = f"{parts.scheme}://{parts.netloc}"
        response = await call_upstream(
            SERVICE_NAME,
            "GET",
            root,
            timeout=self.settings.ASR_PROBE_TIMEOUT_SECONDS,
            transport=self._transport,
        )
        return response.status_code


speech_client = SpeechClient()
