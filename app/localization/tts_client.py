# app/localization/tts_client.py
"""
Speech Synthesizer Adapter - Ghana NLP text-to-speech

Returns raw audio bytes; callers decide how to store/ship them.
"""
import base64
import logging
from typing import Optional

import httpx

from app.shared.exceptions import (
    ServiceNotConfigured,
    Unauthorized,
    UpstreamRejected,
)
from app.shared.upstream import call_upstream
from config.serviceconfig import ServiceSettings, service_settings

logger = logging.getLogger(__name__)

SERVICE_NAME = "text-to-speech"

_AUTH_STATUSES = (401, 403)


class TTSClient:
    def __init__(
        self,
        settings: Optional[ServiceSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or service_settings
        self._transport = transport

    async def synthesize(self, text: str, language: str, speaker_id: str) -> bytes:
        """
        Synthesize speech for `text` with the given voice.

        Raises:
            Unauthorized: the API key was refused
            ServiceUnreachable / ServiceTimeout: transport failure
            UpstreamRejected: any other non-2xx, or an empty audio body
        """
        if not self.settings.GHANA_TTS_URL:
            raise ServiceNotConfigured(SERVICE_NAME, "Text-to-speech endpoint is not configured")

        logger.info(f"🔊 Synthesizing {len(text)} chars in {language} with {speaker_id}")

        try:
            response = await call_upstream(
                SERVICE_NAME,
                "POST",
                self.settings.GHANA_TTS_URL,
                timeout=self.settings.TTS_TIMEOUT_SECONDS,
                transport=self._transport,
                json={"text": text, "language": language, "speaker_id": speaker_id},
                headers={
                    "Content-Type": "application/json",
                    "Cache-Control": "no-cache",
                    "Ocp-Apim-Subscription-Key": self.settings.GHANA_API_KEY,
                },
            )
        except UpstreamRejected as e:
            if e.status in _AUTH_STATUSES:
                raise Unauthorized(
                    SERVICE_NAME,
                    "TTS API request failed: invalid API key. Check your GHANA_API_KEY.",
                    upstreamStatus=e.status,
                ) from e
            raise

        audio = response.content
        if not audio:
            raise UpstreamRejected(
                SERVICE_NAME, response.status_code, None, message="TTS service returned no audio"
            )

        logger.info(f"✅ Received {len(audio)} bytes of audio")
        return audio

    def to_data_uri(self, audio: bytes) -> str:
        encoded = base64.b64encode(audio).decode("ascii")
        return f"data:{self.settings.TTS_AUDIO_MIME};base64,{encoded}"


tts_client = TTSClient()
