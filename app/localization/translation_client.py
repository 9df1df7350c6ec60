# app/localization/translation_client.py
"""
Translator Adapter - Ghana NLP translation
"""
import logging
from typing import Optional

import httpx

from app.localization.languages import SOURCE_LANGUAGE
from app.shared.exceptions import ServiceNotConfigured, UpstreamRejected
from app.shared.upstream import call_upstream, response_body
from config.serviceconfig import ServiceSettings, service_settings

logger = logging.getLogger(__name__)

SERVICE_NAME = "translation"


class TranslationClient:
    def __init__(
        self,
        settings: Optional[ServiceSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or service_settings
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.settings.GHANA_TRANSLATION_URL)

    async def translate(
        self, text: str, target_language: str, source_language: str = SOURCE_LANGUAGE
    ) -> str:
        """Translate `text` from source to target; the pair is sent as e.g. "en-tw"."""
        if not self.configured:
            raise ServiceNotConfigured(SERVICE_NAME, "Translation endpoint is not configured")

        pair = f"{source_language}-{target_language}"
        logger.info(f"🌍 Translating {len(text)} chars ({pair})")

        headers = {"Cache-Control": "no-cache"}
        if self.settings.GHANA_API_KEY:
            headers["Ocp-Apim-Subscription-Key"] = self.settings.GHANA_API_KEY

        response = await call_upstream(
            SERVICE_NAME,
            "POST",
            self.settings.GHANA_TRANSLATION_URL,
            timeout=self.settings.TRANSLATION_TIMEOUT_SECONDS,
            transport=self._transport,
            json={"in": text, "lang": pair},
            headers=headers,
        )

        data = response_body(response)
        translated = data.get("out") if isinstance(data, dict) else data
        if not isinstance(translated, str) or not translated.strip():
            raise UpstreamRejected(
                SERVICE_NAME,
                response.status_code,
                data,
                message="Translation service returned no text",
            )
        return translated


translation_client = TranslationClient()
