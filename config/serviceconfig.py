# config/serviceconfig.py
"""
External Service Configuration
Speech recognition, image classification, web search, translation and TTS
"""
from typing import Dict

from pydantic_settings import BaseSettings


class ServiceSettings(BaseSettings):
    """Endpoints, credentials and timeouts for every upstream service"""

    # ========================================================================
    # SHARED CREDENTIAL
    # ========================================================================
    # Sent as Ocp-Apim-Subscription-Key to the Ghana NLP endpoints
    GHANA_API_KEY: str = ""

    # ========================================================================
    # SPEECH RECOGNITION (ASR)
    # ========================================================================
    # Raw audio is POSTed here with ?language=<code>
    GHANA_ASR_BASE_URL: str = ""
    # Transcription of long clips is slow, keep this in minutes
    ASR_TIMEOUT_SECONDS: float = 180.0
    ASR_AUDIO_CONTENT_TYPE: str = "audio/mpeg"
    # Reachability check against the ASR host root
    ASR_PROBE_TIMEOUT_SECONDS: float = 10.0

    # ========================================================================
    # IMAGE CLASSIFICATION
    # ========================================================================
    # Base URL; the classifier is called at {IMAGE_MODEL_URL}{IMAGE_PREDICT_PATH}
    IMAGE_MODEL_URL: str = ""
    # Newer classifier deployments serve /predict_image/
    IMAGE_PREDICT_PATH: str = "/predict/"
    IMAGE_TIMEOUT_SECONDS: float = 80.0

    # ========================================================================
    # WEB SEARCH (Google Custom Search)
    # ========================================================================
    GOOGLE_API_KEY: str = ""
    GOOGLE_SEARCH_ENGINE_ID: str = ""
    GOOGLE_SEARCH_URL: str = "https://www.googleapis.com/customsearch/v1"
    SEARCH_TIMEOUT_SECONDS: float = 10.0
    SEARCH_RESULT_LIMIT: int = 5
    SEARCH_QUERY_SUFFIX: str = "treatment prevention agriculture farming Ghana"

    # ========================================================================
    # TRANSLATION
    # ========================================================================
    # Optional: when empty, localization speaks the English narrative
    GHANA_TRANSLATION_URL: str = ""
    TRANSLATION_TIMEOUT_SECONDS: float = 30.0

    # ========================================================================
    # TEXT-TO-SPEECH
    # ========================================================================
    GHANA_TTS_URL: str = ""
    TTS_TIMEOUT_SECONDS: float = 60.0
    # The TTS service returns WAV bytes
    TTS_AUDIO_MIME: str = "audio/wav"

    # ========================================================================
    # HELPER PROPERTIES
    # ========================================================================
    @property
    def search_enabled(self) -> bool:
        return bool(self.GOOGLE_API_KEY and self.GOOGLE_SEARCH_ENGINE_ID)

    @property
    def configured_services(self) -> Dict[str, bool]:
        """Which upstream services have an endpoint configured"""
        return {
            "speech_recognition": bool(self.GHANA_ASR_BASE_URL),
            "image_classification": bool(self.IMAGE_MODEL_URL),
            "web_search": self.search_enabled,
            "translation": bool(self.GHANA_TRANSLATION_URL),
            "text_to_speech": bool(self.GHANA_TTS_URL),
        }

    class Config:
        env_file = ".env"
        extra = "ignore"


service_settings = ServiceSettings()
