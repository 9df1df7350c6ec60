# app/uploadsystem/image_client.py
"""
Image Classifier Adapter - plant disease prediction service
"""
import logging
import math
from typing import Optional

import httpx

from app.shared.exceptions import (
    InvalidInputFormat,
    MissingInput,
    ServiceNotConfigured,
    UpstreamRejected,
)
from app.shared.upstream import call_upstream, response_body
from app.uploadsystem.upload_schemas import ImagePrediction
from config.serviceconfig import ServiceSettings, service_settings

logger = logging.getLogger(__name__)

SERVICE_NAME = "image classification"
DEFAULT_FILENAME = "image.jpg"


def to_percent(confidence: float) -> int:
    """Scale a 0-1 confidence to an integer percentage, rounding halves up."""
    return int(math.floor(float(confidence) * 100 + 0.5))


class ImageClient:
    """Thin client around the crop disease classifier"""

    def __init__(
        self,
        settings: Optional[ServiceSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or service_settings
        self._transport = transport

    @property
    def endpoint(self) -> str:
        path = self.settings.IMAGE_PREDICT_PATH.strip("/")
        return f"{self.settings.IMAGE_MODEL_URL.rstrip('/')}/{path}/"

    @staticmethod
    def validate_image(mime_type: Optional[str], image_bytes: bytes) -> None:
        """Local checks that run before any network call."""
        if not image_bytes:
            raise MissingInput("No image file uploaded.")
        if not mime_type or not mime_type.startswith("image/"):
            raise InvalidInputFormat(
                "Invalid image file format.", mimeType=mime_type
            )

    async def classify(
        self, image_bytes: bytes, filename: Optional[str], mime_type: str
    ) -> ImagePrediction:
        """
        Predict the crop disease shown in an image.

        Returns:
            ImagePrediction with confidence on a 0-100 integer scale
        """
        self.validate_image(mime_type, image_bytes)

        if not self.settings.IMAGE_MODEL_URL:
            raise ServiceNotConfigured(SERVICE_NAME, "Plant disease API not configured")

        filename = filename or DEFAULT_FILENAME
        logger.info(f"🌿 Classifying {filename} ({mime_type}, {len(image_bytes)} bytes)")
        logger.info(f"   Sending request to: {self.endpoint}")

        response = await call_upstream(
            SERVICE_NAME,
            "POST",
            self.endpoint,
            timeout=self.settings.IMAGE_TIMEOUT_SECONDS,
            transport=self._transport,
            files={"file": (filename, image_bytes, mime_type)},
            headers={"accept": "application/json"},
        )

        data = response_body(response)
        if (
            not isinstance(data, dict)
            or not data.get("predicted_class")
            or data.get("confidence") is None
        ):
            raise UpstreamRejected(
                SERVICE_NAME,
                response.status_code,
                data,
                message="Image classifier returned an unexpected response",
            )

        try:
            confidence = to_percent(data["confidence"])
        except (TypeError, ValueError, OverflowError):
            raise UpstreamRejected(
                SERVICE_NAME,
                response.status_code,
                data,
                message="Image classifier returned a non-numeric confidence",
            )

        prediction = ImagePrediction(
            label=str(data["predicted_class"]),
            confidence_percent=max(0, min(100, confidence)),
            filename=data.get("filename") or filename,
            prediction_index=data.get("prediction_index"),
            raw_detail=data,
        )
        logger.info(f"✅ Prediction: {prediction.label} ({prediction.confidence_percent}%)")
        return prediction


image_client = ImageClient()
