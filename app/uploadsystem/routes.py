# app/uploadsystem/routes.py
"""
Upload Routes - speech transcription and crop image classification
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile

from app.localization.languages import DEFAULT_LANGUAGE, supported_languages
from app.shared.exceptions import DiagnosisServiceError, InvalidInputFormat, MissingInput
from app.uploadsystem.image_client import ImageClient, image_client
from app.uploadsystem.speech_client import SpeechClient, speech_client
from app.uploadsystem.upload_schemas import (
    ImageUploadResponse,
    LanguagesResponse,
    PredictionOut,
    VoiceUploadResponse,
)
from config.appconfig import settings

router = APIRouter()
logger = logging.getLogger(__name__)

# Browsers and mobile recorders often label audio as octet-stream
_AUDIO_GENERIC_TYPES = ("application/octet-stream",)


def get_speech_client() -> SpeechClient:
    return speech_client


def get_image_client() -> ImageClient:
    return image_client


def _too_large(what: str, size: int) -> InvalidInputFormat:
    return InvalidInputFormat(
        f"{what.capitalize()} file too large. Max {settings.MAX_UPLOAD_MB}MB.",
        sizeBytes=size,
    )


async def _read_upload(upload: Optional[UploadFile], what: str) -> bytes:
    if upload is None:
        raise MissingInput(f"No {what} file uploaded.")
    # Declared size from the multipart parser; checked before reading
    if upload.size is not None and upload.size > settings.max_upload_bytes:
        raise _too_large(what, upload.size)
    content = await upload.read()
    if not content:
        raise MissingInput(f"No {what} file uploaded.")
    if len(content) > settings.max_upload_bytes:
        raise _too_large(what, len(content))
    return content


@router.post("/voice", response_model=VoiceUploadResponse)
async def upload_voice(
    audio: Optional[UploadFile] = File(None, description="Audio clip (mp3, wav, ...)"),
    language: Optional[str] = Form(None, description="Language code, e.g. 'tw'"),
    language_query: Optional[str] = Query(None, alias="language"),
    client: SpeechClient = Depends(get_speech_client),
):
    """Transcribe an uploaded audio clip in one of the supported languages."""
    language = language or language_query or DEFAULT_LANGUAGE
    try:
        content = await _read_upload(audio, "audio")
        content_type = audio.content_type or ""
        if content_type and not (
            content_type.startswith("audio/") or content_type in _AUDIO_GENERIC_TYPES
        ):
            raise InvalidInputFormat("Invalid audio file format.", mimeType=content_type)

        logger.info(f"📥 Audio upload: {audio.filename} ({content_type}, {len(content)} bytes)")
        result = await client.transcribe(content, language)

        return VoiceUploadResponse(
            transcription=result.text,
            language=result.language,
            language_name=result.language_name,
            confidence=result.confidence,
            duration=result.duration_seconds,
        )
    except DiagnosisServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception as e:
        logger.error(f"❌ Voice transcription failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Voice transcription failed: {str(e)}")


@router.post("/image", response_model=ImageUploadResponse)
async def upload_image(
    file: Optional[UploadFile] = File(None, description="Crop photo"),
    client: ImageClient = Depends(get_image_client),
):
    """Predict the crop disease shown in an uploaded photo."""
    try:
        content = await _read_upload(file, "image")
        logger.info(f"📥 Image upload: {file.filename} ({file.content_type}, {len(content)} bytes)")

        prediction = await client.classify(content, file.filename, file.content_type)

        return ImageUploadResponse(
            success=True,
            prediction=PredictionOut(
                disease=prediction.label,
                confidence=prediction.confidence_percent,
                filename=prediction.filename,
                prediction_index=prediction.prediction_index,
            ),
        )
    except DiagnosisServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception as e:
        logger.error(f"❌ Image classification failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Image classification failed: {str(e)}")


@router.get("/languages", response_model=LanguagesResponse)
async def get_supported_languages():
    """Languages accepted by speech recognition."""
    return LanguagesResponse(
        supported_languages=supported_languages(),
        default_language=DEFAULT_LANGUAGE,
    )


@router.get("/test-connection")
async def test_connection(client: SpeechClient = Depends(get_speech_client)):
    """Check that the speech recognition host is reachable."""
    try:
        status_code = await client.check_connection()
    except DiagnosisServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())

    return {
        "message": "Speech recognition API is reachable",
        "status": status_code,
        "endpoint": client.settings.GHANA_ASR_BASE_URL,
        "supportedLanguages": supported_languages(),
    }
