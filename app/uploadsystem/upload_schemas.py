# app/uploadsystem/upload_schemas.py
"""
Upload System Schemas - adapter results and response bodies
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# ADAPTER RESULTS
# ============================================================================
class Transcription(BaseModel):
    """Normalized speech recognition result."""
    text: str
    language: str
    language_name: str
    confidence: Optional[float] = None
    duration_seconds: Optional[float] = None
    raw_response: Any = None


class ImagePrediction(BaseModel):
    """Normalized image classification result."""
    label: str
    confidence_percent: int = Field(..., ge=0, le=100)
    filename: Optional[str] = None
    prediction_index: Optional[int] = None
    raw_detail: Dict[str, Any] = Field(default_factory=dict)


# ============================================================================
# RESPONSES
# ============================================================================
class VoiceUploadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    transcription: str
    language: str
    language_name: str = Field(..., alias="languageName")
    confidence: Optional[float] = None
    duration: Optional[float] = None


class PredictionOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    disease: str
    confidence: int
    filename: Optional[str] = None
    prediction_index: Optional[int] = Field(None, alias="predictionIndex")


class ImageUploadResponse(BaseModel):
    success: bool = True
    prediction: PredictionOut


class LanguagesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    supported_languages: Dict[str, str] = Field(..., alias="supportedLanguages")
    default_language: str = Field(..., alias="defaultLanguage")
