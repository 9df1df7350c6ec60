# app/localization/schemas.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LocalizeRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {"diagnosisId": "7f3c9a52-3f0e-4c39-9a57-2f7f0f4e2b1d", "speakerId": "twi_speaker_4"}},
    )

    # Optional here so a missing id is reported as MissingParameter, not a 422
    diagnosis_id: Optional[str] = Field(None, alias="diagnosisId")
    speaker_id: Optional[str] = Field(None, alias="speakerId")


class LocalizationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    localized_text: str = Field(..., alias="localizedText")
    audio_url: str = Field(..., alias="audioURL")
    speaker_id: str = Field(..., alias="speakerId")
    language: str
    translated: bool = False


class LocalizeResponse(LocalizationResult):
    message: str = "Localization completed."


class SpeakersResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    language: str
    language_name: str = Field(..., alias="languageName")
    available_speakers: List[str] = Field(..., alias="availableSpeakers")
    default_speaker: str = Field(..., alias="defaultSpeaker")
