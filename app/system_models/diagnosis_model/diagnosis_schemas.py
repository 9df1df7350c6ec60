# app/system_models/diagnosis_model/diagnosis_schemas.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class DiagnosisBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    voice_input: Optional[str] = Field(None, alias="voiceInput")
    image_result: Optional[str] = Field(None, alias="imageResult")
    combined_result: str = Field(..., min_length=1, alias="combinedResult")
    treatment_recommendations: Optional[str] = Field(None, alias="treatmentRecommendations")
    language: str

class DiagnosisCreate(DiagnosisBase):
    pass

class DiagnosisResponse(DiagnosisBase):
    id: str
    localized_text: Optional[str] = Field(None, alias="localizedText")
    audio_url: Optional[str] = Field(None, alias="audioURL")
    created_at: datetime = Field(..., alias="createdAt")
