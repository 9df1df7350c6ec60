# app/diagnosis_engine/schemas.py
"""
Diagnosis Engine Request/Response Schemas
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.system_models.diagnosis_model.diagnosis_schemas import DiagnosisResponse


# ============================================================================
# WEB SEARCH
# ============================================================================
class SearchResult(BaseModel):
    """One treatment reference returned by web search."""
    title: str = ""
    snippet: str = ""
    link: str = ""


# ============================================================================
# DIAGNOSE REQUEST
# ============================================================================
class DiagnoseRequest(BaseModel):
    """
    Inputs for a new diagnosis.

    combinedResult is always derived on the server, so it is not part of
    this schema and is dropped if a client sends it.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "voiceInput": "The leaves are turning yellow",
                "imageResult": "Possible nitrogen deficiency",
                "language": "tw",
            }
        },
    )

    voice_input: Optional[str] = Field(None, alias="voiceInput")
    image_result: Optional[str] = Field(None, alias="imageResult")
    language: str = Field(..., min_length=1, max_length=16)


# ============================================================================
# DIAGNOSE RESPONSES
# ============================================================================
class ComposedDiagnosisOut(DiagnosisResponse):
    search_results_count: int = Field(0, alias="searchResultsCount")


class DiagnoseResponse(BaseModel):
    message: str
    diagnosis: ComposedDiagnosisOut


class DiagnosisDetailResponse(BaseModel):
    message: str
    diagnosis: DiagnosisResponse


class DiagnosisHistoryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    diagnoses: List[DiagnosisResponse]
    total: int
    total_pages: int = Field(..., alias="totalPages")
    current_page: int = Field(..., alias="currentPage")
